"""Quick Journal CLI - AI-structured daily journal."""

import json
import logging
import sys

import click

from .adapters.file_document import StorageError
from .adapters.git_sync import SyncError
from .config import load_config
from .core.summary import MalformedPayloadError, parse_analysis
from .workflows import JournalService

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@click.group()
@click.version_option(package_name="quickjournal")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """Quick Journal - AI-structured daily journal."""
    logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG if debug else logging.INFO)
    ctx.ensure_object(dict)


def _service(ctx) -> JournalService:
    """Build the service once per invocation."""
    if "service" not in ctx.obj:
        ctx.obj["service"] = JournalService.from_config(load_config())
    return ctx.obj["service"]


@main.command()
@click.argument("content", required=False)
@click.option("--category", "-c", default=None, help="Entry type (default: configured default)")
@click.option("--fields", "fields_json", default=None,
              help="Field values as a JSON object; skips AI summarization")
@click.pass_context
def add(ctx, content: str | None, category: str | None, fields_json: str | None):
    """Add an entry. Reads CONTENT from stdin when omitted."""
    if content is None:
        content = click.get_text_stream("stdin").read()
    content = content.strip()
    if not content:
        click.echo("Error: entry is empty", err=True)
        sys.exit(1)

    service = _service(ctx)
    category = category or service.config.default_entry_type

    if fields_json is not None:
        try:
            values = parse_analysis(fields_json)
            path = service.save(category, values, content)
        except MalformedPayloadError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        except StorageError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        click.echo(f"✓ Saved to {path}")
        return

    future = service.submit(category, content)
    click.echo("Entry accepted, processing...")
    path = future.result()
    service.shutdown()

    if path is None:
        click.echo("Entry was not saved (see log for details).", err=True)
        sys.exit(1)
    click.echo(f"✓ Saved to {path}")


@main.command()
@click.option("--category", "-c", default=None, help="Entry type (default: configured default)")
@click.pass_context
def show(ctx, category: str | None):
    """Print a category's full document."""
    service = _service(ctx)
    category = category or service.config.default_entry_type
    try:
        content = service.read(category)
    except StorageError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not content.strip():
        click.echo(f"No {category} entries yet.")
        return
    click.echo(content, nl=False)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def categories(ctx, as_json: bool):
    """List configured entry types."""
    service = _service(ctx)
    entry_types = service.categories()
    dialect = service.config.dialect

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "name": name,
                        "title": et.title,
                        "fields": list(et.fields),
                        "file": dialect.file_name(et.target_file),
                    }
                    for name, et in entry_types.items()
                ],
                indent=2,
            )
        )
        return

    for name, et in entry_types.items():
        marker = "*" if name == service.config.default_entry_type else " "
        click.echo(f"{marker} {name:12} {et.title} ({dialect.file_name(et.target_file)})")


@main.command()
@click.pass_context
def init(ctx):
    """Prepare storage: clone/pull the sync repo and create missing documents."""
    service = _service(ctx)

    if service.sync is not None:
        try:
            service.sync.init_repo()
        except SyncError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    else:
        click.echo("Git sync not configured (GIT_USERNAME, GIT_REPO_NAME, GITHUB_TOKEN).")

    try:
        created = service.store.ensure_files(service.config.entry_types)
    except StorageError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for path in created:
        click.echo(f"Created {path}")
    click.echo("✓ Storage ready")


if __name__ == "__main__":
    main()
