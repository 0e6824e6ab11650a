"""Configuration management for Quick Journal."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.dialect import Dialect
from .core.fields import DEFAULT_ENTRY_TYPES, EntryTypeConfig

logger = logging.getLogger(__name__)

QUICKJOURNAL_HOME = Path(os.environ.get("QUICKJOURNAL_HOME", Path.home() / "quickjournal"))
CONFIG_FILE = QUICKJOURNAL_HOME / "config" / "quickjournal.conf"

# Environment variables that override the config file
ENV_OVERRIDES = {
    "JOURNAL_FORMAT": "journal_format",
    "GEMINI_API_TOKEN": "gemini_api_token",
    "GEMINI_MODEL": "gemini_model",
    "GIT_USERNAME": "git_username",
    "GIT_REPO_NAME": "git_repo_name",
    "GITHUB_TOKEN": "github_token",
    "JOURNAL_STORAGE_DIR": "storage_dir",
}


@dataclass
class Config:
    """Quick Journal configuration."""

    journal_format: str = "markdown"
    gemini_api_token: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_timeout: int = 60
    # Git sync settings
    git_username: str = ""
    git_repo_name: str = ""
    github_token: str = ""
    git_branch: str = "main"
    repo_dir: str = "journal_storage"
    storage_dir: str = "."
    default_entry_type: str = "journal"
    max_workers: int = 4
    entry_types: dict[str, EntryTypeConfig] = field(default_factory=lambda: dict(DEFAULT_ENTRY_TYPES))

    @property
    def dialect(self) -> Dialect:
        return Dialect.from_name(self.journal_format)

    @property
    def git_enabled(self) -> bool:
        """Sync needs a username, a repository name and a token."""
        return bool(self.git_username and self.git_repo_name and self.github_token)

    @property
    def document_root(self) -> Path:
        """Directory holding the documents: the working copy when syncing."""
        if self.git_enabled:
            return Path(self.repo_dir).expanduser()
        return Path(self.storage_dir).expanduser()


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"'):
        end_quote = value.find('"', 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if value.startswith("'"):
        end_quote = value.find("'", 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def parse_entry_types(value: str) -> dict[str, EntryTypeConfig]:
    """
    Parse ENTRY_TYPES JSON: {"name": {"fields": [...], "title": ..., "target_file": ...}}.

    Malformed definitions are logged and skipped.
    """
    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse ENTRY_TYPES JSON: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning("ENTRY_TYPES must be a JSON object")
        return {}

    entry_types = {}
    for name, item in data.items():
        try:
            entry_types[name] = EntryTypeConfig.from_dict(name, item)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping entry type '{name}': {e}")
    return entry_types


def _set_int(config: Config, attr: str, key: str, value: str) -> None:
    try:
        setattr(config, attr, int(value))
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value}")


def load_config() -> Config:
    """Load configuration from quickjournal.conf, then apply environment overrides."""
    config = Config()

    if CONFIG_FILE.exists():
        for line in CONFIG_FILE.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = value.strip()

            # JSON values keep their quotes
            if key != "entry_types":
                value = _unquote(value)

            match key:
                case "journal_format":
                    config.journal_format = value
                case "gemini_api_token":
                    config.gemini_api_token = value
                case "gemini_model":
                    config.gemini_model = value
                case "gemini_timeout":
                    _set_int(config, "gemini_timeout", key, value)
                case "git_username":
                    config.git_username = value
                case "git_repo_name":
                    config.git_repo_name = value
                case "github_token":
                    config.github_token = value
                case "git_branch":
                    config.git_branch = value
                case "repo_dir":
                    config.repo_dir = value
                case "storage_dir":
                    config.storage_dir = value
                case "default_entry_type":
                    config.default_entry_type = value
                case "max_workers":
                    _set_int(config, "max_workers", key, value)
                case "entry_types":
                    config.entry_types.update(parse_entry_types(value))
                case _:
                    logger.debug(f"Ignoring unknown config key: {key}")

    for env_key, attr in ENV_OVERRIDES.items():
        value = os.environ.get(env_key)
        if value:
            setattr(config, attr, value)

    if config.default_entry_type not in config.entry_types:
        logger.warning(
            f"Default entry type '{config.default_entry_type}' is not configured, using 'journal'"
        )
        config.default_entry_type = "journal"
        config.entry_types.setdefault("journal", DEFAULT_ENTRY_TYPES["journal"])

    return config
