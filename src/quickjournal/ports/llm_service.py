"""Summarizer interface."""

from typing import Protocol


class LLMService(Protocol):
    """Turns a summarization prompt into the model's raw reply."""

    def generate(self, prompt: str) -> str:
        """Return the full reply text. Raises RuntimeError on transport failure."""
        ...
