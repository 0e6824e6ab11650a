"""Gemini API adapter - HTTP client for text generation."""

import logging

import requests

API_BASE = "https://generativelanguage.googleapis.com/v1beta"

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """Raised when the generation API fails or returns no content."""

    pass


class GeminiService:
    """
    Gemini REST adapter.

    Implements LLMService protocol. Sends a single-turn prompt to the
    generateContent endpoint and returns the first candidate's text.
    """

    def __init__(
        self,
        api_token: str,
        model: str = "gemini-2.5-flash",
        timeout: int = 60,
        session: requests.Session | None = None,
    ):
        if not api_token:
            raise ValueError("Gemini API token is required")
        self.api_token = api_token
        self.model = model
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{API_BASE}/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        """Generate text from a prompt. Returns complete response."""
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            resp = self._session.post(
                self.url,
                params={"key": self.api_token},
                json=body,
                timeout=self.timeout,
            )
        except requests.Timeout:
            raise LLMError(f"Gemini request timed out after {self.timeout}s")
        except requests.RequestException as e:
            raise LLMError(f"Gemini request failed: {e}") from e

        if resp.status_code != 200:
            logger.error(f"Gemini API error {resp.status_code}: {resp.text}")
            raise LLMError(f"API request failed with status {resp.status_code}: {resp.text}")

        try:
            data = resp.json()
        except ValueError as e:
            raise LLMError(f"Gemini returned invalid JSON: {e}") from e

        candidates = data.get("candidates") or []
        if candidates:
            parts = (candidates[0].get("content") or {}).get("parts") or []
            if parts and "text" in parts[0]:
                return parts[0]["text"]

        raise LLMError("No content in Gemini response")
