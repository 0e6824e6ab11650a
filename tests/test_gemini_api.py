"""Tests for the Gemini API adapter."""

from unittest.mock import MagicMock

import pytest
import requests

from quickjournal.adapters.gemini_api import GeminiService, LLMError


def make_response(status_code=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.text = text
    return resp


@pytest.fixture
def session():
    return MagicMock()


class TestGeminiService:
    """Tests for GeminiService."""

    def test_requires_token(self):
        """An empty API token is rejected."""
        with pytest.raises(ValueError):
            GeminiService("")

    def test_generate_returns_first_candidate_text(self, session):
        """The first candidate's text is returned."""
        session.post.return_value = make_response(payload={
            "candidates": [{"content": {"parts": [{"text": '{"summary": "hi"}'}]}}]
        })
        service = GeminiService("secret", model="gemini-test", timeout=5, session=session)

        assert service.generate("the prompt") == '{"summary": "hi"}'

        args, kwargs = session.post.call_args
        assert args[0].endswith("/models/gemini-test:generateContent")
        assert kwargs["params"] == {"key": "secret"}
        assert kwargs["json"] == {"contents": [{"parts": [{"text": "the prompt"}]}]}
        assert kwargs["timeout"] == 5

    def test_http_error_raises(self, session):
        """A non-200 status raises LLMError."""
        session.post.return_value = make_response(status_code=403, text="forbidden")
        service = GeminiService("secret", session=session)

        with pytest.raises(LLMError, match="status 403"):
            service.generate("prompt")

    def test_empty_candidates_raise(self, session):
        """A response without candidates raises LLMError."""
        session.post.return_value = make_response(payload={"candidates": []})
        service = GeminiService("secret", session=session)

        with pytest.raises(LLMError, match="No content"):
            service.generate("prompt")

    def test_transport_failure_raises(self, session):
        """Connection errors raise LLMError."""
        session.post.side_effect = requests.ConnectionError("unreachable")
        service = GeminiService("secret", session=session)

        with pytest.raises(LLMError, match="unreachable"):
            service.generate("prompt")

    def test_timeout_raises(self, session):
        """Timeouts raise LLMError."""
        session.post.side_effect = requests.Timeout()
        service = GeminiService("secret", timeout=7, session=session)

        with pytest.raises(LLMError, match="timed out after 7s"):
            service.generate("prompt")
