# FILE: tests/test_ai.py
"""
Tests for prompt building and the OpenAI generator's error mapping.
"""
from types import SimpleNamespace

import httpx
import pytest
from openai import APITimeoutError, InternalServerError, RateLimitError

from answerbot.ai import (
    GenerationError,
    ModelUnavailableError,
    OpenAIGenerator,
    build_prompt,
    get_ai_response,
)
from answerbot.models import BotConfig

from tests.conftest import FakeGenerator, JIHAD, KHILAFAT

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


class FakeCompletions:
    def __init__(self, content="An answer.", error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_client(**kwargs):
    completions = FakeCompletions(**kwargs)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


class TestBuildPrompt:

    def test_includes_question_and_context(self):
        prompt = build_prompt("what is peace?", [KHILAFAT, JIHAD], bot_name="Helper")
        assert "You are Helper" in prompt
        assert "Question: what is peace?" in prompt
        assert f"- Jihad: {JIHAD.answer}" in prompt

    def test_without_context(self):
        assert "relevant context" not in build_prompt("hello")


class TestOpenAIGenerator:

    def test_returns_stripped_content(self):
        client, completions = make_client(content="  An answer.  ")
        generator = OpenAIGenerator(client=client, model="test-model")
        assert generator.generate("prompt", timeout=3.0, max_tokens=10, temperature=0.5) == "An answer."
        assert completions.kwargs["model"] == "test-model"
        assert completions.kwargs["timeout"] == 3.0
        assert completions.kwargs["max_tokens"] == 10
        assert completions.kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(GenerationError):
            OpenAIGenerator().generate("prompt")

    def test_empty_content(self):
        client, _ = make_client(content="   ")
        with pytest.raises(GenerationError):
            OpenAIGenerator(client=client).generate("prompt")

    def test_timeout(self):
        client, _ = make_client(error=APITimeoutError(request=REQUEST))
        with pytest.raises(GenerationError) as exc_info:
            OpenAIGenerator(client=client).generate("prompt")
        assert not isinstance(exc_info.value, ModelUnavailableError)

    @pytest.mark.parametrize("error_cls, status", [(RateLimitError, 429), (InternalServerError, 503)])
    def test_busy_model(self, error_cls, status):
        response = httpx.Response(status, request=REQUEST)
        client, _ = make_client(error=error_cls("busy", response=response, body=None))
        with pytest.raises(ModelUnavailableError):
            OpenAIGenerator(client=client).generate("prompt")

    def test_other_server_error(self):
        response = httpx.Response(500, request=REQUEST)
        client, _ = make_client(error=InternalServerError("oops", response=response, body=None))
        with pytest.raises(GenerationError) as exc_info:
            OpenAIGenerator(client=client).generate("prompt")
        assert not isinstance(exc_info.value, ModelUnavailableError)


class TestGetAIResponse:

    def test_no_generator(self):
        with pytest.raises(GenerationError):
            get_ai_response(None, "question", BotConfig())

    def test_unknown_settings_fall_back_to_defaults(self):
        generator = FakeGenerator()
        config = BotConfig(max_response_length="huge", response_mode="odd", response_timeout=0)
        assert get_ai_response(generator, "question", config) == "Generated answer."
        _, kwargs = generator.calls[0]
        assert kwargs == {"timeout": 15.0, "max_tokens": 350, "temperature": 0.2}
