"""
Generative fallback for questions the knowledge base cannot answer.
"""
import os
from typing import Sequence

from openai import OpenAI
from openai import APITimeoutError, APIStatusError, OpenAIError, RateLimitError

from answerbot.constants import (
    OPENAI_API_TIMEOUT_SECONDS,
    OPENAI_MODEL,
    OPENAI_TEMPERATURE,
    RESPONSE_LENGTH_TOKENS,
    RESPONSE_MODE_TEMPERATURES,
)
from answerbot.logger import logger
from answerbot.models import BotConfig, KnowledgeEntry


class GenerationError(Exception):
    """The generative model could not produce a response."""


class ModelUnavailableError(GenerationError):
    """The model is overloaded or still loading; retrying later may work."""


def build_prompt(
    query: str,
    context_entries: Sequence[KnowledgeEntry] = (),
    bot_name: str = "Ahmadiyya Helper",
) -> str:
    context_block = ""
    if context_entries:
        context_block = "Here is some relevant context from the knowledge base:\n" + "\n".join(
            f"- {entry.topic}: {entry.answer}" for entry in context_entries
        )

    return f"""
    You are {bot_name}, a friendly assistant answering questions about the Ahmadiyya Muslim Community,
    with a warm personality and occasional light humor.

    {context_block}

    Question: {query}

    Rules:
    - Respond naturally, avoiding scripted templates.
    - Stay respectful and factual; say so when you are unsure.
    - Output only the answer.
    """


class OpenAIGenerator:
    """
    Text generation through the OpenAI chat completions API.

    Every failure surfaces as GenerationError so callers can substitute an
    apology without knowing about the client library.
    """

    def __init__(self, client: OpenAI | None = None, model: str = OPENAI_MODEL):
        if client is None:
            api_key = os.getenv("OPENAI_API_KEY")
            client = OpenAI(api_key=api_key) if api_key else None
        self.client = client
        self.model = model

    def generate(
        self,
        prompt: str,
        *,
        timeout: float = OPENAI_API_TIMEOUT_SECONDS,
        max_tokens: int | None = None,
        temperature: float = OPENAI_TEMPERATURE,
    ) -> str:
        if self.client is None:
            raise GenerationError("OpenAI API key is not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
                timeout=timeout,
            )
        except APITimeoutError as e:
            logger.error("OpenAI API timeout (timeout=%ss)", timeout)
            raise GenerationError("The AI service took too long to respond") from e
        except RateLimitError as e:
            logger.warning("OpenAI rate limit or quota hit: %s", e)
            raise ModelUnavailableError("The AI model is busy") from e
        except APIStatusError as e:
            if e.status_code == 503:
                logger.warning("OpenAI model unavailable: %s", e)
                raise ModelUnavailableError("The AI model is currently loading") from e
            logger.exception("OpenAI API error (status=%s)", e.status_code)
            raise GenerationError(f"AI service error: {e.status_code}") from e
        except OpenAIError as e:
            logger.exception("OpenAI client error")
            raise GenerationError("AI service error") from e

        content = (response.choices[0].message.content or "").strip()
        if not content:
            logger.error("OpenAI returned empty content")
            raise GenerationError("The AI service returned an empty response")
        return content


def get_ai_response(
    generator,
    query: str,
    config: BotConfig,
    context_entries: Sequence[KnowledgeEntry] = (),
) -> str:
    """
    Ask the generative model to answer a query.

    The bot config drives the request: response_timeout bounds the call,
    max_response_length sets the token budget and response_mode the
    temperature.

    Raises:
        GenerationError: If no generator is configured or the call fails
    """
    if generator is None:
        raise GenerationError("No generative model configured")

    prompt = build_prompt(query, context_entries, bot_name=config.name)
    return generator.generate(
        prompt,
        timeout=float(config.response_timeout or OPENAI_API_TIMEOUT_SECONDS),
        max_tokens=RESPONSE_LENGTH_TOKENS.get(config.max_response_length, RESPONSE_LENGTH_TOKENS["medium"]),
        temperature=RESPONSE_MODE_TEMPERATURES.get(config.response_mode, OPENAI_TEMPERATURE),
    )
