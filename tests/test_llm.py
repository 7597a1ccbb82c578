"""Tests for ClaudeInsightGenerator with a mocked Anthropic client."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from mindwell.core.config import settings
from mindwell.services.llm import INSIGHT_PROMPT, ClaudeInsightGenerator
from mindwell.shared.errors import OracleError


def _response(text: str):
    return SimpleNamespace(
        content=[SimpleNamespace(text=text)],
        usage=SimpleNamespace(input_tokens=42, output_tokens=17),
    )


def _generator(outcome, model=None) -> tuple[ClaudeInsightGenerator, AsyncMock]:
    client = MagicMock()
    create = AsyncMock(side_effect=[outcome])
    client.messages.create = create
    return ClaudeInsightGenerator(model=model, client=client), create


def test_returns_stripped_text() -> None:
    generator, create = _generator(_response("  Consider a short walk to reset.\n"), model="model-a")

    text = asyncio.run(generator.generate("Had a rough day"))

    assert text == "Consider a short walk to reset."
    kwargs = create.await_args.kwargs
    assert kwargs["model"] == "model-a"
    assert kwargs["messages"] == [
        {"role": "user", "content": INSIGHT_PROMPT.format(content="Had a rough day")}
    ]


def test_defaults_to_primary_model() -> None:
    generator, create = _generator(_response("Be gentle with yourself."))

    asyncio.run(generator.generate("text"))

    assert create.await_args.kwargs["model"] == settings.CLAUDE_MODEL_PRIMARY


def test_provider_error_is_not_retried() -> None:
    generator, create = _generator(ConnectionError("network unreachable"))

    with pytest.raises(OracleError) as exc_info:
        asyncio.run(generator.generate("text"))

    assert create.await_count == 1
    assert exc_info.value.reason == "provider_error"
    assert "network unreachable" in exc_info.value.message


def test_blank_answer_is_an_oracle_error() -> None:
    generator, create = _generator(_response("   "))

    with pytest.raises(OracleError) as exc_info:
        asyncio.run(generator.generate("text"))

    assert exc_info.value.reason == "empty_result"
    assert create.await_count == 1


def test_empty_content_list_is_an_oracle_error() -> None:
    generator, _ = _generator(SimpleNamespace(content=[], usage=None))

    with pytest.raises(OracleError) as exc_info:
        asyncio.run(generator.generate("text"))

    assert exc_info.value.reason == "empty_result"
