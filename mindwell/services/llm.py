"""LLM-powered supportive insights for journal entries."""

from __future__ import annotations

import logging
import time
from typing import Optional, Protocol

from anthropic import AsyncAnthropic

from mindwell.core.config import settings
from mindwell.core.logging_utils import describe_text, log_llm_usage
from mindwell.shared.errors import OracleError

logger = logging.getLogger("MindWell.LLM")

INSIGHT_PROMPT = (
    "Analyze the following journal entry for mood, recurring themes, and provide a "
    "concise, supportive insight or suggestion for mental well-being. Focus on "
    "actionable advice or positive reframing. Keep it under 100 words:\n\n{content}"
)


class InsightGenerator(Protocol):
    """Anything that turns journal text into a short supportive insight."""

    async def generate(self, content: str) -> str:
        """Return non-blank insight text or raise OracleError."""
        ...


class ClaudeInsightGenerator:
    """Generate journal insights with a single Claude call per entry."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[AsyncAnthropic] = None,
    ) -> None:
        self.client = client or AsyncAnthropic(
            api_key=api_key or settings.ANTHROPIC_API_KEY,
            timeout=settings.INSIGHT_TIMEOUT_SECONDS,
            max_retries=0,
        )
        self.model = model or settings.CLAUDE_MODEL_PRIMARY

        logger.info("Claude insight generator initialized with model: %s", self.model)

    async def generate(self, content: str) -> str:
        """
        Generate a supportive insight for a journal entry.

        Exactly one provider call is made. A provider error or a blank answer
        is reported as an OracleError and is never asked again.
        """
        prompt = INSIGHT_PROMPT.format(content=content)
        logger.info("Generating insight for journal content %s", describe_text(content))

        try:
            insight = await self._invoke_model(prompt, self.model)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Model %s failed to generate an insight: %s", self.model, exc)
            raise OracleError(
                f"AI insight generation failed: {exc}",
                reason="provider_error",
            ) from exc

        if not insight.strip():
            logger.warning("Model %s returned an empty or whitespace-only insight", self.model)
            raise OracleError("AI returned an empty insight.", reason="empty_result")

        logger.info("Insight generated with model %s (%s)", self.model, describe_text(insight))
        return insight.strip()

    async def _invoke_model(self, prompt: str, model_name: str) -> str:
        """Send the prompt to Claude and return raw text output."""
        started = time.monotonic()
        response = await self.client.messages.create(
            model=model_name,
            max_tokens=settings.INSIGHT_MAX_TOKENS,
            temperature=settings.INSIGHT_TEMPERATURE,
            messages=[{"role": "user", "content": prompt}],
        )

        usage = getattr(response, "usage", None)
        if usage is not None:
            log_llm_usage(
                model=model_name,
                input_tokens=usage.input_tokens,
                output_tokens=usage.output_tokens,
                duration_ms=int((time.monotonic() - started) * 1000),
                endpoint="journal_insight",
            )

        if not response.content:
            return ""

        block = response.content[0]
        return block.text if hasattr(block, "text") else str(block)
