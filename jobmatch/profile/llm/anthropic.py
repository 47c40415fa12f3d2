"""Anthropic Claude LLM provider."""

import logging

from jobmatch.core.errors import UpstreamLLMError
from jobmatch.profile.llm.base import LLMProvider, require_content

logger = logging.getLogger(__name__)


class AnthropicProvider(LLMProvider):
    """LLM provider using the Anthropic Claude API."""

    @property
    def provider_id(self) -> str:
        return "anthropic"

    @property
    def default_model(self) -> str:
        return "claude-sonnet-4-20250514"

    @property
    def env_var(self) -> str | None:
        return "ANTHROPIC_API_KEY"

    async def complete(
        self,
        user: str,
        *,
        system: str,
        model: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 1024,
    ) -> str:
        try:
            import anthropic
        except ImportError:
            msg = (
                "anthropic is required for LLM completion. "
                "Install with: pip install 'cv-job-matcher[anthropic]'"
            )
            raise ImportError(msg) from None

        client = anthropic.AsyncAnthropic(
            api_key=self.api_key,
            base_url=self.base_url,
            timeout=self.timeout_s,
            max_retries=0,
        )
        use_model = model or self.default_model

        logger.info("Sending completion request to Anthropic API (%s)...", use_model)
        try:
            message = await client.messages.create(
                model=use_model,
                temperature=temperature,
                max_tokens=max_tokens,
                system=system,
                messages=[{"role": "user", "content": user}],
            )
        except anthropic.APIStatusError as e:
            logger.error("Anthropic API error %d: %s", e.status_code, e.message)
            msg = f"Language model request failed with status {e.status_code}"
            raise UpstreamLLMError(msg) from e
        except anthropic.APIError as e:
            logger.error("Anthropic request failed: %s", e)
            msg = f"Language model request failed: {e}"
            raise UpstreamLLMError(msg) from e

        texts = [block.text for block in message.content if getattr(block, "type", "") == "text"]
        return require_content("".join(texts) if texts else None, self.provider_id)
