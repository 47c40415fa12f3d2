"""OpenAI chat-completions LLM provider."""

import logging

from jobmatch.core.errors import UpstreamLLMError
from jobmatch.profile.llm.base import LLMProvider, require_content

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """LLM provider using the OpenAI chat completions API."""

    @property
    def provider_id(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return "gpt-4o-mini"

    @property
    def env_var(self) -> str | None:
        return "OPENAI_API_KEY"

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
            import openai
        except ImportError:
            msg = (
                "openai is required for LLM completion. "
                "Install with: pip install openai"
            )
            raise ImportError(msg) from None

        client = openai.AsyncOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            timeout=self.timeout_s,
            max_retries=0,
        )
        use_model = model or self.default_model

        logger.info("Sending completion request to %s (%s)...", self.provider_id, use_model)
        try:
            response = await client.chat.completions.create(
                model=use_model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            )
        except openai.APIStatusError as e:
            logger.error("%s API error %d: %s", self.provider_id, e.status_code, e.message)
            msg = f"Language model request failed with status {e.status_code}"
            raise UpstreamLLMError(msg) from e
        except openai.APIError as e:
            logger.error("%s request failed: %s", self.provider_id, e)
            msg = f"Language model request failed: {e}"
            raise UpstreamLLMError(msg) from e

        if not response.choices:
            msg = f"{self.provider_id} response contains no choices"
            raise UpstreamLLMError(msg)
        return require_content(response.choices[0].message.content, self.provider_id)


class OllamaProvider(OpenAIProvider):
    """Local Ollama instance through its OpenAI-compatible API."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        timeout_s: float = 60.0,
        base_url: str | None = None,
    ) -> None:
        super().__init__(
            api_key or "ollama",
            timeout_s=timeout_s,
            base_url=base_url or "http://localhost:11434/v1",
        )

    @property
    def provider_id(self) -> str:
        return "ollama"

    @property
    def default_model(self) -> str:
        return "llama3"

    @property
    def env_var(self) -> str | None:
        return None
