"""Abstract base class for LLM providers and shared logic."""

from abc import ABC, abstractmethod

from jobmatch.core.errors import UpstreamLLMError


def require_content(content: str | None, provider_id: str) -> str:
    """Return completion text, raising if the payload carried none."""
    if content is None or not content.strip():
        msg = f"{provider_id} response is missing completion content"
        raise UpstreamLLMError(msg)
    return content


class LLMProvider(ABC):
    """Base class that every LLM provider must implement.

    Providers are built once at startup with their credentials and are
    safe to share between concurrent requests.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        timeout_s: float = 60.0,
        base_url: str | None = None,
    ) -> None:
        self.api_key = api_key
        self.timeout_s = timeout_s
        self.base_url = base_url

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Unique identifier for this provider (e.g. 'openai')."""

    @property
    @abstractmethod
    def default_model(self) -> str:
        """The default model ID used when no override is specified."""

    @property
    @abstractmethod
    def env_var(self) -> str | None:
        """Environment variable name for the API key, or None if not needed."""

    @abstractmethod
    async def complete(
        self,
        user: str,
        *,
        system: str,
        model: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 1024,
    ) -> str:
        """Send one system + user exchange and return the completion text.

        Args:
            user: The user message.
            system: The system instruction.
            model: Override the provider's default model. None uses default.
            temperature: Sampling temperature.
            max_tokens: Completion token budget.

        Raises:
            UpstreamLLMError: If the service is unreachable, times out,
                answers with an error status, or returns no content.
        """
