"""LLM provider registry with lazy loading.

Usage:
    from jobmatch.profile.llm import get_provider

    provider = get_provider("openai", settings.llm)
    raw = await provider.complete(cv_text, system=SKILLS_SYSTEM_PROMPT)
"""

from __future__ import annotations

import importlib
import os
from collections.abc import Mapping

from jobmatch.core.config import LLMConfig, require_env
from jobmatch.profile.llm.base import LLMProvider

__all__ = ["LLMProvider", "available_providers", "get_provider"]

# Lazy registry: maps provider name → (module_path, class_name, api key env var)
_REGISTRY: dict[str, tuple[str, str, str | None]] = {
    "openai": ("jobmatch.profile.llm.openai", "OpenAIProvider", "OPENAI_API_KEY"),
    "ollama": ("jobmatch.profile.llm.openai", "OllamaProvider", None),
    "anthropic": ("jobmatch.profile.llm.anthropic", "AnthropicProvider", "ANTHROPIC_API_KEY"),
}


def get_provider(
    name: str,
    config: LLMConfig | None = None,
    environ: Mapping[str, str] | None = None,
) -> LLMProvider:
    """Instantiate an LLM provider by name with its API key and timeout.

    Args:
        name: Provider identifier (openai, ollama, anthropic).
        config: LLM settings supplying timeout and base URL.
        environ: Environment to read the API key from. Defaults to os.environ.

    Returns:
        An LLMProvider instance.

    Raises:
        ValueError: If the provider name is unknown.
        ConfigurationError: If the provider's API key is not set.
    """
    if name not in _REGISTRY:
        valid = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown LLM provider '{name}'. Available: {valid}"
        raise ValueError(msg)

    module_path, class_name, env_var = _REGISTRY[name]
    config = config or LLMConfig(provider=name)
    api_key = require_env(env_var, os.environ if environ is None else environ) if env_var else None

    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    return cls(  # type: ignore[no-any-return]
        api_key, timeout_s=config.timeout_s, base_url=config.base_url,
    )


def available_providers() -> list[str]:
    """Return sorted list of registered provider names."""
    return sorted(_REGISTRY)
