"""Tests for the CV tailoring stage."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from jobmatch.core.config import LLMConfig
from jobmatch.core.errors import UpstreamLLMError
from jobmatch.profile.tailor import TAILORING_SECTIONS, TAILORING_SYSTEM_PROMPT, tailor_cv


def _provider(reply: str = "advice") -> MagicMock:
    provider = MagicMock()
    provider.complete = AsyncMock(return_value=reply)
    return provider


class TestTailorCv:
    async def test_returns_completion_verbatim(self) -> None:
        reply = "1. Skills Alignment\n- Python matches\n\n4. Keywords to Include\n- Django"
        result = await tailor_cv("cv", "Backend Dev", "desc", _provider(reply), LLMConfig())
        assert result == reply

    async def test_prompt_embeds_job_and_cv(self) -> None:
        provider = _provider()
        await tailor_cv(
            "Jane Doe, Python engineer",
            "Senior Backend Engineer",
            "Build payment APIs",
            provider,
            LLMConfig(tailoring_model="gpt-4o", tailoring_temperature=0.5, tailoring_max_tokens=800),
        )

        args, kwargs = provider.complete.call_args
        user = args[0]
        assert "Senior Backend Engineer" in user
        assert "Build payment APIs" in user
        assert "Jane Doe, Python engineer" in user
        for section in TAILORING_SECTIONS:
            assert section in user
        assert kwargs["system"] == TAILORING_SYSTEM_PROMPT
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["temperature"] == 0.5
        assert kwargs["max_tokens"] == 800

    def test_four_sections(self) -> None:
        assert TAILORING_SECTIONS == (
            "Skills Alignment",
            "Experience Highlighting",
            "Sections to Modify",
            "Keywords to Include",
        )

    def test_system_prompt_frames_reviewer(self) -> None:
        assert "CV reviewer" in TAILORING_SYSTEM_PROMPT

    async def test_upstream_error_propagates(self) -> None:
        provider = MagicMock()
        provider.complete = AsyncMock(side_effect=UpstreamLLMError("timed out"))
        with pytest.raises(UpstreamLLMError, match="timed out"):
            await tailor_cv("cv", "t", "d", provider, LLMConfig())
