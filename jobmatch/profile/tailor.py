"""CV tailoring advice for one job posting."""

import logging

from jobmatch.core.config import LLMConfig
from jobmatch.profile.llm.base import LLMProvider

logger = logging.getLogger(__name__)

TAILORING_SYSTEM_PROMPT = (
    "You are an experienced CV reviewer and career coach. Compare the "
    "candidate's CV with the job posting and give concrete, actionable "
    "advice on how to tailor the CV for this specific job. Base every "
    "suggestion on what the CV actually contains; do not invent experience."
)

TAILORING_SECTIONS = (
    "Skills Alignment",
    "Experience Highlighting",
    "Sections to Modify",
    "Keywords to Include",
)


def _build_user_prompt(cv_text: str, job_title: str, job_description: str) -> str:
    """Assemble the user prompt from job and CV data."""
    sections = "\n".join(
        f"{i}. {name}" for i, name in enumerate(TAILORING_SECTIONS, start=1)
    )
    return (
        "Please review this CV against the following job posting.\n\n"
        f"JOB TITLE: {job_title}\n"
        f"JOB DESCRIPTION:\n{job_description}\n\n"
        f"CV:\n{cv_text}\n\n"
        "Provide your recommendations in exactly these sections:\n"
        f"{sections}"
    )


async def tailor_cv(
    cv_text: str,
    job_title: str,
    job_description: str,
    provider: LLMProvider,
    config: LLMConfig,
) -> str:
    """Return free-text tailoring advice, verbatim from the language model."""
    logger.info("Requesting tailoring advice for '%s'", job_title)
    return await provider.complete(
        _build_user_prompt(cv_text, job_title, job_description),
        system=TAILORING_SYSTEM_PROMPT,
        model=config.tailoring_model,
        temperature=config.tailoring_temperature,
        max_tokens=config.tailoring_max_tokens,
    )
