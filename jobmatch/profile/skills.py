"""Skill extraction: CV text → ordered, length-bounded list of search terms."""

import logging
from collections.abc import Sequence

from jobmatch.core.config import LLMConfig
from jobmatch.core.errors import UpstreamLLMError
from jobmatch.profile.llm.base import LLMProvider

logger = logging.getLogger(__name__)

SKILLS_MAX_CHARS = 255
SKILL_SEPARATOR = ", "

SKILLS_SYSTEM_PROMPT = (
    "You are a CV analyzer that turns a CV into job-search terms.\n\n"
    "Rules:\n"
    "1. Output ONLY a comma-separated list of terms. No numbering, no "
    "explanation, no surrounding text.\n"
    "2. Use the canonical name of each term (e.g. \"JavaScript\" not "
    "\"JS\", \"Kubernetes\" not \"k8s\").\n"
    "3. Order terms by relevance and frequency in the CV, most relevant "
    "first.\n"
    "4. List hard terms first (programming languages, frameworks, tools, "
    "platforms, certifications), then job titles the candidate has held, "
    "then niche domain competencies.\n"
    "5. Do NOT include soft skills (communication, teamwork, leadership, "
    "problem solving, etc.).\n"
    "6. Do NOT include generic office tools (Microsoft Office, Word, Excel, "
    "Outlook, Google Docs, etc.).\n"
    "7. Do NOT invent terms that are not supported by the CV.\n"
    f"8. The whole output must not exceed {SKILLS_MAX_CHARS} characters. If it "
    "would, drop terms from the end of the list until it fits.\n\n"
    'Example: "Python, Django, PostgreSQL, Docker, Backend Developer, Payments"'
)


def parse_skills(raw: str) -> list[str]:
    """Split a comma-separated completion into trimmed, non-empty terms."""
    skills: list[str] = []
    for part in raw.split(","):
        term = part.strip().strip("\"'").strip()
        if term:
            skills.append(term)
    return skills


def truncate_skills(skills: Sequence[str], max_chars: int = SKILLS_MAX_CHARS) -> list[str]:
    """Drop trailing terms until the joined list fits in ``max_chars``.

    The result is always a prefix of ``skills``; leading terms are never
    dropped in favour of later ones.
    """
    kept: list[str] = []
    length = 0
    for term in skills:
        added = len(term) + (len(SKILL_SEPARATOR) if kept else 0)
        if length + added > max_chars:
            break
        kept.append(term)
        length += added

    if len(kept) < len(skills):
        logger.info(
            "Skill list truncated to %d/%d terms (%d char budget)",
            len(kept), len(skills), max_chars,
        )
    return kept


async def extract_skills(
    cv_text: str,
    provider: LLMProvider,
    config: LLMConfig,
    max_chars: int = SKILLS_MAX_CHARS,
) -> list[str]:
    """Ask the language model for the CV's search terms.

    Raises:
        UpstreamLLMError: If the completion fails or yields no terms.
    """
    raw = await provider.complete(
        cv_text,
        system=SKILLS_SYSTEM_PROMPT,
        model=config.skills_model,
        temperature=config.skills_temperature,
        max_tokens=config.skills_max_tokens,
    )

    skills = truncate_skills(parse_skills(raw), max_chars)
    if not skills:
        msg = "Language model returned no skills"
        raise UpstreamLLMError(msg)

    logger.info("Extracted %d skills: %s", len(skills), SKILL_SEPARATOR.join(skills))
    return skills
