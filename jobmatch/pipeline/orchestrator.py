"""Orchestrators for the two request flows.

Flow A (match):
  RECEIVED → VALIDATING_INPUT → EXTRACTING_TEXT → SKILL_EXTRACTION
  → SEARCHING → DONE
Flow B (tailor):
  RECEIVED → VALIDATING_INPUT → JOB_LOOKUP → EXTRACTING_TEXT
  → TAILORING → DONE

Any stage failure ends in FAILED with the stage's own error kind.
Job lookup runs before extraction in flow B so an unknown job fails
without parsing the document. Nothing is retried here.
"""

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TypeVar

from jobmatch.core.config import Settings
from jobmatch.core.errors import InputValidationError, NotFoundError, PipelineError
from jobmatch.core.schemas import MatchResult, TailoringResult
from jobmatch.platforms.base import JobIndex, JobLookup
from jobmatch.profile.extractor import extract_text
from jobmatch.profile.llm.base import LLMProvider
from jobmatch.profile.skills import extract_skills
from jobmatch.profile.tailor import tailor_cv
from jobmatch.query.builder import build_query

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
NO_DESCRIPTION = "No description available"

T = TypeVar("T")


class PipelineState(str, Enum):
    RECEIVED = "RECEIVED"
    VALIDATING_INPUT = "VALIDATING_INPUT"
    EXTRACTING_TEXT = "EXTRACTING_TEXT"
    SKILL_EXTRACTION = "SKILL_EXTRACTION"
    JOB_LOOKUP = "JOB_LOOKUP"
    SEARCHING = "SEARCHING"
    TAILORING = "TAILORING"
    DONE = "DONE"
    FAILED = "FAILED"


class _Run:
    """Tracks and logs the state of one pipeline invocation."""

    def __init__(self, flow: str) -> None:
        self.flow = flow
        self.state = PipelineState.RECEIVED
        logger.info("[%s] %s", flow, self.state.value)

    def enter(self, state: PipelineState) -> None:
        self.state = state
        logger.info("[%s] %s", self.flow, state.value)

    async def stage(self, state: PipelineState, step: Callable[[], Awaitable[T]]) -> T:
        self.enter(state)
        try:
            return await step()
        except PipelineError as e:
            self.state = PipelineState.FAILED
            logger.warning(
                "[%s] %s in %s (%s): %s",
                self.flow, self.state.value, state.value, e.kind.value, e.message,
            )
            raise


def _validate_document(document: bytes | None) -> bytes:
    if not document:
        msg = "No CV file provided"
        raise InputValidationError(msg)
    return document


async def run_match_flow(
    document: bytes | None,
    content_type: str | None,
    *,
    provider: LLMProvider,
    search_client: JobIndex,
    settings: Settings,
) -> MatchResult:
    """CV → skills → query → matching jobs.

    Raises:
        PipelineError: The first failing stage's error, unchanged.
    """
    run = _Run("match")

    async def _validate() -> bytes:
        data = _validate_document(document)
        if content_type != PDF_CONTENT_TYPE:
            msg = "File must be a PDF"
            raise InputValidationError(msg)
        return data

    data = await run.stage(PipelineState.VALIDATING_INPUT, _validate)
    cv_text = await run.stage(PipelineState.EXTRACTING_TEXT, lambda: extract_text(data))
    skills = await run.stage(
        PipelineState.SKILL_EXTRACTION,
        lambda: extract_skills(
            cv_text, provider, settings.llm, settings.pipeline.skills_max_chars,
        ),
    )

    query = build_query(skills)
    max_results = settings.pipeline.max_results
    response = await run.stage(
        PipelineState.SEARCHING,
        lambda: search_client.search(query, offset=0, limit=max_results, mode="OR"),
    )

    run.enter(PipelineState.DONE)
    return MatchResult(
        skills=skills,
        jobs=response.hits[:max_results],
        total_jobs=response.total,
    )


async def run_tailor_flow(
    document: bytes | None,
    job_id: str | None,
    *,
    provider: LLMProvider,
    search_client: JobIndex,
    job_lookup: JobLookup,
    settings: Settings,
) -> TailoringResult:
    """CV + selected job → tailoring advice.

    The stored headline is authoritative for existence; the index ad only
    supplies the description (and a fresher headline when available).

    Raises:
        PipelineError: The first failing stage's error, unchanged.
    """
    run = _Run("tailor")

    async def _validate() -> tuple[bytes, str]:
        if not document or not job_id or not job_id.strip():
            msg = "CV file and job ID are required"
            raise InputValidationError(msg)
        return document, job_id.strip()

    data, clean_id = await run.stage(PipelineState.VALIDATING_INPUT, _validate)

    async def _lookup() -> tuple[str, str]:
        headline = await job_lookup.get_headline(clean_id)
        if headline is None:
            msg = f"Job {clean_id} not found"
            raise NotFoundError(msg)
        ad = await search_client.fetch_ad(clean_id)
        if ad is None:
            return headline, NO_DESCRIPTION
        return ad.headline or headline, ad.description_text or NO_DESCRIPTION

    job_title, job_description = await run.stage(PipelineState.JOB_LOOKUP, _lookup)
    cv_text = await run.stage(PipelineState.EXTRACTING_TEXT, lambda: extract_text(data))
    advice = await run.stage(
        PipelineState.TAILORING,
        lambda: tailor_cv(cv_text, job_title, job_description, provider, settings.llm),
    )

    run.enter(PipelineState.DONE)
    return TailoringResult(result=advice, job_title=job_title)
