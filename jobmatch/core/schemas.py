"""Core data models for the CV job matcher."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Employer(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    name: str | None = None


class Description(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    text: str | None = None


class WorkplaceAddress(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    city: str | None = None


class ApplicationDetails(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    url: str | None = None
    email: str | None = None


class JobListing(BaseModel):
    """A job posting owned by the external index.

    Frozen and permissive: unknown fields are kept and every known field
    is nullable, so the listing is forwarded to API callers exactly as the
    index returned it. Dump with :meth:`to_payload` to leave out keys the
    index never sent.
    """

    model_config = ConfigDict(frozen=True, extra="allow", coerce_numbers_to_str=True)

    id: str
    headline: str | None = None
    employer: Employer | None = None
    description: Description | None = None
    workplace_address: WorkplaceAddress | None = None
    application_details: ApplicationDetails | None = None

    @property
    def employer_name(self) -> str:
        return (self.employer.name if self.employer else None) or ""

    @property
    def description_text(self) -> str | None:
        return self.description.text if self.description else None

    @property
    def city(self) -> str | None:
        return self.workplace_address.city if self.workplace_address else None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class SearchResponse(BaseModel):
    """Normalized search result page."""

    model_config = ConfigDict(frozen=True)

    hits: list[JobListing] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)

    @classmethod
    def from_index_payload(cls, payload: dict[str, Any]) -> "SearchResponse":
        """Build from the index's ``{hits: [...], total: {value: n}}`` shape."""
        total = payload.get("total") or {}
        value = total.get("value", 0) if isinstance(total, dict) else total
        return cls.model_validate({"hits": payload.get("hits") or [], "total": value})


class MatchResult(BaseModel):
    """Outcome of the CV → skills → query → jobs flow."""

    model_config = ConfigDict(frozen=True)

    skills: list[str]
    jobs: list[JobListing]
    total_jobs: int

    def to_payload(self) -> dict[str, Any]:
        return {
            "data": {
                "skills": list(self.skills),
                "jobs": [job.to_payload() for job in self.jobs],
                "totalJobs": self.total_jobs,
            },
        }


class TailoringResult(BaseModel):
    """Outcome of the CV + job → tailoring advice flow."""

    model_config = ConfigDict(frozen=True)

    result: str
    job_title: str

    def to_payload(self) -> dict[str, str]:
        return {"result": self.result, "jobTitle": self.job_title}


class SavedJob(BaseModel):
    """A job the user saved, as held by the saved-jobs store."""

    model_config = ConfigDict(frozen=True)

    job_id: str
    headline: str
    employer_name: str = ""
    workplace_city: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
