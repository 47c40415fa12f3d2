"""Contracts for the job index and the saved-job lookup."""

from typing import Protocol, runtime_checkable

from jobmatch.core.schemas import JobListing, SearchResponse
from jobmatch.platforms.jobtech.searcher import PublishDateFilter, SearchMode, WorkTimeFilter


@runtime_checkable
class JobIndex(Protocol):
    """Anything that can search job ads and fetch one ad by id."""

    async def search(
        self,
        query: str,
        offset: int = 0,
        limit: int = 10,
        publish_date: PublishDateFilter = PublishDateFilter.NONE,
        work_time: WorkTimeFilter | None = None,
        mode: SearchMode = "OR",
    ) -> SearchResponse: ...

    async def fetch_ad(self, job_id: str) -> JobListing | None: ...


@runtime_checkable
class JobLookup(Protocol):
    """Read-only access to the headline of a job the user selected."""

    async def get_headline(self, job_id: str) -> str | None: ...
