"""Async HTTP client for the JobTech job-search index."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from jobmatch.core.config import SearchIndexConfig
from jobmatch.core.errors import UpstreamSearchError
from jobmatch.core.schemas import JobListing, SearchResponse
from jobmatch.platforms.jobtech.searcher import (
    PublishDateFilter,
    SearchMode,
    WorkTimeFilter,
    build_headers,
    build_search_params,
)

logger = logging.getLogger(__name__)


class JobSearchClient:
    """Query the job index and normalize its responses.

    One ``httpx.AsyncClient`` is opened per call; the instance itself holds
    only read-only configuration and can be shared between requests.
    """

    def __init__(
        self,
        config: SearchIndexConfig,
        api_key: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._api_key = api_key
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout_s,
            transport=self._transport,
        )

    async def search(
        self,
        query: str,
        offset: int = 0,
        limit: int = 10,
        publish_date: PublishDateFilter = PublishDateFilter.NONE,
        work_time: WorkTimeFilter | None = None,
        mode: SearchMode = "OR",
    ) -> SearchResponse:
        """Run a free-text search.

        Raises:
            UpstreamSearchError: On transport failure, timeout, non-2xx
                status or a malformed payload.
        """
        params = build_search_params(query, offset, limit, publish_date, work_time)
        headers = build_headers(mode, self._api_key)

        logger.info("Searching index: q=%r offset=%d limit=%d mode=%s", query, offset, limit, mode)
        payload = await self._get_json("/search", params=params, headers=headers)

        try:
            result = SearchResponse.from_index_payload(payload)
        except (ValidationError, AttributeError) as e:
            msg = f"Job search returned an unexpected payload: {e}"
            raise UpstreamSearchError(msg) from e

        logger.info("Index returned %d hits (total %d)", len(result.hits), result.total)
        return result

    async def fetch_ad(self, job_id: str) -> JobListing | None:
        """Fetch a single job ad by id. Returns None if the index has no such ad."""
        headers = build_headers("OR", self._api_key)
        payload = await self._get_json(f"/ad/{job_id}", headers=headers, allow_missing=True)
        if payload is None:
            logger.info("Job ad %s not found in index", job_id)
            return None

        try:
            return JobListing.model_validate(payload)
        except ValidationError as e:
            msg = f"Job ad {job_id} has an unexpected payload: {e}"
            raise UpstreamSearchError(msg) from e

    async def _get_json(
        self,
        path: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        allow_missing: bool = False,
    ) -> Any:
        try:
            async with self._client() as client:
                response = await client.get(path, params=params, headers=headers)
        except httpx.TimeoutException as e:
            msg = f"Job search timed out after {self._config.timeout_s}s"
            raise UpstreamSearchError(msg) from e
        except httpx.HTTPError as e:
            msg = f"Job search request failed: {e}"
            raise UpstreamSearchError(msg) from e

        if allow_missing and response.status_code == 404:
            return None

        if not response.is_success:
            logger.error(
                "Job search error %d: %s", response.status_code, response.text[:500],
            )
            msg = f"Failed to fetch matching jobs (status {response.status_code})"
            raise UpstreamSearchError(msg)

        try:
            payload = response.json()
        except ValueError as e:
            msg = "Job search returned invalid JSON"
            raise UpstreamSearchError(msg) from e

        if not isinstance(payload, dict):
            msg = "Job search returned an unexpected payload"
            raise UpstreamSearchError(msg)
        return payload
