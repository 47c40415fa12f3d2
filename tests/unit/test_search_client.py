"""Tests for the async job index client (httpx MockTransport, no network)."""

import json
from collections.abc import Callable

import httpx
import pytest

from jobmatch.core.config import SearchIndexConfig
from jobmatch.core.errors import UpstreamSearchError
from jobmatch.platforms.jobtech.client import JobSearchClient
from jobmatch.platforms.jobtech.searcher import PublishDateFilter, WorkTimeFilter

BASE_URL = "https://jobsearch.example.test"


def _hit(job_id: str = "123", headline: str = "Python Developer") -> dict[str, object]:
    return {
        "id": job_id,
        "headline": headline,
        "employer": {"name": "Acme AB", "organization_number": "556000-0000"},
        "description": {"text": "We build things in Python."},
        "workplace_address": {"city": "Stockholm"},
        "application_details": {"url": "https://acme.example/apply"},
        "publication_date": "2024-01-15T08:00:00",
    }


def _client(
    handler: Callable[[httpx.Request], httpx.Response],
    api_key: str | None = None,
) -> JobSearchClient:
    return JobSearchClient(
        SearchIndexConfig(base_url=BASE_URL, timeout_s=5),
        api_key,
        transport=httpx.MockTransport(handler),
    )


class TestSearch:
    async def test_normalizes_response(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"hits": [_hit("1"), _hit("2")], "total": {"value": 42}})

        result = await _client(handler).search("python")

        assert result.total == 42
        assert [h.id for h in result.hits] == ["1", "2"]
        assert result.hits[0].employer_name == "Acme AB"
        assert result.hits[0].workplace_address is not None
        assert result.hits[0].workplace_address.city == "Stockholm"

    async def test_unknown_fields_forwarded(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"hits": [_hit()], "total": {"value": 1}})

        result = await _client(handler).search("python")
        dumped = result.hits[0].model_dump(mode="json")
        assert dumped["publication_date"] == "2024-01-15T08:00:00"
        assert dumped["employer"]["organization_number"] == "556000-0000"

    async def test_null_fields_do_not_fail_page(self) -> None:
        sparse = {
            "id": "2",
            "headline": None,
            "employer": {"name": None},
            "description": None,
            "workplace_address": None,
        }

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"hits": [_hit("1"), sparse], "total": {"value": 2}})

        result = await _client(handler).search("python")

        assert [h.id for h in result.hits] == ["1", "2"]
        assert result.hits[1].headline is None
        assert result.hits[1].employer_name == ""
        assert result.hits[1].description_text is None
        assert result.hits[1].to_payload() == sparse

    async def test_null_employer_object(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            hit = {**_hit("3"), "employer": None}
            return httpx.Response(200, json={"hits": [hit], "total": {"value": 1}})

        result = await _client(handler).search("python")
        assert result.hits[0].employer is None
        assert result.hits[0].employer_name == ""

    async def test_request_shape(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"hits": [], "total": {"value": 0}})

        await _client(handler, api_key="k").search(
            "python -php",
            offset=20,
            limit=10,
            publish_date=PublishDateFilter.LAST_7_DAYS,
            work_time=WorkTimeFilter.FULL_TIME,
            mode="AND",
        )

        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/search"
        assert request.url.params["q"] == "python -php"
        assert request.url.params["offset"] == "20"
        assert request.url.params["limit"] == "10"
        assert "published-after" in request.url.params
        assert request.url.params["worktime-extent"] == "947z_JGS_Uk2"
        assert request.headers["x-feature-freetext-bool-method"] == "and"
        assert request.headers["x-feature-disable-smart-freetext"] == "false"
        assert request.headers["x-feature-enable-false-negative"] == "true"
        assert request.headers["api-key"] == "k"

    async def test_no_date_param_without_filter(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"hits": [], "total": {"value": 0}})

        await _client(handler).search("python")
        assert "published-after" not in seen[0].url.params

    async def test_non_2xx_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="maintenance")

        with pytest.raises(UpstreamSearchError, match="status 503"):
            await _client(handler).search("python")

    async def test_invalid_json_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>oops</html>")

        with pytest.raises(UpstreamSearchError, match="invalid JSON"):
            await _client(handler).search("python")

    async def test_malformed_hits_raise(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=json.dumps({"hits": [{"headline": "no id"}]}).encode())

        with pytest.raises(UpstreamSearchError, match="unexpected payload"):
            await _client(handler).search("python")

    async def test_timeout_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(UpstreamSearchError, match="timed out"):
            await _client(handler).search("python")

    async def test_connection_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(UpstreamSearchError, match="request failed"):
            await _client(handler).search("python")

    async def test_missing_total_defaults_to_zero(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"hits": []})

        result = await _client(handler).search("python")
        assert result.total == 0
        assert result.hits == []


class TestFetchAd:
    async def test_found(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_hit("987", "Data Engineer"))

        ad = await _client(handler).fetch_ad("987")

        assert ad is not None
        assert ad.headline == "Data Engineer"
        assert ad.description_text == "We build things in Python."
        assert seen[0].url.path == "/ad/987"

    async def test_not_found(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Ad not found"})

        assert await _client(handler).fetch_ad("missing") is None

    async def test_server_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500)

        with pytest.raises(UpstreamSearchError):
            await _client(handler).fetch_ad("987")

    async def test_numeric_id_coerced(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"id": 987, "headline": "Dev"})

        ad = await _client(handler).fetch_ad("987")
        assert ad is not None
        assert ad.id == "987"
