"""Tests for core data models and error taxonomy."""

import pytest
from pydantic import ValidationError

from jobmatch.core.errors import (
    ConfigurationError,
    ErrorKind,
    ExtractionError,
    InputValidationError,
    NotFoundError,
    PipelineError,
    UpstreamLLMError,
    UpstreamSearchError,
)
from jobmatch.core.schemas import JobListing, MatchResult, SearchResponse, TailoringResult


class TestJobListing:
    def test_minimal(self) -> None:
        job = JobListing(id="1")
        assert job.headline is None
        assert job.employer is None
        assert job.employer_name == ""
        assert job.description_text is None
        assert job.city is None

    def test_null_fields_accepted(self) -> None:
        job = JobListing.model_validate({
            "id": "1",
            "headline": None,
            "employer": {"name": None},
            "description": None,
            "workplace_address": {"city": None},
        })
        assert job.headline is None
        assert job.employer_name == ""
        assert job.description_text is None
        assert job.city is None

    def test_payload_omits_keys_not_sent(self) -> None:
        job = JobListing.model_validate({"id": "1", "headline": "Dev", "employer": {"name": "Acme"}})
        assert job.to_payload() == {"id": "1", "headline": "Dev", "employer": {"name": "Acme"}}

    def test_frozen(self) -> None:
        job = JobListing(id="1", headline="Dev")
        with pytest.raises(ValidationError):
            job.headline = "Other"  # type: ignore[misc]

    def test_id_required(self) -> None:
        with pytest.raises(ValidationError):
            JobListing.model_validate({"headline": "Dev"})

    def test_extra_fields_kept(self) -> None:
        job = JobListing.model_validate({"id": "1", "salary_type": {"label": "Fixed"}})
        assert job.model_dump()["salary_type"] == {"label": "Fixed"}


class TestSearchResponse:
    def test_from_index_payload(self) -> None:
        r = SearchResponse.from_index_payload(
            {"hits": [{"id": "1"}, {"id": "2"}], "total": {"value": 120}},
        )
        assert len(r.hits) == 2
        assert r.total == 120

    def test_plain_int_total(self) -> None:
        assert SearchResponse.from_index_payload({"hits": [], "total": 3}).total == 3

    def test_null_hits(self) -> None:
        r = SearchResponse.from_index_payload({"hits": None, "total": {"value": 0}})
        assert r.hits == []

    def test_negative_total_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SearchResponse.from_index_payload({"hits": [], "total": {"value": -1}})


class TestPayloads:
    def test_match_result_payload(self) -> None:
        job = JobListing.model_validate({"id": "9", "headline": "Dev", "employer": {"name": "Acme"}})
        payload = MatchResult(skills=["Python"], jobs=[job], total_jobs=33).to_payload()
        assert payload["data"]["skills"] == ["Python"]
        assert payload["data"]["totalJobs"] == 33
        assert payload["data"]["jobs"][0]["id"] == "9"
        assert payload["data"]["jobs"][0]["employer"]["name"] == "Acme"
        assert "workplace_address" not in payload["data"]["jobs"][0]

    def test_tailoring_result_payload(self) -> None:
        payload = TailoringResult(result="advice", job_title="Dev").to_payload()
        assert payload == {"result": "advice", "jobTitle": "Dev"}


class TestErrors:
    @pytest.mark.parametrize(
        ("cls", "kind", "status"),
        [
            (InputValidationError, ErrorKind.VALIDATION, 400),
            (ExtractionError, ErrorKind.EXTRACTION, 400),
            (NotFoundError, ErrorKind.NOT_FOUND, 404),
            (UpstreamLLMError, ErrorKind.UPSTREAM_LLM, 500),
            (UpstreamSearchError, ErrorKind.UPSTREAM_SEARCH, 500),
            (ConfigurationError, ErrorKind.INTERNAL, 500),
        ],
    )
    def test_kind_and_status(self, cls: type[PipelineError], kind: ErrorKind, status: int) -> None:
        err = cls("boom")
        assert isinstance(err, PipelineError)
        assert err.kind is kind
        assert err.status_code == status
        assert err.to_payload() == {"error": "boom"}
        assert str(err) == "boom"
