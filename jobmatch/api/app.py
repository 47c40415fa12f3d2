"""FastAPI endpoints for the match and tailoring flows."""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

from jobmatch.core.config import Settings
from jobmatch.core.errors import InputValidationError, PipelineError
from jobmatch.pipeline.orchestrator import run_match_flow, run_tailor_flow
from jobmatch.platforms.base import JobIndex, JobLookup
from jobmatch.profile.llm.base import LLMProvider

logger = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


@dataclass(frozen=True)
class _TailorInput:
    document: bytes | None
    job_id: str | None


def _json(payload: dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(payload, status_code=status_code, headers=CORS_HEADERS)


def _error_response(exc: Exception) -> JSONResponse:
    if isinstance(exc, PipelineError):
        return _json(exc.to_payload(), exc.status_code)
    logger.exception("Unhandled error while processing request")
    return _json({"error": "Internal server error"}, 500)


async def _read_form(request: Request) -> FormData:
    try:
        return await request.form()
    except (MultiPartException, HTTPException) as e:
        msg = "Malformed multipart form data"
        raise InputValidationError(msg) from e


async def _read_upload(value: Any) -> tuple[bytes | None, str | None]:
    if not isinstance(value, UploadFile):
        return None, None
    return await value.read(), value.content_type


async def _read_tailor_input(request: Request) -> _TailorInput:
    """Accept multipart (``cv``, ``jobId``) or legacy JSON (``jobId``, ``fileBase64``)."""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as e:
            msg = "Request body is not valid JSON"
            raise InputValidationError(msg) from e
        if not isinstance(body, dict):
            msg = "Request body must be a JSON object"
            raise InputValidationError(msg)

        document = None
        encoded = body.get("fileBase64")
        if encoded:
            if not isinstance(encoded, str):
                msg = "fileBase64 must be a string"
                raise InputValidationError(msg)
            # Accept data URLs as sent by browsers
            if encoded.startswith("data:") and "," in encoded:
                encoded = encoded.split(",", 1)[1]
            try:
                document = base64.b64decode(encoded, validate=True)
            except (binascii.Error, ValueError) as e:
                msg = "fileBase64 is not valid base64"
                raise InputValidationError(msg) from e
        job_id = body.get("jobId")
        return _TailorInput(document, str(job_id) if job_id is not None else None)

    form = await _read_form(request)
    document, _ = await _read_upload(form.get("cv"))
    job_id = form.get("jobId")
    return _TailorInput(document, job_id if isinstance(job_id, str) else None)


def create_app(
    settings: Settings,
    *,
    provider: LLMProvider,
    search_client: JobIndex,
    job_lookup: JobLookup,
) -> FastAPI:
    """Build the API with its collaborators injected."""
    app = FastAPI(title="CV Job Matcher", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["POST", "OPTIONS", "GET"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.options("/process-cv")
    @app.options("/cv-tailoring")
    async def preflight() -> Response:
        return Response(status_code=200, headers=CORS_HEADERS)

    @app.post("/process-cv")
    async def process_cv(request: Request) -> JSONResponse:
        try:
            form = await _read_form(request)
            document, content_type = await _read_upload(form.get("cv"))
            result = await run_match_flow(
                document,
                content_type,
                provider=provider,
                search_client=search_client,
                settings=settings,
            )
        except Exception as e:  # noqa: BLE001 - mapped to a JSON error envelope
            return _error_response(e)
        return _json(result.to_payload())

    @app.post("/cv-tailoring")
    async def cv_tailoring(request: Request) -> JSONResponse:
        try:
            data = await _read_tailor_input(request)
            result = await run_tailor_flow(
                data.document,
                data.job_id,
                provider=provider,
                search_client=search_client,
                job_lookup=job_lookup,
                settings=settings,
            )
        except Exception as e:  # noqa: BLE001 - mapped to a JSON error envelope
            return _error_response(e)
        return _json(result.to_payload())

    return app
