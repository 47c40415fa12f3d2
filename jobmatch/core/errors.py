"""Error taxonomy shared by every pipeline stage.

Each error carries its kind and the HTTP status the API responds with.
Components raise the most specific subclass they can determine; the
orchestrators and the API layer never reinterpret the kind.
"""

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    EXTRACTION = "extraction"
    UPSTREAM_LLM = "upstream_llm"
    UPSTREAM_SEARCH = "upstream_search"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


class PipelineError(Exception):
    """Base class for failures that end a pipeline run."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL
    status_code: ClassVar[int] = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, str]:
        """JSON body returned to API callers."""
        return {"error": self.message}


class InputValidationError(PipelineError):
    """Missing or malformed request input."""

    kind = ErrorKind.VALIDATION
    status_code = 400


class ExtractionError(PipelineError):
    """The uploaded document produced no usable text."""

    kind = ErrorKind.EXTRACTION
    status_code = 400


class UpstreamLLMError(PipelineError):
    """The language-model service failed or returned an unusable payload."""

    kind = ErrorKind.UPSTREAM_LLM
    status_code = 500


class UpstreamSearchError(PipelineError):
    """The job-search index failed or returned an unusable payload."""

    kind = ErrorKind.UPSTREAM_SEARCH
    status_code = 500


class NotFoundError(PipelineError):
    """A referenced job does not exist."""

    kind = ErrorKind.NOT_FOUND
    status_code = 404


class ConfigurationError(PipelineError):
    """Required configuration (API key, URL) is missing."""

    kind = ErrorKind.INTERNAL
    status_code = 500
