"""Error taxonomy for lgrep.

Every error carries the ``phase`` it was raised in so a caller can tell
"my query was bad" (build / validate) from "the service is unavailable"
(execute) without parsing messages.
"""

import json
from enum import Enum
from typing import Any, Dict, Optional


class Phase(str, Enum):
    """Stage of a search in which an error occurred."""

    CONFIG = "config"
    BUILD = "build"
    VALIDATE = "validate"
    EXECUTE = "execute"
    EXTRACT = "extract"


class LGrepError(Exception):
    """Root of the lgrep error hierarchy."""

    phase: Phase = Phase.BUILD

    def __init__(
        self,
        message: str,
        *,
        phase: Phase | None = None,
        detail: Optional[Dict[str, Any]] = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        if phase is not None:
            self.phase = phase
        self.detail: Dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"[{self.phase.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(phase={self.phase.value!r}, message={self.message!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to a plain dict (safe for logging)."""
        payload: Dict[str, Any] = {
            "error": type(self).__name__,
            "phase": self.phase.value,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


# -- Configuration ----------------------------------------------------------


class ConfigurationError(LGrepError):
    """The client cannot be constructed (bad endpoint, bad settings)."""

    phase = Phase.CONFIG


# -- Input ------------------------------------------------------------------


class InputError(LGrepError):
    """Caller-attributable problem detected before any network call."""

    phase = Phase.BUILD


class EmptyQueryError(InputError):
    def __init__(self, message: str = "Empty search query, not submitting.", **kwargs: Any):
        super().__init__(message, **kwargs)


class ZeroSizeError(InputError):
    """Size of zero (or less) means the caller does not want results."""

    def __init__(self, size: int = 0, message: str | None = None, **kwargs: Any):
        super().__init__(
            message or f"Search size is {size}, not submitting.",
            detail={"size": size, **(kwargs.pop("detail", None) or {})},
            **kwargs,
        )
        self.size = size


class UnsupportedQueryError(InputError):
    """A raw query was supplied in a shape the builder does not accept."""

    def __init__(self, source: Any, message: str | None = None, **kwargs: Any):
        kind = type(source).__name__
        super().__init__(
            message or f"Unsupported raw query type: {kind}",
            detail={"type": kind, **(kwargs.pop("detail", None) or {})},
            **kwargs,
        )


class ConflictingQueryError(InputError):
    def __init__(
        self,
        message: str = "Multiple queries provided (query file and free text?)",
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)


class MissingQueryError(InputError):
    def __init__(self, message: str = "No query provided", **kwargs: Any):
        super().__init__(message, **kwargs)


class QueryFileError(InputError):
    """A query file could not be opened or read."""

    def __init__(self, path: str, message: str | None = None, **kwargs: Any):
        super().__init__(
            message or f"Query file cannot be read: {path}",
            detail={"path": str(path), **(kwargs.pop("detail", None) or {})},
            **kwargs,
        )
        self.path = path


# -- Validation -------------------------------------------------------------


class QueryValidationError(LGrepError):
    """The engine (or the local JSON decoder) rejected the query's shape."""

    phase = Phase.VALIDATE

    def __init__(
        self,
        message: str,
        *,
        response: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.response: Dict[str, Any] = response or {}


# -- Execution --------------------------------------------------------------


class ExecutionError(LGrepError):
    """Transport failure, engine-side failure or undecodable response."""

    phase = Phase.EXECUTE

    def __init__(self, message: str, *, status_code: int | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.status_code = status_code


class StreamConsumedError(ExecutionError):
    """A failed stream was pulled from again."""

    def __init__(self, message: str = "Search stream failed and cannot be reused", **kwargs: Any):
        super().__init__(message, **kwargs)


# -- Extraction -------------------------------------------------------------


class ExtractionError(LGrepError):
    phase = Phase.EXTRACT


class MissingDocumentError(ExtractionError):
    """A hit had neither a usable field projection nor a source document."""

    def __init__(self, hit_id: str | None = None, message: str | None = None, **kwargs: Any):
        super().__init__(
            message or f"Hit {hit_id or '<unknown>'} carries no source or fields",
            detail={"id": hit_id, **(kwargs.pop("detail", None) or {})},
            **kwargs,
        )
        self.hit_id = hit_id


__all__ = [
    "Phase",
    "LGrepError",
    "ConfigurationError",
    "InputError",
    "EmptyQueryError",
    "ZeroSizeError",
    "UnsupportedQueryError",
    "ConflictingQueryError",
    "MissingQueryError",
    "QueryFileError",
    "QueryValidationError",
    "ExecutionError",
    "StreamConsumedError",
    "ExtractionError",
    "MissingDocumentError",
]
