"""lgrep -- ad-hoc log searches against an Elasticsearch-compatible engine."""

from lgrep.client import LGrep
from lgrep.engine import EngineClient, Validator
from lgrep.errors import (
    ConfigurationError,
    EmptyQueryError,
    ExecutionError,
    ExtractionError,
    InputError,
    LGrepError,
    MissingDocumentError,
    Phase,
    QueryValidationError,
    UnsupportedQueryError,
    ZeroSizeError,
)
from lgrep.query import DEFAULT_SPEC, QueryBuilder, SearchOptions, SortTime
from lgrep.search import (
    FieldResult,
    RawResult,
    Result,
    SearchStream,
    SourceResult,
    StreamState,
    extract,
)

__version__ = "1.0.0"

__all__ = [
    "LGrep",
    "EngineClient",
    "Validator",
    "QueryBuilder",
    "SearchOptions",
    "SortTime",
    "DEFAULT_SPEC",
    "SearchStream",
    "StreamState",
    "Result",
    "RawResult",
    "FieldResult",
    "SourceResult",
    "extract",
    "Phase",
    "LGrepError",
    "ConfigurationError",
    "InputError",
    "EmptyQueryError",
    "ZeroSizeError",
    "UnsupportedQueryError",
    "QueryValidationError",
    "ExecutionError",
    "ExtractionError",
    "MissingDocumentError",
]
