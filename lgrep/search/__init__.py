"""Search module -- execution stream and result extraction."""

from lgrep.search.result import FieldResult, RawResult, Result, SourceResult, extract
from lgrep.search.stream import SearchStream, StreamState

__all__ = [
    "Result",
    "RawResult",
    "FieldResult",
    "SourceResult",
    "extract",
    "SearchStream",
    "StreamState",
]
