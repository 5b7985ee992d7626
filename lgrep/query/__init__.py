"""Query module -- query forms, options and the request builder."""

from lgrep.query.builder import QueryBuilder
from lgrep.query.options import DEFAULT_SPEC, SearchOptions, SortTime
from lgrep.query.request import DocumentQuery, LuceneQuery, SearchRequest

__all__ = [
    "QueryBuilder",
    "SearchOptions",
    "SortTime",
    "DEFAULT_SPEC",
    "DocumentQuery",
    "LuceneQuery",
    "SearchRequest",
]
