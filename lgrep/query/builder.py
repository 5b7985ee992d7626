"""Turn caller input into a normalized query and a ready-to-run request.

Two entry points mirror the two query forms:

* ``from_text`` wraps a free-text (lucene style) expression;
* ``from_raw`` accepts a pre-built query document as bytes, a string, a
  decoded JSON tree or an existing ``DocumentQuery``.  Any other shape is
  rejected with ``UnsupportedQueryError``.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

from lgrep.errors import EmptyQueryError, QueryFileError, UnsupportedQueryError
from lgrep.query.options import DEFAULT_SPEC, SearchOptions
from lgrep.query.request import DocumentQuery, LuceneQuery, SearchRequest
from lgrep.utils.logger import get_logger

log = get_logger(__name__)

Query = Union[LuceneQuery, DocumentQuery]
RawQuery = Union[bytes, bytearray, str, Mapping, DocumentQuery]


class QueryBuilder:
    """Holds one normalized query and builds requests from it."""

    def __init__(self, query: Query, timestamp_field: str | None = None):
        self.query = query
        self.timestamp_field = timestamp_field

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "QueryBuilder":
        """Wrap a free-text expression.  Empty text is always an error."""
        if not text or not text.strip():
            raise EmptyQueryError()
        return cls(LuceneQuery(text), **kwargs)

    @classmethod
    def from_raw(cls, source: Any, **kwargs) -> "QueryBuilder":
        """Normalize a pre-built query document of any supported shape."""
        if isinstance(source, DocumentQuery):
            query = source
        elif isinstance(source, (bytes, bytearray)):
            try:
                text = bytes(source).decode("utf-8")
            except UnicodeDecodeError as exc:
                raise UnsupportedQueryError(
                    source, message="Raw query bytes are not UTF-8", cause=exc
                ) from exc
            query = DocumentQuery(text=text)
        elif isinstance(source, str):
            query = DocumentQuery(text=source)
        elif isinstance(source, Mapping):
            try:
                json.dumps(source)
            except (TypeError, ValueError) as exc:
                raise UnsupportedQueryError(
                    source,
                    message=f"Raw query document is not JSON serializable: {exc}",
                    cause=exc,
                ) from exc
            query = DocumentQuery(document=source)
        else:
            raise UnsupportedQueryError(source)
        return cls(query, **kwargs)

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs) -> "QueryBuilder":
        """Read a raw query document from *path*."""
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise QueryFileError(str(path), cause=exc) from exc
        log.debug("Read %d bytes of query from %s", len(data), path)
        return cls.from_raw(data, **kwargs)

    def build(self, options: SearchOptions | None = None) -> SearchRequest:
        """Create a fresh request with *options* (or the defaults) applied."""
        opts = options if options is not None else DEFAULT_SPEC
        request = SearchRequest(self.query, timestamp_field=self.timestamp_field)
        opts.apply(request)
        return request
