"""High-level search facade: build, validate, then stream results."""

import sys
from pathlib import Path
from typing import IO, Any, List, Optional, Union

import httpx

from lgrep.engine.client import EngineClient
from lgrep.engine.validator import Validator
from lgrep.query.builder import QueryBuilder
from lgrep.query.options import DEFAULT_SPEC, SearchOptions
from lgrep.search.result import Result
from lgrep.search.stream import SearchStream, require_size
from lgrep.utils.logger import get_logger

log = get_logger(__name__)


class LGrep:
    """Runs searches against a single configured engine endpoint.

    The underlying ``EngineClient`` can be shared between threads; each
    search gets its own request and ``SearchStream``.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        timeout: float | None = None,
        debug_writer: Optional[IO[str]] = None,
        timestamp_field: str | None = None,
        client: EngineClient | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.client = client or EngineClient(endpoint, timeout=timeout, transport=transport)
        self.endpoint = self.client.endpoint
        self.validator = Validator(self.client)
        self.debug_writer = debug_writer
        self.timestamp_field = timestamp_field

    def __enter__(self) -> "LGrep":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    # -- Searching ----------------------------------------------------------

    def search(self, builder: QueryBuilder, options: SearchOptions | None = None) -> SearchStream:
        """Build a request from *builder*, validate it and return its stream.

        Nothing is fetched until the stream is iterated.  A failed
        validation raises before any stream exists.
        """
        opts = options if options is not None else DEFAULT_SPEC
        # A size of zero means the caller does not want any results.
        require_size(opts)
        request = builder.build(opts)

        debug = self._debug_for(opts)
        if debug is not None:
            debug.write(request.debug_json() + "\n")

        if not opts.query_skip_validate:
            self.validator.validate(request, debug=debug)
        return SearchStream(self.client, request, opts)

    def simple_search(self, text: str, options: SearchOptions | None = None) -> SearchStream:
        """Run a lucene-style free-text search."""
        builder = QueryBuilder.from_text(text, timestamp_field=self.timestamp_field)
        return self.search(builder, options)

    def search_with_source(self, source: Any, options: SearchOptions | None = None) -> SearchStream:
        """Run a pre-built query document (bytes, str, mapping or DocumentQuery).

        Options are applied on top of the document: size, sort and fields
        given in *options* replace those written in the document.
        """
        builder = QueryBuilder.from_raw(source, timestamp_field=self.timestamp_field)
        return self.search(builder, options)

    def search_file(
        self, path: Union[str, Path], options: SearchOptions | None = None
    ) -> SearchStream:
        """Run the query document stored in *path*."""
        builder = QueryBuilder.from_file(path, timestamp_field=self.timestamp_field)
        return self.search(builder, options)

    def results(self, text: str, options: SearchOptions | None = None) -> List[Result]:
        """Convenience: free-text search drained into a list."""
        return self.simple_search(text, options).all()

    def _debug_for(self, options: SearchOptions) -> Optional[IO[str]]:
        if not options.query_debug:
            return None
        return self.debug_writer or sys.stderr
