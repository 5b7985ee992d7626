"""Single-pass execution handle for one search request.

State flows:

  BUILT --first pull--> EXECUTING --all hits yielded--> EXHAUSTED
                            |
                            +--engine/transport/extract error--> FAILED

EXHAUSTED and FAILED are terminal; searching again means building a new
request and a new stream.
"""

from enum import Enum
from typing import IO, Any, Dict, Iterator, List, Optional

from lgrep.engine.client import EngineClient
from lgrep.errors import (
    ExecutionError,
    ExtractionError,
    LGrepError,
    StreamConsumedError,
    ZeroSizeError,
)
from lgrep.query.options import DEFAULT_SPEC, SearchOptions
from lgrep.query.request import SearchRequest
from lgrep.search.result import Result, extract
from lgrep.utils.logger import get_logger

log = get_logger(__name__)


class StreamState(str, Enum):
    BUILT = "built"
    EXECUTING = "executing"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


def require_size(options: SearchOptions) -> None:
    """Raise ``ZeroSizeError`` unless *options* asks for at least one hit."""
    if options.size <= 0:
        raise ZeroSizeError(options.size)


class SearchStream:
    """Lazy iterator of ``Result`` values for one executed request."""

    def __init__(
        self,
        client: EngineClient,
        request: SearchRequest,
        options: SearchOptions | None = None,
        debug: Optional[IO[str]] = None,
    ):
        self.client = client
        self.request = request
        self.options = options if options is not None else DEFAULT_SPEC
        self.debug = debug
        self.state = StreamState.BUILT
        self.error: LGrepError | None = None
        self.total: int | None = None
        self.took: int | None = None
        self._hits: Iterator[Dict[str, Any]] = iter(())
        self._yielded = 0

    def __repr__(self) -> str:
        return f"SearchStream(state={self.state.value}, yielded={self._yielded})"

    # -- Iterator protocol --------------------------------------------------

    def __iter__(self) -> "SearchStream":
        return self

    def __next__(self) -> Result:
        if self.state is StreamState.BUILT:
            self._execute()
        if self.state is StreamState.FAILED:
            raise StreamConsumedError(cause=self.error)
        if self.state is StreamState.EXHAUSTED:
            raise StopIteration

        if self._yielded >= self.options.size:
            self._finish()
            raise StopIteration
        try:
            hit = next(self._hits)
        except StopIteration:
            self._finish()
            raise

        try:
            result = extract(hit, self.options)
        except LGrepError as exc:
            self._fail(exc)
            raise
        except Exception as exc:
            error = ExtractionError(f"Could not extract hit: {exc}", cause=exc)
            self._fail(error)
            raise error from exc
        self._yielded += 1
        return result

    def all(self) -> List[Result]:
        """Drain the stream into a list, preserving yield order."""
        return list(self)

    @property
    def done(self) -> bool:
        return self.state in (StreamState.EXHAUSTED, StreamState.FAILED)

    # -- Internals ----------------------------------------------------------

    def _execute(self) -> None:
        try:
            require_size(self.options)
        except ZeroSizeError as exc:
            self._fail(exc)
            raise

        self.state = StreamState.EXECUTING
        log.debug("Submitting search request..")
        try:
            if self.debug is not None:
                self.debug.write(self.request.debug_json() + "\n")
            response = self.client.search(self.request.path(), self.request.body())
            hits = _hits_of(response)
        except ExecutionError as exc:
            self._fail(exc)
            raise
        except LGrepError as exc:
            error = ExecutionError(f"Search returned with error: {exc.message}", cause=exc)
            self._fail(error)
            raise error from exc
        except Exception as exc:
            error = ExecutionError(f"Search returned with error: {exc}", cause=exc)
            self._fail(error)
            raise error from exc

        self.took = response.get("took")
        total = response.get("hits", {}).get("total")
        self.total = total.get("value") if isinstance(total, dict) else total
        log.debug("Search returned %d hits (total=%s)", len(hits), self.total)
        self._hits = iter(hits)

    def _finish(self) -> None:
        self.state = StreamState.EXHAUSTED
        self._hits = iter(())

    def _fail(self, error: LGrepError) -> None:
        self.state = StreamState.FAILED
        self.error = error
        self._hits = iter(())


def _hits_of(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return the hit list from a search response envelope."""
    shards = response.get("_shards") or {}
    if shards.get("failed") and not shards.get("successful"):
        raise ExecutionError(
            "All shards failed", detail={"failures": shards.get("failures", [])}
        )
    hits = response.get("hits")
    if not isinstance(hits, dict) or not isinstance(hits.get("hits"), list):
        raise ExecutionError("Search response has no hits envelope")
    if any(not isinstance(hit, dict) for hit in hits["hits"]):
        raise ExecutionError("Search response has a malformed hit")
    return hits["hits"]
