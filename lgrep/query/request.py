"""Query forms and the request builder they are submitted through."""

import copy
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from lgrep.errors import QueryValidationError
from lgrep.utils.config import settings

DEBUG_PREFIX = "q> "


@dataclass(frozen=True)
class LuceneQuery:
    """A free-text expression handed to the engine's query-string parser."""

    expression: str

    def query_clause(self) -> Dict[str, Any]:
        return {"query_string": {"query": self.expression}}

    def to_dict(self) -> Dict[str, Any]:
        return {"query": self.query_clause()}


class DocumentQuery:
    """A structurally opaque JSON query document.

    The document is held either decoded (a mapping) or as its source text.
    Source text is decoded on first use; text that is not a JSON object
    raises ``QueryValidationError``.
    """

    def __init__(self, document: Optional[Mapping[str, Any]] = None, text: str | None = None):
        if (document is None) == (text is None):
            raise ValueError("DocumentQuery needs exactly one of document or text")
        self._document = dict(document) if document is not None else None
        self._text = text

    @property
    def text(self) -> str:
        """The document as it would be read from a file."""
        if self._text is not None:
            return self._text
        return json.dumps(self._document)

    def document(self) -> Dict[str, Any]:
        """Return a private copy of the decoded document."""
        if self._document is None:
            try:
                decoded = json.loads(self._text)
            except json.JSONDecodeError as exc:
                raise QueryValidationError(
                    f"Query document is not valid JSON: {exc}", cause=exc
                ) from exc
            if not isinstance(decoded, dict):
                raise QueryValidationError(
                    "Query document must be a JSON object, "
                    f"got {type(decoded).__name__}"
                )
            self._document = decoded
        return copy.deepcopy(self._document)

    def query_clause(self) -> Optional[Dict[str, Any]]:
        """The ``query`` part of the document, if it has one."""
        return self.document().get("query")

    def to_dict(self) -> Dict[str, Any]:
        return self.document()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocumentQuery):
            return NotImplemented
        return self.text == other.text

    def __repr__(self) -> str:
        return f"DocumentQuery({self.text[:60]!r})"


class SearchRequest:
    """Mutable builder for a single search submission.

    Options are applied onto it once; it then renders the request path and
    body.  A request belongs to one execution and is never reused.
    """

    def __init__(self, query, timestamp_field: str | None = None):
        self.query = query
        self.timestamp_field = timestamp_field or settings.timestamp_field
        self.indices: List[str] = []
        self.size: int | None = None
        self.sort: List[Dict[str, Any]] = []
        self.fields: List[str] = []

    # -- Builder ------------------------------------------------------------

    def set_size(self, size: int) -> "SearchRequest":
        self.size = size
        return self

    def add_indices(self, *names: str) -> "SearchRequest":
        for name in names:
            if name and name not in self.indices:
                self.indices.append(name)
        return self

    def sort_by_timestamp(self, ascending: bool) -> "SearchRequest":
        order = "asc" if ascending else "desc"
        self.sort = [{self.timestamp_field: {"order": order}}]
        return self

    def set_fields(self, fields) -> "SearchRequest":
        self.fields = list(fields)
        return self

    # -- Rendering ----------------------------------------------------------

    def path(self, endpoint: str = "_search") -> str:
        """URL path for *endpoint*, scoped to the selected indices."""
        if self.indices:
            return "/{}/{}".format(",".join(self.indices), endpoint)
        return f"/{endpoint}"

    def body(self) -> Dict[str, Any]:
        """The exact document that will be submitted to the search API."""
        body = self.query.to_dict()
        if self.size is not None:
            body["size"] = self.size
        if self.sort:
            body["sort"] = copy.deepcopy(self.sort)
        if self.fields:
            body["fields"] = list(self.fields)
        return body

    def validation_body(self) -> Optional[Dict[str, Any]]:
        """Body for the validate API, which only accepts the query clause."""
        clause = self.query.query_clause()
        if clause is None:
            return None
        return {"query": clause}

    def debug_json(self) -> str:
        """Render the outgoing request for humans, one ``q> `` line each."""
        try:
            rendered = json.dumps(self.body(), indent=2, sort_keys=True)
        except QueryValidationError:
            # Undecodable documents are shown as written.
            rendered = self.query.text
        target = self.path()
        lines = [f"{DEBUG_PREFIX}POST {target}"]
        lines.extend(DEBUG_PREFIX + line for line in rendered.splitlines())
        return "\n".join(lines)
