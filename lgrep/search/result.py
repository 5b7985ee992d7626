"""Result variants and the extractor that picks one per hit."""

import copy
import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Mapping, Optional

from lgrep.errors import MissingDocumentError
from lgrep.query.options import SearchOptions


@dataclass(frozen=True)
class Result:
    """Base for the three result shapes.

    Whatever the variant, ``as_dict`` gives a flat, string-keyed mapping
    that formatters can look fields up in.
    """

    kind: ClassVar[str] = "result"
    hit_id: Optional[str] = field(default=None, compare=False)

    def payload(self) -> Mapping[str, Any]:
        raise NotImplementedError

    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(dict(self.payload()))

    def __getitem__(self, key: str) -> Any:
        return self.payload()[key]

    def __contains__(self, key: object) -> bool:
        return key in self.payload()

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload().get(key, default)

    def to_json(self) -> str:
        return json.dumps(self.payload(), ensure_ascii=False, default=str)


@dataclass(frozen=True)
class RawResult(Result):
    """The whole hit envelope (metadata and source)."""

    kind: ClassVar[str] = "raw"
    hit: Mapping[str, Any] = field(default_factory=dict)

    def payload(self) -> Mapping[str, Any]:
        return self.hit


@dataclass(frozen=True)
class FieldResult(Result):
    """A field projection: field name to the list of values returned."""

    kind: ClassVar[str] = "fields"
    fields: Mapping[str, List[Any]] = field(default_factory=dict)

    def payload(self) -> Mapping[str, Any]:
        return self.fields

    def as_dict(self) -> Dict[str, Any]:
        # Single-valued fields are unwrapped for templating.
        flat: Dict[str, Any] = {}
        for name, values in self.fields.items():
            if isinstance(values, list) and len(values) == 1:
                flat[name] = copy.deepcopy(values[0])
            else:
                flat[name] = copy.deepcopy(values)
        return flat


@dataclass(frozen=True)
class SourceResult(Result):
    """The source document that was originally indexed."""

    kind: ClassVar[str] = "source"
    source: Mapping[str, Any] = field(default_factory=dict)

    def payload(self) -> Mapping[str, Any]:
        return self.source


def extract(hit: Mapping[str, Any], options: SearchOptions) -> Result:
    """Turn one engine hit into a Result.

    Precedence is fixed: raw result when asked for, then the field
    projection (if fields were requested and returned), then the source.
    An empty source counts as missing.
    """
    hit_id = hit.get("_id")
    if options.raw_result:
        return RawResult(hit_id=hit_id, hit=copy.deepcopy(dict(hit)))

    fields = hit.get("fields")
    if options.fields and fields:
        return FieldResult(hit_id=hit_id, fields=copy.deepcopy(dict(fields)))

    source = hit.get("_source")
    if source:
        return SourceResult(hit_id=hit_id, source=copy.deepcopy(source))

    raise MissingDocumentError(hit_id)
