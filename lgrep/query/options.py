"""Search options -- size, index selection, sort and projection for one search."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple


class SortTime(Enum):
    """Sort-by-timestamp direction.  ``UNSET`` leaves ordering to the engine."""

    UNSET = "unset"
    ASCENDING = "asc"
    DESCENDING = "desc"

    @classmethod
    def parse(cls, value: str) -> "SortTime":
        """Map user input (``asc``, ``desc``, ``none`` ...) onto a member."""
        normalized = (value or "").strip().lower()
        aliases = {
            "": cls.UNSET,
            "none": cls.UNSET,
            "unset": cls.UNSET,
            "asc": cls.ASCENDING,
            "ascending": cls.ASCENDING,
            "desc": cls.DESCENDING,
            "descending": cls.DESCENDING,
        }
        if normalized not in aliases:
            raise ValueError(f"Unknown sort direction: {value!r}")
        return aliases[normalized]


@dataclass(frozen=True)
class SearchOptions:
    """Options applied to a search request.

    ``size == 0`` means "do not execute", it is never read as "unlimited".
    ``index`` and ``indices`` are both applied when both are set.
    """

    size: int = 100
    index: str = ""
    indices: Tuple[str, ...] = ()
    sort_time: SortTime = SortTime.DESCENDING
    fields: Tuple[str, ...] = ()
    raw_result: bool = False
    query_debug: bool = False
    query_skip_validate: bool = False

    def __post_init__(self):
        # Accept lists from callers but keep the instance hashable/immutable.
        object.__setattr__(self, "indices", tuple(self.indices))
        object.__setattr__(self, "fields", tuple(f for f in self.fields if f))

    def with_changes(self, **changes) -> "SearchOptions":
        """Return a copy with *changes* applied; this instance is untouched."""
        return replace(self, **changes)

    def apply(self, request) -> None:
        """Apply size, index selection, sort and fields to *request*, in order.

        Only fields that are set are applied.  Nothing is validated here:
        bad index or field names surface when the request executes.
        """
        if self.size != 0:
            request.set_size(self.size)
        if self.index:
            request.add_indices(self.index)
        if self.indices:
            request.add_indices(*self.indices)
        if self.sort_time is not SortTime.UNSET:
            request.sort_by_timestamp(ascending=self.sort_time is SortTime.ASCENDING)
        if self.fields:
            request.set_fields(self.fields)


DEFAULT_SPEC = SearchOptions(size=100, sort_time=SortTime.DESCENDING)
