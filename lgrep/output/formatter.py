"""Render results as text lines.

Formats are a list of whitespace separated tokens.  A token starting with
``.`` looks a field up in the result (``.a.b`` descends into nested
objects); any other token is copied as is.  This is a field selector, not a
template language.
"""

import json
from typing import Any, Iterable, List, Mapping

DEFAULT_FORMAT = ".message"
STDLINE_FORMAT = ".host .service .message"
MISSING = "<no value>"


def lookup(doc: Mapping[str, Any], path: str) -> Any:
    """Return the value at dotted *path* in *doc*, or ``MISSING``."""
    # A literal key containing dots wins over descending.
    if path in doc:
        return doc[path]
    current: Any = doc
    for part in path.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return MISSING
    return current


def render_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return json.dumps(value, ensure_ascii=False, default=str)


def columns(result, fmt: str = DEFAULT_FORMAT) -> List[str]:
    """Render *result* as one cell per format token."""
    doc = result.as_dict()
    cells = []
    for token in fmt.split():
        if token.startswith(".") and len(token) > 1:
            cells.append(render_value(lookup(doc, token[1:])))
        else:
            cells.append(token)
    return cells


def format_result(result, fmt: str = DEFAULT_FORMAT) -> str:
    """Render one result (anything with ``as_dict()``) with *fmt*."""
    return " ".join(columns(result, fmt))


def format_results(results: Iterable, fmt: str = DEFAULT_FORMAT) -> List[str]:
    return [format_result(r, fmt) for r in results]


def raw_lines(results: Iterable) -> List[str]:
    """One compact JSON document per result."""
    return [r.to_json() for r in results]


def tabulate(rows: List[List[str]]) -> List[str]:
    """Pad every column to its widest cell."""
    if not rows:
        return []
    widths: List[int] = []
    for row in rows:
        for i, cell in enumerate(row):
            if i == len(widths):
                widths.append(0)
            widths[i] = max(widths[i], len(cell))
    return [
        "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip()
        for row in rows
    ]


def tabulate_results(results: Iterable, fmt: str = DEFAULT_FORMAT) -> List[str]:
    return tabulate([columns(r, fmt) for r in results])
