"""Output module -- turns results into text lines."""

from lgrep.output.formatter import (
    DEFAULT_FORMAT,
    STDLINE_FORMAT,
    format_result,
    format_results,
    raw_lines,
    tabulate,
    tabulate_results,
)

__all__ = [
    "DEFAULT_FORMAT",
    "STDLINE_FORMAT",
    "format_result",
    "format_results",
    "raw_lines",
    "tabulate",
    "tabulate_results",
]
