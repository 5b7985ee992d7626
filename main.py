"""CLI entry point for lgrep."""

import argparse
import sys

from lgrep.client import LGrep
from lgrep.errors import (
    ConfigurationError,
    ConflictingQueryError,
    ExtractionError,
    InputError,
    LGrepError,
    MissingQueryError,
    QueryValidationError,
)
from lgrep.output.formatter import (
    STDLINE_FORMAT,
    format_result,
    raw_lines,
    tabulate_results,
)
from lgrep.query.options import SearchOptions, SortTime
from lgrep.utils.config import settings
from lgrep.utils.logger import get_logger, set_level

log = get_logger("lgrep.cli")

EXIT_CONFIG = 1
EXIT_INPUT = 3
EXIT_VALIDATION = 4
EXIT_EXECUTION = 5
EXIT_EXTRACTION = 6


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lgrep",
        usage="lgrep [options] QUERY",
        description="Search logs stored in Elasticsearch",
    )
    parser.add_argument("query", nargs="*", help="Lucene query string")
    parser.add_argument("-e", "--endpoint", default=settings.endpoint,
                        help="Elasticsearch endpoint (env LGREP_ENDPOINT)")
    parser.add_argument("-D", "--debug", action="store_true",
                        help="Debug lgrep run with verbose logging")

    parser.add_argument("-n", "--size", type=int, default=settings.default_size,
                        help="Number of results to be returned")
    parser.add_argument("-f", "--format", default=None,
                        help="Fields to print, ex: '.host .message'")
    parser.add_argument("--ff", "--stdline", dest="stdline", action="store_true",
                        help=f"Format lines with common format '{STDLINE_FORMAT}'")
    parser.add_argument("-j", "--raw-json", dest="raw_json", action="store_true",
                        help="Output each result as json (1 line per result)")
    parser.add_argument("-T", "--tabulate", action="store_true",
                        help="Tabulate the data into columns")

    parser.add_argument("--QD", "--query-debug", dest="query_debug", action="store_true",
                        help=argparse.SUPPRESS)
    parser.add_argument("--Qi", "--query-index", dest="query_index", default="",
                        help="Query this index, if not provided - all indices")
    parser.add_argument("--Qc", "--query-fields", dest="query_fields", default="",
                        help="Fields to be retrieved (ex: field1,field2)")
    parser.add_argument("--Qf", "--query-file", dest="query_file", default=None,
                        help="Raw elasticsearch json query to submit")
    parser.add_argument("--sort", default="desc", choices=["asc", "desc", "none"],
                        help="Sort by timestamp")
    parser.add_argument("--raw-result", dest="raw_result", action="store_true",
                        help="Return whole hit envelopes instead of documents")
    parser.add_argument("--skip-validate", dest="skip_validate", action="store_true",
                        help="Do not ask the engine to validate the query first")
    return parser


def options_from_args(args: argparse.Namespace) -> SearchOptions:
    fields = tuple(f.strip() for f in args.query_fields.split(",") if f.strip())
    return SearchOptions(
        size=args.size,
        index=args.query_index,
        sort_time=SortTime.parse(args.sort),
        fields=fields,
        raw_result=args.raw_result,
        query_debug=args.query_debug,
        query_skip_validate=args.skip_validate,
    )


def resolve_format(args: argparse.Namespace) -> str:
    if args.stdline:
        if args.format:
            log.warning("You've provided a format (-f) and asked for the stdline "
                        "format (--ff), using stdline!")
        return STDLINE_FORMAT
    return args.format or settings.default_format


def run_query(args: argparse.Namespace, out=None) -> int:
    """Run the search described by *args* and print results to *out*."""
    out = out or sys.stdout
    query = " ".join(args.query).strip()

    if args.query_file and query:
        raise ConflictingQueryError()
    if not args.query_file and not query:
        raise MissingQueryError()

    options = options_from_args(args)
    fmt = resolve_format(args)

    with LGrep(args.endpoint) as lg:
        if args.query_file:
            stream = lg.search_file(args.query_file, options)
        else:
            stream = lg.simple_search(query, options)

        if args.raw_json:
            lines = raw_lines(stream)
        elif args.tabulate:
            lines = tabulate_results(stream, fmt)
        else:
            lines = (format_result(r, fmt) for r in stream)

        count = 0
        for line in lines:
            print(line, file=out)
            count += 1

    if count == 0:
        log.warning("0 results returned")
    return 0


def exit_code_for(exc: LGrepError) -> int:
    if isinstance(exc, ConfigurationError):
        return EXIT_CONFIG
    if isinstance(exc, InputError):
        return EXIT_INPUT
    if isinstance(exc, QueryValidationError):
        return EXIT_VALIDATION
    if isinstance(exc, ExtractionError):
        return EXIT_EXTRACTION
    return EXIT_EXECUTION


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        set_level("DEBUG")

    try:
        return run_query(args)
    except LGrepError as exc:
        log.debug("Search failed: %s", exc.to_json())
        print(f"Error: {exc}", file=sys.stderr)
        return exit_code_for(exc)


if __name__ == "__main__":
    sys.exit(main())
