"""Dry-run validation of a request before it is executed."""

import json
from typing import IO, Any, Dict, Optional

from lgrep.engine.client import EngineClient, error_reason
from lgrep.errors import ExecutionError, Phase, QueryValidationError
from lgrep.query.request import DEBUG_PREFIX, SearchRequest
from lgrep.utils.logger import get_logger

log = get_logger(__name__)

VALIDATE_ENDPOINT = "_validate/query"


class Validator:
    """Asks the engine whether a request's query is well formed.

    A passing validation does not guarantee the search itself succeeds;
    the engine may still fail for unrelated reasons at execution time.
    """

    def __init__(self, client: EngineClient):
        self.client = client

    def validate(self, request: SearchRequest, debug: Optional[IO[str]] = None) -> Dict[str, Any]:
        """Return the engine's validation response or raise on a bad query.

        When *debug* is given, a failing validation response is written to
        it before the error is raised.
        """
        # Decoding happens locally; a document that is not JSON never
        # reaches the engine.
        body = request.validation_body()

        try:
            response = self.client.validate(
                request.path(VALIDATE_ENDPOINT), body, params={"explain": "true"}
            )
        except ExecutionError as exc:
            # Transport failures stay ExecutionError but belong to validation.
            exc.phase = Phase.VALIDATE
            raise
        if response.get("valid") is True:
            log.debug("Query validated")
            return response

        reason = _validation_reason(response)
        log.debug("Query failed validation: %s", reason)
        if debug is not None:
            dump_response(response, debug)
        raise QueryValidationError(
            f"Query failed validation: {reason}", response=response
        )


def dump_response(response: Dict[str, Any], wr: IO[str]) -> None:
    """Write a validation response in the same ``q> `` style as queries."""
    rendered = json.dumps(response, indent=2, sort_keys=True)
    for line in rendered.splitlines():
        wr.write(f"{DEBUG_PREFIX}{line}\n")


def _validation_reason(response: Dict[str, Any]) -> str:
    if response.get("error"):
        return error_reason(response)
    for explanation in response.get("explanations") or []:
        if isinstance(explanation, dict) and explanation.get("error"):
            return str(explanation["error"])
    return "query is not valid"
