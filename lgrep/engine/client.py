"""HTTP transport to the search engine (Elasticsearch-compatible REST API)."""

import json
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import httpx

from lgrep.errors import ConfigurationError, ExecutionError
from lgrep.utils.config import settings
from lgrep.utils.logger import get_logger

log = get_logger(__name__)

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


def parse_endpoint(endpoint: str) -> str:
    """Return *endpoint* normalized, or raise ``ConfigurationError``."""
    if not endpoint or not endpoint.strip():
        raise ConfigurationError("Endpoint must be set")
    try:
        parts = urlsplit(endpoint.strip())
        # Accessing .port validates the port number.
        parts.port
    except ValueError as exc:
        raise ConfigurationError(
            f"Endpoint must be a url (ex: http://localhost:9200/): {endpoint}", cause=exc
        ) from exc
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise ConfigurationError(
            f"Endpoint must be a url (ex: http://localhost:9200/): {endpoint}"
        )
    return endpoint.strip().rstrip("/") + "/"


class EngineClient:
    """Thin wrapper around ``httpx.Client`` that speaks to one engine.

    The client may be shared by concurrent streams; it holds no per-search
    state.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.endpoint = parse_endpoint(endpoint or settings.endpoint)
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._client = httpx.Client(
            base_url=self.endpoint,
            timeout=self.timeout,
            headers=JSON_HEADERS,
            transport=transport,
        )

    def __enter__(self) -> "EngineClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # -- Requests -----------------------------------------------------------

    def search(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST a search body and return the decoded response envelope."""
        return self._request("POST", path, body=body)

    def validate(
        self,
        path: str,
        body: Optional[Dict[str, Any]],
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Ask the validate API about *body* and return its response."""
        return self._request("GET", path, body=body, params=params, accept_error=True)

    def ping(self) -> bool:
        """Return True when the engine answers its root endpoint."""
        try:
            resp = self._client.get("/")
        except httpx.HTTPError:
            return False
        return resp.is_success

    # -- Internals ----------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        accept_error: bool = False,
    ) -> Dict[str, Any]:
        content = json.dumps(body) if body is not None else None
        log.debug("%s %s", method, path)
        try:
            resp = self._client.request(method, path.lstrip("/"), content=content, params=params)
        except httpx.TimeoutException as exc:
            raise ExecutionError(
                f"Request timed out after {self.timeout}s: {method} {path}", cause=exc
            ) from exc
        except httpx.HTTPError as exc:
            raise ExecutionError(f"Request failed: {method} {path}: {exc}", cause=exc) from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            if not resp.is_success:
                raise ExecutionError(
                    f"HTTP {resp.status_code} from {method} {path}",
                    status_code=resp.status_code,
                    cause=exc,
                ) from exc
            raise ExecutionError(
                f"Could not decode response from {method} {path}",
                status_code=resp.status_code,
                cause=exc,
            ) from exc

        if not isinstance(payload, dict):
            raise ExecutionError(
                f"Unexpected response envelope from {method} {path}",
                status_code=resp.status_code,
            )
        if not resp.is_success and not (accept_error and resp.status_code == 400):
            raise ExecutionError(
                f"HTTP {resp.status_code} from {method} {path}: {error_reason(payload)}",
                status_code=resp.status_code,
                detail={"response": payload},
            )
        return payload


def error_reason(payload: Dict[str, Any]) -> str:
    """Pull a readable reason out of an engine error response."""
    error = payload.get("error")
    if isinstance(error, dict):
        root = error.get("root_cause") or []
        if root and isinstance(root[0], dict) and root[0].get("reason"):
            return root[0]["reason"]
        return error.get("reason") or error.get("type") or json.dumps(error)
    if error:
        return str(error)
    return "unknown error"
