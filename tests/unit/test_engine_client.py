"""Unit tests for the HTTP engine client (httpx mocked with respx)."""

import json

import httpx
import pytest
import respx

from lgrep.engine.client import EngineClient, error_reason, parse_endpoint
from lgrep.errors import ConfigurationError, ExecutionError, Phase

ENDPOINT = "http://es.test:9200/"


class TestParseEndpoint:
    def test_valid(self):
        assert parse_endpoint("http://localhost:9200") == "http://localhost:9200/"

    def test_keeps_path_prefix(self):
        assert parse_endpoint("https://proxy.test/es/") == "https://proxy.test/es/"

    @pytest.mark.parametrize("endpoint", [
        "",
        "   ",
        "localhost:9200",
        "ftp://localhost/",
        "http://",
        "http://localhost:notaport/",
    ])
    def test_invalid(self, endpoint):
        with pytest.raises(ConfigurationError) as excinfo:
            parse_endpoint(endpoint)
        assert excinfo.value.phase is Phase.CONFIG

    def test_client_construction_fails_on_bad_endpoint(self):
        with pytest.raises(ConfigurationError):
            EngineClient("not a url")


@respx.mock
def test_search_posts_body():
    route = respx.post(f"{ENDPOINT}logs/_search").mock(
        return_value=httpx.Response(200, json={"hits": {"hits": []}})
    )
    with EngineClient(ENDPOINT) as client:
        resp = client.search("/logs/_search", {"query": {"match_all": {}}, "size": 1})
    assert resp == {"hits": {"hits": []}}
    sent = route.calls.last.request
    assert json.loads(sent.content) == {"query": {"match_all": {}}, "size": 1}
    assert sent.headers["content-type"] == "application/json"


@respx.mock
def test_validate_sends_params():
    route = respx.get(f"{ENDPOINT}_validate/query").mock(
        return_value=httpx.Response(200, json={"valid": True})
    )
    with EngineClient(ENDPOINT) as client:
        resp = client.validate("/_validate/query", {"query": {}}, params={"explain": "true"})
    assert resp == {"valid": True}
    assert route.calls.last.request.url.params["explain"] == "true"


@respx.mock
def test_validate_returns_400_body():
    payload = {"error": {"root_cause": [{"reason": "Unexpected character"}]}, "status": 400}
    respx.get(f"{ENDPOINT}_validate/query").mock(return_value=httpx.Response(400, json=payload))
    with EngineClient(ENDPOINT) as client:
        assert client.validate("/_validate/query", None) == payload


@respx.mock
def test_http_error_status_is_execution_error():
    payload = {"error": {"root_cause": [{"reason": "no such index [nope]"}]}, "status": 404}
    respx.post(f"{ENDPOINT}nope/_search").mock(return_value=httpx.Response(404, json=payload))
    with EngineClient(ENDPOINT) as client:
        with pytest.raises(ExecutionError) as excinfo:
            client.search("/nope/_search", {})
    assert excinfo.value.status_code == 404
    assert "no such index" in excinfo.value.message
    assert excinfo.value.phase is Phase.EXECUTE


@respx.mock
def test_non_json_error_body():
    respx.post(f"{ENDPOINT}_search").mock(return_value=httpx.Response(502, text="Bad Gateway"))
    with EngineClient(ENDPOINT) as client:
        with pytest.raises(ExecutionError) as excinfo:
            client.search("/_search", {})
    assert excinfo.value.status_code == 502


@respx.mock
def test_undecodable_success_body():
    respx.post(f"{ENDPOINT}_search").mock(return_value=httpx.Response(200, text="<html>"))
    with EngineClient(ENDPOINT) as client:
        with pytest.raises(ExecutionError, match="decode"):
            client.search("/_search", {})


@respx.mock
def test_non_object_envelope():
    respx.post(f"{ENDPOINT}_search").mock(return_value=httpx.Response(200, json=[1, 2]))
    with EngineClient(ENDPOINT) as client:
        with pytest.raises(ExecutionError, match="envelope"):
            client.search("/_search", {})


@respx.mock
def test_connect_error():
    respx.post(f"{ENDPOINT}_search").mock(side_effect=httpx.ConnectError("refused"))
    with EngineClient(ENDPOINT) as client:
        with pytest.raises(ExecutionError) as excinfo:
            client.search("/_search", {})
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@respx.mock
def test_timeout():
    respx.post(f"{ENDPOINT}_search").mock(side_effect=httpx.ReadTimeout("slow"))
    with EngineClient(ENDPOINT, timeout=0.5) as client:
        with pytest.raises(ExecutionError, match="timed out after 0.5s"):
            client.search("/_search", {})


@respx.mock
def test_ping():
    respx.get(ENDPOINT).mock(return_value=httpx.Response(200, json={"version": {}}))
    with EngineClient(ENDPOINT) as client:
        assert client.ping() is True


@respx.mock
def test_ping_unreachable():
    respx.get(ENDPOINT).mock(side_effect=httpx.ConnectError("refused"))
    with EngineClient(ENDPOINT) as client:
        assert client.ping() is False


class TestErrorReason:
    def test_root_cause(self):
        assert error_reason({"error": {"root_cause": [{"reason": "bad"}]}}) == "bad"

    def test_reason(self):
        assert error_reason({"error": {"reason": "worse", "root_cause": []}}) == "worse"

    def test_string_error(self):
        assert error_reason({"error": "plain"}) == "plain"

    def test_no_error(self):
        assert error_reason({}) == "unknown error"
