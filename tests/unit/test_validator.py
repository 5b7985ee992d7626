"""Unit tests for the Validator."""

import io
from unittest.mock import MagicMock

import pytest

from lgrep.engine.validator import Validator, dump_response
from lgrep.errors import ExecutionError, Phase, QueryValidationError
from lgrep.query.builder import QueryBuilder
from lgrep.query.options import SearchOptions


def _validator(response):
    client = MagicMock()
    client.validate.return_value = response
    return Validator(client), client


def test_valid_query_returns_response():
    validator, client = _validator({"valid": True, "explanations": []})
    request = QueryBuilder.from_text("error").build(SearchOptions(index="logs"))
    assert validator.validate(request) == {"valid": True, "explanations": []}
    client.validate.assert_called_once_with(
        "/logs/_validate/query",
        {"query": {"query_string": {"query": "error"}}},
        params={"explain": "true"},
    )


def test_invalid_query_raises_with_response():
    response = {
        "valid": False,
        "explanations": [{"index": "logs", "valid": False, "error": "Cannot parse 'a AND'"}],
    }
    validator, _ = _validator(response)
    request = QueryBuilder.from_text("a AND").build()
    with pytest.raises(QueryValidationError) as excinfo:
        validator.validate(request)
    assert excinfo.value.response == response
    assert excinfo.value.phase is Phase.VALIDATE
    assert "Cannot parse" in excinfo.value.message


def test_engine_error_response_is_invalid():
    response = {"error": {"root_cause": [{"reason": "request does not support [size]"}]}}
    validator, _ = _validator(response)
    with pytest.raises(QueryValidationError, match="does not support"):
        validator.validate(QueryBuilder.from_raw({"query": {"match_all": {}}}).build())


def test_transport_failure_keeps_class_but_takes_validate_phase():
    validator, client = _validator(None)
    client.validate.side_effect = ExecutionError("Request failed: connection refused")
    with pytest.raises(ExecutionError) as excinfo:
        validator.validate(QueryBuilder.from_text("error").build())
    assert not isinstance(excinfo.value, QueryValidationError)
    assert excinfo.value.phase is Phase.VALIDATE


def test_debug_writer_gets_response_on_failure():
    buf = io.StringIO()
    validator, _ = _validator({"valid": False})
    with pytest.raises(QueryValidationError):
        validator.validate(QueryBuilder.from_text("x").build(), debug=buf)
    assert 'q>   "valid": false' in buf.getvalue().splitlines()


def test_debug_writer_untouched_on_success():
    buf = io.StringIO()
    validator, _ = _validator({"valid": True})
    validator.validate(QueryBuilder.from_text("x").build(), debug=buf)
    assert buf.getvalue() == ""


def test_invalid_json_document_fails_without_network():
    validator, client = _validator({"valid": True})
    request = QueryBuilder.from_raw(b'{"query": {"match": ').build()
    with pytest.raises(QueryValidationError, match="not valid JSON"):
        validator.validate(request)
    client.validate.assert_not_called()


def test_document_without_query_sends_no_body():
    validator, client = _validator({"valid": True})
    validator.validate(QueryBuilder.from_raw({"size": 1}).build())
    assert client.validate.call_args.args[1] is None


def test_dump_response_prefixes_lines():
    buf = io.StringIO()
    dump_response({"valid": True}, buf)
    assert buf.getvalue().splitlines() == ["q> {", 'q>   "valid": true', "q> }"]
