"""Unit tests for the error taxonomy."""

import json

from lgrep.errors import (
    ConfigurationError,
    EmptyQueryError,
    ExecutionError,
    InputError,
    LGrepError,
    MissingDocumentError,
    Phase,
    QueryFileError,
    QueryValidationError,
    StreamConsumedError,
    UnsupportedQueryError,
    ZeroSizeError,
)


def test_phases():
    assert ConfigurationError("x").phase is Phase.CONFIG
    assert EmptyQueryError().phase is Phase.BUILD
    assert ZeroSizeError().phase is Phase.BUILD
    assert QueryValidationError("x").phase is Phase.VALIDATE
    assert ExecutionError("x").phase is Phase.EXECUTE
    assert StreamConsumedError().phase is Phase.EXECUTE
    assert MissingDocumentError("1").phase is Phase.EXTRACT


def test_input_errors_share_base():
    for err in (EmptyQueryError(), ZeroSizeError(), UnsupportedQueryError(1)):
        assert isinstance(err, InputError)
        assert isinstance(err, LGrepError)


def test_str_includes_phase():
    assert str(ExecutionError("boom")) == "[execute] boom"


def test_phase_override():
    assert LGrepError("x", phase=Phase.EXTRACT).phase is Phase.EXTRACT


def test_cause_chained():
    cause = OSError("refused")
    err = ExecutionError("failed", cause=cause)
    assert err.__cause__ is cause
    assert err.to_dict()["cause"] == repr(cause)


def test_to_json():
    payload = json.loads(ZeroSizeError(0).to_json())
    assert payload == {
        "error": "ZeroSizeError",
        "phase": "build",
        "message": "Search size is 0, not submitting.",
        "detail": {"size": 0},
    }


def test_unsupported_names_type():
    assert "float" in UnsupportedQueryError(1.5).message


def test_validation_response_default():
    assert QueryValidationError("x").response == {}


def test_caller_detail_merged_with_own():
    assert ZeroSizeError(-1, detail={"source": "cli"}).detail == {"size": -1, "source": "cli"}
    assert UnsupportedQueryError(1.5, detail={"hint": "use a dict"}).detail == {
        "type": "float",
        "hint": "use a dict",
    }
    assert QueryFileError("q.json", detail={"errno": 2}).detail == {"path": "q.json", "errno": 2}
    assert MissingDocumentError("7", detail={"index": "logs"}).detail == {"id": "7", "index": "logs"}
