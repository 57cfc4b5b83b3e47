import pytest

from dbal_adapter.db.helpers import ParameterType
from dbal_adapter.errors import DBALError
from dbal_adapter.events import (
    EventAfterPayload,
    EventBeforeEventPayload,
    EventBeforePayload,
    EventErrorPayload,
    serialize_payload,
)
from dbal_adapter.performance import SqlPerformance


def test_before_payload_serializes_base_fields_only():
    payload = EventBeforePayload("SELECT ?", [1], [ParameterType.INTEGER])
    assert serialize_payload(payload) == {
        "sentence": "SELECT ?",
        "params": [1],
        "types": ["integer"],
    }
    assert payload.kind == "before"


def test_after_payload_adds_performance_but_not_result():
    perf = SqlPerformance(runtime=0.25, memory=2048)
    payload = EventAfterPayload("SELECT 1", [], [], [{"one": 1}], perf)

    data = serialize_payload(payload)
    assert set(data) == {"sentence", "params", "types", "performance"}
    assert data["performance"] == perf.to_dict()
    assert payload.result == [{"one": 1}]
    assert payload.kind == "after"


def test_error_payload_adds_error():
    err = DBALError("no such table: x", code=1)
    payload = EventErrorPayload("SELECT * FROM x", {"id": 1}, {}, err)

    data = serialize_payload(payload)
    assert set(data) == {"sentence", "params", "types", "error"}
    assert data["params"] == {"id": 1}
    assert data["error"] == {"type": "DBALError", "message": "no such table: x", "code": 1}
    assert payload.kind == "error"


def test_old_before_payload_name_is_the_same_class():
    assert EventBeforeEventPayload is EventBeforePayload


def test_params_and_types_are_read_only_copies():
    params = ["ada"]
    named = {"id": 1}
    positional = EventBeforePayload("SELECT ?", params, ["string"])
    by_name = EventBeforePayload("SELECT :id", named, {"id": "integer"})

    params.append("grace")
    named["id"] = 2
    assert positional.params == ("ada",)
    assert by_name.params["id"] == 1

    with pytest.raises(TypeError):
        positional.params[0] = "linus"
    with pytest.raises(TypeError):
        by_name.params["id"] = 3
    with pytest.raises(TypeError):
        by_name.types["id"] = "string"


def test_missing_params_become_empty_tuples():
    payload = EventBeforePayload("SELECT 1", None, None)
    assert payload.params == ()
    assert payload.types == ()
