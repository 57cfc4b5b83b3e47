import time

import pytest

from dbal_adapter.performance import SqlPerformance, format_runtime, timed


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0.0005, "500 µs"),
        (0.5, "500.00 ms"),
        (0.0123, "12.30 ms"),
        (1.5, "1.500 s"),
        (125.0, "2m 5.0s"),
        (-0.2, "0 µs"),
    ],
)
def test_format_runtime_thresholds(seconds, expected):
    assert format_runtime(seconds) == expected


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0.0009996, "1.00 ms"),
        (0.9999996, "1.000 s"),
        (59.9996, "1m 0.0s"),
        (119.97, "2m 0.0s"),
    ],
)
def test_format_runtime_rounds_before_picking_the_unit(seconds, expected):
    assert format_runtime(seconds) == expected


def test_pretty_runtime_is_deterministic():
    first = SqlPerformance.from_runtime(0.5)
    second = SqlPerformance.from_runtime(0.5)
    assert first.pretty_runtime == second.pretty_runtime == "500.00 ms"


def test_from_runtime_samples_memory_and_clamps_negative():
    perf = SqlPerformance.from_runtime(-1.0)
    assert perf.runtime == 0.0
    assert isinstance(perf.memory, int)
    assert perf.memory > 0


def test_performance_is_immutable():
    perf = SqlPerformance(runtime=0.1, memory=10)
    with pytest.raises(AttributeError):
        perf.runtime = 2.0


def test_to_dict():
    perf = SqlPerformance(runtime=2.0, memory=1024)
    assert perf.to_dict() == {
        "runtime": 2.0,
        "memory": 1024,
        "pretty_runtime": "2.000 s",
    }


def test_timed_returns_result_and_elapsed():
    result, elapsed = timed(lambda x: time.sleep(0.01) or x * 2, 21)
    assert result == 42
    assert elapsed >= 0.005
