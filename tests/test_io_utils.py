from prisoners_puzzle.experiments import SimulationResult
from prisoners_puzzle.io_utils import format_report, get_logger
from prisoners_puzzle.model import SimulationSpec


def _result(n_success, iterations):
    return SimulationResult(
        spec=SimulationSpec(prisoners=100, iterations=iterations),
        seed=0,
        n_success=n_success,
        n_chunks=1,
        runtime_s=0.0,
        exact_rate=0.3,
    )


def test_report_percentage_has_no_float_noise():
    lines = format_report(_result(290, 1000)).splitlines()
    assert lines == [
        "Prisoner's dilemma 100 prisoners, 1000 times",
        "Prisoners: 100, Trials: 1000",
        "Success rate: 29.0%",
    ]


def test_report_edge_rates():
    assert format_report(_result(0, 7)).endswith("Success rate: 0.0%")
    assert format_report(_result(7, 7)).endswith("Success rate: 100.0%")


def test_logger_is_configured_once():
    first = get_logger()
    second = get_logger()
    assert first is second
    assert len(first.handlers) == 1
    assert first.propagate is False
