from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from .experiments import SimulationResult


def get_logger(*, level: int = logging.INFO) -> logging.Logger:
    """
    Configure and return the diagnostics logger.

    Logs go to stderr only so stdout carries nothing but the report.
    """
    logger = logging.getLogger("prisoners_puzzle")
    logger.setLevel(level)

    # Avoid duplicate handlers if called multiple times in-process.
    if getattr(logger, "_configured", False):
        return logger

    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(fmt)

    logger.addHandler(sh)
    logger.propagate = False
    logger._configured = True  # type: ignore[attr-defined]
    return logger


def format_report(result: SimulationResult) -> str:
    spec = result.spec
    return "\n".join(
        [
            f"Prisoner's dilemma {spec.prisoners} prisoners, {spec.iterations} times",
            f"Prisoners: {spec.prisoners}, Trials: {spec.iterations}",
            f"Success rate: {result.n_success * 100.0 / spec.iterations}%",
        ]
    )


def format_comparison(results: list[SimulationResult]) -> str:
    """One row per strategy, simulated next to exact probability."""
    df = pd.DataFrame(
        [
            {
                "strategy": r.spec.strategy,
                "prisoners": r.spec.prisoners,
                "trials": r.spec.iterations,
                "max_probes": r.spec.budget,
                "success_rate_pct": r.success_rate * 100.0,
                "exact_pct": r.exact_rate * 100.0,
            }
            for r in results
        ]
    )
    return df.to_string(index=False)


def format_sweep_table(summary: pd.DataFrame) -> str:
    if summary.empty:
        return "(no sweep points)"
    df = summary.copy()
    for col in ("mean_rate", "std_rate", "exact_rate"):
        df[col] = (df[col] * 100.0).round(3)
    df = df.rename(
        columns={
            "mean_rate": "mean_pct",
            "std_rate": "std_pct",
            "exact_rate": "exact_pct",
        }
    )
    return df.to_string(index=False)
