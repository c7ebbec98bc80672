from __future__ import annotations

"""
Sanity-check / validation script.

Compares three views of the loop strategy for small prisoner counts:
exhaustive enumeration of every permutation, the closed-form probability,
and a seeded Monte Carlo run. Then checks the N=100 regime against
1 - ln(2) and the naive strategy against its closed form.

Prints to console only.
"""

import math

from . import config
from .experiments import run_simulation
from .model import (
    SimulationSpec,
    enumerate_loop_success_probability,
    exact_success_probability,
)


def _pct(x: float) -> str:
    return f"{100.0 * x:.2f}%"


def main() -> None:
    seed = config.BASE_SEED
    iterations = config.VALIDATION_ITERATIONS

    # ---- Exact enumeration vs closed form vs Monte Carlo
    print("[VALIDATION] loop strategy, small N (enumeration | closed form | simulated)")
    mismatches = 0
    for n in range(1, config.ENUMERATION_MAX_N + 1):
        enumerated = enumerate_loop_success_probability(n)
        closed = exact_success_probability(n, "loop")
        sim = run_simulation(SimulationSpec(prisoners=n, iterations=iterations, strategy="loop"), seed=seed)
        if not math.isclose(enumerated, closed, rel_tol=1e-12, abs_tol=1e-12):
            mismatches += 1
        print(f"N={n}: {_pct(enumerated)} | {_pct(closed)} | {_pct(sim.success_rate)}")
    print("")

    # ---- Asymptotic regime
    print("[VALIDATION] loop strategy, N=100")
    large = SimulationSpec(prisoners=100, iterations=config.VALIDATION_ITERATIONS_LARGE, strategy="loop")
    sim = run_simulation(large, seed=seed)
    print(f"simulated={_pct(sim.success_rate)} exact={_pct(sim.exact_rate)} 1-ln2={_pct(1.0 - math.log(2.0))}")
    print("")

    # ---- Naive strategy
    print("[VALIDATION] naive strategy (sampling with replacement)")
    for n in (2, 4, 6, 10):
        sim = run_simulation(SimulationSpec(prisoners=n, iterations=iterations, strategy="naive"), seed=seed)
        print(f"N={n}: simulated={_pct(sim.success_rate)} exact={_pct(sim.exact_rate)}")
    print("")

    if mismatches:
        print(f"[VALIDATION FAILED] {mismatches} enumeration/closed-form mismatches.")
        raise SystemExit(1)
    print("[VALIDATION COMPLETE] Model behaviour consistent with closed forms.")


if __name__ == "__main__":
    main()
