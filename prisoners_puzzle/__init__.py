"""
100 Prisoners — Monte Carlo Simulator

Each of N prisoners may open N/2 of N shuffled boxes looking for their own
number; the group wins only if every prisoner succeeds. This package
simulates the loop (cycle-following) strategy and the naive random strategy
and reports the empirical success rate over many independent trials.
"""

from .config import (  # noqa: F401
    BASE_SEED,
    DEFAULT_ITERATIONS,
    DEFAULT_PRISONERS,
    DEFAULT_STRATEGY,
    ENUMERATION_MAX_N,
    ITERATIONS_SWEEP,
    ITERATIONS_SWEEP_QUICK,
    N_SEEDS,
    N_SEEDS_QUICK,
    PRISONER_VALUES,
    PRISONER_VALUES_QUICK,
    TRIALS_PER_CHUNK,
    VALIDATION_ITERATIONS,
    VALIDATION_ITERATIONS_LARGE,
)
from .model import ConfigurationError, SimulationSpec  # noqa: F401
