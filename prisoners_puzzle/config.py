"""
Configuration for the 100 prisoners simulations.

Only numpy/pandas/tqdm are assumed available in the environment.
"""

# Single-run defaults (CLI)
DEFAULT_PRISONERS = 100
DEFAULT_ITERATIONS = 1000
DEFAULT_STRATEGY = "loop"

# Trials are split into fixed-size chunks, one derived seed per chunk, so the
# result for a given seed does not depend on the worker count.
TRIALS_PER_CHUNK = 250

# Sweep sizes
N_SEEDS = 5
ITERATIONS_SWEEP = 2_000

# Quick mode (dev / smoke test)
N_SEEDS_QUICK = 1
ITERATIONS_SWEEP_QUICK = 200

# Sweep ranges
PRISONER_VALUES = [
    2,
    4,
    6,
    8,
    10,
    20,
    50,
    100,
    200,
]
PRISONER_VALUES_QUICK = [2, 4, 10, 100]

# Exact enumeration walks all n! permutations
ENUMERATION_MAX_N = 8

# Randomness
BASE_SEED = 12345

# validate_model trial counts (small N / N=100)
VALIDATION_ITERATIONS = 20_000
VALIDATION_ITERATIONS_LARGE = 10_000
