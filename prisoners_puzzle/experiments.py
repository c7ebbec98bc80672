from __future__ import annotations

import math
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from . import config
from .model import (
    ConfigurationError,
    SimulationSpec,
    TrialBlockStats,
    exact_success_probability,
    get_strategy,
    simulate_trials,
)


def _noop(msg: str) -> None:
    pass


@dataclass(frozen=True)
class SimulationResult:
    spec: SimulationSpec
    seed: int
    n_success: int
    n_chunks: int
    runtime_s: float
    exact_rate: float

    @property
    def success_rate(self) -> float:
        return self.n_success / self.spec.iterations


def _seed_for(*, base_seed: int, sweep_offset: int, seed_index: int) -> int:
    # Deterministic seeding rule (paired across strategies within each sweep point).
    return int(base_seed + sweep_offset * 1000 + seed_index)


def _chunk_sizes(n_trials: int, chunk: int) -> list[int]:
    full, rest = divmod(n_trials, chunk)
    return [chunk] * full + ([rest] if rest else [])


def _chunk_rng(seed: int, chunk_index: int) -> np.random.Generator:
    # Entropy (seed, chunk_index) gives each chunk its own independent stream.
    return np.random.default_rng([seed, chunk_index])


def _run_chunk(args: tuple[SimulationSpec, int, int, int]) -> TrialBlockStats:
    spec, seed, chunk_index, n_trials = args
    return simulate_trials(
        n_prisoners=spec.prisoners,
        n_trials=n_trials,
        strategy=get_strategy(spec.strategy),
        rng=_chunk_rng(seed, chunk_index),
        max_probes=spec.budget,
    )


def run_simulation(
    spec: SimulationSpec,
    *,
    seed: Optional[int] = None,
    workers: int = 1,
    progress: bool = False,
    logger_info: Callable[[str], None] = _noop,
) -> SimulationResult:
    """
    Run spec.iterations independent trials and report the success rate.

    Trials are split into chunks of config.TRIALS_PER_CHUNK with one random
    stream per chunk, so a fixed seed gives the same count for any number of
    workers. Chunk counters are summed at the end.
    """
    if workers < 1:
        raise ConfigurationError(f"workers must be >= 1 (got {workers})")
    if seed is not None and seed < 0:
        raise ConfigurationError(f"seed must be >= 0 (got {seed})")
    if seed is None:
        seed = int(np.random.default_rng().integers(0, 2**32))

    sizes = _chunk_sizes(spec.iterations, config.TRIALS_PER_CHUNK)
    jobs = [(spec, seed, i, n) for i, n in enumerate(sizes)]
    logger_info(
        f"START simulation: prisoners={spec.prisoners} iterations={spec.iterations} "
        f"strategy={spec.strategy} max_probes={spec.budget} seed={seed} "
        f"chunks={len(jobs)} workers={workers}"
    )

    desc = f"{spec.strategy} n={spec.prisoners}"
    start = time.perf_counter()
    if workers == 1 or len(jobs) == 1:
        blocks = [_run_chunk(job) for job in tqdm(jobs, desc=desc, disable=not progress)]
    else:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            blocks = list(
                tqdm(pool.map(_run_chunk, jobs), total=len(jobs), desc=desc, disable=not progress)
            )
    runtime_s = time.perf_counter() - start

    n_success = sum(b.n_success for b in blocks)
    result = SimulationResult(
        spec=spec,
        seed=seed,
        n_success=n_success,
        n_chunks=len(jobs),
        runtime_s=runtime_s,
        exact_rate=exact_success_probability(
            spec.prisoners, spec.strategy, max_probes=spec.budget
        ),
    )
    logger_info(
        f"END simulation: successes={n_success}/{spec.iterations} "
        f"rate={result.success_rate:.6g} exact={result.exact_rate:.6g} runtime={runtime_s:.3f}s"
    )
    return result


def _std_across_seeds(x: pd.Series) -> float:
    if len(x) <= 1:
        return 0.0
    return float(x.std(ddof=1))


def _aggregate_seed_rows(seed_rows: pd.DataFrame) -> dict:
    n_seeds = int(len(seed_rows))
    return {
        "mean_rate": float(seed_rows["success_rate"].mean()) if n_seeds else float("nan"),
        "std_rate": _std_across_seeds(seed_rows["success_rate"]) if n_seeds else float("nan"),
        "n_seeds": n_seeds,
    }


def run_sweep(
    *,
    prisoner_values: Iterable[int],
    iterations: int,
    n_seeds: int,
    strategies: Sequence[str] = ("loop", "naive"),
    base_seed: int = config.BASE_SEED,
    workers: int = 1,
    progress: bool = False,
    logger_warn: Callable[[str], None] = _noop,
    logger_info: Callable[[str], None] = _noop,
) -> pd.DataFrame:
    """
    Success rate vs prisoner count, for each strategy.

    Every (prisoners, strategy) point runs n_seeds seeded simulations; seeds
    are shared across strategies at the same point. Returns one summary row
    per point with mean/std across seeds and the exact probability.
    """
    if n_seeds < 1:
        raise ConfigurationError(f"n_seeds must be >= 1 (got {n_seeds})")
    if base_seed < 0:
        raise ConfigurationError(f"base_seed must be >= 0 (got {base_seed})")
    values = list(prisoner_values)
    logger_info(f"START sweep: prisoners in {values}, strategies={list(strategies)}, n_seeds={n_seeds}")

    summary_rows = []
    for offset, n in enumerate(tqdm(values, desc="sweep", leave=True, disable=not progress)):
        for strategy in strategies:
            spec = SimulationSpec(prisoners=n, iterations=iterations, strategy=strategy)
            point_rows = []
            for seed_index in range(n_seeds):
                seed = _seed_for(base_seed=base_seed, sweep_offset=offset, seed_index=seed_index)
                result = run_simulation(spec, seed=seed, workers=workers)
                point_rows.append(
                    {
                        "prisoners": n,
                        "strategy": strategy,
                        "seed_index": seed_index,
                        "seed": seed,
                        "success_rate": result.success_rate,
                    }
                )

            agg = _aggregate_seed_rows(pd.DataFrame(point_rows))
            exact = result.exact_rate
            # Binomial standard error of the pooled rate.
            se = math.sqrt(exact * (1.0 - exact) / (iterations * n_seeds))
            if se > 0.0 and abs(agg["mean_rate"] - exact) > 5.0 * se:
                logger_warn(
                    f"sweep: prisoners={n} strategy={strategy} mean_rate={agg['mean_rate']:.6g} "
                    f"is more than 5 standard errors from exact={exact:.6g}"
                )
            summary_rows.append(
                {
                    "prisoners": n,
                    "strategy": strategy,
                    "max_probes": spec.budget,
                    "mean_rate": agg["mean_rate"],
                    "std_rate": agg["std_rate"],
                    "exact_rate": exact,
                    "n_seeds": agg["n_seeds"],
                }
            )
            logger_info(
                f"sweep: prisoners={n} strategy={strategy} mean_rate={agg['mean_rate']:.6g} "
                f"exact={exact:.6g}"
            )

    logger_info("END sweep")
    return pd.DataFrame(
        summary_rows,
        columns=["prisoners", "strategy", "max_probes", "mean_rate", "std_rate", "exact_rate", "n_seeds"],
    )
