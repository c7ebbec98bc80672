from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import numpy as np

# (prisoner, previous revealed value or None, number of boxes, rng) -> box index
Strategy = Callable[[int, Optional[int], int, np.random.Generator], int]


class ConfigurationError(ValueError):
    """Invalid simulation parameters, raised before any trial runs."""


@dataclass(frozen=True)
class SimulationSpec:
    """
    Parameters of one simulation run.

    max_probes=None means the classic budget of prisoners // 2 boxes.
    """

    prisoners: int
    iterations: int
    strategy: str = "loop"
    max_probes: Optional[int] = None

    def __post_init__(self) -> None:
        if self.prisoners < 1:
            raise ConfigurationError(f"prisoners must be >= 1 (got {self.prisoners})")
        if self.iterations < 1:
            raise ConfigurationError(f"iterations must be >= 1 (got {self.iterations})")
        get_strategy(self.strategy)
        if self.max_probes is not None and not (0 <= self.max_probes <= self.prisoners):
            raise ConfigurationError(
                f"max_probes must be in [0, {self.prisoners}] (got {self.max_probes})"
            )

    @property
    def budget(self) -> int:
        return probe_budget(self.prisoners) if self.max_probes is None else self.max_probes


@dataclass(frozen=True)
class TrialBlockStats:
    """Counters for one sequential block of trials."""

    n_trials: int
    n_success: int

    @property
    def success_rate(self) -> float:
        return self.n_success / self.n_trials if self.n_trials else 0.0


# ---------------------------------------------------------------------------
# Permutation generator
# ---------------------------------------------------------------------------


def generate_permutation(n: int, rng: np.random.Generator) -> np.ndarray:
    """
    Uniformly random box contents for one trial.

    Box i holds value boxes[i]. The array is read-only so a trial can never
    reshuffle its own boxes mid-evaluation.
    """
    if n < 1:
        raise ConfigurationError(f"cannot shuffle {n} boxes")
    boxes = rng.permutation(n)
    boxes.flags.writeable = False
    return boxes


def validate_permutation(boxes: Sequence[int]) -> None:
    n = len(boxes)
    seen = [False] * n
    for value in boxes:
        v = int(value)
        if not (0 <= v < n):
            raise ValueError(f"value {v} out of range [0, {n})")
        if seen[v]:
            raise ValueError(f"duplicate value {v} in permutation")
        seen[v] = True


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def loop_strategy(
    prisoner: int, previous: Optional[int], n_boxes: int, rng: np.random.Generator
) -> int:
    """Open your own box first, then the box named by the last slip."""
    if previous is None:
        return prisoner
    return previous


def naive_strategy(
    prisoner: int, previous: Optional[int], n_boxes: int, rng: np.random.Generator
) -> int:
    """Open any box at random (boxes may be opened twice)."""
    return int(rng.integers(n_boxes))


STRATEGIES: dict[str, Strategy] = {
    "loop": loop_strategy,
    "naive": naive_strategy,
}


def get_strategy(name: str) -> Strategy:
    key = name.strip().lower()
    if key not in STRATEGIES:
        raise ConfigurationError(f"unknown strategy '{name}'. Available: {sorted(STRATEGIES)}")
    return STRATEGIES[key]


# ---------------------------------------------------------------------------
# Evaluator / trials
# ---------------------------------------------------------------------------


def probe_budget(n: int) -> int:
    return n // 2


def evaluate_prisoner(
    boxes: Sequence[int],
    prisoner: int,
    strategy: Strategy,
    rng: np.random.Generator,
    *,
    max_probes: Optional[int] = None,
) -> bool:
    """
    Let one prisoner search the boxes; True if they find their own number.

    The strategy is asked for a box with previous=None first, then with the
    value revealed by the last opened box. The search stops on a match or
    after max_probes boxes.
    """
    n = len(boxes)
    budget = probe_budget(n) if max_probes is None else max_probes
    previous: Optional[int] = None
    for _ in range(budget):
        revealed = int(boxes[strategy(prisoner, previous, n, rng)])
        if revealed == prisoner:
            return True
        previous = revealed
    return False


def run_trial(
    n_prisoners: int,
    strategy: Strategy,
    rng: np.random.Generator,
    *,
    max_probes: Optional[int] = None,
    boxes: Optional[np.ndarray] = None,
) -> bool:
    """One trial: fresh boxes (unless given), every prisoner must succeed."""
    if boxes is None:
        boxes = generate_permutation(n_prisoners, rng)
    else:
        if len(boxes) != n_prisoners:
            raise ValueError(f"expected {n_prisoners} boxes, got {len(boxes)}")
        validate_permutation(boxes)
    for prisoner in range(n_prisoners):
        # One failure already decides the trial.
        if not evaluate_prisoner(boxes, prisoner, strategy, rng, max_probes=max_probes):
            return False
    return True


def simulate_trials(
    *,
    n_prisoners: int,
    n_trials: int,
    strategy: Strategy,
    rng: np.random.Generator,
    max_probes: Optional[int] = None,
) -> TrialBlockStats:
    """Run n_trials independent trials sequentially and count the successes."""
    if n_trials < 0:
        raise ValueError("n_trials must be >= 0")
    n_success = 0
    for _ in range(n_trials):
        if run_trial(n_prisoners, strategy, rng, max_probes=max_probes):
            n_success += 1
    return TrialBlockStats(n_trials=n_trials, n_success=n_success)


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------


def cycle_lengths(boxes: Sequence[int]) -> list[int]:
    """Cycle lengths of the permutation index -> boxes[index], largest first."""
    n = len(boxes)
    visited = [False] * n
    lengths = []
    for start in range(n):
        if visited[start]:
            continue
        length = 0
        i = start
        while not visited[i]:
            visited[i] = True
            i = int(boxes[i])
            length += 1
        lengths.append(length)
    return sorted(lengths, reverse=True)


def loop_trial_succeeds(boxes: Sequence[int], *, max_probes: Optional[int] = None) -> bool:
    """Loop strategy outcome without simulating: no cycle may exceed the budget."""
    if len(boxes) == 0:
        return True
    budget = probe_budget(len(boxes)) if max_probes is None else max_probes
    return cycle_lengths(boxes)[0] <= budget


def exact_success_probability(
    n: int, strategy: str = "loop", *, max_probes: Optional[int] = None
) -> float:
    """
    Closed-form trial success probability.

    loop:  P(all cycles <= b), via p(m) = (1/m) * sum_{k=1..min(b,m)} p(m-k).
           For b >= n/2 this equals 1 - sum_{k=b+1..n} 1/k.
    naive: each prisoner independently hits their box with
           1 - (1 - 1/n)**b, so the trial succeeds with that to the n-th power.
    """
    if n < 1:
        raise ConfigurationError(f"prisoners must be >= 1 (got {n})")
    name = strategy.strip().lower()
    get_strategy(name)
    b = probe_budget(n) if max_probes is None else max_probes

    if name == "naive":
        per_prisoner = 1.0 - (1.0 - 1.0 / n) ** b
        return float(per_prisoner**n)

    p = [1.0] + [0.0] * n
    window = 0.0  # p[m-b] + ... + p[m-1]
    for m in range(1, n + 1):
        window += p[m - 1]
        if m - 1 - b >= 0:
            window -= p[m - 1 - b]
        p[m] = window / m
    return float(p[n])


def enumerate_loop_success_probability(n: int, *, max_probes: Optional[int] = None) -> float:
    """Exact loop-strategy success probability by running every permutation."""
    if n < 1:
        raise ConfigurationError(f"prisoners must be >= 1 (got {n})")
    rng = np.random.default_rng(0)  # unused by the loop strategy
    wins = 0
    total = 0
    for perm in itertools.permutations(range(n)):
        boxes = np.array(perm, dtype=np.int64)
        if run_trial(n, loop_strategy, rng, max_probes=max_probes, boxes=boxes):
            wins += 1
        total += 1
    return wins / total
