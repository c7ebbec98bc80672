from __future__ import annotations

import argparse
import sys
from typing import Optional

from . import config
from .experiments import run_simulation, run_sweep
from .io_utils import format_comparison, format_report, format_sweep_table, get_logger
from .model import STRATEGIES, ConfigurationError, SimulationSpec


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="prisoners-sim",
        description="Monte Carlo simulation of the 100 prisoners puzzle.",
    )
    p.add_argument(
        "-p",
        "--prisoners",
        type=int,
        default=None,
        help=f"number of prisoners and boxes (default: {config.DEFAULT_PRISONERS}; not with --sweep)",
    )
    p.add_argument(
        "-i",
        "--iterations",
        type=int,
        default=None,
        help=f"number of trials (default: {config.DEFAULT_ITERATIONS}; not with --sweep)",
    )
    p.add_argument(
        "-s",
        "--strategy",
        choices=sorted(STRATEGIES),
        default=None,
        help=f"box selection strategy (default: {config.DEFAULT_STRATEGY}; not with --sweep/--compare)",
    )
    p.add_argument(
        "--max-probes",
        type=int,
        default=None,
        help="boxes each prisoner may open (default: prisoners // 2; not with --sweep)",
    )
    p.add_argument("--seed", type=int, default=None, help="base RNG seed, >= 0 (random if omitted)")
    p.add_argument("--workers", type=int, default=1, help="worker processes for the trial chunks")
    p.add_argument("--progress", action="store_true", help="show a progress bar")
    p.add_argument("-v", "--verbose", action="store_true", help="log run diagnostics to stderr")
    p.add_argument("--compare", action="store_true", help="run every strategy on the same seed")
    p.add_argument(
        "--sweep",
        action="store_true",
        help="sweep success rate over config.PRISONER_VALUES for every strategy",
    )
    p.add_argument(
        "--mode",
        choices=["full", "quick"],
        default="full",
        help="sweep size; full: N_SEEDS+PRISONER_VALUES; quick: smaller dev run",
    )
    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = get_logger()
    info = logger.info if args.verbose else (lambda msg: None)
    warn = logger.warning

    if args.sweep:
        given = [
            flag
            for flag, value in (
                ("--prisoners", args.prisoners),
                ("--iterations", args.iterations),
                ("--strategy", args.strategy),
                ("--max-probes", args.max_probes),
            )
            if value is not None
        ]
        if args.compare:
            given.append("--compare")
        if given:
            parser.error(f"--sweep sets its own sizes; drop {', '.join(given)}")
    elif args.compare and args.strategy is not None:
        parser.error("--compare runs every strategy; drop --strategy")

    try:
        if args.sweep:
            quick = args.mode == "quick"
            summary = run_sweep(
                prisoner_values=config.PRISONER_VALUES_QUICK if quick else config.PRISONER_VALUES,
                iterations=config.ITERATIONS_SWEEP_QUICK if quick else config.ITERATIONS_SWEEP,
                n_seeds=config.N_SEEDS_QUICK if quick else config.N_SEEDS,
                base_seed=config.BASE_SEED if args.seed is None else args.seed,
                workers=args.workers,
                progress=args.progress,
                logger_warn=warn,
                logger_info=info,
            )
            print(format_sweep_table(summary))
            return 0

        strategies = sorted(STRATEGIES) if args.compare else [args.strategy or config.DEFAULT_STRATEGY]
        specs = [
            SimulationSpec(
                prisoners=config.DEFAULT_PRISONERS if args.prisoners is None else args.prisoners,
                iterations=config.DEFAULT_ITERATIONS if args.iterations is None else args.iterations,
                strategy=name,
                max_probes=args.max_probes,
            )
            for name in strategies
        ]
    except ConfigurationError as exc:
        parser.error(str(exc))

    seed = args.seed
    results = []
    for spec in specs:
        try:
            result = run_simulation(
                spec,
                seed=seed,
                workers=args.workers,
                progress=args.progress,
                logger_info=info,
            )
        except ConfigurationError as exc:
            parser.error(str(exc))
        # Later strategies reuse the first run's seed.
        seed = result.seed
        results.append(result)

    if args.compare:
        print(format_comparison(results))
    else:
        print(format_report(results[0]))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
