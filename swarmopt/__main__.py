# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import sys
import logging
import argparse
import swarmopt.common.typing as tp
from .common import errors
from .functions import corefuncs
from .optimization import callbacks
from .optimization import fitness as fitnesses
from .optimization import swarm as swarmlib


DECIMAL_DIGITS = 17  # enough to round-trip a float64


# pylint: disable=too-many-arguments
def launch(
    function: str,
    dimension: int = 2,
    particle_count: tp.Optional[int] = None,
    max_iterations: int = 1000,
    optimizer: str = "PSO",
    seed: tp.Optional[int] = None,
    maximize: bool = False,
    progress: bool = False,
) -> swarmlib.SwarmResult:
    """Runs a registered swarm configuration on a registered function,
    over its usual search box
    """
    objective = corefuncs.registry.lookup(function)
    config = swarmlib.registry.lookup(optimizer)
    swarm = config(
        objective,
        corefuncs.get_bounds(function, dimension),
        fitness=fitnesses.greater_than if maximize else fitnesses.less_than,
        max_iterations=max_iterations,
        particle_count=particle_count,
        random_state=seed,
    )
    if progress:
        swarm.register_callback("iteration", callbacks.ProgressBar())
    return swarm.run()


def format_position(position: tp.Iterable[float]) -> str:
    return "[" + ", ".join(f"{x:.{DECIMAL_DIGITS}e}" for x in position) + "]"


def get_args(argv: tp.Optional[tp.Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a particle swarm on a benchmark function and print the best position.")
    parser.add_argument(
        "function",
        type=str,
        nargs="?",
        default="ackley",
        help=f"name of a registered function (among: {', '.join(sorted(corefuncs.registry))})",
    )
    parser.add_argument("--dimension", type=int, default=2, help="Dimension of the search space")
    parser.add_argument(
        "--particles",
        type=int,
        default=None,
        help=f"Number of particles (default: the configured population, {swarmlib.STATIC_PARTICLES} if not set)",
    )
    parser.add_argument("--iterations", type=int, default=1000, help="Number of iterations")
    parser.add_argument(
        "--optimizer",
        type=str,
        default="PSO",
        help=f"name of a registered configuration (among: {', '.join(sorted(swarmlib.registry))})",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Use a seed for reproducibility"
    )
    parser.add_argument("--maximize", action="store_true", help="Maximize instead of minimizing")
    parser.add_argument("--progress", action="store_true", help="Display a progress bar (requires tqdm)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Logging verbosity (-v: info, -vv: debug)")
    return parser.parse_args(argv)


def main(argv: tp.Optional[tp.Sequence[str]] = None) -> int:
    args = get_args(argv)
    levels = {0: logging.WARNING, 1: logging.INFO}
    logging.basicConfig(level=levels.get(args.verbose, logging.DEBUG))
    try:
        result = launch(
            args.function,
            dimension=args.dimension,
            particle_count=args.particles,
            max_iterations=args.iterations,
            optimizer=args.optimizer,
            seed=args.seed,
            maximize=args.maximize,
            progress=args.progress,
        )
    except errors.SwarmOptError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    print(format_position(result.position))
    print(f"value: {result.value:.{DECIMAL_DIGITS}e}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
