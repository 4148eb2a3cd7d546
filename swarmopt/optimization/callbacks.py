# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import time
import logging
import numpy as np
import pandas as pd
import swarmopt.common.typing as tp
from .swarm import ParticleSwarm

global_logger = logging.getLogger(__name__)

# -------------------------------------------------------------------------------------

class OptimizationPrinter:
    """Printer to register as "iteration" callback in a swarm, for printing
    the global best regularly.

    Parameters
    ----------
    print_interval_iterations: int
        max number of iterations before performing another print
    print_interval_seconds: float
        max number of seconds before performing another print
    """

    def __init__(self, print_interval_iterations: int = 1, print_interval_seconds: float = 60.0) -> None:
        assert print_interval_iterations > 0
        assert print_interval_seconds > 0
        self._print_interval_iterations = int(print_interval_iterations)
        self._print_interval_seconds = print_interval_seconds
        self._next_iteration = self._print_interval_iterations
        self._next_time = time.time() + print_interval_seconds

    def __call__(self, swarm: ParticleSwarm) -> None:
        if time.time() >= self._next_time or swarm.num_evaluations >= self._next_iteration:
            self._next_time = time.time() + self._print_interval_seconds
            self._next_iteration = swarm.num_evaluations + self._print_interval_iterations
            best = swarm.global_best
            print(f"After {swarm.num_evaluations} evaluation(s), best value is {best.value} at {best.position}")

# -------------------------------------------------------------------------------------

class OptimizationLogger:
    """Logger to register as "iteration" callback in a swarm, for logging
    the global best regularly.

    Parameters
    ----------
    logger:
        given logger that callback will use to log
    log_level:
        log level that logger will write to
    log_interval_iterations: int
        max number of iterations before performing another log
    log_interval_seconds:
        max number of seconds before performing another log
    """

    def __init__(
        self,
        *,
        logger: logging.Logger = global_logger,
        log_level: int = logging.INFO,
        log_interval_iterations: int = 1,
        log_interval_seconds: float = 60.0,
    ) -> None:
        assert log_interval_iterations > 0
        assert log_interval_seconds > 0
        self._logger = logger
        self._log_level = log_level
        self._log_interval_iterations = int(log_interval_iterations)
        self._log_interval_seconds = log_interval_seconds
        self._next_iteration = self._log_interval_iterations
        self._next_time = time.time() + log_interval_seconds

    def __call__(self, swarm: ParticleSwarm) -> None:
        if time.time() >= self._next_time or swarm.num_evaluations >= self._next_iteration:
            self._next_time = time.time() + self._log_interval_seconds
            self._next_iteration = swarm.num_evaluations + self._log_interval_iterations
            best = swarm.global_best
            self._logger.log(
                self._log_level,
                "After %s evaluation(s), best value is %s at %s",
                swarm.num_evaluations,
                best.value,
                best.position,
            )

# -------------------------------------------------------------------------------------

class HistoryRecorder:
    """Records the global best after each evaluation phase of a swarm.

    Parameters
    ----------
    record_positions: bool
        whether to also record the position of every particle (costly for large swarms)

    Example
    -------

    .. code-block:: python

        recorder = HistoryRecorder()
        swarm.register_callback("iteration", recorder)
        swarm.run()
        df = recorder.to_dataframe()
    """

    def __init__(self, record_positions: bool = False) -> None:
        self._record_positions = record_positions
        self.values: tp.List[float] = []
        self.best_positions: tp.List[np.ndarray] = []
        self.positions: tp.List[np.ndarray] = []

    def __call__(self, swarm: ParticleSwarm) -> None:
        best = swarm.global_best
        assert best.value is not None and best.position is not None
        self.values.append(best.value)
        self.best_positions.append(best.position.copy())
        if self._record_positions:
            self.positions.append(np.array([particle.position for particle in swarm.population]))

    def __len__(self) -> int:
        return len(self.values)

    def to_dataframe(self) -> pd.DataFrame:
        """Global best history, with one row per iteration, a "value" column
        and one "x#i" column for each coordinate i of the global best position
        """
        dimension = self.best_positions[0].size if self.best_positions else 0
        data = np.array(self.best_positions, dtype=float).reshape(len(self.values), dimension)
        df = pd.DataFrame(data, columns=[f"x#{k}" for k in range(dimension)])
        df.insert(0, "value", np.array(self.values, dtype=float))
        df.index.name = "iteration"
        return df

# -------------------------------------------------------------------------------------

class ProgressBar:
    """Progress bar to register as "iteration" callback in a swarm"""

    def __init__(self) -> None:
        self._progress_bar: tp.Any = None
        self._current = 0

    def __call__(self, swarm: ParticleSwarm) -> None:
        if self._progress_bar is None:
            # pylint: disable=import-outside-toplevel
            try:
                from tqdm import tqdm  # Inline import to avoid additional dependency
            except ImportError as e:
                raise ImportError(
                    f"{self.__class__.__name__} requires tqdm which is not installed by default "
                    "(pip install tqdm)"
                ) from e
            self._progress_bar = tqdm()
            self._progress_bar.total = max(1, swarm.max_iterations)
            self._progress_bar.update(self._current)
        self._progress_bar.update(1)
        self._current += 1
        if self._current >= swarm.max_iterations:
            self._progress_bar.close()

    def __getstate__(self) -> tp.Dict[str, tp.Any]:
        """Used for pickling (tqdm is not picklable)"""
        state = dict(self.__dict__)
        state["_progress_bar"] = None
        return state
