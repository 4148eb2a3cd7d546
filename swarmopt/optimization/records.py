# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common import errors
from .particles import Particle


class GlobalBest:
    """Best position and value observed by any particle of the swarm.
    It starts unset (no value yet), is set by the first recorded evaluation
    and then only changes for values preferred by the fitness predicate.
    """

    def __init__(self) -> None:
        self.position: tp.Optional[np.ndarray] = None
        self.value: tp.Optional[float] = None
        self.num_updates = 0

    @property
    def is_set(self) -> bool:
        return self.value is not None

    def set(self, position: np.ndarray, value: float) -> None:
        self.position = np.array(position, dtype=float, copy=True)
        self.value = value
        self.num_updates += 1

    def __repr__(self) -> str:
        if not self.is_set:
            return f"{self.__class__.__name__}(unset)"
        assert self.position is not None
        return f"{self.__class__.__name__}(position={self.position.tolist()}, value={self.value})"


def evaluate_and_record(
    particle: Particle,
    objective: tp.ObjectiveLike,
    fitness: tp.FitnessLike,
    global_best: GlobalBest,
    is_first_iteration: bool,
) -> float:
    """Evaluates the objective function at the particle position and updates
    its personal best, as well as the global best.

    Parameters
    ----------
    particle: Particle
        the particle to evaluate
    objective: callable
        function taking the position as a np.ndarray and returning a float
    fitness: callable
        fitness(a, b) is True iff value a is preferred over value b
    global_best: GlobalBest
        swarm-level record, updated in place
    is_first_iteration: bool
        forces the update of the personal best, since it is unset before
        the first evaluation

    Returns
    -------
    float
        the evaluated value

    Note
    ----
    - the global best is only challenged when the personal best was just updated,
      so that it can never be worse than any personal best.
    - ties keep the incumbent: a value replaces a best only if strictly preferred.
    - NaN values cannot be ordered and raise a SwarmValueError (infinite values are fine).
    """
    value = float(objective(particle.position.copy()))
    if np.isnan(value):
        raise errors.SwarmValueError(f"Objective function returned NaN at position {particle.position.tolist()}")
    if is_first_iteration or fitness(value, particle.best_value):
        particle.best_position[:] = particle.position
        particle.best_value = value
        if not global_best.is_set or fitness(value, global_best.value):
            global_best.set(particle.position, value)
    return value
