# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common import errors
from .bounds import Bounds


COEFF_W = 0.50  # inertia coefficient (recommended within [0.4, 0.9])
COEFF_CP = 2.05  # cognitive coefficient (a little bit above 2)
COEFF_CG = 2.05  # social coefficient (same or similar value as the cognitive one)
INITIAL_SPEED_RANGE = (-1.0, 1.0)


class Particle:
    """Candidate solution of the swarm, holding its current position and velocity
    as well as the best position it has visited so far.

    Parameters
    ----------
    dimension: int
        dimension of the search space

    Note
    ----
    A particle is created uninitialized (all zeros, no best value). Its state is
    only modified through :code:`initialize`, :code:`update` and
    :code:`records.evaluate_and_record`.
    """

    def __init__(self, dimension: int) -> None:
        self.velocity = np.zeros(dimension, dtype=float)
        self.position = np.zeros(dimension, dtype=float)
        self.best_position = np.zeros(dimension, dtype=float)
        self.best_value: tp.Optional[float] = None

    @property
    def dimension(self) -> int:
        return self.position.size

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(position={self.position.tolist()}, velocity={self.velocity.tolist()}, "
            f"best_value={self.best_value})"
        )


def _check_dimension(particle: Particle, bounds: Bounds) -> None:
    if particle.dimension != bounds.dimension:
        raise errors.SwarmValueError(
            f"Particle of dimension {particle.dimension} does not match bounds of dimension {bounds.dimension}"
        )


def initialize(particle: Particle, bounds: Bounds, rng: np.random.RandomState) -> None:
    """Draws a random velocity in INITIAL_SPEED_RANGE and a random position
    uniformly within the bounds, which also becomes the best position.
    The best value is left unset until the first evaluation.
    """
    _check_dimension(particle, bounds)
    particle.velocity[:] = rng.uniform(*INITIAL_SPEED_RANGE, size=particle.dimension)
    particle.position[:] = rng.uniform(bounds.lower, bounds.upper)
    particle.best_position[:] = particle.position
    particle.best_value = None


def update(
    particle: Particle,
    bounds: Bounds,
    global_best_position: np.ndarray,
    rng: np.random.RandomState,
    omega: float = COEFF_W,
    phip: float = COEFF_CP,
    phig: float = COEFF_CG,
) -> None:
    """Moves the particle one step, with inertia and attraction toward the global best,
    then clamps its position into the bounds.

    Parameters
    ----------
    particle: Particle
        the particle to update (in place)
    bounds: Bounds
        the box the position is clamped into
    global_best_position: np.ndarray
        best position found by the swarm so far
    rng: np.random.RandomState
        random state to draw the stochastic coefficients from
    omega: float
        inertia weight
    phip: float
        cognitive coefficient
    phig: float
        social coefficient

    Note
    ----
    - the random factors are drawn once per particle and shared by all dimensions.
    - clamping is saturating, and the velocity is kept as is when a bound is hit,
      so particles may stick to the border of the box for a few iterations.
    """
    rp = rng.uniform(0.0, 1.0) * phip
    rg = rng.uniform(0.0, 1.0) * phig
    diff = np.asarray(global_best_position, dtype=float) - particle.position
    particle.velocity[:] = omega * particle.velocity + rp * diff + rg * diff
    particle.position[:] = bounds.clip(particle.position + particle.velocity)
