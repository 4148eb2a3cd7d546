# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import numpy as np
from swarmopt.common import errors
from swarmopt.common import testing
from . import particles
from .bounds import Bounds


def test_uninitialized_particle() -> None:
    particle = particles.Particle(3)
    assert particle.dimension == 3
    assert particle.best_value is None
    np.testing.assert_array_equal(particle.position, [0, 0, 0])
    assert "best_value=None" in repr(particle)


@testing.parametrized(
    square=([[-10, 10], [-10, 10]],),
    mixed=([[-1, 1], [100, 200], [-5e-3, 0]],),
    degenerate=([[2, 2], [-1, 1]],),
)
def test_initialize(bounds_data: list) -> None:
    bounds = Bounds(bounds_data)
    rng = np.random.RandomState(12)
    for _ in range(50):
        particle = particles.Particle(bounds.dimension)
        particles.initialize(particle, bounds, rng)
        testing.assert_in_bounds(particle.position, bounds.lower, bounds.upper)
        assert np.all(np.abs(particle.velocity) <= 1)
        np.testing.assert_array_equal(particle.best_position, particle.position)
        assert particle.best_position is not particle.position
        assert particle.best_value is None


def test_initialize_dimension_mismatch() -> None:
    with pytest.raises(errors.SwarmValueError, match="does not match"):
        particles.initialize(particles.Particle(3), Bounds([[0, 1]] * 2), np.random.RandomState(12))


def test_update_formula() -> None:
    bounds = Bounds([[-100, 100], [-100, 100]])
    particle = particles.Particle(2)
    particle.position[:] = [1.0, -2.0]
    particle.velocity[:] = [0.5, 0.25]
    global_best = np.array([3.0, 2.0])
    rng = np.random.RandomState(12)
    rp, rg = np.random.RandomState(12).uniform(0, 1, size=2)
    particles.update(particle, bounds, global_best, rng, omega=0.5, phip=2.0, phig=1.0)
    diff = np.array([2.0, 4.0])
    expected_velocity = 0.5 * np.array([0.5, 0.25]) + (2.0 * rp + 1.0 * rg) * diff
    np.testing.assert_almost_equal(particle.velocity, expected_velocity)
    np.testing.assert_almost_equal(particle.position, np.array([1.0, -2.0]) + expected_velocity)


def test_update_draws_two_numbers_per_particle() -> None:
    bounds = Bounds([[-5, 5]] * 10)
    particle = particles.Particle(10)
    rng = np.random.RandomState(12)
    particles.initialize(particle, bounds, rng)
    particles.update(particle, bounds, np.zeros(10), rng)
    reference = np.random.RandomState(12)
    reference.uniform(-1, 1, size=10)
    reference.uniform(bounds.lower, bounds.upper)
    reference.uniform(0, 1, size=2)
    assert rng.uniform() == reference.uniform()


def test_update_clamps_without_changing_velocity() -> None:
    bounds = Bounds([[-1, 1], [-1, 1]])
    particle = particles.Particle(2)
    particle.position[:] = [0.9, -0.9]
    particle.velocity[:] = [10.0, -10.0]
    # no attraction: position only moves with inertia
    particles.update(particle, bounds, particle.position.copy(), np.random.RandomState(12), omega=1.0)
    np.testing.assert_array_equal(particle.position, [1, -1])
    np.testing.assert_array_equal(particle.velocity, [10, -10])


def test_update_at_global_best_only_decays_velocity() -> None:
    bounds = Bounds([[-10, 10]] * 3)
    particle = particles.Particle(3)
    particle.position[:] = [1, 2, 3]
    particle.velocity[:] = [-1, 0, 1]
    particles.update(particle, bounds, np.array([1.0, 2, 3]), np.random.RandomState(12), omega=0.5)
    np.testing.assert_array_equal(particle.velocity, [-0.5, 0, 0.5])
    np.testing.assert_array_equal(particle.position, [0.5, 2, 3.5])
