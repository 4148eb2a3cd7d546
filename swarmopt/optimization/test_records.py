# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common import errors
from swarmopt.common import testing
from . import records
from .fitness import less_than, greater_than
from .particles import Particle


class CounterFunction:
    def __init__(self) -> None:
        self.count = 0

    def __call__(self, position: np.ndarray) -> float:
        self.count += 1
        return float(np.sum(position))


def _make_particle(*position: float) -> Particle:
    particle = Particle(len(position))
    particle.position[:] = position
    particle.best_position[:] = position
    return particle


def test_global_best() -> None:
    best = records.GlobalBest()
    assert not best.is_set
    assert repr(best) == "GlobalBest(unset)"
    position = np.array([1.0, 2.0])
    best.set(position, 3.0)
    position[0] = 12
    assert best.is_set
    assert best.num_updates == 1
    assert repr(best) == "GlobalBest(position=[1.0, 2.0], value=3.0)"


def test_first_iteration_forces_personal_best() -> None:
    func = CounterFunction()
    best = records.GlobalBest()
    particle = _make_particle(1.0, 2.0)
    # on first iteration, best_value is unset and the write is unconditional
    value = records.evaluate_and_record(particle, func, less_than, best, is_first_iteration=True)
    assert value == 3.0
    assert func.count == 1
    assert particle.best_value == 3.0
    assert best.value == 3.0
    np.testing.assert_array_equal(best.position, [1, 2])


def test_unset_global_best_is_not_a_numeric_sentinel() -> None:
    # even a huge value sets an unset global best
    best = records.GlobalBest()
    particle = _make_particle(1e300, 1e300)
    records.evaluate_and_record(particle, CounterFunction(), less_than, best, is_first_iteration=True)
    assert best.value == 2e300


@testing.parametrized(
    better=(less_than, [1.0, 0.0], 1.0, [1.0, 0.0]),
    worse=(less_than, [5.0, 0.0], 2.0, [2.0, 0.0]),
    tie=(less_than, [2.0, 0.0], 2.0, [2.0, 0.0]),
    maximization_better=(greater_than, [5.0, 0.0], 5.0, [5.0, 0.0]),
    maximization_worse=(greater_than, [1.0, 0.0], 2.0, [2.0, 0.0]),
)
def test_personal_best_update(
    fitness: tp.FitnessLike, new_position: tp.List[float], expected_value: float, expected_position: tp.List[float]
) -> None:
    best = records.GlobalBest()
    particle = _make_particle(2.0, 0.0)
    records.evaluate_and_record(particle, CounterFunction(), fitness, best, is_first_iteration=True)
    particle.position[:] = new_position
    records.evaluate_and_record(particle, CounterFunction(), fitness, best, is_first_iteration=False)
    assert particle.best_value == expected_value
    np.testing.assert_array_equal(particle.best_position, expected_position)
    assert best.value == expected_value


def test_ties_keep_the_incumbent() -> None:
    best = records.GlobalBest()
    first = _make_particle(1.0, 1.0)
    second = _make_particle(0.0, 2.0)  # same value, other position
    for particle in [first, second]:
        records.evaluate_and_record(particle, CounterFunction(), less_than, best, is_first_iteration=True)
    assert best.num_updates == 1
    np.testing.assert_array_equal(best.position, [1, 1])


def test_global_best_only_challenged_by_new_personal_best() -> None:
    best = records.GlobalBest()
    good = _make_particle(0.0, 0.0)
    bad = _make_particle(10.0, 10.0)
    for particle in [good, bad]:
        records.evaluate_and_record(particle, CounterFunction(), less_than, best, is_first_iteration=True)
    assert best.value == 0.0
    # bad particle improves on its own best, but not on the global best
    bad.position[:] = [1.0, 1.0]
    records.evaluate_and_record(bad, CounterFunction(), less_than, best, is_first_iteration=False)
    assert bad.best_value == 2.0
    assert best.value == 0.0
    # first iteration is forced for the personal best, not for the global best
    bad.position[:] = [3.0, 3.0]
    records.evaluate_and_record(bad, CounterFunction(), less_than, best, is_first_iteration=True)
    assert bad.best_value == 6.0
    assert best.value == 0.0
    assert best.num_updates == 1


def test_objective_cannot_modify_the_particle() -> None:

    def intrusive(position: np.ndarray) -> float:
        position[:] = 12
        return 0.0

    particle = _make_particle(1.0, 2.0)
    records.evaluate_and_record(particle, intrusive, less_than, records.GlobalBest(), is_first_iteration=True)
    np.testing.assert_array_equal(particle.position, [1, 2])


def test_nan_value_is_rejected() -> None:
    best = records.GlobalBest()
    particle = _make_particle(1.0, 2.0)
    with pytest.raises(errors.SwarmValueError, match="NaN"):
        records.evaluate_and_record(particle, lambda x: np.nan, less_than, best, is_first_iteration=True)
    assert not best.is_set
    assert particle.best_value is None
    # infinite values are ordered, and are therefore accepted
    records.evaluate_and_record(particle, lambda x: np.inf, less_than, best, is_first_iteration=True)
    assert best.value == np.inf
