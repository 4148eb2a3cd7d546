# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Fitness predicates: fitness(a, b) returns True iff value a is strictly
preferred over value b. The swarm never compares values in any other way,
so the same engine minimizes or maximizes depending on the predicate.
Custom predicates must be strict weak orders on the objective values, so that
the global best is never less preferred than any personal best.
"""

from swarmopt.common.decorators import Registry
import swarmopt.common.typing as tp


registry: Registry[tp.FitnessLike] = Registry()


@registry.register
def less_than(a: float, b: float) -> bool:
    """Minimization"""
    return a < b


@registry.register
def greater_than(a: float, b: float) -> bool:
    """Maximization"""
    return a > b
