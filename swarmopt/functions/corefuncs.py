# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from math import exp, sqrt, cos, pi, e
import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common.decorators import Registry


# information registered along functions: "domain" is the usual search interval (same for each dimension)
registry: Registry[tp.Callable[[np.ndarray], float]] = Registry()


@registry.register_with_info(domain=(-10.0, 10.0))
def sphere(x: np.ndarray) -> float:
    """The most classical continuous optimization testbed.

    If you do not solve that one then you have a bug."""
    assert x.ndim == 1
    return float(x.dot(x))


@registry.register_with_info(domain=(-10.0, 10.0))
def sphere1(x: np.ndarray) -> float:
    """Translated sphere function."""
    return sphere(x - 1.0)


@registry.register_with_info(domain=(-5.12, 5.12))
def rastrigin(x: np.ndarray) -> float:
    """Classical multimodal function."""
    cosi = float(np.sum(np.cos(2 * np.pi * x)))
    return float(10 * (len(x) - cosi) + sphere(x))


@registry.register_with_info(domain=(-5.0, 10.0))
def rosenbrock(x: np.ndarray) -> float:
    x_m_1 = x[:-1] - 1
    x_diff = x[:-1] ** 2 - x[1:]
    return float(100 * x_diff.dot(x_diff) + x_m_1.dot(x_m_1))


@registry.register_with_info(domain=(-50.0, 50.0))
def ackley(x: np.ndarray) -> float:
    dim = x.size
    sum_cos = np.sum(np.cos(2 * np.pi * x))
    return -20.0 * exp(-0.2 * sqrt(sphere(x) / dim)) - exp(sum_cos / dim) + 20 + exp(1)


@registry.register_with_info(domain=(-600.0, 600.0))
def griewank(x: np.ndarray) -> float:
    """Multimodal function, often used in Bayesian optimization."""
    part1 = sphere(x)
    part2 = np.prod(np.cos(x / np.sqrt(1 + np.arange(len(x)))))
    return 1 + (float(part1) / 4000.0) - float(part2)


def ackley_2d(x: float, y: float) -> float:
    """Ackley function of 2 variables, for the 2-dimensional entry points.
    Minimum is 0 at (0, 0).
    """
    return -20.0 * exp(-0.2 * sqrt(0.5 * (x * x + y * y))) - exp(0.5 * (cos(2 * pi * x) + cos(2 * pi * y))) + e + 20


def get_bounds(name: str, dimension: int) -> tp.List[tp.Tuple[float, float]]:
    """Usual search box of a registered function, in the given dimension"""
    registry.lookup(name)
    low, high = registry.get_info(name)["domain"]
    return [(low, high)] * dimension
