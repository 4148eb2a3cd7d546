# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
from swarmopt.common import testing
from . import fitness


def test_registry() -> None:
    testing.assert_set_equal(fitness.registry, ["less_than", "greater_than"])


@testing.parametrized(
    smaller=(1.0, 2.0, True, False),
    larger=(2.0, 1.0, False, True),
    equal=(1.0, 1.0, False, False),
    nan=(np.nan, 1.0, False, False),
    inf=(-np.inf, 1.0, True, False),
)
def test_predicates(a: float, b: float, minimizing: bool, maximizing: bool) -> None:
    assert fitness.less_than(a, b) is minimizing
    assert fitness.greater_than(a, b) is maximizing


