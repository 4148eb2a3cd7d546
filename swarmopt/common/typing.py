# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Definitions of some convenient types.
If you know better practices, feel free to submit it ;)
"""
# pylint: disable=unused-import
# structures
from typing import Any as Any
from typing import Type as Type
from typing import TypeVar as TypeVar
from typing import Optional as Optional
from typing import Union as Union

# containers
from typing import Dict as Dict
from typing import Tuple as Tuple
from typing import List as List
from typing import Sequence as Sequence
from typing import NamedTuple as NamedTuple

# iterables
from typing import Iterator as Iterator
from typing import Iterable as Iterable

# others
from typing import Callable as Callable
from typing import Hashable as Hashable
from typing_extensions import Protocol

#
import numpy as _np


ArrayLike = Union[Tuple[float, ...], List[float], _np.ndarray]
BoundsLike = Union[Sequence[Sequence[float]], _np.ndarray]


# %% Protocol definitions for the callables provided by the user


class ObjectiveLike(Protocol):
    # pylint: disable=pointless-statement, unused-argument

    def __call__(self, position: _np.ndarray) -> float:
        ...


class Objective2DLike(Protocol):
    # pylint: disable=pointless-statement, unused-argument

    def __call__(self, x: float, y: float) -> float:
        ...


class FitnessLike(Protocol):
    """Preference between two objective values: returns True if a is
    strictly preferred over b
    """

    # pylint: disable=pointless-statement, unused-argument

    def __call__(self, a: float, b: float) -> bool:
        ...
