# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common import errors


class Bounds:
    """Axis-aligned box of the search space, one (min, max) pair per dimension.
    It is both the domain where particles are initialized and the domain
    they are clamped into after each update.

    Parameters
    ----------
    bounds: sequence of (min, max) pairs, or array of shape (dimension, 2)
        the bounds for each dimension, with min <= max
    dimension: int (optional)
        expected number of dimensions, checked against the bounds if provided

    Note
    ----
    All checks are performed at instantiation, so that an invalid box is
    rejected before anything else is allocated.
    """

    def __init__(self, bounds: tp.BoundsLike, dimension: tp.Optional[int] = None) -> None:
        try:
            array = np.array(bounds, dtype=float)
        except (TypeError, ValueError) as e:
            raise errors.SwarmValueError(f"Bounds must be a sequence of (min, max) pairs, got {bounds!r}") from e
        if array.ndim != 2 or array.shape[1] != 2:
            raise errors.SwarmValueError(
                f"Bounds must be of shape (dimension, 2), got shape {array.shape}"
            )
        if not array.shape[0]:
            raise errors.SwarmValueError("Bounds must have at least one dimension")
        if dimension is not None and array.shape[0] != dimension:
            raise errors.SwarmValueError(
                f"Expected bounds for {dimension} dimension(s) but got {array.shape[0]}"
            )
        if not np.all(np.isfinite(array)):
            raise errors.SwarmValueError(f"Bounds must be finite, got {array.tolist()}")
        inverted = np.where(array[:, 0] > array[:, 1])[0]
        if inverted.size:
            raise errors.SwarmValueError(
                f"Lower bound is above upper bound for dimension(s) {inverted.tolist()}: "
                f"{array[inverted].tolist()}"
            )
        array.flags.writeable = False
        self._array = array

    @property
    def dimension(self) -> int:
        return self._array.shape[0]

    @property
    def lower(self) -> np.ndarray:
        return self._array[:, 0]

    @property
    def upper(self) -> np.ndarray:
        return self._array[:, 1]

    def clip(self, data: np.ndarray) -> np.ndarray:
        """Saturates the data into the box: values outside are pinned to the
        closest bound.
        """
        return np.clip(data, self.lower, self.upper)

    def contains(self, data: tp.ArrayLike) -> bool:
        data = np.asarray(data, dtype=float)
        return bool(np.all(self.lower <= data) and np.all(data <= self.upper))

    def tolist(self) -> tp.List[tp.List[float]]:
        return self._array.tolist()  # type: ignore

    def __len__(self) -> int:
        return self.dimension

    def __eq__(self, other: tp.Any) -> bool:
        if not isinstance(other, Bounds):
            return False
        return bool(np.array_equal(self._array, other._array))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.tolist()})"
