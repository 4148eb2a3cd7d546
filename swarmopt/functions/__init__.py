# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .corefuncs import registry as registry
from .corefuncs import ackley_2d as ackley_2d
from .corefuncs import get_bounds as get_bounds
