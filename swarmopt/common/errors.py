# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.


# base classes


class SwarmOptError(Exception):
    """Base class for error raised by swarmopt"""


class SwarmWarning(Warning):
    pass


# errors
# pylint: disable=too-many-ancestors


class SwarmValueError(ValueError, SwarmOptError):
    """Invalid input provided by the caller (malformed bounds, dimension mismatch, empty swarm...)
    Always raised before any particle is allocated.
    """


class SwarmTypeError(TypeError, SwarmOptError):
    """Objective or fitness predicate of the wrong kind"""


class SwarmAllocationError(MemoryError, SwarmOptError):
    """The particle buffers could not be acquired.
    The partially built swarm is discarded before this is raised.
    """


class SwarmStateError(RuntimeError, SwarmOptError):
    """Operation not allowed in the current state of the swarm (eg: running a finished swarm)"""


# warnings


class SwarmRuntimeWarning(RuntimeWarning, SwarmWarning):
    """Runtime warning raised by swarmopt"""


class InefficientSettingsWarning(SwarmRuntimeWarning):
    """Optimization settings are not optimal for the swarm"""
