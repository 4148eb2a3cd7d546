# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .common import typing as typing
from .common import errors as errors
from .optimization.particles import COEFF_W as COEFF_W
from .optimization.particles import COEFF_CP as COEFF_CP
from .optimization.particles import COEFF_CG as COEFF_CG
from .optimization.swarm import STATIC_PARTICLES as STATIC_PARTICLES
from .optimization.swarm import ParticleSwarm as ParticleSwarm
from .optimization.swarm import ConfPSO as ConfPSO
from .optimization.swarm import SwarmResult as SwarmResult
from .optimization.swarm import XY as XY
from .optimization.swarm import run_nd as run_nd
from .optimization.swarm import run_2d as run_2d
from .optimization.swarm import run_2d_static as run_2d_static
from .optimization import fitness as fitness
from .optimization import callbacks as callbacks
from . import functions as functions


__all__ = [
    "run_nd",
    "run_2d",
    "run_2d_static",
    "ParticleSwarm",
    "ConfPSO",
    "SwarmResult",
    "XY",
    "fitness",
    "callbacks",
    "functions",
    "errors",
    "typing",
    "COEFF_W",
    "COEFF_CP",
    "COEFF_CG",
    "STATIC_PARTICLES",
]


__version__ = "0.1.0"
