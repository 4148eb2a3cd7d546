# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import enum
import numbers
import logging
import warnings
import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common import errors
from swarmopt.common import tools
from swarmopt.common.decorators import Registry
from . import particles
from . import records
from .bounds import Bounds
from .fitness import less_than
from .particles import COEFF_W, COEFF_CP, COEFF_CG


logger = logging.getLogger(__name__)
registry: Registry["ConfPSO"] = Registry()
STATIC_PARTICLES = 20  # number of particles used by run_2d_static if not configured
RECOMMENDED_OMEGA_RANGE = (0.4, 0.9)
RandomStateLike = tp.Union[None, int, np.random.RandomState]
_IterationCallBack = tp.Callable[["ParticleSwarm"], None]


def _is_integer(value: tp.Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


class SwarmState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    RUNNING = "running"
    DONE = "done"


class SwarmResult(tp.NamedTuple):
    """Outcome of a swarm run"""

    position: np.ndarray
    value: float
    num_iterations: int


class XY(tp.NamedTuple):
    """Best position for 2-dimensional runs"""

    x: float
    y: float


class ParticleSwarm:  # pylint: disable=too-many-instance-attributes
    """Particle swarm optimization of an objective function over a box.

    The swarm goes through the states uninitialized -> ready -> running -> done:

    - :code:`initialize()` creates the particles at random positions within the bounds,
    - :code:`run()` then alternates, for max_iterations iterations, an evaluation phase
      (all particles are evaluated, personal and global bests are recorded) and an update
      phase (all particles move toward the global best), and provides the global best.

    A swarm can only be run once, a new run requires a new instance.

    Parameters
    ----------
    objective: callable
        function to optimize, taking the position as a np.ndarray and returning a float
    bounds: sequence of (min, max) pairs
        the search box, one pair per dimension
    fitness: callable
        fitness(a, b) returns True iff value a is preferred over value b
        (defaults to less_than, i.e. minimization)
    particle_count: int
        number of particles in the swarm
    max_iterations: int
        number of evaluation/update iterations
    config: ConfPSO
        coefficients of the velocity update (defaults to ConfPSO())
    random_state: int or np.random.RandomState (optional)
        seed or random state to draw from. If not provided, a random state is
        seeded from numpy's global random generator when first needed.
    dimension: int (optional)
        expected dimension, checked against the bounds if provided
    """

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        objective: tp.ObjectiveLike,
        bounds: tp.BoundsLike,
        fitness: tp.FitnessLike = less_than,
        particle_count: int = STATIC_PARTICLES,
        max_iterations: int = 1000,
        config: tp.Optional["ConfPSO"] = None,
        random_state: RandomStateLike = None,
        dimension: tp.Optional[int] = None,
    ) -> None:
        if not callable(objective):
            raise errors.SwarmTypeError(f"Objective function must be callable, got {objective!r}")
        if not callable(fitness):
            raise errors.SwarmTypeError(f"Fitness predicate must be callable, got {fitness!r}")
        if dimension is not None and (not _is_integer(dimension) or dimension < 1):
            raise errors.SwarmValueError(f"Dimension must be strictly positive, got {dimension}")
        if not _is_integer(particle_count) or particle_count < 1:
            raise errors.SwarmValueError(f"Particle count must be a strictly positive integer, got {particle_count}")
        if not _is_integer(max_iterations) or max_iterations < 0:
            raise errors.SwarmValueError(f"Number of iterations must be a non-negative integer, got {max_iterations}")
        self.bounds = Bounds(bounds, dimension=dimension)
        self.objective = objective
        self.fitness = fitness
        self.particle_count = int(particle_count)
        self.max_iterations = int(max_iterations)
        self._config = ConfPSO() if config is None else config
        self.name = self._config.name
        low, high = RECOMMENDED_OMEGA_RANGE
        if not low <= self._config.omega <= high:
            warnings.warn(
                f"Inertia weight omega={self._config.omega} is outside of the recommended range [{low}, {high}]",
                errors.InefficientSettingsWarning,
            )
        if isinstance(random_state, np.random.RandomState) or random_state is None:
            self._random_state = random_state
        elif _is_integer(random_state) and 0 <= random_state < 2 ** 32:
            self._random_state = np.random.RandomState(random_state)
        else:
            raise errors.SwarmValueError(
                f"Random state must be a np.random.RandomState or a seed in [0, 2**32), got {random_state!r}"
            )
        # instance state
        self.state = SwarmState.UNINITIALIZED
        self.population: tp.List[particles.Particle] = []
        self.global_best = records.GlobalBest()
        self.num_evaluations = 0  # number of completed evaluation phases
        self.num_iterations = 0  # number of completed evaluation + update iterations
        self._callbacks: tp.Dict[str, tp.List[_IterationCallBack]] = {}

    @property
    def _rng(self) -> np.random.RandomState:
        """np.random.RandomState: random state the swarm pulls from.
        It is seeded from numpy's global random generator if it was not provided.
        """
        if self._random_state is None:
            seed = np.random.randint(2 ** 32, dtype=np.uint32)
            self._random_state = np.random.RandomState(seed)
        return self._random_state

    @property
    def dimension(self) -> int:
        """int: Dimension of the search space."""
        return self.bounds.dimension

    @property
    def config(self) -> "ConfPSO":
        return self._config

    def __repr__(self) -> str:
        return (
            f"Instance of {self.name}(dimension={self.dimension}, particle_count={self.particle_count}, "
            f"max_iterations={self.max_iterations}, state={self.state.value})"
        )

    def register_callback(self, name: str, callback: _IterationCallBack) -> None:
        """Add a callback called at the end of each evaluation phase, with the swarm as
        only argument. This can be useful for custom logging.

        Parameters
        ----------
        name: str
            name of the event to register the callback for (only :code:`iteration` is available)
        callback: callable
            a callable taking the swarm as parameter
        """
        assert name in ["iteration"], f'Only "iteration" events can have callbacks (not {name})'
        self._callbacks.setdefault(name, []).append(callback)

    def remove_all_callbacks(self) -> None:
        """Removes all registered callables"""
        self._callbacks = {}

    def initialize(self) -> None:
        """Creates the particles at random positions within the bounds, and resets the global best."""
        if self.state != SwarmState.UNINITIALIZED:
            raise errors.SwarmStateError(f"Cannot initialize a swarm in state {self.state.value}")
        population: tp.List[particles.Particle] = []
        try:
            for _ in range(self.particle_count):
                particle = particles.Particle(self.dimension)
                particles.initialize(particle, self.bounds, self._rng)
                population.append(particle)
        except MemoryError as e:
            num_built = len(population)
            population.clear()  # release the partial swarm before surfacing the failure
            raise errors.SwarmAllocationError(
                f"Could not allocate the swarm ({num_built}/{self.particle_count} particles "
                f"of dimension {self.dimension} were built)"
            ) from e
        self.population = population
        self.global_best = records.GlobalBest()
        self.state = SwarmState.READY
        logger.debug("Initialized %s particles in %s dimension(s)", self.particle_count, self.dimension)

    def _evaluation_phase(self, is_first_iteration: bool) -> None:
        for particle in self.population:
            records.evaluate_and_record(
                particle, self.objective, self.fitness, self.global_best, is_first_iteration
            )
        self.num_evaluations += 1
        logger.debug("Evaluation %s: global best value is %s", self.num_evaluations, self.global_best.value)
        for callback in self._callbacks.get("iteration", []):
            callback(self)

    def _update_phase(self) -> None:
        global_best_position = self.global_best.position
        assert global_best_position is not None, "Global best must be set by the evaluation phase"
        for particle in self.population:
            particles.update(
                particle,
                self.bounds,
                global_best_position,
                self._rng,
                omega=self._config.omega,
                phip=self._config.phip,
                phig=self._config.phig,
            )

    def run(self) -> SwarmResult:
        """Runs the optimization until max_iterations are completed

        Returns
        -------
        SwarmResult
            global best position and value, and the number of completed iterations

        Note
        ----
        With max_iterations=0, the initial positions are evaluated once to
        provide the best initial particle, and no update is performed.
        """
        if self.state == SwarmState.UNINITIALIZED:
            self.initialize()
        if self.state != SwarmState.READY:
            raise errors.SwarmStateError(
                f"Cannot run a swarm in state {self.state.value}, a new swarm must be created"
            )
        self.state = SwarmState.RUNNING
        logger.info(
            "Running %s with %s particles for %s iterations", self.name, self.particle_count, self.max_iterations
        )
        if not self.max_iterations:
            self._evaluation_phase(is_first_iteration=True)
        for iteration in range(self.max_iterations):
            # the update phase must only start once the global best is settled for this iteration
            self._evaluation_phase(is_first_iteration=not iteration)
            self._update_phase()
            self.num_iterations += 1
        self.state = SwarmState.DONE
        position, value = self.global_best.position, self.global_best.value
        assert position is not None and value is not None
        logger.info("Finished with best value %s at %s", value, position.tolist())
        return SwarmResult(position=position.copy(), value=value, num_iterations=self.num_iterations)


class ConfPSO:
    """Configuration of the particle swarm velocity update:
    :code:`v = omega * v + (rp * phip + rg * phig) * (global_best - x)`
    with rp and rg uniformly drawn in [0, 1] for each particle and iteration.

    Parameters
    ----------
    omega: float
        inertia weight (should be in range [0.4, 0.9])
    phip: float
        cognitive coefficient (should be a little bit above 2)
    phig: float
        social coefficient (should have same or similar value as the cognitive coefficient)
    popsize: int (optional)
        number of particles used when the particle count is not provided (defaults to STATIC_PARTICLES)

    Note
    ----
    This provides a default repr which can be bypassed through set_name
    """

    # pylint: disable=unused-argument
    def __init__(
        self,
        omega: float = COEFF_W,
        phip: float = COEFF_CP,
        phig: float = COEFF_CG,
        popsize: tp.Optional[int] = None,
    ) -> None:
        if popsize is not None and (not _is_integer(popsize) or popsize < 1):
            raise errors.SwarmValueError(f"popsize must be a strictly positive integer, got {popsize}")
        self.omega = float(omega)
        self.phip = float(phip)
        self.phig = float(phig)
        self.popsize = None if popsize is None else int(popsize)
        diff = tools.different_from_defaults(instance=self)
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        self.name = f"{self.__class__.__name__}({params})"

    @property
    def particle_count(self) -> int:
        return STATIC_PARTICLES if self.popsize is None else self.popsize

    def config(self) -> tp.Dict[str, tp.Any]:
        return dict(omega=self.omega, phip=self.phip, phig=self.phig, popsize=self.popsize)

    def __call__(
        self,
        objective: tp.ObjectiveLike,
        bounds: tp.BoundsLike,
        fitness: tp.FitnessLike = less_than,
        max_iterations: int = 1000,
        particle_count: tp.Optional[int] = None,
        random_state: RandomStateLike = None,
    ) -> ParticleSwarm:
        """Creates a swarm with this configuration

        Parameters
        ----------
        objective: callable
            function to optimize, taking the position as a np.ndarray
        bounds: sequence of (min, max) pairs
            the search box
        fitness: callable
            preference between two values (defaults to minimization)
        max_iterations: int
            number of iterations
        particle_count: int (optional)
            number of particles (defaults to the configured particle count)
        random_state: int or np.random.RandomState (optional)
            seed or random state to draw from
        """
        return ParticleSwarm(
            objective,
            bounds,
            fitness=fitness,
            particle_count=self.particle_count if particle_count is None else particle_count,
            max_iterations=max_iterations,
            config=self,
            random_state=random_state,
        )

    def __repr__(self) -> str:
        return self.name

    def set_name(self, name: str, register: bool = False) -> "ConfPSO":
        """Set a new representation for the instance"""
        self.name = name
        if register:
            registry.register_name(name, self)
        return self

    def __eq__(self, other: tp.Any) -> tp.Any:
        if self.__class__ == other.__class__:
            if self.config() == other.config():
                return True
        return False


PSO = ConfPSO().set_name("PSO", register=True)
InertiaPSO = ConfPSO(omega=0.729, phip=1.49445, phig=1.49445).set_name("InertiaPSO", register=True)


# %% entry points


class _Objective2D:
    """Adapts a function of (x, y) into a function of a 2-dimensional position"""

    def __init__(self, function: tp.Objective2DLike) -> None:
        if not callable(function):
            raise errors.SwarmTypeError(f"Objective function must be callable, got {function!r}")
        self.function = function

    def __call__(self, position: np.ndarray) -> float:
        return self.function(float(position[0]), float(position[1]))


# pylint: disable=too-many-arguments
def run_nd(
    objective: tp.ObjectiveLike,
    bounds: tp.BoundsLike,
    dimensions: int,
    fitness: tp.FitnessLike,
    particle_count: int,
    max_iterations: int,
    *,
    config: tp.Optional[ConfPSO] = None,
    random_state: RandomStateLike = None,
) -> np.ndarray:
    """Particle swarm optimization for n-dimensional functions

    Parameters
    ----------
    objective: callable
        function taking a position as a np.ndarray of size dimensions and returning a float
    bounds: sequence of (min, max) pairs
        one pair for each dimension
    dimensions: int
        dimension of the search space (must match the bounds)
    fitness: callable
        fitness(a, b) returns True iff value a is preferred over value b
    particle_count: int
        number of particles
    max_iterations: int
        number of iterations
    config: ConfPSO (optional)
        coefficients of the velocity update
    random_state: int or np.random.RandomState (optional)
        seed or random state to draw from

    Returns
    -------
    np.ndarray
        the best position found
    """
    swarm = ParticleSwarm(
        objective,
        bounds,
        fitness=fitness,
        particle_count=particle_count,
        max_iterations=max_iterations,
        config=config,
        random_state=random_state,
        dimension=dimensions,
    )
    return swarm.run().position


def run_2d(
    objective: tp.Objective2DLike,
    bounds: tp.BoundsLike,
    fitness: tp.FitnessLike,
    particle_count: int,
    max_iterations: int,
    *,
    config: tp.Optional[ConfPSO] = None,
    random_state: RandomStateLike = None,
) -> XY:
    """Particle swarm optimization for functions of 2 variables (x, y)

    This is the same algorithm as run_nd, so both provide the same result
    for a given random state.
    """
    swarm = ParticleSwarm(
        _Objective2D(objective),
        bounds,
        fitness=fitness,
        particle_count=particle_count,
        max_iterations=max_iterations,
        config=config,
        random_state=random_state,
        dimension=2,
    )
    position = swarm.run().position
    return XY(float(position[0]), float(position[1]))


def run_2d_static(
    objective: tp.Objective2DLike,
    bounds: tp.BoundsLike,
    fitness: tp.FitnessLike,
    max_iterations: int,
    *,
    config: tp.Optional[ConfPSO] = None,
    random_state: RandomStateLike = None,
) -> XY:
    """Same as run_2d, with a fixed number of particles provided by the configuration
    (popsize, which defaults to STATIC_PARTICLES)
    """
    config = PSO if config is None else config
    return run_2d(
        objective,
        bounds,
        fitness,
        config.particle_count,
        max_iterations,
        config=config,
        random_state=random_state,
    )
