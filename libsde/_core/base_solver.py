# Copyright 2020 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import abc
import logging

import torch

from . import misc
from .base_sde import BaseSDE
from .config import IntegrationConfig
from .errors import ConfigurationError, EvaluationError, IntegrationError
from .._brownian import RandomSource, WienerIncrements
from ..types import ConvergenceCheck, Optional, StateCheck, Tensor, Tensors, Vector

logger = logging.getLogger(__name__)


class BaseSDESolver(metaclass=abc.ABCMeta):
    """API for fixed step solvers of SDEs with diagonal noise.

    A solver owns the current state `y`, the time `t`, the drift and diffusion
    buffers `f` and `g` and the Wiener increment generator. `step(H)` moves
    the state from `t` to `t + H` with internal steps of size
    `h = dt * multiplier`; each internal step draws fresh increments,
    evaluates the SDE at the current state and commits the state returned by
    `advance`.
    """

    strong_order = None
    weak_order = None
    sde_type = None
    # Set by schemes that need the (dW, dZ) pair instead of dW alone.
    correlated_increments = False
    notes = "Only diagonal noise is handled."

    def __init__(self,
                 sde: Optional[BaseSDE] = None,
                 y0: Optional[Vector] = None,
                 config: Optional[IntegrationConfig] = None,
                 random_source: Optional[RandomSource] = None,
                 check_state: Optional[StateCheck] = None,
                 check_convergence: Optional[ConvergenceCheck] = None,
                 **unused_kwargs):
        misc.handle_unused_kwargs(unused_kwargs, msg=self.__class__.__name__)
        del unused_kwargs

        super(BaseSDESolver, self).__init__()
        self.sde = sde
        self.config = IntegrationConfig() if config is None else config
        self.random_source = random_source
        # Sources built from the config are rebuilt on every `initialize`, so seed changes take effect.
        self._owns_random_source = random_source is None
        self.check_state = check_state
        self.check_convergence = check_convergence

        # Placeholders for error control; not used by fixed step integration.
        self.atol = 1e-6
        self.rtol = 1e-4

        self.reset()
        self._y = None if y0 is None else misc.as_state(y0)

    def __repr__(self):
        return f"{self.__class__.__name__} of strong order: {self.strong_order}, and weak order: {self.weak_order}"

    @property
    def description(self):
        summary = self.__doc__.strip().splitlines()[0] if self.__doc__ else self.__class__.__name__
        return (f"{summary}\n"
                f"Strong order of convergence: {self.strong_order}\n"
                f"Weak order of convergence: {self.weak_order}\n"
                f"{self.notes}")

    ########################################
    #            state and setup           #
    ########################################

    def reset(self):
        """Drop all buffers and counters; `initialize` must be called again before stepping."""
        self._y = None
        self.t = 0.
        self.h = 0.
        self.H = 0.
        self.f = None
        self.g = None
        self.nfe = 0
        self.converged = False
        self.wiener = None
        self.extra = ()

    def set_system(self, sde: BaseSDE):
        self.sde = sde

    def set_state(self, y0: Vector):
        self._y = misc.as_state(y0)

    def set_external_step(self, H: float):
        self.H = H

    @property
    def y(self):
        return self._y

    @y.setter
    def y(self, value):
        self.set_state(value)

    @property
    def initialized(self):
        return self.wiener is not None

    def init_extra_solver_state(self, y0: Tensor) -> Tensors:
        """Allocate scheme specific buffers, e.g. support vectors."""
        return ()

    def initialize(self):
        """Prepare a new run starting at t=0 from the current state.

        Calling it again restarts the run: buffers are reallocated, time and
        the evaluation counter go back to zero. A random source built from
        the config is rebuilt with the current `config.seed`; one passed in
        by the caller is reseeded.

        Raises:
            ConfigurationError: No system or initial state, invalid step sizes
                or horizon, or the state does not match the system dimension.
        """
        if self.sde is None:
            raise ConfigurationError("No system of SDEs has been set.")
        if self._y is None:
            raise ConfigurationError("No initial state has been set.")
        self.config.validate()
        self.sde.check_dimension()
        if self.sde.sde_type is not None and self.sde_type is not None and self.sde.sde_type != self.sde_type:
            raise ConfigurationError(f"SDE is of type {self.sde.sde_type} but solver is for type {self.sde_type}.")

        d = self.sde.dimension
        if self._y.shape != (d,):
            raise ConfigurationError(f"Initial state must be of shape ({d},), but got {tuple(self._y.shape)}.")

        y0 = self._y
        if self._owns_random_source or self.random_source is None:
            self.random_source = self.config.make_random_source(dtype=y0.dtype, device=y0.device)
            self._owns_random_source = True
        else:
            self.random_source.reseed()

        self.h = self.config.h
        self.t = 0.
        self.nfe = 0
        self.converged = False
        self.wiener = WienerIncrements(dimension=d, dt=self.config.dt, multiplier=self.config.multiplier,
                                       random_source=self.random_source, correlated=self.correlated_increments)
        self.f = torch.zeros(d, dtype=y0.dtype, device=y0.device)
        self.g = torch.zeros(d, d, dtype=y0.dtype, device=y0.device)
        self.extra = self.init_extra_solver_state(y0)

        logger.info(f"Initialized {self.__class__.__name__} for {self.sde!r}: h={self.h}, seed={self.random_source.seed}")
        return self

    ########################################
    #               stepping               #
    ########################################

    @abc.abstractmethod
    def advance(self, t: float, h: float, dW: Tensor, dZ: Tensor, y0: Tensor) -> Tensor:
        """Take one internal step of size h from state y0.

        The drift and diffusion at (t, y0) are available as `self.f` and
        `self.g` when this is called.

        Args:
            t: Current time.
            h: Internal step size.
            dW: Wiener increment over the step, Tensor of size (d,).
            dZ: Double integral increment over the step, Tensor of size (d,).
                Zero for schemes that do not ask for correlated increments.
            y0: Tensor of size (d,).

        Returns:
            y1, a Tensor of size (d,).
        """
        raise NotImplementedError

    def step(self, H: Optional[float] = None) -> float:
        """Step the integration from the current time t to t+H, and return the elapsed time.

        Args:
            H: External step size. Defaults to the last value set with
                `set_external_step` (or the horizon during `integrate`).

        Raises:
            IntegrationError: The solver is not initialized, H is not a
                positive integer multiple of the internal step, or the system
                evaluation failed during a sub-step.
        """
        if H is not None:
            self.H = H
        H = self.H
        if not self.initialized:
            raise IntegrationError("The solver must be initialized before stepping.", t=self.t)
        if not H > 0:
            raise IntegrationError(f"External step size H must be positive, but got {H}.", t=self.t)
        if not misc.is_multiple(H, self.h):
            raise IntegrationError(f"External step size H={H} is not a multiple of the internal step size "
                                   f"h={self.h}.", t=self.t)

        num_steps = misc.num_substeps(H, self.h)
        if num_steps < 1:
            raise IntegrationError(f"External step size H={H} is shorter than the internal step size h={self.h}.",
                                   t=self.t)

        t_start = self.t
        for _ in range(num_steps):
            t = self.t
            dW, dZ = self.wiener()
            try:
                self.f, self.g = self.sde.evaluate(t, self._y)
                y1 = self.advance(t, self.h, dW, dZ, self._y)
            except EvaluationError as e:
                raise IntegrationError(f"Evaluation of the SDE failed at t={t}: {e}", t=t) from e

            if self.check_state is not None:
                self.check_state(y1)
            if self.check_convergence is not None:
                self.converged = bool(self.check_convergence(y1))

            self._y = y1
            self.nfe += 1
            # Time is counted in internal steps since `initialize`.
            self.t = self.nfe * self.h
        return self.t - t_start

    def integrate(self) -> Tensor:
        """Integrate from t=0 to the horizon `maxt` in one external step and return the final state."""
        self.initialize()
        self.step(self.config.maxt)
        return self._y
