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

import numbers

from . import misc
from .errors import ConfigurationError
from .._brownian.random_source import RandomSource
from ..settings import SEED_FROM_TIME


class IntegrationConfig(object):
    """Step sizes, horizon and seed shared by the solvers of one run.

    Args:
        dt (float): Step size of the Wiener process, i.e. the micro step.
        multiplier (int): Number of Wiener increments summed into one
            internal integration step, so that the solver steps by
            `dt * multiplier`.
        maxt (float): Integration horizon; `integrate` runs from 0 to `maxt`.
        seed (int): Seed of the random source. `SEED_FROM_TIME` (-1) asks for
            a clock-derived, non-reproducible seed.
    """

    def __init__(self, dt: float = 0.01, multiplier: int = 1, maxt: float = 100., seed: int = SEED_FROM_TIME):
        self.dt = dt
        self.multiplier = multiplier
        self.maxt = maxt
        self.seed = seed

    def __repr__(self):
        return (f"{self.__class__.__name__}(dt={self.dt}, multiplier={self.multiplier}, maxt={self.maxt}, "
                f"seed={self.seed})")

    @property
    def h(self):
        return self.dt * self.multiplier

    def validate(self):
        misc.check_positive('dt', self.dt)
        misc.check_positive('maxt', self.maxt)
        if isinstance(self.multiplier, bool) or not isinstance(self.multiplier, numbers.Integral) \
                or self.multiplier < 1:
            raise ConfigurationError(f"`multiplier` must be a positive integer, but got {self.multiplier}.")
        if not isinstance(self.seed, numbers.Integral):
            raise ConfigurationError(f"`seed` must be an integer, but got {self.seed}.")
        return self

    def make_random_source(self, dtype=None, device=None) -> RandomSource:
        return RandomSource(seed=self.seed, dtype=dtype, device=device)
