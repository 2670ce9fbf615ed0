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

"""Example systems with known solutions."""

import math

import torch

from ._core.base_sde import BaseSDE
from .settings import SDE_TYPES


class LinearSDE(BaseSDE):
    """N identical, decoupled copies of dX = (-3X + 1) dt + sigma dW.

    With X(0) = 1 the expected solution is E[X(t)] = 2/3 exp(-3t) + 1/3.
    The diffusion is constant, so the Ito and Stratonovich drifts agree and
    every scheme applies.
    """

    def __init__(self, dimension=1, sigma=0.2, name='LinearSDE'):
        super(LinearSDE, self).__init__(dimension=dimension, name=name)
        self.sigma = sigma

    def f(self, t, y):
        return -3 * y + 1

    def g(self, t, y):
        return torch.full_like(y, self.sigma)

    @staticmethod
    def mean(t, y0=1.):
        return (y0 - 1 / 3) * math.exp(-3 * t) + 1 / 3


class GeometricBrownian(BaseSDE):
    """N decoupled copies of dX = mu X dt + sigma X dW.

    Read in the Ito sense by default; `analytical_sample` gives the exact
    solution driven by the Brownian motion `W_t` at time `t`.
    """

    def __init__(self, dimension=1, mu=0.5, sigma=0.5, sde_type=SDE_TYPES.ito, name='GeometricBrownian'):
        super(GeometricBrownian, self).__init__(dimension=dimension, name=name, sde_type=sde_type)
        self.mu = mu
        self.sigma = sigma

    def f(self, t, y):
        return self.mu * y

    def g(self, t, y):
        return self.sigma * y

    def analytical_sample(self, y0, t, W_t):
        ito_correction = .5 * self.sigma ** 2 if self.sde_type == SDE_TYPES.ito else 0.
        return y0 * torch.exp((self.mu - ito_correction) * t + self.sigma * W_t)
