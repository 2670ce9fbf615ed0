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

"""Per-step Wiener increments built from micro increments.

The correlated pair follows Kloeden, Platen and Schurz, "Numerical Solution
of SDE Through Computer Experiments", Springer, 1994: for one micro step of
size dt and independent N1, N2 ~ N(0, 1),

    dW = N1 * sqrt(dt),
    dZ = 0.5 * (N1 + N2 / sqrt(3)) * dt ** 1.5,

where dZ approximates the double integral int int dW ds.
"""
import math

import torch

from .random_source import RandomSource
from ..types import Tensor, Tuple

_rsqrt3 = 1 / math.sqrt(3)


class WienerIncrements(object):
    """Generates (dW, dZ) for one internal step of `multiplier` micro steps.

    The micro increments of the last call are kept in `W` and `Z`, each of
    shape (multiplier, dimension).
    """

    def __init__(self, dimension: int, dt: float, multiplier: int, random_source: RandomSource,
                 correlated: bool = False):
        self.dimension = dimension
        self.dt = dt
        self.multiplier = multiplier
        self.random_source = random_source
        self.correlated = correlated

        dtype, device = random_source.dtype, random_source.device
        self.W = torch.zeros(multiplier, dimension, dtype=dtype, device=device)
        self.Z = torch.zeros(multiplier, dimension, dtype=dtype, device=device)

        # Avoid having if-statements in method body for speed.
        self._generate = self._generate_correlated if correlated else self._generate_plain

    def __repr__(self):
        return (f"{self.__class__.__name__}(dimension={self.dimension}, dt={self.dt}, "
                f"multiplier={self.multiplier}, correlated={self.correlated})")

    def __call__(self) -> Tuple[Tensor, Tensor]:
        return self._generate()

    def _generate_plain(self) -> Tuple[Tensor, Tensor]:
        N1 = self.random_source.normal((self.multiplier, self.dimension))
        self.W = N1 * math.sqrt(self.dt)
        self.Z = torch.zeros_like(self.W)
        return self.W.sum(dim=0), self.Z.sum(dim=0)

    def _generate_correlated(self) -> Tuple[Tensor, Tensor]:
        # N1 and N2 are drawn in pairs for every (micro step, component).
        N = self.random_source.normal((self.multiplier, self.dimension, 2))
        N1, N2 = N[..., 0], N[..., 1]
        self.W = N1 * math.sqrt(self.dt)
        self.Z = 0.5 * (N1 + _rsqrt3 * N2) * self.dt ** 1.5
        return self.W.sum(dim=0), self.Z.sum(dim=0)
