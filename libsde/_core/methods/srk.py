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

"""Strong order 1.5 scheme from

Kloeden, Platen and Schurz. "Numerical Solution of SDE Through Computer
Experiments." Springer, 1994, p. 390.

Derivative-free: the derivatives of the drift and diffusion are replaced by
differences of evaluations at four support states per noise source.
"""

import collections
import math

import torch

from .. import base_solver
from ...settings import SDE_TYPES

_r3 = 1 / 3

# Support states of size (m, d), one row per noise source, with the drift (m, d) and diffusion (m, d, d) there.
Support = collections.namedtuple('Support', ['y', 'f', 'g'])


class SRK15(base_solver.BaseSDESolver):
    """Explicit stochastic Runge-Kutta method for Ito SDEs (Kloeden et al., 1994)."""
    strong_order = 1.5
    weak_order = 1.5
    sde_type = SDE_TYPES.ito
    correlated_increments = True

    def init_extra_solver_state(self, y0):
        m = d = y0.size(0)
        return tuple(
            Support(y=y0.new_zeros(m, d), f=y0.new_zeros(m, d), g=y0.new_zeros(m, d, d))
            for _ in range(4)
        )

    def _evaluate_rows(self, t, ys):
        fs, gs = zip(*[self.sde.evaluate(t, y) for y in ys])
        return Support(y=ys, f=torch.stack(fs, dim=0), g=torch.stack(gs, dim=0))

    def advance(self, t, h, dW, dZ, y0):
        m = y0.size(0)
        sqrt_h = math.sqrt(h)
        idx = torch.arange(m, device=y0.device)
        f, g = self.f, self.g.diagonal()

        # Row j perturbs the state along column j of the diffusion. The time is kept at t for every support.
        base = y0 + f * h / m
        s1 = self._evaluate_rows(t, base + self.g.t() * sqrt_h)
        s2 = self._evaluate_rows(t, base - self.g.t() * sqrt_h)
        g1_cols = s1.g[idx, :, idx]
        s3 = self._evaluate_rows(t, s1.y + g1_cols * sqrt_h)
        s4 = self._evaluate_rows(t, s1.y - g1_cols * sqrt_h)
        self.extra = (s1, s2, s3, s4)

        g1, g2, g3, g4 = (s.g[idx, idx, idx] for s in (s1, s2, s3, s4))
        dW2 = dW ** 2

        y1 = y0 + g * dW
        y1 = y1 + ((s1.f - s2.f) * dZ.unsqueeze(-1)).sum(dim=0) / (2 * sqrt_h)
        y1 = y1 + ((s1.f + s2.f).sum(dim=0) - 2 * (m - 2) * f) * h / 4
        y1 = y1 + (g1 - g2) * (dW2 - h) / (4 * sqrt_h)
        y1 = y1 + (g1 - 2 * g + g2) * (dW * h - dZ) / (2 * h)
        y1 = y1 + (g3 - g4 - g1 + g2) * (_r3 * dW2 - h) * dW / (4 * h)
        return y1
