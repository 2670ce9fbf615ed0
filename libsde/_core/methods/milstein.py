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
"""Derivative-free Milstein schemes from

Kloeden, Platen and Schurz. "Numerical Solution of SDE Through Computer
Experiments." Springer, 1994, pp. 150-153.

The product g g' is approximated by evaluating the diffusion at a support
state shifted by g sqrt(h), so users never supply derivatives. The Ito
variant also shifts the support by f h.
"""

import abc
import math

from .. import base_solver
from ...settings import SDE_TYPES


class BaseMilstein(base_solver.BaseSDESolver, metaclass=abc.ABCMeta):
    strong_order = 1.0
    weak_order = 1.0
    notes = "Only diagonal noise is handled. Needs no derivatives of the diffusion (Runge-Kutta approach)."

    def init_extra_solver_state(self, y0):
        # Support state and the drift/diffusion evaluated there.
        return y0.new_zeros(y0.shape), y0.new_zeros(y0.shape), y0.new_zeros(y0.shape + y0.shape)

    @abc.abstractmethod
    def v_term(self, dW, h):
        raise NotImplementedError

    @abc.abstractmethod
    def support_state(self, y0, g, h, sqrt_h):
        raise NotImplementedError

    def advance(self, t, h, dW, dZ, y0):
        sqrt_h = math.sqrt(h)
        g = self.g.diagonal()

        y_support = self.support_state(y0, g, h, sqrt_h)
        f_support, g_support = self.sde.evaluate(t, y_support)
        self.extra = (y_support, f_support, g_support)

        gdg_prod = (g_support.diagonal() - g) / sqrt_h
        return y0 + self.f * h + g * dW + .5 * gdg_prod * self.v_term(dW, h)


class MilsteinIto(BaseMilstein):
    """Explicit Milstein method for Ito SDEs (Kloeden et al., 1994).

    y1 = y0 + f h + g dW + 0.5 g g' (dW^2 - h), with g' taken at y0 + f h + g sqrt(h).
    """
    sde_type = SDE_TYPES.ito

    def v_term(self, dW, h):
        return dW ** 2 - h

    def support_state(self, y0, g, h, sqrt_h):
        return y0 + self.f * h + g * sqrt_h


class MilsteinStratonovich(BaseMilstein):
    """Explicit Milstein method for Stratonovich SDEs (Kloeden et al., 1994).

    y1 = y0 + f h + g dW + 0.5 g g' dW^2, with g' taken at y0 + g sqrt(h).
    """
    sde_type = SDE_TYPES.stratonovich

    def v_term(self, dW, h):
        return dW ** 2

    def support_state(self, y0, g, h, sqrt_h):
        return y0 + g * sqrt_h
