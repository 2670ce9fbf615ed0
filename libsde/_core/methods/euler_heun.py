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

from .. import base_solver
from ...settings import SDE_TYPES


class EulerHeun(base_solver.BaseSDESolver):
    """Explicit Euler-Heun method for Stratonovich SDEs (Kloeden et al., 1994).

    y1 = y0 + f h + 0.5 (g + g') dW, where g' is the diffusion at y0 + g dW.
    """
    strong_order = 0.5
    weak_order = 1.0
    sde_type = SDE_TYPES.stratonovich

    def advance(self, t, h, dW, dZ, y0):
        g = self.g.diagonal()
        y_prime = y0 + g * dW
        _, g_prime = self.sde.evaluate(t, y_prime)

        return y0 + self.f * h + (g + g_prime.diagonal()) * dW * 0.5
