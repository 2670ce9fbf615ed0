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


class EulerMaruyama(base_solver.BaseSDESolver):
    """Explicit Euler-Maruyama method for Ito SDEs (Kloeden et al., 1994).

    y1 = y0 + f h + g dW

    Strong order 1.0 when the noise is additive, i.e. g depends on time only.
    """
    strong_order = 0.5
    weak_order = 1.0
    sde_type = SDE_TYPES.ito

    def advance(self, t, h, dW, dZ, y0):
        return y0 + self.f * h + self.g.diagonal() * dW
