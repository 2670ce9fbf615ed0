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

"""Empirical strong order of every scheme on geometric Brownian motion.

Each component of a d-dimensional decoupled system is an independent sample
path, so a single run gives d samples of the terminal error.
"""
import pytest
import torch

import libsde
from libsde import IntegrationConfig, diagnostics
from libsde.settings import METHODS, SDE_TYPES

from . import problems
from .utils import RecordingRandomSource

torch.set_default_dtype(torch.float64)

dts = tuple(2 ** -i for i in range(3, 8))
maxt = 1.


def _terminal_mse(method, sde_type, dimension, dt, seed):
    sde = problems.GeometricBrownian(dimension=dimension, sde_type=sde_type)
    y0 = torch.ones(dimension)
    config = IntegrationConfig(dt=dt, multiplier=1, maxt=maxt, seed=seed)
    source = RecordingRandomSource(seed=seed)
    solver = libsde.create_solver(method, sde=sde, y0=y0, config=config, random_source=source)
    y1 = solver.integrate()
    exact = sde.analytical_sample(y0, maxt, source.brownian_motion(dt))
    return diagnostics.mse(y1.unsqueeze(-1), exact.unsqueeze(-1))


@pytest.mark.parametrize('method, sde_type, dimension, min_order', [
    (METHODS.euler_maruyama, SDE_TYPES.ito, 100, 0.25),
    (METHODS.euler_heun, SDE_TYPES.stratonovich, 100, 0.7),
    (METHODS.milstein_ito, SDE_TYPES.ito, 100, 0.7),
    (METHODS.milstein_stratonovich, SDE_TYPES.stratonovich, 100, 0.7),
    (METHODS.srk15, SDE_TYPES.ito, 48, 1.1),
])
def test_strong_order(method, sde_type, dimension, min_order):
    mses = [_terminal_mse(method, sde_type, dimension, dt, seed=1147) for dt in dts]
    assert diagnostics.strong_order(dts, mses) > min_order


def test_higher_order_schemes_are_more_accurate():
    dt = 2 ** -6
    em = _terminal_mse(METHODS.euler_maruyama, SDE_TYPES.ito, 48, dt, seed=7)
    milstein = _terminal_mse(METHODS.milstein_ito, SDE_TYPES.ito, 48, dt, seed=7)
    srk = _terminal_mse(METHODS.srk15, SDE_TYPES.ito, 48, dt, seed=7)
    assert srk < milstein < em
