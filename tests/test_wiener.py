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

"""Test `RandomSource` and `WienerIncrements`."""
import math

import numpy as np
import pytest
import torch
from scipy.stats import kstest, norm

from libsde import RandomSource, WienerIncrements
from libsde.settings import SEED_FROM_TIME

from .utils import RecordingRandomSource, assert_allclose

torch.set_default_dtype(torch.float64)

D = 4
ALPHA = 0.00001


def test_same_seed_same_draws():
    a, b = RandomSource(seed=1234), RandomSource(seed=1234)
    assert torch.equal(a.normal((50, D)), b.normal((50, D)))
    assert a.next_gaussian() == b.next_gaussian()


def test_different_seeds_differ():
    a, b = RandomSource(seed=1), RandomSource(seed=2)
    assert not torch.equal(a.normal((10,)), b.normal((10,)))


def test_reseed_restarts_sequence():
    rs = RandomSource(seed=99)
    first = rs.normal((20,))
    rs.normal((7,))
    rs.reseed()
    assert torch.equal(rs.normal((20,)), first)


def test_seed_from_time():
    rs = RandomSource(seed=SEED_FROM_TIME)
    assert rs.seed is not None and rs.seed >= 0
    assert isinstance(rs.next_gaussian(), float)


def test_normality():
    samples = RandomSource(seed=7).normal((100000,)).numpy()
    _, pval = kstest(samples, norm(loc=0., scale=1.).cdf)
    assert pval >= ALPHA


@pytest.mark.parametrize('multiplier', [1, 3])
def test_plain_increments(multiplier):
    dt = 0.01
    rs = RecordingRandomSource(seed=5)
    wiener = WienerIncrements(dimension=D, dt=dt, multiplier=multiplier, random_source=rs)

    dW, dZ = wiener()
    N1, = rs.draws
    assert N1.shape == (multiplier, D)
    assert wiener.W.shape == wiener.Z.shape == (multiplier, D)
    assert_allclose(wiener.W, N1 * math.sqrt(dt))
    assert_allclose(dW, N1.sum(dim=0) * math.sqrt(dt))
    assert torch.count_nonzero(dZ) == 0


@pytest.mark.parametrize('multiplier', [1, 3])
def test_correlated_increments(multiplier):
    dt = 0.01
    rs = RecordingRandomSource(seed=5)
    wiener = WienerIncrements(dimension=D, dt=dt, multiplier=multiplier, random_source=rs, correlated=True)

    dW, dZ = wiener()
    N, = rs.draws
    assert N.shape == (multiplier, D, 2)
    N1, N2 = N[..., 0], N[..., 1]
    assert_allclose(dW, (N1 * math.sqrt(dt)).sum(dim=0))
    assert_allclose(dZ, (0.5 * (N1 + N2 / math.sqrt(3)) * dt ** 1.5).sum(dim=0))


def test_increments_are_fresh_each_call():
    wiener = WienerIncrements(dimension=D, dt=0.1, multiplier=2, random_source=RandomSource(seed=3))
    dW1, _ = wiener()
    dW2, _ = wiener()
    assert not torch.equal(dW1, dW2)


def test_increment_moments():
    dt, multiplier, d = 0.01, 4, 200000
    wiener = WienerIncrements(dimension=d, dt=dt, multiplier=multiplier, random_source=RandomSource(seed=11),
                              correlated=True)
    dW, dZ = wiener()
    dW_, dZ_ = dW.numpy(), dZ.numpy()

    # Each micro pair has Var(dW) = dt, Var(dZ) = dt^3 / 3 and Cov(dW, dZ) = dt^2 / 2.
    np.testing.assert_allclose(dW_.var(), multiplier * dt, rtol=0.02)
    np.testing.assert_allclose(dZ_.var(), multiplier * dt ** 3 / 3, rtol=0.02)
    np.testing.assert_allclose(np.mean(dW_ * dZ_), multiplier * dt ** 2 / 2, rtol=0.03)
