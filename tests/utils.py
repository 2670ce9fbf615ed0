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

import math

import torch

from libsde import RandomSource


def assert_allclose(actual, expected, rtol=1e-7, atol=1e-10):
    torch.testing.assert_close(actual, expected, rtol=rtol, atol=atol, check_dtype=False)


class RecordingRandomSource(RandomSource):
    """Keeps every tensor of draws it hands out."""

    def __init__(self, *args, **kwargs):
        self.draws = []
        super(RecordingRandomSource, self).__init__(*args, **kwargs)

    def reseed(self):
        self.draws = []
        return super(RecordingRandomSource, self).reseed()

    def normal(self, size):
        draws = super(RecordingRandomSource, self).normal(size)
        self.draws.append(draws)
        return draws

    def brownian_motion(self, dt):
        """W at the end of the run, from the first member of every recorded draw."""
        total = 0.
        for draws in self.draws:
            N1 = draws[..., 0] if draws.dim() == 3 else draws
            total = total + N1.sum(dim=0)
        return total * math.sqrt(dt)


class ReplayRandomSource(RandomSource):
    """Replays the draws one component `column` received in a higher dimensional run."""

    def __init__(self, draws, column):
        self._draws = [d[:, column:column + 1] for d in draws]
        self._index = 0
        super(ReplayRandomSource, self).__init__(seed=0, dtype=draws[0].dtype)

    def reseed(self):
        self._index = 0
        return super(ReplayRandomSource, self).reseed()

    def normal(self, size):
        draws = self._draws[self._index]
        assert tuple(draws.shape) == tuple(size)
        self._index += 1
        return draws
