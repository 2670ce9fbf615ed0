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

import time

import torch

from ..settings import SEED_FROM_TIME
from ..types import Optional, Sequence, Tensor, Union


class RandomSource(object):
    """Seeded source of standard normal variates.

    The same seed reproduces the same sequence of draws within one
    installation. Each solver should own its own source; a single source
    shared between concurrently running solvers needs external locking.

    To use:
    >>> rs = RandomSource(seed=42)
    >>> rs.normal((2, 3)).shape
    torch.Size([2, 3])
    """

    def __init__(self,
                 seed: int = SEED_FROM_TIME,
                 dtype: Optional[torch.dtype] = None,
                 device: Optional[Union[str, torch.device]] = None):
        """Initialize the random source.

        Args:
            seed (int): Seed of the generator. `SEED_FROM_TIME` derives a
                seed from the wall clock each time the source is reseeded.
            dtype (torch.dtype): The dtype of the draws. Defaults to float64.
            device (torch.device): The device of the draws. Defaults to cpu.
        """
        self._requested_seed = seed
        self.dtype = torch.float64 if dtype is None else dtype
        self.device = torch.device('cpu') if device is None else torch.device(device)
        self._generator = torch.Generator(self.device)
        self.seed = None
        self.reseed()

    def __repr__(self):
        return f"{self.__class__.__name__}(seed={self.seed}, dtype={self.dtype}, device={self.device})"

    def reseed(self):
        """Restart the sequence from the configured seed."""
        if self._requested_seed == SEED_FROM_TIME:
            self.seed = int(time.time() * 1000) % (2 ** 63)
        else:
            self.seed = int(self._requested_seed)
        self._generator.manual_seed(self.seed)
        return self

    def normal(self, size: Sequence[int]) -> Tensor:
        """Draw a tensor of independent N(0, 1) variates."""
        return torch.randn(tuple(size), dtype=self.dtype, device=self.device, generator=self._generator)

    def next_gaussian(self) -> float:
        return self.normal((1,)).item()
