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

"""Helpers to measure the strong order of convergence of a scheme."""

import numpy as np
import torch
from scipy import stats

from .types import Sequence, Tensor, Union


def to_numpy(x):
    return x.detach().cpu().numpy() if isinstance(x, torch.Tensor) else np.asarray(x)


def mse(x: Tensor, y: Tensor) -> float:
    """Mean over sample paths (dim 0) of the squared Euclidean error."""
    x, y = to_numpy(x), to_numpy(y)
    return float(np.mean(np.sum((x - y) ** 2, axis=-1)))


def log(x: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    """Compute element-wise log of a sequence of floats."""
    return np.log(np.array(x))


def linregress_slope(x, y):
    """Return the slope of a least-squares regression for two sets of measurements."""
    return stats.linregress(x, y)[0]


def strong_order(dts: Sequence[float], mses: Sequence[float]) -> float:
    """Estimate the strong order as the slope of log(sqrt(mse)) against log(dt)."""
    return linregress_slope(log(dts), .5 * log(mses))
