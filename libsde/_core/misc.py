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
import warnings

import torch

from .errors import ConfigurationError


def handle_unused_kwargs(unused_kwargs, msg=None):
    if len(unused_kwargs) > 0:
        if msg is not None:
            warnings.warn(f"{msg}: Unexpected arguments {unused_kwargs}")
        else:
            warnings.warn(f"Unexpected arguments {unused_kwargs}")


def is_finite(t):
    return bool(torch.all(torch.isfinite(t)))


def is_multiple(value, step, rtol=1e-9):
    """Whether `value` is an integer multiple of `step`, up to floating point noise."""
    ratio = value / step
    return abs(ratio - round(ratio)) <= rtol * max(1., abs(ratio))


def num_substeps(value, step):
    return int(round(value / step))


def as_state(y, dtype=None, device=None):
    """Convert an initial condition to a 1-D floating point tensor."""
    if torch.is_tensor(y):
        if dtype is None:
            dtype = y.dtype if y.is_floating_point() else torch.float64
        y = y.to(dtype=dtype, device=device)
    else:
        y = torch.as_tensor(y, dtype=torch.float64 if dtype is None else dtype, device=device)
    if y.dim() == 0:
        y = y.unsqueeze(0)
    if y.dim() != 1:
        raise ConfigurationError(f"The state must be a 1-D vector, but got shape {tuple(y.shape)}.")
    return y.clone()


def check_positive(name, value):
    if not (isinstance(value, (int, float)) and math.isfinite(value) and value > 0):
        raise ConfigurationError(f"`{name}` must be a positive finite number, but got {value}.")
