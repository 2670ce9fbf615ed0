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

import abc

import torch

from . import misc
from .errors import ConfigurationError, EvaluationError
from ..settings import SDE_TYPES
from ..types import Tensor, Tuple


class BaseSDE(abc.ABC):
    """Base class for systems of SDEs dX = F(t, X) dt + G(t, X) dW with diagonal noise.

    Subclasses provide either `f_and_g(t, y)` or both `f(t, y)` and `g(t, y)`.
    The drift is a vector of size (d,). The diffusion is either a (d, d)
    matrix or a vector of size (d,) holding its diagonal. Both must be pure
    functions of `(t, y)`: solvers evaluate them several times per step, at
    perturbed states and in no particular order.
    """

    def __init__(self, dimension=1, name='', sde_type=None):
        super(BaseSDE, self).__init__()
        if sde_type is not None and sde_type not in SDE_TYPES:
            raise ValueError(f"Expected sde type in {SDE_TYPES}, but found {sde_type}")
        self.dimension = dimension
        self.name = name
        self.sde_type = sde_type

    def __repr__(self):
        return f"{self.__class__.__name__}(name={self.name!r}, dimension={self.dimension})"

    def f_and_g(self, t, y):
        f = getattr(self, 'f', None)
        g = getattr(self, 'g', None)
        if f is None or g is None:
            raise NotImplementedError("An SDE must define `f_and_g`, or both `f` and `g`.")
        return f(t, y), g(t, y)

    def check_dimension(self):
        d = self.dimension
        if isinstance(d, bool) or not isinstance(d, int) or d <= 0:
            raise ConfigurationError(f"SDE dimension must be a positive integer, but got {d}.")

    def evaluate(self, t, y: Tensor) -> Tuple[Tensor, Tensor]:
        """Compute the drift vector and diffusion matrix at time `t` and state `y`.

        Raises:
            EvaluationError: `y` does not match the dimension, or the drift or
                diffusion has the wrong shape or non-finite entries.
        """
        d = self.dimension
        if y.shape != (d,):
            raise EvaluationError(f"State must be of shape ({d},), but got {tuple(y.shape)}.")

        f, g = self.f_and_g(t, y)
        f = torch.as_tensor(f, dtype=y.dtype, device=y.device)
        g = torch.as_tensor(g, dtype=y.dtype, device=y.device)
        if f.dim() == 0:
            f = f.expand(d)
        if g.dim() == 0:
            g = g.expand(d)
        if g.shape == (d,):
            g = torch.diag_embed(g)

        if f.shape != (d,):
            raise EvaluationError(f"Drift must be of shape ({d},), but got {tuple(f.shape)}.")
        if g.shape != (d, d):
            raise EvaluationError(f"Diffusion must be of shape ({d}, {d}), but got {tuple(g.shape)}.")
        if not misc.is_finite(f):
            raise EvaluationError(f"Drift of {self.name or self.__class__.__name__} is not finite at t={t}: {f}.")
        if not misc.is_finite(g):
            raise EvaluationError(
                f"Diffusion of {self.name or self.__class__.__name__} is not finite at t={t}: {g}.")
        return f, g


class SDEIto(BaseSDE):

    def __init__(self, dimension=1, name=''):
        super(SDEIto, self).__init__(dimension=dimension, name=name, sde_type=SDE_TYPES.ito)


class SDEStratonovich(BaseSDE):

    def __init__(self, dimension=1, name=''):
        super(SDEStratonovich, self).__init__(dimension=dimension, name=name, sde_type=SDE_TYPES.stratonovich)


class LambdaSDE(BaseSDE):
    """Wraps plain callables `f(t, y)` and `g(t, y)` into an SDE."""

    def __init__(self, f, g, dimension=1, name='', sde_type=None):
        super(LambdaSDE, self).__init__(dimension=dimension, name=name, sde_type=sde_type)
        self.f = f
        self.g = g
