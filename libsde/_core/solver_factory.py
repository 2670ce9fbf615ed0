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

from . import methods
from .base_sde import BaseSDE
from .base_solver import BaseSDESolver
from .config import IntegrationConfig
from .._brownian import RandomSource
from ..types import Optional, Union, Vector


def create_solver(method: Union[str, int],
                  sde: Optional[BaseSDE] = None,
                  y0: Optional[Vector] = None,
                  config: Optional[IntegrationConfig] = None,
                  random_source: Optional[RandomSource] = None,
                  **kwargs) -> Optional[BaseSDESolver]:
    """Instantiate the solver for `method`.

    Args:
        method (str or int): One of `METHODS`, or the integer codes 1-5 in
            the order Euler-Maruyama, Euler-Heun, Milstein (Ito), Milstein
            (Stratonovich), SRK15.
        sde (BaseSDE, optional): The system to attach.
        y0 (Tensor or sequence of float, optional): Initial state.
        config (IntegrationConfig, optional): Step sizes, horizon and seed.
        random_source (RandomSource, optional): Source of Gaussian draws.
            Defaults to one built from `config` at `initialize`.
        **kwargs: Passed to the solver, e.g. `check_state`.

    Returns:
        The solver, or `None` if the method is not recognized. Callers must
        check for `None` before use.
    """
    solver_fn = methods.select(method)
    if solver_fn is None:
        return None
    return solver_fn(sde=sde, y0=y0, config=config, random_source=random_source, **kwargs)
