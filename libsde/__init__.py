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

from ._brownian import RandomSource, WienerIncrements
from ._core.base_sde import BaseSDE, LambdaSDE, SDEIto, SDEStratonovich
from ._core.base_solver import BaseSDESolver
from ._core.config import IntegrationConfig
from ._core.errors import ConfigurationError, EvaluationError, IntegrationError
from ._core.methods import EulerHeun, EulerMaruyama, MilsteinIto, MilsteinStratonovich, SRK15
from ._core.solver_factory import create_solver
from ._core.time_series import TimeSeriesExperiment, write_tsv
from .settings import METHODS, SEED_FROM_TIME

__version__ = '0.1.0'
