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

import logging

from .euler_heun import EulerHeun
from .euler_maruyama import EulerMaruyama
from .milstein import MilsteinIto, MilsteinStratonovich
from .srk import SRK15
from ...settings import METHODS, METHOD_CODES

logger = logging.getLogger(__name__)


def select(method):
    """Return the solver class for a method identifier, or `None` if it is not recognized."""
    method = METHOD_CODES.get(method, method) if isinstance(method, int) else method
    if method == METHODS.euler_maruyama:
        return EulerMaruyama
    elif method == METHODS.euler_heun:
        return EulerHeun
    elif method == METHODS.milstein_ito:
        return MilsteinIto
    elif method == METHODS.milstein_stratonovich:
        return MilsteinStratonovich
    elif method == METHODS.srk15:
        return SRK15
    else:
        logger.info(f"Unrecognized solver '{method}'; expected one of {METHODS}.")
        return None
