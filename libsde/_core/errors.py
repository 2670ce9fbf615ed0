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

"""Exceptions raised by the integration core."""


class ConfigurationError(ValueError):
    """The solver cannot start: missing system, bad step sizes or mismatched dimensions."""


class EvaluationError(RuntimeError):
    """Drift or diffusion evaluation returned values of the wrong shape or non-finite entries."""


class IntegrationError(RuntimeError):
    """Stepping failed or did not cover the requested time span.

    Attributes:
        t: Simulation time at which the failure was detected, if known.
    """

    def __init__(self, message, t=None):
        super(IntegrationError, self).__init__(message)
        self.t = t
