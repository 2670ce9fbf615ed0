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

import numpy as np
import torch

from . import misc
from .base_solver import BaseSDESolver
from .errors import ConfigurationError, IntegrationError
from ..types import Tensor, Tuple

logger = logging.getLogger(__name__)


class TimeSeriesExperiment(object):
    """Records the state of a solver at evenly spaced time points between 0 and `maxt`.

    The solver integrates with its own internal step; the sampling interval
    `maxt / (num_time_points - 1)` must be a multiple of the config's `dt`.
    """

    def __init__(self, solver: BaseSDESolver, num_time_points: int):
        if solver is None:
            raise ConfigurationError("No solver has been set.")
        if num_time_points <= 1:
            raise ConfigurationError("The number of time points must be greater than 1.")
        self.solver = solver
        self.num_time_points = num_time_points
        self.ts = None
        self.ys = None

    def run(self) -> Tuple[Tensor, Tensor]:
        """Integrate and record the time points.

        Returns:
            ts, a Tensor of size (T,), and ys, a Tensor of size (T, d).
        """
        solver = self.solver
        solver.initialize()
        maxt = solver.config.maxt
        H = maxt / (self.num_time_points - 1)
        if not misc.is_multiple(H, solver.config.dt):
            raise ConfigurationError(f"Interval between two time points ({H}) must be a multiple of the "
                                     f"integration step size ({solver.config.dt}).")
        if not misc.is_multiple(H, solver.h):
            raise ConfigurationError(f"Interval between two time points ({H}) must be a multiple of the "
                                     f"internal step size ({solver.h}).")

        ts = [solver.t]
        ys = [solver.y]
        for _ in range(self.num_time_points - 1):
            t1 = solver.t
            elapsed = solver.step(H)
            if not misc.is_multiple(elapsed, H) or misc.num_substeps(elapsed, H) != 1:
                raise IntegrationError(f"Solver failed to step time by {H}: expected t={t1 + H}, obtained "
                                       f"t={t1 + elapsed}.", t=solver.t)
            ts.append(solver.t)
            ys.append(solver.y)

        self.ts = torch.tensor(ts, dtype=ys[0].dtype)
        self.ys = torch.stack(ys, dim=0)
        return self.ts, self.ys

    def write_tsv(self, path):
        if self.ts is None:
            raise RuntimeError("Nothing to write; call `run` first.")
        write_tsv(path, self.ts, self.ys)


def write_tsv(path, ts: Tensor, ys: Tensor):
    """Write one row per time point: the time, then the state components, tab separated, without header."""
    table = np.concatenate([ts.detach().cpu().numpy()[:, None], ys.detach().cpu().numpy()], axis=1)
    np.savetxt(path, table, delimiter='\t', fmt='%.17g')
    logger.info(f'Wrote time series of {table.shape[0]} points to: {path}')
