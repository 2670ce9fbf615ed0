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
import pytest
import torch

import libsde
from libsde import ConfigurationError, IntegrationConfig, TimeSeriesExperiment
from libsde.problems import LinearSDE
from libsde.settings import METHODS

from .utils import assert_allclose

torch.set_default_dtype(torch.float64)


def _experiment(method=METHODS.srk15, dimension=3, dt=0.01, multiplier=1, maxt=1., num_time_points=11):
    config = IntegrationConfig(dt=dt, multiplier=multiplier, maxt=maxt, seed=5)
    solver = libsde.create_solver(method, sde=LinearSDE(dimension=dimension), y0=torch.ones(dimension),
                                  config=config)
    return TimeSeriesExperiment(solver, num_time_points=num_time_points)


@pytest.mark.parametrize('method', METHODS.all())
def test_run_records_time_points(method):
    experiment = _experiment(method=method)
    ts, ys = experiment.run()
    assert ts.shape == (11,)
    assert ys.shape == (11, 3)
    assert_allclose(ts, torch.linspace(0., 1., 11))
    assert ts[0].item() == 0.
    assert ts[-1].item() == 1.
    assert torch.equal(ys[0], torch.ones(3))
    assert torch.equal(ys[-1], experiment.solver.y)
    assert experiment.solver.nfe == 100


def test_run_matches_integrate():
    experiment = _experiment(multiplier=2)
    _, ys = experiment.run()

    config = IntegrationConfig(dt=0.01, multiplier=2, maxt=1., seed=5)
    solver = libsde.create_solver(METHODS.srk15, sde=LinearSDE(dimension=3), y0=torch.ones(3), config=config)
    assert torch.equal(ys[-1], solver.integrate())


def test_write_tsv(tmp_path, caplog):
    experiment = _experiment(dimension=4)
    ts, ys = experiment.run()
    path = tmp_path / 'LinearSDE.tsv'
    with caplog.at_level(logging.INFO):
        experiment.write_tsv(path)
    assert str(path) in caplog.text

    table = np.loadtxt(path, delimiter='\t')
    assert table.shape == (11, 5)
    np.testing.assert_array_equal(table[:, 0], ts.numpy())
    np.testing.assert_array_equal(table[:, 1:], ys.numpy())

    first_line = path.read_text().splitlines()[0]
    assert first_line.split('\t')[0] == '0'
    assert len(first_line.split('\t')) == 5


def test_write_tsv_before_run(tmp_path):
    with pytest.raises(RuntimeError):
        _experiment().write_tsv(tmp_path / 'empty.tsv')


def test_too_few_time_points():
    with pytest.raises(ConfigurationError):
        _experiment(num_time_points=1)
    with pytest.raises(ConfigurationError):
        _experiment(num_time_points=0)


def test_missing_solver():
    with pytest.raises(ConfigurationError):
        TimeSeriesExperiment(None, num_time_points=11)


def test_interval_not_multiple_of_dt():
    with pytest.raises(ConfigurationError):
        _experiment(num_time_points=4).run()


def test_interval_not_multiple_of_internal_step():
    # The interval 0.1 is a multiple of dt=0.01 but not of h=0.04.
    with pytest.raises(ConfigurationError):
        _experiment(multiplier=4).run()
