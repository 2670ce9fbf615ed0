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

"""Integrate N decoupled copies of dX = (-3X + 1) dt + sigma dW and write the time series to a TSV file."""
import argparse
import logging
import os

import libsde
from libsde.problems import LinearSDE
from libsde.settings import METHODS


def str2bool(v):
    """Used for boolean arguments in argparse; avoiding `store_true` and `store_false`."""
    if isinstance(v, bool): return v
    if v.lower() in ('yes', 'true', 't', 'y', '1'): return True
    elif v.lower() in ('no', 'false', 'f', 'n', '0'): return False
    else: raise argparse.ArgumentTypeError('Boolean value expected.')


def main():
    config = libsde.IntegrationConfig(dt=args.dt, multiplier=args.multiplier, maxt=args.maxt, seed=args.seed)
    system = LinearSDE(dimension=args.dimension, sigma=args.sigma, name=args.name)

    solver = libsde.create_solver(args.method, sde=system, y0=[1.] * system.dimension, config=config)
    if solver is None:
        raise RuntimeError(f"Unable to instantiate the solver '{args.method}'.")
    logging.info(f'Integrating N={system.dimension} stochastic differential equations')
    logging.info(solver.description)

    experiment = libsde.TimeSeriesExperiment(solver, num_time_points=args.num_time_points)
    ts, ys = experiment.run()
    logging.info(f'Final state at t={ts[-1].item():.4f}: mean={ys[-1].mean().item():.4f}, '
                 f'expected mean={LinearSDE.mean(ts[-1].item()):.4f}')

    os.makedirs(args.out_dir, exist_ok=True)
    experiment.write_tsv(os.path.join(args.out_dir, f'{system.name}_timeseries.tsv'))


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--debug', type=str2bool, default=False, const=True, nargs="?")
    parser.add_argument('--seed', type=int, default=libsde.SEED_FROM_TIME, help='-1 seeds from the clock.')
    parser.add_argument('--out-dir', type=str, default='.')
    parser.add_argument('--name', type=str, default='mySDE')

    parser.add_argument('--dimension', type=int, default=50, help='Number of equations in the system.')
    parser.add_argument('--sigma', type=float, default=0.2)
    parser.add_argument('--method', type=str, default=METHODS.srk15, choices=METHODS.all(),
                        help='Name of numerical solver.')
    parser.add_argument('--dt', type=float, default=1e-3)
    parser.add_argument('--multiplier', type=int, default=1)
    parser.add_argument('--maxt', type=float, default=1.)
    parser.add_argument('--num-time-points', type=int, default=101)
    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.INFO)

    main()
