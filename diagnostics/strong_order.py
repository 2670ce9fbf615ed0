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

"""Plot the strong convergence of every scheme on geometric Brownian motion.

Run from the repository root with `python -m diagnostics.strong_order`.
"""
import argparse
import logging
import os

import matplotlib.pyplot as plt
import torch
import tqdm

import libsde
from libsde import IntegrationConfig, RandomSource, TimeSeriesExperiment, diagnostics
from libsde.problems import GeometricBrownian
from libsde.settings import METHODS, SDE_TYPES

# Stratonovich schemes are compared against the Stratonovich reading of the same equation.
sde_types = {
    METHODS.euler_maruyama: SDE_TYPES.ito,
    METHODS.euler_heun: SDE_TYPES.stratonovich,
    METHODS.milstein_ito: SDE_TYPES.ito,
    METHODS.milstein_stratonovich: SDE_TYPES.stratonovich,
    METHODS.srk15: SDE_TYPES.ito,
}


class BrownianRecorder(RandomSource):
    """Accumulates the Brownian motion driving a run from the draws it hands out."""

    def __init__(self, dt, *args, **kwargs):
        self.dt = dt
        self.W = 0.
        super(BrownianRecorder, self).__init__(*args, **kwargs)

    def reseed(self):
        self.W = 0.
        return super(BrownianRecorder, self).reseed()

    def normal(self, size):
        draws = super(BrownianRecorder, self).normal(size)
        N1 = draws[..., 0] if draws.dim() == 3 else draws
        self.W = self.W + N1.sum(dim=0) * self.dt ** .5
        return draws


def terminal_mse(method, dt, dimension, maxt, seed):
    sde = GeometricBrownian(dimension=dimension, mu=args.mu, sigma=args.sigma, sde_type=sde_types[method])
    y0 = torch.ones(dimension)
    source = BrownianRecorder(dt, seed=seed)
    config = IntegrationConfig(dt=dt, multiplier=1, maxt=maxt, seed=seed)
    solver = libsde.create_solver(method, sde=sde, y0=y0, config=config, random_source=source)
    y1 = solver.integrate()
    exact = sde.analytical_sample(y0, maxt, source.W)
    return diagnostics.mse(y1.unsqueeze(-1), exact.unsqueeze(-1))


def inspect_orders():
    dts = tuple(2 ** -i for i in range(args.min_exponent, args.max_exponent + 1))

    plt.figure()
    for method in METHODS.all():
        # SRK15 allocates dimension ** 3 entries per support.
        dimension = min(args.dimension, 64) if method == METHODS.srk15 else args.dimension
        mses = [terminal_mse(method, dt, dimension, args.maxt, args.seed) for dt in tqdm.tqdm(dts, desc=method)]
        slope = diagnostics.strong_order(dts, mses)
        logging.info(f'{method}: strong order {slope:.4f}')
        plt.plot(dts, mses, label=f'{method}(k={slope:.4f})')
    plt.xscale('log')
    plt.yscale('log')
    plt.xlabel('dt')
    plt.ylabel('mean squared error')
    plt.legend()
    plt.savefig(os.path.join(args.img_dir, 'rate'))
    plt.close()


def inspect_samples():
    plt.figure()
    for method in METHODS.all():
        sde = GeometricBrownian(dimension=1, mu=args.mu, sigma=args.sigma, sde_type=sde_types[method])
        dt = args.maxt * 2 ** -args.max_exponent
        config = IntegrationConfig(dt=dt, multiplier=1, maxt=args.maxt, seed=args.seed)
        solver = libsde.create_solver(method, sde=sde, y0=[1.], config=config)
        # Record every fourth internal step.
        ts, ys = TimeSeriesExperiment(solver, num_time_points=2 ** (args.max_exponent - 2) + 1).run()
        plt.plot(diagnostics.to_numpy(ts), diagnostics.to_numpy(ys[:, 0]), label=method)
    plt.xlabel('t')
    plt.legend()
    plt.savefig(os.path.join(args.img_dir, 'samples'))
    plt.close()


def main():
    os.makedirs(args.img_dir, exist_ok=True)
    inspect_orders()
    inspect_samples()


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--seed', type=int, default=1147481649)
    parser.add_argument('--img-dir', type=str, default=os.path.join('.', 'diagnostics', 'plots', 'strong_order'))
    parser.add_argument('--dimension', type=int, default=1000, help='Number of independent sample paths.')
    parser.add_argument('--mu', type=float, default=0.5)
    parser.add_argument('--sigma', type=float, default=0.5)
    parser.add_argument('--maxt', type=float, default=1.)
    parser.add_argument('--min-exponent', type=int, default=2)
    parser.add_argument('--max-exponent', type=int, default=8)
    args = parser.parse_args()

    logging.getLogger().setLevel(logging.INFO)
    torch.set_default_dtype(torch.float64)
    main()
