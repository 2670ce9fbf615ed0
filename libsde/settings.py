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


class ContainerMeta(type):
    def all(cls):
        return sorted(getattr(cls, x) for x in dir(cls) if not x.startswith('__'))

    def __str__(cls):
        return str(cls.all())

    def __contains__(cls, item):
        return item in cls.all()


class METHODS(metaclass=ContainerMeta):
    euler_maruyama = 'euler_maruyama'
    euler_heun = 'euler_heun'
    milstein_ito = 'milstein_ito'
    milstein_stratonovich = 'milstein_stratonovich'
    srk15 = 'srk15'


# Integer codes kept for drivers written against the numbered solver factory.
METHOD_CODES = {
    1: METHODS.euler_maruyama,
    2: METHODS.euler_heun,
    3: METHODS.milstein_ito,
    4: METHODS.milstein_stratonovich,
    5: METHODS.srk15,
}


class SDE_TYPES(metaclass=ContainerMeta):  # noqa
    ito = 'ito'
    stratonovich = 'stratonovich'


# Seed value asking for a non-reproducible, clock-derived seed.
SEED_FROM_TIME = -1
