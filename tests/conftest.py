import pytest

from route_ga.data import random_locations
from route_ga.rng import RandomSource


@pytest.fixture
def rng():
    return RandomSource(7)


@pytest.fixture
def locations():
    return random_locations(12, seed=3)
