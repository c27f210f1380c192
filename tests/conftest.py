"""Shared fixtures for the path tracer tests."""

import random

import numpy as np
import pytest


class FixedRandom:
    """Stand-in generator that returns the same draw every time.

    Lets tests pin down the branch taken by a stochastic decision such as
    the dielectric reflect-or-refract choice.
    """

    def __init__(self, value=0.5):
        self.value = value

    def random(self):
        return self.value

    def uniform(self, a, b):
        return a + (b - a) * self.value

    def randint(self, a, b):
        return a


@pytest.fixture
def rng():
    """A seeded generator so stochastic tests are reproducible."""
    return random.Random(1234)


@pytest.fixture
def np_rng():
    return np.random.default_rng(1234)


@pytest.fixture
def fixed_rng():
    return FixedRandom(0.5)
