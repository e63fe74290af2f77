"""Pytest fixtures for likely tests."""

import pytest

import numpy as np

from likely.core.fitting.parameters import FitParameter


class SequenceNormals:
    """Normal source that replays a fixed sequence of values."""

    def __init__(self, values):
        self._values = list(values)
        self._index = 0

    def normal(self):
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


@pytest.fixture
def sequence_normals():
    """Factory for deterministic normal sources."""
    return SequenceNormals


@pytest.fixture
def sample_parameters():
    """Three parameters: floating, permanently fixed, floating."""
    return [
        FitParameter("a", 1.0, 0.1),
        FitParameter("b", 2.0, 0.0),
        FitParameter("c", 3.0, 0.3),
    ]


@pytest.fixture
def spd_covariance():
    """A 3x3 symmetric positive-definite covariance with its packed form."""
    matrix = np.array(
        [
            [4.0, 1.2, -0.6],
            [1.2, 9.0, 2.1],
            [-0.6, 2.1, 1.0],
        ]
    )
    packed = np.array([4.0, 1.2, 9.0, -0.6, 2.1, 1.0])
    return matrix, packed
