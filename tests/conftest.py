"""Pytest configuration and shared fixtures for parasimplex tests.

This module provides:
- A deterministic numpy RNG fixture
- Small synthetic data sets shared by the reduction tests
"""

import os

import numpy as np
import pytest


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function")
def regression_data(rng: np.random.Generator):
    """Linear model with three active features and symmetric noise."""
    n, d = 60, 5
    X = rng.standard_normal((n, d))
    beta = np.array([1.5, 0.0, -2.0, 0.0, 0.5])
    y = 0.7 + X @ beta + 0.1 * rng.standard_normal(n)
    return X, y, beta


@pytest.fixture(scope="function")
def classification_data(rng: np.random.Generator):
    """Two Gaussian clouds separated along the first two features."""
    n, d = 40, 4
    labels = np.where(np.arange(n) < 22, 1.0, -1.0)
    X = rng.standard_normal((n, d))
    X[:, 0] += 1.5 * labels
    X[:, 1] -= 1.0 * labels
    return X, labels
