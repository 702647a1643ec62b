import numpy as np
import pytest

from parasimplex.lp.core import InvalidProblemParameter, Status
from parasimplex.reductions.dantzig import compressed_sensing, compressed_sensing_lp


def _sparse_system(rng, n=40, d=60, k=3):
    X = rng.standard_normal((n, d)) / np.sqrt(n)
    truth = np.zeros(d)
    support = rng.choice(d, size=k, replace=False)
    truth[support] = rng.choice([-1.0, 1.0], size=k) * rng.uniform(1.0, 2.0, size=k)
    return X, truth


def test_lp_layout(rng):
    X, truth = _sparse_system(rng)
    n, d = X.shape
    instance = compressed_sensing_lp(X, X @ truth).instance
    assert instance.A.shape == (2 * n, 2 * d + 2 * n)
    assert np.allclose(instance.b[:n], X @ truth)
    assert np.allclose(instance.b[n:], -(X @ truth))


def test_recovers_sparse_signal(rng):
    X, truth = _sparse_system(rng)
    fit = compressed_sensing(X, X @ truth, lambda_threshold=1e-8)
    assert fit.status is Status.LAMBDA_THRESHOLD
    assert np.allclose(fit.coef[-1], truth, atol=1e-5)


def test_residual_radius_along_path(rng):
    X, truth = _sparse_system(rng)
    y = X @ truth
    fit = compressed_sensing(X, y, lambda_threshold=1e-8)
    assert fit.lambdas[0] == pytest.approx(np.max(np.abs(y)))
    assert np.allclose(fit.coef[0], 0.0)
    for lam, coef in zip(fit.lambdas, fit.coef):
        assert np.max(np.abs(y - X @ coef)) <= lam + 1e-8


def test_l1_norm_grows_as_radius_shrinks(rng):
    X, truth = _sparse_system(rng)
    fit = compressed_sensing(X, X @ truth, lambda_threshold=1e-8)
    l1 = np.abs(fit.coef).sum(axis=1)
    assert np.all(np.diff(l1) >= -1e-9)


def test_rejects_mismatched_measurements(rng):
    X, _ = _sparse_system(rng)
    with pytest.raises(InvalidProblemParameter):
        compressed_sensing_lp(X, np.ones(X.shape[0] + 1))
