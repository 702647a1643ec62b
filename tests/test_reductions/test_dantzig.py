import numpy as np
import pytest

from parasimplex.lp.core import Status
from parasimplex.lp.kkt import verify_path
from parasimplex.reductions.dantzig import dantzig_lp, dantzig_selector


def test_lp_layout(regression_data):
    X, y, _ = regression_data
    d = X.shape[1]
    reduction = dantzig_lp(X, y)
    instance = reduction.instance
    assert instance.A.shape == (2 * d, 4 * d)
    assert np.allclose(instance.b[:d], X.T @ y)
    assert np.allclose(instance.b_bar, 1.0)
    assert np.allclose(instance.c_bar, 0.0)
    assert instance.basis == tuple(range(2 * d, 4 * d))
    assert reduction.intercept_columns is None


def test_path_starts_at_largest_correlation(regression_data):
    X, y, _ = regression_data
    fit = dantzig_selector(X, y, max_breakpoints=1)
    assert fit.status is Status.MAX_BREAKPOINTS
    assert fit.lambdas[0] == pytest.approx(np.max(np.abs(X.T @ y)))
    assert np.allclose(fit.coef[0], 0.0)
    assert fit.intercept is None


def test_correlation_constraint_holds_along_path(regression_data):
    X, y, _ = regression_data
    fit = dantzig_selector(X, y)
    assert fit.status is Status.LAMBDA_THRESHOLD
    for lam, coef in zip(fit.lambdas, fit.coef):
        assert np.max(np.abs(X.T @ (y - X @ coef))) <= lam + 1e-8


def test_small_radius_approaches_least_squares(regression_data):
    X, y, _ = regression_data
    fit = dantzig_selector(X, y, lambda_threshold=1e-8)
    assert fit.lambdas[-1] == pytest.approx(1e-8)
    ols = np.linalg.lstsq(X, y, rcond=None)[0]
    assert np.allclose(fit.coef[-1], ols, atol=1e-6)


def test_path_is_valid_lp_path(regression_data):
    X, y, _ = regression_data
    reduction = dantzig_lp(X, y)
    fit = reduction.solve()
    assert fit.success
    assert np.all(np.diff(fit.lambdas) < 0)
    assert verify_path(reduction.instance, fit.lp_result.path, tol=1e-6)


def test_objective_matches_reference(regression_data):
    scipy_optimize = pytest.importorskip("scipy.optimize")
    X, y, _ = regression_data
    reduction = dantzig_lp(X, y)
    fit = reduction.solve()
    instance = reduction.instance
    for lam, coef in zip(fit.lambdas, fit.coef):
        ref = scipy_optimize.linprog(
            instance.c,
            A_eq=instance.A,
            b_eq=instance.rhs(lam),
            bounds=(0, None),
            method="highs",
        )
        assert ref.success
        assert np.abs(coef).sum() == pytest.approx(ref.fun, rel=1e-6, abs=1e-6)
