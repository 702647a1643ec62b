import numpy as np
import pytest

from parasimplex.lp.core import InvalidProblemParameter, Status
from parasimplex.lp.kkt import verify_path
from parasimplex.reductions.quantile import quantile_regression, quantile_regression_lp


def _check_loss(residual: np.ndarray, tau: float) -> float:
    return float(np.sum(residual * (tau - (residual < 0))))


@pytest.mark.parametrize("tau", [0.0, 1.0, -0.2, 1.5])
def test_invalid_quantile_level(regression_data, tau):
    X, y, _ = regression_data
    with pytest.raises(InvalidProblemParameter):
        quantile_regression_lp(X, y, tau=tau)


def test_invalid_problem_parameter_is_value_error(regression_data):
    X, y, _ = regression_data
    with pytest.raises(ValueError):
        quantile_regression_lp(X, y[:-1])


def test_lp_layout(regression_data):
    X, y, _ = regression_data
    n, d = X.shape
    reduction = quantile_regression_lp(X, y, tau=0.3)
    instance = reduction.instance
    assert instance.A.shape == (n, 2 * d + 2 + 2 * n)
    assert np.allclose(instance.b, y)
    assert np.allclose(instance.c_bar[: 2 * d], 1.0)
    assert np.allclose(instance.c[2 * d + 2 : 2 * d + 2 + n], 0.3)
    assert np.allclose(instance.c[2 * d + 2 + n :], 0.7)
    assert reduction.intercept_columns == (2 * d, 2 * d + 1)


@pytest.mark.parametrize("tau", [0.25, 0.5, 0.9])
def test_path_starts_at_sample_quantile(regression_data, tau):
    X, y, _ = regression_data
    fit = quantile_regression(X, y, tau=tau, max_breakpoints=1)
    assert fit.status is Status.MAX_BREAKPOINTS
    assert np.allclose(fit.coef[0], 0.0)
    expected = np.sort(y)[int(np.floor(tau * y.shape[0]))]
    assert fit.intercept[0] == pytest.approx(expected)


def test_first_breakpoint_is_largest_score(regression_data):
    X, y, _ = regression_data
    tau = 0.5
    fit = quantile_regression(X, y, tau=tau, max_breakpoints=1)
    multipliers = fit.dual[0]
    # every observation off the intercept row carries the check-loss subgradient
    off_anchor = np.abs(y - fit.intercept[0]) > 1e-12
    assert np.all(np.isin(np.round(multipliers[off_anchor], 12), [tau, tau - 1.0]))
    assert fit.lambdas[0] == pytest.approx(np.max(np.abs(X.T @ multipliers)))
    assert fit.lambdas[0] > 0


def test_path_is_valid_lp_path(regression_data):
    X, y, _ = regression_data
    reduction = quantile_regression_lp(X, y, tau=0.5)
    fit = reduction.solve()
    assert fit.success
    assert np.all(np.diff(fit.lambdas) < 0)
    assert verify_path(reduction.instance, fit.lp_result.path, tol=1e-6)


def test_median_regression_matches_reference(regression_data):
    scipy_optimize = pytest.importorskip("scipy.optimize")
    X, y, beta = regression_data
    n, d = X.shape
    fit = quantile_regression(X, y, tau=0.5, lambda_threshold=1e-7)
    assert fit.status is Status.LAMBDA_THRESHOLD

    # unpenalized least absolute deviations with a free intercept
    design = np.hstack([np.ones((n, 1)), X])
    c = np.concatenate([np.zeros(d + 1), 0.5 * np.ones(2 * n)])
    a_eq = np.hstack([design, np.eye(n), -np.eye(n)])
    bounds = [(None, None)] * (d + 1) + [(0, None)] * (2 * n)
    ref = scipy_optimize.linprog(c, A_eq=a_eq, b_eq=y, bounds=bounds, method="highs")
    assert ref.success

    ours = _check_loss(y - fit.predict(X), 0.5)
    assert ours == pytest.approx(ref.fun, abs=1e-4)
    assert np.allclose(fit.coef[-1], beta, atol=0.15)
    assert fit.intercept[-1] == pytest.approx(0.7, abs=0.15)


def test_path_starts_sparse(regression_data):
    X, y, _ = regression_data
    fit = quantile_regression(X, y, tau=0.5, lambda_threshold=1e-7)
    l1 = np.abs(fit.coef).sum(axis=1)
    assert l1[0] == 0.0
    assert l1[-1] > 0.0
    assert len(fit) > 2
    assert np.count_nonzero(fit.coef[1]) <= 2


def test_without_intercept(regression_data):
    X, y, _ = regression_data
    fit = quantile_regression(X, y - 0.7, tau=0.5, fit_intercept=False, lambda_threshold=1e-7)
    assert fit.intercept is None
    assert fit.success
    assert fit.coef.shape == (len(fit), X.shape[1])
    assert np.allclose(fit.coef[-1], [1.5, 0.0, -2.0, 0.0, 0.5], atol=0.15)


def test_penalized_objective_matches_reference(regression_data):
    scipy_optimize = pytest.importorskip("scipy.optimize")
    X, y, _ = regression_data
    reduction = quantile_regression_lp(X, y, tau=0.25)
    fit = reduction.solve()
    instance = reduction.instance
    for entry in list(fit.lp_result.path)[:: max(1, len(fit) // 4)]:
        ref = scipy_optimize.linprog(
            instance.cost(entry.lam),
            A_eq=instance.A,
            b_eq=instance.rhs(entry.lam),
            bounds=(0, None),
            method="highs",
        )
        assert ref.success
        assert instance.cost(entry.lam) @ entry.x == pytest.approx(ref.fun, rel=1e-6, abs=1e-6)


@pytest.mark.parametrize("seed", range(10))
@pytest.mark.parametrize("tau", [0.25, 0.5, 0.75])
def test_default_floor_reaches_zero(seed, tau):
    rng = np.random.default_rng(seed)
    X = rng.standard_normal((60, 5))
    y = 0.7 + X @ np.array([1.5, 0.0, -2.0, 0.0, 0.5]) + 0.1 * rng.standard_normal(60)
    reduction = quantile_regression_lp(X, y, tau=tau)
    fit = reduction.solve()
    assert fit.status is Status.LAMBDA_THRESHOLD, fit.message
    assert fit.lambdas[-1] == 0.0
    assert verify_path(reduction.instance, fit.lp_result.path, tol=1e-6)
