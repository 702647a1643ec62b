"""
L1-penalized quantile regression.

The problem

```
    minimize  sum_i rho_tau(y_i - beta_0 - x_i^T beta) + lam * ||beta||_1
```

with the check loss ``rho_tau(r) = r * (tau - 1{r < 0})`` is written as an LP
by splitting each residual into ``u_i - v_i`` and each coefficient into
``beta_plus - beta_minus``. Column layout::

    [beta_plus (d) | beta_minus (d) | b0_plus, b0_minus | u (n) | v (n)]

(the intercept pair is absent when ``fit_intercept=False``). Only the cost
of the coefficient columns depends on ``lam``.

At ``lam = +inf`` every coefficient is zero and the intercept is the
``floor(tau * n)``-th order statistic of ``y``, which is exactly the
tau-quantile minimizing the unpenalized loss of the constant model.
"""

from __future__ import annotations

import numpy as np

from ..logging import get_logger
from ..lp.core import InvalidProblemParameter, LPInstance
from .base import Reduction, RegularizationPath, check_design, solve_reduction, split_columns

logger = get_logger(__name__)


def _initial_basis(y: np.ndarray, tau: float, d: int, fit_intercept: bool) -> np.ndarray:
    n = y.shape[0]
    offset = 2 * d + (2 if fit_intercept else 0)
    u_cols = offset + np.arange(n)
    v_cols = offset + n + np.arange(n)

    if not fit_intercept:
        return np.where(y >= 0, u_cols, v_cols)

    order = np.argsort(y, kind="stable")
    position = min(int(np.floor(tau * n)), n - 1)
    anchor = order[position]
    basis = np.empty(n, dtype=int)
    basis[order[:position]] = v_cols[order[:position]]
    basis[order[position + 1 :]] = u_cols[order[position + 1 :]]
    basis[anchor] = 2 * d if y[anchor] >= 0 else 2 * d + 1
    return basis


def quantile_regression_lp(X, y, tau: float = 0.5, fit_intercept: bool = True) -> Reduction:
    """
    Build the parametric LP of L1-penalized quantile regression.

    Args:
        X: Design matrix of shape ``(n, d)``.
        y: Response vector of length ``n``.
        tau: Quantile level in ``(0, 1)``.
        fit_intercept: Add an unpenalized intercept.

    Raises:
        InvalidProblemParameter: If ``tau`` is outside ``(0, 1)`` or the data
            are malformed.
    """

    X, y = check_design(X, y)
    if not 0.0 < tau < 1.0:
        raise InvalidProblemParameter(f"tau must lie in (0, 1), got {tau}")
    n, d = X.shape

    blocks = [split_columns(X)]
    if fit_intercept:
        blocks.append(split_columns(np.ones((n, 1))))
    blocks.append(split_columns(np.eye(n)))
    a_mat = np.hstack(blocks)

    n_coef = 2 * d + (2 if fit_intercept else 0)
    c = np.concatenate([np.zeros(n_coef), np.full(n, tau), np.full(n, 1.0 - tau)])
    c_bar = np.zeros_like(c)
    c_bar[: 2 * d] = 1.0

    instance = LPInstance(
        A=a_mat,
        b=y,
        b_bar=np.zeros(n),
        c=c,
        c_bar=c_bar,
        basis=tuple(_initial_basis(y, tau, d, fit_intercept)),
    )
    logger.debug("Quantile regression LP (tau=%g): %d x %d", tau, *a_mat.shape)
    return Reduction(
        instance=instance,
        n_features=d,
        intercept_columns=(2 * d, 2 * d + 1) if fit_intercept else None,
        name="quantile_regression",
    )


def quantile_regression(
    X,
    y,
    tau: float = 0.5,
    fit_intercept: bool = True,
    max_it: int = 10000,
    lambda_threshold: float = 0.0,
    max_breakpoints: int = 1000,
    **options,
) -> RegularizationPath:
    """
    Compute the regularization path of L1-penalized quantile regression.

    Example:
        >>> import numpy as np
        >>> from parasimplex.reductions import quantile_regression
        >>> rng = np.random.default_rng(0)
        >>> X = rng.standard_normal((40, 3))
        >>> y = X @ np.array([2.0, 0.0, -1.0]) + 0.1 * rng.standard_normal(40)
        >>> fit = quantile_regression(X, y, tau=0.5, lambda_threshold=1e-3)
        >>> fit.success
        True
    """

    reduction = quantile_regression_lp(X, y, tau=tau, fit_intercept=fit_intercept)
    return solve_reduction(
        reduction,
        max_it=max_it,
        lambda_threshold=lambda_threshold,
        max_breakpoints=max_breakpoints,
        **options,
    )


__all__ = ["quantile_regression_lp", "quantile_regression"]
