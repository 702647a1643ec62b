"""
Dantzig selector and compressed sensing.

Both problems minimize an L1 norm under an L-infinity constraint whose
radius is the path parameter:

```
    Dantzig selector:    minimize ||beta||_1  s.t.  ||X^T (y - X beta)||_inf <= lam
    compressed sensing:  minimize ||beta||_1  s.t.  ||y - X beta||_inf <= lam
```

Writing the constraint as ``K beta <= lam + r`` and ``-K beta <= lam - r``
(``K = X^T X, r = X^T y`` or ``K = X, r = y``) with slacks ``w_plus, w_minus``
gives the column layout::

    [beta_plus (d) | beta_minus (d) | w_plus (m) | w_minus (m)]

Only the right-hand side depends on ``lam``. The slack basis with
``beta = 0`` is optimal for every ``lam >= ||r||_inf``.
"""

from __future__ import annotations

import numpy as np

from ..logging import get_logger
from ..lp.core import LPInstance
from .base import Reduction, RegularizationPath, check_design, solve_reduction, split_columns

logger = get_logger(__name__)


def linf_constrained_lp(K: np.ndarray, r: np.ndarray, name: str) -> Reduction:
    """
    Build ``min ||beta||_1  s.t.  ||r - K beta||_inf <= lam`` as a parametric LP.
    """

    m, d = K.shape
    coef_block = split_columns(K)
    a_mat = np.block(
        [
            [coef_block, np.eye(m), np.zeros((m, m))],
            [-coef_block, np.zeros((m, m)), np.eye(m)],
        ]
    )
    c = np.concatenate([np.ones(2 * d), np.zeros(2 * m)])
    instance = LPInstance(
        A=a_mat,
        b=np.concatenate([r, -r]),
        b_bar=np.ones(2 * m),
        c=c,
        c_bar=np.zeros_like(c),
        basis=tuple(range(2 * d, 2 * d + 2 * m)),
    )
    logger.debug("%s LP: %d x %d", name, *a_mat.shape)
    return Reduction(instance=instance, n_features=d, name=name)


def dantzig_lp(X, y) -> Reduction:
    """Build the parametric LP of the Dantzig selector."""
    X, y = check_design(X, y)
    return linf_constrained_lp(X.T @ X, X.T @ y, "dantzig")


def compressed_sensing_lp(X, y) -> Reduction:
    """Build the parametric LP of L1 recovery from ``y ~ X beta``."""
    X, y = check_design(X, y)
    return linf_constrained_lp(X, y, "compressed_sensing")


def dantzig_selector(
    X,
    y,
    max_it: int = 10000,
    lambda_threshold: float = 0.0,
    max_breakpoints: int = 1000,
    **options,
) -> RegularizationPath:
    """
    Compute the solution path of the Dantzig selector.

    The first breakpoint is ``||X^T y||_inf``; as ``lam`` decreases towards
    zero the constraint approaches the normal equations.
    """

    return solve_reduction(
        dantzig_lp(X, y),
        max_it=max_it,
        lambda_threshold=lambda_threshold,
        max_breakpoints=max_breakpoints,
        **options,
    )


def compressed_sensing(
    X,
    y,
    max_it: int = 10000,
    lambda_threshold: float = 0.0,
    max_breakpoints: int = 1000,
    **options,
) -> RegularizationPath:
    """
    Compute the L1 recovery path for an underdetermined system ``X beta = y``.

    For a small ``lambda_threshold`` the last breakpoint approximates the
    basis pursuit solution ``argmin ||beta||_1  s.t.  X beta = y``.

    Example:
        >>> import numpy as np
        >>> from parasimplex.reductions import compressed_sensing
        >>> rng = np.random.default_rng(1)
        >>> X = rng.standard_normal((20, 40))
        >>> truth = np.zeros(40)
        >>> truth[[3, 17]] = [1.5, -2.0]
        >>> fit = compressed_sensing(X, X @ truth, lambda_threshold=1e-8)
        >>> bool(np.allclose(fit.coef[-1], truth, atol=1e-5))
        True
    """

    return solve_reduction(
        compressed_sensing_lp(X, y),
        max_it=max_it,
        lambda_threshold=lambda_threshold,
        max_breakpoints=max_breakpoints,
        **options,
    )


__all__ = [
    "linf_constrained_lp",
    "dantzig_lp",
    "compressed_sensing_lp",
    "dantzig_selector",
    "compressed_sensing",
]
