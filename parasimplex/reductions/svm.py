"""
Sparse (L1-penalized) support vector machine.

```
    minimize  sum_i xi_i + lam * ||beta||_1
    subject to  y_i (beta_0 + x_i^T beta) + xi_i - s_i = 1,   xi, s >= 0
```

with labels ``y_i`` in ``{-1, +1}``. Column layout::

    [beta_plus (d) | beta_minus (d) | b0_plus, b0_minus | xi (n) | s (n)]

At ``lam = +inf`` the coefficients vanish and the intercept equals the
majority label. Minority samples then carry hinge loss 2; majority samples
sit exactly on the margin and are split between ``xi`` and ``s`` so that the
LP multipliers stay within ``[0, 1]``, which makes the start dual feasible.
"""

from __future__ import annotations

import numpy as np

from ..logging import get_logger
from ..lp.core import InvalidProblemParameter, LPInstance
from .base import Reduction, RegularizationPath, check_design, solve_reduction, split_columns

logger = get_logger(__name__)


def _initial_basis(labels: np.ndarray, d: int) -> np.ndarray:
    n = labels.shape[0]
    xi_cols = 2 * d + 2 + np.arange(n)
    s_cols = xi_cols + n

    majority = 1.0 if np.sum(labels > 0) >= np.sum(labels < 0) else -1.0
    major_rows = np.flatnonzero(labels == majority)
    minor_rows = np.flatnonzero(labels != majority)

    basis = np.empty(n, dtype=int)
    anchor = major_rows[0]
    basis[anchor] = 2 * d if majority > 0 else 2 * d + 1
    basis[minor_rows] = xi_cols[minor_rows]

    rest = major_rows[1:]
    n_loss = min(minor_rows.size, rest.size)
    basis[rest[:n_loss]] = xi_cols[rest[:n_loss]]
    basis[rest[n_loss:]] = s_cols[rest[n_loss:]]
    return basis


def sparse_svm_lp(X, y) -> Reduction:
    """
    Build the parametric LP of the L1-penalized hinge-loss SVM.

    Args:
        X: Design matrix of shape ``(n, d)``.
        y: Class labels in ``{-1, +1}``.

    Raises:
        InvalidProblemParameter: If a label is not ``-1`` or ``+1`` or the data
            are malformed.
    """

    X, labels = check_design(X, y)
    if not np.all(np.isin(labels, (-1.0, 1.0))):
        raise InvalidProblemParameter("SVM labels must be -1 or +1")
    n, d = X.shape

    signed = labels[:, None] * X
    a_mat = np.hstack(
        [
            split_columns(signed),
            split_columns(labels[:, None]),
            split_columns(np.eye(n)),
        ]
    )
    c = np.concatenate([np.zeros(2 * d + 2), np.ones(n), np.zeros(n)])
    c_bar = np.zeros_like(c)
    c_bar[: 2 * d] = 1.0

    instance = LPInstance(
        A=a_mat,
        b=np.ones(n),
        b_bar=np.zeros(n),
        c=c,
        c_bar=c_bar,
        basis=tuple(_initial_basis(labels, d)),
    )
    logger.debug("Sparse SVM LP: %d x %d", *a_mat.shape)
    return Reduction(
        instance=instance,
        n_features=d,
        intercept_columns=(2 * d, 2 * d + 1),
        name="sparse_svm",
    )


def sparse_svm(
    X,
    y,
    max_it: int = 10000,
    lambda_threshold: float = 0.0,
    max_breakpoints: int = 1000,
    **options,
) -> RegularizationPath:
    """
    Compute the regularization path of the sparse SVM.

    ``RegularizationPath.predict`` returns the decision function; its sign is
    the predicted label.
    """

    return solve_reduction(
        sparse_svm_lp(X, y),
        max_it=max_it,
        lambda_threshold=lambda_threshold,
        max_breakpoints=max_breakpoints,
        **options,
    )


__all__ = ["sparse_svm_lp", "sparse_svm"]
