"""
Numerical helper routines for the path solver.

These helpers keep the basis inverse well conditioned and make every
selection rule deterministic, so that two runs on the same instance pivot
through exactly the same bases.
"""

from __future__ import annotations

from typing import Optional

import numpy as np


class SingularBasisError(np.linalg.LinAlgError):
    """Raised when a basis matrix cannot be inverted."""


def basis_inverse(matrix: np.ndarray, tol: float = 1e-12) -> np.ndarray:
    """
    Return the inverse of a square basis matrix.

    The inverse is computed with ``np.linalg.solve`` against the identity and
    rejected when the reciprocal condition number falls below ``tol``.

    Raises:
        SingularBasisError: If the matrix is singular or numerically so.
    """

    m = matrix.shape[0]
    try:
        inverse = np.linalg.solve(matrix, np.eye(m))
    except np.linalg.LinAlgError as exc:
        raise SingularBasisError(f"Basis matrix is singular: {exc}") from exc
    norm = np.linalg.norm(matrix, ord=1)
    inverse_norm = np.linalg.norm(inverse, ord=1)
    if not np.isfinite(inverse_norm) or norm * inverse_norm * tol > 1.0:
        raise SingularBasisError("Basis matrix is numerically singular")
    return inverse


def eta_update(inverse: np.ndarray, column: np.ndarray, row: int) -> None:
    """
    Update a basis inverse in place after a pivot.

    ``column`` is ``B^{-1} a_j`` for the entering column ``a_j`` and ``row``
    is the position of the leaving variable. The update is the product-form
    rank-1 correction ``B'^{-1} = E B^{-1}``.
    """

    pivot = column[row]
    pivot_row = inverse[row, :] / pivot
    inverse -= np.outer(column, pivot_row)
    inverse[row, :] = pivot_row


def lexicographic_argmin(
    values: np.ndarray,
    slopes: np.ndarray,
    keys: np.ndarray,
    tol: float,
) -> Optional[int]:
    """
    Position of the smallest ``values - eps * slopes`` for a vanishing ``eps``.

    Entries are first compared by ``values`` (ties within ``tol``), then by
    the larger slope, then by the smaller ``keys``. Returns None for empty
    input.
    """

    if values.size == 0:
        return None
    scale = max(1.0, float(np.max(np.abs(values))))
    best = float(np.min(values))
    tied = np.flatnonzero(values <= best + tol * scale)
    if tied.size > 1:
        slope_scale = max(1.0, float(np.max(np.abs(slopes[tied]))))
        top = float(np.max(slopes[tied]))
        tied = tied[slopes[tied] >= top - tol * slope_scale]
    if tied.size > 1:
        tied = tied[np.argsort(keys[tied], kind="stable")]
    return int(tied[0])


def lexicographic_argmax(values: np.ndarray, keys: np.ndarray, tol: float) -> Optional[int]:
    """
    Position of the largest entry of ``values``; ties within ``tol`` go to the smallest key.
    """

    if values.size == 0:
        return None
    finite = np.isfinite(values)
    if not np.any(finite):
        return None
    best = float(np.max(values[finite]))
    scale = max(1.0, abs(best))
    tied = np.flatnonzero(finite & (values >= best - tol * scale))
    return int(tied[np.argmin(keys[tied])])


__all__ = [
    "SingularBasisError",
    "basis_inverse",
    "eta_update",
    "lexicographic_argmin",
    "lexicographic_argmax",
]
