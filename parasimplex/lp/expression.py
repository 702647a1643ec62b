"""
Affine functions of the path parameter ``lam``.

Every quantity the solver tracks (basic values, reduced costs, duals,
right-hand side, objective) has the form ``constant + lam * slope``. The
scalar :class:`ParametricExpression` is the value type exposed to callers;
:class:`ParametricVector` is the array form the tableau computes with.
Expressions add and scale; ratio tests work with the
point where an expression crosses zero or crosses another expression.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

Scalar = Union[int, float]


@dataclass(frozen=True)
class ParametricExpression:
    """Scalar ``constant + lam * slope``."""

    constant: float
    slope: float = 0.0

    def __add__(self, other: "ParametricExpression") -> "ParametricExpression":
        if isinstance(other, (int, float)):
            return ParametricExpression(self.constant + other, self.slope)
        if not isinstance(other, ParametricExpression):
            return NotImplemented
        return ParametricExpression(self.constant + other.constant, self.slope + other.slope)

    __radd__ = __add__

    def __neg__(self) -> "ParametricExpression":
        return ParametricExpression(-self.constant, -self.slope)

    def __sub__(self, other: "ParametricExpression") -> "ParametricExpression":
        if isinstance(other, (int, float)):
            return ParametricExpression(self.constant - other, self.slope)
        if not isinstance(other, ParametricExpression):
            return NotImplemented
        return ParametricExpression(self.constant - other.constant, self.slope - other.slope)

    def __rsub__(self, other: Scalar) -> "ParametricExpression":
        return (-self) + other

    def __mul__(self, scale: Scalar) -> "ParametricExpression":
        if not isinstance(scale, (int, float)):
            return NotImplemented
        return ParametricExpression(self.constant * scale, self.slope * scale)

    __rmul__ = __mul__

    def value(self, lam: float) -> float:
        return self.constant + lam * self.slope

    def zero_crossing(self) -> Optional[float]:
        """Return the ``lam`` at which the expression is zero, or None if the slope is zero."""
        if self.slope == 0.0:
            return None
        return -self.constant / self.slope

    def crossing(self, other: "ParametricExpression") -> Optional[float]:
        """Return the ``lam`` at which ``self`` and ``other`` take the same value."""
        return (self - other).zero_crossing()

    def is_nonnegative_at_infinity(self, tol: float = 0.0) -> bool:
        """True if the expression is nonnegative for all sufficiently large ``lam``."""
        if self.slope > tol:
            return True
        return abs(self.slope) <= tol and self.constant >= -tol

    def is_nonnegative_above(self, lam: float, tol: float = 0.0) -> bool:
        """True if the expression is nonnegative on ``[lam, +inf)``."""
        return self.is_nonnegative_at_infinity(tol) and self.value(lam) >= -tol


class ParametricVector:
    """
    Array of affine expressions stored as two aligned vectors.

    Instances are treated as values: arithmetic returns new vectors and the
    underlying arrays are never modified in place.
    """

    __slots__ = ("constant", "slope")

    def __init__(self, constant: np.ndarray, slope: Optional[np.ndarray] = None):
        constant = np.asarray(constant, dtype=float)
        slope = np.zeros_like(constant) if slope is None else np.asarray(slope, dtype=float)
        if constant.shape != slope.shape:
            raise ValueError(
                f"constant and slope must have equal shapes, got {constant.shape} and {slope.shape}"
            )
        self.constant = constant
        self.slope = slope

    def __len__(self) -> int:
        return self.constant.shape[0]

    def __getitem__(self, index):
        if isinstance(index, (int, np.integer)):
            return ParametricExpression(float(self.constant[index]), float(self.slope[index]))
        return ParametricVector(self.constant[index], self.slope[index])

    def __add__(self, other: "ParametricVector") -> "ParametricVector":
        if not isinstance(other, ParametricVector):
            return NotImplemented
        return ParametricVector(self.constant + other.constant, self.slope + other.slope)

    def __sub__(self, other: "ParametricVector") -> "ParametricVector":
        if not isinstance(other, ParametricVector):
            return NotImplemented
        return ParametricVector(self.constant - other.constant, self.slope - other.slope)

    def __neg__(self) -> "ParametricVector":
        return ParametricVector(-self.constant, -self.slope)

    def __mul__(self, scale: Scalar) -> "ParametricVector":
        if not isinstance(scale, (int, float)):
            return NotImplemented
        return ParametricVector(self.constant * scale, self.slope * scale)

    __rmul__ = __mul__

    def __repr__(self) -> str:
        return f"ParametricVector(size={len(self)})"

    def transform(self, matrix: np.ndarray) -> "ParametricVector":
        """Apply a linear map to both components: ``matrix @ (p + lam * q)``."""
        return ParametricVector(matrix @ self.constant, matrix @ self.slope)

    def value(self, lam: float) -> np.ndarray:
        return self.constant + lam * self.slope

    def zero_crossings(self, tol: float = 0.0) -> np.ndarray:
        """
        Points where entries with a positive slope fall to zero as ``lam`` decreases.

        Entries whose slope is at most ``tol`` never become negative while
        ``lam`` decreases and are reported as ``-inf``.
        """
        crossings = np.full(self.constant.shape, -np.inf)
        rising = self.slope > tol
        crossings[rising] = -self.constant[rising] / self.slope[rising]
        return crossings

    def nonnegative_at_infinity(
        self, tol: float = 0.0, slope_tol: Optional[float] = None
    ) -> np.ndarray:
        """
        Element-wise form of :meth:`ParametricExpression.is_nonnegative_at_infinity`.

        ``slope_tol`` bounds the slopes treated as flat and defaults to ``tol``.
        """
        if slope_tol is None:
            slope_tol = tol
        flat = np.abs(self.slope) <= slope_tol
        return (self.slope > slope_tol) | (flat & (self.constant >= -tol))


__all__ = ["ParametricExpression", "ParametricVector"]
