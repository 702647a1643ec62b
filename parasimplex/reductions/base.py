"""
Shared pieces of the problem reductions.

A reduction turns statistical problem data into an :class:`LPInstance` and
knows which LP columns carry the native coefficients, so that a recorded
primal solution can be projected back. Real coefficients are split into
nonnegative parts, ``beta = beta_plus - beta_minus``, stored as two adjacent
column blocks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..lp.core import InvalidProblemParameter, LPInstance, PathResult, SolverConfig, Status
from ..lp.solver import ParametricSimplexSolver


def check_design(X, y) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate and convert a design matrix and response vector.

    Raises:
        InvalidProblemParameter: If shapes disagree or data are not finite.
    """

    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float).reshape(-1)
    if X.ndim != 2:
        raise InvalidProblemParameter(f"X must be 2-dimensional, got shape {X.shape}")
    if X.shape[0] == 0 or X.shape[1] == 0:
        raise InvalidProblemParameter(f"X must be non-empty, got shape {X.shape}")
    if X.shape[0] != y.shape[0]:
        raise InvalidProblemParameter(
            f"X has {X.shape[0]} rows but y has {y.shape[0]} entries"
        )
    if not (np.all(np.isfinite(X)) and np.all(np.isfinite(y))):
        raise InvalidProblemParameter("X and y must contain only finite values")
    return X, y


@dataclass(frozen=True)
class Reduction:
    """
    An LP instance together with the layout of its coefficient columns.

    Attributes:
        instance: The parametric LP to solve.
        n_features: Number of native coefficients ``d``.
        coef_offset: First column of the ``beta_plus`` block; ``beta_minus``
            follows immediately.
        intercept_columns: ``(plus, minus)`` columns of the intercept, or
            None when the problem has no intercept.
        name: Problem family, for logging and repr.
    """

    instance: LPInstance
    n_features: int
    coef_offset: int = 0
    intercept_columns: Optional[Tuple[int, int]] = None
    name: str = "reduction"

    def project(self, x: np.ndarray) -> Tuple[np.ndarray, Optional[float]]:
        """Map an LP primal vector to ``(coef, intercept)``."""
        x = np.asarray(x, dtype=float)
        start = self.coef_offset
        d = self.n_features
        coef = x[start : start + d] - x[start + d : start + 2 * d]
        intercept = None
        if self.intercept_columns is not None:
            plus, minus = self.intercept_columns
            intercept = float(x[plus] - x[minus])
        return coef, intercept

    def solve(self, config: Optional[SolverConfig] = None) -> "RegularizationPath":
        result = ParametricSimplexSolver(self.instance, config).solve()
        return RegularizationPath.from_result(self, result)


@dataclass
class RegularizationPath:
    """
    Solution path of a reduced problem in native coordinates.

    Attributes:
        lambdas: Breakpoints, strictly decreasing.
        coef: Coefficients at each breakpoint, shape ``(len(lambdas), d)``.
        intercept: Intercepts at each breakpoint, or None.
        dual: LP multipliers at each breakpoint, shape ``(len(lambdas), M)``.
        status: Termination status of the solver.
        message: Human-readable explanation of ``status``.
        nit: Number of pivots performed.
        lp_result: Raw solver output in LP coordinates.
    """

    lambdas: np.ndarray
    coef: np.ndarray
    intercept: Optional[np.ndarray]
    dual: np.ndarray
    status: Status
    message: str
    nit: int
    lp_result: PathResult

    @classmethod
    def from_result(cls, reduction: Reduction, result: PathResult) -> "RegularizationPath":
        path = result.path
        d = reduction.n_features
        coef = np.zeros((len(path), d))
        intercept = None if reduction.intercept_columns is None else np.zeros(len(path))
        for k, entry in enumerate(path):
            coef[k], b0 = reduction.project(entry.x)
            if intercept is not None:
                intercept[k] = b0
        dual = path.dual if len(path) else np.zeros((0, reduction.instance.n_rows))
        return cls(
            lambdas=path.lambdas,
            coef=coef,
            intercept=intercept,
            dual=dual,
            status=result.status,
            message=result.message,
            nit=result.nit,
            lp_result=result,
        )

    def __len__(self) -> int:
        return self.lambdas.shape[0]

    def __repr__(self) -> str:
        return (
            f"RegularizationPath(breakpoints={len(self)}, features={self.coef.shape[1]}, "
            f"status={self.status.value}, nit={self.nit})"
        )

    @property
    def success(self) -> bool:
        return self.status.is_success

    def predict(self, X, index: int = -1) -> np.ndarray:
        """Linear predictor ``X @ coef + intercept`` at breakpoint ``index``."""
        if len(self) == 0:
            raise ValueError("Path is empty")
        X = np.asarray(X, dtype=float)
        out = X @ self.coef[index]
        if self.intercept is not None:
            out = out + self.intercept[index]
        return out


def solve_reduction(
    reduction: Reduction,
    max_it: int = 10000,
    lambda_threshold: float = 0.0,
    max_breakpoints: int = 1000,
    **options,
) -> RegularizationPath:
    """Solve a reduction with the given budgets and project the path."""
    config = SolverConfig(
        max_it=max_it,
        lambda_threshold=lambda_threshold,
        max_breakpoints=max_breakpoints,
        **options,
    )
    return reduction.solve(config)


def split_columns(matrix: np.ndarray) -> np.ndarray:
    """Return ``[M, -M]``, the constraint block of a sign-split variable."""
    return np.hstack([matrix, -matrix])


__all__ = [
    "check_design",
    "Reduction",
    "RegularizationPath",
    "solve_reduction",
    "split_columns",
]
