"""
Karush-Kuhn-Tucker diagnostics for recorded path breakpoints.

Each :class:`PathEntry` is a complete primal/dual pair, so optimality at its
``lam`` can be checked without the solver: primal feasibility, dual
feasibility and complementary slackness of the standard-form LP.
"""

from __future__ import annotations

from typing import Dict

import numpy as np

from .core import LPInstance, Path, PathEntry


def breakpoint_residuals(instance: LPInstance, entry: PathEntry) -> Dict[str, float]:
    """
    Compute infinity-norm KKT residuals of one breakpoint.
    """

    x = np.asarray(entry.x, dtype=float).reshape(-1)
    y = np.asarray(entry.y, dtype=float).reshape(-1)
    reduced = instance.cost(entry.lam) - instance.A.T @ y

    primal = float(np.linalg.norm(instance.A @ x - instance.rhs(entry.lam), ord=np.inf))
    nonnegativity = float(np.max(np.maximum(-x, 0.0), initial=0.0))
    dual = float(np.max(np.maximum(-reduced, 0.0), initial=0.0))
    complementary = float(np.max(np.abs(x * reduced), initial=0.0))
    return {
        "primal": primal,
        "nonnegativity": nonnegativity,
        "dual": dual,
        "complementary": complementary,
    }


def is_breakpoint_optimal(instance: LPInstance, entry: PathEntry, tol: float = 1e-6) -> bool:
    """
    Return True if all KKT residuals of ``entry`` are below ``tol``.
    """

    residuals = breakpoint_residuals(instance, entry)
    return all(value <= tol for value in residuals.values())


def verify_path(instance: LPInstance, path: Path, tol: float = 1e-6) -> bool:
    """
    Return True if every breakpoint is optimal and ``lam`` strictly decreases.
    """

    lambdas = path.lambdas
    if lambdas.size > 1 and not np.all(np.diff(lambdas) < 0):
        return False
    return all(is_breakpoint_optimal(instance, entry, tol) for entry in path)


__all__ = ["breakpoint_residuals", "is_breakpoint_optimal", "verify_path"]
