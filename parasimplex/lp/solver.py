"""
Parametric simplex method: trace the optimal basis as ``lam`` decreases.

Starting from a basis that is primal and dual feasible for every large
``lam``, the solver repeatedly

1. finds the largest ``lam`` below the current one at which a basic value or
   a nonbasic reduced cost reaches zero (the next breakpoint),
2. records the current basic solution at that breakpoint, and
3. pivots: a basic value hitting zero triggers a dual simplex step on its
   row, a reduced cost hitting zero triggers a primal simplex step on its
   column.

Both ratio tests break ties lexicographically with respect to the slope of
the expressions, i.e. they select the pivot that keeps the new basis optimal
for ``lam`` slightly below the breakpoint, and finally by the lowest column
index. Consecutive pivots at one ``lam`` are capped so that cycling is
reported instead of looping forever.

Example:
    >>> import numpy as np
    >>> from parasimplex.lp import parametric_simplex
    >>> A = np.array([[1.0, 1.0]])
    >>> result = parametric_simplex(
    ...     A, b=[1.0], b_bar=[0.0], c=[0.0, 2.0], c_bar=[1.0, 0.0], basis=[1],
    ...     lambda_threshold=0.5,
    ... )
    >>> result.path.lambdas
    array([2. , 0.5])

References:
    - Vanderbei, *Linear Programming: Foundations and Extensions*, 2014.
    - Pang, Liu, Vanderbei & Zhao, *Parametric Simplex Method for Sparse
      Learning*, NeurIPS 2017.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from ..logging import get_logger
from .core import LPInstance, PathResult, SolverConfig, Status
from .recorder import PathRecorder
from .tableau import Tableau
from .utils import SingularBasisError, lexicographic_argmax, lexicographic_argmin

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Breakpoint:
    lam: float
    primal: bool
    index: int  # row for a primal crossing, column for a dual one


class ParametricSimplexSolver:
    """
    Trace the solution path of one :class:`LPInstance`.

    A solver instance owns its tableau; the LP instance is only read. Call
    :meth:`solve` once per instance.
    """

    def __init__(self, instance: LPInstance, config: Optional[SolverConfig] = None):
        self.instance = instance
        self.config = config if config is not None else SolverConfig()
        self.tableau: Optional[Tableau] = None
        self.nit = 0

    def __repr__(self) -> str:
        return (
            f"ParametricSimplexSolver(rows={self.instance.n_rows}, "
            f"cols={self.instance.n_cols}, nit={self.nit})"
        )

    def solve(self) -> PathResult:
        """Run the solver until a budget is exhausted or a failure is detected."""

        cfg = self.config
        recorder = PathRecorder(cfg.max_breakpoints)
        self.nit = 0
        logger.info(
            "Tracing path: %d rows, %d columns, lambda_threshold=%g",
            self.instance.n_rows,
            self.instance.n_cols,
            cfg.lambda_threshold,
        )

        try:
            self.tableau = Tableau.from_instance(self.instance, cfg.refactor_every)
        except SingularBasisError as exc:
            return self._finish(recorder, Status.INFEASIBLE_START, f"Initial basis is singular: {exc}")

        problem = self._check_start(self.tableau)
        if problem is not None:
            return self._finish(recorder, Status.INFEASIBLE_START, problem)

        tableau = self.tableau
        threshold = cfg.lambda_threshold
        floor = threshold + cfg.tol * max(1.0, threshold)
        degenerate_cap = cfg.degenerate_cap(self.instance)
        lam_current = np.inf
        degenerate = 0

        while True:
            step = self._next_breakpoint(tableau, lam_current)
            if step is None or step.lam <= floor:
                if threshold < lam_current:
                    recorder.append(threshold, tableau.primal(threshold), tableau.dual(threshold))
                return self._finish(
                    recorder,
                    Status.LAMBDA_THRESHOLD,
                    "Current basis is optimal down to lambda_threshold",
                )

            if step.lam < lam_current:
                degenerate = 0
                recorder.append(
                    step.lam,
                    tableau.primal(step.lam),
                    tableau.dual(step.lam),
                )
                if recorder.full:
                    return self._finish(
                        recorder,
                        Status.MAX_BREAKPOINTS,
                        f"Recorded the maximum of {recorder.capacity} breakpoints",
                    )
            else:
                degenerate += 1
                if degenerate > degenerate_cap:
                    return self._finish(
                        recorder,
                        Status.CYCLING,
                        f"More than {degenerate_cap} pivots at lambda={lam_current:.6g}",
                    )

            if self.nit >= cfg.max_it:
                return self._finish(
                    recorder, Status.MAX_ITER, f"Maximum of {cfg.max_it} pivots reached"
                )

            try:
                failure = self._pivot(tableau, step)
            except SingularBasisError as exc:
                return self._finish(recorder, Status.NUMERICAL_ERROR, f"Refactorization failed: {exc}")
            if failure is not None:
                return self._finish(recorder, *failure)
            lam_current = step.lam

    def _tolerance(self, values: np.ndarray) -> float:
        scale = float(np.max(np.abs(values))) if values.size else 0.0
        return self.config.tol * max(1.0, scale)

    def _check_start(self, tableau: Tableau) -> Optional[str]:
        values = tableau.values
        tol = self._tolerance(values.constant)
        slope_tol = self._tolerance(values.slope)
        bad_rows = np.flatnonzero(~values.nonnegative_at_infinity(tol, slope_tol))
        if bad_rows.size:
            col = int(tableau.basis[bad_rows[0]])
            return f"Initial basis is primal infeasible for large lambda at column {col}"

        reduced = tableau.reduced_costs
        tol = self._tolerance(reduced.constant)
        slope_tol = self._tolerance(reduced.slope)
        feasible = reduced.nonnegative_at_infinity(tol, slope_tol) | tableau.is_basic
        bad_cols = np.flatnonzero(~feasible)
        if bad_cols.size:
            return f"Initial basis is dual infeasible for large lambda at column {int(bad_cols[0])}"
        return None

    def _next_breakpoint(self, tableau: Tableau, lam_current: float) -> Optional[_Breakpoint]:
        values = tableau.values
        reduced = tableau.reduced_costs
        primal = values.zero_crossings(self._tolerance(values.slope))
        dual = reduced.zero_crossings(self._tolerance(reduced.slope))
        dual[tableau.is_basic] = -np.inf

        crossings = np.concatenate([primal, dual])
        keys = np.concatenate([tableau.basis, np.arange(self.instance.n_cols)])
        pos = lexicographic_argmax(crossings, keys, self.config.tol)
        if pos is None:
            return None

        lam = min(float(crossings[pos]), lam_current)
        m = self.instance.n_rows
        if pos < m:
            return _Breakpoint(lam=lam, primal=True, index=pos)
        return _Breakpoint(lam=lam, primal=False, index=pos - m)

    def _pivot(self, tableau: Tableau, step: _Breakpoint) -> Optional[Tuple[Status, str]]:
        lam = step.lam
        tol = self.config.tol

        if step.primal:
            row = step.index
            alpha = tableau.row(row)
            eligible = np.flatnonzero(~tableau.is_basic & (alpha < -self._tolerance(alpha)))
            if eligible.size == 0:
                col = int(tableau.basis[row])
                return (
                    Status.INFEASIBLE,
                    f"Problem is infeasible below lambda={lam:.6g}: "
                    f"no column can replace basic column {col}",
                )
            scale = -alpha[eligible]
            reduced = tableau.reduced_costs[eligible]
            ratios = np.maximum(reduced.value(lam), 0.0) / scale
            pick = lexicographic_argmin(ratios, reduced.slope / scale, eligible, tol)
            entering = int(eligible[pick])
        else:
            entering = step.index
            direction = tableau.column(entering)
            eligible = np.flatnonzero(direction > self._tolerance(direction))
            if eligible.size == 0:
                return (
                    Status.UNBOUNDED,
                    f"Problem is unbounded below lambda={lam:.6g} along column {entering}",
                )
            scale = direction[eligible]
            values = tableau.values[eligible]
            ratios = np.maximum(values.value(lam), 0.0) / scale
            pick = lexicographic_argmin(ratios, values.slope / scale, tableau.basis[eligible], tol)
            row = int(eligible[pick])

        leaving = tableau.pivot(row, entering)
        self.nit += 1
        logger.debug(
            "Pivot %d at lambda=%.10g: column %d enters, column %d leaves (%s crossing)",
            self.nit,
            lam,
            entering,
            leaving,
            "primal" if step.primal else "dual",
        )
        return None

    def _finish(self, recorder: PathRecorder, status: Status, message: str) -> PathResult:
        basis = (
            tuple(int(j) for j in self.tableau.basis)
            if self.tableau is not None
            else self.instance.basis
        )
        if status.is_success:
            logger.info(
                "Path finished (%s): %d breakpoints, %d pivots",
                status.value,
                len(recorder),
                self.nit,
            )
        else:
            logger.warning("Path stopped early (%s): %s", status.value, message)
        return PathResult(
            path=recorder.path(),
            status=status,
            message=message,
            nit=self.nit,
            basis=basis,
        )


def parametric_simplex(
    A: np.ndarray,
    b: Sequence[float],
    b_bar: Sequence[float],
    c: Sequence[float],
    c_bar: Sequence[float],
    basis: Sequence[int],
    max_it: int = 10000,
    lambda_threshold: float = 0.0,
    max_breakpoints: int = 1000,
    **options,
) -> PathResult:
    """
    Trace the solution path of ``min (c + lam c_bar)^T x  s.t.  A x = b + lam b_bar, x >= 0``.

    Args:
        A: Constraint matrix of shape ``(M, N)``.
        b, b_bar: Right-hand side and its direction in ``lam``.
        c, c_bar: Cost vector and its direction in ``lam``.
        basis: ``M`` column indices whose basis is optimal for large ``lam``.
        max_it: Maximum number of pivots.
        lambda_threshold: Smallest ``lam`` to trace down to.
        max_breakpoints: Maximum number of path entries to record.
        **options: Further :class:`SolverConfig` fields (``tol``,
            ``max_degenerate_pivots``, ``refactor_every``).

    Returns:
        :class:`PathResult` with the recorded path and termination status.

    Raises:
        ValueError: If the problem data have inconsistent shapes or the
            budgets are out of range.
    """

    instance = LPInstance(A=A, b=b, b_bar=b_bar, c=c, c_bar=c_bar, basis=tuple(basis))
    config = SolverConfig(
        max_it=max_it,
        lambda_threshold=lambda_threshold,
        max_breakpoints=max_breakpoints,
        **options,
    )
    return ParametricSimplexSolver(instance, config).solve()


__all__ = ["ParametricSimplexSolver", "parametric_simplex"]
