"""
Core problem, configuration and result containers for the path solver.

A parametric linear program in standard equality form is

```
    minimize    (c + lam * c_bar)^T x
    subject to  A x = b + lam * b_bar
                x >= 0
```

together with an initial basis that is optimal as ``lam -> +inf``. The
solver traces the optimal basis while ``lam`` decreases and reports the
solution at every breakpoint. All containers in this module are immutable;
the mutable working state lives in :mod:`parasimplex.lp.tableau`.

References:
    - Vanderbei, *Linear Programming: Foundations and Extensions*, ch. 7
      (parametric self-dual simplex method), 4th edition, 2014.
    - Pang, Liu, Vanderbei & Zhao, *Parametric Simplex Method for Sparse
      Learning*, NeurIPS 2017.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence, Tuple, Union, overload

import numpy as np


class Status(Enum):
    """Termination status of a path computation."""

    LAMBDA_THRESHOLD = "lambda_threshold"
    MAX_BREAKPOINTS = "max_breakpoints"
    MAX_ITER = "max_iter"
    INFEASIBLE_START = "infeasible_start"
    UNBOUNDED = "unbounded"
    INFEASIBLE = "infeasible"
    CYCLING = "cycling"
    NUMERICAL_ERROR = "numerical_error"

    @property
    def is_success(self) -> bool:
        """True for the budget outcomes, which all yield a valid path."""
        return self in _BUDGET_STATUSES


_BUDGET_STATUSES = frozenset(
    {Status.LAMBDA_THRESHOLD, Status.MAX_BREAKPOINTS, Status.MAX_ITER}
)


class InvalidProblemParameter(ValueError):
    """Raised when problem data handed to a reducer is out of range."""


def _frozen_array(values, ndim: int, name: str) -> np.ndarray:
    arr = np.array(values, dtype=float)
    if ndim == 1:
        arr = arr.reshape(-1)
    if arr.ndim != ndim:
        raise ValueError(f"{name} must be {ndim}-dimensional, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} contains non-finite entries")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class LPInstance:
    """
    Immutable description of a parametric LP in standard equality form.

    Attributes:
        A: Constraint matrix of shape ``(M, N)``.
        b: Base right-hand side, length ``M``.
        b_bar: Direction of the right-hand side in ``lam``, length ``M``.
        c: Base cost vector, length ``N``.
        c_bar: Direction of the cost vector in ``lam``, length ``N``.
        basis: ``M`` distinct column indices forming the starting basis.
    """

    A: np.ndarray
    b: np.ndarray
    b_bar: np.ndarray
    c: np.ndarray
    c_bar: np.ndarray
    basis: Tuple[int, ...]

    def __post_init__(self) -> None:
        a_mat = _frozen_array(self.A, 2, "A")
        m, n = a_mat.shape
        if m == 0 or n == 0:
            raise ValueError(f"A must be non-empty, got shape {a_mat.shape}")
        if m > n:
            raise ValueError(f"A must have at least as many columns as rows, got {a_mat.shape}")
        object.__setattr__(self, "A", a_mat)

        for name, size in (("b", m), ("b_bar", m), ("c", n), ("c_bar", n)):
            vec = _frozen_array(getattr(self, name), 1, name)
            if vec.shape[0] != size:
                raise ValueError(f"{name} must have length {size}, got {vec.shape[0]}")
            object.__setattr__(self, name, vec)

        basis = tuple(int(j) for j in np.asarray(self.basis).reshape(-1))
        if len(basis) != m:
            raise ValueError(f"basis must contain {m} indices, got {len(basis)}")
        if len(set(basis)) != m:
            raise ValueError("basis indices must be distinct")
        if any(j < 0 or j >= n for j in basis):
            raise ValueError(f"basis indices must lie in [0, {n})")
        object.__setattr__(self, "basis", basis)

    @property
    def n_rows(self) -> int:
        return self.A.shape[0]

    @property
    def n_cols(self) -> int:
        return self.A.shape[1]

    def rhs(self, lam: float) -> np.ndarray:
        """Right-hand side ``b + lam * b_bar``."""
        return self.b + lam * self.b_bar

    def cost(self, lam: float) -> np.ndarray:
        """Cost vector ``c + lam * c_bar``."""
        return self.c + lam * self.c_bar


@dataclass(frozen=True)
class SolverConfig:
    """
    Budgets and tolerances for one solver run.

    Attributes:
        max_it: Maximum number of pivots.
        lambda_threshold: Floor for ``lam``; the path stops at or above it.
        max_breakpoints: Capacity ``T`` of the path recorder.
        tol: Tolerance for feasibility checks, slopes and pivot elements.
        max_degenerate_pivots: Cap on consecutive pivots at one ``lam``.
            ``None`` uses ``M + N`` of the instance being solved.
        refactor_every: Number of rank-1 basis updates between full
            refactorizations.
    """

    max_it: int = 10000
    lambda_threshold: float = 0.0
    max_breakpoints: int = 1000
    tol: float = 1e-9
    max_degenerate_pivots: Optional[int] = None
    refactor_every: int = 100

    def __post_init__(self) -> None:
        if self.max_it < 0:
            raise ValueError(f"max_it must be non-negative, got {self.max_it}.")
        if not np.isfinite(self.lambda_threshold) or self.lambda_threshold < 0:
            raise ValueError(
                f"lambda_threshold must be finite and >= 0, got {self.lambda_threshold}."
            )
        if self.max_breakpoints < 1:
            raise ValueError(f"max_breakpoints must be >= 1, got {self.max_breakpoints}.")
        if not self.tol > 0:
            raise ValueError(f"tol must be positive, got {self.tol}.")
        if self.max_degenerate_pivots is not None and self.max_degenerate_pivots < 1:
            raise ValueError(
                f"max_degenerate_pivots must be >= 1, got {self.max_degenerate_pivots}."
            )
        if self.refactor_every < 1:
            raise ValueError(f"refactor_every must be >= 1, got {self.refactor_every}.")

    def degenerate_cap(self, instance: LPInstance) -> int:
        if self.max_degenerate_pivots is not None:
            return self.max_degenerate_pivots
        return instance.n_rows + instance.n_cols


@dataclass(frozen=True)
class PathEntry:
    """
    Primal/dual snapshot at one breakpoint.

    ``x`` is the basic solution of the basis that is optimal on the interval
    ending at ``lam`` from above; ``y`` holds the matching simplex multipliers.
    """

    lam: float
    x: np.ndarray
    y: np.ndarray


class Path(Sequence[PathEntry]):
    """Immutable sequence of :class:`PathEntry` with strictly decreasing ``lam``."""

    def __init__(self, entries: Sequence[PathEntry] = ()):
        self._entries: Tuple[PathEntry, ...] = tuple(entries)

    @overload
    def __getitem__(self, index: int) -> PathEntry: ...

    @overload
    def __getitem__(self, index: slice) -> "Path": ...

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return Path(self._entries[index])
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PathEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        if not self._entries:
            return "Path(empty)"
        return (
            f"Path(breakpoints={len(self)}, "
            f"lam=[{self._entries[0].lam:.6g} .. {self._entries[-1].lam:.6g}])"
        )

    @property
    def lambdas(self) -> np.ndarray:
        return np.array([entry.lam for entry in self._entries], dtype=float)

    @property
    def primal(self) -> np.ndarray:
        """Primal solutions stacked row-wise, shape ``(len(path), N)``."""
        if not self._entries:
            return np.zeros((0, 0))
        return np.vstack([entry.x for entry in self._entries])

    @property
    def dual(self) -> np.ndarray:
        """Dual solutions stacked row-wise, shape ``(len(path), M)``."""
        if not self._entries:
            return np.zeros((0, 0))
        return np.vstack([entry.y for entry in self._entries])


@dataclass
class PathResult:
    """
    Outcome of a solver run.

    Attributes:
        path: Breakpoints recorded before termination.
        status: Enumeration describing why the solver stopped.
        message: Human-readable explanation of ``status``.
        nit: Number of pivots performed.
        basis: Basis held by the solver when it stopped.
    """

    path: Path
    status: Status
    message: str
    nit: int
    basis: Tuple[int, ...] = ()

    @property
    def success(self) -> bool:
        return self.status.is_success

    @property
    def n_breakpoints(self) -> int:
        return len(self.path)


__all__ = [
    "Status",
    "InvalidProblemParameter",
    "LPInstance",
    "SolverConfig",
    "PathEntry",
    "Path",
    "PathResult",
]
