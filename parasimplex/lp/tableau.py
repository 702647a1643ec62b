"""
Working state of the parametric simplex method for one basis.

The tableau never materializes ``B^{-1} A``; it keeps the basis inverse and
derives rows and columns on demand. Basic values, simplex multipliers and
reduced costs are held as :class:`ParametricVector` instances so that the
breakpoint search can read off every zero crossing directly.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .core import LPInstance
from .expression import ParametricVector
from .utils import basis_inverse, eta_update


class Tableau:
    """
    Mutable basis bookkeeping derived from an :class:`LPInstance`.

    Attributes:
        instance: Read-only problem data.
        basis: Column index held by each row.
        inverse: Basis inverse ``B^{-1}``.
        values: Basic values ``B^{-1} (b + lam * b_bar)``, one per row.
        duals: Simplex multipliers ``B^{-T} (c_B + lam * c_bar_B)``.
        reduced_costs: ``c + lam * c_bar - A^T y``, zero on basic columns.
    """

    def __init__(
        self,
        instance: LPInstance,
        basis: Optional[Sequence[int]] = None,
        refactor_every: int = 100,
    ):
        self.instance = instance
        self.basis = np.array(instance.basis if basis is None else basis, dtype=int)
        self.refactor_every = refactor_every
        self.is_basic = np.zeros(instance.n_cols, dtype=bool)
        self.is_basic[self.basis] = True
        self.updates = 0
        self.inverse = np.empty((0, 0))
        self.values = ParametricVector(np.zeros(instance.n_rows))
        self.duals = ParametricVector(np.zeros(instance.n_rows))
        self.reduced_costs = ParametricVector(np.zeros(instance.n_cols))
        self.refactor()

    @classmethod
    def from_instance(cls, instance: LPInstance, refactor_every: int = 100) -> "Tableau":
        """Build the tableau of the instance's initial basis."""
        return cls(instance, refactor_every=refactor_every)

    def __repr__(self) -> str:
        return f"Tableau(rows={self.instance.n_rows}, cols={self.instance.n_cols}, updates={self.updates})"

    @property
    def nonbasic(self) -> np.ndarray:
        return np.flatnonzero(~self.is_basic)

    def refactor(self) -> None:
        """Recompute the basis inverse from scratch."""
        self.inverse = basis_inverse(self.instance.A[:, self.basis])
        self.updates = 0
        self._refresh()

    def _refresh(self) -> None:
        inst = self.instance
        self.values = ParametricVector(inst.b, inst.b_bar).transform(self.inverse)
        basic_cost = ParametricVector(inst.c[self.basis], inst.c_bar[self.basis])
        self.duals = basic_cost.transform(self.inverse.T)

        priced = self.duals.transform(inst.A.T)
        constant = inst.c - priced.constant
        slope = inst.c_bar - priced.slope
        constant[self.basis] = 0.0
        slope[self.basis] = 0.0
        self.reduced_costs = ParametricVector(constant, slope)

    def column(self, j: int) -> np.ndarray:
        """Entering direction ``B^{-1} a_j``."""
        return self.inverse @ self.instance.A[:, j]

    def row(self, i: int) -> np.ndarray:
        """Row ``i`` of ``B^{-1} A``."""
        return self.inverse[i, :] @ self.instance.A

    def pivot(self, row: int, entering: int) -> int:
        """
        Exchange the variable held by ``row`` for column ``entering``.

        Returns:
            The column index that left the basis.
        """

        direction = self.column(entering)
        leaving = int(self.basis[row])
        self.basis[row] = entering
        self.is_basic[leaving] = False
        self.is_basic[entering] = True
        self.updates += 1
        if self.updates >= self.refactor_every:
            self.refactor()
        else:
            eta_update(self.inverse, direction, row)
            self._refresh()
        return leaving

    def primal(self, lam: float) -> np.ndarray:
        """Full primal vector at ``lam``; nonbasic variables are zero."""
        x = np.zeros(self.instance.n_cols)
        x[self.basis] = self.values.value(lam)
        return x

    def dual(self, lam: float) -> np.ndarray:
        return self.duals.value(lam)

    def reduced(self, lam: float) -> np.ndarray:
        return self.reduced_costs.value(lam)


__all__ = ["Tableau"]
