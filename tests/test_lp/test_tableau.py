import numpy as np
import pytest

from parasimplex.lp.core import LPInstance
from parasimplex.lp.tableau import Tableau
from parasimplex.lp.utils import SingularBasisError


def _toy_instance() -> LPInstance:
    return LPInstance(
        A=np.array([[1.0, 1.0]]),
        b=np.array([1.0]),
        b_bar=np.array([0.0]),
        c=np.array([0.0, 2.0]),
        c_bar=np.array([1.0, 0.0]),
        basis=(1,),
    )


def _random_instance(rng: np.random.Generator, m: int = 3, n_extra: int = 4) -> LPInstance:
    A = np.hstack([rng.standard_normal((m, n_extra)), np.eye(m)])
    n = A.shape[1]
    return LPInstance(
        A=A,
        b=rng.uniform(1.0, 2.0, m),
        b_bar=rng.uniform(0.0, 1.0, m),
        c=rng.uniform(0.0, 1.0, n),
        c_bar=rng.uniform(0.5, 1.0, n),
        basis=tuple(range(n_extra, n)),
    )


def test_tableau_parametric_quantities():
    tableau = Tableau.from_instance(_toy_instance())
    assert tableau.values[0].constant == pytest.approx(1.0)
    assert tableau.values[0].slope == pytest.approx(0.0)
    assert tableau.duals[0].constant == pytest.approx(2.0)
    # d_0 = lam - 2, basic column has zero reduced cost
    assert tableau.reduced_costs[0].constant == pytest.approx(-2.0)
    assert tableau.reduced_costs[0].slope == pytest.approx(1.0)
    assert tableau.reduced_costs[1].constant == 0.0
    assert np.allclose(tableau.primal(3.0), [0.0, 1.0])
    assert tableau.nonbasic.tolist() == [0]


def test_tableau_pivot_updates_basis():
    tableau = Tableau.from_instance(_toy_instance())
    leaving = tableau.pivot(0, 0)
    assert leaving == 1
    assert tableau.basis.tolist() == [0]
    assert tableau.is_basic.tolist() == [True, False]
    assert np.allclose(tableau.dual(0.5), [0.5])
    assert np.allclose(tableau.reduced(0.5), [0.0, 1.5])


def test_eta_update_matches_refactorization(rng):
    instance = _random_instance(rng)
    tableau = Tableau(instance, refactor_every=1000)
    for row, entering in [(0, 0), (1, 1), (2, 2)]:
        tableau.pivot(row, entering)
    assert tableau.updates == 3
    expected = np.linalg.inv(instance.A[:, tableau.basis])
    assert np.allclose(tableau.inverse, expected, atol=1e-10)

    refactored = Tableau(instance, basis=tableau.basis)
    assert np.allclose(tableau.values.constant, refactored.values.constant)
    assert np.allclose(tableau.reduced_costs.slope, refactored.reduced_costs.slope)


def test_periodic_refactorization_resets_counter(rng):
    tableau = Tableau(_random_instance(rng), refactor_every=2)
    tableau.pivot(0, 0)
    assert tableau.updates == 1
    tableau.pivot(1, 1)
    assert tableau.updates == 0


def test_row_and_column_views(rng):
    instance = _random_instance(rng)
    tableau = Tableau.from_instance(instance)
    full = np.linalg.solve(instance.A[:, tableau.basis], instance.A)
    assert np.allclose(tableau.column(2), full[:, 2])
    assert np.allclose(tableau.row(1), full[1, :])


def test_singular_basis_raises():
    instance = LPInstance(
        A=np.array([[1.0, 2.0, 0.0], [2.0, 4.0, 1.0]]),
        b=np.ones(2),
        b_bar=np.zeros(2),
        c=np.zeros(3),
        c_bar=np.zeros(3),
        basis=(0, 1),
    )
    with pytest.raises(SingularBasisError):
        Tableau.from_instance(instance)
