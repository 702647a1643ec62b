"""
Example: Solution paths with parasimplex

Each example builds a sparse learning problem, traces its full solution path
with the parametric simplex method and checks a few breakpoints for
optimality.
"""

import numpy as np

from parasimplex import (
    SolverConfig,
    compressed_sensing_lp,
    dantzig_selector,
    parametric_simplex,
    quantile_regression,
    sparse_svm,
    verify_path,
)


def example_raw_lp():
    """Example: A two-variable parametric LP."""
    print("=" * 60)
    print("Example 1: Parametric LP")
    print("=" * 60)

    # min lam*x0 + 2*x1  s.t. x0 + x1 = 1, x >= 0
    result = parametric_simplex(
        np.array([[1.0, 1.0]]),
        b=[1.0],
        b_bar=[0.0],
        c=[0.0, 2.0],
        c_bar=[1.0, 0.0],
        basis=[1],
        lambda_threshold=0.5,
    )
    print(f"Status: {result.status}")
    for entry in result.path:
        print(f"  lam = {entry.lam:.3f}  x = {entry.x}")
    print()


def example_quantile_regression(rng):
    """Example: Median regression path."""
    print("=" * 60)
    print("Example 2: L1-penalized Quantile Regression")
    print("=" * 60)

    X = rng.standard_normal((50, 4))
    y = 1.0 + X @ np.array([2.0, 0.0, -1.0, 0.0]) + 0.2 * rng.standard_normal(50)
    fit = quantile_regression(X, y, tau=0.5, lambda_threshold=1e-6)
    print(fit)
    print(f"Coefficients at lam={fit.lambdas[-1]:.1e}: {np.round(fit.coef[-1], 3)}")
    print(f"Intercept: {fit.intercept[-1]:.3f}")
    print()


def example_sparse_svm(rng):
    """Example: Sparse SVM on two Gaussian clouds."""
    print("=" * 60)
    print("Example 3: Sparse SVM")
    print("=" * 60)

    labels = np.where(np.arange(40) < 20, 1.0, -1.0)
    X = rng.standard_normal((40, 3))
    X[:, 0] += 2.0 * labels
    fit = sparse_svm(X, labels, lambda_threshold=1e-3)
    accuracy = np.mean(np.sign(fit.predict(X)) == labels)
    print(fit)
    print(f"Training accuracy: {accuracy:.2f}")
    print()


def example_recovery(rng):
    """Example: Dantzig selector and compressed sensing."""
    print("=" * 60)
    print("Example 4: Dantzig Selector and Compressed Sensing")
    print("=" * 60)

    X = rng.standard_normal((30, 50)) / np.sqrt(30)
    truth = np.zeros(50)
    truth[[4, 21]] = [1.0, -1.5]
    reduction = compressed_sensing_lp(X, X @ truth)
    fit = reduction.solve(SolverConfig(lambda_threshold=1e-8))
    print(f"Recovery status: {fit.status}, breakpoints: {len(fit)}")
    print(f"Support recovered: {np.flatnonzero(np.abs(fit.coef[-1]) > 1e-6).tolist()}")
    print(f"Path verified: {verify_path(reduction.instance, fit.lp_result.path)}")

    design = rng.standard_normal((60, 5))
    response = design @ np.array([1.0, 0.0, 0.5, 0.0, 0.0]) + 0.05 * rng.standard_normal(60)
    path = dantzig_selector(design, response)
    print(f"Dantzig selector status: {path.status}")
    print(f"Dantzig selector path: {len(path)} breakpoints from lam={path.lambdas[0]:.3f}")
    print()


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("parasimplex - Solution Path Examples")
    print("=" * 60 + "\n")

    rng = np.random.default_rng(0)
    example_raw_lp()
    example_quantile_regression(rng)
    example_sparse_svm(rng)
    example_recovery(rng)

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
