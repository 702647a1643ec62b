"""
Statistical estimators reduced to parametric linear programs.

Each reduction builds an :class:`~parasimplex.lp.LPInstance` whose path in
``lam`` is the regularization path of the estimator, and projects the LP
solutions back to coefficients (and intercepts where the model has one).
"""

from . import base, dantzig, quantile, svm
from .base import Reduction, RegularizationPath, solve_reduction
from .dantzig import (
    compressed_sensing,
    compressed_sensing_lp,
    dantzig_lp,
    dantzig_selector,
    linf_constrained_lp,
)
from .quantile import quantile_regression, quantile_regression_lp
from .svm import sparse_svm, sparse_svm_lp

__all__ = [
    "base",
    "dantzig",
    "quantile",
    "svm",
    "Reduction",
    "RegularizationPath",
    "solve_reduction",
    # Reductions
    "quantile_regression_lp",
    "sparse_svm_lp",
    "dantzig_lp",
    "compressed_sensing_lp",
    "linf_constrained_lp",
    # Path fitters
    "quantile_regression",
    "sparse_svm",
    "dantzig_selector",
    "compressed_sensing",
]
