"""parasimplex - solution paths of sparse learning problems by the parametric simplex method."""

__version__ = "0.1.0"

# Parametric LP solver
from .lp import (
    InvalidProblemParameter,
    LPInstance,
    ParametricExpression,
    ParametricSimplexSolver,
    Path,
    PathEntry,
    PathRecorder,
    PathResult,
    SolverConfig,
    Status,
    breakpoint_residuals,
    is_breakpoint_optimal,
    parametric_simplex,
    verify_path,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Problem reductions
from .reductions import (
    Reduction,
    RegularizationPath,
    compressed_sensing,
    compressed_sensing_lp,
    dantzig_lp,
    dantzig_selector,
    quantile_regression,
    quantile_regression_lp,
    sparse_svm,
    sparse_svm_lp,
)

__all__ = [
    "__version__",
    # Parametric LP solver
    "Status",
    "InvalidProblemParameter",
    "LPInstance",
    "SolverConfig",
    "ParametricExpression",
    "PathEntry",
    "Path",
    "PathRecorder",
    "PathResult",
    "ParametricSimplexSolver",
    "parametric_simplex",
    "breakpoint_residuals",
    "is_breakpoint_optimal",
    "verify_path",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
    # Problem reductions
    "Reduction",
    "RegularizationPath",
    "quantile_regression_lp",
    "sparse_svm_lp",
    "dantzig_lp",
    "compressed_sensing_lp",
    "quantile_regression",
    "sparse_svm",
    "dantzig_selector",
    "compressed_sensing",
]
