"""
Parametric linear programming: the path solver and its building blocks.

This subpackage traces the optimal solution of

```
    minimize    (c + lam * c_bar)^T x
    subject to  A x = b + lam * b_bar,  x >= 0
```

as ``lam`` decreases from ``+inf``, starting from a basis that is optimal
for all large ``lam``. Problem-specific front ends live in
:mod:`parasimplex.reductions`.
"""

from . import core, expression, kkt, recorder, solver, tableau, utils
from .core import (
    InvalidProblemParameter,
    LPInstance,
    Path,
    PathEntry,
    PathResult,
    SolverConfig,
    Status,
)
from .expression import ParametricExpression, ParametricVector
from .kkt import breakpoint_residuals, is_breakpoint_optimal, verify_path
from .recorder import PathRecorder
from .solver import ParametricSimplexSolver, parametric_simplex
from .tableau import Tableau

__all__ = [
    "core",
    "expression",
    "kkt",
    "recorder",
    "solver",
    "tableau",
    "utils",
    # Core types
    "Status",
    "InvalidProblemParameter",
    "LPInstance",
    "SolverConfig",
    "PathEntry",
    "Path",
    "PathResult",
    "ParametricExpression",
    "ParametricVector",
    "Tableau",
    "PathRecorder",
    # Algorithms
    "ParametricSimplexSolver",
    "parametric_simplex",
    "breakpoint_residuals",
    "is_breakpoint_optimal",
    "verify_path",
]
