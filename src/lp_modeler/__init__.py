"""Model linear and integer programs, export them as LP files and delegate to external solvers."""

from .errors import NonLinearExpressionError, SolutionParseError, SolverError
from .lp import (
    LinearForm,
    LpBinary,
    LpConstraint,
    LpContinuous,
    LpExpression,
    LpInteger,
    LpObjective,
    LpProblem,
    LpVariable,
    Relation,
    VariableKind,
    canonicalize,
    lp_sum,
)
from .schemas import Solution, SolverOptions, Status
from .solvers import CbcSolver, CplexSolver, GlpkSolver, GurobiSolver, get_solver

__all__ = [
    "CbcSolver",
    "CplexSolver",
    "GlpkSolver",
    "GurobiSolver",
    "LinearForm",
    "LpBinary",
    "LpConstraint",
    "LpContinuous",
    "LpExpression",
    "LpInteger",
    "LpObjective",
    "LpProblem",
    "LpVariable",
    "NonLinearExpressionError",
    "Relation",
    "Solution",
    "SolutionParseError",
    "SolverError",
    "SolverOptions",
    "Status",
    "VariableKind",
    "canonicalize",
    "get_solver",
    "lp_sum",
]
