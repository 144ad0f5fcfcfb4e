"""Expression algebra, constraints, problems and the LP file writer."""

from .constraint import LpConstraint, Relation
from .expression import (
    LinearForm,
    LpBinary,
    LpContinuous,
    LpExpression,
    LpInteger,
    LpVariable,
    VariableKind,
    canonicalize,
    lp_sum,
)
from .problem import LpObjective, LpProblem
from .writer import lp_string, write_lp

__all__ = [
    "LinearForm",
    "LpBinary",
    "LpConstraint",
    "LpContinuous",
    "LpExpression",
    "LpInteger",
    "LpObjective",
    "LpProblem",
    "LpVariable",
    "Relation",
    "VariableKind",
    "canonicalize",
    "lp_string",
    "lp_sum",
    "write_lp",
]
