from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Sense = Literal["min", "max"]
Cmp = Literal["<=", ">=", "=="]
Kind = Literal["continuous", "integer", "binary"]
SolverName = Literal["cbc", "glpk", "cplex", "gurobi"]
NonNegativeFinite = Annotated[float, Field(ge=0.0, allow_inf_nan=False)]


class Status(str, Enum):
    OPTIMAL = "optimal"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    UNKNOWN = "unknown"


class Solution(BaseModel):
    """Outcome of one solver run: a status and the value of every reported variable.

    Fields cannot be reassigned, but ``results`` is an ordinary dict
    owned by the solution, so the model is not hashable.
    """

    model_config = ConfigDict(frozen=True)

    status: Status
    results: Dict[str, float] = Field(default_factory=dict)

    @property
    def is_optimal(self) -> bool:
        return self.status is Status.OPTIMAL


class SolverOptions(BaseModel):
    """Backend tuning knobs, validated when the solver is configured."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mip_gap: Optional[NonNegativeFinite] = None
    threads: Optional[Annotated[int, Field(ge=1)]] = None
    time_limit: Optional[NonNegativeFinite] = None


# JSON problem description accepted by the MCP tools.


class Variable(BaseModel):
    name: str
    lb: float | None = None
    ub: float | None = None
    kind: Kind = "continuous"


class LinearTerm(BaseModel):
    var: str
    coef: float


class LinearExpr(BaseModel):
    terms: List[LinearTerm] = Field(default_factory=list)
    constant: float = 0.0


class Constraint(BaseModel):
    name: str | None = None
    lhs: LinearExpr
    cmp: Cmp
    rhs: float


class LPModel(BaseModel):
    name: str = "problem"
    sense: Sense
    objective: LinearExpr
    variables: List[Variable] = Field(default_factory=list)
    constraints: List[Constraint] = Field(default_factory=list)

    def variable_index(self) -> Dict[str, int]:
        return {var.name: idx for idx, var in enumerate(self.variables)}
