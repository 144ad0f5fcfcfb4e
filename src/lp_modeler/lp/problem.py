from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..schemas import LPModel, LinearExpr
from .constraint import LpConstraint, Relation
from .expression import (
    Literal,
    LpExpression,
    LpVariable,
    Scaled,
    VariableKind,
    as_expression,
    iter_nodes,
    lp_sum,
    register_variable,
)

_LOGGER = logging.getLogger(__name__)

_CMP_TO_RELATION = {"<=": Relation.LE, ">=": Relation.GE, "==": Relation.EQ}


class LpObjective(str, Enum):
    MAXIMIZE = "max"
    MINIMIZE = "min"


class LpProblem:
    """An objective plus an ordered list of named constraints.

    The variable set is not stored; it is recovered by walking the
    objective and then every constraint in insertion order.
    """

    def __init__(self, name: str = "problem", objective: LpObjective = LpObjective.MINIMIZE) -> None:
        self.name = name
        self.objective_direction = LpObjective(objective)
        self.objective: LpExpression = Literal(0.0)
        self.constraints: List[Tuple[str, LpConstraint]] = []
        self._names: set[str] = set()

    def __repr__(self):
        return (
            f"LpProblem({self.name!r}, {self.objective_direction.name}, "
            f"{len(self.constraints)} constraints)"
        )

    def __iadd__(self, other):
        if isinstance(other, tuple):
            other, name = other
        else:
            name = None
        if isinstance(other, LpConstraint):
            self.add_constraint(other, name)
        elif isinstance(other, (LpExpression, int, float)):
            self.set_objective(other)
        else:
            raise TypeError(f"Cannot add {type(other).__name__} to a problem")
        return self

    def set_objective(self, expr) -> None:
        if not (isinstance(self.objective, Literal) and self.objective.value == 0.0):
            _LOGGER.warning("Overwriting previously set objective of problem %s", self.name)
        self.objective = as_expression(expr)

    def add_constraint(self, constraint: LpConstraint, name: Optional[str] = None) -> str:
        """Append ``constraint`` and return the name it is stored under."""
        name = name or constraint.name or self._next_name()
        if any(ch.isspace() for ch in name) or ":" in name:
            raise ValueError(f"Invalid constraint name {name!r}")
        if name in self._names:
            raise ValueError(f"Duplicate constraint name '{name}'.")
        self._names.add(name)
        self.constraints.append((name, constraint.generalize().named(name)))
        return name

    def _next_name(self) -> str:
        index = len(self.constraints) + 1
        while f"c{index}" in self._names:
            index += 1
        return f"c{index}"

    def variables(self) -> Dict[str, LpVariable]:
        """Every variable reachable from the objective and the constraints."""
        found: Dict[str, LpVariable] = {}
        expressions = [self.objective]
        for _, constraint in self.constraints:
            expressions.extend((constraint.lhs, constraint.rhs))
        for expr in expressions:
            for node in iter_nodes(expr):
                if isinstance(node, LpVariable):
                    register_variable(found, node)
        return found

    def to_lp(self) -> str:
        from .writer import lp_string

        return lp_string(self)

    def write_lp(self, path: Union[str, Path]) -> Path:
        from .writer import write_lp

        return write_lp(self, path)

    @classmethod
    def from_model(cls, model: LPModel) -> "LpProblem":
        """Build a problem from the JSON ``LPModel`` schema."""
        declared = {
            var.name: LpVariable(var.name, VariableKind(var.kind), var.lb, var.ub)
            for var in model.variables
        }

        def lookup(name: str) -> LpVariable:
            var = declared.get(name)
            if var is None:
                var = declared[name] = LpVariable(name)
            return var

        def build(expr: LinearExpr) -> LpExpression:
            terms = [
                lookup(term.var) if term.coef == 1.0 else Scaled(term.coef, lookup(term.var))
                for term in expr.terms
            ]
            if expr.constant:
                terms.append(Literal(expr.constant))
            return lp_sum(terms)

        sense = LpObjective.MAXIMIZE if model.sense == "max" else LpObjective.MINIMIZE
        problem = cls(model.name, sense)
        problem += build(model.objective)
        for cons in model.constraints:
            relation = _CMP_TO_RELATION[cons.cmp]
            problem.add_constraint(
                LpConstraint(build(cons.lhs), relation, Literal(cons.rhs)), cons.name
            )
        return problem
