from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional

from .expression import (
    LinearForm,
    Literal,
    LpExpression,
    LpVariable,
    as_expression,
    canonicalize,
    from_linear_form,
)


class Relation(str, Enum):
    LE = "<="
    GE = ">="
    EQ = "="


@dataclass(frozen=True, eq=False)
class LpConstraint:
    """``lhs <relation> rhs`` with an optional name.

    Constraints returned by the expression operators are already
    generalized: every variable term sits on the left and the right-hand
    side is a single ``Literal``.
    """

    lhs: LpExpression
    relation: Relation
    rhs: LpExpression
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "lhs", as_expression(self.lhs))
        object.__setattr__(self, "rhs", as_expression(self.rhs))
        object.__setattr__(self, "relation", Relation(self.relation))

    def generalize(self) -> "LpConstraint":
        """Move variables left and constants right; the relation never flips."""
        form = canonicalize(self.lhs - self.rhs)
        variables_only = LinearForm(form.coefficients, 0.0, form.variables)
        return LpConstraint(
            from_linear_form(variables_only, include_constant=False),
            self.relation,
            Literal(-form.constant + 0.0),
            self.name,
        )

    def is_generalized(self) -> bool:
        return isinstance(self.rhs, Literal) and canonicalize(self.lhs).constant == 0.0

    def named(self, name: str) -> "LpConstraint":
        return replace(self, name=name)

    @property
    def linear_form(self) -> LinearForm:
        form = canonicalize(self.lhs - self.rhs)
        return LinearForm(form.coefficients, 0.0, form.variables)

    @property
    def coefficients(self) -> Dict[str, float]:
        return self.linear_form.coefficients

    @property
    def variables(self) -> Dict[str, LpVariable]:
        return self.linear_form.variables

    @property
    def constant(self) -> float:
        """Right-hand side value of the generalized constraint."""
        return canonicalize(self.rhs - self.lhs).constant

    def holds(self, values: Dict[str, float], tol: float = 1e-9) -> bool:
        """Evaluate the constraint for an assignment of variable values."""
        form = canonicalize(self.lhs - self.rhs)
        diff = form.constant
        for name, coef in form.coefficients.items():
            diff += coef * values.get(name, 0.0)
        if self.relation is Relation.LE:
            return diff <= tol
        if self.relation is Relation.GE:
            return diff >= -tol
        return abs(diff) <= tol

    def to_lp_file_format(self) -> str:
        from .writer import format_constraint

        return format_constraint(self.generalize(), self.name or "c")
