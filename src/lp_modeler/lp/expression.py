"""Linear expression trees built from operator composition.

Expressions are immutable trees. Every operator returns a fresh node and
never touches its operands, so one subtree can be shared by any number of
parents. The node set is closed:

* ``LpVariable``  -- a named decision variable
* ``Literal``     -- a numeric constant
* ``Negation``    -- ``-operand``
* ``Sum``         -- ``left + right``
* ``Difference``  -- ``left - right``
* ``Scaled``      -- ``factor * operand`` where ``factor`` is a plain number

``Scaled`` only ever holds a number, so a product of two variable-bearing
expressions cannot be represented; ``*`` raises ``NonLinearExpressionError``
instead of building one.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union

from ..errors import NonLinearExpressionError

Number = Union[int, float]


class VariableKind(str, Enum):
    CONTINUOUS = "continuous"
    INTEGER = "integer"
    BINARY = "binary"


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _scalar(value) -> float:
    if not math.isfinite(value):
        raise ValueError(f"Cannot build an expression with a non-finite number: {value!r}")
    return float(value)


def as_expression(value) -> "LpExpression":
    """Lift a number into a ``Literal``; expressions pass through unchanged."""
    if isinstance(value, LpExpression):
        return value
    if _is_number(value):
        return Literal(_scalar(value))
    raise TypeError(f"Cannot use {type(value).__name__} in a linear expression")


def _scale_factor(value) -> Optional[float]:
    """Return the scalar carried by ``value``, or None if it is not a constant."""
    if _is_number(value):
        return _scalar(value)
    if isinstance(value, Literal):
        return value.value
    return None


class LpExpression:
    """Operator sugar shared by every node.

    ``==`` keeps its ordinary meaning; use :meth:`equal` for equality
    constraints.
    """

    __slots__ = ()

    def __add__(self, other):
        return Sum(self, as_expression(other))

    def __radd__(self, other):
        return Sum(as_expression(other), self)

    def __sub__(self, other):
        return Difference(self, as_expression(other))

    def __rsub__(self, other):
        return Difference(as_expression(other), self)

    def __neg__(self):
        return Negation(self)

    def __pos__(self):
        return self

    def __mul__(self, other):
        if not isinstance(other, LpExpression) and not _is_number(other):
            return NotImplemented
        factor = _scale_factor(other)
        if factor is not None:
            return Scaled(factor, self)
        factor = _scale_factor(self)
        if factor is not None:
            return Scaled(factor, other)
        raise NonLinearExpressionError(
            "Cannot multiply two expressions that both contain variables"
        )

    def __rmul__(self, other):
        if not _is_number(other):
            return NotImplemented
        return Scaled(_scalar(other), self)

    def __truediv__(self, other):
        factor = _scale_factor(other)
        if factor is None:
            raise NonLinearExpressionError("Expressions can only be divided by a constant")
        if factor == 0:
            raise ZeroDivisionError("Cannot divide an expression by zero")
        return Scaled(1.0 / factor, self)

    def __le__(self, other):
        return self.le(other)

    def __ge__(self, other):
        return self.ge(other)

    def le(self, other):
        from .constraint import LpConstraint, Relation

        return LpConstraint(self, Relation.LE, as_expression(other)).generalize()

    def ge(self, other):
        from .constraint import LpConstraint, Relation

        return LpConstraint(self, Relation.GE, as_expression(other)).generalize()

    def equal(self, other):
        from .constraint import LpConstraint, Relation

        return LpConstraint(self, Relation.EQ, as_expression(other)).generalize()

    def children(self) -> Tuple["LpExpression", ...]:
        return ()

    def variables(self) -> Dict[str, "LpVariable"]:
        """Variables reachable from this node, keyed by name in first-seen order."""
        found: Dict[str, LpVariable] = {}
        for node in iter_nodes(self):
            if isinstance(node, LpVariable):
                register_variable(found, node)
        return found

    def canonical(self) -> "LinearForm":
        return canonicalize(self)

    def to_lp_file_format(self) -> str:
        from .writer import format_linear_form

        return format_linear_form(canonicalize(self))


class LpVariable(LpExpression):
    """A decision variable. Identity, equality and hashing use the name only."""

    __slots__ = ("name", "kind", "lower", "upper")

    def __init__(
        self,
        name: str,
        kind: VariableKind = VariableKind.CONTINUOUS,
        lower: Optional[Number] = None,
        upper: Optional[Number] = None,
    ) -> None:
        if not name or any(ch.isspace() for ch in name):
            raise ValueError(f"Invalid variable name {name!r}")
        kind = VariableKind(kind)
        if kind is VariableKind.BINARY and (lower is not None or upper is not None):
            raise ValueError(f"Binary variable {name} cannot carry explicit bounds")
        if lower is not None and upper is not None and lower > upper:
            raise ValueError(f"Variable {name} has inconsistent bounds (lb {lower} > ub {upper}).")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "lower", None if lower is None else float(lower))
        object.__setattr__(self, "upper", None if upper is None else float(upper))

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if isinstance(other, LpVariable):
            return self.name == other.name
        return NotImplemented

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return f"LpVariable({self.name!r}, {self.kind.value})"

    def __str__(self):
        return self.name

    def declaration(self) -> Tuple[VariableKind, Optional[float], Optional[float]]:
        return self.kind, self.lower, self.upper


def register_variable(found: Dict[str, "LpVariable"], var: "LpVariable") -> "LpVariable":
    """Record ``var`` under its name; a second declaration must match the first."""
    known = found.setdefault(var.name, var)
    if known is not var and known.declaration() != var.declaration():
        raise ValueError(
            f"Variable '{var.name}' is declared twice with different kinds or bounds."
        )
    return known


def LpContinuous(name: str, lower: Optional[Number] = None, upper: Optional[Number] = None) -> LpVariable:
    return LpVariable(name, VariableKind.CONTINUOUS, lower, upper)


def LpInteger(name: str, lower: Optional[Number] = None, upper: Optional[Number] = None) -> LpVariable:
    return LpVariable(name, VariableKind.INTEGER, lower, upper)


def LpBinary(name: str) -> LpVariable:
    return LpVariable(name, VariableKind.BINARY)


@dataclass(frozen=True, eq=False)
class Literal(LpExpression):
    value: float

    def __repr__(self):
        return f"Literal({self.value!r})"


@dataclass(frozen=True, eq=False)
class Negation(LpExpression):
    operand: LpExpression

    def children(self):
        return (self.operand,)


@dataclass(frozen=True, eq=False)
class Sum(LpExpression):
    left: LpExpression
    right: LpExpression

    def children(self):
        return (self.left, self.right)


@dataclass(frozen=True, eq=False)
class Difference(LpExpression):
    left: LpExpression
    right: LpExpression

    def children(self):
        return (self.left, self.right)


@dataclass(frozen=True, eq=False)
class Scaled(LpExpression):
    factor: float
    operand: LpExpression

    def children(self):
        return (self.operand,)


def iter_nodes(root: LpExpression) -> Iterator[LpExpression]:
    """Depth-first, left-to-right walk that does not recurse."""
    stack: List[LpExpression] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children()))


@dataclass(frozen=True)
class LinearForm:
    """``constant + sum(coefficients[name] * name)`` with zero terms removed.

    Forms compare by value and are not hashable.
    """

    __hash__ = None

    coefficients: Dict[str, float] = field(default_factory=dict)
    constant: float = 0.0
    variables: Dict[str, LpVariable] = field(default_factory=dict, compare=False)

    def __iter__(self):
        for name, coef in self.coefficients.items():
            yield self.variables[name], coef

    def is_constant(self) -> bool:
        return not self.coefficients


def canonicalize(expr: LpExpression) -> LinearForm:
    """Flatten ``expr`` to one coefficient per variable plus a constant.

    Each node is visited once together with the multiplier accumulated on
    the path from the root, which distributes scalars over sums and
    differences. Terms are ordered by first occurrence in a left-to-right
    walk; duplicate variables are merged by summation.
    """
    coefficients: Dict[str, float] = {}
    variables: Dict[str, LpVariable] = {}
    constant = 0.0

    stack: List[Tuple[LpExpression, float]] = [(expr, 1.0)]
    while stack:
        node, multiplier = stack.pop()
        if isinstance(node, LpVariable):
            register_variable(variables, node)
            coefficients[node.name] = coefficients.get(node.name, 0.0) + multiplier
        elif isinstance(node, Literal):
            constant += multiplier * node.value
        elif isinstance(node, Negation):
            stack.append((node.operand, -multiplier))
        elif isinstance(node, Sum):
            stack.append((node.right, multiplier))
            stack.append((node.left, multiplier))
        elif isinstance(node, Difference):
            stack.append((node.right, -multiplier))
            stack.append((node.left, multiplier))
        elif isinstance(node, Scaled):
            stack.append((node.operand, multiplier * node.factor))
        else:
            raise TypeError(f"Unknown expression node {type(node).__name__}")

    coefficients = {name: coef for name, coef in coefficients.items() if coef != 0.0}
    variables = {name: variables[name] for name in coefficients}
    return LinearForm(coefficients=coefficients, constant=constant, variables=variables)


def from_linear_form(form: LinearForm, include_constant: bool = True) -> LpExpression:
    """Rebuild a flat ``c1*x1 + c2*x2 + ... (+ k)`` tree from a linear form."""
    expr: Optional[LpExpression] = None
    for variable, coef in form:
        term = variable if coef == 1.0 else Scaled(coef, variable)
        expr = term if expr is None else Sum(expr, term)
    if include_constant and (form.constant != 0.0 or expr is None):
        constant = Literal(form.constant)
        expr = constant if expr is None else Sum(expr, constant)
    if expr is None:
        expr = Literal(0.0)
    return expr


def lp_sum(items) -> LpExpression:
    """Sum an iterable of expressions or numbers into one expression."""
    total: Optional[LpExpression] = None
    for item in items:
        item = as_expression(item)
        total = item if total is None else Sum(total, item)
    return total if total is not None else Literal(0.0)
