"""Serialisation of an ``LpProblem`` to the CPLEX LP text format.

Output is deterministic: constraints appear in insertion order and
variables in the order they are first reached from the objective and the
constraints, so writing the same problem twice gives identical bytes.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, Optional, Union

from .constraint import LpConstraint
from .expression import LinearForm, LpVariable, VariableKind, canonicalize

_LOGGER = logging.getLogger(__name__)

DUMMY_VARIABLE = "__dummy"
LINE_SIZE = 255


def format_number(value: float) -> str:
    if math.isinf(value):
        return "+inf" if value > 0 else "-inf"
    # adding zero turns -0.0 into 0.0
    return f"{value + 0:.12g}"


def _format_terms(form: LinearForm) -> List[str]:
    terms: List[str] = []
    for name, coef in form.coefficients.items():
        if coef < 0:
            sign = "-"
            coef = -coef
        else:
            sign = "+" if terms else ""
        body = name if coef == 1 else f"{format_number(coef)} {name}"
        terms.append(f"{sign} {body}" if sign else body)
    if not terms:
        terms.append(f"0 {DUMMY_VARIABLE}")
    return terms


def _wrap(prefix: str, terms: List[str]) -> str:
    lines: List[str] = []
    line = prefix
    for term in terms:
        if len(line) + len(term) + 1 > LINE_SIZE and line.strip():
            lines.append(line)
            line = "   "
        line = f"{line} {term}"
    lines.append(line)
    return "\n".join(lines)


def _expression_terms(form: LinearForm) -> List[str]:
    terms = _format_terms(form)
    if form.constant:
        sign = "-" if form.constant < 0 else "+"
        terms.append(f"{sign} {format_number(abs(form.constant))}")
    return terms


def format_linear_form(form: LinearForm) -> str:
    return " ".join(_expression_terms(form))


def format_constraint(constraint: LpConstraint, name: str) -> str:
    """``name: <terms> <op> <constant>`` for a generalized constraint."""
    terms = _format_terms(constraint.linear_form)
    terms.append(f"{constraint.relation.value} {format_number(constraint.constant)}")
    return _wrap(f"  {name}:", terms)


def _uses_dummy(problem) -> bool:
    if canonicalize(problem.objective).is_constant():
        return True
    return any(not c.coefficients for _, c in problem.constraints)


def _format_bound(var: LpVariable) -> Optional[str]:
    lower, upper = var.lower, var.upper
    if lower is None and upper is None:
        return None
    if lower is not None and upper is not None:
        if math.isinf(lower) and lower < 0 and math.isinf(upper) and upper > 0:
            return f"{var.name} free"
        if lower == upper:
            return f"{var.name} = {format_number(lower)}"
        return f"{format_number(lower)} <= {var.name} <= {format_number(upper)}"
    if lower is not None:
        return f"{var.name} >= {format_number(lower)}"
    return f"{var.name} <= {format_number(upper)}"


def lp_string(problem) -> str:
    variables = problem.variables()
    objective = canonicalize(problem.objective)
    out: List[str] = [f"\\ Problem name: {problem.name}", ""]

    out.append("Maximize" if problem.objective_direction.value == "max" else "Minimize")
    out.append(_wrap("  obj:", _expression_terms(objective)))
    out.append("")

    out.append("Subject To")
    for name, constraint in problem.constraints:
        out.append(format_constraint(constraint, name))
    out.append("")

    bounds = [b for b in (_format_bound(v) for v in variables.values()) if b is not None]
    if _uses_dummy(problem):
        bounds.append(f"{DUMMY_VARIABLE} = 0")
    if bounds:
        out.append("Bounds")
        out.extend(f"  {b}" for b in bounds)
        out.append("")

    generals = [n for n, v in variables.items() if v.kind is VariableKind.INTEGER]
    if generals:
        out.append("Generals")
        out.append(_wrap(" ", generals))
        out.append("")

    binaries = [n for n, v in variables.items() if v.kind is VariableKind.BINARY]
    if binaries:
        out.append("Binaries")
        out.append(_wrap(" ", binaries))
        out.append("")

    out.append("End")
    text = "\n".join(out) + "\n"
    _LOGGER.debug(
        "Wrote problem %s: %d variables, %d constraints",
        problem.name,
        len(variables),
        len(problem.constraints),
    )
    return text


def write_lp(problem, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.write_text(lp_string(problem), encoding="utf-8")
    return path
