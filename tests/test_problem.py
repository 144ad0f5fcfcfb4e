import logging

import pytest

from lp_modeler import LpInteger, LpObjective, LpProblem, LpVariable, VariableKind
from lp_modeler.schemas import Constraint, LPModel, LinearExpr, LinearTerm, Variable


def make_model() -> LPModel:
    return LPModel(
        name="diet-toy",
        sense="min",
        objective=LinearExpr(
            terms=[LinearTerm(var="x", coef=3.0), LinearTerm(var="y", coef=2.0)],
            constant=0.0,
        ),
        variables=[
            Variable(name="x", lb=0.0),
            Variable(name="y", lb=0.0, ub=10.0, kind="integer"),
        ],
        constraints=[
            Constraint(
                name="c1",
                lhs=LinearExpr(
                    terms=[LinearTerm(var="x", coef=1.0), LinearTerm(var="y", coef=2.0)],
                    constant=0.0,
                ),
                cmp=">=",
                rhs=8.0,
            ),
            Constraint(
                name="c2",
                lhs=LinearExpr(
                    terms=[LinearTerm(var="x", coef=3.0), LinearTerm(var="y", coef=1.0)],
                    constant=1.0,
                ),
                cmp="==",
                rhs=6.0,
            ),
        ],
    )


def test_variables_are_derived_in_first_seen_order():
    a, b, c = LpInteger("a"), LpInteger("b"), LpVariable("c")
    problem = LpProblem("derived", LpObjective.MAXIMIZE)
    problem += 2 * b
    problem += (a + c).le(4)
    assert list(problem.variables()) == ["b", "a", "c"]


def test_constraints_keep_insertion_order():
    x = LpVariable("x")
    problem = LpProblem("ordered")
    problem += x
    for bound in (5, 1, 3):
        problem += x.le(bound)
    assert [c.constant for _, c in problem.constraints] == [5.0, 1.0, 3.0]
    assert [name for name, _ in problem.constraints] == ["c1", "c2", "c3"]


def test_stored_constraints_are_generalized():
    x, y = LpVariable("x"), LpVariable("y")
    problem = LpProblem("general")
    problem += x
    problem += (x + 4).ge(y)
    _, stored = problem.constraints[0]
    assert stored.coefficients == {"x": 1.0, "y": -1.0}
    assert stored.constant == -4.0
    assert stored.name == "c1"


def test_replacing_objective_logs_warning(caplog):
    x = LpVariable("x")
    problem = LpProblem("twice")
    problem += x
    with caplog.at_level(logging.WARNING, logger="lp_modeler"):
        problem += 2 * x
    assert "Overwriting previously set objective" in caplog.text


def test_adding_unsupported_object_fails():
    problem = LpProblem("bad")
    with pytest.raises(TypeError):
        problem += "x + y"


def test_from_model_builds_equivalent_problem():
    problem = LpProblem.from_model(make_model())

    assert problem.name == "diet-toy"
    assert problem.objective_direction is LpObjective.MINIMIZE
    variables = problem.variables()
    assert variables["y"].kind is VariableKind.INTEGER
    assert (variables["y"].lower, variables["y"].upper) == (0.0, 10.0)

    names = [name for name, _ in problem.constraints]
    assert names == ["c1", "c2"]
    _, equality = problem.constraints[1]
    assert equality.coefficients == {"x": 3.0, "y": 1.0}
    assert equality.constant == 5.0


def test_from_model_text():
    text = LpProblem.from_model(make_model()).to_lp()
    assert "  obj: 3 x + 2 y\n" in text
    assert "  c1: x + 2 y >= 8\n" in text
    assert "  c2: 3 x + y = 5\n" in text
    assert "  x >= 0\n" in text
    assert "  0 <= y <= 10\n" in text
    assert "Generals\n  y\n" in text


def test_automatic_names_skip_names_already_taken():
    x = LpVariable("x")
    problem = LpProblem("named")
    problem += x
    problem += (x.le(4), "c2")
    problem += x.ge(1)
    problem += x.ge(0)
    assert [name for name, _ in problem.constraints] == ["c2", "c3", "c4"]


def test_clashing_declarations_inside_one_expression():
    problem = LpProblem("clash")
    problem += LpInteger("x") + LpVariable("x")
    with pytest.raises(ValueError, match="declared twice"):
        problem.variables()
    with pytest.raises(ValueError, match="declared twice"):
        (LpInteger("y") + LpVariable("y", lower=2)).le(3)


def test_clashing_declarations_across_constraints():
    problem = LpProblem("clash")
    problem += LpVariable("x")
    problem += LpInteger("z").le(3)
    problem += LpVariable("z", upper=5).ge(1)
    with pytest.raises(ValueError, match="declared twice"):
        problem.to_lp()
