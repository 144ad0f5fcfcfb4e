import math

import pytest

from lp_modeler import LpBinary, LpContinuous, LpInteger, LpObjective, LpProblem, LpVariable


def make_problem() -> LpProblem:
    a = LpInteger("a")
    b = LpInteger("b")
    problem = LpProblem("Problem", LpObjective.MAXIMIZE)
    problem += 10.0 * a + 20.0 * b
    problem += (300 * (a - b)).ge(100)
    problem += (300 * (-a + b)).le(100)
    problem += (a + b).le(10)
    return problem


EXPECTED = """\\ Problem name: Problem

Maximize
  obj: 10 a + 20 b

Subject To
  c1: 300 a - 300 b >= 100
  c2: - 300 a + 300 b <= 100
  c3: a + b <= 10

Generals
  a b

End
"""


def test_end_to_end_problem_text():
    assert make_problem().to_lp() == EXPECTED


def test_writing_twice_is_byte_identical(tmp_path):
    problem = make_problem()
    first = problem.write_lp(tmp_path / "first.lp").read_bytes()
    second = problem.write_lp(tmp_path / "second.lp").read_bytes()
    assert first == second
    assert first.decode("utf-8") == EXPECTED


def test_sections_in_fixed_order():
    x = LpContinuous("x", lower=-5, upper=5)
    n = LpInteger("n", upper=8)
    flag = LpBinary("flag")
    problem = LpProblem("order", LpObjective.MINIMIZE)
    problem += x + n - flag
    problem += (x + n + flag).ge(1)

    text = problem.to_lp()
    markers = ["Minimize", "Subject To", "Bounds", "Generals", "Binaries", "End"]
    positions = [text.index(m) for m in markers]
    assert positions == sorted(positions)
    assert "  -5 <= x <= 5" in text
    assert "  n <= 8" in text
    assert "Binaries\n  flag\n" in text


@pytest.mark.parametrize(
    "variable, expected",
    [
        (LpContinuous("x", lower=-math.inf, upper=math.inf), "x free"),
        (LpContinuous("x", lower=2, upper=2), "x = 2"),
        (LpContinuous("x", lower=1.5), "x >= 1.5"),
        (LpContinuous("x", lower=-math.inf, upper=3), "-inf <= x <= 3"),
    ],
)
def test_bounds_lines(variable, expected):
    problem = LpProblem("bounds")
    problem += variable
    problem += variable.le(10)
    assert f"Bounds\n  {expected}\n" in problem.to_lp()


def test_unit_coefficients_and_sign_folding():
    x, y, z = LpVariable("x"), LpVariable("y"), LpVariable("z")
    problem = LpProblem("signs")
    problem += -x + y - 3 * z + 0.25
    problem += (x - 1.5 * y).equal(-2)
    text = problem.to_lp()
    assert "  obj: - x + y - 3 z + 0.25\n" in text
    assert "  c1: x - 1.5 y = -2\n" in text
    assert "+ -" not in text


def test_constant_objective_uses_fixed_dummy():
    x = LpVariable("x")
    problem = LpProblem("feasibility")
    problem += x.ge(1)
    text = problem.to_lp()
    assert "  obj: 0 __dummy\n" in text
    assert "  __dummy = 0\n" in text


def test_explicit_and_duplicate_names():
    x = LpVariable("x")
    problem = LpProblem("names")
    problem += x
    problem += (x.le(4), "cap")
    problem += x.ge(1)
    assert [name for name, _ in problem.constraints] == ["cap", "c2"]
    with pytest.raises(ValueError):
        problem += (x.le(5), "cap")


def test_conflicting_declarations_are_rejected():
    problem = LpProblem("clash")
    problem += LpInteger("x") + LpContinuous("x")
    with pytest.raises(ValueError):
        problem.to_lp()


def test_long_expressions_are_wrapped():
    xs = [LpVariable(f"variable_with_a_long_name_{i}") for i in range(40)]
    problem = LpProblem("wide")
    problem += sum(xs)
    text = problem.to_lp()
    assert max(len(line) for line in text.splitlines()) <= 255
    assert text.count("variable_with_a_long_name_") == 40
