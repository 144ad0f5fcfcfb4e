import subprocess
from pathlib import Path

from lp_modeler import server
from lp_modeler.schemas import Constraint, LPModel, LinearExpr, LinearTerm, SolverOptions, Variable
from lp_modeler.solvers import runner


def make_model() -> LPModel:
    return LPModel(
        name="basic-mip",
        sense="max",
        objective=LinearExpr(terms=[LinearTerm(var="x", coef=1.0), LinearTerm(var="y", coef=1.0)]),
        variables=[
            Variable(name="x", kind="binary"),
            Variable(name="y", kind="binary"),
        ],
        constraints=[
            Constraint(
                name="limit",
                lhs=LinearExpr(terms=[LinearTerm(var="x", coef=1.0), LinearTerm(var="y", coef=1.0)]),
                cmp="<=",
                rhs=1.0,
            )
        ],
    )


def test_write_lp_file_tool():
    text = server.write_lp_file(make_model())
    assert text.startswith("\\ Problem name: basic-mip\n")
    assert "Maximize\n  obj: x + y\n" in text
    assert "  limit: x + y <= 1\n" in text
    assert "Binaries\n  x y\n" in text


def test_parse_solution_tool():
    result = server.parse_solution("gurobi", "# Objective value = 1\nx 1\ny 0\n")
    assert result == {"status": "optimal", "results": {"x": 1.0, "y": 0.0}}


def test_solve_model_tool(monkeypatch):
    seen = []

    def run(argv, **kwargs):
        seen.append(list(argv))
        Path(argv[-1]).write_text("Optimal - objective value 1\n      0 x   1   0\n")
        return subprocess.CompletedProcess(argv, 0, stdout=b"", stderr=b"")

    monkeypatch.setattr(runner.subprocess, "run", run)
    result = server.solve_model(make_model(), solver="cbc", options=SolverOptions(mip_gap=0.05))

    assert result["status"] == "optimal"
    assert result["results"] == {"x": 1.0, "y": 0.0}
    assert seen[0][2:4] == ["ratioGap", "0.05"]
