from __future__ import annotations

import io
import os

from mcp.server.fastmcp import FastMCP

from .lp.problem import LpProblem
from .schemas import LPModel, SolverName, SolverOptions
from .solvers import get_solver

app = FastMCP("LP Modeler")


@app.tool()
def write_lp_file(model: LPModel) -> str:
    """Render a structured model as CPLEX LP text."""
    return LpProblem.from_model(model).to_lp()


@app.tool()
def solve_model(
    model: LPModel,
    solver: SolverName = "cbc",
    options: SolverOptions | None = None,
    command: str | None = None,
    timeout: float | None = None,
) -> dict:
    """Solve a model with an installed external solver and return status and variable values."""
    opts = options or SolverOptions()
    program = get_solver(solver, command=command, **opts.model_dump(exclude_none=True))
    problem = LpProblem.from_model(model)
    return program.run(problem, timeout=timeout).model_dump(mode="json")


@app.tool()
def parse_solution(solver: SolverName, content: str) -> dict:
    """Decode the contents of a solver's solution file into status and variable values."""
    program = get_solver(solver)
    return program.parser.parse(io.BytesIO(content.encode("utf-8"))).model_dump(mode="json")


if __name__ == "__main__":
    transport = os.environ.get("MCP_TRANSPORT", "stdio")
    if transport == "stdio":
        app.run(transport="stdio")
    else:
        app.settings.port = int(os.environ.get("PORT", "8081"))
        app.run(transport="streamable-http")
