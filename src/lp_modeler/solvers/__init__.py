"""Adapters for external LP/MIP solver binaries."""

from typing import Dict, Optional, Type

from ..schemas import SolverOptions
from .base import SolverProgram
from .cbc import CbcSolver
from .cplex import CplexSolver
from .glpk import GlpkSolver
from .gurobi import GurobiSolver
from .parsers import (
    CbcSolutionParser,
    CplexSolutionParser,
    GlpkSolutionParser,
    GurobiSolutionParser,
    SolutionParser,
)
from .runner import run_solver

SOLVERS: Dict[str, Type[SolverProgram]] = {
    cls.name: cls for cls in (CbcSolver, GlpkSolver, CplexSolver, GurobiSolver)
}


def get_solver(name: str, command: Optional[str] = None, **options) -> SolverProgram:
    """Instantiate the adapter registered under ``name``."""
    try:
        cls = SOLVERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown solver '{name}'. Available: {', '.join(sorted(SOLVERS))}") from None
    return cls(command=command, options=SolverOptions(**options))


__all__ = [
    "SOLVERS",
    "CbcSolutionParser",
    "CbcSolver",
    "CplexSolutionParser",
    "CplexSolver",
    "GlpkSolutionParser",
    "GlpkSolver",
    "GurobiSolutionParser",
    "GurobiSolver",
    "SolutionParser",
    "SolverProgram",
    "get_solver",
    "run_solver",
]
