from __future__ import annotations

from typing import List, Optional

from ..schemas import Status
from .base import PathLike, SolverProgram, contains
from .parsers import GurobiSolutionParser

# checked in order: the combined banner must win over its parts
_STDOUT_MARKERS = (
    ("Infeasible or unbounded model", Status.UNKNOWN),
    ("Model is infeasible or unbounded", Status.UNKNOWN),
    ("Infeasible model", Status.INFEASIBLE),
    ("Model is infeasible", Status.INFEASIBLE),
    ("Unbounded model", Status.UNBOUNDED),
    ("Model is unbounded", Status.UNBOUNDED),
)


class GurobiSolver(SolverProgram):
    """Gurobi command-line tool. Parameters must come before the model file."""

    name = "gurobi"
    default_command = "gurobi_cl"
    solution_suffix = ".sol"
    parser = GurobiSolutionParser()

    def arguments(self, lp_file: PathLike, solution_file: PathLike) -> List[str]:
        args = [f"ResultFile={solution_file}"]
        if self.options.mip_gap is not None:
            args.append(f"MIPGap={self.options.mip_gap:g}")
        if self.options.threads is not None:
            args.append(f"Threads={self.options.threads}")
        if self.options.time_limit is not None:
            args.append(f"TimeLimit={self.options.time_limit:g}")
        args.append(str(lp_file))
        return args

    def parse_stdout_status(self, stdout: bytes) -> Optional[Status]:
        # gurobi writes no result file for these outcomes
        for marker, status in _STDOUT_MARKERS:
            if contains(stdout, marker):
                return status
        return None
