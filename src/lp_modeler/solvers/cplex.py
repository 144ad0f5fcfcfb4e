from __future__ import annotations

from typing import List, Optional

from ..schemas import Status
from .base import PathLike, SolverProgram, contains
from .parsers import CplexSolutionParser


class CplexSolver(SolverProgram):
    """IBM CPLEX interactive optimizer, scripted with ``-c`` commands.

    The ``.sol`` suffix makes CPLEX write its XML solution format.
    """

    name = "cplex"
    default_command = "cplex"
    solution_suffix = ".sol"
    parser = CplexSolutionParser()

    def arguments(self, lp_file: PathLike, solution_file: PathLike) -> List[str]:
        args = ["-c", f'READ "{lp_file}"']
        if self.options.mip_gap is not None:
            args.append(f"set mip tolerances mipgap {self.options.mip_gap:g}")
        if self.options.threads is not None:
            args.append(f"set threads {self.options.threads}")
        if self.options.time_limit is not None:
            args.append(f"set timelimit {self.options.time_limit:g}")
        args.append("optimize")
        args.append(f'WRITE "{solution_file}"')
        return args

    def parse_stdout_status(self, stdout: bytes) -> Optional[Status]:
        if contains(stdout, "No solution exists"):
            return Status.INFEASIBLE
        return None
