from __future__ import annotations

from typing import List

from .base import PathLike, SolverProgram
from .parsers import CbcSolutionParser


class CbcSolver(SolverProgram):
    """COIN-OR CBC, driven through its command-line interpreter."""

    name = "cbc"
    default_command = "cbc"
    parser = CbcSolutionParser()

    def arguments(self, lp_file: PathLike, solution_file: PathLike) -> List[str]:
        args = [str(lp_file)]
        if self.options.mip_gap is not None:
            args += ["ratioGap", f"{self.options.mip_gap:g}"]
        if self.options.threads is not None:
            args += ["threads", str(self.options.threads)]
        if self.options.time_limit is not None:
            args += ["seconds", f"{self.options.time_limit:g}"]
        args += ["solve", "solution", str(solution_file)]
        return args
