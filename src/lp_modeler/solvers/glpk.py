from __future__ import annotations

from typing import List

from .base import PathLike, SolverProgram
from .parsers import GlpkSolutionParser


class GlpkSolver(SolverProgram):
    """GNU GLPK's ``glpsol``; the solution is its printable report (``-o``)."""

    name = "glpk"
    default_command = "glpsol"
    parser = GlpkSolutionParser()

    def arguments(self, lp_file: PathLike, solution_file: PathLike) -> List[str]:
        args = ["--lp", str(lp_file)]
        if self.options.mip_gap is not None:
            args += ["--mipgap", f"{self.options.mip_gap:g}"]
        if self.options.time_limit is not None:
            # glpsol only takes whole seconds
            args += ["--tmlim", str(int(self.options.time_limit))]
        args += ["-o", str(solution_file)]
        return args
