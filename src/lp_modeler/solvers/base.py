from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from copy import copy
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..errors import SolutionParseError
from ..schemas import Solution, SolverOptions, Status
from .parsers import SolutionParser

_LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SolverProgram(ABC):
    """An external solver binary: how to call it and how to read its answer.

    Adapters never start processes themselves. They build the argument
    vector for a given LP file and solution path, and they interpret the
    captured stdout and the solution artifact afterwards.
    """

    name: str = ""
    default_command: str = ""
    solution_suffix: Optional[str] = None
    parser: SolutionParser

    def __init__(self, command: Optional[str] = None, options: Optional[SolverOptions] = None) -> None:
        self.command = command or self.default_command
        self.options = options or SolverOptions()

    def __repr__(self):
        return f"{type(self).__name__}(command={self.command!r}, options={self.options!r})"

    def with_command(self, command: str):
        """Copy of this solver that runs ``command`` instead of the default binary."""
        clone = copy(self)
        clone.command = command
        return clone

    def with_options(self, **options):
        """Copy of this solver with updated options; values are validated here."""
        clone = copy(self)
        clone.options = SolverOptions.model_validate({**self.options.model_dump(), **options})
        return clone

    def with_mip_gap(self, mip_gap: float):
        return self.with_options(mip_gap=mip_gap)

    @property
    def mip_gap(self) -> Optional[float]:
        return self.options.mip_gap

    @abstractmethod
    def arguments(self, lp_file: PathLike, solution_file: PathLike) -> List[str]:
        ...

    def invocation(self, lp_file: PathLike, solution_file: PathLike) -> Tuple[str, List[str]]:
        return self.command, self.arguments(lp_file, solution_file)

    def parse_stdout_status(self, stdout: bytes) -> Optional[Status]:
        """Status announced on stdout before any artifact is written, if any."""
        return None

    def read_solution(self, solution_file: PathLike, problem=None) -> Solution:
        try:
            with open(solution_file, "rb") as stream:
                return self.parser.parse(stream, problem)
        except OSError as exc:
            raise SolutionParseError(f"Unable to read solution file {solution_file}: {exc}") from exc

    def interpret(self, stdout: bytes, solution_file: PathLike, problem=None) -> Solution:
        status = self.parse_stdout_status(stdout)
        if status is not None:
            _LOGGER.debug("%s reported %s on stdout", self.name, status.value)
            return Solution(status=status)
        return self.read_solution(solution_file, problem)

    def run(self, problem, timeout: Optional[float] = None) -> Solution:
        from .runner import run_solver

        return run_solver(self, problem, timeout=timeout)


def contains(stdout: bytes, marker: str) -> bool:
    return marker.encode() in stdout
