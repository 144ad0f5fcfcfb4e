from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from ..errors import SolverError
from ..schemas import Solution

_LOGGER = logging.getLogger(__name__)


def run_solver(solver, problem, timeout: Optional[float] = None) -> Solution:
    """Write ``problem`` to a scratch directory, run ``solver`` on it, read the result."""
    with tempfile.TemporaryDirectory(prefix="lp_modeler_") as workdir:
        lp_file = Path(workdir) / "problem.lp"
        solution_file = Path(workdir) / f"solution{solver.solution_suffix or '.sol'}"
        problem.write_lp(lp_file)

        command, args = solver.invocation(lp_file, solution_file)
        _LOGGER.debug("Running %s %s", command, " ".join(args))
        try:
            completed = subprocess.run(
                [command, *args],
                capture_output=True,
                timeout=timeout,
                cwd=workdir,
            )
        except FileNotFoundError as exc:
            raise SolverError(f"Solver executable '{command}' was not found.") from exc
        except subprocess.TimeoutExpired as exc:
            raise SolverError(f"{command} did not finish within {timeout} seconds.") from exc

        status = solver.parse_stdout_status(completed.stdout)
        if status is None and completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace").strip()
            raise SolverError(f"{command} exited with code {completed.returncode}: {stderr}")
        return solver.interpret(completed.stdout, solution_file, problem)
