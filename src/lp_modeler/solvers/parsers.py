"""Decoders for the solution artifacts written by each backend.

Every parser turns a text stream into a ``Solution``. The optional
``problem`` is only a hint: line-oriented parsers use it to report
variables the solver left out as 0.0, and no parser needs it to be
present or accurate.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import IO, Dict, Iterator, List, Optional, Protocol

from ..errors import SolutionParseError
from ..schemas import Solution, Status

_LOGGER = logging.getLogger(__name__)


class SolutionParser(Protocol):
    def parse(self, stream: IO, problem=None) -> Solution:
        ...


def _defaults(problem) -> Dict[str, float]:
    if problem is None:
        return {}
    return {name: 0.0 for name in problem.variables()}


def _to_float(text: str, variable: str) -> float:
    try:
        return float(text)
    except ValueError as exc:
        raise SolutionParseError(f"invalid variable value for '{variable}': {text!r}") from exc


def _is_float(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True


def _lines(stream: IO) -> Iterator[str]:
    for raw in stream:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        yield raw.rstrip("\r\n")


def _status_from_phrase(phrase: str) -> Status:
    """Map a free-form status banner to a ``Status``.

    Solvers word the same outcome differently across versions
    ("Infeasible", "Integer infeasible", "Problem proven infeasible", ...),
    so this matches on keywords rather than exact text.
    """
    text = phrase.lower()
    infeasible = "infeasible" in text or "empty" in text
    unbounded = "unbounded" in text
    if infeasible and unbounded:
        return Status.UNKNOWN
    if infeasible:
        return Status.INFEASIBLE
    if unbounded:
        return Status.UNBOUNDED
    if "optimal" in text and "non-optimal" not in text and "not optimal" not in text:
        return Status.OPTIMAL
    return Status.UNKNOWN


class CbcSolutionParser:
    """CBC ``solution`` file: a status banner then ``index name value reduced_cost`` rows."""

    def parse(self, stream: IO, problem=None) -> Solution:
        results = _defaults(problem)
        lines = _lines(stream)
        banner = next(lines, "").strip()
        if not banner:
            raise SolutionParseError("Incorrect solution format: missing status line")
        status = _status_from_phrase(banner.split(" - ")[0])

        for lineno, line in enumerate(lines, start=2):
            parts = line.split()
            if not parts:
                continue
            # rows violating their bounds are flagged with a leading "**"
            if parts[0] == "**":
                parts = parts[1:]
            if len(parts) not in (3, 4):
                raise SolutionParseError(f"Incorrect solution format at line {lineno}: {line!r}")
            results[parts[1]] = _to_float(parts[2], parts[1])

        _LOGGER.debug("Parsed CBC solution: %s, %d values", status.value, len(results))
        return Solution(status=status, results=results)


def _starts_row(parts: List[str]) -> bool:
    return len(parts) >= 2 and parts[0].isdigit() and not _is_float(parts[1])


def _glpk_column_rows(lines: Iterator[str]) -> Iterator[List[str]]:
    """Yield the fields of each column row up to the first blank line.

    A long name pushes the remaining fields onto the next line, so a
    two-field row absorbs the following line unless that line starts a
    new row of its own.
    """
    pending: Optional[List[str]] = None
    for line in lines:
        parts = line.split()
        if pending is not None:
            if parts and not _starts_row(parts):
                yield pending + parts
                pending = None
                continue
            yield pending
            pending = None
        if not parts:
            return
        if len(parts) == 2:
            pending = parts
        else:
            yield parts
    if pending is not None:
        yield pending


class GlpkSolutionParser:
    """GLPK printable report as written by ``glpsol -o``."""

    def parse(self, stream: IO, problem=None) -> Solution:
        results = _defaults(problem)
        lines = _lines(stream)

        status: Optional[Status] = None
        for line in lines:
            if line.startswith("Status:"):
                status = _status_from_phrase(line[len("Status:"):].strip())
                break
        if status is None:
            raise SolutionParseError("Incorrect solution format: no solution status found")

        for line in lines:
            if "Column name" in line:
                break
        else:
            _LOGGER.debug("GLPK report has no column section")
            return Solution(status=status, results=results)

        next(lines, None)  # dashed underline
        for parts in _glpk_column_rows(lines):
            if len(parts) < 2:
                raise SolutionParseError(f"Incorrect column row in GLPK report: {' '.join(parts)!r}")
            name = parts[1]
            fields: List[str] = parts[2:]
            # skip the basis status (B, NL, NU, NF, NS) or integer marker (*)
            if fields and not _is_float(fields[0]):
                fields = fields[1:]
            results[name] = _to_float(fields[0], name) if fields else 0.0

        _LOGGER.debug("Parsed GLPK solution: %s, %d values", status.value, len(results))
        return Solution(status=status, results=results)


class GurobiSolutionParser:
    """Gurobi ``.sol`` file: ``#`` comments then ``name value`` pairs."""

    def parse(self, stream: IO, problem=None) -> Solution:
        results = _defaults(problem)
        for lineno, line in enumerate(_lines(stream), start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            parts = stripped.split()
            if len(parts) != 2:
                raise SolutionParseError(f"Incorrect solution format at line {lineno}: {line!r}")
            results[parts[0]] = _to_float(parts[1], parts[0])
        return Solution(status=Status.OPTIMAL, results=results)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class CplexSolutionParser:
    """CPLEX XML solution, read incrementally with ``iterparse``."""

    def parse(self, stream: IO, problem=None) -> Solution:
        if problem is not None:
            _LOGGER.debug("Expecting %d variables", len(problem.variables()))
        status = Status.OPTIMAL
        results: Dict[str, float] = {}
        try:
            for event, elem in ET.iterparse(stream, events=("start", "end")):
                if event == "end":
                    elem.clear()
                    continue
                tag = _local_name(elem.tag)
                if tag == "header":
                    phrase = elem.get("solutionStatusString")
                    if phrase:
                        status = _status_from_phrase(phrase)
                elif tag == "variable":
                    name = elem.get("name")
                    value = elem.get("value")
                    if name is None or value is None:
                        continue
                    results[name] = _to_float(value, name)
        except ET.ParseError as exc:
            raise SolutionParseError(f"xml error: {exc}") from exc
        _LOGGER.debug("Parsed CPLEX solution: %s, %d values", status.value, len(results))
        return Solution(status=status, results=results)
