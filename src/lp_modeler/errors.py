class NonLinearExpressionError(TypeError):
    """Raised when two variable-bearing expressions are multiplied."""


class SolutionParseError(ValueError):
    """Raised when a solver artifact cannot be decoded."""


class SolverError(RuntimeError):
    """Raised when the external solver process cannot produce a result."""
