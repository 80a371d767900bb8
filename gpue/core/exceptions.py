"""Exception hierarchy for the GPUE core.

Every error raised by operator construction, expression evaluation, file
loading or renormalization derives from :class:`GPUEError`, so a driver can
stop the evolution loop on any of them with a single ``except`` clause.

Import Policy:
    from gpue.core.exceptions import ConfigurationError, NormalizationError

DO NOT use: from gpue.core.exceptions import *
"""


class GPUEError(Exception):
    """Base class for all GPUE errors."""

    pass


# =============================================================================
# Configuration errors (report and halt)
# =============================================================================


class ConfigurationError(GPUEError):
    """Raised when configuration validation or resolution fails."""

    pass


class UnknownParameterError(ConfigurationError, KeyError):
    """Raised when a parameter is requested that the store does not hold."""

    def __init__(self, name: str, kind: str, available: list[str] | None = None):
        self.name = name
        self.kind = kind
        self.available = list(available or [])
        message = f"Unknown {kind} parameter '{name}'"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class ParameterStoreFrozenError(ConfigurationError):
    """Raised when writing to a parameter store after it has been frozen."""

    pass


class UnknownOperatorError(ConfigurationError):
    """Raised when an operator selector string is not in the slot vocabulary."""

    def __init__(self, slot: str, name: str, vocabulary: list[str]):
        self.slot = slot
        self.name = name
        self.vocabulary = list(vocabulary)
        super().__init__(
            f"Unknown {slot} operator '{name}'. "
            f"Choose one of: {', '.join(self.vocabulary)}"
        )


class UnresolvedVariableError(ConfigurationError):
    """Raised when an expression names a variable the store cannot resolve."""

    def __init__(self, name: str, reason: str = "not found in parameter store"):
        self.name = name
        super().__init__(f"Could not resolve variable '{name}': {reason}")


# =============================================================================
# Expression errors
# =============================================================================


class ExpressionError(GPUEError):
    """Base class for expression parsing and evaluation errors."""

    pass


class ExpressionSyntaxError(ExpressionError):
    """Raised on malformed expression text.

    Attributes:
        text: The full expression text
        position: Character offset of the offending token
    """

    def __init__(self, message: str, text: str, position: int):
        self.text = text
        self.position = position
        pointer = " " * position + "^"
        super().__init__(f"{message} at position {position}:\n  {text}\n  {pointer}")


class ExpressionDomainError(ExpressionError):
    """Raised when an expression evaluates outside a function's domain."""

    pass


# =============================================================================
# Numerical errors
# =============================================================================


class NumericalError(GPUEError):
    """Raised when a computation would produce NaN or infinite values."""

    pass


class NormalizationError(NumericalError):
    """Raised when a field cannot be renormalized (zero or non-finite norm)."""

    pass


# =============================================================================
# I/O errors
# =============================================================================


class OperatorFileError(GPUEError, OSError):
    """Raised when an operator or wavefunction file is missing or malformed."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Operator file '{self.path}': {reason}")

    def __str__(self) -> str:
        return f"Operator file '{self.path}': {self.reason}"


__all__ = [
    "GPUEError",
    "ConfigurationError",
    "UnknownParameterError",
    "ParameterStoreFrozenError",
    "UnknownOperatorError",
    "UnresolvedVariableError",
    "ExpressionError",
    "ExpressionSyntaxError",
    "ExpressionDomainError",
    "NumericalError",
    "NormalizationError",
    "OperatorFileError",
]
