"""
Exceptions raised by the pendulum drawing pipeline
"""


class PendulumError(Exception):
    """Base class for every error raised by this project."""


class DimensionMismatch(PendulumError, ValueError):
    """Vector operands have different lengths."""


class InvalidOperand(PendulumError, TypeError):
    """A vector operation received something that is not a vector or a real scalar."""


class InvalidInterpolationInput(PendulumError, ValueError):
    """The cubic fit needs exactly four control points."""


class ConfigurationOutOfRange(PendulumError, ValueError):
    """User supplied parameters that cannot start a run."""
