"""
Calculation errors.

Raised synchronously by the calculation engine and mapped to HTTP responses
by the API layer.
"""


class CalculationError(Exception):
    """Base class for errors raised by the calculation engine."""


class InvalidArgument(CalculationError, ValueError):
    """Loan parameters outside their valid domain."""


class NumericInstability(CalculationError, ArithmeticError):
    """A computation produced a non-finite value."""


class InvalidStatusTransition(InvalidArgument):
    """A credit cannot move from its current status to the requested one."""
