"""Exception types raised by ConvKin."""

from __future__ import annotations


class ConvKinError(Exception):
    """Base class for all ConvKin errors."""


class InvalidArgumentError(ConvKinError, ValueError):
    """Raised when inputs violate a precondition (lengths, signs, stoichiometry)."""


class NumericFaultError(ConvKinError, ArithmeticError):
    """Raised when a computation leaves the representable or defined range."""
