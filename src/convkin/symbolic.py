"""Thin layer over sympy: symbol factories, evaluation and rendering.

Every symbolic operation in the package goes through sympy. Rate expressions
built from plain floats are floats; rate expressions built from symbols are
sympy expressions and are turned into numbers with :func:`evaluate` or
:func:`vectorize`.
"""

from __future__ import annotations

import math
import numbers
import operator
from functools import reduce
from typing import Any, Callable, Iterable, Mapping, Sequence

import sympy as sp

from convkin.errors import InvalidArgumentError, NumericFaultError

_UNDEFINED = (sp.zoo, sp.nan, sp.oo, -sp.oo)


def time_symbol(name: str = "t") -> sp.Symbol:
    return sp.Symbol(name, real=True)


def species_symbols(names: Iterable[str], time: sp.Symbol | None = None) -> tuple[sp.Expr, ...]:
    """Return concentration symbols, as functions of ``time`` when one is given."""
    if time is None:
        return tuple(sp.Symbol(name, nonnegative=True) for name in names)
    return tuple(sp.Function(name)(time) for name in names)


def parameter_symbols(names: Iterable[str]) -> tuple[sp.Symbol, ...]:
    """Return strictly positive parameter symbols (Km, kcat, enzyme totals)."""
    return tuple(sp.Symbol(name, positive=True) for name in names)


def is_symbolic(value: Any) -> bool:
    return isinstance(value, sp.Basic) and not value.is_number


def require_positive(name: str, value: Any) -> None:
    """Raise :class:`InvalidArgumentError` unless ``value`` is strictly positive.

    Symbolic values pass unless sympy can prove them zero or negative.
    """
    if isinstance(value, sp.Basic):
        if value.is_positive is False or value.is_zero:
            raise InvalidArgumentError(f"{name} must be strictly positive, got {value}")
        if value.is_number and value.is_positive is not True:
            raise InvalidArgumentError(f"{name} must be a positive real number, got {value}")
        return
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"{name} must be a real number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgumentError(f"{name} must be strictly positive, got {value}")


def product(factors: Iterable[Any]) -> Any:
    """Multiply numbers or expressions; the empty product is 1."""
    return reduce(operator.mul, factors, 1)


def is_zero(value: Any) -> bool:
    """True when ``value`` is known to be exactly zero."""
    if isinstance(value, sp.Basic):
        return bool(value.is_zero)
    return value == 0


def evaluate(expr: Any, values: Mapping[Any, Any] | None = None) -> float:
    """Substitute ``values`` into ``expr`` and return the result as a float.

    Raises:
        InvalidArgumentError: if symbols remain unbound after substitution.
        NumericFaultError: if the result is undefined, infinite or complex.
    """
    result = sp.sympify(expr)
    if values:
        result = result.subs(values)
    if result.free_symbols:
        unbound = ", ".join(sorted(str(s) for s in result.free_symbols))
        raise InvalidArgumentError(f"Unbound symbols after substitution: {unbound}")
    if result.has(*_UNDEFINED):
        raise NumericFaultError(f"Expression is undefined at the given point ({result})")
    try:
        number = float(result)
    except TypeError as exc:
        raise NumericFaultError(f"Expression does not evaluate to a real number ({result})") from exc
    if not math.isfinite(number):
        raise NumericFaultError(f"Expression evaluates to {number}")
    return number


def vectorize(
    expr: Any,
    arguments: Sequence[Any],
    values: Mapping[Any, Any] | None = None,
) -> Callable[..., Any]:
    """Compile ``expr`` into a numpy function of ``arguments``.

    ``arguments`` may be plain symbols or time-dependent species such as
    ``A(t)``; every other symbol must be bound through ``values``.
    """
    result = sp.sympify(expr)
    if values:
        result = result.subs(values)
    dummies = [sp.Dummy(f"arg{i}") for i in range(len(arguments))]
    result = result.xreplace(dict(zip(arguments, dummies)))
    leftover = result.free_symbols - set(dummies)
    if leftover:
        unbound = ", ".join(sorted(str(s) for s in leftover))
        raise InvalidArgumentError(f"Unbound symbols after substitution: {unbound}")
    return sp.lambdify(dummies, result, modules="numpy")


def to_latex(expr: Any) -> str:
    """Render ``expr`` as LaTeX markup."""
    return sp.latex(sp.sympify(expr))
