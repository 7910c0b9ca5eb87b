"""Convenience kinetics rate laws and modulation factors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence

from convkin.errors import InvalidArgumentError, NumericFaultError
from convkin.models import Reaction, SideTerm, build_side, validate_side
from convkin.symbolic import is_zero, product, require_positive

DENOMINATOR_FORMS = ("product", "sum")


class KineticsModel(Protocol):
    """Anything that turns a name -> concentration mapping into a reaction rate."""

    def rate(self, concentrations: Mapping[str, float]) -> float:
        ...


def saturation_polynomial(x: Any, stoichiometry: int) -> Any:
    """Return ``1 + x + x**2 + ... + x**stoichiometry``."""
    return 1 + _binding_terms(x, stoichiometry)


def _binding_terms(x: Any, stoichiometry: int) -> Any:
    return sum(x**k for k in range(1, stoichiometry + 1))


def _saturation_excess(terms: Sequence[SideTerm]) -> Any:
    """``prod(saturation_polynomial) - 1``, accumulated without a final subtraction.

    Each species folds in as (1 + a)(1 + s) - 1 = a + s + a*s, which stays
    accurate when every normalized concentration is tiny.
    """
    total = 0
    for t in terms:
        s = _binding_terms(t.normalized, t.stoichiometry)
        total = total + s + total * s
    return total


def convenience_rate(
    left: Sequence[SideTerm],
    right: Sequence[SideTerm],
    kcat_plus: Any,
    kcat_minus: Any,
    enzyme_total: Any,
    denominator: str = "product",
) -> Any:
    """Build the convenience kinetics rate law for ``left ⇌ right``.

    v = E_tot * (k+ * prod(x_i**a_i) - k- * prod(x_j**b_j)) / D

    with x = concentration / Km and, for the default ``"product"`` form,

    D = prod_left(1 + x + ... + x**a) * prod_right(1 + x + ... + x**b) - 1

    The ``"sum"`` form uses ``prod_left(...) + prod_right(...) - 1`` instead
    (Liebermeister & Klipp 2006), which reduces to reversible Michaelis-Menten
    kinetics for ``A ⇌ B``.

    Values may be floats or sympy expressions; the result has the same kind.
    Units: concentrations and Km in mmol/L, kcat in 1/s, rate in mmol/L/s.

    Raises:
        InvalidArgumentError: on an empty or all-zero side, a non-positive
            kcat or enzyme total, or an unknown denominator form.
        NumericFaultError: if the denominator is exactly zero.
    """
    left = tuple(left)
    right = tuple(right)
    validate_side("left", left)
    validate_side("right", right)
    require_positive("kcat_plus", kcat_plus)
    require_positive("kcat_minus", kcat_minus)
    require_positive("enzyme_total", enzyme_total)
    if denominator not in DENOMINATOR_FORMS:
        raise InvalidArgumentError(
            f"Unknown denominator form {denominator!r}; expected one of {DENOMINATOR_FORMS}"
        )

    numerator = kcat_plus * product(t.normalized**t.stoichiometry for t in left) - kcat_minus * product(
        t.normalized**t.stoichiometry for t in right
    )

    if denominator == "product":
        total = _saturation_excess(left + right)
    else:
        total = 1 + _saturation_excess(left) + _saturation_excess(right)

    if is_zero(total):
        raise NumericFaultError("Rate law denominator is zero; all binding terms vanish")

    return enzyme_total * numerator / total


def build_rate(
    left_species: Sequence[Any],
    right_species: Sequence[Any],
    left_stoichiometry: Sequence[int],
    right_stoichiometry: Sequence[int],
    left_km: Sequence[Any],
    right_km: Sequence[Any],
    kcat_plus: Any,
    kcat_minus: Any,
    enzyme_total: Any,
    denominator: str = "product",
) -> Any:
    """Same as :func:`convenience_rate`, taking parallel sequences per side."""
    left = build_side(left_species, left_stoichiometry, left_km)
    right = build_side(right_species, right_stoichiometry, right_km)
    return convenience_rate(left, right, kcat_plus, kcat_minus, enzyme_total, denominator)


def activation_factor(effector: Any, activation_constant: Any) -> Any:
    """``1 + d / Ka``; equals 1 without effector and grows linearly."""
    require_positive("activation constant", activation_constant)
    return 1 + effector / activation_constant


def inhibition_factor(effector: Any, inhibition_constant: Any) -> Any:
    """``Ki / (Ki + d)``; equals 1 without effector and decays towards 0."""
    require_positive("inhibition constant", inhibition_constant)
    return inhibition_constant / (inhibition_constant + effector)


@dataclass(frozen=True)
class ConvenienceKinetics:
    """Convenience kinetics of one :class:`Reaction` with fixed parameters.

    Activators and inhibitors map an effector species name to its activation
    or inhibition constant; their factors multiply the base rate.
    """

    reaction: Reaction
    kcat_plus: Any
    kcat_minus: Any
    enzyme_total: Any
    activators: Mapping[str, Any] = field(default_factory=dict)
    inhibitors: Mapping[str, Any] = field(default_factory=dict)
    denominator: str = "product"

    def expression(self, values: Mapping[str, Any], km_values: Mapping[str, Any] | None = None) -> Any:
        """Rate for concentrations (numbers or symbols) keyed by species name."""
        missing = [name for name in (*self.activators, *self.inhibitors) if name not in values]
        if missing:
            raise InvalidArgumentError(f"Missing effector concentrations for {', '.join(missing)}")
        left, right = self.reaction.terms(values, km_values)
        rate = convenience_rate(
            left,
            right,
            self.kcat_plus,
            self.kcat_minus,
            self.enzyme_total,
            denominator=self.denominator,
        )
        for name, constant in self.activators.items():
            rate = rate * activation_factor(values[name], constant)
        for name, constant in self.inhibitors.items():
            rate = rate * inhibition_factor(values[name], constant)
        return rate

    def rate(self, concentrations: Mapping[str, float]) -> float:
        """Numeric rate (mmol/L/s); Keq and temperature are already folded into kcat_minus."""
        return float(self.expression(concentrations))
