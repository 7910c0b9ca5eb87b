"""Haldane relationship between kinetic constants and Keq.

    Keq = (kcat+ / kcat-) * prod(Km_right**b) / prod(Km_left**a)

Sides are sequences of records carrying ``stoichiometry`` and ``km``
(:class:`~convkin.models.SideTerm` or :class:`~convkin.models.Participant`).
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from convkin.errors import InvalidArgumentError, NumericFaultError
from convkin.models import Reaction
from convkin.symbolic import product, require_positive


def _km_product(side: Sequence[Any]) -> Any:
    return product(term.km**term.stoichiometry for term in side)


def haldane_kcat_minus(
    kcat_plus: Any,
    equilibrium_constant: Any,
    left: Sequence[Any],
    right: Sequence[Any],
) -> Any:
    """Solve the Haldane relationship for the reverse catalytic constant."""
    require_positive("kcat_plus", kcat_plus)
    require_positive("equilibrium constant", equilibrium_constant)
    return kcat_plus * _km_product(right) / (equilibrium_constant * _km_product(left))


def haldane_equilibrium_constant(
    kcat_plus: Any,
    kcat_minus: Any,
    left: Sequence[Any],
    right: Sequence[Any],
) -> Any:
    """Keq implied by a set of kinetic constants."""
    require_positive("kcat_plus", kcat_plus)
    require_positive("kcat_minus", kcat_minus)
    return (kcat_plus / kcat_minus) * _km_product(right) / _km_product(left)


def reaction_quotient(
    concentrations: Mapping[str, float],
    reaction: Reaction,
    exclude: Sequence[str] = (),
) -> float:
    """Q = prod(products**b) / prod(substrates**a), skipping ``exclude``.

    Buffered species such as H+ are usually excluded since ΔG°′ already
    accounts for them.
    """
    missing = [name for name in reaction.species_names if name not in exclude and name not in concentrations]
    if missing:
        raise InvalidArgumentError(f"Missing concentrations for {', '.join(missing)}")
    numerator = product(
        concentrations[p.name] ** p.stoichiometry for p in reaction.right if p.name not in exclude
    )
    denominator = product(
        concentrations[p.name] ** p.stoichiometry for p in reaction.left if p.name not in exclude
    )
    if denominator == 0:
        raise NumericFaultError("Reaction quotient is undefined with a zero substrate concentration")
    return float(numerator / denominator)
