"""Thermodynamically consistent convenience kinetics.

The reverse catalytic constant is never chosen freely: it follows from the
forward constant, the Km values and the equilibrium constant through the
Haldane relationship, so the rate vanishes exactly at equilibrium.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from convkin.constants import R_KJ, STANDARD_TEMPERATURE
from convkin.errors import InvalidArgumentError
from convkin.kinetics import ConvenienceKinetics, convenience_rate
from convkin.models import Reaction, SideTerm, validate_side
from convkin.symbolic import require_positive
from convkin.thermo import EquilibriumModel, FixedEquilibrium, GibbsEquilibrium, haldane_kcat_minus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThermodynamicParameters:
    """Values derived while enforcing the Haldane relationship.

    Attributes:
        temperature: Absolute temperature (K).
        standard_gibbs_energy: ΔG°′ as supplied (kJ/mol), or None.
        gas_constant: Gas constant used for the derivation.
        equilibrium_constant: Keq actually used.
        kcat_minus: Derived reverse catalytic constant (1/s).
        equilibrium_override: True when Keq was supplied directly.
    """

    temperature: float
    standard_gibbs_energy: float | None
    gas_constant: float
    equilibrium_constant: float
    kcat_minus: Any
    equilibrium_override: bool

    def as_dict(self) -> dict[str, Any]:
        return {
            "temperature": self.temperature,
            "standard_gibbs_energy": self.standard_gibbs_energy,
            "gas_constant": self.gas_constant,
            "equilibrium_constant": self.equilibrium_constant,
            "kcat_minus": self.kcat_minus if isinstance(self.kcat_minus, float) else str(self.kcat_minus),
            "equilibrium_override": self.equilibrium_override,
        }


def equilibrium_model(
    standard_gibbs_energy: float | None = None,
    equilibrium_constant: float | None = None,
    gas_constant: float = R_KJ,
) -> EquilibriumModel:
    """Pick the equilibrium source; an explicit Keq wins over ΔG°′."""
    if equilibrium_constant is not None:
        return FixedEquilibrium(equilibrium_constant)
    if standard_gibbs_energy is None:
        raise InvalidArgumentError("Either a standard Gibbs energy or an equilibrium constant is required")
    require_positive("gas constant", gas_constant)
    return GibbsEquilibrium(standard_gibbs_energy, gas_constant)


def derive_parameters(
    left: Sequence[Any],
    right: Sequence[Any],
    kcat_plus: Any,
    *,
    temperature: float = STANDARD_TEMPERATURE,
    standard_gibbs_energy: float | None = None,
    equilibrium_constant: float | None = None,
    gas_constant: float = R_KJ,
) -> ThermodynamicParameters:
    """Compute Keq and the Haldane-consistent kcat_minus for one reaction."""
    validate_side("left", left)
    validate_side("right", right)
    require_positive("kcat_plus", kcat_plus)
    require_positive("temperature", temperature)
    model = equilibrium_model(standard_gibbs_energy, equilibrium_constant, gas_constant)

    keq = model.equilibrium_constant(temperature)
    kcat_minus = haldane_kcat_minus(kcat_plus, keq, left, right)
    if isinstance(kcat_minus, (int, float)):
        kcat_minus = float(kcat_minus)
        require_positive("derived kcat_minus", kcat_minus)
    logger.debug(
        "Haldane: Keq=%g (%s), kcat_minus=%s at T=%g K",
        keq,
        "override" if model.is_override else f"dG0={standard_gibbs_energy} kJ/mol",
        kcat_minus,
        temperature,
    )
    return ThermodynamicParameters(
        temperature=float(temperature),
        standard_gibbs_energy=standard_gibbs_energy,
        gas_constant=gas_constant,
        equilibrium_constant=keq,
        kcat_minus=kcat_minus,
        equilibrium_override=model.is_override,
    )


def build_consistent_rate(
    left: Sequence[SideTerm],
    right: Sequence[SideTerm],
    kcat_plus: Any,
    enzyme_total: Any,
    *,
    temperature: float = STANDARD_TEMPERATURE,
    standard_gibbs_energy: float | None = None,
    equilibrium_constant: float | None = None,
    gas_constant: float = R_KJ,
    denominator: str = "product",
) -> tuple[Any, ThermodynamicParameters]:
    """Build a convenience rate law whose kcat_minus obeys the Haldane relationship.

    Keq is ``equilibrium_constant`` when given (ΔG°′ is then ignored),
    otherwise ``exp(-ΔG°′ / (R * T))``.

    Returns:
        The rate expression and the derived :class:`ThermodynamicParameters`.

    Raises:
        InvalidArgumentError: for non-positive temperature, Keq, Km or
            kcat_plus, or when neither ΔG°′ nor Keq is given.
        NumericFaultError: when Keq overflows or underflows.
    """
    left = tuple(left)
    right = tuple(right)
    require_positive("enzyme_total", enzyme_total)
    parameters = derive_parameters(
        left,
        right,
        kcat_plus,
        temperature=temperature,
        standard_gibbs_energy=standard_gibbs_energy,
        equilibrium_constant=equilibrium_constant,
        gas_constant=gas_constant,
    )
    rate = convenience_rate(
        left,
        right,
        kcat_plus,
        parameters.kcat_minus,
        enzyme_total,
        denominator=denominator,
    )
    return rate, parameters


def consistent_kinetics(
    reaction: Reaction,
    kcat_plus: float,
    enzyme_total: float,
    *,
    temperature: float = STANDARD_TEMPERATURE,
    standard_gibbs_energy: float | None = None,
    equilibrium_constant: float | None = None,
    gas_constant: float = R_KJ,
    activators: Mapping[str, float] | None = None,
    inhibitors: Mapping[str, float] | None = None,
    denominator: str = "product",
) -> tuple[ConvenienceKinetics, ThermodynamicParameters]:
    """Same derivation as :func:`build_consistent_rate` for a named reaction."""
    require_positive("enzyme_total", enzyme_total)
    parameters = derive_parameters(
        reaction.left,
        reaction.right,
        kcat_plus,
        temperature=temperature,
        standard_gibbs_energy=standard_gibbs_energy,
        equilibrium_constant=equilibrium_constant,
        gas_constant=gas_constant,
    )
    kinetics = ConvenienceKinetics(
        reaction=reaction,
        kcat_plus=kcat_plus,
        kcat_minus=parameters.kcat_minus,
        enzyme_total=enzyme_total,
        activators=dict(activators or {}),
        inhibitors=dict(inhibitors or {}),
        denominator=denominator,
    )
    return kinetics, parameters
