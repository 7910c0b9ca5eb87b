"""Equilibrium constants from standard Gibbs free energies."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

import numpy as np

from convkin.constants import R_KJ
from convkin.errors import InvalidArgumentError, NumericFaultError
from convkin.symbolic import require_positive
from convkin.thermo.base import EquilibriumModel


def _require_finite(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
        raise InvalidArgumentError(f"{name} must be a finite real number, got {value!r}")
    return float(value)


def equilibrium_constant(
    standard_gibbs_energy: float,
    temperature: float,
    gas_constant: float = R_KJ,
) -> float:
    """Keq = exp(-dG0 / (R * T)).

    ``standard_gibbs_energy`` and ``gas_constant`` must share an energy unit
    (kJ/mol and kJ/(mol·K) by default).

    Raises:
        InvalidArgumentError: for a non-positive temperature or gas constant.
        NumericFaultError: if Keq overflows or underflows a double.
    """
    dg0 = _require_finite("standard Gibbs energy", standard_gibbs_energy)
    require_positive("temperature", temperature)
    require_positive("gas constant", gas_constant)

    exponent = -dg0 / (gas_constant * temperature)
    with np.errstate(over="raise", under="raise"):
        try:
            keq = float(np.exp(exponent))
        except FloatingPointError as exc:
            raise NumericFaultError(
                f"Keq out of range for dG0={dg0} at T={temperature} (exponent {exponent:.3g})"
            ) from exc
    if not math.isfinite(keq) or keq <= 0.0:
        raise NumericFaultError(f"Keq out of range for dG0={dg0} at T={temperature}")
    return keq


def standard_gibbs_energy(keq: float, temperature: float, gas_constant: float = R_KJ) -> float:
    """dG0 = -R * T * ln(Keq)."""
    require_positive("equilibrium constant", keq)
    require_positive("temperature", temperature)
    return -gas_constant * temperature * math.log(keq)


def reaction_gibbs_energy(
    standard_gibbs_energy: float,
    reaction_quotient: float,
    temperature: float,
    gas_constant: float = R_KJ,
) -> float:
    """dG_r = dG0 + R * T * ln(Q)."""
    require_positive("reaction quotient", reaction_quotient)
    require_positive("temperature", temperature)
    return standard_gibbs_energy + gas_constant * temperature * math.log(reaction_quotient)


def flux_ratio(reaction_gibbs_energy, temperature: float, gas_constant: float = R_KJ):
    """Forward/reverse flux ratio J+/J- = exp(-dG_r / (R * T)).

    Accepts scalars or numpy arrays of dG_r.
    """
    require_positive("temperature", temperature)
    return np.exp(-np.asarray(reaction_gibbs_energy, dtype=float) / (gas_constant * temperature))


@dataclass(frozen=True)
class GibbsEquilibrium(EquilibriumModel):
    """Keq derived from a standard Gibbs free energy change (kJ/mol)."""

    standard_gibbs_energy: float
    gas_constant: float = R_KJ

    def equilibrium_constant(self, temperature: float) -> float:
        return equilibrium_constant(self.standard_gibbs_energy, temperature, self.gas_constant)


@dataclass(frozen=True)
class FixedEquilibrium(EquilibriumModel):
    """An explicitly supplied Keq, independent of temperature."""

    value: float

    def __post_init__(self) -> None:
        require_positive("equilibrium constant", self.value)

    def equilibrium_constant(self, temperature: float) -> float:
        require_positive("temperature", temperature)
        return self.value

    @property
    def is_override(self) -> bool:
        return True
