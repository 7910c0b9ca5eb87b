"""Steady-state algebra for the elementary two-substrate mechanism.

    S + T + E  <=>  EST  <=>  E + P + Q
       (k1f, k1r)       (k2f, k2r)

The quasi-steady state of EST is solved by hand: from d[EST]/dt = 0 and
E = Etot - EST,

    EST = (k1f*S*T + k2r*P*Q) * Etot / (k1r + k2f + k1f*S*T + k2r*P*Q)

and the net rate is v = k2f*EST - k2r*P*Q*(Etot - EST).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

import numpy as np
import sympy as sp

from convkin.constants import R_KJ, STANDARD_TEMPERATURE
from convkin.errors import InvalidArgumentError
from convkin.thermo import flux_ratio


@dataclass(frozen=True)
class TwoSubstrateMechanism:
    """Symbolic description of ``S + T + E <=> EST <=> E + P + Q``."""

    k1f: sp.Symbol = field(default_factory=lambda: sp.Symbol("k1f", positive=True))
    k1r: sp.Symbol = field(default_factory=lambda: sp.Symbol("k1r", positive=True))
    k2f: sp.Symbol = field(default_factory=lambda: sp.Symbol("k2f", positive=True))
    k2r: sp.Symbol = field(default_factory=lambda: sp.Symbol("k2r", positive=True))
    S: sp.Symbol = field(default_factory=lambda: sp.Symbol("S", positive=True))
    T: sp.Symbol = field(default_factory=lambda: sp.Symbol("T", positive=True))
    P: sp.Symbol = field(default_factory=lambda: sp.Symbol("P", positive=True))
    Q: sp.Symbol = field(default_factory=lambda: sp.Symbol("Q", positive=True))
    E_tot: sp.Symbol = field(default_factory=lambda: sp.Symbol("E_tot", positive=True))

    @property
    def rate_constants(self) -> tuple[sp.Symbol, ...]:
        return (self.k1f, self.k1r, self.k2f, self.k2r)

    def steady_state_complex(self) -> sp.Expr:
        """Quasi-steady-state concentration of EST."""
        binding = self.k1f * self.S * self.T + self.k2r * self.P * self.Q
        return binding * self.E_tot / (self.k1r + self.k2f + binding)

    def free_enzyme(self) -> sp.Expr:
        return self.E_tot - self.steady_state_complex()

    def forward_flux(self) -> sp.Expr:
        """J+ = k2f * EST"""
        return self.k2f * self.steady_state_complex()

    def reverse_flux(self) -> sp.Expr:
        """J- = k2r * P * Q * E"""
        return self.k2r * self.P * self.Q * self.free_enzyme()

    def net_rate(self) -> sp.Expr:
        return self.forward_flux() - self.reverse_flux()

    def flux_ratio(self) -> sp.Expr:
        return self.forward_flux() / self.reverse_flux()

    def michaelis_constants(self) -> dict[str, sp.Expr]:
        """Binding constants assuming equal affinities within each step."""
        k_binding = self.k1r / self.k1f
        k_release = self.k2f / self.k2r
        return {"S": k_binding, "T": k_binding, "P": k_release, "Q": k_release}

    def limiting_velocities(self) -> dict[str, sp.Expr]:
        return {"forward": self.k2f * self.E_tot, "reverse": self.k1r * self.E_tot}

    def equilibrium_constant(self) -> sp.Expr:
        """Keq = k1f*k2f / (k1r*k2r)"""
        return self.k1f * self.k2f / (self.k1r * self.k2r)

    def reaction_quotient(self) -> sp.Expr:
        return self.P * self.Q / (self.S * self.T)

    def standard_gibbs_energy(self, temperature: float = STANDARD_TEMPERATURE, gas_constant: float = R_KJ) -> sp.Expr:
        """ΔG° = -R*T*ln(Keq)"""
        return -gas_constant * temperature * sp.log(self.equilibrium_constant())

    def reaction_gibbs_energy(self, temperature: float = STANDARD_TEMPERATURE, gas_constant: float = R_KJ) -> sp.Expr:
        """ΔG_r = ΔG° + R*T*ln(Q)"""
        return self.standard_gibbs_energy(temperature, gas_constant) + gas_constant * temperature * sp.log(
            self.reaction_quotient()
        )

    def substitutions(
        self,
        rate_constants: Mapping[str, float],
        concentrations: Mapping[str, float],
    ) -> dict[sp.Symbol, float]:
        """Map ``{"k1f": ...}`` and ``{"S": ..., "E_tot": ...}`` onto the symbols."""
        symbols = {s.name: s for s in (*self.rate_constants, self.S, self.T, self.P, self.Q, self.E_tot)}
        values = {}
        for name, value in {**rate_constants, **concentrations}.items():
            if name not in symbols:
                raise InvalidArgumentError(f"Unknown symbol {name!r}")
            values[symbols[name]] = value
        return values


def flux_ratio_curves(
    gibbs_energies: np.ndarray,
    ratios: Sequence[float],
    temperature: float = STANDARD_TEMPERATURE,
    gas_constant: float = R_KJ,
) -> dict[float, np.ndarray]:
    """J+/J- = exp(-ΔG_r / RT) scaled by each substrate ratio, one curve per ratio."""
    base = flux_ratio(gibbs_energies, temperature, gas_constant)
    return {ratio: base * ratio for ratio in ratios}
