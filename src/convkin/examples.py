"""Built-in reactions and symbolic rate laws used by the demos and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import sympy as sp

from convkin.consistency import ThermodynamicParameters, build_consistent_rate
from convkin.constants import STANDARD_TEMPERATURE
from convkin.errors import InvalidArgumentError
from convkin.kinetics import activation_factor, convenience_rate, inhibition_factor
from convkin.models import Participant, Reaction
from convkin.symbolic import parameter_symbols, species_symbols, time_symbol


def single_substrate_reaction(km_a: float = 1.0, km_b: float = 1.0) -> Reaction:
    """A ⇌ B"""
    return Reaction("uni-uni", (Participant("A", 1, km_a),), (Participant("B", 1, km_b),))


def bi_bi_reaction(
    km_s: float = 1.0,
    km_t: float = 1.0,
    km_p: float = 1.0,
    km_q: float = 1.0,
) -> Reaction:
    """S + T ⇌ P + Q"""
    return Reaction(
        "bi-bi",
        (Participant("S", 1, km_s), Participant("T", 1, km_t)),
        (Participant("P", 1, km_p), Participant("Q", 1, km_q)),
    )


def two_a_plus_b_reaction(km_a: float = 1.0, km_b: float = 1.0, km_c: float = 1.0) -> Reaction:
    """2 A + B ⇌ 3 C"""
    return Reaction(
        "2A+B",
        (Participant("A", 2, km_a), Participant("B", 1, km_b)),
        (Participant("C", 3, km_c),),
    )


# Acetoacetyl-CoA + NADPH + H+ ⇌ (S)-3-hydroxybutyryl-CoA + NADP+
FAS_STANDARD_GIBBS_ENERGY = -16.8  # kJ/mol
FAS_KCAT_PLUS = 10.0  # 1/s
FAS_ENZYME_TOTAL = 1e-3  # mmol/L
FAS_CONCENTRATIONS = {  # mmol/L
    "AcacCoA": 1.0,
    "NADPH": 0.5,
    "H": 1e-4,  # pH 7
    "HB3CoA": 0.1,
    "NADP": 0.2,
}


def fas_reductase_reaction() -> Reaction:
    """Reductase step of fatty acid synthesis, Km values in mmol/L."""
    return Reaction(
        "FAS reductase",
        (Participant("AcacCoA", 1, 0.01), Participant("NADPH", 1, 0.05), Participant("H", 1, 1e-4)),
        (Participant("HB3CoA", 1, 0.01), Participant("NADP", 1, 0.05)),
    )


REACTIONS = {
    "uni-uni": single_substrate_reaction,
    "bi-bi": bi_bi_reaction,
    "2a+b": two_a_plus_b_reaction,
    "fas": fas_reductase_reaction,
}


def get_reaction(name: str) -> Reaction:
    try:
        factory = REACTIONS[name.lower()]
    except KeyError:
        raise InvalidArgumentError(f"Unknown reaction {name!r}; expected one of {sorted(REACTIONS)}") from None
    return factory()


@dataclass(frozen=True)
class SymbolicRateLaw:
    """A rate expression together with the symbols it was built from."""

    reaction: Reaction
    expression: sp.Expr
    species: dict[str, sp.Expr]
    km: dict[str, sp.Symbol]
    kcat_plus: sp.Symbol
    kcat_minus: Any
    enzyme_total: sp.Symbol
    modifiers: dict[str, sp.Symbol] = field(default_factory=dict)

    def parameter_values(self, kcat_plus: float = 1.0, kcat_minus: float = 1.0, enzyme_total: float = 1.0) -> dict:
        """Substitutions for the reaction's own Km values and the given constants."""
        values = {self.km[p.name]: p.km for p in self.reaction.left + self.reaction.right}
        values[self.kcat_plus] = kcat_plus
        values[self.enzyme_total] = enzyme_total
        if isinstance(self.kcat_minus, sp.Symbol):
            values[self.kcat_minus] = kcat_minus
        return values


def _symbols_for(reaction: Reaction, time: sp.Symbol | None):
    names = reaction.species_names
    species = dict(zip(names, species_symbols(names, time)))
    km = dict(zip(names, parameter_symbols(f"K_{name}" for name in names)))
    kcat_plus, enzyme_total = parameter_symbols(["k_+", "E_tot"])
    return species, km, kcat_plus, enzyme_total


def symbolic_rate_law(
    reaction: Reaction,
    time: sp.Symbol | None = None,
    denominator: str = "product",
    modulated: bool = False,
) -> SymbolicRateLaw:
    """Convenience rate law with a free kcat_minus symbol.

    With ``modulated`` the rate is multiplied by an activation factor for a
    species ``Act`` and an inhibition factor for a species ``Inh``.
    """
    species, km, kcat_plus, enzyme_total = _symbols_for(reaction, time)
    (kcat_minus,) = parameter_symbols(["k_-"])
    left, right = reaction.terms(species, km)
    expression = convenience_rate(left, right, kcat_plus, kcat_minus, enzyme_total, denominator)
    modifiers: dict[str, sp.Symbol] = {}
    if modulated:
        act, inh = species_symbols(["Act", "Inh"], time)
        ka_act, ki_inh = parameter_symbols(["K_act", "K_inh"])
        expression = expression * activation_factor(act, ka_act) * inhibition_factor(inh, ki_inh)
        modifiers = {"Act": act, "Inh": inh, "K_act": ka_act, "K_inh": ki_inh}
    return SymbolicRateLaw(reaction, expression, species, km, kcat_plus, kcat_minus, enzyme_total, modifiers)


def consistent_symbolic_rate_law(
    reaction: Reaction,
    *,
    temperature: float = STANDARD_TEMPERATURE,
    standard_gibbs_energy: float | None = None,
    equilibrium_constant: float | None = None,
    time: sp.Symbol | None = None,
    denominator: str = "product",
) -> tuple[SymbolicRateLaw, ThermodynamicParameters]:
    """Symbolic rate law whose kcat_minus is the Haldane expression in the Km symbols."""
    species, km, kcat_plus, enzyme_total = _symbols_for(reaction, time)
    left, right = reaction.terms(species, km)
    expression, parameters = build_consistent_rate(
        left,
        right,
        kcat_plus,
        enzyme_total,
        temperature=temperature,
        standard_gibbs_energy=standard_gibbs_energy,
        equilibrium_constant=equilibrium_constant,
        denominator=denominator,
    )
    law = SymbolicRateLaw(reaction, expression, species, km, kcat_plus, parameters.kcat_minus, enzyme_total)
    return law, parameters


def build_fas_model(
    temperature: float = STANDARD_TEMPERATURE,
    standard_gibbs_energy: float = FAS_STANDARD_GIBBS_ENERGY,
    equilibrium_constant: float | None = None,
) -> tuple[SymbolicRateLaw, ThermodynamicParameters]:
    """Time-dependent, thermodynamically consistent rate law of the FAS reductase."""
    return consistent_symbolic_rate_law(
        fas_reductase_reaction(),
        temperature=temperature,
        standard_gibbs_energy=standard_gibbs_energy,
        equilibrium_constant=equilibrium_constant,
        time=time_symbol(),
    )
