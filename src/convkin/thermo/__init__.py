from .base import EquilibriumModel
from .gibbs import (
    FixedEquilibrium,
    GibbsEquilibrium,
    equilibrium_constant,
    flux_ratio,
    reaction_gibbs_energy,
    standard_gibbs_energy,
)
from .haldane import haldane_equilibrium_constant, haldane_kcat_minus, reaction_quotient

__all__ = [
    "EquilibriumModel",
    "FixedEquilibrium",
    "GibbsEquilibrium",
    "equilibrium_constant",
    "flux_ratio",
    "reaction_gibbs_energy",
    "standard_gibbs_energy",
    "haldane_equilibrium_constant",
    "haldane_kcat_minus",
    "reaction_quotient",
]
