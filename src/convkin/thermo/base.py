"""Base interface for equilibrium models."""

from __future__ import annotations

from abc import ABC, abstractmethod


class EquilibriumModel(ABC):
    """Abstract source of a reaction's equilibrium constant."""

    @abstractmethod
    def equilibrium_constant(self, temperature: float) -> float:
        """Dimensionless equilibrium constant at ``temperature`` (K)."""
        pass

    @property
    def is_override(self) -> bool:
        """True when the constant is supplied directly rather than derived."""
        return False
