"""Data structures for reaction sides and reactions."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

import sympy as sp

from convkin.errors import InvalidArgumentError
from convkin.symbolic import require_positive


def _check_stoichiometry(label: str, coefficient: Any) -> int:
    if isinstance(coefficient, bool):
        raise InvalidArgumentError(f"Stoichiometry of {label} must be an integer, got {coefficient!r}")
    if isinstance(coefficient, sp.Basic):
        if not coefficient.is_Integer:
            raise InvalidArgumentError(f"Stoichiometry of {label} must be an integer, got {coefficient}")
        coefficient = int(coefficient)
    if not isinstance(coefficient, numbers.Integral):
        raise InvalidArgumentError(f"Stoichiometry of {label} must be an integer, got {coefficient!r}")
    if coefficient < 0:
        raise InvalidArgumentError(f"Stoichiometry of {label} must be non-negative, got {coefficient}")
    return int(coefficient)


@dataclass(frozen=True)
class SideTerm:
    """One species on one side of a reaction, as consumed by the rate builder.

    ``species`` is the concentration (a number, a symbol or a function of time)
    and ``km`` its half-saturation constant.
    """

    species: Any
    stoichiometry: int
    km: Any

    def __post_init__(self) -> None:
        coefficient = _check_stoichiometry(str(self.species), self.stoichiometry)
        object.__setattr__(self, "stoichiometry", coefficient)
        require_positive(f"Km of {self.species}", self.km)

    @property
    def normalized(self) -> Any:
        """Concentration divided by Km."""
        return self.species / self.km


@dataclass(frozen=True)
class Participant:
    name: str
    stoichiometry: int
    km: Any

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidArgumentError("Participant name must not be empty")
        object.__setattr__(self, "stoichiometry", _check_stoichiometry(self.name, self.stoichiometry))
        require_positive(f"Km of {self.name}", self.km)


def validate_side(label: str, terms: Sequence[Any]) -> None:
    """A side needs at least one species with a coefficient of one or more."""
    if not terms:
        raise InvalidArgumentError(f"The {label} side of a reaction must not be empty")
    if all(term.stoichiometry == 0 for term in terms):
        raise InvalidArgumentError(
            f"The {label} side needs at least one species with stoichiometry >= 1"
        )


def build_side(species: Sequence[Any], stoichiometry: Sequence[Any], km: Sequence[Any]) -> tuple[SideTerm, ...]:
    """Zip parallel species/stoichiometry/Km sequences into side records.

    Raises:
        InvalidArgumentError: if the three sequences differ in length.
    """
    if not len(species) == len(stoichiometry) == len(km):
        raise InvalidArgumentError(
            "species, stoichiometry and Km must have equal lengths, got "
            f"{len(species)}, {len(stoichiometry)} and {len(km)}"
        )
    return tuple(SideTerm(s, n, k) for s, n, k in zip(species, stoichiometry, km))


@dataclass(frozen=True)
class Reaction:
    """A reversible reaction ``left ⇌ right`` with named participants."""

    name: str
    left: tuple[Participant, ...]
    right: tuple[Participant, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "left", tuple(self.left))
        object.__setattr__(self, "right", tuple(self.right))
        validate_side("left", self.left)
        validate_side("right", self.right)
        names = [p.name for p in self.left + self.right]
        if len(set(names)) != len(names):
            raise InvalidArgumentError(f"Species appear more than once in reaction {self.name}: {names}")

    @property
    def species_names(self) -> list[str]:
        return [p.name for p in self.left + self.right]

    @property
    def stoichiometry(self) -> dict[str, int]:
        """Net coefficient per species: substrates negative, products positive."""
        net = {p.name: -p.stoichiometry for p in self.left}
        net.update({p.name: p.stoichiometry for p in self.right})
        return net

    def terms(
        self,
        values: Mapping[str, Any],
        km_values: Mapping[str, Any] | None = None,
    ) -> tuple[tuple[SideTerm, ...], tuple[SideTerm, ...]]:
        """Build the builder's side records from concentrations keyed by name.

        ``km_values`` optionally overrides the participants' own Km values,
        e.g. with symbols.
        """
        missing = [name for name in self.species_names if name not in values]
        if missing:
            raise InvalidArgumentError(f"Missing concentrations for {', '.join(missing)}")
        km_values = km_values or {}

        def side(participants: Iterable[Participant]) -> tuple[SideTerm, ...]:
            return tuple(
                SideTerm(values[p.name], p.stoichiometry, km_values.get(p.name, p.km))
                for p in participants
            )

        return side(self.left), side(self.right)

    def equation(self) -> str:
        """Human readable form, e.g. ``2 A + B <=> 3 C``."""

        def side(participants: Iterable[Participant]) -> str:
            parts = []
            for p in participants:
                parts.append(p.name if p.stoichiometry == 1 else f"{p.stoichiometry} {p.name}")
            return " + ".join(parts)

        return f"{side(self.left)} <=> {side(self.right)}"
