"""Time-course simulation of enzyme reactions.

Two right-hand-side builders are provided:

- :func:`build_reaction_rhs` drives a single reaction with any
  :class:`~convkin.kinetics.KineticsModel`, e.g. thermodynamically consistent
  convenience kinetics. Each species changes at ``nu_i * rate``.
- :func:`build_mass_action_rhs` integrates the elementary mechanism
  ``S + T + E <=> EST <=> E + P + Q`` with explicit enzyme states.

Both return a function ``rhs(t, y)`` compatible with
``scipy.integrate.solve_ivp``, solved by :func:`solve_time_course`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

import numpy as np
from scipy.integrate import solve_ivp

from convkin.errors import InvalidArgumentError, NumericFaultError
from convkin.kinetics import KineticsModel
from convkin.models import Reaction
from convkin.symbolic import require_positive

logger = logging.getLogger(__name__)

MASS_ACTION_SPECIES = ("S", "T", "E", "EST", "P", "Q")


@dataclass(frozen=True)
class TimeCourse:
    """Concentration trajectories (mmol/L) sampled at ``time`` (s)."""

    time: np.ndarray
    concentrations: dict[str, np.ndarray]

    def final(self) -> dict[str, float]:
        return {name: float(values[-1]) for name, values in self.concentrations.items()}

    def as_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"time": self.time.tolist()}
        payload.update({name: values.tolist() for name, values in self.concentrations.items()})
        payload["final"] = self.final()
        return payload


def build_reaction_rhs(
    kinetics: KineticsModel,
    reaction: Reaction,
    species_order: Sequence[str],
) -> Callable[[float, np.ndarray], np.ndarray]:
    """Build ``dC/dt = nu * v(C)`` for one reaction.

    Args:
        kinetics: Rate model evaluated on a name -> concentration mapping.
        reaction: Supplies the net stoichiometric coefficients.
        species_order: Order of species in the state vector. Species that do
            not take part in the reaction (effectors) stay constant.
    """
    missing = [name for name in reaction.species_names if name not in species_order]
    if missing:
        raise InvalidArgumentError(f"species_order lacks reaction species {', '.join(missing)}")
    net = reaction.stoichiometry
    nu = np.array([net.get(name, 0) for name in species_order], dtype=float)

    def rhs(_t: float, state: np.ndarray) -> np.ndarray:
        conc_map = {name: value for name, value in zip(species_order, state, strict=False)}
        rate = kinetics.rate(conc_map)
        return nu * rate

    return rhs


def build_mass_action_rhs(
    k1f: float,
    k1r: float,
    k2f: float,
    k2r: float,
) -> Callable[[float, np.ndarray], np.ndarray]:
    """Mass-action ODEs for ``S + T + E <=> EST <=> E + P + Q``.

    State vector order is :data:`MASS_ACTION_SPECIES`.
    """
    for name, value in (("k1f", k1f), ("k1r", k1r), ("k2f", k2f), ("k2r", k2r)):
        require_positive(name, value)

    def rhs(_t: float, state: np.ndarray) -> np.ndarray:
        s, t, e, est, p, q = state
        r1 = k1f * s * t * e - k1r * est
        r2 = k2f * est - k2r * p * q * e
        return np.array([-r1, -r1, -r1 + r2, r1 - r2, r2, r2])

    return rhs


def solve_time_course(
    rhs: Callable[[float, np.ndarray], np.ndarray],
    initial_state: Sequence[float] | Mapping[str, float],
    time_span: tuple[float, float],
    species_order: Sequence[str],
    evaluation_times: np.ndarray | None = None,
    method: str = "RK45",
) -> TimeCourse:
    """Integrate ``rhs`` and label the trajectories by species.

    Args:
        rhs: Right-hand side from one of the builders above.
        initial_state: Initial concentrations, as a vector in
            ``species_order`` or a name -> value mapping.
        time_span: Tuple (t_start, t_end) for the integration.
        species_order: Labels of the state vector entries.
        evaluation_times: Time points at which to store the solution.
        method: Any ``solve_ivp`` method name.

    Raises:
        NumericFaultError: if the integrator does not reach ``t_end``.
    """
    if isinstance(initial_state, Mapping):
        missing = [name for name in species_order if name not in initial_state]
        if missing:
            raise InvalidArgumentError(f"Missing initial concentrations for {', '.join(missing)}")
        y0 = np.array([initial_state[name] for name in species_order], dtype=float)
    else:
        y0 = np.asarray(initial_state, dtype=float)
    if y0.shape != (len(species_order),):
        raise InvalidArgumentError(
            f"Initial state has {y0.size} entries for {len(species_order)} species"
        )
    if time_span[1] <= time_span[0]:
        raise InvalidArgumentError(f"Time span must be increasing, got {time_span}")

    result = solve_ivp(rhs, time_span, y0, t_eval=evaluation_times, method=method)
    if not result.success:
        raise NumericFaultError(f"Integration failed: {result.message}")
    logger.debug("solve_ivp(%s) finished with %d evaluations", method, result.nfev)

    return TimeCourse(
        time=result.t,
        concentrations={name: result.y[i] for i, name in enumerate(species_order)},
    )
