"""Command-line entrypoints for ConvKin."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Dict, List

import numpy as np
import typer

from convkin.consistency import build_consistent_rate, consistent_kinetics
from convkin.constants import R_KJ, STANDARD_TEMPERATURE
from convkin.errors import ConvKinError
from convkin.examples import (
    FAS_CONCENTRATIONS,
    FAS_ENZYME_TOTAL,
    FAS_KCAT_PLUS,
    FAS_STANDARD_GIBBS_ENERGY,
    build_fas_model,
    bi_bi_reaction,
    get_reaction,
    symbolic_rate_law,
)
from convkin.mechanism import flux_ratio_curves
from convkin.models import Participant, Reaction
from convkin.plotting import (
    plot_flux_ratio,
    plot_rate_surface,
    plot_time_course,
    rate_surface,
    save_figure,
)
from convkin.simulation import (
    MASS_ACTION_SPECIES,
    build_mass_action_rhs,
    build_reaction_rhs,
    solve_time_course,
)
from convkin.symbolic import evaluate, to_latex
from convkin.thermo import reaction_gibbs_energy, reaction_quotient, standard_gibbs_energy

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Convenience kinetics rate laws with thermodynamic constraints."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


def _fail(error: ConvKinError) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


def _parse_stoichiometry(value: Any) -> Any:
    # integral JSON floats such as 2.0 count as integers; 1.7 reaches Participant and is rejected
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _parse_participants(items: List[Dict[str, Any]]) -> tuple[Participant, ...]:
    return tuple(
        Participant(
            name=str(item["species"]),
            stoichiometry=_parse_stoichiometry(item.get("stoichiometry", 1)),
            km=float(item["km"]),
        )
        for item in items
    )


def _parse_reaction(data: Dict[str, Any]) -> Reaction:
    return Reaction(
        name=str(data.get("name", "reaction")),
        left=_parse_participants(data["left"]),
        right=_parse_participants(data["right"]),
    )


def _optional_float(data: Dict[str, Any], key: str) -> float | None:
    value = data.get(key)
    return None if value is None else float(value)


@app.command()
def rate(
    example: Annotated[str, typer.Argument(help="Built-in reaction: uni-uni, bi-bi, 2a+b or fas.")] = "bi-bi",
    modulated: Annotated[bool, typer.Option(help="Multiply by activation and inhibition factors.")] = False,
    form: Annotated[str, typer.Option(help="Denominator form: product or sum.")] = "product",
) -> None:
    """Print the LaTeX form of a built-in rate law."""
    try:
        law = symbolic_rate_law(get_reaction(example), denominator=form, modulated=modulated)
    except ConvKinError as error:
        _fail(error)
    typer.echo(to_latex(law.expression))


@app.command()
def fas(
    temperature: Annotated[float, typer.Option(help="Temperature (K).")] = STANDARD_TEMPERATURE,
    gibbs: Annotated[float, typer.Option(help="Standard Gibbs energy ΔG°′ (kJ/mol).")] = FAS_STANDARD_GIBBS_ENERGY,
    keq: Annotated[float | None, typer.Option(help="Equilibrium constant override.")] = None,
) -> None:
    """Evaluate the fatty acid synthesis reductase step at default conditions."""
    try:
        law, parameters = build_fas_model(temperature, gibbs, keq)
        values = law.parameter_values(kcat_plus=FAS_KCAT_PLUS, enzyme_total=FAS_ENZYME_TOTAL)
        values.update({law.species[name]: value for name, value in FAS_CONCENTRATIONS.items()})
        rate_value = evaluate(law.expression, values)
        kcat_minus = evaluate(parameters.kcat_minus, values)
        # H+ is buffered and already part of ΔG°′
        quotient = reaction_quotient(FAS_CONCENTRATIONS, law.reaction, exclude=("H",))
        if parameters.equilibrium_override:
            gibbs = standard_gibbs_energy(parameters.equilibrium_constant, temperature, R_KJ)
        gibbs_actual = reaction_gibbs_energy(gibbs, quotient, temperature, R_KJ)
    except ConvKinError as error:
        _fail(error)

    if rate_value > 0:
        direction = "forward"
    elif rate_value < 0:
        direction = "reverse"
    else:
        direction = "equilibrium"

    payload = {
        "reaction": law.reaction.equation(),
        "temperature": temperature,
        "standard_gibbs_energy": gibbs,
        "equilibrium_constant": parameters.equilibrium_constant,
        "equilibrium_override": parameters.equilibrium_override,
        "kcat_minus": kcat_minus,
        "rate": rate_value,
        "reaction_quotient": quotient,
        "reaction_gibbs_energy": gibbs_actual,
        "direction": direction,
        "latex": to_latex(law.expression),
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def surface(
    output: Annotated[Path, typer.Option(help="Figure path; format from suffix.")] = Path("convenience_rate_3d.svg"),
    points: Annotated[int, typer.Option(help="Grid points per axis.")] = 100,
    maximum: Annotated[float, typer.Option(help="Upper bound of S and T (mmol/L).")] = 10.0,
) -> None:
    """Plot the S + T <=> P + Q rate over S and T with no products present."""
    law = symbolic_rate_law(bi_bi_reaction())
    values = law.parameter_values()
    values.update({law.species["P"]: 0.0, law.species["Q"]: 0.0})
    axis = np.linspace(0.0, maximum, points)
    try:
        grid = rate_surface(law.expression, law.species["S"], law.species["T"], axis, axis, values)
    except ConvKinError as error:
        _fail(error)
    figure = plot_rate_surface(*grid, zlabel="v", title="Convenience rate v as a function of S and T")
    typer.echo(str(save_figure(figure, output)))


@app.command("flux-ratio")
def flux_ratio_command(
    output: Annotated[Path, typer.Option(help="Figure path; format from suffix.")] = Path("flux_ratio_plot.png"),
    temperature: Annotated[float, typer.Option(help="Temperature (K).")] = 298.0,
) -> None:
    """Plot J+/J- against ΔG_r for several substrate ratios."""
    gibbs_energies = np.arange(-40.0, 10.0 + 1e-9, 0.1)
    try:
        curves = flux_ratio_curves(gibbs_energies, [0.2, 1.0, 5.0], temperature)
    except ConvKinError as error:
        _fail(error)
    figure = plot_flux_ratio(gibbs_energies, curves)
    typer.echo(str(save_figure(figure, output)))


@app.command()
def simulate(
    duration: Annotated[float, typer.Option(help="Simulation duration (s).")] = 10.0,
    points: Annotated[int, typer.Option(help="Number of output points.")] = 101,
    plot: Annotated[Path | None, typer.Option(help="Optional figure path.")] = None,
) -> None:
    """Integrate the elementary S + T + E <=> EST <=> E + P + Q mechanism."""
    rhs = build_mass_action_rhs(k1f=1.0, k1r=0.1, k2f=2.0, k2r=0.05)
    initial_state = {"S": 10.0, "T": 5.0, "E": 1.0, "EST": 0.0, "P": 0.0, "Q": 0.0}
    time_span = (0.0, duration)
    evaluation_times = np.linspace(time_span[0], time_span[1], points)
    try:
        course = solve_time_course(rhs, initial_state, time_span, MASS_ACTION_SPECIES, evaluation_times)
    except ConvKinError as error:
        _fail(error)

    if plot is not None:
        save_figure(plot_time_course(course, "Two-Substrate Enzyme Reaction Simulation"), plot)
    typer.echo(json.dumps(course.as_dict(), indent=2))


@app.command()
def run(
    config_file: Annotated[
        Path, typer.Argument(help="Path to JSON reaction configuration file.")
    ],
    output: Annotated[
        Path | None, typer.Option(help="Path to save output JSON.")
    ] = None,
) -> None:
    """Evaluate a thermodynamically consistent rate law from a config file."""
    with open(config_file, "r") as f:
        config = json.load(f)

    try:
        reaction = _parse_reaction(config)
        temperature = float(config.get("temperature", STANDARD_TEMPERATURE))
        gibbs = _optional_float(config, "standard_gibbs_energy")
        keq = _optional_float(config, "equilibrium_constant")
        kcat_plus = float(config["kcat_plus"])
        enzyme_total = float(config["enzyme_total"])
        denominator = str(config.get("denominator", "product"))
        concentrations = {name: float(value) for name, value in config["concentrations"].items()}
        activators = {name: float(value) for name, value in config.get("activators", {}).items()}
        inhibitors = {name: float(value) for name, value in config.get("inhibitors", {}).items()}
    except (KeyError, TypeError, ValueError) as error:
        raise typer.BadParameter(f"Invalid configuration: {error}") from error

    try:
        left, right = reaction.terms(concentrations)
        base_rate, parameters = build_consistent_rate(
            left,
            right,
            kcat_plus,
            enzyme_total,
            temperature=temperature,
            standard_gibbs_energy=gibbs,
            equilibrium_constant=keq,
            denominator=denominator,
        )
        kinetics, _ = consistent_kinetics(
            reaction,
            kcat_plus,
            enzyme_total,
            temperature=temperature,
            standard_gibbs_energy=gibbs,
            equilibrium_constant=keq,
            activators=activators,
            inhibitors=inhibitors,
            denominator=denominator,
        )
        modulated_rate = kinetics.rate(concentrations)

        data: Dict[str, Any] = {
            "reaction": reaction.equation(),
            "thermodynamics": parameters.as_dict(),
            "rate": float(base_rate),
            "modulated_rate": modulated_rate,
        }

        sim_config = config.get("simulation")
        if sim_config:
            species_order = reaction.species_names + [
                name for name in (*activators, *inhibitors) if name not in reaction.species_names
            ]
            rhs = build_reaction_rhs(kinetics, reaction, species_order)
            duration = float(sim_config.get("duration", 10.0))
            points = int(sim_config.get("points", 100))
            course = solve_time_course(
                rhs,
                concentrations,
                (0.0, duration),
                species_order,
                np.linspace(0.0, duration, points),
                method=str(sim_config.get("method", "RK45")),
            )
            data["simulation"] = course.as_dict()
    except ConvKinError as error:
        _fail(error)

    logger.debug("Evaluated %s with Keq=%g", reaction.name, parameters.equilibrium_constant)
    json_output = json.dumps(data, indent=2)
    typer.echo(json_output)

    if output:
        with open(output, "w") as f:
            f.write(json_output)
