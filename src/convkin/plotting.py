"""Matplotlib figures for rate surfaces, flux ratios and time courses.

Figures are built with :class:`matplotlib.figure.Figure` directly so no
interactive backend is needed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

import numpy as np
from matplotlib.figure import Figure

from convkin.simulation import TimeCourse
from convkin.symbolic import vectorize


def rate_surface(
    expr: Any,
    x: Any,
    y: Any,
    x_values: Sequence[float],
    y_values: Sequence[float],
    values: Mapping[Any, Any] | None = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Evaluate ``expr`` on the grid ``x_values`` × ``y_values``.

    Points where the rate is undefined (zero denominator) are NaN.

    Returns:
        ``(X, Y, Z)`` arrays of shape ``(len(y_values), len(x_values))``.
    """
    func = vectorize(expr, [x, y], values)
    grid_x, grid_y = np.meshgrid(np.asarray(x_values, dtype=float), np.asarray(y_values, dtype=float))
    with np.errstate(divide="ignore", invalid="ignore"):
        grid_z = np.asarray(func(grid_x, grid_y), dtype=float)
    grid_z = np.broadcast_to(grid_z, grid_x.shape).copy()
    grid_z[~np.isfinite(grid_z)] = np.nan
    return grid_x, grid_y, grid_z


def plot_rate_surface(
    grid_x: np.ndarray,
    grid_y: np.ndarray,
    grid_z: np.ndarray,
    xlabel: str = "S",
    ylabel: str = "T",
    zlabel: str = "v",
    title: str = "Convenience rate",
) -> Figure:
    figure = Figure(figsize=(8, 6), tight_layout=True)
    axes = figure.add_subplot(1, 1, 1, projection="3d")
    axes.plot_surface(grid_x, grid_y, grid_z, cmap="viridis")
    axes.set_xlabel(xlabel)
    axes.set_ylabel(ylabel)
    axes.set_zlabel(zlabel)
    axes.set_title(title)
    return figure


def plot_flux_ratio(
    gibbs_energies: np.ndarray,
    curves: Mapping[float, np.ndarray],
    title: str = "Two-Substrate Enzyme Reaction Flux Ratio",
) -> Figure:
    """Log-scale J+/J- against ΔG_r (kJ/mol), one line per substrate ratio."""
    figure = Figure(figsize=(7, 5), tight_layout=True)
    axes = figure.add_subplot(1, 1, 1)
    for ratio, values in curves.items():
        axes.plot(gibbs_energies, values, label=f"S/T = {ratio}", linewidth=2)
    axes.axhline(1.0, color="red", linestyle="--", linewidth=1, label="Equilibrium")
    axes.set_yscale("log")
    axes.set_xlabel("ΔG_r (kJ/mol)")
    axes.set_ylabel("J+/J-")
    axes.set_title(title)
    axes.legend(loc="upper left", fontsize=8)
    return figure


def plot_time_course(course: TimeCourse, title: str = "Enzyme Reaction Simulation") -> Figure:
    figure = Figure(figsize=(7, 5), tight_layout=True)
    axes = figure.add_subplot(1, 1, 1)
    for name, values in course.concentrations.items():
        axes.plot(course.time, values, label=name, linewidth=2)
    axes.set_xlabel("Time (s)")
    axes.set_ylabel("Concentration (mmol/L)")
    axes.set_title(title)
    axes.legend()
    return figure


def save_figure(figure: Figure, path: str | Path) -> Path:
    """Write ``figure`` to ``path``; the format follows the file suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    figure.savefig(path)
    return path
