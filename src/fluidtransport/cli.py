"""Command-line entrypoints for fluidtransport."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import numpy as np
import typer

from fluidtransport.config import load_config
from fluidtransport.errors import ConfigurationError, TransportModelError
from fluidtransport.verification import check_conductivity_derivatives, check_viscosity_derivatives

app = typer.Typer(add_completion=False)

ConfigArgument = Annotated[Path, typer.Argument(help="Path to JSON model configuration.")]
DensityOption = Annotated[float, typer.Option(help="Density (kg/m^3).")]
HeatCapacityOption = Annotated[float, typer.Option(help="Isobaric specific heat (J/(kg*K)).")]


@app.callback()
def main(
    log_level: Annotated[str, typer.Option(help="Logging level.")] = "WARNING",
) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def evaluate(
    config_file: ConfigArgument,
    temperature: Annotated[float, typer.Option(help="Temperature (K).")],
    density: DensityOption = 1.0,
    heat_capacity: HeatCapacityOption = 1005.0,
) -> None:
    """Evaluate viscosity and conductivity at one state point."""
    evaluator = _load(config_file)
    try:
        state = evaluator.evaluate(temperature, density, heat_capacity)
    except TransportModelError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(state.to_dict(), indent=2))


@app.command()
def sweep(
    config_file: ConfigArgument,
    t_min: Annotated[float, typer.Option(help="Lowest temperature (K).")] = 200.0,
    t_max: Annotated[float, typer.Option(help="Highest temperature (K).")] = 1000.0,
    points: Annotated[int, typer.Option(help="Number of temperatures.")] = 50,
    density: DensityOption = 1.0,
    heat_capacity: HeatCapacityOption = 1005.0,
    output: Annotated[Path | None, typer.Option(help="Path to save output JSON.")] = None,
    plot: Annotated[Path | None, typer.Option(help="Path to save a PNG plot.")] = None,
) -> None:
    """Tabulate transport properties over a temperature range."""
    evaluator = _load(config_file)
    temperatures = np.linspace(t_min, t_max, points)

    rows = []
    for T in temperatures:
        try:
            state = evaluator.evaluate(float(T), density, heat_capacity)
        except TransportModelError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1)
        rows.append(state.to_dict())

    data = {
        "T": temperatures.tolist(),
        "mu": [row["viscosity"]["mu"] for row in rows],
        "dmudT_rho": [row["viscosity"]["dmudT_rho"] for row in rows],
        "kt": [row["conductivity"]["kt"] for row in rows],
        "dktdT_rho": [row["conductivity"]["dktdT_rho"] for row in rows],
        "Pr": [row["Pr"] for row in rows],
    }

    json_output = json.dumps(data, indent=2)
    typer.echo(json_output)

    if output:
        with open(output, "w") as f:
            f.write(json_output)

    if plot:
        _plot_sweep(data, plot)


@app.command()
def check_derivatives(
    config_file: ConfigArgument,
    temperature: Annotated[float, typer.Option(help="Temperature (K).")] = 300.0,
    density: DensityOption = 1.0,
    heat_capacity: HeatCapacityOption = 1005.0,
    step: Annotated[float, typer.Option(help="Finite-difference step.")] = 1e-4,
    tolerance: Annotated[float, typer.Option(help="Allowed relative error.")] = 1e-6,
) -> None:
    """Compare analytic derivatives with central differences."""
    evaluator = _load(config_file)
    checks = check_viscosity_derivatives(evaluator.viscosity_model, temperature, density, step)
    checks += check_conductivity_derivatives(
        evaluator.viscosity_model,
        evaluator.conductivity_model,
        temperature,
        density,
        heat_capacity,
        step,
    )

    failed = False
    for check in checks:
        if check.passed(tolerance):
            status = "ok"
        elif check.enforced:
            status = "FAIL"
            failed = True
        else:
            # closed form is not the exact slope, reported only
            status = "closed-form"
        typer.echo(
            f"{check.quantity:10s} analytic={check.analytic: .6e} numeric={check.numeric: .6e} "
            f"rel_err={check.relative_error:.2e} {status}"
        )
    if failed:
        raise typer.Exit(code=1)


def _plot_sweep(data, path: Path) -> None:
    from matplotlib.backends.backend_agg import FigureCanvasAgg
    from matplotlib.figure import Figure

    figure = Figure(figsize=(6, 6), tight_layout=True)
    FigureCanvasAgg(figure)
    mu_axes = figure.add_subplot(2, 1, 1)
    mu_axes.plot(data["T"], data["mu"], label="mu")
    mu_axes.set_ylabel("Viscosity (Pa s)")
    mu_axes.legend()

    kt_axes = figure.add_subplot(2, 1, 2, sharex=mu_axes)
    kt_axes.plot(data["T"], data["kt"], label="kt", color="tab:red")
    kt_axes.set_xlabel("Temperature (K)")
    kt_axes.set_ylabel("Conductivity (W/m/K)")
    kt_axes.legend()

    figure.savefig(path)


def _load(config_file: Path):
    try:
        return load_config(config_file)
    except (ConfigurationError, KeyError, ValueError, OSError) as exc:
        typer.echo(f"Invalid configuration {config_file}: {exc}", err=True)
        raise typer.Exit(code=2)
