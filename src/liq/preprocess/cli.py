"""Typer CLI for fitting and applying scaling models."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import numpy as np
import polars as pl
import typer
from rich.console import Console
from rich.table import Table

from liq.preprocess.config import ScalerType, get_defaults
from liq.preprocess.exceptions import ScalerConfigurationError, ScalingError
from liq.preprocess.model import ScalingModel
from liq.preprocess.scalers import list_scalers

app = typer.Typer(help="liq-preprocess CLI")
console = Console()


@app.command("fit")
def fit_model(
    input_path: Path = typer.Argument(..., help="CSV/Parquet/JSON table of numeric feature columns"),
    output_model: Path = typer.Option(..., "--output-model", "-M", help="Where to write the model JSON"),
    scaler_method: str = typer.Option(
        ScalerType.STANDARD.value, "--scaler-method", "-a", help="Scaler to fit (see 'scalers')"
    ),
    min_value: Optional[int] = typer.Option(None, "--min-value", "-b", help="Lower bound for min_max_scaler"),
    max_value: Optional[int] = typer.Option(None, "--max-value", "-B", help="Upper bound for min_max_scaler"),
    epsilon: Optional[float] = typer.Option(
        None, "--epsilon", "-r", help="Regularization for pca_whitening/zca_whitening"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Optional path for the scaled table"),
) -> None:
    """Fit a scaling model on a table and persist it."""
    try:
        scaler_type = ScalerType.from_name(scaler_method)
    except ScalerConfigurationError as exc:
        raise typer.BadParameter(str(exc), param_hint="--scaler-method") from exc
    df = _load_table(input_path)
    try:
        model = ScalingModel(
            min_value=min_value,
            max_value=max_value,
            epsilon=epsilon,
            scaler_type=scaler_type,
        )
        model.fit(df)
        if output:
            _write_table(output, model.transform(df), df.columns)
        model.save(output_model)
    except ScalingError as exc:
        console.print(f"[red]Scaling failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Saved {model.scaler_type.value} model to {output_model}[/green]")
    if output:
        console.print(f"[green]Wrote scaled table to {output}[/green]")


@app.command("transform")
def transform(
    input_path: Path = typer.Argument(..., help="CSV/Parquet/JSON table of numeric feature columns"),
    input_model: Path = typer.Option(..., "--input-model", "-m", help="Path to model JSON"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Optional output path"),
    inverse: bool = typer.Option(False, "--inverse", "-f", help="Apply the inverse transform"),
) -> None:
    """Apply a persisted scaling model (or its inverse) to a table."""
    df = _load_table(input_path)
    try:
        model = ScalingModel.load(input_model)
        result = model.inverse_transform(df) if inverse else model.transform(df)
    except ScalingError as exc:
        console.print(f"[red]Scaling failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    if output:
        _write_table(output, result, df.columns)
        console.print(f"[green]Wrote transformed table to {output}[/green]")
    else:
        console.print(pl.DataFrame(result, schema=df.columns, orient="row"))


@app.command("show")
def show_model(
    model_path: Path = typer.Argument(..., help="Path to model JSON"),
) -> None:
    """Show a persisted scaling model."""
    try:
        model = ScalingModel.load(model_path)
    except ScalingError as exc:
        console.print(f"[red]Could not load model:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    table = Table(title="Scaling Model")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Scaler Type", model.scaler_type.value)
    table.add_row("Fitted", str(model.is_fitted))
    table.add_row("Features", str(model.scaler.n_features_) if model.scaler else "-")
    table.add_row("Min Value", str(model.min_value))
    table.add_row("Max Value", str(model.max_value))
    table.add_row("Epsilon", f"{model.epsilon:g}")

    console.print(table)


@app.command("scalers")
def scalers() -> None:
    """List available scalers and their defaults."""
    defaults = get_defaults()
    table = Table(title="Available Scalers")
    table.add_column("Name", style="cyan")
    table.add_column("Class", style="green")
    table.add_column("Parameters")

    for info in list_scalers():
        params = ", ".join(f"{name}={defaults[name]}" for name in info["config_fields"]) or "-"
        table.add_row(info["name"], info["class_name"], params)

    console.print(table)


def _load_table(path: Path) -> pl.DataFrame:
    if not path.exists():
        raise typer.BadParameter(f"File not found: {path}")
    suffix = path.suffix.lower()
    if suffix not in (".parquet", ".csv", ".json"):
        raise typer.BadParameter("Unsupported file type; use Parquet, CSV or JSON")
    try:
        if suffix == ".parquet":
            df = pl.read_parquet(path)
        elif suffix == ".csv":
            df = pl.read_csv(path)
        else:
            with path.open() as f:
                df = pl.DataFrame(json.load(f))
    except (json.JSONDecodeError, OSError, pl.exceptions.PolarsError, TypeError, ValueError) as exc:
        raise typer.BadParameter(f"Could not read table {path}: {exc}") from exc
    non_numeric = [name for name, dtype in df.schema.items() if not dtype.is_numeric()]
    if non_numeric:
        raise typer.BadParameter(f"Non-numeric columns: {', '.join(non_numeric)}")
    return df


def _write_table(path: Path, values: np.ndarray, columns: list[str]) -> None:
    out = pl.DataFrame(values, schema=columns, orient="row")
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        out.write_parquet(path)
    elif suffix == ".csv":
        out.write_csv(path)
    else:
        path.write_text(json.dumps(out.to_dict(as_series=False)))


if __name__ == "__main__":
    app()
