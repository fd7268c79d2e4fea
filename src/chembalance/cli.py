"""Command-line entrypoints for chembalance."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Dict, Tuple

import typer

from chembalance.balancer import balance as balance_equation
from chembalance.errors import BalanceError
from chembalance.mass import molar_mass
from chembalance.models import BalanceMode
from chembalance.rational import as_decimal

app = typer.Typer(add_completion=False)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


def _error_payload(error: BalanceError) -> Dict[str, Any]:
    return {"error": error.kind, "message": str(error), "suggestions": list(error.suggestions)}


def _report(error: BalanceError) -> None:
    typer.echo(f"{error.kind}: {error}", err=True)
    for suggestion in error.suggestions:
        typer.echo(f"  - {suggestion}", err=True)


def _read_entry(entry: Any) -> Tuple[str, BalanceMode]:
    if isinstance(entry, str):
        return entry, BalanceMode.STANDARD
    if not isinstance(entry, dict):
        raise TypeError(f"expected a string or an object, got {type(entry).__name__}")
    equation = entry["equation"]
    if not isinstance(equation, str):
        raise TypeError("equation must be a string")
    return equation, BalanceMode(entry.get("mode", "standard"))


@app.command()
def balance(
    equation: Annotated[str, typer.Argument(help='Equation such as "H2 + O2 -> H2O".')],
    mode: Annotated[
        BalanceMode, typer.Option(help="standard rejects ions; redox conserves charge.")
    ] = BalanceMode.STANDARD,
    as_json: Annotated[bool, typer.Option("--json", help="Print the full result as JSON.")] = False,
    verbose: Annotated[bool, typer.Option(help="Log each balancing step.")] = False,
) -> None:
    """Balance a single equation."""
    _configure_logging(verbose)
    try:
        result = balance_equation(equation, mode=mode)
    except BalanceError as error:
        if as_json:
            typer.echo(json.dumps(_error_payload(error), indent=2))
        else:
            _report(error)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    typer.echo(result.balanced_equation)
    if result.is_redox and result.redox_detail is not None:
        detail = result.redox_detail
        typer.echo(
            f"Redox: oxidized {', '.join(detail.oxidized) or '-'}; "
            f"reduced {', '.join(detail.reduced) or '-'}; "
            f"electrons transferred {detail.electron_transfer}"
        )


@app.command()
def mass(
    formula: Annotated[str, typer.Argument(help='Formula such as "CuSO4.5H2O".')],
) -> None:
    """Print the molar mass of a formula with a per-element breakdown."""
    try:
        result = molar_mass(formula)
    except BalanceError as error:
        _report(error)
        raise typer.Exit(code=1)

    payload = {
        "formula": formula,
        "molar_mass": round(as_decimal(result.total), 6),
        "exact": str(result.total),
        "breakdown": {key: round(as_decimal(value), 6) for key, value in result.breakdown.items()},
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def batch(
    input_file: Annotated[
        Path, typer.Argument(help="JSON list of equations or {equation, mode} objects.")
    ],
    output: Annotated[
        Path | None, typer.Option(help="Path to save output JSON.")
    ] = None,
    verbose: Annotated[bool, typer.Option(help="Log each balancing step.")] = False,
) -> None:
    """Balance every equation in a JSON file."""
    _configure_logging(verbose)
    with open(input_file, "r") as f:
        entries = json.load(f)
    if not isinstance(entries, list):
        raise typer.BadParameter("Batch file must contain a JSON list.")

    results = []
    for entry in entries:
        equation = entry.get("equation") if isinstance(entry, dict) else entry
        try:
            equation, mode = _read_entry(entry)
            results.append({"equation": equation, **balance_equation(equation, mode=mode).to_dict()})
        except BalanceError as error:
            results.append({"equation": equation, **_error_payload(error)})
        except (KeyError, ValueError, TypeError) as error:
            results.append({
                "equation": equation,
                "error": "InvalidEntry",
                "message": f"Invalid batch entry: {error}",
                "suggestions": [],
            })

    json_output = json.dumps(results, indent=2)
    typer.echo(json_output)

    if output:
        with open(output, "w") as f:
            f.write(json_output)
