from __future__ import annotations
from pathlib import Path
from typing import Optional, Dict, Any, List
import csv
import json
import logging
import platform
from datetime import datetime, timezone

import typer
from rich import print as rprint

from .io.loader import DEFAULT_CONFIG_PATH, load_tax_config
from .io.record import parse_record
from .engine.calculator import TaxConfig
from .engine.errors import BracketLookupError
from .engine.models import DEFAULT_STEP, IncomeRecord, OptimizationResult
from .engine.optimize import optimize_movement, sweep_movements, validate_optimization_inputs
from .engine.report import format_tax, render_report, result_to_dict, tax_to_dict
from .viz.curve import plot_curve

app = typer.Typer(help="Personal tax optimizer: finds how much year bonus to move into salary")

SCHEMA_VERSION = "1.0"
TAXSHIFT_VERSION = "0.1.0"  # Should match pyproject.toml

# Error codes for JSON responses
ERROR_CODES = {
    "INVALID_INPUT": 2,
    "CALCULATION_ERROR": 3,
    "FILE_NOT_FOUND": 4,
    "VALIDATION_ERROR": 5,
    "INTERNAL_ERROR": 8,
}

RECORD_HELP = "Your case in comma delimited format: monthly_salary,monthly_tax_deduction,year_bonus"
CONFIG_HELP = "Tax config file (TOML, or YAML by suffix)"


def _create_console_with_imports():
    """Create Rich console with all required imports."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text
    from rich.table import Table

    return Console(), Panel, Text, Table


def _create_json_response(data: Any, success: bool = True) -> Dict[str, Any]:
    """Create standardized JSON response envelope."""
    return {
        "success": success,
        "schema_version": SCHEMA_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "data": data
    }


def _create_json_error(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Create standardized JSON error response.

    Args:
        code: Error code from ERROR_CODES
        message: Human-readable error message
        details: Optional additional error details

    Returns:
        Dict with standardized error response
    """
    error_data = {
        "code": code,
        "message": message
    }
    if details:
        error_data["details"] = details

    return {
        "success": False,
        "schema_version": SCHEMA_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "error": error_data
    }


def _error_code_for(error: Exception) -> str:
    if isinstance(error, FileNotFoundError):
        return "FILE_NOT_FOUND"
    if isinstance(error, BracketLookupError):
        return "CALCULATION_ERROR"
    if isinstance(error, ValueError):
        return "INVALID_INPUT"
    return "INTERNAL_ERROR"


def _handle_json_error(error: Exception, json_mode: bool = False) -> None:
    """Report an exception in the requested format and exit with its error code."""
    code = _error_code_for(error)
    message = str(error) if code != "INTERNAL_ERROR" else f"Unexpected error: {error}"
    if json_mode:
        print(json.dumps(_create_json_error(code, message), indent=2))
    else:
        rprint({"error": message})
    raise typer.Exit(code=ERROR_CODES[code])


def _load_inputs(record: str, config: Path, json_out: bool) -> tuple[IncomeRecord, TaxConfig]:
    """Parse the record and load the config, exiting with a proper code on failure."""
    try:
        rec = parse_record(record)
        tax_config = load_tax_config(config)
    except Exception as e:
        _handle_json_error(e, json_out)
    return rec, tax_config


def _print_brackets(console, Table, tax_config: TaxConfig):
    for title, table in (("Salary brackets", tax_config.salary), ("Year bonus brackets", tax_config.year_bonus)):
        t = Table(title=title, show_header=True, header_style="bold blue")
        t.add_column("Up to", justify="right", style="cyan")
        t.add_column("Ratio", justify="right", style="green")
        for bound, ratio in table:
            t.add_row(f"{bound:,}", f"{ratio:.2%}")
        console.print(t)


def _print_optimization_details(result: OptimizationResult, context: Dict[str, Any]):
    """Print a per-stream before/after breakdown of an optimization result."""
    console, Panel, Text, Table = _create_console_with_imports()

    tax_table = Table(title="📊 Tax Breakdown", show_header=True, header_style="bold blue")
    tax_table.add_column("Component", style="cyan")
    tax_table.add_column("Before", justify="right", style="red")
    tax_table.add_column("After", justify="right", style="green")
    tax_table.add_column("Savings", justify="right", style="yellow")

    before, after = result.baseline, result.best
    tax_table.add_row("Salary Tax", f"{before.salary_tax:,.2f}", f"{after.salary_tax:,.2f}",
                      f"{before.salary_tax - after.salary_tax:,.2f}")
    tax_table.add_row("Year Bonus Tax", f"{before.bonus_tax:,.2f}", f"{after.bonus_tax:,.2f}",
                      f"{before.bonus_tax - after.bonus_tax:,.2f}")
    tax_table.add_row("[bold]Total Tax", f"[bold]{before.total:,.2f}", f"[bold]{after.total:,.2f}",
                      f"[bold]{result.saved:,.2f}")
    console.print("\n", tax_table)

    details_text = Text()
    details_text.append("🎯 OPTIMIZATION DETAILS\n\n", style="bold blue")
    details_text.append(f"Steps evaluated: {result.steps}\n")
    details_text.append(f"Movement: {result.movement:,.2f}\n", style="bold cyan")
    if not result.improved:
        details_text.append("No reallocation lowers the total tax\n", style="yellow")
    sal = context["salary_bracket"]
    bon = context["year_bonus_bracket"]
    details_text.append(f"Annual salary base after movement: {context['salary_base']:,.2f}\n")
    details_text.append(f"Salary bracket: {sal['lower']:,} - {sal['upper']:,} at {sal['ratio']:.2%}\n")
    details_text.append(
        f"Year bonus bracket: monthly equivalent {bon['monthly_equivalent']:,} "
        f"-> up to {bon['upper']:,} at {bon['ratio']:.2%}"
    )
    if sal["untaxed_excess"] > 0:
        details_text.append(
            f"\n\n⚠️ {sal['untaxed_excess']:,.2f} of salary lies above the top bracket and is not taxed",
            style="yellow",
        )
    console.print(Panel(details_text, title="Technical Analysis", border_style="blue"))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Personal tax optimizer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def version(
    json_out: bool = typer.Option(False, "--json", help="Output JSON format"),
):
    """Show version information."""
    version_data = {
        "version": TAXSHIFT_VERSION,
        "schema_version": SCHEMA_VERSION,
        "platform": platform.system().lower()
    }
    if json_out:
        print(json.dumps(_create_json_response(version_data), indent=2))
    else:
        rprint(version_data)


@app.command()
def calc(
    record: str = typer.Option(..., "--record", "-r", help=RECORD_HELP),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help=CONFIG_HELP),
    json_out: bool = typer.Option(False, "--json", help="Output JSON"),
):
    """Compute salary and year bonus tax for a record without optimizing."""
    rec, tax_config = _load_inputs(record, config, json_out)
    try:
        tax = tax_config.calculate(rec)
        context = tax_config.explain(rec)
    except Exception as e:
        _handle_json_error(e, json_out)

    if json_out:
        data = {"tax": tax_to_dict(tax), **context}
        print(json.dumps(_create_json_response(data), indent=2))
        return

    print(f"Tax: {format_tax(tax)}")
    sal = context["salary_bracket"]
    bon = context["year_bonus_bracket"]
    rprint({
        "salary_base": context["salary_base"],
        "salary_bracket": f"{sal['lower']} - {sal['upper']} @ {sal['ratio']}",
        "year_bonus_bracket": f"<= {bon['upper']} @ {bon['ratio']} (monthly equivalent {bon['monthly_equivalent']})",
    })


@app.command()
def optimize(
    record: str = typer.Option(..., "--record", "-r", help=RECORD_HELP),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help=CONFIG_HELP),
    step: float = typer.Option(DEFAULT_STEP, help="Amount moved from bonus into salary per step"),
    json_out: bool = typer.Option(False, "--json", help="Output JSON"),
    details: bool = typer.Option(False, "--details", help="Show per-stream breakdown and bracket details"),
):
    """Find the movement of year bonus into salary that minimizes total tax.

    Example:
      taxshift optimize --record 20000,5000,60000 --config ./config.toml
    """
    rec, tax_config = _load_inputs(record, config, json_out)
    try:
        result = optimize_movement(rec, tax_config, step)
    except Exception as e:
        _handle_json_error(e, json_out)

    if json_out:
        print(json.dumps(_create_json_response(result_to_dict(result)), indent=2))
        return

    for line in render_report(result):
        print(line)

    if details:
        best_record = rec.copy()
        if result.improved:
            best_record.transfer(result.movement)
        _print_optimization_details(result, tax_config.explain(best_record))


def _scan_rows(rec: IncomeRecord, tax_config: TaxConfig, step: float) -> List[Dict[str, float]]:
    baseline = tax_config.calculate(rec)
    rows = [{"movement": rec.movement, **tax_to_dict(baseline), "saved": 0.0}]
    for movement, tax in sweep_movements(rec, tax_config, step):
        rows.append({"movement": movement, **tax_to_dict(tax), "saved": baseline.total - tax.total})
    return rows


@app.command()
def scan(
    record: str = typer.Option(..., "--record", "-r", help=RECORD_HELP),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help=CONFIG_HELP),
    step: float = typer.Option(DEFAULT_STEP, help="Amount moved from bonus into salary per step"),
    out: str = typer.Option("scan.csv", help="Output CSV path"),
    json_out: bool = typer.Option(False, "--json", help="Print JSON instead of writing CSV"),
):
    """
    Produce one row per reallocation step, starting at the baseline:
      movement, salary_tax, bonus_tax, total, saved
    """
    rec, tax_config = _load_inputs(record, config, json_out)
    try:
        validate_optimization_inputs(rec, step)
        rows = _scan_rows(rec, tax_config, step)
    except Exception as e:
        _handle_json_error(e, json_out)

    if json_out:
        print(json.dumps(_create_json_response({"rows": rows}), indent=2))
        return

    with open(out, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)
    rprint({"saved": out, "rows": len(rows)})


@app.command()
def plot(
    record: str = typer.Option(..., "--record", "-r", help=RECORD_HELP),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help=CONFIG_HELP),
    step: float = typer.Option(DEFAULT_STEP, help="Amount moved from bonus into salary per step"),
    out: str = typer.Option("curve.png"),
    annotate: bool = typer.Option(True, help="Mark the optimal movement on the plot"),
):
    """Plot total tax against movement."""
    rec, tax_config = _load_inputs(record, config, False)
    try:
        result = optimize_movement(rec, tax_config, step)
        rows = _scan_rows(rec, tax_config, step)
    except Exception as e:
        _handle_json_error(e, False)

    annotations = None
    if annotate:
        annotations = {
            "baseline_total": result.baseline.total,
            "best_movement": result.movement,
            "best_total": result.best.total,
            "label": f"Optimum (move {result.movement:,.0f})",
        }
    plot_curve([(r["movement"], r["total"]) for r in rows], out, annotations=annotations)
    rprint({"saved": out, "annotated": bool(annotations)})


@app.command()
def validate(
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help=CONFIG_HELP),
    json_out: bool = typer.Option(False, "--json", help="Output JSON format"),
):
    """Validate a configuration file and show its bracket tables."""
    try:
        tax_config = load_tax_config(config)
    except FileNotFoundError as e:
        _handle_json_error(e, json_out)
    except Exception as e:
        if json_out:
            error_response = _create_json_error("VALIDATION_ERROR", str(e), {"config": str(config)})
            print(json.dumps(error_response, indent=2))
        else:
            rprint({"status": "invalid", "config": str(config), "error": str(e)})
        raise typer.Exit(code=ERROR_CODES["VALIDATION_ERROR"])

    if json_out:
        data = {
            "status": "valid",
            "config": str(config),
            "salary": tax_config.salary.to_rules(),
            "year_bonus": tax_config.year_bonus.to_rules(),
        }
        print(json.dumps(_create_json_response(data), indent=2))
    else:
        console, _, _, Table = _create_console_with_imports()
        rprint({"status": "valid", "config": str(config)})
        _print_brackets(console, Table, tax_config)
