"""Record analysis command."""

import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.markup import escape

from tradestats.cli.ui.formatters import (
    create_drawdown_table,
    create_liquidation_table,
    create_market_table,
    create_risk_table,
    create_summary_table,
)
from tradestats.engine import AnalysisConfig, assess_open_positions, compute_metrics, load_snapshot
from tradestats.system.config import reload_system_config

console = Console()


@click.command("analyze")
@click.option(
    "--file",
    "-f",
    "records_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to trading records (JSON or YAML)",
)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="System configuration file (default: $TRADESTATS_CONFIG or config/system.yaml)",
)
@click.option("--confidence", type=float, help="Override VaR/CVaR confidence level (e.g., 0.99)")
@click.option(
    "--var-method",
    type=click.Choice(["historical", "parametric", "montecarlo"], case_sensitive=False),
    help="Override VaR estimator",
)
@click.option("--periods-per-year", type=float, help="Fix annualization periods instead of inferring them")
@click.option("--seed", type=int, help="Seed for Monte Carlo VaR (reproducible output)")
@click.option("--json", "as_json", is_flag=True, help="Print the metrics bundle as JSON")
@click.option(
    "--log-level",
    "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Set logging level",
)
def analyze_command(
    records_file: Path,
    config_file: Optional[Path],
    confidence: Optional[float],
    var_method: Optional[str],
    periods_per_year: Optional[float],
    seed: Optional[int],
    as_json: bool,
    log_level: Optional[str],
):
    """
    Compute performance and risk metrics for a trading record file.

    Analysis defaults come from the system configuration; CLI options
    override them for this run only.

    \b
    Examples:
        # Tables with config defaults
        tradestats analyze --file exports/account.json

        # 99% parametric VaR on daily snapshots
        tradestats analyze -f exports/account.json --confidence 0.99 \\
            --var-method parametric --periods-per-year 365

        # Reproducible Monte Carlo VaR as JSON
        tradestats analyze -f exports/account.yaml --var-method montecarlo --seed 7 --json
    """
    try:
        system_config = reload_system_config(config_file)

        if log_level:
            from typing import Literal, cast

            from tradestats.system import LoggerFactory

            level = cast(Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], log_level.upper())
            system_config.logging.level = level
            LoggerFactory.configure(system_config.logging.to_logger_config())

        overrides: dict[str, Any] = {
            "confidence": confidence,
            "var_method": var_method.lower() if var_method else None,
            "periods_per_year": periods_per_year,
            "monte_carlo_seed": seed,
        }
        params = asdict(system_config.analysis)
        params.update({key: value for key, value in overrides.items() if value is not None})
        config = AnalysisConfig(**params)

        snapshot = load_snapshot(records_file)
        bundle = compute_metrics(snapshot, config)
        assessments = assess_open_positions(snapshot, config)

        if as_json:
            click.echo(json.dumps(bundle.as_dict(), indent=2))
            return

        console.rule("[bold blue]TradeStats Analysis[/bold blue]")
        console.print(f"  Records: [yellow]{records_file}[/yellow]")
        console.print(
            f"  Fills: [magenta]{len(snapshot.fills)}[/magenta]  "
            f"Positions: [magenta]{len(snapshot.positions)}[/magenta]  "
            f"Equity points: [magenta]{len(snapshot.equity_history)}[/magenta]"
        )
        console.print(f"  VaR: [yellow]{config.var_method}[/yellow] @ [yellow]{config.confidence:.0%}[/yellow]")
        console.print()

        console.print(create_summary_table(bundle))
        console.print(create_risk_table(bundle, config.confidence))
        if bundle.market_stats:
            console.print(create_market_table(bundle.market_stats))
        if bundle.drawdown_periods:
            console.print(create_drawdown_table(bundle.drawdown_periods))
        if assessments:
            console.print(create_liquidation_table(assessments))
        console.print()

    except Exception as e:
        console.print()
        console.print(f"[bold red]✗ Analysis failed:[/bold red] {escape(str(e))}")
        import traceback

        console.print()
        console.print(traceback.format_exc(), style="dim", markup=False)
        sys.exit(1)
