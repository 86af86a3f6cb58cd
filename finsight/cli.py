"""
Command-Line Interface for FinSight.

Purpose
-------
Runs the FinSight calculators on profile files (or inline arguments) and
prints the results as Rich tables or JSON, without writing Python code.

Commands
--------
- debt: Simulate debt payoff (avalanche or snowball)
- project: Project wealth for a corpus plus monthly SIP
- health: Score a profile's financial health
- timeline: Build the cumulative goal timeline
- time-machine: Compare current vs optimized ten-year paths
- what-if: Override profile figures and compare health scores
- report: Run every calculator and emit one JSON report
- config: Validate and create profile/plan files
- info: Show version and dependency information

Example Usage
-------------
    # Payoff plan for two debts with 5,000 extra per month
    $ finsight debt --debt "Card:50000:0.36:2500" --debt "Loan:200000:0.11:6000" --extra 5000

    # Health score of a saved profile
    $ finsight health --profile profile.json

    # Full JSON report
    $ finsight report --profile profile.json --plan plan.json --output report.json

    # Show version
    $ finsight --version
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import AppSettings, PlanConfig
from .debt import Strategy, simulate_payoff
from .exceptions import FinSightError
from .health import score_health
from .profile import Debt, FinancialProfile
from .projection import RISK_PROFILES, RiskProfile, growth_curve, project_wealth
from .sandbox import simulate_what_if
from .serialization import (
    SCHEMA_VERSION,
    build_report,
    health_to_dict,
    load_plan,
    load_profile,
    payoff_to_dict,
    projection_to_dict,
    time_machine_to_dict,
    timeline_to_dict,
    what_if_to_dict,
)
from .time_machine import project_time_machine
from .timeline import aggregate_goals

# Version
__version__ = "0.1.0"

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool) -> None:
    settings = AppSettings()
    level = "DEBUG" if verbose else settings.effective_log_level
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("finsight").setLevel(level)


def _parse_debts(ctx, param, values: Tuple[str, ...]) -> List[Debt]:
    """Parse NAME:BALANCE:RATE:MIN_PAYMENT strings into Debt records."""
    debts = []
    for raw in values:
        parts = raw.split(":")
        if len(parts) != 4:
            raise click.BadParameter(
                f"expected NAME:BALANCE:RATE:MIN_PAYMENT, got {raw!r}"
            )
        name, balance, rate, min_payment = parts
        try:
            debts.append(Debt(
                name=name,
                balance=float(balance),
                annual_rate=float(rate),
                min_payment=float(min_payment),
            ))
        except ValueError:
            raise click.BadParameter(f"non-numeric value in {raw!r}") from None
    return debts


def _parse_overrides(ctx, param, values: Tuple[str, ...]) -> Dict[str, float]:
    """Parse FIELD=VALUE strings into an overrides mapping."""
    overrides = {}
    for raw in values:
        name, sep, value = raw.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected FIELD=VALUE, got {raw!r}")
        try:
            overrides[name.strip()] = float(value)
        except ValueError:
            raise click.BadParameter(f"non-numeric value in {raw!r}") from None
    return overrides


def _load_profile_or_exit(path: Path) -> FinancialProfile:
    try:
        profile = load_profile(path)
    except FinSightError as e:
        click.echo(f"Error loading profile: {e}", err=True)
        sys.exit(1)
    logger.debug("Loaded profile from %s", path)
    return profile


def _emit_json(data: Any, output: Optional[Path], quiet: bool) -> None:
    text = json.dumps(data, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text)
        if not quiet:
            click.echo(f"Results saved to {output}")
    else:
        click.echo(text)


def _money(value: float) -> str:
    return f"{value:,.0f}"


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(version=__version__, prog_name="finsight")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, quiet: bool, verbose: bool) -> None:
    """
    FinSight - Personal Finance Simulation and Scoring.

    Debt payoff simulation, wealth projection, financial health scoring
    and goal timelines for a single financial profile.

    Use 'finsight COMMAND --help' for command-specific help.
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = Console()


# ---------------------------------------------------------------------------
# debt
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--profile", "-p",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Profile file (JSON) whose debts are simulated"
)
@click.option(
    "--debt", "-d", "debts",
    multiple=True,
    callback=_parse_debts,
    help="Inline debt as NAME:BALANCE:RATE:MIN_PAYMENT (repeatable)"
)
@click.option(
    "--extra", "-e",
    type=float,
    default=0.0,
    help="Extra monthly payment above minimums (default: 0)"
)
@click.option(
    "--strategy", "-s",
    type=click.Choice([s.value for s in Strategy]),
    default=Strategy.AVALANCHE.value,
    help="Payment ordering (default: avalanche)"
)
@click.option("--compare", is_flag=True, help="Show both strategies side by side")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write JSON result to this file"
)
@click.pass_context
def debt(
    ctx: click.Context,
    profile: Optional[Path],
    debts: List[Debt],
    extra: float,
    strategy: str,
    compare: bool,
    as_json: bool,
    output: Optional[Path],
) -> None:
    """
    Simulate debt payoff.

    Runs the month-by-month payoff simulation with the chosen extra
    payment, alongside a zero-extra baseline run with the same strategy.

    Example:
        finsight debt -d "Card:50000:0.18:2000" --extra 3000 --compare
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    all_debts = list(debts)
    if profile:
        all_debts = list(_load_profile_or_exit(profile).debts) + all_debts
    if not all_debts:
        click.echo("Error: No debts given (use --profile or --debt)", err=True)
        sys.exit(1)

    strategies = [Strategy.AVALANCHE, Strategy.SNOWBALL] if compare else [Strategy.parse(strategy)]
    results = {s: simulate_payoff(all_debts, extra, s) for s in strategies}
    baselines = {s: simulate_payoff(all_debts, 0.0, s) for s in strategies}

    if as_json or output:
        data = {s.value: payoff_to_dict(r) for s, r in results.items()}
        data["baseline"] = {
            s.value: payoff_to_dict(b, include_history=False) for s, b in baselines.items()
        }
        data["savings"] = {
            s.value: {
                "months_saved": baselines[s].months_to_payoff - r.months_to_payoff,
                "interest_saved": baselines[s].total_interest_paid - r.total_interest_paid,
            }
            for s, r in results.items()
        }
        _emit_json(data, output, quiet)
        return

    table = Table(title="Debt Payoff", show_header=True)
    table.add_column("Metric", style="cyan")
    for s in results:
        table.add_column(s.value.title(), style="green", justify="right")

    table.add_row("Debts", *[str(len(all_debts)) for _ in results])
    table.add_row("Extra / month", *[_money(extra) for _ in results])
    table.add_row("Months", *[str(r.months_to_payoff) for r in results.values()])
    table.add_row("Interest", *[_money(r.total_interest_paid) for r in results.values()])
    table.add_row("Remaining", *[_money(r.remaining_balance) for r in results.values()])
    table.add_row(
        "Months saved",
        *[str(baselines[s].months_to_payoff - r.months_to_payoff) for s, r in results.items()],
    )
    table.add_row(
        "Interest saved",
        *[_money(baselines[s].total_interest_paid - r.total_interest_paid) for s, r in results.items()],
    )
    console.print(table)

    if not quiet and any(r.hit_month_cap for r in results.values()):
        console.print(
            "[yellow]Payments do not clear the debts within 30 years; "
            "increase the monthly payment.[/yellow]"
        )


# ---------------------------------------------------------------------------
# project
# ---------------------------------------------------------------------------

@main.command()
@click.option("--corpus", "-c", type=float, default=0.0, help="Amount invested today")
@click.option("--monthly", "-m", type=float, default=0.0, help="Monthly SIP amount")
@click.option("--years", "-y", type=float, default=5.0, help="Horizon in years (default: 5)")
@click.option(
    "--risk", "-r",
    type=click.Choice([p.value for p in RiskProfile]),
    default=RiskProfile.BALANCED.value,
    help="Risk profile (default: balanced)"
)
@click.option("--curve", is_flag=True, help="Also show the year-by-year growth curve")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def project(
    ctx: click.Context,
    corpus: float,
    monthly: float,
    years: float,
    risk: str,
    curve: bool,
    as_json: bool,
) -> None:
    """
    Project wealth.

    Closed-form projection of a lump sum plus monthly contributions under
    a fixed risk profile, in nominal and inflation-adjusted terms.

    Example:
        finsight project --monthly 5000 --years 5 --risk balanced
    """
    console = ctx.obj["console"]
    profile = RiskProfile.parse(risk)
    result = project_wealth(corpus, monthly, years, profile)

    if as_json:
        data = dict(projection_to_dict(result, profile))
        if curve:
            data["curve"] = [
                {"year": p.year, "projected_value": p.projected_value, "invested_value": p.invested_value}
                for p in growth_curve(corpus, monthly, int(years), profile)
            ]
        click.echo(json.dumps(data, indent=2))
        return

    params = RISK_PROFILES[profile]
    table = Table(title=f"Wealth Projection ({params.label})", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Annual rate", f"{result.annual_rate * 100:.1f}%")
    table.add_row("Years", f"{result.years:g}")
    table.add_row("Invested", _money(result.invested_amount))
    table.add_row("Nominal value", _money(result.nominal_value))
    table.add_row("Real value", _money(result.real_value))
    table.add_row("Gain", _money(result.gain))
    console.print(table)

    if curve:
        curve_table = Table(title="Growth Curve")
        curve_table.add_column("Year", justify="right")
        curve_table.add_column("Projected", justify="right")
        curve_table.add_column("Invested", justify="right")
        for p in growth_curve(corpus, monthly, int(years), profile):
            curve_table.add_row(str(p.year), _money(p.projected_value), _money(p.invested_value))
        console.print(curve_table)


# ---------------------------------------------------------------------------
# health
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--profile", "-p",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Profile file (JSON)"
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def health(ctx: click.Context, profile: Path, as_json: bool) -> None:
    """
    Score financial health.

    Example:
        finsight health -p profile.json
    """
    console = ctx.obj["console"]
    score = score_health(_load_profile_or_exit(profile))

    if as_json:
        click.echo(json.dumps(health_to_dict(score), indent=2))
        return

    table = Table(title=f"Financial Health: {score.total_score}/100", show_header=True)
    table.add_column("Factor", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Status")
    for f in score.breakdown:
        table.add_row(f.label, f"{f.score:.0f}", f"{f.weight * 100:.0f}%", f.status)
    if score.stability_bonus:
        table.add_row("Stability bonus", f"+{score.stability_bonus:.1f}", "", "")
    console.print(table)


# ---------------------------------------------------------------------------
# timeline
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--profile", "-p",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Profile file (JSON)"
)
@click.option(
    "--contribution",
    type=float,
    default=None,
    help="Monthly savings contribution (default: profile surplus)"
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def timeline(
    ctx: click.Context,
    profile: Path,
    contribution: Optional[float],
    as_json: bool,
) -> None:
    """
    Build the cumulative goal timeline.

    Example:
        finsight timeline -p profile.json --contribution 10000
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    fp = _load_profile_or_exit(profile)
    if contribution is None:
        contribution = max(0.0, fp.monthly_surplus)

    result = aggregate_goals(
        fp.savings, fp.short_term_goals, fp.long_term_goals,
        monthly_contribution=contribution,
    )

    if as_json:
        click.echo(json.dumps(timeline_to_dict(result), indent=2))
        return

    if not result.has_goals:
        if not quiet:
            click.echo("No goals with a positive target.")
        return

    table = Table(title=f"Goal Timeline ({result.progress:.0f}% of {_money(result.total_target)})")
    table.add_column("Goal", style="cyan")
    table.add_column("Type")
    table.add_column("Cumulative", justify="right")
    table.add_column("Position", justify="right")
    table.add_column("Reached")
    table.add_column("Projected")
    for m in result.milestones:
        table.add_row(
            m.title,
            m.goal_type.value,
            _money(m.cumulative_target),
            f"{m.position_percent:.0f}%",
            "Yes" if m.is_reached else "No",
            m.projected_date.isoformat() if m.projected_date else "-",
        )
    console.print(table)


# ---------------------------------------------------------------------------
# time-machine
# ---------------------------------------------------------------------------

@main.command("time-machine")
@click.option(
    "--profile", "-p",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Profile file (JSON)"
)
@click.option("--years", "-y", type=click.IntRange(1, 50), default=10, help="Horizon (default: 10)")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def time_machine(ctx: click.Context, profile: Path, years: int, as_json: bool) -> None:
    """
    Compare current habits with an optimized budget.

    Example:
        finsight time-machine -p profile.json --years 10
    """
    console = ctx.obj["console"]
    result = project_time_machine(_load_profile_or_exit(profile), years=years)

    if as_json:
        click.echo(json.dumps(time_machine_to_dict(result), indent=2))
        return

    table = Table(title="Time Machine", show_header=True)
    table.add_column("Year", justify="right")
    table.add_column("Current", justify="right")
    table.add_column("Optimized", style="green", justify="right")
    for current, optimized in zip(result.current_path, result.optimized_path):
        table.add_row(str(current.year), _money(current.net_worth), _money(optimized.net_worth))
    console.print(table)
    console.print(
        f"Savings unlocked: {_money(result.monthly_savings_unlocked)}/month, "
        f"wealth gap: {_money(result.wealth_gap)}"
    )


# ---------------------------------------------------------------------------
# what-if
# ---------------------------------------------------------------------------

@main.command("what-if")
@click.option(
    "--profile", "-p",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Profile file (JSON)"
)
@click.option(
    "--set", "-s", "overrides",
    multiple=True,
    callback=_parse_overrides,
    help="Override as FIELD=VALUE (repeatable), e.g. monthly_income=90000"
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def what_if(ctx: click.Context, profile: Path, overrides: Dict[str, float], as_json: bool) -> None:
    """
    Try changed profile figures.

    Recomputes the health score and goal timeline with the overrides
    applied and compares them with the saved profile.

    Example:
        finsight what-if -p profile.json --set monthly_income=90000 --set total_expenses=30000
    """
    console = ctx.obj["console"]
    fp = _load_profile_or_exit(profile)
    try:
        result = simulate_what_if(fp, overrides)
    except FinSightError as e:
        raise click.BadParameter(str(e), param_hint="'--set'") from None

    if as_json:
        click.echo(json.dumps(what_if_to_dict(result), indent=2))
        return

    table = Table(
        title=f"What If: {result.baseline_health.total_score} -> {result.health.total_score}",
        show_header=True,
    )
    table.add_column("Factor", style="cyan")
    table.add_column("Before", justify="right")
    table.add_column("After", style="green", justify="right")
    table.add_column("Status")
    for before, after in zip(result.baseline_health.breakdown, result.health.breakdown):
        table.add_row(after.label, f"{before.score:.0f}", f"{after.score:.0f}", after.status)
    console.print(table)

    if result.has_changes:
        console.print(f"Changed: {', '.join(sorted(result.changed_fields))}")
    else:
        console.print("No changes from the saved profile.")
    if result.timeline.has_goals:
        reached = sum(1 for m in result.timeline.milestones if m.is_reached)
        console.print(f"Goals reached: {reached}/{len(result.timeline.milestones)}")


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--profile", "-p",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Profile file (JSON)"
)
@click.option(
    "--plan",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Plan file (JSON) with what-if parameters"
)
@click.option("--no-history", is_flag=True, help="Omit month-by-month payoff history")
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file (default: print to stdout)"
)
@click.pass_context
def report(
    ctx: click.Context,
    profile: Path,
    plan: Optional[Path],
    no_history: bool,
    output: Optional[Path],
) -> None:
    """
    Generate a combined JSON report.

    Example:
        finsight report -p profile.json --plan plan.json -o report.json
    """
    quiet = ctx.obj["quiet"]
    fp = _load_profile_or_exit(profile)

    try:
        plan_config = load_plan(plan) if plan else PlanConfig()
    except FinSightError as e:
        click.echo(f"Error loading plan: {e}", err=True)
        sys.exit(1)

    data = build_report(fp, plan_config, include_history=not no_history)
    _emit_json(data, output, quiet)


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------

@main.group()
def config() -> None:
    """
    Configuration management commands.

    Validate and create profile and plan files.
    """
    pass


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--kind", "-k",
    type=click.Choice(["profile", "plan"]),
    default="profile",
    help="File type (default: profile)"
)
@click.pass_context
def config_validate(ctx: click.Context, config_file: Path, kind: str) -> None:
    """
    Validate a profile or plan file.

    Example:
        finsight config validate profile.json
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    try:
        loaded = load_profile(config_file) if kind == "profile" else load_plan(config_file)
    except FinSightError as e:
        click.echo(f"Configuration validation failed: {e}", err=True)
        sys.exit(1)

    if quiet:
        return

    if kind == "profile":
        info = (
            "[bold]Profile Valid[/bold]\n\n"
            f"[cyan]Income:[/cyan] {_money(loaded.income)}\n"
            f"[cyan]Expenses:[/cyan] {_money(loaded.total_expenses)}\n"
            f"[cyan]Savings:[/cyan] {_money(loaded.savings)}\n"
            f"[cyan]Debts:[/cyan] {len(loaded.debts)}\n"
            f"[cyan]Goals:[/cyan] {len(loaded.all_goals)}"
        )
    else:
        info = (
            "[bold]Plan Valid[/bold]\n\n"
            f"[cyan]Strategy:[/cyan] {loaded.strategy}\n"
            f"[cyan]Extra payment:[/cyan] {_money(loaded.extra_monthly_payment)}\n"
            f"[cyan]Risk profile:[/cyan] {loaded.risk_profile}\n"
            f"[cyan]Years:[/cyan] {loaded.years}"
        )
    console.print(Panel(info, title="Configuration Summary", border_style="green"))


@config.command("create")
@click.argument("output_file", type=click.Path(path_type=Path))
@click.option("--template", "-t", type=click.Choice(["profile", "plan"]), default="profile")
@click.pass_context
def config_create(ctx: click.Context, output_file: Path, template: str) -> None:
    """
    Create a starter profile or plan file.

    Example:
        finsight config create my_profile.json --template profile
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    if template == "profile":
        config_data = {
            "schema_version": SCHEMA_VERSION,
            "monthly_income": 80000,
            "expenses": {
                "rent": 20000,
                "food": 8000,
                "transportation": 3000,
                "utilities": 2000,
                "other": 5000
            },
            "current_savings": 150000,
            "savings_goal": 300000,
            "monthly_budget": 40000,
            "short_term_goals": [
                {"id": "g1", "title": "Emergency fund", "target_amount": 120000, "category": "emergency"}
            ],
            "long_term_goals": [
                {"id": "g2", "title": "House down payment", "target_amount": 1000000, "category": "purchase"}
            ],
            "debts": [
                {"id": "d1", "name": "Credit card", "balance": 50000, "annual_rate": 0.36,
                 "min_payment": 2500, "category": "credit_card"},
                {"id": "d2", "name": "Car loan", "balance": 200000, "annual_rate": 0.11,
                 "min_payment": 6000, "category": "car_loan"}
            ]
        }
    else:  # plan
        config_data = {
            "schema_version": SCHEMA_VERSION,
            "extra_monthly_payment": 5000,
            "strategy": "avalanche",
            "risk_profile": "balanced",
            "years": 10,
            "monthly_investment": 10000
        }

    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w") as f:
        json.dump(config_data, f, indent=2)

    if not quiet:
        console.print(f"[green]Created {template} file: {output_file}[/green]")


# ---------------------------------------------------------------------------
# info
# ---------------------------------------------------------------------------

@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display system and package information.

    Shows version numbers and installed dependencies.
    """
    console = ctx.obj["console"]

    info_lines = [
        f"FinSight Version: {__version__}",
        f"Schema Version: {SCHEMA_VERSION}",
        f"Python: {sys.version.split()[0]}",
    ]

    for name in ("numpy", "pandas", "pydantic", "rich", "click"):
        try:
            mod = __import__(name)
            version = getattr(mod, "__version__", "installed")
            info_lines.append(f"{name}: {version}")
        except ImportError:
            info_lines.append(f"{name}: not installed")

    console.print(Panel("\n".join(info_lines), title="System Information"))


if __name__ == "__main__":
    main()
