"""Typer-based CLI for Threshold Lab."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

app = typer.Typer(
    name="threshold-lab", help="Threshold Lab: explore confusion matrices, ROC and PR curves."
)


def _version_callback(value: bool) -> None:
    if value:
        from threshold_lab import __version__

        typer.echo(f"Threshold Lab {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Threshold Lab: explore confusion matrices, ROC and PR curves."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )
    from threshold_lab.config import get_settings

    get_settings().validate_startup()


def _default_samples() -> int:
    from threshold_lab.config import get_settings

    return get_settings().total_samples


def _emit_snapshot(snapshot, output_format: str) -> None:
    from threshold_lab.display import format_summary

    if output_format == "json":
        typer.echo(json.dumps(snapshot.to_jsonable(), indent=2))
    else:
        typer.echo(format_summary(snapshot))


def _fail_validation(exc: ValidationError) -> None:
    typer.echo(f"Invalid input:\n{exc}", err=True)
    raise typer.Exit(code=2)


@app.command()
def run(
    spec: str = typer.Argument(..., help="Path to an evaluation spec JSON file."),
    output_format: str = typer.Option(
        "table", "--format", "-f", help="Output format: table or json."
    ),
) -> None:
    """Evaluate a spec file (simulation or manual mode)."""
    from threshold_lab.engine import evaluate_spec
    from threshold_lab.spec import load_evaluation_spec

    spec_dict = json.loads(Path(spec).read_text(encoding="utf-8"))
    try:
        parsed = load_evaluation_spec(spec_dict)
    except ValidationError as exc:
        _fail_validation(exc)
    _emit_snapshot(evaluate_spec(parsed), output_format)


@app.command()
def simulate(
    separation: float = typer.Option(0.4, "--separation", "-s", help="Distance between class means."),
    noise: float = typer.Option(0.15, "--noise", "-n", help="Shared standard deviation."),
    balance: float = typer.Option(0.5, "--balance", "-b", help="Positive fraction."),
    threshold: float = typer.Option(0.5, "--threshold", "-t", help="Decision threshold."),
    samples: Optional[int] = typer.Option(None, "--samples", help="Population size."),
    output_format: str = typer.Option(
        "table", "--format", "-f", help="Output format: table or json."
    ),
) -> None:
    """Confusion matrix and metrics from two simulated score distributions."""
    from threshold_lab.engine import Simulated, evaluate
    from threshold_lab.spec import SimulationSettings

    try:
        settings = SimulationSettings(separation=separation, noise=noise, balance=balance)
    except ValidationError as exc:
        _fail_validation(exc)
    active = Simulated(params=settings.to_params(), threshold=threshold)
    _emit_snapshot(evaluate(active, samples or _default_samples()), output_format)


@app.command()
def manual(
    tp: float = typer.Option(..., "--tp", help="True positives."),
    tn: float = typer.Option(..., "--tn", help="True negatives."),
    fp: float = typer.Option(..., "--fp", help="False positives."),
    fn: float = typer.Option(..., "--fn", help="False negatives."),
    output_format: str = typer.Option(
        "table", "--format", "-f", help="Output format: table or json."
    ),
) -> None:
    """Metrics from raw counts, with distributions fitted to reproduce them."""
    from threshold_lab.engine import Manual, evaluate
    from threshold_lab.spec import CountsSpec

    try:
        counts = CountsSpec(tp=tp, tn=tn, fp=fp, fn=fn)
    except ValidationError as exc:
        _fail_validation(exc)
    counts_model = counts.to_counts()
    # Curve counts are scaled to the entered population.
    _emit_snapshot(evaluate(Manual(counts=counts_model), counts_model.total or 1), output_format)


@app.command()
def curves(
    separation: float = typer.Option(0.4, "--separation", "-s"),
    noise: float = typer.Option(0.15, "--noise", "-n"),
    balance: float = typer.Option(0.5, "--balance", "-b"),
    samples: Optional[int] = typer.Option(None, "--samples", help="Population size."),
    start: float = typer.Option(0.0, "--start", help="First threshold of the sweep."),
    stop: float = typer.Option(1.0, "--stop", help="Last threshold of the sweep."),
    step: float = typer.Option(0.01, "--step", help="Sweep step."),
    csv: Optional[Path] = typer.Option(None, "--csv", help="Write sweep points to CSV."),
) -> None:
    """ROC / PR curve AUCs, optionally exporting the sweep."""
    from threshold_lab.analysis.curves import generate_curves
    from threshold_lab.cli_format import fmt
    from threshold_lab.spec import SimulationSettings

    try:
        settings = SimulationSettings(separation=separation, noise=noise, balance=balance)
    except ValidationError as exc:
        _fail_validation(exc)
    try:
        curve_set = generate_curves(
            settings.to_params(),
            samples or _default_samples(),
            start=start,
            stop=stop,
            step=step,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc))

    typer.echo(f"ROC AUC = {fmt(curve_set.roc_auc)}")
    typer.echo(f"PR AUC = {fmt(curve_set.pr_auc)}")
    if csv is not None:
        curve_set.to_frame().to_csv(csv, index=False)
        typer.echo(f"Wrote {len(curve_set.roc_points)} points to {csv}")


# --- Catalog subcommands ---

metrics_app = typer.Typer(help="List available metrics.")
app.add_typer(metrics_app, name="metrics")


@metrics_app.command("list")
def metrics_list() -> None:
    """List metric IDs with their formulas."""
    from threshold_lab.cli_format import format_table
    from threshold_lab.metrics.core import METRIC_FORMULAS, list_metrics

    rows = [[mid, METRIC_FORMULAS[mid]] for mid in list_metrics()]
    typer.echo(format_table(rows, ["metric", "formula"]))


# --- Scenario subcommands ---

scenario_app = typer.Typer(help="Generate narrative scenarios.")
app.add_typer(scenario_app, name="scenario")


@scenario_app.command("generate")
def scenario_generate(
    topic: str = typer.Argument(..., help="Topic, e.g. 'credit card fraud'."),
    output_format: str = typer.Option(
        "table", "--format", "-f", help="Output format: table or json."
    ),
) -> None:
    """Generate a scenario (falls back to a built-in one on failure)."""
    from threshold_lab.display import format_scenario
    from threshold_lab.scenarios.provider import LLMScenarioProvider

    scenario = LLMScenarioProvider().generate(topic)
    if output_format == "json":
        typer.echo(scenario.model_dump_json(by_alias=True, indent=2))
    else:
        typer.echo(format_scenario(scenario))


@scenario_app.command("show")
def scenario_show() -> None:
    """Show the default scenario."""
    from threshold_lab.display import format_scenario
    from threshold_lab.scenarios.presets import DEFAULT_SCENARIO

    typer.echo(format_scenario(DEFAULT_SCENARIO))


@app.command()
def explain(
    concept: str = typer.Argument(..., help="Metric or parameter name, e.g. 'precision'."),
    topic: Optional[str] = typer.Option(
        None, "--topic", "-t", help="Generate a scenario for this topic first."
    ),
) -> None:
    """Explain a metric or parameter in the context of a scenario.

    Uses the default scenario unless --topic is given.
    """
    from threshold_lab.scenarios.presets import DEFAULT_SCENARIO
    from threshold_lab.scenarios.provider import LLMScenarioProvider

    provider = LLMScenarioProvider()
    scenario = provider.generate(topic) if topic else DEFAULT_SCENARIO
    typer.echo(f"Scenario: {scenario.topic}")
    typer.echo(provider.explain(concept, scenario))


if __name__ == "__main__":
    app()
