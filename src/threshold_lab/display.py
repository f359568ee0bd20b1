"""Plain-text rendering of evaluation snapshots for terminals and notebooks."""
from __future__ import annotations

from threshold_lab.cli_format import fmt, format_table
from threshold_lab.engine import Snapshot
from threshold_lab.metrics.core import METRIC_FORMULAS
from threshold_lab.scenarios.schema import Scenario


def _pct(value: float, total: float) -> str:
    if total <= 0:
        return "0%"
    return f"{value / total * 100:.1f}%"


def format_matrix(snapshot: Snapshot, scenario: Scenario | None = None) -> str:
    m = snapshot.matrix
    pos = scenario.positive_label if scenario else "Positive"
    neg = scenario.negative_label if scenario else "Negative"
    rows = [
        [f"Actual {pos}", f"TP {m.tp:.1f} ({_pct(m.tp, m.total)})", f"FN {m.fn:.1f} ({_pct(m.fn, m.total)})"],
        [f"Actual {neg}", f"FP {m.fp:.1f} ({_pct(m.fp, m.total)})", f"TN {m.tn:.1f} ({_pct(m.tn, m.total)})"],
    ]
    return format_table(rows, ["", f"Predicted {pos}", f"Predicted {neg}"])


def format_metrics(snapshot: Snapshot) -> str:
    values = snapshot.metrics.to_jsonable()
    rows = [[mid, fmt(values[mid]), METRIC_FORMULAS[mid]] for mid in values]
    return format_table(rows, ["metric", "value", "formula"])


def format_summary(snapshot: Snapshot, scenario: Scenario | None = None) -> str:
    p = snapshot.params
    lines = [
        f"Mode: {snapshot.mode}",
        f"Threshold: {fmt(snapshot.threshold)}",
        f"Separation: {fmt(p.separation)}  Noise: {fmt(p.noise)}  Balance: {fmt(p.balance)}",
    ]
    if scenario is not None:
        lines.insert(0, f"Scenario: {scenario.topic}")
    lines.append("")
    lines.append(format_matrix(snapshot, scenario))
    lines.append("")
    lines.append(format_metrics(snapshot))
    lines.append("")
    lines.append(
        f"ROC AUC = {fmt(snapshot.curves.roc_auc)}  PR AUC = {fmt(snapshot.curves.pr_auc)}"
    )
    return "\n".join(lines)


def format_scenario(scenario: Scenario) -> str:
    lines = [
        f"Topic: {scenario.topic}",
        f"Positive: {scenario.positive_label}",
        f"Negative: {scenario.negative_label}",
        f"Description: {scenario.description}",
        f"False positive: {scenario.fp_consequence}",
        f"False negative: {scenario.fn_consequence}",
    ]
    if scenario.simulation is not None:
        s = scenario.simulation
        lines.append(
            f"Suggested: separation={fmt(s.separation, 2)} noise={fmt(s.noise, 2)}"
            f" balance={fmt(s.balance, 2)}"
        )
    return "\n".join(lines)
