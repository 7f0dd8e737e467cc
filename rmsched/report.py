"""Plain-text rendering of an analysis report."""

import math
from typing import List

from rmsched.models import AnalysisReport, RTAState

TABLE_HEADER = ("Task", "Period (p)", "Exec (e)", "WCRT (w)", "Iter")


def format_bound(bound: float) -> str:
    return "n/a" if math.isinf(bound) else f"{bound:.4f}"


def format_table(report: AnalysisReport) -> List[str]:
    """Return the WCRT and iteration-count table rows (priority order) including the header."""
    rows = [TABLE_HEADER]
    for result in report.results:
        wcrt = "-" if result.response_time is None else str(result.response_time)
        # Tasks never reached after an earlier exceedance have no iteration count
        iters = "-" if result.state is RTAState.INITIAL else str(result.iterations)
        rows.append((result.name, str(result.period), str(result.execution_time), wcrt, iters))

    widths = [max(len(row[col]) for row in rows) for col in range(len(TABLE_HEADER))]
    return ["  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip() for row in rows]


def format_report(report: AnalysisReport) -> str:
    """Render utilization, both verdicts and the per-task WCRT table."""
    lines = [f"Utilization: {report.utilization:.4f}, Liu & Layland bound: {format_bound(report.bound)}"]
    if report.liu_layland_schedulable:
        lines.append("Liu & Layland: schedulable")
    else:
        lines.append("Liu & Layland: schedulability not guaranteed")
    lines.append("RTA: schedulable" if report.rta_schedulable else "RTA: not schedulable")
    lines.append("")
    lines.extend(format_table(report))
    return "\n".join(lines)
