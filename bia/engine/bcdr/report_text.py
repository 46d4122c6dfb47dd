"""
Plain-text rendering of the BCDR gap report.

Produces the downloadable text form of a BCDRReport: headline
figures followed by RTO gaps, RPO gaps, shared resources, missing
dependency maps and the recovery priority list.
"""

from bia.models.bcdr import BCDRReport

from .gap_analyzer import UNSET_RTO_DISPLAY


def _hours(value: float) -> str:
    return f"{value:g}h"


def _rto_label(rto: float) -> str:
    return "Not set" if rto == UNSET_RTO_DISPLAY else _hours(rto)


def render_bcdr_report(report: BCDRReport) -> str:
    """
    Render a BCDR report as plain text.

    Args:
        report: BCDR gap report

    Returns:
        Multi-line report text ending with a newline
    """
    lines = [
        "BCDR GAP ANALYSIS",
        "",
        f"BCDR Readiness Score: {report.readiness_score}%",
        f"Critical Issues: {report.critical_issues}",
        f"Warnings: {report.warnings}",
        "",
        "RTO GAPS:",
    ]
    lines.extend(
        f"- {g.process_name} needs {_hours(g.process_rto)}, but {g.resource_name} "
        f"has RTO of {_hours(g.resource_rto)} (Gap: {_hours(g.gap)})"
        for g in report.rto_gaps
    )

    lines += ["", "RPO GAPS:"]
    lines.extend(
        f"- {g.process_name} needs RPO {_hours(g.process_rpo)}, but {g.resource_name} "
        f"has RPO of {_hours(g.resource_rpo)} (Gap: {_hours(g.gap)})"
        for g in report.rpo_gaps
    )

    lines += ["", "SINGLE POINTS OF FAILURE:"]
    lines.extend(
        f"- {s.resource_name} affects {s.process_count} processes: {', '.join(s.processes)}"
        for s in report.single_points_of_failure
    )

    if report.missing_dependencies:
        lines += ["", "MISSING DEPENDENCY MAPS:"]
        lines.extend(f"- {m.process_name}" for m in report.missing_dependencies)

    lines += ["", "RECOVERY PRIORITY:"]
    lines.extend(
        f"{rank}. {p.process_name} ({p.criticality.value}, RTO: {_rto_label(p.rto)})"
        for rank, p in enumerate(report.recovery_priority, start=1)
    )

    return "\n".join(lines) + "\n"
