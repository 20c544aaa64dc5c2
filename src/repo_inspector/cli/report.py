"""Rich rendering of analysis reports."""

from typing import Dict

from rich.console import Console
from rich.table import Table

from ..analysis.aggregator import top_n
from ..analysis.issues import Severity
from ..analyzers.base import AnalysisReport

TOP_ENTRIES = 10

SEVERITY_STYLES = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.ERROR: "red",
    Severity.MEDIUM: "yellow",
    Severity.WARNING: "yellow",
    Severity.LOW: "cyan",
    Severity.INFO: "dim",
}


def _counts_table(title: str, label: str, counts: Dict[str, int]) -> Table:
    table = Table(title=title)
    table.add_column(label)
    table.add_column("Issues", justify="right")
    for key, count in top_n(counts, TOP_ENTRIES):
        table.add_row(key, str(count))
    return table


def _severity_table(report: AnalysisReport) -> Table:
    table = Table(title="By severity")
    table.add_column("Severity")
    table.add_column("Issues", justify="right")
    for name, count in report.summary.by_severity.items():
        style = SEVERITY_STYLES.get(Severity(name), "")
        table.add_row(f"[{style}]{name}[/]" if style else name, str(count))
    return table


def render_report(console: Console, report: AnalysisReport) -> None:
    """Print the header, severity totals and top-10 breakdowns."""
    console.print(f"[bold]Repository:[/] {report.repository} ([cyan]{report.branch}[/])")
    if report.language:
        console.print(f"[bold]Language:[/] {report.language}")
    if report.config_files:
        console.print(f"[bold]Config files:[/] {', '.join(report.config_files)}")
    console.print(
        f"[bold]Files:[/] {report.files_analyzed} analyzed "
        f"of {report.files_discovered} discovered"
    )
    if report.security_score is not None:
        color = "green" if report.security_score >= 80 else "yellow" if report.security_score >= 50 else "red"
        console.print(f"[bold]Security score:[/] [{color}]{report.security_score}/100[/]")

    console.print()
    console.print(_severity_table(report))

    if report.summary.total == 0:
        console.print("[green]✓ No issues found[/]")
        return

    console.print(_counts_table("Top files", "File", report.summary.by_file))
    console.print(_counts_table("Top rules", "Rule", report.summary.by_rule))
    console.print(_counts_table("Top categories", "Category", report.summary.by_category))
    console.print(f"\n[bold]Total:[/] {report.summary.total} issues ({report.summary.severity_summary})")


def render_critical(console: Console, report: AnalysisReport) -> None:
    """List every critical finding with its remediation."""
    critical = report.issues_with(Severity.CRITICAL)
    if not critical:
        return

    table = Table(title="Critical issues")
    table.add_column("Location")
    table.add_column("Rule")
    table.add_column("Recommendation")
    for issue in critical:
        table.add_row(
            f"{issue.file_path}:{issue.line}",
            issue.title or issue.rule_id,
            issue.recommendation or "",
        )
    console.print(table)
