"""Plain text console output for the monthly reports."""

from rich.console import Console as RichConsole
from rich.markup import escape

from contrib_stats.date_range import DateRange
from contrib_stats.models.issue import RepoIssueStats
from contrib_stats.models.report import AuthorReport, IssueReport


class Console:
    """Wrapper for rich console output."""

    def __init__(self, console: RichConsole | None = None):
        self.console = console or RichConsole(soft_wrap=True, highlight=False, emoji=False)

    def print_line(self, text: str):
        """Print report data verbatim (no markup)."""
        self.console.print(text, markup=False)

    def print_error(self, message: str):
        """Print error message."""
        self.console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str):
        """Print warning message."""
        self.console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_header(self, month: int, year: int, date_range: DateRange):
        """Print the analysis header."""
        self.print_line(f"Analyzing repositories for the month of {month}, {year}")
        self.print_line(f"Year begins: {date_range.year_start.isoformat()}")
        self.print_line(
            f"Analysis range: {date_range.range_start.isoformat()} - "
            f"{date_range.range_end.isoformat()}"
        )

    def print_repo_stats(self, stats: RepoIssueStats):
        """Print commit count and issue/PR counts of one repository."""
        self.print_line(f"Repo {stats.repo}")
        self.print_line(f"# Commits: {stats.commits}")
        self.print_line(f"Issues: {stats.issues}")
        self.print_line(f"PRs: {stats.prs}")

    def print_failures(self, failures: dict[str, str]):
        for repo, message in failures.items():
            self.print_warning(f"{repo} omitted from report: {message}")

    def print_issue_report(self, report: IssueReport):
        """Print issue/PR statistics, one block per repository."""
        for stats in report.repos:
            self.print_repo_stats(stats)
        self.print_failures(report.failures)

    def print_author_report(self, report: AuthorReport):
        """Print active contributors, then the new ones among them."""
        roster = report.roster

        self.print_line(f"Contributions by ({len(roster.active)}):")
        for name in roster.active:
            self.print_line(f"* {name}")

        self.print_line(
            f"Of these, {len(roster.new)} are new contributors for {report.date_range.year}:"
        )
        for name in roster.new:
            self.print_line(f"* {name}")

        self.print_failures(report.failures)
