from typing import List, Sequence, Tuple

from rich.console import Console
from rich.table import Table
from rich.text import Text

from healthwatch.health_check import CheckDefinition


def status_word(healthy: bool) -> str:
    return 'healthy' if healthy else 'unhealthy'


def render_report(checks: Sequence[CheckDefinition], now: int) -> List[str]:
    """Plain-text status screen: header, blank line, one line per check"""
    lines = [f" {now} Checking health", ""]
    for i, check in enumerate(checks):
        lines.append(f"  {i + 1}) {check.url} is {status_word(check.healthy)}")
    return lines


class ConsoleReporter:
    """Repaints the status screen on a rich console"""

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def show(self, checks: Sequence[CheckDefinition], now: int):
        header, *lines = render_report(checks, now)
        self.console.clear()
        self.console.print(Text(header, style="bold"))
        for line in lines:
            text = Text(line)
            text.highlight_regex(r"(?<= is )healthy$", "green")
            text.highlight_regex(r"(?<= is )unhealthy$", "red")
            self.console.print(text)


def print_check_results(results: Sequence[Tuple[CheckDefinition, bool]], console: Console = None):
    """Table of one-shot probe results"""
    console = console or Console()

    table = Table(title="🩺 Health check")
    table.add_column("#", style="bold")
    table.add_column("URL", style="cyan")
    table.add_column("Timeout (s)", justify="right")
    table.add_column("Result", style="bold")

    for i, (check, ok) in enumerate(results):
        table.add_row(
            str(i + 1),
            check.url,
            str(check.timeout_sec),
            "[green]✅ OK[/green]" if ok else "[red]❌ FAIL[/red]",
        )

    console.print(table)
