import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from healthwatch.config_loader import ConfigError, ConfigLoader
from healthwatch.health_check import HealthCheck
from healthwatch.registry import CheckRegistry
from healthwatch.reporter import ConsoleReporter, print_check_results
from healthwatch.scheduler import Monitor

console = Console()


def load_checks(config, strict=False):
    loader = ConfigLoader(config, strict=strict)
    try:
        checks = loader.load()
    except ConfigError as e:
        console.print(f"[red]❌ {e}[/red]", soft_wrap=True)
        sys.exit(1)

    for warning in loader.warnings:
        console.print(f"[yellow]⚠️ {warning}[/yellow]", soft_wrap=True)
    return checks


@click.group()
@click.option('--log-level', '-l', default='WARNING',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Log level')
def cli(log_level):
    """🩺 healthwatch - active HTTP health monitoring"""
    logging.basicConfig(
        level=log_level.upper(),
        format='%(message)s',
        handlers=[RichHandler(console=console, show_path=False)],
    )


@cli.command()
@click.argument('config', type=click.Path(dir_okay=False))
@click.option('--strict', is_flag=True, help='Treat configuration warnings as errors')
def run(config, strict):
    """Poll every check on its interval and repaint the status each second"""
    checks = load_checks(config, strict)
    monitor = Monitor(CheckRegistry(checks), ConsoleReporter(console))
    try:
        monitor.run()
    except KeyboardInterrupt:
        monitor.stop()
        console.print("\n🛑 Monitoring stopped")
        sys.exit(1)


@cli.command()
@click.argument('config', type=click.Path(dir_okay=False))
def check(config):
    """Probe every check once"""
    checks = load_checks(config)
    results = [(c, HealthCheck(c).check()) for c in checks]
    print_check_results(results, console)
    if not all(ok for _, ok in results):
        sys.exit(1)


@cli.command()
@click.argument('config', type=click.Path(dir_okay=False))
@click.option('--strict', is_flag=True, help='Treat configuration warnings as errors')
def validate(config, strict):
    """Validate a configuration file without probing"""
    checks = load_checks(config, strict)
    for i, c in enumerate(checks):
        console.print(f"  {i + 1}) {c.url} every {c.check_interval_sec}s, timeout {c.timeout_sec}s")
    console.print(f"[green]✅ {len(checks)} check(s) OK[/green]")


if __name__ == "__main__":
    cli()
