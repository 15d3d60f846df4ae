"""CLI entry point for route-access.

Invoked as::

    route-access [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m route_access.cli.main

Commands
--------
- check    Decide whether subjects may access a route
- rules    List the rules loaded from an access config
- version  Show version information
"""
from __future__ import annotations

import sys
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from route_access.access import Access
from route_access.config.loader import AccessConfigError, ConfigLoader
from route_access.routes.table import UnknownAliasError

console = Console()
err_console = Console(stderr=True)

_DEFAULT_CONFIG = Path("access.yaml")


def _load_access(config_path: str) -> Access:
    """Build an engine from *config_path*, exiting with status 2 on errors."""
    try:
        return ConfigLoader().load(config_path).build()
    except (AccessConfigError, UnknownAliasError) as exc:
        err_console.print(f"[red]Invalid access config:[/red] {escape(str(exc))}")
        sys.exit(2)


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="route-access")
def cli() -> None:
    """Route Access CLI — evaluate route-based access rules."""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from route_access import __version__

    console.print(
        Panel(
            f"[bold]route-access[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Route-based access control for HTTP-style verbs and paths.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("route")
@click.option(
    "--subject",
    "-s",
    "subjects",
    multiple=True,
    help="Subject to check; repeat for several. Omit for an anonymous request.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    default=str(_DEFAULT_CONFIG),
    show_default=True,
    type=click.Path(exists=True),
    help="Path to access.yaml.",
)
def check_command(route: str, subjects: tuple[str, ...], config_path: str) -> None:
    """Decide whether SUBJECTS may access ROUTE (e.g. "PUT /blog/entry")."""
    access = _load_access(config_path)
    try:
        decision = access.decide(route, list(subjects))
    except UnknownAliasError as exc:
        err_console.print(f"[red]Invalid route:[/red] {escape(str(exc))}")
        sys.exit(2)

    status_str = "[green]GRANTED[/green]" if decision.allowed else "[red]DENIED[/red]"
    console.print(Panel(status_str, title="Access Check Result", border_style="blue"))
    console.print(f"  Route: [cyan]{escape(decision.verb + ' ' + decision.path)}[/cyan]")
    subject_str = escape(", ".join(subjects)) if subjects else "[dim]anonymous[/dim]"
    console.print(f"  Subjects: {subject_str}")
    if decision.rule is not None:
        console.print(f"  Matched rule: [bold]{escape(decision.rule.describe())}[/bold]")
    else:
        console.print(f"  Default policy: [magenta]{access.policy().value}[/magenta]")

    sys.exit(0 if decision.allowed else 1)


# ---------------------------------------------------------------------------
# rules
# ---------------------------------------------------------------------------


@cli.command(name="rules")
@click.option(
    "--config",
    "-c",
    "config_path",
    default=str(_DEFAULT_CONFIG),
    show_default=True,
    type=click.Path(exists=True),
    help="Path to access.yaml.",
)
@click.option("--subject", "-s", default=None, help="Only show rules for this subject.")
def rules_command(config_path: str, subject: str | None) -> None:
    """List the rules registered by an access config."""
    access = _load_access(config_path)
    rules = [r for r in access.rules if subject is None or r.subject == subject]

    if not rules:
        console.print("[yellow]No rules found.[/yellow]")
        console.print(f"  Default policy: [magenta]{access.policy().value}[/magenta]")
        return

    table = Table(title="Access Rules", box=box.SIMPLE)
    table.add_column("Subject", style="cyan")
    table.add_column("Verb", style="magenta")
    table.add_column("Pattern")
    table.add_column("Effect")
    for rule in sorted(rules, key=lambda r: (r.subject, r.verb, r.pattern)):
        effect = "[green]ALLOW[/green]" if rule.accept else "[red]DENY[/red]"
        table.add_row(escape(rule.subject), escape(rule.verb), escape(rule.pattern), effect)

    console.print(table)
    console.print(f"  Default policy: [magenta]{access.policy().value}[/magenta]")
    console.print(f"  Total rules: [cyan]{len(rules)}[/cyan]")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    cli()
