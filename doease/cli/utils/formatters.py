"""Coloured output helpers for CLI commands."""

import click


def success(message: str) -> None:
    click.secho(f"✓ {message}", fg="green")


def error(message: str) -> None:
    """Errors go to stderr."""
    click.secho(f"✗ {message}", fg="red", err=True)


def warning(message: str) -> None:
    click.secho(f"⚠ {message}", fg="yellow")


def info(message: str) -> None:
    click.secho(f"ℹ {message}", fg="blue")


def header(message: str) -> None:
    click.secho(f"\n{message}", fg="cyan", bold=True)


def detail(label: str, value: object) -> None:
    """Print an aligned ``label: value`` line."""
    click.echo(f"  {click.style(f'{label:<12}', dim=True)} {value}")
