"""Main CLI entry point for DoEase management commands."""

import click

from doease.cli.commands import jobs, server, watch
from doease.infra.logging import setup_logging


@click.group()
@click.version_option(package_name="doease-service", prog_name="doease")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """DoEase CLI - server, scheduled sweeps and the notification client.

    \b
    Command Groups:
      server     Run the API server
      jobs       Run the streak / task reminder sweeps once
      watch      Sign in and raise task start/end notifications

    \b
    Quick Start:
      doease server run --reload
      doease jobs check-streaks
      doease watch --email ada@example.com
    """
    ctx.ensure_object(dict)


cli.add_command(server.server)
cli.add_command(jobs.jobs)
cli.add_command(watch.watch)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
