"""Landscape CLI entry point.

Provides commands for sampling declared spaces and inspecting them.
"""

import logging
import sys

import typer

from .sample import describe_command, sample_command

# Create the main app
app = typer.Typer(
    name="landscape",
    help="Deterministic hyperparameter landscapes from scrambled Sobol' sequences",
    invoke_without_command=True,
)

# Register commands directly from implementation modules
app.command("sample")(sample_command)
app.command("describe")(describe_command)


@app.command("version")
def version():
    """Show version information."""
    from .. import __version__
    typer.echo(f"landscape version {__version__}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output")
):
    """Deterministic hyperparameter landscapes from scrambled Sobol' sequences."""
    if verbose:
        logging.basicConfig(level=logging.INFO)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        typer.echo("\nError: Missing command.", err=True)
        raise typer.Exit(1)


def cli_main():
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("\nAborted", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
