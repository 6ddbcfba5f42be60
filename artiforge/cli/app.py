"""Main Typer application: registers all CLI commands.

Entry point: ``artiforge`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from artiforge.cli.commands.checksum import checksum_cmd, digest_cmd
from artiforge.cli.commands.publish import publish_cmd
from artiforge.config import ProdConfig

app = typer.Typer(
    name="artiforge",
    help="Artiforge: release checksums and container image publishing.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="checksum", help="Write a checksum manifest for files.")(checksum_cmd)
app.command(name="digest", help="Print the digest of a single file.")(digest_cmd)
app.command(name="publish", help="Build and push configured images and manifests.")(publish_cmd)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Configure logging from ``ARTIFORGE_LOG_LEVEL`` (or ``--verbose``)."""
    level = "DEBUG" if verbose else ProdConfig().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
        force=True,
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
