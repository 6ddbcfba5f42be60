"""``artiforge checksum`` and ``artiforge digest``.

``checksum`` registers each FILE as an uploadable binary and runs the
checksum pipe against it, exactly as a release run would.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from artiforge.config import ProdConfig
from artiforge.core.checksums import DEFAULT_ALGORITHM, ChecksumPipe
from artiforge.core.context import ReleaseContext
from artiforge.core.digest import SUPPORTED_ALGORITHMS, digest_file
from artiforge.core.errors import ArtiforgeError
from artiforge.models.artifacts import Artifact, ArtifactType
from artiforge.models.config import ChecksumConfig, ExtraFile, ProjectConfig

console = Console()


def checksum_cmd(
    files: list[Path] = typer.Argument(
        None,
        help="Artifact files to include in the manifest.",
    ),
    extra: list[str] = typer.Option(
        [],
        "--extra",
        "-e",
        help="Glob of extra files to include (repeatable, supports **).",
    ),
    algorithm: str = typer.Option(
        DEFAULT_ALGORITHM,
        "--algorithm",
        "-a",
        help=f"One of: {', '.join(SUPPORTED_ALGORITHMS)}.",
    ),
    name_template: str = typer.Option(
        None,
        "--name-template",
        "-n",
        help="Manifest file name template (Jinja2).",
    ),
    project: str = typer.Option("", "--project", "-p", help="Project name."),
    version: str = typer.Option("", "--version", help="Release version."),
    dist: Path = typer.Option(
        None,
        "--dist",
        "-d",
        help="Output directory (defaults to ARTIFORGE_DIST or ./dist).",
    ),
) -> None:
    """Write a checksum manifest for FILES plus any extra globs."""
    settings = ProdConfig()
    config = ProjectConfig(
        project_name=project,
        dist=dist or settings.dist,
        checksum=ChecksumConfig(
            name_template=name_template,
            algorithm=algorithm,
            extra_files=[ExtraFile(glob=g) for g in extra],
        ),
    )
    ctx = ReleaseContext(config, version=version, parallelism=settings.parallelism)
    for path in files or []:
        ctx.artifacts.add(
            Artifact(
                name=path.name,
                path=str(path.resolve()),
                type=ArtifactType.UPLOADABLE_BINARY,
            )
        )

    try:
        manifest = ChecksumPipe().run(ctx)
    except (ArtiforgeError, OSError) as exc:
        console.print(f"[bold red]Checksum failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    table = Table(title=manifest.name if manifest else "checksums")
    table.add_column("Digest", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    if manifest is not None:
        for line in Path(manifest.path).read_text(encoding="utf-8").splitlines():
            digest, name = line.split("  ", 1)
            table.add_row(digest, name)
    console.print(table)
    if manifest is not None:
        console.print(f"[dim]Wrote {manifest.path}[/dim]")


def digest_cmd(
    file: Path = typer.Argument(..., help="File to digest."),
    algorithm: str = typer.Option(
        DEFAULT_ALGORITHM,
        "--algorithm",
        "-a",
        help=f"One of: {', '.join(SUPPORTED_ALGORITHMS)}.",
    ),
) -> None:
    """Print ``<digest>  <name>`` for a single FILE."""
    try:
        digest = digest_file(file, algorithm)
    except (ArtiforgeError, OSError) as exc:
        console.print(f"[bold red]Digest failed:[/bold red] {exc}")
        raise typer.Exit(code=1)
    console.print(f"{digest}  {file.name}", highlight=False)
