"""``artiforge publish``: build, push and compose container images.

Reads image and manifest targets from the project config file, then runs
the docker pipe followed by the manifest pipe.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from artiforge.config import ProdConfig
from artiforge.core.context import ReleaseContext
from artiforge.core.errors import ArtiforgeError
from artiforge.docker.pipe import DockerManifestPipe, DockerPipe
from artiforge.docker.runner import CommandRunner
from artiforge.models.config import ProjectConfig

console = Console()


def publish_cmd(
    config_file: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Project config (defaults to ARTIFORGE_CONFIG_FILE or artiforge.toml).",
    ),
    version: str = typer.Option("", "--version", help="Release version."),
    tag: str = typer.Option(None, "--tag", help="Git tag (defaults to v<version>)."),
) -> None:
    """Build and push every configured image, then its manifest lists."""
    settings = ProdConfig()
    path = config_file or settings.config_file

    try:
        config = ProjectConfig.from_toml(path)
    except FileNotFoundError:
        console.print(f"[bold red]Config not found:[/bold red] {path}")
        raise typer.Exit(code=1)
    except ArtiforgeError as exc:
        console.print(f"[bold red]Invalid config:[/bold red] {exc}")
        raise typer.Exit(code=1)

    ctx = ReleaseContext(
        config,
        version=version,
        tag=tag,
        working_dir=Path(path).resolve().parent,
        parallelism=settings.parallelism,
    )
    runner = CommandRunner(settings.docker_binary)

    try:
        images = DockerPipe(runner=runner).run(ctx)
        manifests = DockerManifestPipe(runner=runner).run(ctx)
    except (ArtiforgeError, OSError) as exc:
        console.print(f"[bold red]Publish failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    table = Table(title="Published")
    table.add_column("Reference", style="cyan")
    table.add_column("Kind")
    table.add_column("Digest", style="green")
    for artifact in [*images, *manifests]:
        table.add_row(artifact.name, artifact.type.value, artifact.extra.digest or "-")
    console.print(table)
