"""Release context: everything a pipe needs for one release run."""

from __future__ import annotations

import os
from pathlib import Path

from artiforge.core.artifact_registry import ArtifactRegistry
from artiforge.core.templates import TemplateRenderer
from artiforge.models.config import ProjectConfig


class ReleaseContext:
    """State shared by the pipes of a single release run.

    Parameters
    ----------
    config:
        Project configuration. Pipes may replace it with a defaulted copy.
    version:
        Release version, without a leading ``v``.
    tag:
        Git tag; defaults to ``v<version>``.
    env:
        Template environment. Defaults to the process environment overlaid
        with ``config.env``.
    working_dir:
        Directory against which relative globs and paths resolve.
    parallelism:
        Upper bound on worker threads a pipe may use.
    """

    def __init__(
        self,
        config: ProjectConfig | None = None,
        *,
        version: str = "",
        tag: str | None = None,
        commit: str = "",
        env: dict[str, str] | None = None,
        artifacts: ArtifactRegistry | None = None,
        working_dir: Path | None = None,
        parallelism: int = 4,
    ) -> None:
        self.config = config or ProjectConfig()
        self.version = version
        self.tag = tag if tag is not None else (f"v{version}" if version else "")
        self.commit = commit
        if env is None:
            env = {**os.environ, **self.config.env}
        self.env = env
        self.artifacts = artifacts or ArtifactRegistry()
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()
        self.parallelism = max(1, parallelism)

    @property
    def dist(self) -> Path:
        """Output directory, resolved against the working directory."""
        return self.working_dir / self.config.dist

    def renderer(self) -> TemplateRenderer:
        """A template renderer bound to this release's fields."""
        return TemplateRenderer(
            {
                "project_name": self.config.project_name,
                "version": self.version,
                "tag": self.tag,
                "commit": self.commit,
                "env": self.env,
            }
        )

    def resolve(self, path: str | Path) -> Path:
        """Resolve *path* against the working directory."""
        return self.working_dir / path
