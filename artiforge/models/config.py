"""Project configuration models.

Loaded from ``artiforge.toml`` or the ``[tool.artiforge]`` table of
``pyproject.toml``.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from artiforge.core.errors import ConfigurationError

BuildStrategyName = Literal["docker", "buildx"]


class ExtraFile(BaseModel):
    """A glob of non-artifact files to include in a checksum manifest."""

    model_config = ConfigDict(frozen=True)

    glob: str
    name_template: str | None = None  # only valid when the glob matches one file


class ChecksumConfig(BaseModel):
    """Settings for the checksum manifest.

    ``None`` values are filled in by ``ChecksumPipe.default()``.
    """

    model_config = ConfigDict(frozen=True)

    name_template: str | None = None
    algorithm: str | None = None
    ids: list[str] = []
    extra_files: list[ExtraFile] = []
    disable: bool = False


class DockerImageConfig(BaseModel):
    """One container image target."""

    model_config = ConfigDict(frozen=True)

    id: str = "default"
    use: BuildStrategyName = "docker"
    image_templates: list[str] = []
    dockerfile: Path = Path("Dockerfile")
    ids: list[str] = []  # artifact ids copied into the build context
    build_flag_templates: list[str] = []
    push_flags: list[str] = []
    extra_files: list[str] = []
    skip_push: bool = False


class DockerManifestConfig(BaseModel):
    """A multi-platform manifest list assembled from pushed images."""

    model_config = ConfigDict(frozen=True)

    id: str = "default"
    use: Literal["docker"] = "docker"
    name_template: str
    image_templates: list[str] = []
    create_flags: list[str] = []
    push_flags: list[str] = []
    skip_push: bool = False


class ProjectConfig(BaseModel):
    """Top-level project configuration for a release run."""

    model_config = ConfigDict(frozen=True)

    project_name: str = ""
    dist: Path = Path("dist")
    env: dict[str, str] = {}
    checksum: ChecksumConfig = ChecksumConfig()
    dockers: list[DockerImageConfig] = []
    docker_manifests: list[DockerManifestConfig] = Field(default_factory=list)

    @classmethod
    def from_toml(cls, path: Path) -> ProjectConfig:
        """Load a project configuration from a TOML file.

        When *path* is a ``pyproject.toml``, the ``[tool.artiforge]`` table
        is used.

        Raises
        ------
        ConfigurationError
            If the file cannot be parsed or fails validation.
        FileNotFoundError
            If *path* does not exist.
        """
        with open(path, "rb") as fh:
            try:
                data = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigurationError(f"invalid TOML in {path}: {exc}") from exc

        if "tool" in data:
            data = data["tool"].get("artiforge", {})

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(f"invalid configuration in {path}: {exc}") from exc
