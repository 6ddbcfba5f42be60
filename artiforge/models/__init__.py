"""Artiforge data models: all Pydantic v2."""

from artiforge.models.artifacts import (
    CHECKSUM_EXTRA_KEY,
    Artifact,
    ArtifactExtras,
    ArtifactType,
)
from artiforge.models.config import (
    ChecksumConfig,
    DockerImageConfig,
    DockerManifestConfig,
    ExtraFile,
    ProjectConfig,
)

__all__ = [
    # artifacts
    "CHECKSUM_EXTRA_KEY",
    "Artifact",
    "ArtifactExtras",
    "ArtifactType",
    # config
    "ChecksumConfig",
    "DockerImageConfig",
    "DockerManifestConfig",
    "ExtraFile",
    "ProjectConfig",
]
