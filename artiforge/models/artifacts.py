"""Artifact records shared by the checksum and container pipes."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Key under which the stored checksum appears in ``ArtifactExtras.as_dict()``.
CHECKSUM_EXTRA_KEY = "checksum"


class ArtifactType(str, Enum):
    """Kinds of build outputs tracked by the registry."""

    UPLOADABLE_BINARY = "binary"
    UPLOADABLE_ARCHIVE = "archive"
    UPLOADABLE_SOURCE_ARCHIVE = "source_archive"
    LINUX_PACKAGE = "linux_package"
    CHECKSUM = "checksum"
    DOCKER_IMAGE = "docker_image"
    DOCKER_MANIFEST = "docker_manifest"


class ArtifactExtras(BaseModel):
    """Typed side-channel metadata attached to an artifact.

    ``checksum`` is reserved for the checksum pipe and holds
    ``"<algorithm>:<hex>"``. ``digest`` holds a pushed image's
    ``sha256:<hex>`` content digest.
    """

    id: str | None = None
    checksum: str | None = None
    digest: str | None = None
    use: str | None = None

    def as_dict(self) -> dict[str, str]:
        """Return only the keys that are set."""
        return self.model_dump(exclude_none=True)


class Artifact(BaseModel):
    """A recorded build output.

    Artifacts are mutable only through ``extra`` updates made by the pipes
    and through ``refresh()``, which re-runs whatever produced the file.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    path: str
    type: ArtifactType
    extra: ArtifactExtras = Field(default_factory=ArtifactExtras)
    refresher: Callable[[], None] | None = Field(
        default=None, exclude=True, repr=False
    )

    def refresh(self) -> None:
        """Recompute the artifact's contents, if it knows how.

        Artifacts without a refresher are left untouched.
        """
        if self.refresher is not None:
            self.refresher()

    def __str__(self) -> str:
        return f"{self.type.value}:{self.name}"
