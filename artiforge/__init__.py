"""Artiforge: release artifact verification and container publishing.

  - Checksum manifests over build artifacts and extra files, refreshable
    in place (crc32, md5, sha1, sha224, sha256, sha384, sha512)
  - Image build (docker / buildx), push with digest extraction
  - Multi-platform manifest list composition
"""

__version__ = "0.1.0"
__description__ = "Release artifact checksums and container image publishing"

from artiforge.core.artifact_registry import ArtifactRegistry
from artiforge.core.checksums import ChecksumPipe
from artiforge.core.context import ReleaseContext
from artiforge.docker.pipe import DockerManifestPipe, DockerPipe

__all__ = [
    "ArtifactRegistry",
    "ChecksumPipe",
    "DockerManifestPipe",
    "DockerPipe",
    "ReleaseContext",
    "__version__",
]
