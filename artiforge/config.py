"""Process settings: env-driven via pydantic-settings.

Reads from a ``.env`` file and ``ARTIFORGE_*`` environment variables.
Project-specific settings (checksums, images, manifests) live in
``artiforge.models.config.ProjectConfig`` instead.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ProdConfig(BaseSettings):
    """Process-level configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export ARTIFORGE_LOG_LEVEL=DEBUG
        export ARTIFORGE_PARALLELISM=8
        export ARTIFORGE_DOCKER_BINARY=podman
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ARTIFORGE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    config_file: Path = Path("artiforge.toml")
    dist: Path = Path("dist")

    # Worker threads for digests and image targets
    parallelism: int = 4

    docker_binary: str = "docker"
