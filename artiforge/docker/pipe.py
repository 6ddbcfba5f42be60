"""Docker pipes: build → push per image target, then compose manifests.

Both pipes take their strategy tables at construction time, so tests and
alternative toolchains can swap in their own imagers and manifesters.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from artiforge.core.artifact_registry import and_, by_ids, by_type, or_
from artiforge.core.context import ReleaseContext
from artiforge.core.errors import ConfigurationError
from artiforge.docker.imager import DockerImager, default_imagers
from artiforge.docker.manifester import DockerManifester
from artiforge.docker.runner import CommandRunner, Runner
from artiforge.models.artifacts import Artifact, ArtifactExtras, ArtifactType
from artiforge.models.config import DockerImageConfig

logger = logging.getLogger(__name__)

# Artifact types that may be copied into an image build context.
CONTEXT_TYPES: tuple[ArtifactType, ...] = (
    ArtifactType.UPLOADABLE_BINARY,
    ArtifactType.UPLOADABLE_ARCHIVE,
    ArtifactType.LINUX_PACKAGE,
)


def _render_refs(ctx: ReleaseContext, templates: list[str]) -> list[str]:
    """Render *templates*, dropping results that are blank."""
    rendered = ctx.renderer().render_all(templates)
    return [r.strip() for r in rendered if r.strip()]


class DockerPipe:
    """Builds, registers and pushes every configured image target.

    Parameters
    ----------
    imagers:
        Strategy table keyed by ``DockerImageConfig.use``. Defaults to
        ``default_imagers(runner)``.
    runner:
        Used to build the default table; ignored when *imagers* is given.
    """

    def __init__(
        self,
        imagers: dict[str, DockerImager] | None = None,
        runner: Runner | None = None,
    ) -> None:
        self.imagers = imagers if imagers is not None else default_imagers(
            runner or CommandRunner()
        )

    def __str__(self) -> str:
        return "docker images"

    def skip(self, ctx: ReleaseContext) -> bool:
        return not ctx.config.dockers

    def run(self, ctx: ReleaseContext) -> list[Artifact]:
        """Process all image targets on the worker pool.

        Returns the registered ``DOCKER_IMAGE`` artifacts in configuration
        order. The first failing target (in configuration order) is raised.
        """
        if self.skip(ctx):
            logger.info("no docker images configured, skipping")
            return []

        workers = min(ctx.parallelism, len(ctx.config.dockers))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(self.publish, ctx, cfg) for cfg in ctx.config.dockers
            ]
            results = [f.result() for f in futures]
        return [artifact for batch in results for artifact in batch]

    def publish(self, ctx: ReleaseContext, cfg: DockerImageConfig) -> list[Artifact]:
        """Build one image target, register its tags and push them."""
        imager = self.imagers.get(cfg.use)
        if imager is None:
            raise ConfigurationError(f"docker {cfg.id}: unsupported use {cfg.use!r}")

        images = _render_refs(ctx, cfg.image_templates)
        if not images:
            raise ConfigurationError(f"docker {cfg.id}: no image templates rendered")
        flags = ctx.renderer().render_all(cfg.build_flag_templates)

        with tempfile.TemporaryDirectory(prefix="artiforge-docker-") as tmp:
            build_context = Path(tmp)
            self._stage_context(ctx, cfg, build_context)
            imager.build(build_context, images, flags)

        artifacts = []
        for image in images:
            artifact = Artifact(
                name=image,
                path=image,
                type=ArtifactType.DOCKER_IMAGE,
                extra=ArtifactExtras(id=cfg.id, use=cfg.use),
            )
            ctx.artifacts.add(artifact)
            artifacts.append(artifact)

        if cfg.skip_push:
            logger.info("docker %s: skip_push set, not pushing", cfg.id)
            return artifacts

        for artifact in artifacts:
            artifact.extra.digest = imager.push(artifact.name, cfg.push_flags)
        return artifacts

    @staticmethod
    def _stage_context(
        ctx: ReleaseContext, cfg: DockerImageConfig, build_context: Path
    ) -> None:
        """Copy the Dockerfile, extra files and selected artifacts into place."""
        shutil.copyfile(ctx.resolve(cfg.dockerfile), build_context / "Dockerfile")

        for extra in cfg.extra_files:
            src = ctx.resolve(extra)
            dest = build_context / (Path(extra).name if Path(extra).is_absolute() else extra)
            if not dest.resolve().is_relative_to(build_context.resolve()):
                raise ConfigurationError(
                    f"docker {cfg.id}: extra file {extra!r} escapes the build context"
                )
            dest.parent.mkdir(parents=True, exist_ok=True)
            if src.is_dir():
                shutil.copytree(src, dest, dirs_exist_ok=True)
            else:
                shutil.copy2(src, dest)

        selector = or_(*(by_type(t) for t in CONTEXT_TYPES))
        if cfg.ids:
            selector = and_(selector, by_ids(*cfg.ids))
        for artifact in ctx.artifacts.filter(selector):
            shutil.copy2(artifact.path, build_context / artifact.name)
            logger.debug("docker %s: staged %s", cfg.id, artifact.name)


class DockerManifestPipe:
    """Creates and pushes every configured manifest list.

    Parameters
    ----------
    manifesters:
        Strategy table keyed by ``DockerManifestConfig.use``.
    runner:
        Used to build the default table; ignored when *manifesters* is given.
    """

    def __init__(
        self,
        manifesters: dict[str, DockerManifester] | None = None,
        runner: Runner | None = None,
    ) -> None:
        if manifesters is None:
            manifesters = {"docker": DockerManifester(runner or CommandRunner())}
        self.manifesters = manifesters

    def __str__(self) -> str:
        return "docker manifests"

    def skip(self, ctx: ReleaseContext) -> bool:
        return not ctx.config.docker_manifests

    def run(self, ctx: ReleaseContext) -> list[Artifact]:
        if self.skip(ctx):
            logger.info("no docker manifests configured, skipping")
            return []

        artifacts = []
        for cfg in ctx.config.docker_manifests:
            manifester = self.manifesters.get(cfg.use)
            if manifester is None:
                raise ConfigurationError(
                    f"docker manifest {cfg.id}: unsupported use {cfg.use!r}"
                )
            name = ctx.renderer().render(cfg.name_template).strip()
            if not name:
                raise ConfigurationError(f"docker manifest {cfg.id}: empty name")
            images = _render_refs(ctx, cfg.image_templates)

            manifester.create(name, images, cfg.create_flags)
            if cfg.skip_push:
                logger.info("docker manifest %s: skip_push set, not pushing", name)
            else:
                manifester.push(name, cfg.push_flags)

            artifact = Artifact(
                name=name,
                path=name,
                type=ArtifactType.DOCKER_MANIFEST,
                extra=ArtifactExtras(id=cfg.id, use=cfg.use),
            )
            ctx.artifacts.add(artifact)
            artifacts.append(artifact)
        return artifacts
