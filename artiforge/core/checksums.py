"""Checksum manifest pipe.

Hashes the release's uploadable artifacts plus any configured extra files,
writes a ``sha256sum``-style manifest into the dist directory and registers
it as a ``CHECKSUM`` artifact that can later be refreshed in place.

Manifest format, one line per entry, sorted::

    <hex digest>  <display name>\\n

A run with nothing to hash writes an empty file.
"""

from __future__ import annotations

import errno
import functools
import logging
import os
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from artiforge.core import extra_files
from artiforge.core.artifact_registry import and_, by_ids, by_type, or_
from artiforge.core.context import ReleaseContext
from artiforge.core.digest import digest_file, new_hasher
from artiforge.models.artifacts import Artifact, ArtifactType
from artiforge.models.config import ChecksumConfig

logger = logging.getLogger(__name__)

DEFAULT_NAME_TEMPLATE = "{{ project_name }}_{{ version }}_checksums.txt"
DEFAULT_ALGORITHM = "sha256"

# Artifact types whose files are listed in the manifest.
CHECKSUMMED_TYPES: tuple[ArtifactType, ...] = (
    ArtifactType.UPLOADABLE_ARCHIVE,
    ArtifactType.UPLOADABLE_BINARY,
    ArtifactType.UPLOADABLE_SOURCE_ARCHIVE,
    ArtifactType.LINUX_PACKAGE,
)


def with_defaults(cfg: ChecksumConfig) -> ChecksumConfig:
    """Return *cfg* with an unset name template and algorithm filled in."""
    update: dict[str, str] = {}
    if not cfg.name_template:
        update["name_template"] = DEFAULT_NAME_TEMPLATE
    if not cfg.algorithm:
        update["algorithm"] = DEFAULT_ALGORITHM
    return cfg.model_copy(update=update) if update else cfg


class ChecksumPipe:
    """Writes and registers the release checksum manifest."""

    def __str__(self) -> str:
        return "calculating checksums"

    def skip(self, ctx: ReleaseContext) -> bool:
        return ctx.config.checksum.disable

    def default(self, ctx: ReleaseContext) -> None:
        """Fill in the default name template and algorithm on *ctx.config*."""
        cfg = with_defaults(ctx.config.checksum)
        ctx.config = ctx.config.model_copy(update={"checksum": cfg})

    def run(self, ctx: ReleaseContext) -> Artifact | None:
        """Write the manifest and register it.

        Returns the registered checksum artifact, or ``None`` when the pipe
        is disabled.

        Raises
        ------
        TemplateError
            If the name template cannot be rendered.
        ConfigurationError
            If the algorithm is unsupported.
        NoMatchError
            If an extra-file glob matches nothing.
        OSError
            If an input cannot be read or the manifest cannot be written.
        """
        if self.skip(ctx):
            logger.info("checksums disabled, skipping")
            return None

        cfg = with_defaults(ctx.config.checksum)
        filename = ctx.renderer().render(cfg.name_template)
        dist = ctx.dist
        dist.mkdir(parents=True, exist_ok=True)
        path = dist / filename

        refresh(ctx, path, cfg)

        artifact = Artifact(
            name=filename,
            path=str(path),
            type=ArtifactType.CHECKSUM,
            refresher=functools.partial(refresh, ctx, path, cfg),
        )
        ctx.artifacts.add(artifact)
        return artifact


def refresh(ctx: ReleaseContext, path: Path, cfg: ChecksumConfig) -> None:
    """(Re)compute every digest and rewrite the manifest at *path*.

    Inputs are re-selected from the registry and extra globs are
    re-resolved, so the manifest always reflects current file contents.
    Nothing is written unless every digest succeeded.
    """
    algorithm = cfg.algorithm or DEFAULT_ALGORITHM
    new_hasher(algorithm)

    selector = or_(*(by_type(t) for t in CHECKSUMMED_TYPES))
    if cfg.ids:
        selector = and_(selector, by_ids(*cfg.ids))
    artifacts = ctx.artifacts.filter(selector)
    extras = extra_files.find(ctx, cfg.extra_files)

    entries: list[tuple[str, str]] = [(a.name, a.path) for a in artifacts]
    entries.extend(extras.items())

    digests = _digest_all([p for _, p in entries], algorithm, ctx.parallelism)

    lines = []
    for (name, file_path), digest in zip(entries, digests):
        logger.debug("%s  %s (%s)", digest, name, file_path)
        lines.append(f"{digest}  {name}\n")
    lines.sort()

    _write_atomic(path, "".join(lines))

    for artifact, digest in zip(artifacts, digests):
        artifact.extra.checksum = f"{algorithm}:{digest}"

    logger.info("wrote %s (%d entries, %s)", path, len(lines), algorithm)


def _digest_all(paths: list[str], algorithm: str, parallelism: int) -> list[str]:
    """Digest *paths* on a worker pool; results keep input order.

    The first failing path in input order is the error raised.
    """
    if not paths:
        return []
    with ThreadPoolExecutor(max_workers=min(parallelism, len(paths))) as pool:
        futures = [pool.submit(digest_file, p, algorithm) for p in paths]
        return [f.result() for f in futures]


def _write_atomic(path: Path, content: str) -> None:
    """Replace *path* with *content* in a single rename.

    An existing read-only manifest is not replaced.
    """
    if path.exists() and not os.access(path, os.W_OK):
        raise PermissionError(errno.EACCES, "Permission denied", str(path))

    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
        os.chmod(tmp, 0o644)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
