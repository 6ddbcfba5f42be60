"""Multi-platform manifest lists via ``docker manifest``."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from artiforge.core.errors import ProcessError
from artiforge.docker.runner import Runner

logger = logging.getLogger(__name__)

# Removal output that just means there was nothing to remove.
_NOT_FOUND = re.compile(r"no such manifest|not found|does not exist", re.IGNORECASE)


class DockerManifester:
    """Creates and pushes manifest lists through a ``Runner``."""

    def __init__(self, runner: Runner) -> None:
        self.runner = runner

    def create(
        self,
        manifest: str,
        images: Sequence[str],
        flags: Sequence[str] = (),
    ) -> None:
        """Replace any local *manifest* with one listing *images*.

        Removing the previous manifest is best-effort: its failure never
        stops creation, but failures other than "not found" are logged.

        Raises
        ------
        ProcessError
            If creation fails; the message names *manifest*.
        """
        try:
            self.runner.run(["manifest", "rm", manifest])
        except ProcessError as exc:
            if _NOT_FOUND.search(exc.output or str(exc)):
                logger.debug("no previous manifest %s to remove", manifest)
            else:
                logger.warning("could not remove manifest %s: %s", manifest, exc)

        try:
            self.runner.run(["manifest", "create", manifest, *images, *flags])
        except ProcessError as exc:
            raise exc.wrap(f"failed to create {manifest}") from exc
        logger.info("created manifest %s with %d images", manifest, len(images))

    def push(self, manifest: str, flags: Sequence[str] = ()) -> None:
        """Push *manifest*.

        Raises
        ------
        ProcessError
            If the push fails; the message names *manifest*.
        """
        try:
            self.runner.run(["manifest", "push", manifest, *flags])
        except ProcessError as exc:
            raise exc.wrap(f"failed to push {manifest}") from exc
        logger.info("pushed manifest %s", manifest)
