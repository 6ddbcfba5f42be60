"""Image build strategies and push with digest extraction.

Two build shapes exist, selected by ``BuildStrategy``:

* ``DOCKER``: ``build <context> -t <img>... <flags>``
* ``BUILDX``: ``buildx --builder default build <context> --load -t <img>... <flags>``
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from artiforge.core.errors import DigestNotFoundError, ProcessError
from artiforge.docker.runner import Runner

logger = logging.getLogger(__name__)

DIGEST_PATTERN = re.compile(r"sha256:[0-9a-f]{64}(?![0-9a-f])")


class BuildStrategy(str, Enum):
    """Argument shape used to build an image."""

    DOCKER = "docker"
    BUILDX = "buildx"


def extract_digest(output: str) -> str | None:
    """First ``sha256:<64 hex>`` token in *output*, or ``None``."""
    match = DIGEST_PATTERN.search(output)
    return match.group(0) if match else None


def build_command(
    strategy: BuildStrategy,
    context: str | Path,
    images: Sequence[str],
    flags: Sequence[str] = (),
) -> list[str]:
    """Argument vector (without the binary) for building *images*."""
    if strategy is BuildStrategy.BUILDX:
        args = ["buildx", "--builder", "default", "build", str(context), "--load"]
    else:
        args = ["build", str(context)]
    for image in images:
        args.extend(["-t", image])
    args.extend(flags)
    return args


class DockerImager:
    """Builds and pushes images through a ``Runner``.

    Parameters
    ----------
    runner:
        Executes the tool; usually a ``CommandRunner("docker")``.
    strategy:
        Which build argument shape to use.
    """

    def __init__(self, runner: Runner, strategy: BuildStrategy = BuildStrategy.DOCKER) -> None:
        self.runner = runner
        self.strategy = strategy

    def build(
        self,
        context: str | Path,
        images: Sequence[str],
        flags: Sequence[str] = (),
    ) -> None:
        """Build *context*, tagging the result with every name in *images*.

        Raises
        ------
        ValueError
            If *images* is empty.
        ProcessError
            If the build tool fails; the message names ``images[0]``.
        """
        if not images:
            raise ValueError("at least one image reference is required")
        args = build_command(self.strategy, context, images, flags)
        try:
            self.runner.run(args)
        except ProcessError as exc:
            raise exc.wrap(f"failed to build {images[0]}") from exc
        logger.info("built %s", ", ".join(images))

    def push(self, image: str, flags: Sequence[str] = ()) -> str:
        """Push *image* and return its ``sha256:`` content digest.

        Raises
        ------
        ProcessError
            If the push tool fails. No digest extraction is attempted.
        DigestNotFoundError
            If the push succeeded but printed no digest.
        """
        try:
            output = self.runner.run(["push", image, *flags])
        except ProcessError as exc:
            raise exc.wrap(f"failed to push {image}") from exc

        digest = extract_digest(output)
        if digest is None:
            raise DigestNotFoundError(image, output)
        logger.info("pushed %s (%s)", image, digest)
        return digest


def default_imagers(runner: Runner) -> dict[str, DockerImager]:
    """Strategy table keyed by the ``use`` names accepted in configuration."""
    return {
        strategy.value: DockerImager(runner, strategy) for strategy in BuildStrategy
    }
