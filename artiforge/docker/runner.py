"""Blocking invocation of external container tooling."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from artiforge.core.errors import ProcessError

logger = logging.getLogger(__name__)


@runtime_checkable
class Runner(Protocol):
    """Protocol for anything that can run a tool and return its output.

    Implementations raise ``ProcessError`` on a non-zero exit.
    """

    def run(self, args: Sequence[str], cwd: Path | None = None) -> str:
        ...


class CommandRunner:
    """Runs ``<binary> <args...>`` and returns combined stdout/stderr.

    No timeout is applied; callers needing one wrap the call themselves.

    Parameters
    ----------
    binary:
        The tool to invoke, e.g. ``"docker"`` or ``"podman"``.
    env:
        Environment for the child process. ``None`` inherits ours.
    """

    def __init__(self, binary: str = "docker", env: dict[str, str] | None = None) -> None:
        self.binary = binary
        self.env = env

    def run(self, args: Sequence[str], cwd: Path | None = None) -> str:
        command = [self.binary, *args]
        logger.debug("running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                env=self.env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise ProcessError(
                f"failed to run {self.binary}: {exc}", command=command
            ) from exc

        if result.returncode != 0:
            raise ProcessError(
                f"{self.binary} exited with status {result.returncode}: "
                f"{result.stdout.strip()}",
                command=command,
                returncode=result.returncode,
                output=result.stdout,
            )
        return result.stdout
