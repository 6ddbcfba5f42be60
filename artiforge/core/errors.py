"""Error taxonomy for the checksum and container pipes.

I/O problems are not wrapped: they surface as the builtin ``OSError``
family, whose messages already carry the offending path.
"""

from __future__ import annotations

from collections.abc import Sequence


class ArtiforgeError(RuntimeError):
    """Base for all artiforge errors."""


class ConfigurationError(ArtiforgeError):
    """Raised for configuration the user must fix (unknown algorithm, bad file)."""


class TemplateError(ConfigurationError):
    """Raised when a name template cannot be parsed or rendered."""


class NoMatchError(ConfigurationError):
    """Raised when a configured glob pattern matches no files."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f"globbing failed for pattern {pattern}: no files matched")
        self.pattern = pattern


class ProcessError(ArtiforgeError):
    """Raised when an external tool exits non-zero or cannot be started.

    Attributes
    ----------
    command:
        The argv that was executed.
    returncode:
        Exit status, or ``None`` if the process never started.
    output:
        Combined stdout/stderr text of the tool.
    """

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
        self.output = output

    def wrap(self, prefix: str) -> ProcessError:
        """Return a copy of this error with *prefix* prepended to its message."""
        return ProcessError(
            f"{prefix}: {self}",
            command=self.command,
            returncode=self.returncode,
            output=self.output,
        )


class DigestNotFoundError(ProcessError):
    """Raised when a push succeeded but its output carried no content digest."""

    def __init__(self, image: str, output: str) -> None:
        super().__init__(
            f"failed to find docker digest for {image} in push output: {output}",
            output=output,
        )
        self.image = image
