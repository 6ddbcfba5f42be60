"""Resolution of extra-file globs into ``display name -> path`` pairs."""

from __future__ import annotations

import glob
import logging
import os

from artiforge.core.context import ReleaseContext
from artiforge.core.errors import ConfigurationError, NoMatchError
from artiforge.models.config import ExtraFile

logger = logging.getLogger(__name__)


def glob_files(pattern: str, working_dir: str | os.PathLike[str]) -> list[str]:
    """Sorted absolute paths matching *pattern*.

    Relative patterns resolve against *working_dir*; ``**`` matches any
    number of directories.

    Raises
    ------
    NoMatchError
        If nothing matches.
    """
    root = os.fspath(working_dir)
    matches = sorted(
        os.path.abspath(os.path.join(root, p))
        for p in glob.glob(pattern, root_dir=root, recursive=True)
    )
    if not matches:
        raise NoMatchError(pattern)
    return matches


def find(ctx: ReleaseContext, extra_files: list[ExtraFile]) -> dict[str, str]:
    """Resolve *extra_files* to an ordered mapping of display name to path.

    Patterns are processed in declaration order and matches within a
    pattern in sorted order. Directories are skipped. A later file with the
    same display name replaces the earlier one.

    Raises
    ------
    NoMatchError
        If any pattern matches nothing.
    ConfigurationError
        If a ``name_template`` is combined with a multi-file glob.
    """
    result: dict[str, str] = {}
    for extra in extra_files:
        files = glob_files(extra.glob, ctx.working_dir)
        if extra.name_template and len(files) > 1:
            raise ConfigurationError(
                f"failed to add extra_file {extra.glob!r} -> "
                f"{extra.name_template!r}: glob matches multiple files"
            )
        for path in files:
            if os.path.isdir(path):
                logger.debug("ignoring directory %s", path)
                continue
            if extra.name_template:
                name = ctx.renderer().render(extra.name_template)
            else:
                name = os.path.basename(path)
            if name in result:
                logger.warning(
                    "overriding %s with %s for name %s", result[name], path, name
                )
            result[name] = path
    return result
