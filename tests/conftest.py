"""Shared test fixtures for Artiforge."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from artiforge.core.artifact_registry import ArtifactRegistry
from artiforge.core.context import ReleaseContext
from artiforge.core.errors import ProcessError
from artiforge.models.artifacts import Artifact, ArtifactExtras, ArtifactType
from artiforge.models.config import ChecksumConfig, ProjectConfig


class FakeRunner:
    """In-memory stand-in for ``CommandRunner``.

    Responses are matched by argv prefix, most recently registered first.
    Every call is recorded in ``calls``.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.cwds: list[Path | None] = []
        self._responses: list[tuple[tuple[str, ...], str, int]] = []

    def on(self, *prefix: str, output: str = "", returncode: int = 0) -> FakeRunner:
        self._responses.insert(0, (prefix, output, returncode))
        return self

    def run(self, args: Sequence[str], cwd: Path | None = None) -> str:
        args = list(args)
        self.calls.append(args)
        self.cwds.append(cwd)
        for prefix, output, returncode in self._responses:
            if tuple(args[: len(prefix)]) == prefix:
                if returncode != 0:
                    raise ProcessError(
                        f"docker exited with status {returncode}: {output}",
                        command=["docker", *args],
                        returncode=returncode,
                        output=output,
                    )
                return output
        return ""


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def registry() -> ArtifactRegistry:
    """Provide an empty ArtifactRegistry."""
    return ArtifactRegistry()


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Provide a FakeRunner with no canned responses."""
    return FakeRunner()


@pytest.fixture
def make_file(tmp_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write a file under the temp dir and return its path."""

    def _factory(name: str, content: str | bytes = "some string") -> Path:
        path = tmp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _factory


@pytest.fixture
def make_artifact() -> Callable[..., Artifact]:
    """Factory fixture: build an Artifact with sensible defaults."""

    def _factory(
        path: Path | str,
        name: str | None = None,
        artifact_type: ArtifactType = ArtifactType.UPLOADABLE_BINARY,
        artifact_id: str | None = None,
        **overrides: Any,
    ) -> Artifact:
        defaults: dict[str, Any] = {
            "name": name or Path(path).name,
            "path": str(path),
            "type": artifact_type,
            "extra": ArtifactExtras(id=artifact_id),
        }
        defaults.update(overrides)
        return Artifact(**defaults)

    return _factory


@pytest.fixture
def make_context(tmp_dir: Path) -> Callable[..., ReleaseContext]:
    """Factory fixture: a ReleaseContext rooted at the temp dir."""

    def _factory(
        checksum: ChecksumConfig | None = None,
        project_name: str = "binary",
        **overrides: Any,
    ) -> ReleaseContext:
        config_fields: dict[str, Any] = {
            "project_name": project_name,
            "dist": tmp_dir,
        }
        if checksum is not None:
            config_fields["checksum"] = checksum
        for key in ("dockers", "docker_manifests"):
            if key in overrides:
                config_fields[key] = overrides.pop(key)
        defaults: dict[str, Any] = {
            "version": "1.2.3",
            "env": {"FOO": "bar"},
            "working_dir": tmp_dir,
        }
        defaults.update(overrides)
        return ReleaseContext(ProjectConfig(**config_fields), **defaults)

    return _factory
