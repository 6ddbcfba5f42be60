"""Tests for ArtifactRegistry: ordering, filters, visiting, thread safety."""

from __future__ import annotations

import threading

import pytest

from artiforge.core.artifact_registry import (
    ArtifactRegistry,
    and_,
    by_ids,
    by_type,
    or_,
)
from artiforge.models.artifacts import Artifact, ArtifactExtras, ArtifactType


def _artifact(name: str, artifact_type: ArtifactType, artifact_id: str | None = None) -> Artifact:
    return Artifact(
        name=name,
        path=f"/dist/{name}",
        type=artifact_type,
        extra=ArtifactExtras(id=artifact_id),
    )


@pytest.fixture
def populated(registry: ArtifactRegistry) -> ArtifactRegistry:
    registry.add(_artifact("bin", ArtifactType.UPLOADABLE_BINARY, "id-1"))
    registry.add(_artifact("bin.tar.gz", ArtifactType.UPLOADABLE_ARCHIVE, "id-2"))
    registry.add(_artifact("bin.rpm", ArtifactType.LINUX_PACKAGE, "id-3"))
    registry.add(_artifact("checksums.txt", ArtifactType.CHECKSUM))
    return registry


class TestArtifactRegistry:
    def test_list_preserves_insertion_order(self, populated: ArtifactRegistry):
        names = [a.name for a in populated.list()]
        assert names == ["bin", "bin.tar.gz", "bin.rpm", "checksums.txt"]

    def test_list_is_a_snapshot(self, populated: ArtifactRegistry):
        snapshot = populated.list()
        populated.add(_artifact("late", ArtifactType.UPLOADABLE_BINARY))
        assert len(snapshot) == 4
        assert len(populated) == 5

    def test_by_type(self, populated: ArtifactRegistry):
        found = populated.filter(by_type(ArtifactType.CHECKSUM))
        assert [a.name for a in found] == ["checksums.txt"]

    def test_by_ids(self, populated: ArtifactRegistry):
        found = populated.filter(by_ids("id-1", "id-3"))
        assert [a.name for a in found] == ["bin", "bin.rpm"]

    def test_or_and(self, populated: ArtifactRegistry):
        uploadable = or_(
            by_type(ArtifactType.UPLOADABLE_BINARY),
            by_type(ArtifactType.UPLOADABLE_ARCHIVE),
        )
        assert len(populated.filter(uploadable)) == 2
        assert [a.name for a in populated.filter(and_(uploadable, by_ids("id-2")))] == [
            "bin.tar.gz"
        ]

    def test_visit_stops_at_first_error(self, populated: ArtifactRegistry):
        seen: list[str] = []

        def fn(artifact: Artifact) -> None:
            seen.append(artifact.name)
            if artifact.name == "bin.tar.gz":
                raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            ArtifactRegistry.visit(populated.list(), fn)
        assert seen == ["bin", "bin.tar.gz"]

    def test_concurrent_adds(self, registry: ArtifactRegistry):
        def worker(n: int) -> None:
            for i in range(200):
                registry.add(_artifact(f"{n}-{i}", ArtifactType.DOCKER_IMAGE))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(registry) == 1600
