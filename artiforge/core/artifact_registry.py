"""Ordered, thread-safe registry of release artifacts.

Pipes running on worker threads add and filter concurrently; the registry
serializes access internally, so callers never take its lock themselves.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable

from artiforge.models.artifacts import Artifact, ArtifactType

Filter = Callable[[Artifact], bool]


# ---------------------------------------------------------------------------
# Filter combinators
# ---------------------------------------------------------------------------


def by_type(artifact_type: ArtifactType) -> Filter:
    """Match artifacts of the given type."""
    return lambda a: a.type == artifact_type


def by_ids(*ids: str) -> Filter:
    """Match artifacts whose ``extra.id`` is one of *ids*."""
    wanted = set(ids)
    return lambda a: a.extra.id in wanted


def or_(*filters: Filter) -> Filter:
    """Match artifacts accepted by any of *filters*."""
    return lambda a: any(f(a) for f in filters)


def and_(*filters: Filter) -> Filter:
    """Match artifacts accepted by all of *filters*."""
    return lambda a: all(f(a) for f in filters)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class ArtifactRegistry:
    """Insertion-ordered artifact collection."""

    def __init__(self, artifacts: Iterable[Artifact] = ()) -> None:
        self._lock = threading.Lock()
        self._items: list[Artifact] = list(artifacts)

    def add(self, artifact: Artifact) -> None:
        """Append *artifact* to the registry."""
        with self._lock:
            self._items.append(artifact)

    def list(self) -> list[Artifact]:
        """Snapshot of all artifacts in insertion order."""
        with self._lock:
            return list(self._items)

    def filter(self, predicate: Filter) -> list[Artifact]:
        """Artifacts matching *predicate*, in insertion order."""
        return [a for a in self.list() if predicate(a)]

    @staticmethod
    def visit(artifacts: Iterable[Artifact], fn: Callable[[Artifact], None]) -> None:
        """Call *fn* on each artifact, stopping at the first exception."""
        for artifact in artifacts:
            fn(artifact)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
