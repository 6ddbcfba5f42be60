"""Content digests of byte streams under a selectable algorithm.

All functions stream their input in fixed-size chunks; nothing here holds
a whole file in memory.
"""

from __future__ import annotations

import hashlib
import zlib
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO, Protocol

from artiforge.core.errors import ConfigurationError

HASH_BUFFER_SIZE = 65536  # 64 KiB


class _Hasher(Protocol):
    def update(self, data: bytes, /) -> None: ...

    def hexdigest(self) -> str: ...


class _Crc32:
    """IEEE CRC-32 with the hashlib ``update``/``hexdigest`` interface."""

    def __init__(self) -> None:
        self._value = 0

    def update(self, data: bytes, /) -> None:
        self._value = zlib.crc32(data, self._value)

    def hexdigest(self) -> str:
        return f"{self._value & 0xFFFFFFFF:08x}"


_ALGORITHMS: dict[str, Callable[[], _Hasher]] = {
    "crc32": _Crc32,
    "md5": hashlib.md5,
    "sha1": hashlib.sha1,
    "sha224": hashlib.sha224,
    "sha256": hashlib.sha256,
    "sha384": hashlib.sha384,
    "sha512": hashlib.sha512,
}

SUPPORTED_ALGORITHMS: tuple[str, ...] = tuple(_ALGORITHMS)


def new_hasher(algorithm: str) -> _Hasher:
    """Return a fresh hasher for *algorithm*.

    Raises
    ------
    ConfigurationError
        If *algorithm* is not one of ``SUPPORTED_ALGORITHMS``.
    """
    try:
        factory = _ALGORITHMS[algorithm]
    except KeyError:
        raise ConfigurationError(
            f"invalid algorithm: {algorithm!r} "
            f"(supported: {', '.join(SUPPORTED_ALGORITHMS)})"
        ) from None
    return factory()


def digest_stream(stream: BinaryIO, algorithm: str) -> str:
    """Lowercase hex digest of everything remaining in *stream*."""
    hasher = new_hasher(algorithm)
    while True:
        chunk = stream.read(HASH_BUFFER_SIZE)
        if not chunk:
            break
        hasher.update(chunk)
    return hasher.hexdigest()


def digest_bytes(data: bytes, algorithm: str) -> str:
    """Lowercase hex digest of *data*."""
    hasher = new_hasher(algorithm)
    hasher.update(data)
    return hasher.hexdigest()


def digest_file(path: str | Path, algorithm: str) -> str:
    """Lowercase hex digest of the file at *path*.

    The algorithm is validated before the file is opened.

    Raises
    ------
    ConfigurationError
        If *algorithm* is unsupported.
    OSError
        If the file cannot be opened or read.
    """
    new_hasher(algorithm)
    with open(path, "rb") as fh:
        return digest_stream(fh, algorithm)
