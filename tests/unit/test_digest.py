"""Tests for the digest engine: algorithms, streaming, unknown names."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from artiforge.core.digest import (
    HASH_BUFFER_SIZE,
    SUPPORTED_ALGORITHMS,
    digest_bytes,
    digest_file,
    digest_stream,
)
from artiforge.core.errors import ConfigurationError

# Digests of b"some string".
KNOWN_DIGESTS = {
    "crc32": "f94d3859",
    "md5": "5ac749fbeec93607fc28d666be85e73a",
    "sha1": "8b45e4bd1c6acb88bebf6407d16205f567e62a3e",
    "sha224": "21bc225587d8768058837b68fe7e0341e87b972f02fd8fb0c236d1d3",
    "sha256": "61d034473102d7dac305902770471fd50f4c5b26f6831a56dd90b5184b3c30fc",
    "sha384": "f6055a96a105d2fb5941a616964ffda8294fd415730cc4154a602062bc3d00e99d3c6f4a11af8c965a343de4afca3c2b",
    "sha512": "14925e01a7a0cf0801aa95fe52d542b578af58ae7997ada66db3a6eae68a329d50600a5b7b442eabf4ea77ea8ef5fe40acf2ab31d47311b2a232c4f64009aac1",
}


class TestDigestEngine:
    def test_supported_set(self):
        assert set(SUPPORTED_ALGORITHMS) == set(KNOWN_DIGESTS)

    @pytest.mark.parametrize("algorithm", sorted(KNOWN_DIGESTS))
    def test_known_values(self, algorithm: str):
        assert digest_bytes(b"some string", algorithm) == KNOWN_DIGESTS[algorithm]

    @pytest.mark.parametrize("algorithm", sorted(KNOWN_DIGESTS))
    def test_deterministic_file_digest(self, tmp_dir: Path, algorithm: str):
        path = tmp_dir / "binary"
        path.write_bytes(b"some string")
        first = digest_file(path, algorithm)
        second = digest_file(path, algorithm)
        assert first == second == KNOWN_DIGESTS[algorithm]

    def test_lowercase_hex(self):
        for algorithm in SUPPORTED_ALGORITHMS:
            value = digest_bytes(b"\xff" * 100, algorithm)
            assert value == value.lower()
            int(value, 16)

    def test_crc32_is_zero_padded(self):
        # crc32 of the empty input is 0
        assert digest_bytes(b"", "crc32") == "00000000"

    def test_stream_matches_bytes_across_chunks(self):
        data = b"x" * (HASH_BUFFER_SIZE * 2 + 17)
        for algorithm in ("crc32", "sha256"):
            assert digest_stream(io.BytesIO(data), algorithm) == digest_bytes(
                data, algorithm
            )

    def test_unknown_algorithm(self):
        with pytest.raises(ConfigurationError, match="sha3"):
            digest_bytes(b"data", "sha3")

    def test_unknown_algorithm_checked_before_open(self, tmp_dir: Path):
        with pytest.raises(ConfigurationError):
            digest_file(tmp_dir / "missing", "blake9")

    def test_missing_file_names_path(self, tmp_dir: Path):
        missing = tmp_dir / "nope"
        with pytest.raises(FileNotFoundError, match="nope"):
            digest_file(missing, "sha256")
