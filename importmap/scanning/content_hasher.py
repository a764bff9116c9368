"""Content fingerprinting for cache-busting URLs.

This module provides the ContentHasher class, which turns file bytes into a
short lowercase hex fingerprint using 64-bit xxHash.

Example:
    >>> from importmap.scanning import ContentHasher
    >>> hasher = ContentHasher()
    >>> hasher.fingerprint(b"console.log('hi')")  # doctest: +SKIP
    '3f9c0a1e'
"""

from pathlib import Path
from typing import Dict

import xxhash

# Buffer size for chunked file reading (8KB)
CHUNK_SIZE = 8192

# Full xxh64 digests are 16 hex characters
DIGEST_LEN = 16


class ContentHasher:
    """Computes fixed-length fingerprints of file contents.

    The fingerprint is the xxh64 digest (seed 0) of the bytes, rendered as
    16 zero-padded lowercase hex digits and truncated to ``hash_length``.
    Identical bytes always produce identical fingerprints, on every run and
    every platform.

    Attributes:
        hash_length: Number of hex characters kept from the digest.
    """

    def __init__(self, hash_length: int = 8) -> None:
        """Initialize the ContentHasher.

        Args:
            hash_length: Number of hex characters in each fingerprint
                (1-16). Defaults to 8.

        Raises:
            ValueError: If hash_length is outside 1-16.
        """
        if not 1 <= hash_length <= DIGEST_LEN:
            raise ValueError(
                f"hash_length must be between 1 and {DIGEST_LEN}, got {hash_length}"
            )
        self.hash_length = hash_length
        self._hashed_count = 0

    def fingerprint(self, data: bytes) -> str:
        """Return the fingerprint of a byte string."""
        self._hashed_count += 1
        return xxhash.xxh64(data, seed=0).hexdigest()[: self.hash_length]

    def fingerprint_file(self, file_path: Path) -> str:
        """Compute the fingerprint of a file by reading it in chunks.

        Gives the same result as ``fingerprint(file_path.read_bytes())``
        without loading the whole file into memory.

        Args:
            file_path: Path to the file to hash.

        Returns:
            The fingerprint of the file contents.

        Raises:
            OSError: If the file cannot be opened or read.
        """
        digest = xxhash.xxh64(seed=0)
        with open(file_path, "rb") as f:
            while True:
                chunk = f.read(CHUNK_SIZE)
                if not chunk:
                    break
                digest.update(chunk)

        self._hashed_count += 1
        return digest.hexdigest()[: self.hash_length]

    def get_stats(self) -> Dict[str, int]:
        """Get hashing statistics.

        Returns:
            Dictionary containing:
            - 'hashed': Number of fingerprints computed
            - 'hash_length': Configured fingerprint length
        """
        return {"hashed": self._hashed_count, "hash_length": self.hash_length}
