"""Fast hashing for non-cryptographic use cases.

Provides xxhash for render cache keys and SHA256 for stable content digests.
"""

from typing import Protocol
from enum import Enum
import hashlib

import xxhash


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"  # Fast, non-cryptographic (cache keys)
    SHA256 = "sha256"      # Stable content digests


class Hasher(Protocol):
    """Protocol for hash implementations."""

    def digest(self, data: bytes) -> str:
        """Compute hex digest of data."""
        ...


class XXHasher:
    """Ultra-fast non-cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        """Compute xxhash64 hex digest."""
        return xxhash.xxh64(data).hexdigest()


class SHA256Hasher:
    """Secure cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        """Compute SHA256 hex digest."""
        return hashlib.sha256(data).hexdigest()


def create_hasher(algorithm: Algorithm = Algorithm.XXHASH64) -> Hasher:
    """
    Create hasher instance.

    Args:
        algorithm: Hash algorithm to use

    Returns:
        Hasher instance

    Raises:
        ValueError: If the algorithm is unknown
    """
    if algorithm == Algorithm.XXHASH64:
        return XXHasher()
    elif algorithm == Algorithm.SHA256:
        return SHA256Hasher()
    else:
        raise ValueError(f"Unknown algorithm: {algorithm}")


def hash_string(
    text: str,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None
) -> str:
    """
    Hash string to hex digest.

    Args:
        text: String to hash
        algorithm: Hash algorithm (default: xxhash64 for speed)
        truncate: Optional length to truncate digest (e.g., 16 for cache keys)

    Returns:
        Hex digest string
    """
    hasher = create_hasher(algorithm)
    # lone surrogates can reach here through the stdlib json fallback
    digest = hasher.digest(text.encode("utf-8", errors="surrogatepass"))

    if truncate:
        return digest[:truncate]
    return digest


def hash_fields(*fields: str, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Hash multiple fields together (deterministic).

    Args:
        *fields: Fields to combine and hash
        algorithm: Hash algorithm

    Returns:
        Hex digest of combined fields

    Examples:
        >>> hash_fields(page_json, options_json)
        'b4f3c2...'
    """
    combined = "\x00".join(fields)  # Null byte separator
    return hash_string(combined, algorithm)


__all__ = [
    "Algorithm",
    "Hasher",
    "create_hasher",
    "hash_string",
    "hash_fields",
]
