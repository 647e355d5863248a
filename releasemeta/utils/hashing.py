# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Content digests for file verification.

Acceptable hashes in a release payload are uppercase hexadecimal strings.
Existing producers of the format hash with MD5, so that is the default,
but any fixed-length hashlib algorithm can be configured as long as it
matches whatever produced the payload.

Comparison is exact string equality downstream, so everything here renders
digests in uppercase and never normalises anything else.
"""

import hashlib
from pathlib import Path

DEFAULT_HASH_ALGORITHM = "md5"
HASH_BUFFER_SIZE = 65536  # 64 KiB


def resolve_algorithm(algorithm: str) -> str:
    """
    Validate a hash algorithm name and return it in canonical (lowercase) form.

    Variable-length digests (shake_128, shake_256) are rejected because they
    have no fixed hex rendering.

    Raises:
        ValueError: If the algorithm is unknown or variable-length.
    """
    name = algorithm.lower()
    if name not in hashlib.algorithms_available:
        raise ValueError(
            f"Unknown hash algorithm '{algorithm}'. "
            f"Available: {', '.join(sorted(hashlib.algorithms_guaranteed))}"
        )
    if hashlib.new(name).digest_size == 0:
        raise ValueError(f"Hash algorithm '{algorithm}' has no fixed digest size")
    return name


def compute_digest(data: bytes, algorithm: str = DEFAULT_HASH_ALGORITHM) -> str:
    """
    Hash raw bytes.

    Args:
        data: The bytes to hash.
        algorithm: hashlib algorithm name.

    Returns:
        Uppercase hex string of the digest.
    """
    return hashlib.new(resolve_algorithm(algorithm), data).hexdigest().upper()


def compute_file_digest(file_path: Path, algorithm: str = DEFAULT_HASH_ALGORITHM) -> str:
    """
    Hash a file in 64 KiB chunks.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        OSError: If the file can't be read.
    """
    hasher = hashlib.new(resolve_algorithm(algorithm))
    with open(file_path, "rb") as f:
        while True:
            chunk = f.read(HASH_BUFFER_SIZE)
            if not chunk:
                break
            hasher.update(chunk)
    return hasher.hexdigest().upper()
