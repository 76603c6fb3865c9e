from __future__ import annotations

import hashlib


def fingerprint_signature(signature: str, prefix_length: int = 12) -> str:
    """Hash a document signature into a short identifier that is safe to log.

    Uses SHA3-256 and returns the first N characters of the hex digest, so raw
    signatures never reach log output while distinct signatures stay distinguishable.

    Args:
        signature: The signature attached as the bearer credential
        prefix_length: Number of hex characters to keep from the digest (default: 12)

    Returns:
        Hex prefix of the digest

    Example:
        >>> len(fingerprint_signature("signature"))
        12
    """
    hash_obj = hashlib.sha3_256(signature.encode("utf-8"))
    return hash_obj.hexdigest()[:prefix_length]
