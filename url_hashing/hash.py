"""
Expression hashing utilities
"""

import base64
from collections.abc import Iterable
from hashlib import sha256

from url_hashing.utils.text import to_bytes
from url_hashing.utils.types import RawURL


def truncated_digest_prefix(expression: RawURL, bits: int) -> bytes:
    """Compute the most significant `bits` // 8 bytes of the sha256 hash
    of `expression` as specified by Safe Browsing API.

    Hash prefixes can be anywhere from 4 to 32 bytes (32 to 256 bits) in size.
    `bits` below 8 yield an empty prefix.

    Examples:
        truncated_digest_prefix("abc", 32) -> b"\\xba\\x78\\x16\\xbf"

    Args:
        expression (RawURL): Suffix/prefix expression to be hashed,
        `str` is hashed as UTF-8
        bits (int): Hash prefix size in bits

    Returns:
        bytes: Hash prefix of `expression`
    """
    return sha256(to_bytes(expression)).digest()[: max(bits, 0) // 8]


def b64_encode_prefixes(hash_prefixes: Iterable[bytes]) -> list[str]:
    """b64 encode `hash_prefixes`, as exchanged with Safe Browsing API, in ascending order.

    Args:
        hash_prefixes (Iterable[bytes]): Hash prefixes

    Returns:
        list[str]: b64 encoded hash prefixes
    """
    return sorted(base64.b64encode(hash_prefix).decode() for hash_prefix in hash_prefixes)
