"""
Hash prefixes of URLs

Canonicalize a URL, expand it into its suffix/prefix expressions
and hash each expression.
"""
from typing import Optional

from url_hashing.canonicalize import canonicalize
from url_hashing.expressions import ordered_expressions
from url_hashing.hash import truncated_digest_prefix
from url_hashing.utils.types import PrefixMap, RawURL

DEFAULT_PREFIX_BITS: int = 32 * 8


def get_prefix_map(url: Optional[RawURL], bits: int = DEFAULT_PREFIX_BITS) -> PrefixMap:
    """Get (expression, hash prefix) pairs for all suffix/prefix expressions of `url`.

    Args:
        url (Optional[RawURL]): URL to process
        bits (int, optional): Hash prefix size in bits. Defaults to 256.

    Returns:
        PrefixMap: (expression, hash prefix) pairs, empty if `url`
        cannot be canonicalized
    """
    canonical_url = canonicalize(url)
    if canonical_url is None:
        return []
    return [
        (expression, truncated_digest_prefix(expression, bits))
        for expression in ordered_expressions(canonical_url)
    ]


def get_prefixes(url: Optional[RawURL], bits: int = DEFAULT_PREFIX_BITS) -> set[bytes]:
    """Get hash prefixes for all suffix/prefix expressions of `url`,
    to be checked against Safe Browsing API hash prefixes.

    Args:
        url (Optional[RawURL]): URL to process
        bits (int, optional): Hash prefix size in bits. Defaults to 256.

    Returns:
        set[bytes]: Hash prefixes, empty if `url` cannot be canonicalized
    """
    return {hash_prefix for _, hash_prefix in get_prefix_map(url, bits)}
