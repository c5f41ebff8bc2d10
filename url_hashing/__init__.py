from url_hashing.canonicalize import (
    canonicalize,
    escape,
    int_to_ip,
    normalize_ip_address,
    resolve_dot_segments,
    unescape_once,
    unescape_repeatedly,
)
from url_hashing.expressions import host_suffixes, path_prefixes, suffix_prefix_expressions
from url_hashing.hash import truncated_digest_prefix
from url_hashing.prefixes import get_prefix_map, get_prefixes

__all__ = [
    "canonicalize",
    "escape",
    "get_prefix_map",
    "get_prefixes",
    "host_suffixes",
    "int_to_ip",
    "normalize_ip_address",
    "path_prefixes",
    "resolve_dot_segments",
    "suffix_prefix_expressions",
    "truncated_digest_prefix",
    "unescape_once",
    "unescape_repeatedly",
]
