"""
For generating Safe Browsing API-compliant suffix/prefix expressions
"""
from typing import Optional

from url_hashing.utils.text import split_host_port

MAX_HOST_SUFFIXES: int = 5
MAX_PATH_PREFIXES: int = 6


def is_ipv4_address(host: str) -> bool:
    """Check whether `host` is a dotted-quad of 4 groups of digits"""
    parts = host.split(".")
    return len(parts) == 4 and all(part.isascii() and part.isdigit() for part in parts)


def host_suffixes(host: str) -> list[str]:
    """Generate at most `MAX_HOST_SUFFIXES` host suffixes for `host`:
    the exact hostname, then the suffixes formed by starting with the
    last 5 components and successively removing the leading component.

    IPv4 addresses only yield the exact hostname.

    Args:
        host (str): Canonical hostname

    Returns:
        list[str]: Host suffixes, exact hostname first
    """
    if is_ipv4_address(host):
        return [host]

    suffixes = [host]
    parts = host.split(".")
    if len(parts) > 1:
        relevant_parts = parts[-MAX_HOST_SUFFIXES:]
        for num_components in range(2, len(relevant_parts) + 1):
            suffix = ".".join(relevant_parts[-num_components:])
            if suffix != host:
                suffixes.append(suffix)
            if len(suffixes) >= MAX_HOST_SUFFIXES:
                break
    return suffixes[:MAX_HOST_SUFFIXES]


def path_prefixes(path: str, query: Optional[str] = None) -> list[str]:
    """Generate at most `MAX_PATH_PREFIXES` path prefixes for `path`:
    the exact path with query, the exact path without query, then the paths
    formed by starting at the root (/) and successively appending path components.

    Args:
        path (str): Canonical path, starting with "/"
        query (Optional[str], optional): Query string without "?". Defaults to None.

    Returns:
        list[str]: Path prefixes
    """
    prefixes: list[str] = []
    if query is not None:
        prefixes.append(f"{path}?{query}")
    if path not in prefixes:
        prefixes.append(path)

    if path != "/":
        segments = [segment for segment in path.split("/") if segment]
        current = "/"
        for index, segment in enumerate(segments):
            if len(prefixes) >= MAX_PATH_PREFIXES:
                break
            current += segment
            # Intermediate prefixes always keep a trailing slash
            if index < len(segments) - 1 or path.endswith("/"):
                current += "/"
            if current not in prefixes:
                prefixes.append(current)

    if "/" not in prefixes and len(prefixes) < MAX_PATH_PREFIXES:
        prefixes.append("/")

    return prefixes[:MAX_PATH_PREFIXES]


def split_canonical_url(canonical_url: str) -> tuple[str, str, Optional[str]]:
    """Split `canonical_url` into hostname, path and query.

    Scheme, user-info and port are discarded.

    Args:
        canonical_url (str): Canonical URL, e.g. "http://a.b.c/1/2.html?param=1"

    Returns:
        tuple[str, str, Optional[str]]: (hostname, path, query), query is None
        when `canonical_url` has no "?"
    """
    scheme_end = canonical_url.find("://")
    remainder = canonical_url[scheme_end + 3 :] if scheme_end != -1 else canonical_url
    authority, slash, rest = remainder.partition("/")
    path, has_query, query = f"{slash}{rest}".partition("?")
    host, _ = split_host_port(authority)
    return host, path or "/", query if has_query else None


def suffix_prefix_expressions(canonical_url: Optional[str]) -> set[str]:
    """Generate Safe Browsing API-compliant suffix/prefix expressions
    for a given `canonical_url`

    See
    https://developers.google.com/safe-browsing/v4/urls-hashing#suffixprefix-expressions

    Examples:
        suffix_prefix_expressions("http://a.b.c/1/2.html?param=1") ->
        {"a.b.c/1/2.html?param=1", "a.b.c/1/2.html", "a.b.c/", "a.b.c/1/",
        "b.c/1/2.html?param=1", "b.c/1/2.html", "b.c/", "b.c/1/"}

    Args:
        canonical_url (Optional[str]): Canonical URL, see `canonicalize`

    Returns:
        set[str]: At most 30 host suffix + path prefix combinations
    """
    return set(ordered_expressions(canonical_url))


def ordered_expressions(canonical_url: Optional[str]) -> list[str]:
    """Suffix/prefix expressions of `canonical_url` in generation order,
    host suffixes outermost, duplicates removed.

    Args:
        canonical_url (Optional[str]): Canonical URL, see `canonicalize`

    Returns:
        list[str]: At most 30 host suffix + path prefix combinations
    """
    if not canonical_url:
        return []
    host, path, query = split_canonical_url(canonical_url)
    expressions = (
        f"{host_suffix}{path_prefix}"
        for host_suffix in host_suffixes(host)
        for path_prefix in path_prefixes(path, query)
    )
    return list(dict.fromkeys(expressions))
