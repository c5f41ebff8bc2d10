"""
Text and byte conversion utilities

URLs are processed as "byte strings": `str` holding one character per byte,
with the same ordinal (latin-1 mapping). A `str` URL is first encoded as UTF-8,
so that `str` and `bytes` URLs canonicalize alike and every non-ASCII byte
is escaped on its own.
"""
from typing import Optional

from url_hashing.utils.types import RawURL


def to_bytes(text: RawURL) -> bytes:
    """UTF-8 bytes of `text`; `bytes` input is returned unchanged.

    Bytes smuggled in through `surrogateescape` are restored as-is,
    lone surrogates are encoded with `surrogatepass`.

    Args:
        text (RawURL): Text to encode

    Returns:
        bytes: Encoded text
    """
    if isinstance(text, bytes):
        return text
    try:
        return text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "surrogatepass")


def to_text(raw: RawURL) -> str:
    """`raw` as `str`; `bytes` are mapped one character per byte."""
    if isinstance(raw, bytes):
        return raw.decode("latin-1")
    return raw


def from_byte_string(byte_string: str) -> str:
    """Inverse of `to_text` for `bytes` holding UTF-8 text.

    Byte sequences that are not valid UTF-8 survive as `surrogateescape` characters,
    so `to_bytes` restores the original bytes.

    Args:
        byte_string (str): Text whose characters are all below 256

    Returns:
        str: Decoded text
    """
    return byte_string.encode("latin-1").decode("utf-8", "surrogateescape")


def as_unicode(byte_string: str) -> str:
    """Best-effort Unicode reading of text that may hold raw UTF-8 bytes.

    If every character fits in one byte and the bytes form valid UTF-8,
    the decoded text is returned, otherwise `byte_string` is returned unchanged.
    """
    try:
        return byte_string.encode("latin-1").decode("utf-8")
    except UnicodeError:
        return byte_string


def split_host_port(authority: str) -> tuple[str, Optional[str]]:
    """Split `authority` into host and port, discarding any user-info.

    Bracketed IPv6 literals (e.g. "[::1]:8080") keep their brackets.

    Args:
        authority (str): URL authority, e.g. "user:pass@example.com:8080"

    Returns:
        tuple[str, Optional[str]]: (host, port), port is None when absent
    """
    host_port = authority.rpartition("@")[2]
    if host_port.startswith("["):
        bracket_end = host_port.find("]")
        if bracket_end != -1:
            host, rest = host_port[: bracket_end + 1], host_port[bracket_end + 1 :]
            return host, rest[1:] if rest.startswith(":") else (rest or None)
    host, sep, port = host_port.rpartition(":")
    if not sep:
        return host_port, None
    return host, port
