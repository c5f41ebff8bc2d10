"""
URL canonicalization as specified by Safe Browsing API / Web Risk API

See
https://developers.google.com/safe-browsing/v4/urls-hashing#canonicalization
https://cloud.google.com/web-risk/docs/urls-hashing#canonicalization

URLs are canonicalized as byte strings (see `url_hashing.utils.text`):
a `str` URL is first encoded as UTF-8, and percent-decoded bytes stay bytes,
so every non-ASCII byte ends up escaped on its own.
"""
import logging
import socket
import struct
from typing import Optional
from urllib.parse import unquote_to_bytes, urlsplit

import idna

from url_hashing.utils.text import as_unicode, from_byte_string, split_host_port, to_bytes, to_text
from url_hashing.utils.types import RawURL

logger = logging.getLogger(__name__)

MAX_HOST_LENGTH: int = 255
MAX_UNESCAPE_ITERATIONS: int = 1000
DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443}

HEX_DIGITS: str = "0123456789abcdefABCDEF"
OCTAL_DIGITS: str = "01234567"
DECIMAL_DIGITS: str = "0123456789"

# U+FFFD as a UTF-8 byte string
REPLACEMENT_CHARACTER: str = to_text("\ufffd".encode("utf-8"))

# Malformed byte-order marks, replaced before %XX runs are decoded
MALFORMED_BYTE_ORDER_MARKS: dict[str, str] = {
    "%FE%FF": REPLACEMENT_CHARACTER * 2,
    "%FF%FE": REPLACEMENT_CHARACTER * 2,
}
# Replaced after %XX runs are decoded
LONE_LEAD_BYTES: dict[str, str] = {"%C2": REPLACEMENT_CHARACTER}


def _strip_control_characters(text: str) -> str:
    """Remove tab (0x09), CR (0x0d) and LF (0x0a) characters"""
    return text.replace("\t", "").replace("\r", "").replace("\n", "")


def _is_escape_at(text: str, index: int) -> bool:
    """Check for a well-formed %XX sequence at `index` of `text`"""
    return (
        text[index] == "%"
        and index + 2 < len(text)
        and text[index + 1] in HEX_DIGITS
        and text[index + 2] in HEX_DIGITS
    )


def _find_any(text: str, characters: str) -> int:
    """Index of the first occurrence of any of `characters` in `text`, or `len(text)`"""
    for index, character in enumerate(text):
        if character in characters:
            return index
    return len(text)


def _replace_escapes(text: str, replacements: dict[str, str]) -> str:
    """Case-insensitively replace every escape sequence in `replacements` found in `text`"""
    out: list[str] = []
    index = 0
    while index < len(text):
        if text[index] == "%":
            for token, replacement in replacements.items():
                if text[index : index + len(token)].upper() == token:
                    out.append(replacement)
                    index += len(token)
                    break
            else:
                out.append("%")
                index += 1
        else:
            out.append(text[index])
            index += 1
    return "".join(out)


def _first_decodable_byte(encoded: bytes) -> int:
    """Smallest offset from which `encoded` is valid UTF-8 through to its end.

    Decoding restarts after each error. Bytes skipped by an error are
    either its invalid start byte or continuation bytes, and no valid
    UTF-8 sequence starts at a continuation byte, so the first restart
    that decodes cleanly is the smallest such offset.
    """
    view = memoryview(encoded)
    start = 0
    while start < len(encoded):
        try:
            str(view[start:], "utf-8")
        except UnicodeDecodeError as error:
            start += error.end
        else:
            break
    return start


def _decode_run(run: str) -> str:
    """Decode a run of contiguous %XX sequences to a byte string.

    If the whole run is not valid UTF-8, %XX sequences are split off
    its left end until the remainder decodes; the split off sequences
    are kept as they are. If nothing decodes, `run` is returned unchanged.
    """
    encoded = unquote_to_bytes(run)
    split = _first_decodable_byte(encoded)
    if split >= len(encoded):
        return run
    # Every %XX sequence is 3 characters long and decodes to 1 byte
    return run[: 3 * split] + to_text(encoded[split:])


def unescape_once(text: str) -> str:
    """Single percent-decoding pass over `text`.

    Each longest run of contiguous %XX sequences is decoded as one unit.
    Decoded bytes are kept as a byte string, one character per byte.

    Args:
        text (str): Text to percent-decode

    Returns:
        str: `text` with one level of percent-encoding removed
    """
    text = _replace_escapes(text, MALFORMED_BYTE_ORDER_MARKS)
    out: list[str] = []
    index = 0
    while index < len(text):
        run_end = index
        while run_end < len(text) and _is_escape_at(text, run_end):
            run_end += 3
        if run_end > index:
            out.append(_decode_run(text[index:run_end]))
            index = run_end
        else:
            out.append(text[index])
            index += 1
    return _replace_escapes("".join(out), LONE_LEAD_BYTES)


def unescape_repeatedly(text: str) -> str:
    """Percent-decode `text` until it no longer changes.

    Tab, CR and LF characters revealed by decoding are removed after every pass.
    Gives up after `MAX_UNESCAPE_ITERATIONS` passes and returns the last decoded value.

    Args:
        text (str): Text to percent-decode

    Returns:
        str: Fully percent-decoded `text`
    """
    value = text
    for _ in range(MAX_UNESCAPE_ITERATIONS):
        previous = value
        value = _strip_control_characters(unescape_once(previous))
        if value == previous:
            return value
    logger.warning(
        "Percent-decoding did not converge after %d iterations: %r",
        MAX_UNESCAPE_ITERATIONS,
        text[:100],
    )
    return value


def _escape_code_point(code: int) -> str:
    if code > 0xFF:
        return _escape_code_point(code >> 8) + _escape_code_point(code & 0xFF)
    if code <= 32 or code >= 127 or code in (0x23, 0x25):  # '#' and '%'
        return f"%{code:02X}"
    return chr(code)


def escape(text: str) -> str:
    """Percent-escape characters <= ASCII 32, >= 127, "#" and "%".

    Well-formed %XX sequences are kept, with their hex digits uppercased.
    Characters above 255 are split into 8-bit halves, each escaped by the same rule.

    Args:
        text (str): Text to percent-escape

    Returns:
        str: Percent-escaped `text`
    """
    out: list[str] = []
    index = 0
    while index < len(text):
        if _is_escape_at(text, index):
            out.append(text[index : index + 3].upper())
            index += 3
        else:
            out.append(_escape_code_point(ord(text[index])))
            index += 1
    return "".join(out)


def int_to_ip(int_addr: int) -> str:
    """Convert integer representation of ipv4 address to dotted-quad string.

    Args:
        int_addr (int): integer representation of ipv4 address

    Returns:
        str: dotted-quad ipv4 address
    """
    return socket.inet_ntoa(struct.pack("!I", int_addr))


def _parse_ip_part(part: str) -> Optional[int]:
    """Parse one component of a numeric host: "0x" hex, leading-zero octal, or decimal"""
    if part[:2] in ("0x", "0X"):
        digits, allowed, base = part[2:], HEX_DIGITS, 16
    elif len(part) > 1 and part.startswith("0"):
        digits, allowed, base = part[1:], OCTAL_DIGITS, 8
    else:
        digits, allowed, base = part, DECIMAL_DIGITS, 10
    if not digits or any(digit not in allowed for digit in digits):
        return None
    return int(digits, base)


def normalize_ip_address(host: str) -> Optional[str]:
    """Normalize a numeric ipv4 host (e.g. "3279880203", "0xc3.0177.11")
    to dotted-quad form.

    Args:
        host (str): Hostname

    Returns:
        Optional[str]: dotted-quad ipv4 address, or None if `host` is not
        a numeric ipv4 address that fits in 32 bits
    """
    parts = host.split(".")
    while parts and parts[-1] == "":
        parts.pop()
    if not 1 <= len(parts) <= 4:
        return None
    numbers = [_parse_ip_part(part) for part in parts]
    if any(number is None for number in numbers):
        return None

    if len(numbers) == 1:
        int_addr = numbers[0]
    elif len(numbers) == 2:
        int_addr = (numbers[0] << 24) | (numbers[1] & 0xFFFFFF)
    elif len(numbers) == 3:
        int_addr = (numbers[0] << 24) | ((numbers[1] & 0xFF) << 16) | (numbers[2] & 0xFFFF)
    else:
        int_addr = (
            (numbers[0] << 24)
            | ((numbers[1] & 0xFF) << 16)
            | ((numbers[2] & 0xFF) << 8)
            | (numbers[3] & 0xFF)
        )
    if int_addr > 0xFFFFFFFF:
        return None
    return int_to_ip(int_addr)


def _to_ascii_hostname(host: str) -> str:
    """Convert a non-ASCII `host` to IDNA Punycode; `host` is returned as-is on failure"""
    if host.isascii():
        return host
    labels = [label for label in as_unicode(host).split(".") if label]
    try:
        return idna.encode(".".join(labels), uts46=True).decode("ascii")
    except UnicodeError as error:  # idna.IDNAError is a UnicodeError
        logger.warning("Unable to convert %r to IDNA: %s", host, error)
        return host


def _canonicalize_host(host: str) -> Optional[str]:
    decoded = unescape_repeatedly(host)
    if len(decoded) > MAX_HOST_LENGTH:
        logger.debug("Host exceeds %d characters: %r", MAX_HOST_LENGTH, decoded[:100])
        return None

    ip_address = normalize_ip_address(decoded)
    if ip_address is not None:
        return ip_address

    hostname = escape(_to_ascii_hostname(decoded))
    # Collapse consecutive dots, strip leading and trailing dots
    return ".".join(label for label in hostname.split(".") if label).lower()


def resolve_dot_segments(path: str) -> str:
    """Resolve "." and ".." segments of `path` and collapse repeated slashes.

    The result always starts with "/" and never ends with "/", unless it is "/".

    Args:
        path (str): URL path

    Returns:
        str: Resolved path
    """
    segments: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
        else:
            segments.append(segment)
    return "/" + "/".join(segments)


def _canonicalize_path(path: str) -> str:
    resolved = resolve_dot_segments(path)
    decoded = unescape_repeatedly(resolved)
    if decoded != resolved:
        # Decoding can reveal new dot segments and slashes
        decoded = resolve_dot_segments(decoded)
    canonical_path = escape(decoded)
    if path.endswith("/") and not canonical_path.endswith("/"):
        canonical_path += "/"
    return canonical_path


def canonicalize(url: Optional[RawURL]) -> Optional[str]:
    """Canonicalize `url` as specified by Safe Browsing API.

    `str` and `bytes` input are processed alike, a `str` URL as its UTF-8 bytes.
    The query string is returned decoded as UTF-8, undecodable bytes
    as `surrogateescape` characters.

    Examples:
        canonicalize("http://host/%25%32%35") -> "http://host/%25"
        canonicalize("http://www.GOOgle.com/") -> "http://www.google.com/"
        canonicalize("http://3279880203/blah") -> "http://195.127.0.11/blah"
        canonicalize("http://example.com/中") -> "http://example.com/%E4%B8%AD"

    Args:
        url (Optional[RawURL]): URL to canonicalize

    Returns:
        Optional[str]: Canonical URL, or None if `url` cannot be canonicalized
    """
    if not url:
        return None

    raw = _strip_control_characters(to_text(to_bytes(url))).strip(" ")
    if "://" not in raw:
        raw = f"http://{raw}"

    scheme, _, rest = raw.partition("://")
    scheme = scheme.lower()
    if scheme not in DEFAULT_PORTS:
        logger.debug("Unsupported scheme: %r", scheme[:100])
        return None

    authority_end = _find_any(rest, "/?#")
    authority = rest[:authority_end].replace(" ", "%20")
    path, has_query, query = rest[authority_end:].partition("#")[0].partition("?")

    try:
        port = urlsplit(f"{scheme}://{authority}").port
    except ValueError as error:
        logger.debug("Unable to parse authority %r: %s", authority[:300], error)
        return None

    host, _ = split_host_port(authority)
    if not host:
        logger.debug("No host found: %r", raw[:300])
        return None
    canonical_host = _canonicalize_host(host)
    if not canonical_host:
        return None

    if port is not None and port != DEFAULT_PORTS[scheme]:
        canonical_host = f"{canonical_host}:{port}"

    canonical_path = _canonicalize_path(path or "/")
    canonical_query = f"?{from_byte_string(query)}" if has_query else ""

    return f"{scheme}://{canonical_host}{canonical_path}{canonical_query}"
