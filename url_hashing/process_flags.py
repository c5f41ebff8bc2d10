"""
Process flags
"""
import base64
import logging
from collections.abc import Iterable, Iterator

from url_hashing.batch import get_prefix_maps, get_prefixes_batch, read_url_batches
from url_hashing.canonicalize import canonicalize
from url_hashing.expressions import ordered_expressions
from url_hashing.hash import b64_encode_prefixes

logger = logging.getLogger(__name__)

MODES: tuple[str, ...] = ("canonicalize", "expressions", "prefix-map", "prefixes")


def process_urls(raw_urls: Iterable[str], mode: str, bits: int) -> Iterator[str]:
    """Yields output lines for `raw_urls` in the given `mode`.

    canonicalize -> "<url>\\t<canonical url>"
    expressions -> "<url>\\t<expression>" per suffix/prefix expression
    prefix-map -> "<url>\\t<expression>\\t<b64 hash prefix>" per expression
    prefixes -> "<b64 hash prefix>" per distinct hash prefix, in ascending order

    URLs that cannot be canonicalized yield "<url>\\t" in canonicalize mode
    and nothing otherwise.

    Args:
        raw_urls (Iterable[str]): URLs to process
        mode (str): One of `MODES`
        bits (int): Hash prefix size in bits

    Raises:
        ValueError: `mode` is not one of `MODES`

    Yields:
        Iterator[str]: Output lines
    """
    if mode == "canonicalize":
        for raw_url in raw_urls:
            yield f"{raw_url}\t{canonicalize(raw_url) or ''}"
    elif mode == "expressions":
        for raw_url in raw_urls:
            for expression in ordered_expressions(canonicalize(raw_url)):
                yield f"{raw_url}\t{expression}"
    elif mode == "prefix-map":
        for raw_url, prefix_map in get_prefix_maps(raw_urls, bits).items():
            for expression, hash_prefix in prefix_map:
                yield f"{raw_url}\t{expression}\t{base64.b64encode(hash_prefix).decode()}"
    elif mode == "prefixes":
        yield from b64_encode_prefixes(get_prefixes_batch(raw_urls, bits))
    else:
        raise ValueError(f"Unknown mode: {mode}")


def process_flags(parser_args: dict) -> None:
    """Run URL hashing tasks based on `parser_args` flags set by user,
    printing results to stdout.

    Args:
        parser_args (dict): Flags set by user; see `main.py` for more details
    """
    if parser_args["file"]:
        url_batches: Iterable[list[str]] = read_url_batches(parser_args["file"], parser_args["batch_size"])
    else:
        url_batches = [parser_args["urls"]]

    num_lines = 0
    for raw_urls in url_batches:
        for line in process_urls(raw_urls, parser_args["mode"], parser_args["bits"]):
            print(line)
            num_lines += 1
    logger.info("%s: %d lines written", parser_args["mode"], num_lines)
