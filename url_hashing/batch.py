"""
Utilities for hashing URLs in batches
"""
import logging
from collections.abc import Iterable, Iterator
from typing import Optional

from more_itertools import chunked
from tqdm import tqdm  # type: ignore

from url_hashing.prefixes import DEFAULT_PREFIX_BITS, get_prefix_map, get_prefixes
from url_hashing.utils.config import show_progress, url_batch_size
from url_hashing.utils.types import PrefixMap

logger = logging.getLogger(__name__)


def get_prefixes_batch(raw_urls: Iterable[str], bits: int = DEFAULT_PREFIX_BITS) -> set[bytes]:
    """Get hash prefixes for all suffix/prefix expressions of every URL in `raw_urls`.

    Args:
        raw_urls (Iterable[str]): URLs to process
        bits (int, optional): Hash prefix size in bits. Defaults to 256.

    Returns:
        set[bytes]: Hash prefixes of all URLs in `raw_urls`
    """
    hash_prefixes: set[bytes] = set()
    for raw_url in tqdm(raw_urls, disable=not show_progress()):
        hash_prefixes.update(get_prefixes(raw_url, bits))
    return hash_prefixes


def get_prefix_maps(raw_urls: Iterable[str], bits: int = DEFAULT_PREFIX_BITS) -> dict[str, PrefixMap]:
    """Get (expression, hash prefix) pairs for every URL in `raw_urls`.

    Args:
        raw_urls (Iterable[str]): URLs to process
        bits (int, optional): Hash prefix size in bits. Defaults to 256.

    Returns:
        dict[str, PrefixMap]: (expression, hash prefix) pairs keyed by URL;
        URLs that cannot be canonicalized map to an empty list
    """
    return {
        raw_url: get_prefix_map(raw_url, bits)
        for raw_url in tqdm(raw_urls, disable=not show_progress())
    }


def read_url_batches(txt_filepath: str, batch_size: Optional[int] = None) -> Iterator[list[str]]:
    """Yields all listed URLs in batches from local text file.

    Blank lines are skipped.

    Args:
        txt_filepath (str): Filepath of local text file containing URLs
        batch_size (Optional[int], optional): Number of URLs per batch.
        Defaults to None, which means the `URL_BATCH_SIZE` configuration value.

    Yields:
        Iterator[list[str]]: Batch of URLs as a list
    """
    try:
        with open(txt_filepath, "r", encoding="utf-8", errors="surrogateescape") as file:
            raw_urls = (line.strip() for line in file)
            yield from chunked((raw_url for raw_url in raw_urls if raw_url), batch_size or url_batch_size())
    except OSError as error:
        logger.warning(
            "Failed to retrieve local list (%s); yielding empty list: %s",
            txt_filepath,
            error,
        )
        yield []


def get_local_file_prefixes(txt_filepath: str, bits: int = DEFAULT_PREFIX_BITS) -> Iterator[set[bytes]]:
    """Yields hash prefixes of all URLs listed in local text file, one set per batch.

    Args:
        txt_filepath (str): Filepath of local text file containing URLs
        bits (int, optional): Hash prefix size in bits. Defaults to 256.

    Yields:
        Iterator[set[bytes]]: Hash prefixes of a batch of URLs
    """
    for batch_number, raw_urls in enumerate(read_url_batches(txt_filepath), start=1):
        logger.info("Hashing batch %d (%d URLs) from %s", batch_number, len(raw_urls), txt_filepath)
        yield get_prefixes_batch(raw_urls, bits)
