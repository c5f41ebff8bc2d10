"""
Main
"""
from argparse import (
    Action,
    ArgumentParser,
    RawDescriptionHelpFormatter,
    RawTextHelpFormatter,
    ArgumentDefaultsHelpFormatter,
)
from url_hashing.process_flags import MODES, process_flags
from url_hashing.utils.log import init_logger

MIN_PREFIX_BITS: int = 32
MAX_PREFIX_BITS: int = 256


class CustomFormatter(
    RawTextHelpFormatter, RawDescriptionHelpFormatter, ArgumentDefaultsHelpFormatter
):
    """Custom Help text formatter for argparse."""


class MinimumOneAction(Action):
    """Ensures minimum argument input value of 1"""

    def __call__(self, parser, namespace, values, option_string=None):
        if values < 1:
            parser.error("Minimum input value for {0} is 1".format(option_string))
        setattr(namespace, self.dest, values)


class PrefixBitsAction(Action):
    """Ensures hash prefix size is within MIN_PREFIX_BITS to MAX_PREFIX_BITS"""

    def __call__(self, parser, namespace, values, option_string=None):
        if not MIN_PREFIX_BITS <= values <= MAX_PREFIX_BITS:
            parser.error(
                "Input value for {0} must be from {1} to {2}".format(
                    option_string, MIN_PREFIX_BITS, MAX_PREFIX_BITS
                )
            )
        setattr(namespace, self.dest, values)


def create_parser() -> ArgumentParser:
    """Build the command-line argument parser.

    Returns:
        ArgumentParser: parser for `main.py` flags
    """
    parser = ArgumentParser(
        description="""
    Canonicalize URLs, generate their suffix/prefix expressions and compute
    their hash prefixes as specified by Google Safe Browsing API / Web Risk API.

    For example, to print the 4-byte hash prefixes of all URLs in urls.txt,
    run `python3 main.py --file urls.txt --mode prefixes --bits 32`
    """,
        formatter_class=CustomFormatter,
        allow_abbrev=False # Disallows long options to be abbreviated if the abbreviation is unambiguous
    )

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "-u",
        "--urls",
        nargs="+",
        help="""
        1 or more URLs to process
        (this flag cannot be enabled together with '--file')
        """,
        type=str,
    )
    group.add_argument(
        "-f",
        "--file",
        help="""
        Local text file with 1 URL per line
        (this flag cannot be enabled together with '--urls')
        """,
        type=str,
    )

    parser.add_argument(
        "-m",
        "--mode",
        required=False,
        choices=MODES,
        help="""
        Output to print
        ----------------------------
        canonicalize -> canonical URL of each URL
        expressions -> suffix/prefix expressions of each URL
        prefix-map -> each suffix/prefix expression with its b64 encoded hash prefix
        prefixes -> all distinct b64 encoded hash prefixes
        """,
        default="prefixes",
        type=str,
    )

    parser.add_argument(
        "-b",
        "--bits",
        required=False,
        help="""
        Hash prefix size in bits, from 32 (4 bytes) to 256 (full sha256 hash).
        Values that are not a multiple of 8 are rounded down to whole bytes.
        """,
        default=MAX_PREFIX_BITS,
        type=int,
        action=PrefixBitsAction,
    )

    parser.add_argument(
        "--batch-size",
        required=False,
        help="""
        (OPTIONAL: Omit this flag to use URL_BATCH_SIZE from .env)
        Number of URLs from '--file' to process per batch.
        """,
        default=None,
        type=int,
        action=MinimumOneAction,
    )

    return parser


if __name__ == "__main__":
    args = create_parser().parse_args()
    init_logger()
    process_flags(parser_args=vars(args))
