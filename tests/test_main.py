"""Tests for main.py
"""

import pytest

from main import create_parser


def test_create_parser() -> None:
    """Test `create_parser` defaults and flags"""
    args = vars(create_parser().parse_args(["--urls", "http://example.com/"]))
    assert args == {
        "urls": ["http://example.com/"],
        "file": None,
        "mode": "prefixes",
        "bits": 256,
        "batch_size": None,
    }

    args = vars(create_parser().parse_args(["-f", "urls.txt", "-m", "prefix-map", "-b", "32", "--batch-size", "10"]))
    assert (args["file"], args["mode"], args["bits"], args["batch_size"]) == ("urls.txt", "prefix-map", 32, 10)


def test_create_parser_prefix_bits() -> None:
    """Test that hash prefix sizes outside 32 to 256 bits are rejected"""

    test_cases: list[tuple[str, bool]] = [
        ("0", False),
        ("1", False),
        ("7", False),
        ("31", False),
        ("32", True),
        ("100", True),
        ("256", True),
        ("257", False),
        ("-32", False),
    ]
    for bits, accepted in test_cases:
        argv = ["--urls", "http://example.com/", "--bits", bits]
        if accepted:
            assert create_parser().parse_args(argv).bits == int(bits), f"--bits {bits} should be accepted"
        else:
            with pytest.raises(SystemExit):
                create_parser().parse_args(argv)


def test_create_parser_invalid_flags() -> None:
    """Test that invalid flag combinations are rejected"""

    test_cases: list[list[str]] = [
        [],  # No URL source
        ["--urls", "a.com", "--file", "urls.txt"],  # Mutually exclusive
        ["--urls", "a.com", "--mode", "unknown"],
        ["--file", "urls.txt", "--batch-size", "0"],
    ]
    for argv in test_cases:
        with pytest.raises(SystemExit):
            create_parser().parse_args(argv)
