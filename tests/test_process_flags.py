"""Tests for process_flags.py
"""

import base64

import pytest

from url_hashing.hash import truncated_digest_prefix
from url_hashing.process_flags import process_flags, process_urls


def test_process_urls() -> None:
    """Test `process_urls`"""
    raw_urls = ["http://www.GOOgle.com/", "ftp://example.com/"]
    b64_prefix = base64.b64encode(truncated_digest_prefix("www.google.com/", 32)).decode()

    test_cases: list[tuple[str, list[str]]] = [
        (
            "canonicalize",
            ["http://www.GOOgle.com/\thttp://www.google.com/", "ftp://example.com/\t"],
        ),
        (
            "expressions",
            ["http://www.GOOgle.com/\twww.google.com/", "http://www.GOOgle.com/\tgoogle.com/"],
        ),
        ("prefix-map", [f"http://www.GOOgle.com/\twww.google.com/\t{b64_prefix}"]),
    ]
    for mode, expected in test_cases:
        assert list(process_urls(raw_urls, mode, 32))[: len(expected)] == expected, (
            f"{mode} output incorrect"
        )

    assert len(list(process_urls(raw_urls, "prefix-map", 32))) == 2
    assert list(process_urls(raw_urls, "prefixes", 32)) == sorted(
        base64.b64encode(truncated_digest_prefix(expression, 32)).decode()
        for expression in ("www.google.com/", "google.com/")
    )


def test_process_urls_unknown_mode() -> None:
    """Test that an unknown mode is rejected"""
    with pytest.raises(ValueError):
        list(process_urls(["http://example.com/"], "unknown", 32))


def test_process_flags(tmp_path, capsys) -> None:
    """Test `process_flags`"""
    txt_filepath = tmp_path / "urls.txt"
    txt_filepath.write_text("http://3279880203/blah\n\nwww.example.com\n", encoding="utf-8")

    process_flags(
        parser_args={"urls": None, "file": str(txt_filepath), "mode": "canonicalize", "bits": 256, "batch_size": 1}
    )
    assert capsys.readouterr().out.splitlines() == [
        "http://3279880203/blah\thttp://195.127.0.11/blah",
        "www.example.com\thttp://www.example.com/",
    ]

    process_flags(
        parser_args={"urls": ["http://example.com/"], "file": None, "mode": "prefixes", "bits": 256, "batch_size": None}
    )
    assert capsys.readouterr().out.splitlines() == [
        base64.b64encode(truncated_digest_prefix("example.com/", 256)).decode()
    ]
