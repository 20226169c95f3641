# tests/test_sanitizer.py

from __future__ import annotations

import pytest

from tracker_linker.core.sanitizer import sanitize


def test_sanitize_strips_list_emphasis_code_and_links() -> None:
    assert sanitize("1. **Do** the `thing` [here](http://x)") == "Do the thing here"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("- fix the login page", "fix the login page"),
        ("* _urgent_ deploy", "urgent deploy"),
        ("+ ***very*** important", "very important"),
        ("> quoted request", "quoted request"),
        ("<b>bold</b> text", "bold text"),
        ("  padded  ", "padded"),
    ],
)
def test_sanitize_markup_kinds(raw: str, expected: str) -> None:
    assert sanitize(raw) == expected


def test_sanitize_removes_leading_markers_only_once() -> None:
    assert sanitize("1. 2. second item") == "2. second item"
    assert sanitize("- - nested") == "- nested"


def test_sanitize_keeps_markers_in_the_middle() -> None:
    assert sanitize("call 1. then - later > now") == "call 1. then - later > now"


def test_sanitize_all_markup_and_empty_give_empty_string() -> None:
    assert sanitize("") == ""
    assert sanitize("<br/>") == ""
    assert sanitize("-   ") == ""
    assert sanitize("   ") == ""


def test_sanitize_is_idempotent_on_plain_text() -> None:
    plain = "Ship the release notes"
    assert sanitize(plain) == plain
    once = sanitize("1. **Do** the `thing`")
    assert sanitize(once) == once
