# tests/test_logging_setup.py

from __future__ import annotations

import logging

from tracker_linker.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_passes_package_logs() -> None:
    assert _ConsoleNoiseFilter().filter(_record("tracker_linker.core.controller", logging.DEBUG))


def test_console_filter_only_lets_errors_through_for_others() -> None:
    f = _ConsoleNoiseFilter()
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("httpx", logging.INFO))
    assert f.filter(_record("py.warnings", logging.ERROR))
    assert f.filter(_record("httpcore", logging.CRITICAL))
