# src/tracker_linker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then either:
- converts bare task references in a file and exits (--convert), or
- runs the console host, where typed lines go through the mention controller.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..connectors.document import TextDocument
from ..core.mentions import normalize_references
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tracker-linker",
        description="Turn task mentions in markdown notes into tracker issues and links.",
    )
    parser.add_argument("--file", type=Path, help="Markdown file to open (created on /save).")
    parser.add_argument(
        "--convert",
        action="store_true",
        help="Convert bare task references in --file into links and exit.",
    )
    return parser.parse_args(argv)


def convert_file(path: Path, settings) -> bool:
    """Normalize bare references in a file in place. Returns True when the file changed."""
    doc = TextDocument.load(path)
    before = doc.get_value()
    after = normalize_references(before, settings.tracker_base_url, settings.mention_prefix)
    if after == before:
        logger.info("No bare task references in %s", path)
        return False
    doc.set_value(after)
    doc.save()
    return True


async def _run_console(state) -> None:
    try:
        await run_console_loop(state)
    finally:
        if state.tracker is not None:
            await state.tracker.aclose()
        if state.document.path is not None:
            try:
                state.document.save()
            except OSError:
                logger.exception("Failed to save document on exit.")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    if args.convert:
        if args.file is None:
            logger.error("--convert requires --file")
            return 2
        changed = convert_file(args.file, settings)
        print(f"{args.file}: {'links converted' if changed else 'unchanged'}")
        return 0

    logger.info("Starting %s...", settings.app_name)
    state = create_initial_state(settings=settings, document_path=args.file)
    asyncio.run(_run_console(state))
    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
