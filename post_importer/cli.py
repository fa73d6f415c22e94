"""Command-line entry point for the post importer."""

from __future__ import annotations

import argparse
import asyncio
import logging
import subprocess
import sys
import time
from pathlib import Path
from typing import List, Sequence, Union

import requests

from .config import DEFAULT_CONTENT_ROOT, ImportConfig
from .errors import ClipboardError
from .models import SourceDocument
from .pipeline import collect_markdown_files, run_import
from .summarizer import RemoteSummarizer

logger = logging.getLogger("post_importer.cli")

CLIPBOARD_COMMANDS = (
    ["pbpaste"],
    ["wl-paste", "--no-newline"],
    ["xclip", "-selection", "clipboard", "-o"],
)


def read_clipboard() -> str:
    """Return clipboard text using the first paste utility that is available."""
    for command in CLIPBOARD_COMMANDS:
        try:
            proc = subprocess.run(command, capture_output=True, check=True)
        except FileNotFoundError:
            continue
        except subprocess.CalledProcessError as exc:
            raise ClipboardError(f"{command[0]} exited with status {exc.returncode}") from exc
        return proc.stdout.decode("utf-8", errors="replace")
    raise ClipboardError("no clipboard utility found (tried pbpaste, wl-paste, xclip)")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="post-importer",
        description="Import markdown exports as static site posts with relocated images.",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--paste",
        action="store_true",
        help="Import a document from the system clipboard",
    )
    mode.add_argument(
        "--file",
        type=Path,
        help="Import a single markdown file",
    )
    mode.add_argument(
        "--source",
        type=Path,
        help="Import every .md file directly inside this directory",
    )
    parser.add_argument(
        "--output",
        default=DEFAULT_CONTENT_ROOT,
        type=Path,
        help="Content collection directory that receives <slug>/index.md",
    )
    parser.add_argument(
        "--date",
        default=None,
        help="Publish date (YYYY-MM-DD) for synthesized frontmatter; defaults to today",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace posts whose slug already exists instead of skipping them",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def _collect_sources(args: argparse.Namespace) -> List[Union[SourceDocument, Path]]:
    if args.paste:
        logger.info("Reading from clipboard")
        content = read_clipboard()
        if not content.strip():
            raise ClipboardError("clipboard is empty")
        return [SourceDocument.from_clipboard(content)]
    if args.file:
        return [args.file]
    files = collect_markdown_files(args.source)
    logger.info("Found %d markdown file(s) in %s", len(files), args.source)
    return files


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = ImportConfig.from_env(
        Path(args.output).resolve(),
        pub_date=args.date,
        overwrite=args.overwrite,
    )

    try:
        sources = _collect_sources(args)
    except ClipboardError as exc:
        logger.error("Could not read clipboard: %s", exc)
        return 1
    except OSError as exc:
        logger.error("Could not read directory %s: %s", args.source, exc)
        return 1

    logger.info("Starting import into %s", config.content_root)
    config.content_root.mkdir(parents=True, exist_ok=True)
    overall_start = time.perf_counter()
    with requests.Session() as session:
        summarizer = RemoteSummarizer.from_config(config, session=session)
        if summarizer is None:
            logger.debug("OPENAI_API_KEY not set; descriptions come from local excerpts")
        results = asyncio.run(
            run_import(
                sources,
                config,
                source_dir=args.source,
                summarizer=summarizer,
                session=session,
            )
        )
    total_elapsed = time.perf_counter() - overall_start

    successes = len(results)
    total = len(sources)
    logger.info(
        "Import completed in %.2fs (%d/%d succeeded, %d failed)",
        total_elapsed,
        successes,
        total,
        total - successes,
    )
    for result in results:
        logger.debug(
            "%s -> %s (images: %d relocated, %d failed; frontmatter added: %s)",
            result.source,
            result.output_path,
            result.images_relocated,
            result.images_failed,
            result.frontmatter_added,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
