"""Command-line entry point for the page fetcher."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, FetchConfig
from .crawler import EXIT_OK, EXIT_USAGE, exit_code_for, run_fetcher

logger = logging.getLogger("webfetch.cli")

EXIT_INTERRUPTED = 130


def _add_fetch_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("urls", nargs="+", help="One or more URLs or hosts to download")
    parser.add_argument(
        "-m",
        "--metadata",
        action="store_true",
        help="Show metadata of the stored file; download it first only if it is missing",
    )
    parser.add_argument(
        "-f",
        "--full-download",
        action="store_true",
        help="Also download every image in the page for total offline use",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=".",
        type=Path,
        help="Directory where pages and image folders are written",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Seconds to wait for each HTTP response",
    )
    parser.add_argument(
        "--user-agent",
        default=DEFAULT_USER_AGENT,
        help="User-Agent header sent with every request",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first URL that fails instead of continuing with the rest",
    )
    parser.add_argument(
        "--replace-metadata",
        action="store_true",
        help="Drop existing cmd- metadata records before appending new ones",
    )
    parser.add_argument(
        "--scoped-rewrite",
        action="store_true",
        help="Rewrite image paths only inside <img> src attributes",
    )
    parser.add_argument(
        "--allow-http-errors",
        action="store_true",
        help="Store the response body even when the status is not 2xx",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fetch",
        description=(
            "Download web pages for offline use. Pages are saved to the output "
            "directory as .html files annotated with metadata."
        ),
    )
    _add_fetch_arguments(parser)
    argv = list(sys.argv[1:] if argv is None else argv)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> FetchConfig:
    return FetchConfig(
        output_root=Path(args.output),
        show_metadata=args.metadata,
        full_download=args.full_download,
        timeout=args.timeout,
        user_agent=args.user_agent,
        fail_fast=args.fail_fast,
        replace_metadata=args.replace_metadata,
        scoped_rewrite=args.scoped_rewrite,
        allow_http_errors=args.allow_http_errors,
    )


def main(argv: Sequence[str] | None = None) -> int:
    try:
        args = parse_args(argv)
    except SystemExit as exc:
        # argparse exits with 2 on bad usage; --help exits with 0.
        return EXIT_OK if not exc.code else EXIT_USAGE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = build_config(args)
    if not config.output_root.is_dir():
        logger.error("Output directory does not exist: %s", config.output_root)
        return EXIT_USAGE

    overall_start = time.perf_counter()
    try:
        results = run_fetcher(args.urls, config)
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return EXIT_INTERRUPTED
    total_elapsed = time.perf_counter() - overall_start

    successes = sum(1 for result in results if result.ok)
    total_urls = len(args.urls)
    logger.info(
        "Finished in %.2fs (%d/%d succeeded, %d failed)",
        total_elapsed,
        successes,
        total_urls,
        len(results) - successes,
    )
    for result in results:
        if not result.ok:
            logger.error("Failed: %s -> %s", result.url, result.error.describe())
    return exit_code_for(results)


if __name__ == "__main__":
    sys.exit(main())
