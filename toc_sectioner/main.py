"""CLI entry point: split PDFs into outline-labeled sections."""

import argparse
import logging
import sys
import time

from toc_sectioner.batch import convert_batch
from toc_sectioner.config import ConfigurationError, Settings

logger = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toc-sectioner",
        description="Split PDF files into sections using their table of contents.",
    )
    parser.add_argument("language", nargs="?", help="Language tag stored on every record, e.g. de")
    parser.add_argument("paths", nargs="*", help="PDF files or directories (searched recursively)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _parser()
    args = parser.parse_args(argv)

    if not args.language or not args.paths:
        parser.print_usage()
        print("Please enter a language tag and at least one path to a PDF file or directory")
        return 0

    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(level=getattr(logging, settings.log_level), format="%(levelname)s %(name)s: %(message)s")

    start = time.time()
    summary = convert_batch(args.paths, args.language, settings)

    logger.info("Done: %d documents, %d records -> %s (%.1fs)",
                summary["converted"], summary["records"], settings.output_path, time.time() - start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
