"""Command-line interface for merging strips and splitting them into pages.

Examples:
    score-paginator -g scores          merge every strip directory in scores/
    score-paginator -s scores/op1.png  split one strip into 1100 px pages
    score-paginator -a scores -r1200   merge, then split at 1200 px
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from score_paginator.models.settings_models import LayoutParams, ProcessingParameters
from score_paginator.models.pipeline_models import BatchResult
from score_paginator.pipeline import merge_all, process_all, split_strip

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="score-paginator",
        description="Merge numbered score strips and split long strips into pages.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1],
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-a",
        dest="all_dir",
        metavar="DIR",
        help="merge each subdirectory of DIR, then split every merged strip",
    )
    mode.add_argument(
        "-g",
        dest="merge_dir",
        metavar="DIR",
        nargs="?",
        const=".",
        help="merge the numbered images of each subdirectory of DIR (default: .)",
    )
    mode.add_argument(
        "-s",
        dest="split_file",
        metavar="FILE",
        help="split a single continuous strip into pages",
    )
    parser.add_argument(
        "-r",
        dest="page_width",
        type=int,
        default=LayoutParams().page_width,
        metavar="WIDTH",
        help="page width in pixels, e.g. -r1100 (default: %(default)s)",
    )
    parser.add_argument(
        "--rows",
        dest="rows_per_page",
        type=int,
        default=LayoutParams().rows_per_page,
        metavar="N",
        help="rows per page (default: %(default)s)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    return parser


def _require_directory(path: str) -> bool:
    if not Path(path).is_dir():
        logger.error(f"Not a directory: {path}")
        return False
    return True


def main(argv: list[str] | None = None) -> int:
    """Run the command line; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        params = ProcessingParameters(
            layout=LayoutParams(
                page_width=args.page_width, rows_per_page=args.rows_per_page
            )
        )
    except ValidationError as e:
        parser.error(str(e))

    if args.all_dir is not None:
        if not _require_directory(args.all_dir):
            return 1
        batch = process_all(args.all_dir, params)
    elif args.merge_dir is not None:
        if not _require_directory(args.merge_dir):
            return 1
        batch = merge_all(args.merge_dir)
    elif args.split_file is not None:
        batch = BatchResult(splits=[split_strip(args.split_file, params)])
    else:
        parser.print_help()
        return 0

    return 0 if batch.ok else 1


if __name__ == "__main__":
    sys.exit(main())
