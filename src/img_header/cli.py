from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from img_header.config import build_config
from img_header.errors import ImgHeaderError
from img_header.pipeline import run_pipeline

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="img-header",
        description=(
            "Put a header image on top of every image under the current directory whose "
            "path matches a regex. Results are written next to the originals as output_<name>."
        ),
    )
    parser.add_argument(
        "pattern",
        metavar="image-file-regex",
        help='Regex matched against the whole relative path, e.g. "/sub/b.png".',
    )
    parser.add_argument(
        "header",
        metavar="header-image-path",
        help="Image placed above each matched image.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    arguments = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()

    if not arguments:
        parser.print_help(sys.stdout)
        return EXIT_OK
    if len(arguments) != 2:
        print("Invalid number of arguments.", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    # "--" keeps patterns such as "-foo" from being read as options.
    args = parser.parse_args(["--", *arguments])

    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(pattern=args.pattern, header=args.header, root=Path("."))
        stats = run_pipeline(config=config)
    except ImgHeaderError as e:
        print(f"img-header: {e}", file=sys.stderr)
        return EXIT_FAILURE

    print(stats.summary())
    return EXIT_OK
