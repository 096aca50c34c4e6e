"""Command-line identicon generator.

Writes a single encoded identicon to stdout (or ``--output``)::

    pixicon jackwilsdon 256 > jackwilsdon.png
    pixicon jackwilsdon --format svg --mirror xy -o jackwilsdon.svg

Binary output is refused when stdout is a terminal.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO

from pixicon.api.validation import parse_integer, parse_mirror
from pixicon.core.config import config
from pixicon.core.errors import InvalidSizeFormatError, PixiconError
from pixicon.core.formats import OutputFormat
from pixicon.core.pipeline import render_identicon

logger = logging.getLogger(__name__)

PROG = "pixicon"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description="Generate an identicon for TEXT")
    parser.add_argument("text", help="text to generate the identicon from")
    parser.add_argument("size", nargs="?", default=str(config.default_size), help="image size in pixels")
    parser.add_argument(
        "-f",
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.PNG.value,
        help="output format (default: png)",
    )
    parser.add_argument("-m", "--mirror", default=config.default_mirror, help="mirror axes, any of 'xy'")
    parser.add_argument("--colour", action="store_true", help="derive the colour from TEXT instead of black")
    parser.add_argument("-o", "--output", type=Path, help="write to this file instead of stdout")
    return parser


def _is_terminal(stream: BinaryIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def main(argv: list[str] | None = None, stdout: BinaryIO | None = None) -> int:
    """Run the generator.

    Returns:
        Process exit code: 0 on success, 1 on any error.
    """
    args = _build_parser().parse_args(argv)
    out = stdout if stdout is not None else sys.stdout.buffer

    try:
        size = parse_integer(args.size)
    except InvalidSizeFormatError:
        print(f'{PROG}: invalid size "{args.size}"', file=sys.stderr)
        return 1

    output_format = OutputFormat(args.format)

    if args.output is None and not output_format.is_vector and _is_terminal(out):
        print(f"{PROG}: refusing to output image to stdout (it looks like a terminal!)", file=sys.stderr)
        joined = " ".join(argv if argv is not None else sys.argv[1:])
        print(f"\ntry piping the output to a file:\n\t{PROG} {joined} > image.{output_format.value}", file=sys.stderr)
        return 1

    try:
        mirror_x, mirror_y = parse_mirror(args.mirror)
        rendered = render_identicon(
            args.text,
            output_format,
            size=size,
            mirror_x=mirror_x,
            mirror_y=mirror_y,
            monochrome=not args.colour,
        )
    except PixiconError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError, OverflowError, MemoryError) as e:
        print(f"{PROG}: failed to render image: {str(e) or type(e).__name__}", file=sys.stderr)
        return 1

    if args.output is not None:
        args.output.write_bytes(rendered.body)
        logger.info(f"Wrote {len(rendered.body)} bytes to {args.output}")
    else:
        out.write(rendered.body)
        out.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
