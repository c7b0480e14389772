from __future__ import annotations

import argparse
import sys
from typing import BinaryIO, Optional

from . import (
    DEFAULT_CHUNK_LENGTH,
    DEFAULT_COLOUR_PROFILE,
    DEFAULT_ROW_LENGTH,
    __version__,
)
from .errors import ConfigurationError, IOReadError
from .hexdump import RowLayout, format_stream
from .profile import ColourProfile, colour_profile_names, get_colour_profile

STDIN = "-"

# e.g. $ colourhexdump -r 16 -x 2 --show-file-prefix a.bin b.bin -- --odd-name.bin
#      $ cat blob | python -m colourhexdump --no-colour


def open_source(filename: str) -> BinaryIO:
    if filename == STDIN:
        return sys.stdin.buffer
    try:
        return open(filename, "rb")
    except OSError as ex:
        raise IOReadError(f"can't open {filename}: {ex.strerror}", filename) from ex


def dump_file(
    filename: str,
    layout: RowLayout,
    profile: ColourProfile,
    show_file_prefix: bool = False,
    show_file_heading: bool = False,
) -> int:
    prefix = f"{filename}:" if show_file_prefix else ""

    source = open_source(filename)
    if show_file_heading:
        print(f"- Contents of {filename} --")
    try:
        return format_stream(
            source, layout, profile, lambda line: print(prefix + line), filename
        )
    finally:
        if filename != STDIN:
            source.close()


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colourhexdump",
        description="HexDump, but with character-class highlighting.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-C",
        "--colour-profile",
        "--color-profile",
        dest="colour_profile",
        help="Backend to use for colour highlighting",
        default=DEFAULT_COLOUR_PROFILE,
    )
    parser.add_argument(
        "-r",
        "--row-length",
        "--row",
        dest="row_length",
        type=int,
        help="Number of bytes per display row",
        default=DEFAULT_ROW_LENGTH,
    )
    parser.add_argument(
        "-x",
        "--chunk-length",
        "--chunk",
        dest="chunk_length",
        type=int,
        help="Number of bytes per hex display group",
        default=DEFAULT_CHUNK_LENGTH,
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="files",
        action="append",
        help="Add a file to the list of files to process. '-' for STDIN",
        default=[],
    )
    parser.add_argument(
        "--show-file-prefix",
        help="Print the filename at the start of every line",
        action="store_true",
        default=False,
    )
    parser.add_argument(
        "--show-file-heading",
        help="Print the filename before the hexdump output",
        action="store_true",
        default=False,
    )
    parser.add_argument(
        "-c",
        "--colour",
        "--color",
        dest="colour",
        help="Enable coloured output",
        action=argparse.BooleanOptionalAction,
        default=True,
    )
    parser.add_argument(
        "--list-profiles",
        help="List the available colour profiles and exit",
        action="store_true",
        default=False,
    )
    parser.add_argument(
        "--verbose", help="Print progress to stderr", action="store_true", default=False
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("extra_files", nargs="*", metavar="FILE", help="Files to dump")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = get_parser().parse_intermixed_args(argv)

    if args.list_profiles:
        for name in colour_profile_names():
            print(name)
        return 0

    # configuration must be good before anything is printed
    try:
        layout = RowLayout(args.row_length, args.chunk_length, args.colour)
        profile = get_colour_profile(args.colour_profile)
    except ConfigurationError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 2

    files = args.files + args.extra_files
    if not files:
        files = [STDIN]

    if args.verbose:
        print(f"using {profile.name} with {layout}", file=sys.stderr)

    status = 0
    for filename in files:
        if args.verbose:
            print(f"reading from {filename}", file=sys.stderr)
        try:
            rows = dump_file(
                filename,
                layout,
                profile,
                show_file_prefix=args.show_file_prefix,
                show_file_heading=args.show_file_heading,
            )
        except IOReadError as ex:
            print(f"error: {ex}", file=sys.stderr)
            status = 1
            continue
        if args.verbose:
            print(f"wrote {rows} rows for {filename}", file=sys.stderr)
    return status
