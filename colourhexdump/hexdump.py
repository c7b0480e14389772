from __future__ import annotations

import io
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Iterator, Optional, Protocol, Tuple

from rich.color import ColorSystem
from rich.text import Text

from . import DEFAULT_CHUNK_LENGTH, DEFAULT_COLOUR_PROFILE, DEFAULT_ROW_LENGTH
from .errors import ConfigurationError, IOReadError
from .profile import ColourProfile, get_colour_profile

HEX_PADDING = "  "
ASCII_PADDING = " "
CHUNK_SEPARATOR = "  "
SECTION_SEPARATOR = "  "


def printable(c: int) -> str:  # c should be int 0..255
    return chr(c) if 32 <= c < 127 else "."


class ByteSource(Protocol):
    def read(self, size: int = -1, /) -> bytes: ...


@dataclass(frozen=True)
class RowLayout:
    row_length: int = DEFAULT_ROW_LENGTH
    chunk_length: int = DEFAULT_CHUNK_LENGTH
    colour_enabled: bool = True

    def __post_init__(self) -> None:
        for field in ("row_length", "chunk_length"):
            value = getattr(self, field)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{field} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{field} must be greater than 0, got {value}")


@lru_cache(maxsize=16)
def _cells(
    profile: ColourProfile, colour_enabled: bool
) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    # rendered hex and ascii cell for every byte value
    color_system = ColorSystem.STANDARD if colour_enabled else None
    hexes = []
    chars = []
    for c in range(256):
        style = profile.style(c)
        hexes.append(style.render("{:02x}".format(c), color_system=color_system))
        chars.append(style.render(printable(c), color_system=color_system))
    return tuple(hexes), tuple(chars)


def format_row(
    buf: bytes, byte_count: int, layout: RowLayout, profile: ColourProfile
) -> str:
    """
    Render one row: chunked hex cells, then the ascii column.

    Only the first byte_count bytes of buf are shown, the remaining
    positions up to layout.row_length are blank so that the ascii column
    lines up with full rows. Each byte gets the style of its class in
    both columns.
    """
    hexes, chars = _cells(profile, layout.colour_enabled)
    valid = max(0, min(byte_count, len(buf), layout.row_length))

    hex_cells = [hexes[c] for c in buf[:valid]]
    hex_cells.extend([HEX_PADDING] * (layout.row_length - valid))
    chunks = [
        " ".join(hex_cells[i : i + layout.chunk_length])
        for i in range(0, layout.row_length, layout.chunk_length)
    ]
    ascii_col = "".join(chars[c] for c in buf[:valid])
    ascii_col += ASCII_PADDING * (layout.row_length - valid)

    return CHUNK_SEPARATOR.join(chunks) + SECTION_SEPARATOR + ascii_col


def strip_style(text: str) -> str:
    return Text.from_ansi(text).plain


def _read_row(source: ByteSource, size: int, name: Optional[str]) -> bytes:
    # keep reading until a full row or end of input, pipes return short reads
    buf = bytearray()
    while len(buf) < size:
        try:
            data = source.read(size - len(buf))
        except OSError as ex:
            raise IOReadError(f"failed reading {name or 'input'}: {ex}", name) from ex
        if not data:
            break
        buf.extend(data)
    return bytes(buf)


def iter_rows(
    source: ByteSource,
    layout: RowLayout,
    profile: ColourProfile,
    name: Optional[str] = None,
) -> Iterator[str]:
    while True:
        data = _read_row(source, layout.row_length, name)
        if not data:
            return
        count = len(data)
        yield format_row(data.ljust(layout.row_length, b"\0"), count, layout, profile)
        if count < layout.row_length:
            return


def format_stream(
    source: ByteSource,
    layout: RowLayout,
    profile: ColourProfile,
    sink: Callable[[str], None],
    name: Optional[str] = None,
) -> int:
    """
    Dump source to sink one formatted line at a time, returns the number
    of lines produced. A read failure raises IOReadError after the lines
    already produced have been passed to sink.
    """
    rows = 0
    for line in iter_rows(source, layout, profile, name):
        sink(line)
        rows += 1
    return rows


class hexdump:
    def __init__(
        self,
        buf: bytes,
        layout: Optional[RowLayout] = None,
        profile: Optional[ColourProfile] = None,
    ):
        self.buf = buf
        self.layout = layout or RowLayout()
        self.profile = profile or get_colour_profile(DEFAULT_COLOUR_PROFILE)

    def __iter__(self) -> Iterator[str]:
        return iter_rows(io.BytesIO(self.buf), self.layout, self.profile)

    def __str__(self) -> str:
        return "\n".join(self)

    def __repr__(self) -> str:
        return "\n".join(self)
