"""Reading XPM pixmaps into plain pixel grids."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from solong.colors import lookup_color

# Value written for pixels whose colour is "None".
TRANSPARENT = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_HEX_NUMBER = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")
_DEC_NUMBER = re.compile(r"\s*([+-]?\d+)")
_COLOR_NAME_LIMIT = 63


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded XPM image: pixels are 0xRRGGBB values in row-major order."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]

    def to_bytes(self, bytes_per_pixel: int, big_endian: bool) -> bytes:
        """Pack the pixels, ``bytes_per_pixel`` bytes each, in the given byte order."""
        if bytes_per_pixel < 1:
            raise ValueError("bytes_per_pixel must be at least 1")
        mask = (1 << (8 * bytes_per_pixel)) - 1
        order = "big" if big_endian else "little"
        return b"".join(
            (color & mask).to_bytes(bytes_per_pixel, order) for color in self.pixels
        )


def split_words(text: str) -> list[str]:
    """Split ``text`` on runs of spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _blank_comments(text: str, opener: str, closer: str) -> str:
    """Replace comments outside double quotes by spaces, closer included."""
    out: list[str] = []
    in_quote = False
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char == '"':
            in_quote = not in_quote
        elif not in_quote and text.startswith(opener, i):
            end = text.find(closer, i + len(opener))
            stop = length if end == -1 else end + len(closer)
            out.append(" " * (stop - i))
            i = stop
            continue
        out.append(char)
        i += 1
    return "".join(out)


def strip_comments(text: str) -> str:
    """Blank out ``/* */`` and ``//`` comments, keeping the text's length.

    Comment markers inside double-quoted strings are left alone. A line
    comment is blanked together with the newline that ends it.
    """
    text = _blank_comments(text, "/*", "*/")
    return _blank_comments(text, "//", "\n")


def _to_int32(value: int) -> int:
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def _leading_hex(text: str) -> int:
    match = _HEX_NUMBER.match(text)
    if not match:
        return 0
    value = int(match.group(2), 16)
    return _to_int32(-value if match.group(1) == "-" else value)


def _atoi(text: str) -> int:
    match = _DEC_NUMBER.match(text)
    return int(match.group(1)) if match else 0


def parse_color(name: str, suffix: str | None = None) -> int:
    """Turn an XPM colour specification into a 0xRRGGBB value.

    ``#hex`` is read as a hexadecimal number. Otherwise the name, joined with
    ``suffix`` by a space when one is given, is looked up in the colour table;
    ``None`` gives -1 and an unknown name gives 0.
    """
    if name.startswith("#"):
        return _leading_hex(name[1:])
    if suffix is not None:
        name = f"{name} {suffix}"[:_COLOR_NAME_LIMIT]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _mask_shifts(mask: int) -> tuple[int, int]:
    """Return (position of lowest set bit, number of contiguous set bits)."""
    if mask <= 0:
        raise ValueError("colour masks must be positive")
    shift = 0
    while not mask & 1:
        mask >>= 1
        shift += 1
    bits = 0
    while mask & 1:
        mask >>= 1
        bits += 1
    return shift, bits


def convert_color(color: int, depth: int, masks: Sequence[int]) -> int:
    """Convert 0xRRGGBB to a pixel value for a visual of ``depth`` bits.

    Depths of 24 and more keep the colour unchanged; below that each channel
    is scaled into the (red, green, blue) ``masks``.
    """
    if depth >= 24:
        return color
    red_mask, green_mask, blue_mask = masks
    channels = ((color >> 8) & 0xFF00, color & 0xFF00, (color << 8) & 0xFF00)
    pixel = 0
    for channel, mask in zip(channels, (red_mask, green_mask, blue_mask)):
        shift, bits = _mask_shifts(mask)
        pixel += (channel >> (16 - bits)) << shift
    return pixel


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before {what}") from None


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode XPM data given as its sequence of strings (header first)."""
    rows = iter(lines)
    header = split_words(_next_line(rows, "the header"))
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise XpmError("XPM header values must be positive")

    # With one or two characters per pixel a later definition replaces an
    # earlier one; with more, the first definition of a key is kept.
    later_wins = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(rows, "the colour table")
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour line without a 'c' entry: {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour line without a colour: {line!r}")
        suffix = words[index + 1] if index + 1 < len(words) else None
        color = parse_color(words[index], suffix)
        key = line[:cpp]
        if later_wins:
            palette[key] = color
        else:
            palette.setdefault(key, color)

    pixels: list[int] = []
    for _ in range(height):
        line = _next_line(rows, "the last pixel row")
        for x in range(width):
            color = palette.get(line[cpp * x : cpp * x + cpp], 0)
            pixels.append(TRANSPARENT if color == -1 else color)
    return XpmImage(width, height, tuple(pixels))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode the text of an XPM file: comments are dropped, quoted strings read."""
    return parse_xpm(_QUOTED.findall(strip_comments(text)))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode the XPM file at ``path``."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(raw.decode("latin-1"))