"""Reading and validating the rectangular tile maps the game is played on."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

MAP_EXTENSION = ".ber"
KNOWN_ITEMS = "PCE01"
WALL = "1"
FLOOR = "0"
PLAYER = "P"
COLLECTABLE = "C"
EXIT = "E"
_VISITED = " "


class MapError(ValueError):
    """Raised when a map file cannot be read or does not describe a playable map."""


def has_extension(path: str | Path, ext: str) -> bool:
    """Tell whether ``path`` ends with ``ext``; empty names never match."""
    name = str(path)
    if not name or not ext:
        return False
    return name.endswith(ext)


def read_map(path: str | Path) -> list[str]:
    """Read the rows of a map file.

    A blank line anywhere in the file, or a file with no rows at all, is a
    format error. A final newline after the last row is allowed.
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise MapError(f"cannot read {path}: {exc}") from exc
    text = raw.decode("latin-1")
    if not text:
        raise MapError("Map format")
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    if any(line == "" for line in lines):
        raise MapError("Map format")
    return lines


def is_rectangle(rows: Sequence[str]) -> bool:
    """Tell whether every row has the length of the first one."""
    if not rows:
        return True
    width = len(rows[0])
    return all(len(row) == width for row in rows)


def has_closed_border(rows: Sequence[str]) -> bool:
    """Tell whether the map is surrounded by walls."""
    if not rows or not rows[0]:
        return False
    last_col = len(rows[0]) - 1
    if any(cell != WALL for cell in rows[0]):
        return False
    if any(cell != WALL for cell in rows[-1]):
        return False
    for row in rows[1:-1]:
        if not row or row[0] != WALL:
            return False
        if last_col >= len(row) or row[last_col] != WALL:
            return False
    return True


def has_only_known_items(rows: Sequence[str]) -> bool:
    """Tell whether every cell holds one of the known map items."""
    return all(cell in KNOWN_ITEMS for row in rows for cell in row)


def count_object(rows: Sequence[str], item: str) -> int:
    """Count the cells holding ``item``."""
    return sum(row.count(item) for row in rows)


def find_start(rows: Sequence[str]) -> tuple[int, int]:
    """Return (row, column) of the player's starting cell.

    Within a row the first player cell counts; among rows, the last one
    holding a player wins.
    """
    start: tuple[int, int] | None = None
    for y, row in enumerate(rows):
        x = row.find(PLAYER)
        if x != -1:
            start = (y, x)
    if start is None:
        raise MapError("Player")
    return start


def flood_fill(grid: list[list[str]], start: tuple[int, int]) -> None:
    """Mark every cell reachable from ``start`` with a space, in place.

    Walls stop the fill. An exit cell is marked but the fill does not pass
    through it.
    """
    stack = [start]
    while stack:
        y, x = stack.pop()
        if not (0 <= y < len(grid) and 0 <= x < len(grid[y])):
            continue
        cell = grid[y][x]
        if cell in (WALL, _VISITED):
            continue
        grid[y][x] = _VISITED
        if cell == EXIT:
            continue
        stack.extend(((y, x + 1), (y + 1, x), (y, x - 1), (y - 1, x)))


def has_valid_path(rows: Sequence[str]) -> bool:
    """Tell whether the player can reach every collectable and the exit."""
    grid = [list(row) for row in rows]
    y, x = find_start(rows)
    grid[y][x] = FLOOR
    flood_fill(grid, (y, x))
    return not any(cell.isalpha() and cell.isupper() for row in grid for cell in row)


def validate_map(rows: Sequence[str]) -> None:
    """Check that the map is playable, raising MapError naming the first fault."""
    if not rows:
        raise MapError("Problem of map format")
    if not is_rectangle(rows):
        raise MapError("not a Rectangle")
    if not has_closed_border(rows):
        raise MapError("Border")
    if not has_only_known_items(rows):
        raise MapError("items unknown")
    if count_object(rows, PLAYER) != 1:
        raise MapError("Player")
    if count_object(rows, EXIT) != 1:
        raise MapError("Exit")
    if not count_object(rows, COLLECTABLE):
        raise MapError("Collectables")
    if not has_valid_path(rows):
        raise MapError("no path possible")


def load_map(path: str | Path) -> list[str]:
    """Read and validate a ``.ber`` map file, returning its rows."""
    if not has_extension(path, MAP_EXTENSION):
        raise MapError("Problem file type '.ber'")
    rows = read_map(path)
    validate_map(rows)
    return rows