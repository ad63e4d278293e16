"""Game state and player movement on a validated tile map."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, TextIO

from solong.gamemap import COLLECTABLE, EXIT, FLOOR, PLAYER, WALL, find_start

KEY_ESCAPE = 65307
KEY_LEFT = 65361
KEY_UP = 65362
KEY_RIGHT = 65363
KEY_DOWN = 65364
KEY_SHOW_MAP = ord("m")


class Direction(Enum):
    """A step on the grid as (row offset, column offset)."""

    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    @property
    def delta(self) -> tuple[int, int]:
        return self.value


_KEY_DIRECTIONS: dict[int, Direction] = {
    KEY_RIGHT: Direction.EAST,
    ord("s"): Direction.EAST,
    KEY_LEFT: Direction.WEST,
    ord("a"): Direction.WEST,
    KEY_UP: Direction.NORTH,
    ord("w"): Direction.NORTH,
    KEY_DOWN: Direction.SOUTH,
    ord("z"): Direction.SOUTH,
}


def _keysym(key: int | str) -> int:
    if isinstance(key, str):
        if len(key) != 1:
            raise ValueError(f"a key is a single character, not {key!r}")
        return ord(key)
    return key


def direction_for_key(key: int | str) -> Direction | None:
    """Return the direction a key moves the player in, or None."""
    return _KEY_DIRECTIONS.get(_keysym(key))


@dataclass(frozen=True)
class MoveResult:
    """What a single move attempt did."""

    moved: bool
    collected: bool = False
    exit_opened: bool = False
    won: bool = False


_BLOCKED = MoveResult(moved=False)


class Game:
    """A running game: the map, the player's cell, the step count and the exit state."""

    def __init__(self, rows: Sequence[str], out: TextIO | None = None) -> None:
        self.grid: list[list[str]] = [list(row) for row in rows]
        row, col = find_start(rows)
        for line in self.grid:
            if PLAYER in line:
                line[line.index(PLAYER)] = FLOOR
        self.position: tuple[int, int] = (row, col)
        self.steps = 0
        self.exit_open = False
        self.facing = Direction.NORTH
        self.running = True
        self.won = False
        self.out = out if out is not None else sys.stdout

    @property
    def rows(self) -> list[str]:
        """The current map, one string per row."""
        return ["".join(line) for line in self.grid]

    @property
    def remaining(self) -> int:
        """Number of collectables still on the map."""
        return sum(line.count(COLLECTABLE) for line in self.grid)

    def window_size(self, tile: int) -> tuple[int, int]:
        """Return (width, height) in pixels of a window with square tiles of ``tile``."""
        width = len(self.grid[0]) if self.grid else 0
        return width * tile, len(self.grid) * tile

    def _inside(self, row: int, col: int) -> bool:
        return 0 <= row < len(self.grid) and 0 <= col < len(self.grid[row])

    def move(self, direction: Direction) -> MoveResult:
        """Try to move the player one cell in ``direction``."""
        if not self.running:
            raise RuntimeError("the game is over")
        drow, dcol = direction.delta
        row, col = self.position[0] + drow, self.position[1] + dcol
        if not self._inside(row, col):
            return _BLOCKED
        self.facing = direction
        cell = self.grid[row][col]
        if cell == WALL:
            return _BLOCKED
        if cell == EXIT:
            if self.remaining:
                return _BLOCKED
            self.position = (row, col)
            self.steps += 1
            self.won = True
            self.running = False
            return MoveResult(moved=True, won=True)
        self.position = (row, col)
        self.steps += 1
        collected = cell == COLLECTABLE
        if collected:
            self.grid[row][col] = FLOOR
        opened = False
        if not self.remaining and not self.exit_open:
            self.exit_open = True
            opened = True
        return MoveResult(moved=True, collected=collected, exit_opened=opened)

    def press(self, key: int | str) -> MoveResult | None:
        """Handle a key press; movement keys return the move's result."""
        keysym = _keysym(key)
        direction = _KEY_DIRECTIONS.get(keysym)
        if direction is not None:
            result = self.move(direction)
            self.out.write(f"\nsteps taken : {self.steps}")
            if result.won:
                self.out.write("\nBravo - you have won !")
            return result
        if keysym == KEY_ESCAPE:
            self.running = False
        elif keysym == KEY_SHOW_MAP:
            for line in self.rows:
                self.out.write(f"\n{line}")
        return None