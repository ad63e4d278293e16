"""Command-line entry point: load a map and play it in a window."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Mapping, Sequence

from solong.game import (
    KEY_DOWN,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    Direction,
    Game,
)
from solong.gamemap import COLLECTABLE, EXIT, FLOOR, WALL, MapError, load_map
from solong.xpm import XpmImage, load_xpm

TILE = 100
WINDOW_TITLE = "So long :)"
DEFAULT_TEXTURE_DIR = Path("textures")

# (key, file name, description) for every image the game draws.
TEXTURES: tuple[tuple[str, str, str], ...] = (
    ("tile", "tile.xpm", "Tile image"),
    ("up", "up.xpm", "Player up image"),
    ("down", "down.xpm", "Player down image"),
    ("left", "left.xpm", "Player left image"),
    ("right", "right.xpm", "Player right image"),
    ("wall", "wall.xpm", "Wall image"),
    ("coll", "coll.xpm", "Collectable image"),
    ("exit", "exit.xpm", "Exit image"),
    ("noexit", "noexit.xpm", "No exit image"),
)

_FACING_TEXTURE = {
    Direction.NORTH: "up",
    Direction.SOUTH: "down",
    Direction.EAST: "right",
    Direction.WEST: "left",
}

_WHITE = (0xFF, 0xFF, 0xFF)
_YELLOW = (0xFF, 0xFF, 0x00)


def missing_textures(directory: str | Path) -> list[tuple[str, Path]]:
    """Return (description, path) for each texture file absent from ``directory``."""
    base = Path(directory)
    return [
        (label, base / name)
        for _, name, label in TEXTURES
        if not (base / name).is_file()
    ]


def load_textures(directory: str | Path) -> dict[str, XpmImage]:
    """Decode every texture in ``directory``, keyed by texture name."""
    base = Path(directory)
    return {key: load_xpm(base / name) for key, name, _ in TEXTURES}


def _write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _surface(pygame, image: XpmImage):
    data = image.to_bytes(3, big_endian=True)
    return pygame.image.frombuffer(data, (image.width, image.height), "RGB").copy()


def _keysym(pygame, event) -> int | None:
    special = {
        pygame.K_LEFT: KEY_LEFT,
        pygame.K_UP: KEY_UP,
        pygame.K_RIGHT: KEY_RIGHT,
        pygame.K_DOWN: KEY_DOWN,
        pygame.K_ESCAPE: KEY_ESCAPE,
    }
    if event.key in special:
        return special[event.key]
    if 0 < event.key < 256:
        return event.key
    return None


def _draw(pygame, screen, game: Game, images: Mapping[str, object], font, show_steps: bool) -> None:
    for row, line in enumerate(game.grid):
        for col, cell in enumerate(line):
            pos = (col * TILE, row * TILE)
            if cell == FLOOR:
                screen.blit(images["tile"], pos)
            elif cell == WALL:
                screen.blit(images["wall"], pos)
            elif cell == COLLECTABLE:
                screen.blit(images["coll"], pos)
            elif cell == EXIT:
                screen.blit(images["exit" if game.exit_open else "noexit"], pos)
    row, col = game.position
    screen.blit(images[_FACING_TEXTURE[game.facing]], (col * TILE, row * TILE))
    if show_steps:
        screen.blit(images["wall"], (0, 0))
        if font is not None:
            baseline = TILE // 2 + 2
            label = font.render(" Steps:", True, _WHITE)
            screen.blit(label, (TILE // 6, baseline - label.get_height()))
            count = font.render(str(game.steps), True, _YELLOW)
            screen.blit(count, (TILE - TILE // 3 - 6, baseline - count.get_height()))
    pygame.display.flip()


def _play(rows: Sequence[str], textures: Mapping[str, XpmImage]) -> int:
    import pygame

    try:
        pygame.init()
        info = pygame.display.Info()
    except pygame.error as exc:
        _write(f"Error\n{exc}")
        return 1
    try:
        game = Game(rows)
        width, height = game.window_size(TILE)
        screen_w, screen_h = info.current_w, info.current_h
        if (screen_w > 0 and width > screen_w) or (screen_h > 0 and height > screen_h):
            _write("Error\nmap too big")
            return 0
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(WINDOW_TITLE)
        images = {key: _surface(pygame, image) for key, image in textures.items()}
        font = pygame.font.Font(None, 20) if pygame.font.get_init() else None
        show_steps = False
        _draw(pygame, screen, game, images, font, show_steps)
        while game.running:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                break
            if event.type != pygame.KEYDOWN:
                continue
            keysym = _keysym(pygame, event)
            if keysym is None:
                continue
            result = game.press(keysym)
            if result is not None:
                show_steps = True
            sys.stdout.flush()
            if game.running:
                _draw(pygame, screen, game, images, font, show_steps)
        return 0
    finally:
        pygame.quit()


def run(path: str | Path, texture_dir: str | Path = DEFAULT_TEXTURE_DIR) -> int:
    """Load the map at ``path`` and play it; return the exit status.

    Raises MapError when the map is unusable.
    """
    rows = load_map(path)
    missing = missing_textures(texture_dir)
    if missing:
        for label, file in missing:
            _write(f"Error\n{label} missing {file}\n")
        return 0
    textures = load_textures(texture_dir)
    return _play(rows, textures)


def main(argv: Sequence[str] | None = None) -> int:
    """Play the map named by the single command-line argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        _write("Error\narguments")
        return 0
    try:
        return run(args[0])
    except MapError as exc:
        _write(f"Error\n{exc}")
        return 0


if __name__ == "__main__":
    sys.exit(main())