"""A tile-based puzzle game: maps, game rules, XPM images and a pygame front end."""

__version__ = "0.1.0"
__all__ = ["colors", "xpm", "gamemap", "game", "app"]