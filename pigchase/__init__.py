"""A tile-based maze game: collect the pigs, avoid the cat, reach the exit."""

__version__ = "0.1.0"
__all__ = ["mapfile", "game", "colors", "xpm", "app"]