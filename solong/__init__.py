"""A top-down collect-and-escape puzzle game: map checks, game rules and the command."""

__version__ = "0.1.0"