"""Building blocks for a desktop notification daemon: logging, markup, icons, colours, status and command-line parsing."""

__version__ = "1.4.0"

__all__ = [
    "cli",
    "colors",
    "icon",
    "log",
    "markup",
    "status",
]