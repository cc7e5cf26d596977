"""The daemon's global window status."""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = ["StatusField", "DunstStatus"]


class StatusField(enum.Enum):
    """A field of :class:`DunstStatus` that can be changed."""

    FULLSCREEN = "fullscreen"
    IDLE = "idle"
    RUNNING = "running"


@dataclass
class DunstStatus:
    """Whether a fullscreen window is focused, the daemon runs and the user is idle.

    The defaults are the state the daemon starts in: running and not idle.
    """

    fullscreen: bool = False
    running: bool = True
    idle: bool = False

    def set(self, field: StatusField, value: bool) -> None:
        """Set ``field`` to ``value``; raises ValueError for an unknown field."""
        if not isinstance(field, StatusField):
            raise ValueError(f"Invalid dunst_status enum value: {field!r}")
        setattr(self, field.value, bool(value))