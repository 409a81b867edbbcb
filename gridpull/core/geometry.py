from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class Point:
    """A board grid coordinate."""

    x: int
    y: int


class Direction(Enum):
    """Cardinal direction of a connector or of the start pull.

    ``NONE`` is a real value: it means "no pull" and is the default for
    fields a level file leaves out.
    """

    NONE = "None"
    UP = "Up"
    DOWN = "Down"
    LEFT = "Left"
    RIGHT = "Right"

    @classmethod
    def parse(cls, value: Optional[Union[str, "Direction"]]) -> "Direction":
        """Return the direction named by ``value``, ignoring case."""
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        raise ValueError(f"unknown direction: {value!r}")


@dataclass(frozen=True)
class PointDir:
    """A connector leaving the node at ``point`` towards ``direction``."""

    point: Point
    direction: Direction
