"""Domain model: Point and Blueprint.

A Blueprint is a named, author-owned ordered sequence of points. Identity is
the ``(author, name)`` pair; point contents never take part in equality.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class Point:
    x: int
    y: int


class Blueprint:
    def __init__(self, author: str, name: str, points: Iterable[Point] = ()) -> None:
        if not isinstance(author, str) or not author.strip():
            raise ValueError("Blueprint author must not be blank.")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Blueprint name must not be blank.")
        self._author = author
        self._name = name
        self._points: List[Point] = list(points or ())

    @property
    def author(self) -> str:
        return self._author

    @property
    def name(self) -> str:
        return self._name

    @property
    def key(self) -> Tuple[str, str]:
        return (self._author, self._name)

    @property
    def points(self) -> Tuple[Point, ...]:
        """Read-only snapshot of the points, in insertion order."""
        return tuple(self._points)

    def add_point(self, point: Point) -> None:
        self._points.append(point)

    def copy(self) -> "Blueprint":
        return Blueprint(self._author, self._name, self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Blueprint):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"Blueprint(author={self._author!r}, name={self._name!r}, points={len(self._points)})"
