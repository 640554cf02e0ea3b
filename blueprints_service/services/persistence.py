"""Blueprint persistence: the storage contract and its in-memory backend.

Provides:
- ``BlueprintPersistence``: abstract contract shared by every backend.
- ``InMemoryBlueprintPersistence``: process-local dict keyed by (author, name).
- ``sample_blueprints()``: the demo data seeded into a fresh store.
- ``build_persistence(cfg)``: select and construct the configured backend.

Both backends raise ``BlueprintNotFoundError`` / ``BlueprintAlreadyExistsError``
with the same semantics, so the service never needs to know which is active.
"""

from __future__ import annotations

import abc
import logging
import threading
from typing import Dict, Iterable, List, Optional, Set, Tuple

from blueprints_service.config import Config
from blueprints_service.errors import BlueprintAlreadyExistsError, BlueprintNotFoundError
from blueprints_service.model import Blueprint, Point


class BlueprintPersistence(abc.ABC):
    @abc.abstractmethod
    def save_blueprint(self, bp: Blueprint) -> None:
        """Store ``bp``; raise BlueprintAlreadyExistsError on a colliding (author, name)."""

    @abc.abstractmethod
    def get_blueprint(self, author: str, name: str) -> Blueprint:
        """Return a full copy of the stored blueprint, points in insertion order."""

    @abc.abstractmethod
    def get_blueprints_by_author(self, author: str) -> Set[Blueprint]:
        """Return every blueprint of ``author``; raise BlueprintNotFoundError if none."""

    @abc.abstractmethod
    def get_all_blueprints(self) -> Set[Blueprint]:
        ...

    @abc.abstractmethod
    def add_point(self, author: str, name: str, x: int, y: int) -> None:
        """Append (x, y) to the stored blueprint."""

    def seed(self, blueprints: Iterable[Blueprint]) -> int:
        """Save each blueprint that is not already present. Returns the number saved."""
        saved = 0
        for bp in blueprints:
            try:
                self.save_blueprint(bp)
            except BlueprintAlreadyExistsError:
                continue
            saved += 1
        return saved


class InMemoryBlueprintPersistence(BlueprintPersistence):
    """Keyed map held in process memory. Not durable; reset on restart.

    A single re-entrant lock serializes access so concurrent requests cannot
    corrupt the map or lose an appended point. Blueprints are copied on the way
    in and on the way out, so callers never share the stored instances.
    """

    def __init__(self, blueprints: Optional[Iterable[Blueprint]] = None) -> None:
        self._lock = threading.RLock()
        self._store: Dict[Tuple[str, str], Blueprint] = {}
        if blueprints:
            self.seed(blueprints)

    def save_blueprint(self, bp: Blueprint) -> None:
        with self._lock:
            if bp.key in self._store:
                raise BlueprintAlreadyExistsError.for_blueprint(bp.author, bp.name)
            self._store[bp.key] = bp.copy()
        logging.info(f"Saved blueprint {bp.author}/{bp.name} ({len(bp.points)} points) in memory")

    def get_blueprint(self, author: str, name: str) -> Blueprint:
        with self._lock:
            bp = self._store.get((author, name))
            if bp is None:
                raise BlueprintNotFoundError.for_blueprint(author, name)
            return bp.copy()

    def get_blueprints_by_author(self, author: str) -> Set[Blueprint]:
        with self._lock:
            found = {bp.copy() for (a, _), bp in self._store.items() if a == author}
        if not found:
            raise BlueprintNotFoundError.for_author(author)
        return found

    def get_all_blueprints(self) -> Set[Blueprint]:
        with self._lock:
            return {bp.copy() for bp in self._store.values()}

    def add_point(self, author: str, name: str, x: int, y: int) -> None:
        with self._lock:
            bp = self._store.get((author, name))
            if bp is None:
                raise BlueprintNotFoundError.for_blueprint(author, name)
            bp.add_point(Point(x, y))
        logging.info(f"Appended point ({x}, {y}) to {author}/{name}")


def sample_blueprints() -> List[Blueprint]:
    """Demo data available right after startup when seeding is enabled."""
    return [
        Blueprint("john", "house", [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]),
        Blueprint("john", "garage", [Point(5, 5), Point(15, 15), Point(20, 20)]),
        Blueprint("jane", "garden", [Point(2, 2), Point(3, 4), Point(5, 6)]),
    ]


def build_persistence(cfg: Config = Config) -> BlueprintPersistence:
    """Construct the backend named by ``cfg.PERSISTENCE`` and seed it if configured."""
    kind = (cfg.PERSISTENCE or "memory").strip().lower()
    if kind == "memory":
        persistence: BlueprintPersistence = InMemoryBlueprintPersistence()
    elif kind in ("sql", "postgres"):
        from blueprints_service.services.sql_persistence import SqlBlueprintPersistence

        persistence = SqlBlueprintPersistence.from_url(cfg.DATABASE_URL, echo=cfg.SQL_ECHO)
        persistence.create_schema()
    else:
        raise ValueError(f"Unknown persistence backend '{cfg.PERSISTENCE}'; expected 'memory' or 'sql'")

    logging.info(f"Using {type(persistence).__name__} for blueprint storage")
    if cfg.SEED_SAMPLE_DATA:
        n = persistence.seed(sample_blueprints())
        logging.info(f"Seeded {n} sample blueprints")
    return persistence
