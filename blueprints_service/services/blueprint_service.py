"""BlueprintsService: business logic between the routes and persistence.

Its only added behaviour is applying the configured point filter to a single
blueprint on the way out. Persistence errors propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import Set

from blueprints_service.model import Blueprint
from blueprints_service.services.filters import BlueprintFilter
from blueprints_service.services.persistence import BlueprintPersistence


class BlueprintsService:
    def __init__(self, persistence: BlueprintPersistence, blueprint_filter: BlueprintFilter) -> None:
        self.persistence = persistence
        self.blueprint_filter = blueprint_filter

    def get_all_blueprints(self) -> Set[Blueprint]:
        return self.persistence.get_all_blueprints()

    def get_blueprints_by_author(self, author: str) -> Set[Blueprint]:
        return self.persistence.get_blueprints_by_author(author)

    def get_blueprint(self, author: str, name: str) -> Blueprint:
        bp = self.persistence.get_blueprint(author, name)
        filtered = self.blueprint_filter.apply(bp)
        logging.debug(
            f"Filter '{self.blueprint_filter.name}' on {author}/{name}: "
            f"{len(bp.points)} -> {len(filtered.points)} points"
        )
        return filtered

    def add_new_blueprint(self, bp: Blueprint) -> None:
        self.persistence.save_blueprint(bp)

    def add_point(self, author: str, name: str, x: int, y: int) -> None:
        self.persistence.add_point(author, name, x, y)
