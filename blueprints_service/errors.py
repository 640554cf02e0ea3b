"""Domain errors raised by persistence and propagated through the service.

Routes translate them to envelope responses (404 / 403).
"""

from __future__ import annotations


class BlueprintPersistenceError(Exception):
    pass


class BlueprintNotFoundError(BlueprintPersistenceError):
    @classmethod
    def for_blueprint(cls, author: str, name: str) -> "BlueprintNotFoundError":
        return cls(f"Blueprint not found: {author}/{name}")

    @classmethod
    def for_author(cls, author: str) -> "BlueprintNotFoundError":
        return cls(f"No blueprints for author: {author}")


class BlueprintAlreadyExistsError(BlueprintPersistenceError):
    @classmethod
    def for_blueprint(cls, author: str, name: str) -> "BlueprintAlreadyExistsError":
        return cls(f"Blueprint already exists: {author}/{name}")
