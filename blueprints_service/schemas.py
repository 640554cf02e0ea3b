"""Request/response schemas for API endpoints.

Holds Pydantic models to validate input payloads and shape responses
for the /blueprints routes, plus the uniform ``{code, message, data}``
envelope every response is wrapped in.
"""

from __future__ import annotations

from typing import Annotated, Any, Iterable, List, Optional

from pydantic import BaseModel, Field, StrictInt, field_validator

from blueprints_service.model import Blueprint, Point


# Coordinates are stored in 32-bit INTEGER columns by the SQL backend
Coordinate = Annotated[StrictInt, Field(ge=-(2**31), le=2**31 - 1)]


class PointIn(BaseModel):
    x: Coordinate
    y: Coordinate

    def to_domain(self) -> Point:
        return Point(self.x, self.y)


class NewBlueprintRequest(BaseModel):
    author: str
    name: str
    points: List[PointIn] = Field(default_factory=list)

    @field_validator("author", "name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    def to_domain(self) -> Blueprint:
        return Blueprint(self.author, self.name, [p.to_domain() for p in self.points])


class PointOut(BaseModel):
    x: int
    y: int


class BlueprintOut(BaseModel):
    author: str
    name: str
    points: List[PointOut]

    @classmethod
    def from_domain(cls, bp: Blueprint) -> "BlueprintOut":
        return cls(author=bp.author, name=bp.name, points=[PointOut(x=p.x, y=p.y) for p in bp.points])

    @classmethod
    def many(cls, bps: Iterable[Blueprint]) -> List["BlueprintOut"]:
        # Sets have no order; sort for stable output
        return [cls.from_domain(bp) for bp in sorted(bps, key=lambda b: b.key)]


class ApiResponse(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None
