"""Point filters applied to a blueprint before it is returned to a caller.

Each filter is stateless and returns a new Blueprint with the same author and
name. Exactly one filter is active per app; it is picked by name from
``Config.FILTER`` via ``get_filter``.
"""

from __future__ import annotations

import abc
from typing import Dict, List, Type

from blueprints_service.model import Blueprint, Point


class BlueprintFilter(abc.ABC):
    name = "base"

    @abc.abstractmethod
    def apply(self, bp: Blueprint) -> Blueprint:
        """Return a new Blueprint with the same identity and filtered points."""


class IdentityFilter(BlueprintFilter):
    name = "identity"

    def apply(self, bp: Blueprint) -> Blueprint:
        return bp.copy()


class RedundancyFilter(BlueprintFilter):
    """Drops a point when it equals the point right before it.

    Non-consecutive duplicates are kept; the first point always survives.
    """

    name = "redundancy"

    def apply(self, bp: Blueprint) -> Blueprint:
        out: List[Point] = []
        for p in bp.points:
            if out and out[-1] == p:
                continue
            out.append(p)
        return Blueprint(bp.author, bp.name, out)


class UndersamplingFilter(BlueprintFilter):
    """Keeps points at even indices (0, 2, 4, ...).

    Blueprints with two points or fewer are returned unchanged.
    """

    name = "undersampling"

    def apply(self, bp: Blueprint) -> Blueprint:
        pts = bp.points
        if len(pts) <= 2:
            return bp.copy()
        return Blueprint(bp.author, bp.name, pts[::2])


FILTERS: Dict[str, Type[BlueprintFilter]] = {
    IdentityFilter.name: IdentityFilter,
    RedundancyFilter.name: RedundancyFilter,
    UndersamplingFilter.name: UndersamplingFilter,
}


def get_filter(name: str) -> BlueprintFilter:
    key = (name or "").strip().lower()
    cls = FILTERS.get(key)
    if cls is None:
        raise ValueError(f"Unknown blueprint filter '{name}'; expected one of {sorted(FILTERS)}")
    return cls()
