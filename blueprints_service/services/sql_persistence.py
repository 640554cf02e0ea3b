"""Relational blueprint persistence backed by SQLAlchemy.

Schema:
- ``blueprints``: id, author, name; (author, name) is unique.
- ``points``: id, blueprint_id, position, x, y; owned by its blueprint
  (cascade delete, orphan removal) and ordered by ``position``;
  (blueprint_id, position) is unique.

Each public method is one unit of work (``Session.begin()``). Consistency and
isolation are delegated to the database.
"""

from __future__ import annotations

import logging
from typing import List, Set

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, relationship, sessionmaker
from sqlalchemy.pool import StaticPool

from blueprints_service.errors import BlueprintAlreadyExistsError, BlueprintNotFoundError
from blueprints_service.model import Blueprint, Point
from blueprints_service.services.persistence import BlueprintPersistence


class Base(DeclarativeBase):
    pass


class BlueprintRow(Base):
    __tablename__ = "blueprints"
    __table_args__ = (UniqueConstraint("author", "name", name="uq_blueprints_author_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    points: Mapped[List["PointRow"]] = relationship(
        back_populates="blueprint",
        cascade="all, delete-orphan",
        order_by="PointRow.position",
        collection_class=ordering_list("position"),
        lazy="selectin",
    )


class PointRow(Base):
    __tablename__ = "points"
    __table_args__ = (UniqueConstraint("blueprint_id", "position", name="uq_points_blueprint_position"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    blueprint_id: Mapped[int] = mapped_column(
        ForeignKey("blueprints.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Index within the owning blueprint; kept dense by ordering_list
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    x: Mapped[int] = mapped_column(Integer, nullable=False)
    y: Mapped[int] = mapped_column(Integer, nullable=False)

    blueprint: Mapped[BlueprintRow] = relationship(back_populates="points")


def _to_domain(row: BlueprintRow) -> Blueprint:
    return Blueprint(row.author, row.name, [Point(p.x, p.y) for p in row.points])


def _to_row(bp: Blueprint) -> BlueprintRow:
    row = BlueprintRow(author=bp.author, name=bp.name)
    for i, p in enumerate(bp.points):
        row.points.append(PointRow(position=i, x=p.x, y=p.y))
    return row


class SqlBlueprintPersistence(BlueprintPersistence):
    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, url: str, echo: bool = False) -> "SqlBlueprintPersistence":
        kwargs = {"echo": echo}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            # An in-memory SQLite database lives only as long as its connection
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
        return cls(create_engine(url, **kwargs))

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    def _find(self, session: Session, author: str, name: str, for_update: bool = False):
        stmt = select(BlueprintRow).where(BlueprintRow.author == author, BlueprintRow.name == name)
        if for_update:
            stmt = stmt.with_for_update()
        return session.scalars(stmt).one_or_none()

    def save_blueprint(self, bp: Blueprint) -> None:
        try:
            with self._session_factory.begin() as session:
                if self._find(session, bp.author, bp.name) is not None:
                    raise BlueprintAlreadyExistsError.for_blueprint(bp.author, bp.name)
                session.add(_to_row(bp))
        except IntegrityError as e:
            # Lost a race with a concurrent insert of the same (author, name)
            raise BlueprintAlreadyExistsError.for_blueprint(bp.author, bp.name) from e
        logging.info(f"Saved blueprint {bp.author}/{bp.name} ({len(bp.points)} points) to database")

    def get_blueprint(self, author: str, name: str) -> Blueprint:
        with self._session_factory() as session:
            row = self._find(session, author, name)
            if row is None:
                raise BlueprintNotFoundError.for_blueprint(author, name)
            return _to_domain(row)

    def get_blueprints_by_author(self, author: str) -> Set[Blueprint]:
        with self._session_factory() as session:
            rows = session.scalars(select(BlueprintRow).where(BlueprintRow.author == author)).all()
            if not rows:
                raise BlueprintNotFoundError.for_author(author)
            return {_to_domain(r) for r in rows}

    def get_all_blueprints(self) -> Set[Blueprint]:
        with self._session_factory() as session:
            return {_to_domain(r) for r in session.scalars(select(BlueprintRow)).all()}

    def add_point(self, author: str, name: str, x: int, y: int) -> None:
        with self._session_factory.begin() as session:
            row = self._find(session, author, name, for_update=True)
            if row is None:
                raise BlueprintNotFoundError.for_blueprint(author, name)
            row.points.append(PointRow(position=len(row.points), x=x, y=y))
        logging.info(f"Appended point ({x}, {y}) to {author}/{name}")
