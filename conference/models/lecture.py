"""Lecture ORM — one slot in the conference plan.

Invariants:
    - (path_number, lecture_number) is unique: the natural key used by every lookup
    - capacity is non-negative and fixed after seeding
    - users is a set mirrored by User.lectures (back_populates)

Design Decisions:
    - Natural key kept next to a surrogate integer id: clients address lectures by
      path/number, the association table references the id
"""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint, DateTime, Integer, String, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from conference.db.base import Base
from conference.models.user_lecture import user_lectures


class Lecture(Base):
    """Lecture users can reserve a seat in."""
    __tablename__ = "lectures"
    __table_args__ = (
        UniqueConstraint(
            "path_number", "lecture_number", name="uq_lectures_path_lecture",
        ),
        CheckConstraint("capacity >= 0", name="ck_lectures_capacity"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    path_number: Mapped[int] = mapped_column(Integer, nullable=False)
    lecture_number: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    starts_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    users: Mapped[set["User"]] = relationship(
        "User", secondary=user_lectures, back_populates="lectures",
        collection_class=set, lazy="select",
    )

    def __repr__(self) -> str:
        return (
            f"Lecture(id={self.id!r}, path_number={self.path_number!r}, "
            f"lecture_number={self.lecture_number!r})"
        )
