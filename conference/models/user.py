"""User ORM — conference participant addressed by login.

Invariants:
    - login is unique and never updated by the application
    - email is unique across users
    - lectures is a set mirrored by Lecture.users (back_populates)

Design Decisions:
    - collection_class=set: membership semantics, duplicates impossible in memory too
    - lazy="select" on the relation: repositories decide what to load eagerly,
      async sessions never trigger an implicit lazy load on the hot path
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from conference.db.base import Base
from conference.models.user_lecture import user_lectures


class User(Base):
    """Registered conference participant."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    login: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True,
    )
    email: Mapped[str] = mapped_column(
        String(254), nullable=False, unique=True,
    )

    lectures: Mapped[set["Lecture"]] = relationship(
        "Lecture", secondary=user_lectures, back_populates="users",
        collection_class=set, lazy="select",
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, login={self.login!r})"
