"""user_lectures — association table behind the user <-> lecture many-to-many.

Invariants:
    - Composite primary key (user_id, lecture_id): a registration exists at most once
    - Rows are removed with either endpoint (ondelete CASCADE)

Design Decisions:
    - Plain Table, not a mapped class: the relation carries no payload of its own
"""

from sqlalchemy import Column, ForeignKey, Integer, Table

from conference.db.base import Base


user_lectures = Table(
    "user_lectures",
    Base.metadata,
    Column(
        "user_id", Integer,
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "lecture_id", Integer,
        ForeignKey("lectures.id", ondelete="CASCADE"), primary_key=True,
    ),
)
