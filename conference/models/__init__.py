"""ORM Models — SQLAlchemy declarative models for users, lectures and their relation.

Invariants:
    - All models inherit from Base (db/base.py)
    - The user <-> lecture relation lives only in the user_lectures table

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from conference.models.user_lecture import user_lectures  # noqa: F401
from conference.models.user import User  # noqa: F401
from conference.models.lecture import Lecture  # noqa: F401
