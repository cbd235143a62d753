"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, LectureId wrap integer primary keys — never mix them up in domain logic
    - Login is immutable once issued; Email is unique across users
    - A lecture is addressed by its natural key (path_number, lecture_number), never by id

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - LectureKey as NamedTuple: hashable, unpacks into repository lookups
"""

from typing import NamedTuple, NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
LectureId = NewType("LectureId", int)


# ─── Value Types ─────────────────────────────────────────────────

Login = NewType("Login", str)
Email = NewType("Email", str)
PathNumber = NewType("PathNumber", int)
LectureNumber = NewType("LectureNumber", int)


class LectureKey(NamedTuple):
    """Composite natural key of a lecture inside the conference plan."""
    path_number: PathNumber
    lecture_number: LectureNumber
