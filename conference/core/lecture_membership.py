"""Lecture Membership — the one place that mutates the user <-> lecture relation.

Invariants:
    - user.lectures and lecture.users always change together
    - add/remove are idempotent on set semantics (re-adding or removing an absent member is a no-op)
    - No validation here: callers run enforce_registration checks first
    - lecture_key orders lectures by the conference plan (path, then lecture number)
"""

from conference.core.domain_types import LectureKey
from conference.core.repository_protocols import LectureRecord, UserRecord


def lecture_key(lecture: LectureRecord) -> LectureKey:
    return LectureKey(lecture.path_number, lecture.lecture_number)


def is_registered(user: UserRecord, lecture: LectureRecord) -> bool:
    return user in lecture.users and lecture in user.lectures


def add_registration(user: UserRecord, lecture: LectureRecord) -> None:
    """Link both sides of the relation."""
    lecture.users.add(user)
    user.lectures.add(lecture)


def remove_registration(user: UserRecord, lecture: LectureRecord) -> bool:
    """Unlink both sides of the relation. Returns whether a registration existed."""
    was_registered = is_registered(user, lecture)
    user.lectures.discard(lecture)
    lecture.users.discard(user)
    return was_registered
