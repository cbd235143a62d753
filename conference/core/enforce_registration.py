"""Registration Rules — pure checks run before any user/lecture mutation.

Invariants:
    - Every check is PURE: reads records, raises a typed error, never mutates
    - Capacity is checked before duplicate registration (error precedence)
    - The email check never rejects a user for owning the email they ask for

Design Decisions:
    - Raise instead of returning error dicts: the service runs inside a transaction
      boundary and any exception there means rollback, so raising is the commit/abort signal
"""

from conference.core.domain_types import Login
from conference.core.errors import (
    AlreadyRegisteredError,
    CapacityExceededError,
    EmailInUseError,
    ErrorContext,
)
from conference.core.lecture_membership import lecture_key
from conference.core.repository_protocols import LectureRecord, UserRecord


def _lecture_context(
    lecture: LectureRecord, login: Login | None = None,
) -> ErrorContext:
    return ErrorContext(login=login).at_lecture(lecture_key(lecture))


def has_free_seat(lecture: LectureRecord) -> bool:
    """True while the lecture's user set is below capacity."""
    return len(lecture.users) < lecture.capacity


def check_capacity(lecture: LectureRecord, login: Login | None = None) -> None:
    """Rule 1: a full lecture (users >= capacity) accepts nobody."""
    if not has_free_seat(lecture):
        raise CapacityExceededError(
            lecture.capacity, _lecture_context(lecture, login),
        )


def check_not_registered(user: UserRecord, lecture: LectureRecord) -> None:
    """Rule 2: a user sits in a lecture's user set at most once."""
    if user in lecture.users:
        raise AlreadyRegisteredError(_lecture_context(lecture, user.login))


def check_email_available(user: UserRecord, owner: UserRecord | None) -> None:
    """Rule 3: an email may only move to a user if nobody else owns it."""
    if owner is not None and owner.login != user.login:
        raise EmailInUseError(ErrorContext(login=user.login))
