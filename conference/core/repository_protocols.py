"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Records returned by a repository have both sides of the user/lecture relation loaded

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy — ORM models and
      in-memory test fakes both satisfy these contracts without sharing a base class
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE the records are never async themselves
    - TransactionBoundary is just commit/rollback: AsyncSession satisfies it as-is
    - A store that cannot persist a user because its email is taken raises EmailInUseError
"""

from datetime import datetime
from typing import Protocol

from conference.core.domain_types import (
    Email, LectureId, LectureNumber, Login, PathNumber, UserId,
)


class UserRecord(Protocol):
    """Structural contract for stored users."""
    id: UserId
    login: Login
    email: Email
    lectures: set


class LectureRecord(Protocol):
    """Structural contract for stored lectures."""
    id: LectureId
    title: str
    path_number: PathNumber
    lecture_number: LectureNumber
    capacity: int
    starts_at: datetime | None
    users: set


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def find_all(self) -> list[UserRecord]: ...
    async def find_by_login(self, login: Login) -> UserRecord | None: ...
    async def find_by_email(self, email: Email) -> UserRecord | None: ...
    async def save(self, user: UserRecord) -> UserRecord: ...


class LectureRepository(Protocol):
    """Contract for lecture persistence — implemented by shell."""
    async def find_all(self) -> list[LectureRecord]: ...
    async def find_by_path_and_lecture_number(
        self, path_number: PathNumber, lecture_number: LectureNumber,
    ) -> LectureRecord | None: ...
    async def save(self, lecture: LectureRecord) -> LectureRecord: ...


class TransactionBoundary(Protocol):
    """Unit of work that commits or discards everything saved through the repositories."""
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
