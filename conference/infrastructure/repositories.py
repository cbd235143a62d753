"""SQL Repositories — SQLAlchemy implementations of the user and lecture stores.

Invariants:
    - Repositories never commit: the service's transaction boundary (the same AsyncSession) does
    - Returned users carry a loaded `lectures` set; a lecture returned by the natural-key
      lookup carries a freshly loaded `users` set
    - find_by_path_and_lecture_number locks the lecture row (SELECT ... FOR UPDATE)
      until the surrounding transaction ends
    - A flush rejected by the users.email unique constraint raises EmailInUseError

Design Decisions:
    - Row lock on the lecture, not the user: concurrent registrations for the last seat
      serialize on the lecture, so the capacity check always sees committed seats.
      SQLite has no row locks; database.serialize_sqlite_writers covers it there
    - users collection reloaded via refresh() after the lock is held: the lecture may
      already sit in the identity map (loaded through some user's lectures) with a stale
      or unloaded collection
    - Explicit selectinload instead of relationship-level eager loading: the relation is
      cyclic and only one side is needed per lookup
"""

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from conference.core.domain_types import Email, LectureNumber, Login, PathNumber
from conference.core.errors import EmailInUseError, ErrorContext
from conference.models.lecture import Lecture
from conference.models.user import User


def lecture_by_natural_key(
    path_number: PathNumber, lecture_number: LectureNumber,
) -> Select:
    """Lecture lookup that holds the row lock for the rest of the transaction."""
    return (
        select(Lecture)
        .where(Lecture.path_number == path_number)
        .where(Lecture.lecture_number == lecture_number)
        .with_for_update()
    )


def _violates_email_uniqueness(error: IntegrityError) -> bool:
    # postgres: users_email_key, sqlite: users.email
    return "email" in str(error.orig)


class SqlUserRepository:
    """User store backed by the `users` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> list[User]:
        result = await self.db.execute(
            select(User).options(selectinload(User.lectures)).order_by(User.id),
        )
        return list(result.scalars().all())

    async def find_by_login(self, login: Login) -> User | None:
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.lectures))
            .where(User.login == login),
        )
        return result.scalar_one_or_none()

    async def find_by_email(self, email: Email) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == email),
        )
        return result.scalar_one_or_none()

    async def save(self, user: User) -> User:
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError as e:
            if _violates_email_uniqueness(e):
                raise EmailInUseError(ErrorContext(login=user.login)) from e
            raise
        return user


class SqlLectureRepository:
    """Lecture store backed by the `lectures` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> list[Lecture]:
        result = await self.db.execute(
            select(Lecture).order_by(
                Lecture.path_number, Lecture.lecture_number,
            ),
        )
        return list(result.scalars().all())

    async def find_by_path_and_lecture_number(
        self, path_number: PathNumber, lecture_number: LectureNumber,
    ) -> Lecture | None:
        result = await self.db.execute(
            lecture_by_natural_key(path_number, lecture_number),
        )
        lecture = result.scalar_one_or_none()
        if lecture is not None:
            await self.db.refresh(lecture, attribute_names=["users"])
        return lecture

    async def save(self, lecture: Lecture) -> Lecture:
        self.db.add(lecture)
        await self.db.flush()
        return lecture
