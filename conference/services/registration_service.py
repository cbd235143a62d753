"""Registration Service — user queries, email updates and lecture reservations.

Invariants:
    - Every mutating operation runs inside _atomic(): commit on success, rollback + re-raise on failure
    - All validation happens before the first mutation (no partial state on any failure path)
    - User is resolved before lecture; capacity is checked before duplicate registration
    - The user <-> lecture relation is only changed through core/lecture_membership (both sides)
    - cancel_reservation is symmetric: removes both sides and saves both records

Design Decisions:
    - Stores + transaction injected as Protocols: the same service runs against SQLAlchemy
      repositories in production and in-memory fakes in tests
    - Pure rules in core/enforce_registration; this class only orchestrates IO around them
      (ADR: impureim sandwich)
    - Successful commands log at INFO here; rejected rules are logged once, by the
      API error handler that renders them
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from conference.core.domain_types import Email, LectureKey, Login
from conference.core.enforce_registration import (
    check_capacity,
    check_email_available,
    check_not_registered,
)
from conference.core.errors import (
    ErrorContext,
    InvalidLectureError,
    InvalidLoginError,
)
from conference.core.lecture_membership import (
    add_registration,
    lecture_key,
    remove_registration,
)
from conference.core.repository_protocols import (
    LectureRecord,
    LectureRepository,
    TransactionBoundary,
    UserRecord,
    UserRepository,
)
from conference.schemas.lecture import LectureRequest, LectureResponse
from conference.schemas.user import UserResponse
from conference.services.model_translators import (
    to_lecture_model,
    to_user_model,
)

logger = logging.getLogger(__name__)


class RegistrationService:
    """Transactional domain service over the user and lecture stores."""

    def __init__(
        self,
        users: UserRepository,
        lectures: LectureRepository,
        transaction: TransactionBoundary,
    ):
        self.users = users
        self.lectures = lectures
        self.transaction = transaction

    # ─── Queries ─────────────────────────────────────────────────

    async def list_registered_users(self) -> list[UserResponse]:
        """Users holding at least one reservation."""
        return [
            to_user_model(user)
            for user in await self.users.find_all()
            if user.lectures
        ]

    async def list_all_users(self) -> list[UserResponse]:
        return [to_user_model(user) for user in await self.users.find_all()]

    async def list_all_lectures(self) -> list[LectureResponse]:
        """Conference plan: every lecture, ordered by path then lecture number."""
        lectures = sorted(await self.lectures.find_all(), key=lecture_key)
        return [to_lecture_model(lecture) for lecture in lectures]

    async def list_lectures_for_user(self, login: Login) -> list[LectureResponse]:
        """Lectures the user is registered for. Unknown login -> InvalidLoginError."""
        user = await self._find_user(login)
        lectures = sorted(user.lectures, key=lecture_key)
        return [to_lecture_model(lecture) for lecture in lectures]

    # ─── Commands ────────────────────────────────────────────────

    async def update_email(self, login: Login, new_email: Email) -> UserResponse:
        """Move the user to new_email unless another user already owns it.

        A concurrent claim that wins the race surfaces from users.save() as
        EmailInUseError, same as the pre-check.
        """
        async with self._atomic():
            user = await self._find_user(login)
            owner = await self.users.find_by_email(new_email)
            check_email_available(user, owner)
            user.email = new_email
            updated = await self.users.save(user)
        logger.info(
            f"Email updated for user {login}", extra={"login": login},
        )
        return to_user_model(updated)

    async def register_for_lecture(
        self, login: Login, request: LectureRequest,
    ) -> LectureResponse:
        """Reserve a seat for the user. Both sides of the relation are saved."""
        key = request.key
        async with self._atomic():
            user = await self._find_user(login)
            lecture = await self._find_lecture(key, login)
            check_capacity(lecture, login)
            check_not_registered(user, lecture)
            add_registration(user, lecture)
            await self.users.save(user)
            await self.lectures.save(lecture)
        logger.info(
            f"User {login} registered for lecture "
            f"{key.path_number}/{key.lecture_number}",
            extra=_request_extra(login, key),
        )
        return to_lecture_model(lecture)

    async def cancel_reservation(
        self, login: Login, request: LectureRequest,
    ) -> None:
        """Drop the reservation if present. Cancelling a missing one is a no-op."""
        key = request.key
        async with self._atomic():
            user = await self._find_user(login)
            lecture = await self._find_lecture(key, login)
            removed = remove_registration(user, lecture)
            await self.users.save(user)
            await self.lectures.save(lecture)
        if removed:
            message = f"User {login} cancelled lecture"
        else:
            message = f"User {login} had no reservation for lecture"
        logger.info(
            f"{message} {key.path_number}/{key.lecture_number}",
            extra=_request_extra(login, key),
        )

    # ─── Helpers ─────────────────────────────────────────────────

    @asynccontextmanager
    async def _atomic(self) -> AsyncIterator[None]:
        """Commit on success; rollback and re-raise on any failure."""
        try:
            yield
        except Exception:
            await self.transaction.rollback()
            raise
        await self.transaction.commit()

    async def _find_user(self, login: Login) -> UserRecord:
        user = await self.users.find_by_login(login)
        if user is None:
            raise InvalidLoginError(login)
        return user

    async def _find_lecture(
        self, key: LectureKey, login: Login,
    ) -> LectureRecord:
        lecture = await self.lectures.find_by_path_and_lecture_number(*key)
        if lecture is None:
            raise InvalidLectureError(key, ErrorContext(login=login))
        return lecture


def _request_extra(login: Login, key: LectureKey) -> dict:
    return {
        "login": login,
        "path_number": key.path_number,
        "lecture_number": key.lecture_number,
    }
