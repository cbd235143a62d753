"""Registration Service — behaviour against in-memory stores.

Invariants:
    - Unknown login fails with NotFound on every login-taking operation
    - Capacity N: first N distinct registrations succeed, the next one is rejected
    - Duplicate registration rejected without changing the user set
    - update_email allows the user's own email, rejects another user's
    - Failures roll back and never save; successes commit once
    - Cancellation removes both sides of the relation
    - Rejections are left to the caller to log; successes log at INFO with lecture extras
"""

import logging

import pytest

from conference.core.errors import (
    AlreadyRegisteredError,
    CapacityExceededError,
    ConflictError,
    EmailInUseError,
    InvalidLectureError,
    InvalidLoginError,
    NotFoundError,
)
from conference.schemas.lecture import LectureRequest, LectureResponse
from conference.schemas.user import UserResponse
from conference.services.registration_service import RegistrationService

from tests.services.fake_stores import (
    FakeLecture, FakeUser, InMemoryUserRepository,
)


REQUEST = LectureRequest(path_number=1, lecture_number=1)


# ─── Unknown login ───────────────────────────────────────────────

@pytest.mark.parametrize("call", [
    lambda s: s.list_lectures_for_user("nobody"),
    lambda s: s.update_email("nobody", "nobody@example.com"),
    lambda s: s.register_for_lecture("nobody", REQUEST),
    lambda s: s.cancel_reservation("nobody", REQUEST),
])
async def test_unknown_login_fails_with_not_found(service, call):
    with pytest.raises(NotFoundError) as exc:
        await call(service)
    assert isinstance(exc.value, InvalidLoginError)
    assert exc.value.message == "Invalid login provided."


async def test_unknown_login_is_reported_before_unknown_lecture(service):
    with pytest.raises(InvalidLoginError):
        await service.register_for_lecture(
            "nobody", LectureRequest(path_number=9, lecture_number=9),
        )


# ─── Queries ─────────────────────────────────────────────────────

async def test_list_all_users_returns_every_user(service):
    result = await service.list_all_users()
    assert result == [
        UserResponse(login="user1", email="user1@example.com"),
        UserResponse(login="user2", email="user2@example.com"),
    ]


async def test_list_registered_users_is_empty_without_reservations(service):
    assert await service.list_registered_users() == []


async def test_list_registered_users_filters_users_without_lectures(service):
    await service.register_for_lecture("user2", REQUEST)
    result = await service.list_registered_users()
    assert [u.login for u in result] == ["user2"]


async def test_list_registered_users_empty_store(lecture_repo, transaction):
    empty = RegistrationService(
        InMemoryUserRepository(), lecture_repo, transaction,
    )
    assert await empty.list_registered_users() == []
    assert await empty.list_all_users() == []


async def test_list_lectures_for_user_sorted_by_plan(
    service, user1, lecture_repo,
):
    later = FakeLecture(
        id=2, title="Kotlin", path_number=2, lecture_number=1, capacity=5,
    )
    lecture_repo.lectures.append(later)
    await service.register_for_lecture(
        "user1", LectureRequest(path_number=2, lecture_number=1),
    )
    await service.register_for_lecture("user1", REQUEST)

    result = await service.list_lectures_for_user("user1")

    assert [(lec.path_number, lec.lecture_number) for lec in result] == [
        (1, 1), (2, 1),
    ]
    assert result[0] == LectureResponse(
        title="Java Basics", path_number=1, lecture_number=1, capacity=5,
    )


async def test_list_lectures_for_user_without_reservations(service):
    assert await service.list_lectures_for_user("user1") == []


async def test_list_all_lectures_orders_by_path_then_number(
    service, lecture_repo,
):
    lecture_repo.lectures[:0] = [
        FakeLecture(id=3, title="C", path_number=2, lecture_number=2, capacity=1),
        FakeLecture(id=2, title="B", path_number=1, lecture_number=3, capacity=1),
    ]
    result = await service.list_all_lectures()
    assert [lec.title for lec in result] == ["Java Basics", "B", "C"]


# ─── update_email ────────────────────────────────────────────────

async def test_update_email_changes_email_and_commits(
    service, user1, user_repo, transaction,
):
    result = await service.update_email("user1", "newuser1@example.com")

    assert result == UserResponse(login="user1", email="newuser1@example.com")
    assert user1.email == "newuser1@example.com"
    assert user_repo.saved == [user1]
    assert transaction.commits == 1
    assert transaction.rollbacks == 0


async def test_update_email_to_own_email_succeeds(service, user1):
    result = await service.update_email("user1", "user1@example.com")
    assert result.email == "user1@example.com"


async def test_update_email_taken_by_other_user_conflicts(
    service, user1, user_repo, transaction,
):
    with pytest.raises(ConflictError) as exc:
        await service.update_email("user1", "user2@example.com")

    assert isinstance(exc.value, EmailInUseError)
    assert exc.value.message == "The email is already in use."
    assert exc.value.http_status == 409
    assert user1.email == "user1@example.com"
    assert user_repo.saved == []
    assert transaction.commits == 0
    assert transaction.rollbacks == 1


# ─── register_for_lecture ────────────────────────────────────────

async def test_register_links_both_sides_and_saves_both(
    service, user1, lecture, user_repo, lecture_repo, transaction,
):
    result = await service.register_for_lecture("user1", REQUEST)

    assert result.title == "Java Basics"
    assert lecture.users == {user1}
    assert user1.lectures == {lecture}
    assert user_repo.saved == [user1]
    assert lecture_repo.saved == [lecture]
    assert transaction.commits == 1


async def test_register_twice_fails_already_registered(
    service, lecture, transaction,
):
    await service.register_for_lecture("user1", REQUEST)

    with pytest.raises(AlreadyRegisteredError) as exc:
        await service.register_for_lecture("user1", REQUEST)

    assert exc.value.message == "User is already registered for this lecture."
    assert len(lecture.users) == 1
    assert transaction.rollbacks == 1


async def test_register_fills_capacity_then_rejects(user_repo, lecture_repo, service):
    users = [
        FakeUser(id=10 + i, login=f"attendee{i}", email=f"a{i}@example.com")
        for i in range(6)
    ]
    user_repo.users.extend(users)

    for user in users[:5]:
        await service.register_for_lecture(user.login, REQUEST)

    with pytest.raises(CapacityExceededError) as exc:
        await service.register_for_lecture(users[5].login, REQUEST)

    assert exc.value.message == "The lecture is already full."
    assert exc.value.capacity == 5
    assert len(lecture_repo.lectures[0].users) == 5
    assert users[5].lectures == set()


async def test_register_full_lecture_for_new_user(user_repo, lecture, service):
    lecture.users.update(
        FakeUser(id=100 + i, login=f"seat{i}", email=f"s{i}@example.com")
        for i in range(5)
    )
    user_repo.users.append(
        FakeUser(id=200, login="newUser", email="new@example.com"),
    )

    with pytest.raises(CapacityExceededError):
        await service.register_for_lecture("newUser", REQUEST)


async def test_capacity_checked_before_duplicate(service, user1, lecture):
    lecture.capacity = 1
    await service.register_for_lecture("user1", REQUEST)

    with pytest.raises(CapacityExceededError):
        await service.register_for_lecture("user1", REQUEST)


async def test_register_zero_capacity_lecture_rejected(service, lecture):
    lecture.capacity = 0
    with pytest.raises(CapacityExceededError):
        await service.register_for_lecture("user1", REQUEST)


async def test_register_unknown_lecture_fails_not_found(
    service, user_repo, lecture_repo, transaction,
):
    with pytest.raises(NotFoundError) as exc:
        await service.register_for_lecture(
            "user1", LectureRequest(path_number=9, lecture_number=9),
        )

    assert isinstance(exc.value, InvalidLectureError)
    assert exc.value.message == "Invalid path number or lecture number provided."
    assert exc.value.context.path_number == 9
    assert exc.value.context.lecture_number == 9
    assert user_repo.saved == []
    assert lecture_repo.saved == []
    assert transaction.rollbacks == 1


# ─── cancel_reservation ──────────────────────────────────────────

async def test_cancel_removes_both_sides(
    service, user1, lecture, user_repo, lecture_repo, transaction,
):
    await service.register_for_lecture("user1", REQUEST)

    await service.cancel_reservation("user1", REQUEST)

    assert user1.lectures == set()
    assert lecture.users == set()
    assert user_repo.saved[-1] is user1
    assert lecture_repo.saved[-1] is lecture
    assert transaction.commits == 2


async def test_cancel_without_reservation_is_noop(service, user1, lecture):
    await service.cancel_reservation("user1", REQUEST)
    assert user1.lectures == set()
    assert lecture.users == set()


async def test_cancel_frees_seat_for_next_user(service, lecture):
    lecture.capacity = 1
    await service.register_for_lecture("user1", REQUEST)
    await service.cancel_reservation("user1", REQUEST)

    await service.register_for_lecture("user2", REQUEST)

    assert [u.login for u in lecture.users] == ["user2"]


async def test_cancel_unknown_lecture_fails_before_mutation(
    service, user1, lecture,
):
    await service.register_for_lecture("user1", REQUEST)

    with pytest.raises(InvalidLectureError):
        await service.cancel_reservation(
            "user1", LectureRequest(path_number=3, lecture_number=3),
        )

    assert user1.lectures == {lecture}


# ─── Transaction boundary ────────────────────────────────────────

async def test_store_failure_rolls_back_and_propagates(
    service, user_repo, transaction,
):
    async def broken_save(user):
        raise RuntimeError("disk full")

    user_repo.save = broken_save

    with pytest.raises(RuntimeError, match="disk full"):
        await service.update_email("user1", "other@example.com")

    assert transaction.rollbacks == 1
    assert transaction.commits == 0


# ─── Logging ─────────────────────────────────────────────────────

async def test_rejected_rule_not_logged_by_service(service, caplog):
    await service.register_for_lecture("user1", REQUEST)

    with caplog.at_level(logging.DEBUG, logger="conference.services"):
        with pytest.raises(AlreadyRegisteredError):
            await service.register_for_lecture("user1", REQUEST)

    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


async def test_cancel_logs_whether_reservation_existed(service, caplog):
    with caplog.at_level(logging.INFO, logger="conference.services"):
        await service.cancel_reservation("user1", REQUEST)
        await service.register_for_lecture("user1", REQUEST)
        await service.cancel_reservation("user1", REQUEST)

    messages = [r.getMessage() for r in caplog.records]
    assert "User user1 had no reservation for lecture 1/1" in messages
    assert "User user1 cancelled lecture 1/1" in messages
    assert caplog.records[-1].path_number == 1
