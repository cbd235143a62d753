"""Model Translators — project stored records onto API read models.

Invariants:
    - Pure field copies: no validation, no IO, no business rules
    - Never touch relation collections (callers may hold partially loaded records)
"""

from conference.core.repository_protocols import LectureRecord, UserRecord
from conference.schemas.lecture import LectureResponse
from conference.schemas.user import UserResponse


def to_user_model(record: UserRecord) -> UserResponse:
    return UserResponse(login=record.login, email=record.email)


def to_lecture_model(record: LectureRecord) -> LectureResponse:
    return LectureResponse(
        title=record.title,
        path_number=record.path_number,
        lecture_number=record.lecture_number,
        capacity=record.capacity,
        starts_at=record.starts_at,
    )
