"""Lecture Schemas — Pydantic read model and registration request.

Invariants:
    - LectureRequest carries only the natural key; any integer pair is accepted and
      pairs outside the plan are reported by the service as INVALID_LECTURE
    - LectureResponse carries no user list (membership is read per user)
"""

from datetime import datetime

from pydantic import BaseModel

from conference.core.domain_types import LectureKey, LectureNumber, PathNumber


class LectureRequest(BaseModel):
    """Identifies a lecture by (path_number, lecture_number). Never persisted."""
    path_number: int
    lecture_number: int

    @property
    def key(self) -> LectureKey:
        return LectureKey(
            PathNumber(self.path_number), LectureNumber(self.lecture_number),
        )


class LectureResponse(BaseModel):
    """Lecture read model — one slot of the conference plan."""
    title: str
    path_number: int
    lecture_number: int
    capacity: int
    starts_at: datetime | None = None
