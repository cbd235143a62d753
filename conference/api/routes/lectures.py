"""Lectures Routes — read-only conference plan.

Invariants:
    - Lectures are seeded outside the API; this router never mutates them
"""

from fastapi import APIRouter, Depends

from conference.api.dependencies import get_registration_service
from conference.schemas.lecture import LectureResponse
from conference.services.registration_service import RegistrationService

router = APIRouter(prefix="/api/v1/lectures", tags=["lectures"])


@router.get("", response_model=list[LectureResponse])
async def list_lectures(
    service: RegistrationService = Depends(get_registration_service),
):
    """Every lecture ordered by path number, then lecture number."""
    return await service.list_all_lectures()
