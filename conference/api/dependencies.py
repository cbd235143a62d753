"""API Dependencies — per-request wiring of the registration service.

Invariants:
    - One AsyncSession per request; repositories and the transaction boundary share it
    - Routes receive a ready RegistrationService and never touch the session directly
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from conference.infrastructure.database import get_db
from conference.infrastructure.repositories import (
    SqlLectureRepository,
    SqlUserRepository,
)
from conference.services.registration_service import RegistrationService


async def get_registration_service(
    db: AsyncSession = Depends(get_db),
) -> RegistrationService:
    return RegistrationService(
        users=SqlUserRepository(db),
        lectures=SqlLectureRepository(db),
        transaction=db,
    )
