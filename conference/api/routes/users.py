"""Users Routes — user queries, email updates and lecture reservations.

Invariants:
    - Routes never contain business logic (delegate to RegistrationService)
    - Domain failures surface as ConferenceError and are rendered by the global handler
    - `/registered` is declared before `/{login}/...` paths so it is never read as a login

Design Decisions:
    - Reservations are a sub-resource of the user: POST creates, DELETE by natural key cancels
"""

from fastapi import APIRouter, Depends, status

from conference.api.dependencies import get_registration_service
from conference.core.domain_types import Email, Login
from conference.schemas.lecture import LectureRequest, LectureResponse
from conference.schemas.user import EmailUpdate, UserResponse
from conference.services.registration_service import RegistrationService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    service: RegistrationService = Depends(get_registration_service),
):
    """All known users."""
    return await service.list_all_users()


@router.get("/registered", response_model=list[UserResponse])
async def list_registered_users(
    service: RegistrationService = Depends(get_registration_service),
):
    """Users holding at least one reservation."""
    return await service.list_registered_users()


@router.get("/{login}/lectures", response_model=list[LectureResponse])
async def list_user_lectures(
    login: str,
    service: RegistrationService = Depends(get_registration_service),
):
    return await service.list_lectures_for_user(Login(login))


@router.patch("/{login}", response_model=UserResponse)
async def update_email(
    login: str,
    body: EmailUpdate,
    service: RegistrationService = Depends(get_registration_service),
):
    """Change the user's email. 409 if another user owns it."""
    return await service.update_email(Login(login), Email(body.email))


@router.post(
    "/{login}/reservations",
    response_model=LectureResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_for_lecture(
    login: str,
    body: LectureRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    """Reserve a seat in the lecture at (path_number, lecture_number)."""
    return await service.register_for_lecture(Login(login), body)


@router.delete(
    "/{login}/reservations/{path_number}/{lecture_number}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def cancel_reservation(
    login: str,
    path_number: int,
    lecture_number: int,
    service: RegistrationService = Depends(get_registration_service),
):
    """Cancel the reservation. Cancelling a reservation that does not exist is a no-op."""
    await service.cancel_reservation(
        Login(login),
        LectureRequest(path_number=path_number, lecture_number=lecture_number),
    )
