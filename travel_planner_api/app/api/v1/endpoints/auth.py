"""
Authentication endpoints.

Registration and login are the only routes that do not require a
bearer token.  They are mounted under ``/auth`` rather than under the
resource prefix.
"""

from fastapi import APIRouter, Depends, status

from travel_planner_api.app.core.db import Database, get_db
from travel_planner_api.app.core.security import CredentialProvider, get_credentials
from travel_planner_api.app.schemas.common import Envelope
from travel_planner_api.app.schemas.user import LoginRequest, RegisterRequest, TokenRead, UserRead
from travel_planner_api.app.services.user_service import UserService


router = APIRouter()


def get_user_service(
    db: Database = Depends(get_db),
    credentials: CredentialProvider = Depends(get_credentials),
) -> UserService:
    return UserService(db, credentials)


@router.post("/register", response_model=Envelope[UserRead], status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, service: UserService = Depends(get_user_service)):
    """Register a new user.

    ``password`` and ``confirmPassword`` must match and the e-mail must
    not be registered yet; both failures are reported as 400.
    """
    user = await service.register(payload)
    return Envelope(message="User created successfully", data=user)


@router.post("/login", response_model=Envelope[TokenRead])
async def login(payload: LoginRequest, service: UserService = Depends(get_user_service)):
    """Exchange e-mail and password for a bearer token."""
    token = await service.login(payload)
    return Envelope(message="Login successful", data=TokenRead(token=token))
