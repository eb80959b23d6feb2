import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tracker.api.deps import get_db, get_current_user
from tracker.core.config import get_settings
from tracker.core.errors import Unauthenticated
from tracker.services.auth import authenticate, build_access_token
from tracker.models import User
from tracker.schemas.auth import LoginRequest, LoginResponse, LoginUser, MeResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/auth/login", response_model=LoginResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    user = authenticate(db, request.email, request.password)
    if not user:
        logger.info("Rejected login for %s", request.email)
        raise Unauthenticated("Invalid credentials")

    access_token = build_access_token(
        user_id=user.id,
        expires_minutes=get_settings().access_token_expire_minutes,
    )
    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        user=LoginUser.model_validate(user),
    )


@router.get("/me", response_model=MeResponse)
def me(current_user: User = Depends(get_current_user)) -> MeResponse:
    return MeResponse.model_validate(current_user)
