"""FastAPI endpoints for registration, login and the current session."""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from identity.api.schemas import LoginRequest, RegisterRequest, UserResponse
from identity.auth import end_session, require_user, start_session
from identity.user.registration import authenticate, register_user
from identity.user.user import User
from shared.database import get_session
from shared.schemas import StatusResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201, response_model=UserResponse)
def register(body: RegisterRequest, response: Response, session: Session = Depends(get_session)) -> UserResponse:
    user = register_user(
        session,
        username=body.username,
        password=body.password,
        full_name=body.full_name,
        email=body.email,
        phone=body.phone,
        address=body.address,
    )
    start_session(response, user)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=UserResponse)
def login(body: LoginRequest, response: Response, session: Session = Depends(get_session)) -> UserResponse:
    user = authenticate(session, body.username, body.password)
    start_session(response, user)
    return UserResponse.model_validate(user)


@router.post("/logout", response_model=StatusResponse)
def logout(request: Request, response: Response) -> StatusResponse:
    end_session(request, response)
    return StatusResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(require_user)) -> UserResponse:
    return UserResponse.model_validate(user)
