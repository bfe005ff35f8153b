"""Account routes: registration, login and current user."""
from fastapi import APIRouter, Depends
from pymongo.database import Database

from app.api.deps import get_current_user, get_db
from app.api.schemas.auth import AccountEnvelope, CreateAccountPayload, LoginPayload, TokenEnvelope
from app.api.schemas.user import UserEnvelope, UserOut
from app.services import auth_service as service

router = APIRouter(tags=["Auth"])


@router.post(
    "/create-account",
    response_model=AccountEnvelope,
    summary="Create account",
    description="Registers a user and returns an access token.",
)
def create_account(payload: CreateAccountPayload, db: Database = Depends(get_db)) -> AccountEnvelope:
    res = service.register_user(db, payload)
    return AccountEnvelope(
        message="Registration Successful",
        user=UserOut.from_doc(res["user"]),
        access_token=res["access_token"],
    )


@router.post(
    "/login",
    response_model=TokenEnvelope,
    summary="Login",
    description="Checks email/password and returns an access token.",
)
def login(payload: LoginPayload, db: Database = Depends(get_db)) -> TokenEnvelope:
    token = service.login_local(db, payload)
    return TokenEnvelope(message="Login Successful", access_token=token)


@router.get(
    "/get-user",
    response_model=UserEnvelope,
    summary="Current user",
    description="Returns the authenticated user's public fields.",
)
def get_user(user=Depends(get_current_user)) -> UserEnvelope:
    return UserEnvelope(message="User retrieved successfully", user=UserOut.from_doc(user))
