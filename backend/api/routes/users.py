"""
Users API routes: registration and login.
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_store
from api.schemas import CamelModel, LoginResponse, UserResponse, user_to_response
from db import JsonFileStore
from services import accounts
from services.identity import session_token_for

router = APIRouter()


class RegisterRequest(CamelModel):
    name: Optional[Any] = None
    mobile_number: Optional[Any] = None
    email: Optional[Any] = None
    password: Optional[Any] = None
    role: Optional[Any] = None


class LoginRequest(CamelModel):
    email: Optional[Any] = None
    password: Optional[Any] = None


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(data: RegisterRequest, store: JsonFileStore = Depends(get_store)):
    """Create a new user."""
    user = accounts.register_user(
        store,
        name=data.name,
        email=data.email,
        password=data.password,
        role=data.role,
        mobile_number=data.mobile_number,
    )
    return user_to_response(user)


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, store: JsonFileStore = Depends(get_store)):
    """Check credentials and hand back the user with a session token."""
    user = accounts.authenticate(store, data.email, data.password)
    return LoginResponse(
        **user_to_response(user).model_dump(),
        token=session_token_for(user.id),
    )
