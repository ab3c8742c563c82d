"""Login, logout and registration endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException

from dentaldesk.core.dependencies import get_auth_service
from dentaldesk.core.exceptions import AuthenticationError, RegistrationError
from dentaldesk.schemas.auth import LoginRequest
from dentaldesk.schemas.records import User
from dentaldesk.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def public_user(user: User) -> Dict[str, Any]:
    """User payload without the password."""
    return user.model_dump(mode="json", by_alias=True, exclude={"password"})


@router.post("/login")
async def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Log in with email and password."""
    try:
        user = auth.login(request.email, request.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return {"success": True, "user": public_user(user)}


@router.post("/register", status_code=201)
async def register(
    form: Dict[str, Any] = Body(...), auth: AuthService = Depends(get_auth_service)
):
    """
    Register a new patient account.

    Creates the Patient-role user and its patient record, then logs in.
    """
    try:
        user = auth.register_from_form(form)
    except RegistrationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "user": public_user(user)}


@router.post("/logout")
async def logout(auth: AuthService = Depends(get_auth_service)):
    auth.logout()
    return {"success": True}


@router.get("/me")
async def current_user(auth: AuthService = Depends(get_auth_service)):
    """User of the saved session."""
    user = auth.current_user()
    if user is None:
        raise HTTPException(status_code=401, detail="Not logged in")
    return {"success": True, "user": public_user(user)}
