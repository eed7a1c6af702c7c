"""Auth API — registration and login.

Learn: Both routes are open (no token needed):
- POST /register → create an account (400 if the name is taken)
- POST /login → name/password → signed JWT (401 on any mismatch)

Login returns the stored user's id next to the token. Older clients
also send an `id` in the login body; it's ignored.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from todogate.auth.dependencies import get_token_service
from todogate.auth.jwt import TokenService
from todogate.db.engine import get_db
from todogate.db.store import DuplicateUserError
from todogate.schemas.auth import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
)
from todogate.services.auth_service import AuthService, InvalidCredentialsError

router = APIRouter()


def _svc(
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(db, tokens)


@router.post("/register", response_model=MessageResponse)
async def register(body: RegisterRequest, svc: AuthService = Depends(_svc)):
    """Create a new user account."""
    try:
        await svc.register(name=body.name, password=body.password)
    except DuplicateUserError:
        raise HTTPException(status_code=400, detail="User already exists.")
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, svc: AuthService = Depends(_svc)):
    """Login with name and password → JWT."""
    try:
        user, token = await svc.login(name=body.name, password=body.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=401,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(token=token, id=user.id)
