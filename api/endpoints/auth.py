"""Signup, login and current-user endpoints"""

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config.settings import settings
from core.auth import create_access_token, get_current_user_id, hash_password, verify_password
from core.dependencies import get_storage
from core.exceptions import DuplicateUserException
from core.logging import logger, log_structured
from database.entities import NewUser
from database.repository import StorageRepository
from services.activity_log import record_history
from api.dependencies import AuthResponse, LoginRequest, SignupRequest, UserPublic, parse_payload


router = APIRouter()

# Rate limiter (signup/login only)
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


@router.post("/auth/signup", response_model=AuthResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def signup(request: Request, storage: StorageRepository = Depends(get_storage)) -> AuthResponse:
    """
    Create an account and return it with an access token

    Raises:
        HTTPException: 400 for invalid data or an email/username already in use
    """
    data = await parse_payload(request, SignupRequest, "Invalid user data")

    if storage.get_user_by_email(data.email) or storage.get_user_by_username(data.username):
        raise HTTPException(status_code=400, detail="User already exists")

    try:
        user = storage.create_user(NewUser(
            username=data.username,
            email=data.email,
            password=hash_password(data.password),
            full_name=data.full_name
        ))
    except DuplicateUserException:
        # Lost a race against a concurrent signup
        raise HTTPException(status_code=400, detail="User already exists")
    except Exception as e:
        logger.error(f"❌ Signup failed: {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")

    logger.info(f"✅ User signed up: {user.username} ({user.id})")
    log_structured("user_signed_up", {"user_id": user.id, "backend": storage.backend_name})
    record_history(storage, user.id, "Signed up", details=f"Welcome, {user.full_name}")

    return AuthResponse(user=UserPublic.from_user(user), token=create_access_token(user.id))


@router.post("/auth/login", response_model=AuthResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(request: Request, storage: StorageRepository = Depends(get_storage)) -> AuthResponse:
    """
    Exchange email and password for an access token

    Raises:
        HTTPException: 400 for a malformed request, 401 for unknown email or wrong password
    """
    data = await parse_payload(request, LoginRequest, "Invalid login data")

    user = storage.get_user_by_email(data.email)
    if not user or not verify_password(data.password, user.password):
        logger.info("🔒 Login rejected: invalid credentials")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    log_structured("user_logged_in", {"user_id": user.id})

    return AuthResponse(user=UserPublic.from_user(user), token=create_access_token(user.id))


@router.get("/auth/me", response_model=UserPublic)
async def get_me(
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> UserPublic:
    """Return the authenticated user's profile"""
    user = storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return UserPublic.from_user(user)
