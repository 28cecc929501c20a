"""
    Authentication Endpoints
    This module provides API endpoints for account registration and bearer-token authentication. Passwords are hashed with bcrypt and tokens are JWTs carrying the user's token version.
    Endpoints:
    - /register: Registers a new account (profile not yet complete) and issues an access token.
    - /token: OAuth2 password flow (used by the Swagger "Authorize" button).
    - /login: Authenticates with a JSON body and issues an access token.
    - /me: Returns the current user and a fresh access token.
    - /logout: Invalidates every token issued so far by bumping the token version.
    Security Features:
    - Login attempts rate limited per email with Redis.
    - Uniform error responses to avoid leaking user existence.
    - Token versioning to invalidate old tokens upon logout.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.schemas.user import UserCreate
from app.schemas.auth import Token, Login, MeOut
from app.api.dependencies import get_current_user, get_db, get_redis
from app.models.user import User
from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import verify_password, create_access_token, get_password_hash
from app.helpers.rate_limit import allow

router = APIRouter()
logger = get_logger(__name__)


async def authenticate(db: AsyncSession, redis: Redis, email: str, password: str) -> User:
    if not await allow(redis, f"login:{email.lower()}", settings.LOGIN_RATE_LIMIT, settings.LOGIN_RATE_WINDOW):
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail="Too many login attempts")

    result = await db.execute(select(User).filter(User.email == email.lower()))
    user = result.scalar_one_or_none()

    if not user or not verify_password(password, user.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@router.post("/token", response_model=Token)
async def oauth2_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
    redis: Redis = Depends(get_redis)
):
    """
    Standard OAuth2 endpoint used by the Swagger UI "Authorize" button.

    Note: the OAuth2 'username' field carries the user's email.
    """
    user = await authenticate(db, redis, form_data.username, form_data.password)
    access_token = create_access_token(
        data={"sub": str(user.id)},
        token_version=user.token_version
    )
    return {"access_token": access_token, "token_type": "bearer"}

@router.post("/login", response_model=Token)
async def login(login_data: Login, db: AsyncSession = Depends(get_db), redis: Redis = Depends(get_redis)):
    """
    JSON-body alternative to /token.
    """
    user = await authenticate(db, redis, login_data.email, login_data.password)
    access_token = create_access_token(
        data={"sub": str(user.id)},
        token_version=user.token_version
    )
    return {"access_token": access_token, "token_type": "bearer"}

@router.get("/me", response_model=MeOut)
async def read_me(current_user: User = Depends(get_current_user)):
    access_token = create_access_token(
        data={"sub": str(current_user.id)},
        token_version=current_user.token_version
    )
    return {
        "user": current_user,
        "access_token": access_token,
        "token_type": "bearer"
    }

@router.post("/logout")
async def logout(current_user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    current_user.token_version = (current_user.token_version or 1) + 1
    await db.commit()
    logger.info(f"User {current_user.id} logged out, token version is now {current_user.token_version}")
    return {"message": "Logout successful"}

@router.post("/register", response_model=Token)
async def register(user: UserCreate, db: AsyncSession = Depends(get_db)):
    email = user.email.lower()
    result = await db.execute(select(User).filter(User.email == email))
    db_user = result.scalar_one_or_none()

    if db_user:
        raise HTTPException(status_code=400, detail="Email already registered")

    hashed_password = get_password_hash(user.password)
    new_user = User(name=user.name, email=email, password=hashed_password, plan="free", profile_complete=False)
    db.add(new_user)
    await db.commit()
    await db.refresh(new_user)
    logger.info(f"Registered user {new_user.id}")

    access_token = create_access_token(data={"sub": str(new_user.id)}, token_version=new_user.token_version)
    return {"access_token": access_token, "token_type": "bearer"}
