from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
import redis.asyncio as aioredis
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.db.session import SessionAsync
from app.models.user import User
from app.core.security import SECRET_KEY, ALGORITHM
from app.core.config import settings
from app.core.permissions import Resource, has_access

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/auth/token",
    description="Email and password authentication"
)

async def get_db():
    async with SessionAsync() as session:
        yield session


async def get_current_user(
        token: str = Depends(oauth2_scheme),
        db: AsyncSession = Depends(get_db),
):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        user_id: str = payload.get("sub")
        tv = payload.get("tv")
        if user_id is None or tv is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    result = await db.execute(select(User).where(User.id == int(user_id)))
    user = result.scalar_one_or_none()
    if not user or int(tv) != int(user.token_version or 1):
        raise credentials_exception
    return user

async def get_redis():
    redis = aioredis.from_url(settings.REDIS_URL)
    try:
        yield redis
    finally:
        await redis.aclose()

# ==================== Permission Dependencies ====================


def require_access(resource: Resource):
    """
    Factory to create a dependency that checks the account type may use a
    resource.

    Usage:
        @router.get("/")
        async def list_investments(
            current_user: User = Depends(require_access(Resource.INVESTMENT)),
            db: AsyncSession = Depends(get_db)
        ):
            # Only agency accounts get here
            ...

    Args:
        resource: Resource being accessed

    Returns:
        Dependency function returning the current user
    """
    async def access_checker(current_user: User = Depends(get_current_user)) -> User:
        if not has_access(current_user.user_type, resource):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Your account type cannot access {resource.value.replace('_', ' ')}s"
            )
        return current_user

    return access_checker
