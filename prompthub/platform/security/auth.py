from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.platform.db.models import User
from prompthub.platform.db.session import get_session
from prompthub.platform.security.jwt import decode_subject

_bearer = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=401, detail="Unauthorized")


async def _load_user(session: AsyncSession, token: str) -> User | None:
    subject = decode_subject(token)
    if subject is None:
        return None

    result = await session.execute(select(User).where(User.id == subject))
    return result.scalar_one_or_none()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    session: AsyncSession = Depends(get_session),
) -> User:
    if credentials is None:
        raise _unauthorized()

    user = await _load_user(session, credentials.credentials)
    if user is None:
        raise _unauthorized()

    return user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    session: AsyncSession = Depends(get_session),
) -> User | None:
    if credentials is None:
        return None

    user = await _load_user(session, credentials.credentials)
    if user is None:
        raise _unauthorized()

    return user
