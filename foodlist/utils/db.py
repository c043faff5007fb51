"""이 모듈은 데이터베이스 세션과 사용자 인증을 위한 유틸리티 함수를 제공합니다."""

from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException
from httpx import AsyncClient, HTTPError, HTTPStatusError
from sqlalchemy.ext.asyncio import AsyncSession

from foodlist.config import Config, logger
from foodlist.database import AsyncSessionLocal
from foodlist.schemas.users import UserSchema
from foodlist.services.profiles import ensure_profile_exists
from foodlist.utils.http import get_async_client

DEBUG_USER_ID = "00000000-0000-0000-0000-000000000001"


async def get_db():
    """비동기 데이터베이스 세션을 생성하고 반환합니다.

    Yields:
        AsyncSession: 비동기 데이터베이스 세션 객체
    """
    async with AsyncSessionLocal() as db:
        yield db


async def get_user_info(
    user_id: str,
    client: AsyncClient,
) -> UserSchema:
    """사용자 서비스에서 사용자 정보를 가져와 UserSchema 객체를 반환합니다.

    Args:
        user_id (str): 사용자 ID
        client (AsyncClient): 비동기 HTTP 클라이언트

    Returns:
        UserSchema: 사용자 정보가 담긴 스키마 객체

    Raises:
        HTTPException: 사용자가 없으면 401, 그 외 조회 실패 시 500
    """
    if Config.debug and user_id == DEBUG_USER_ID:
        return UserSchema(id=DEBUG_USER_ID, name="Usuário Teste", email="teste@example.com")

    try:
        response = await client.get(f"{Config.USER_SERVICE_URL}/users/{user_id}")
        response.raise_for_status()
    except HTTPStatusError as e:
        if e.response.status_code == Config.HttpStatus.NOT_FOUND:
            raise HTTPException(
                status_code=Config.HttpStatus.UNAUTHORIZED,
                detail="Authentication required",
            ) from e
        logger.error("User service error for %s: %s", user_id, e)
        raise HTTPException(
            status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e
    except HTTPError as e:
        logger.error("User service unreachable: %s", e)
        raise HTTPException(
            status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e
    return UserSchema.model_validate(response.json(), strict=False)


async def get_optional_user(
    db: Annotated[AsyncSession, Depends(get_db)],
    client: Annotated[AsyncClient, Depends(get_async_client)],
    x_user_id: Optional[str] = Header(None),
) -> Optional[UserSchema]:
    """X-User-ID 헤더가 있으면 사용자를 확인하여 반환하고, 없으면 None을 반환합니다.

    확인된 사용자에 대해서는 프로필 자동 생성을 시도합니다 (실패해도 요청은 계속).

    Args:
        db (AsyncSession): 비동기 데이터베이스 세션
        client (AsyncClient): 비동기 HTTP 클라이언트
        x_user_id (Optional[str]): 요청 헤더에서 가져온 사용자 ID

    Returns:
        Optional[UserSchema]: 확인된 사용자 또는 None
    """
    if not x_user_id:
        return None
    user = await get_user_info(x_user_id, client)
    if not await ensure_profile_exists(db, user.id, user.email):
        logger.warning("Profile could not be provisioned for user %s", user.id)
    return user


async def get_current_user(
    user: Annotated[Optional[UserSchema], Depends(get_optional_user)],
) -> UserSchema:
    """인증된 사용자를 반환합니다.

    Args:
        user (Optional[UserSchema]): get_optional_user가 확인한 사용자

    Returns:
        UserSchema: 인증된 사용자

    Raises:
        HTTPException: X-User-ID 헤더가 없는 경우 (401)
    """
    if user is None:
        raise HTTPException(
            status_code=Config.HttpStatus.UNAUTHORIZED,
            detail="Authentication required",
        )
    return user
