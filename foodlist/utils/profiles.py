"""프로필 접근 제어 의존성 모듈입니다."""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from foodlist.config import Config, logger
from foodlist.schemas.users import UserSchema
from foodlist.services.access import AccessValidation, validate_profile_access
from foodlist.utils.db import get_db, get_optional_user


async def get_accessible_profile(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Optional[UserSchema], Depends(get_optional_user)],
) -> AccessValidation:
    """/users/{id}/... 목록 엔드포인트에서 대상 프로필 접근 권한을 확인합니다.

    Args:
        user_id (str): 프로필 코드 또는 내부 사용자 ID.
        db (AsyncSession): 비동기 데이터베이스 세션.
        current_user (Optional[UserSchema]): 호출자 (익명이면 None).

    Returns:
        AccessValidation: 접근이 허용된 검증 결과.

    Raises:
        HTTPException(404): 프로필이 없거나(User not found) 비공개인 경우(Profile is private).
        HTTPException(500): 검증 중 오류가 발생한 경우.
    """
    caller_id = current_user.id if current_user else None
    access = await validate_profile_access(db, user_id, caller_id)
    if access.can_access:
        return access

    logger.info(
        "Profile access denied: target=%s caller=%s reason=%s",
        user_id,
        caller_id,
        access.reason,
    )
    if access.reason == "PRIVATE_PROFILE":
        raise HTTPException(
            status_code=Config.HttpStatus.NOT_FOUND, detail="Profile is private"
        )
    if access.reason == "VALIDATION_ERROR":
        raise HTTPException(
            status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    raise HTTPException(
        status_code=Config.HttpStatus.NOT_FOUND, detail="User not found"
    )
