"""내 프로필 API 모듈

API 목록:
    - `GET /profile`: 내 프로필을 조회합니다 (없으면 생성).
    - `PUT /profile`: 내 프로필을 수정합니다.
    - `GET /profile/stats`: 내 활동 통계를 조회합니다.
"""

from typing import Annotated
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from foodlist.config import Config, logger
from foodlist.models.profile import Profile
from foodlist.schemas.users import OwnStats, ProfileResponse, ProfileUpdate, UserSchema
from foodlist.services.access import shape_profile
from foodlist.services.profiles import (
    collect_profile_stats,
    ensure_profile_exists,
    get_profile,
    propagate_display_name,
)
from foodlist.utils.db import get_current_user, get_db
from foodlist.utils.reviews import bad_request

router = APIRouter(prefix="/profile", tags=["Profile"])


async def get_own_profile(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
) -> Profile:
    """호출자의 프로필을 반환합니다. 없으면 생성을 한 번 더 시도합니다.

    Raises:
        HTTPException(500): 프로필을 만들 수 없는 경우.
    """
    profile = await get_profile(db, current_user.id)
    if profile is None and await ensure_profile_exists(
        db, current_user.id, current_user.email
    ):
        profile = await get_profile(db, current_user.id)
    if profile is None:
        raise HTTPException(
            status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
            detail="Failed to load profile",
        )
    return profile


def validate_website(website: str) -> None:
    """웹사이트 주소가 http/https URL인지 확인합니다."""
    parsed = urlparse(website)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise bad_request("Website must be a valid http or https URL")


@router.get("", response_model=ProfileResponse)
async def read_profile(profile: Annotated[Profile, Depends(get_own_profile)]):
    """내 프로필을 조회합니다."""
    return shape_profile(profile, "OWNER")


@router.put("", response_model=ProfileResponse)
async def update_profile(
    request: ProfileUpdate,
    profile: Annotated[Profile, Depends(get_own_profile)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """내 프로필을 수정합니다.

    표시 이름이 바뀌면 내가 등록한 식당, 리스트, 리뷰의 작성자 이름에도 반영합니다.

    Raises:
        HTTPException(400): 표시 이름이 비었거나 웹사이트 주소가 올바르지 않은 경우.
        HTTPException(500): DB 저장 실패.
    """
    if not request.display_name or not request.display_name.strip():
        raise bad_request("Display name is required")
    if request.website:
        validate_website(request.website)

    new_name = request.display_name.strip()
    name_changed = new_name != profile.display_name
    updates = request.model_dump(exclude_unset=True, exclude={"display_name"})
    profile.display_name = new_name
    for key, value in updates.items():
        if key == "public_profile":
            if value is not None:
                profile.public_profile = value
            continue
        setattr(profile, key, value or None)

    try:
        await db.commit()
        await db.refresh(profile)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("프로필 수정 중 예외 발생: %s", e)
        raise HTTPException(
            status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
            detail="Failed to update profile",
        ) from e

    response = shape_profile(profile, "OWNER")
    if name_changed:
        await propagate_display_name(db, profile.user_id, new_name)
    return response


@router.get("/stats", response_model=OwnStats)
async def read_profile_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """내가 등록한 식당, 작성한 리뷰, 방문한 식당 수를 조회합니다."""
    stats = await collect_profile_stats(db, current_user.id)
    return OwnStats(
        restaurants=stats["restaurants_added"],
        reviews=stats["reviews"],
        visited=stats["visited"],
    )
