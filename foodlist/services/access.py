"""프로필 접근 권한 검증 모듈.

요청한 프로필 식별자(사람이 읽는 코드 또는 내부 ID)와 호출자 ID를 받아
접근 가능 여부와 접근 수준(OWNER / PUBLIC / PRIVATE / NONE)을 판단합니다.
검증은 읽기 전용이며 예외를 던지지 않습니다.
"""

import re
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foodlist.config import Config, logger
from foodlist.models.profile import Profile
from foodlist.schemas.users import ProfileResponse, ProfileStats

PROFILE_CODE_REGEX = re.compile(Config.PROFILE_CODE_PATTERN)


@dataclass
class AccessValidation:
    """프로필 접근 검증 결과

    Attributes:
        can_access (bool): 접근 가능 여부
        access_level (str): OWNER, PUBLIC, PRIVATE, NONE 중 하나
        reason (Optional[str]): 거부 사유 (PROFILE_NOT_FOUND, PRIVATE_PROFILE, VALIDATION_ERROR)
        target_user_id (Optional[str]): 대상 프로필의 내부 사용자 ID
        profile (Optional[Profile]): 조회된 프로필 객체
    """

    can_access: bool
    access_level: str
    reason: Optional[str] = None
    target_user_id: Optional[str] = None
    profile: Optional[Profile] = None


def is_profile_code(identifier: str) -> bool:
    """식별자가 사람이 읽는 프로필 코드(예: FL000042) 형식인지 확인합니다."""
    return bool(PROFILE_CODE_REGEX.match(identifier))


async def find_profile(db: AsyncSession, identifier: str) -> Optional[Profile]:
    """코드 또는 내부 ID로 프로필을 조회합니다."""
    if is_profile_code(identifier):
        stmt = select(Profile).where(Profile.user_id_code == identifier)
    else:
        stmt = select(Profile).where(Profile.user_id == identifier)
    result = await db.execute(stmt)
    return result.scalars().first()


async def validate_profile_access(
    db: AsyncSession,
    target_identifier: str,
    caller_id: Optional[str] = None,
) -> AccessValidation:
    """호출자가 대상 프로필에 접근할 수 있는지 검증합니다.

    1. 프로필이 없으면 NONE / PROFILE_NOT_FOUND
    2. 호출자가 소유자이면 공개 여부와 관계없이 OWNER
    3. 공개 프로필이면 익명 호출자는 PUBLIC, 인증된 호출자는 PRIVATE (둘 다 허용)
    4. 그 외에는 NONE / PRIVATE_PROFILE

    Args:
        db (AsyncSession): 비동기 DB 세션
        target_identifier (str): 프로필 코드 또는 내부 사용자 ID
        caller_id (Optional[str]): 호출자 사용자 ID (익명이면 None)

    Returns:
        AccessValidation: 검증 결과. 조회 중 오류가 나면 NONE / VALIDATION_ERROR.
    """
    try:
        profile = await find_profile(db, target_identifier)
    except SQLAlchemyError:
        logger.exception("Profile access validation failed for %s", target_identifier)
        return AccessValidation(
            can_access=False, access_level="NONE", reason="VALIDATION_ERROR"
        )

    if profile is None:
        logger.debug("Profile not found: %s", target_identifier)
        return AccessValidation(
            can_access=False, access_level="NONE", reason="PROFILE_NOT_FOUND"
        )

    if caller_id is not None and caller_id == profile.user_id:
        return AccessValidation(
            can_access=True,
            access_level="OWNER",
            target_user_id=profile.user_id,
            profile=profile,
        )

    if profile.public_profile:
        return AccessValidation(
            can_access=True,
            access_level="PRIVATE" if caller_id else "PUBLIC",
            target_user_id=profile.user_id,
            profile=profile,
        )

    return AccessValidation(
        can_access=False,
        access_level="NONE",
        reason="PRIVATE_PROFILE",
        target_user_id=profile.user_id,
    )


def shape_profile(profile: Profile, access_level: str) -> ProfileResponse:
    """접근 수준에 맞게 프로필 응답을 가공합니다. 전화번호는 소유자에게만 노출합니다."""
    return ProfileResponse(
        id=profile.user_id,
        user_id_code=profile.user_id_code,
        name=profile.display_name,
        profile_image=profile.avatar_url,
        location=profile.location,
        bio=profile.bio,
        website=profile.website,
        phone_number=profile.phone_number if access_level == "OWNER" else None,
        public_profile=profile.public_profile,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
        stats=ProfileStats(
            total_restaurants_visited=profile.total_restaurants_visited,
            total_reviews=profile.total_reviews,
            total_lists=profile.total_lists,
            total_restaurants_added=profile.total_restaurants_added,
            joined_date=profile.created_at,
        ),
    )
