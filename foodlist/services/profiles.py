"""프로필 자동 생성 및 카운터 관리 모듈.

인증된 사용자가 처음 접근할 때 프로필이 없으면 만들어 주고,
사람이 읽을 수 있는 고유 코드(접두사 2글자 + 숫자 6자리)를 발급합니다.

코드 발급은 "최댓값 조회 후 1 증가" 방식이지만, user_id_code 컬럼의 유니크 제약 조건이
동시 발급 충돌을 막습니다. 충돌(IntegrityError)이 나면 롤백 후 다시 시도합니다.
"""

from typing import Optional

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foodlist.config import Config, logger
from foodlist.models.lists import RestaurantList
from foodlist.models.profile import Profile
from foodlist.models.restaurants import Restaurant, RestaurantVisit
from foodlist.models.reviews import Review


def format_profile_code(number: int) -> str:
    """숫자를 프로필 코드 문자열로 변환합니다 (예: 42 -> FL000042)."""
    return f"{Config.PROFILE_CODE_PREFIX}{number:0{Config.PROFILE_CODE_DIGITS}d}"


def default_display_name(email: Optional[str]) -> str:
    """이메일 로컬 파트를 기본 표시 이름으로 사용합니다."""
    if email and "@" in email:
        local_part = email.split("@", 1)[0].strip()
        if local_part:
            return local_part
    return Config.DEFAULT_DISPLAY_NAME


async def next_profile_code(db: AsyncSession) -> str:
    """가장 큰 기존 코드의 숫자 부분에 1을 더한 다음 코드를 반환합니다."""
    result = await db.execute(
        select(func.max(Profile.user_id_code)).where(
            Profile.user_id_code.like(f"{Config.PROFILE_CODE_PREFIX}%")
        )
    )
    highest = result.scalar_one_or_none()
    if not highest:
        return format_profile_code(1)
    try:
        current = int(highest[len(Config.PROFILE_CODE_PREFIX):])
    except ValueError:
        logger.warning("숫자로 해석할 수 없는 프로필 코드: %s", highest)
        current = 0
    return format_profile_code(current + 1)


async def get_profile(db: AsyncSession, user_id: str) -> Optional[Profile]:
    """내부 사용자 ID로 프로필을 조회합니다."""
    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    return result.scalars().first()


async def ensure_profile_exists(
    db: AsyncSession, user_id: str, email: Optional[str] = None
) -> bool:
    """사용자 프로필이 존재하도록 보장합니다.

    이미 있으면 아무것도 하지 않고 True를 반환합니다.
    없으면 새 코드를 발급해 프로필을 만들고, 코드 충돌 시 최대
    Config.PROFILE_CODE_MAX_RETRIES번까지 다시 시도합니다.

    Args:
        db (AsyncSession): 비동기 DB 세션
        user_id (str): 사용자 ID
        email (Optional[str]): 기본 표시 이름을 만들 이메일

    Returns:
        bool: 프로필이 존재하면 True. 오류가 나면 로그를 남기고 False.
    """
    for attempt in range(1, Config.PROFILE_CODE_MAX_RETRIES + 1):
        try:
            if await get_profile(db, user_id) is not None:
                return True

            code = await next_profile_code(db)
            db.add(
                Profile(
                    user_id=user_id,
                    user_id_code=code,
                    display_name=default_display_name(email),
                    bio=Config.DEFAULT_BIO,
                    public_profile=True,
                )
            )
            await db.commit()
            logger.info("프로필 생성: user_id=%s, code=%s", user_id, code)
            return True
        except IntegrityError:
            # 다른 요청이 같은 코드나 같은 사용자를 먼저 추가함 → 재조회 후 재시도
            await db.rollback()
            logger.warning(
                "프로필 생성 충돌 (user_id=%s, attempt=%s)", user_id, attempt
            )
        except SQLAlchemyError:
            await db.rollback()
            logger.exception("프로필 생성 중 예외 발생 (user_id=%s)", user_id)
            return False

    logger.error("프로필 코드 발급 재시도 초과 (user_id=%s)", user_id)
    return False


async def collect_profile_stats(db: AsyncSession, user_id: str) -> dict:
    """사용자의 현재 활동 수를 원본 테이블에서 직접 셉니다."""

    async def count(stmt) -> int:
        return (await db.execute(stmt)).scalar_one()

    return {
        "restaurants_added": await count(
            select(func.count(Restaurant.id)).where(Restaurant.creator_id == user_id)
        ),
        "reviews": await count(
            select(func.count(Review.id)).where(Review.user_id == user_id)
        ),
        "lists": await count(
            select(func.count(RestaurantList.id)).where(
                RestaurantList.creator_id == user_id
            )
        ),
        "visited": await count(
            select(func.count(RestaurantVisit.restaurant_id)).where(
                RestaurantVisit.user_id == user_id, RestaurantVisit.visited.is_(True)
            )
        ),
    }


async def refresh_profile_counters(db: AsyncSession, user_id: str) -> None:
    """프로필의 비정규화 카운터를 다시 계산합니다. 실패해도 예외를 전파하지 않습니다."""
    try:
        stats = await collect_profile_stats(db, user_id)
        await db.execute(
            update(Profile)
            .where(Profile.user_id == user_id)
            .values(
                total_restaurants_added=stats["restaurants_added"],
                total_reviews=stats["reviews"],
                total_lists=stats["lists"],
                total_restaurants_visited=stats["visited"],
            )
        )
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("프로필 카운터 갱신 실패 (user_id=%s)", user_id)


async def propagate_display_name(db: AsyncSession, user_id: str, name: str) -> None:
    """변경된 표시 이름을 사용자가 만든 식당, 리스트, 리뷰에 반영합니다 (best effort)."""
    try:
        await db.execute(
            update(Restaurant)
            .where(Restaurant.creator_id == user_id)
            .values(creator_name=name)
        )
        await db.execute(
            update(RestaurantList)
            .where(RestaurantList.creator_id == user_id)
            .values(creator_name=name)
        )
        await db.execute(
            update(Review).where(Review.user_id == user_id).values(user_name=name)
        )
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("표시 이름 전파 실패 (user_id=%s)", user_id)
