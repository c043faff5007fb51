"""식당 평점 집계 모듈.

리뷰가 생성/수정/삭제될 때마다 해당 식당의 평균 평점을 처음부터 다시 계산합니다.
재계산은 리뷰 쓰기와 별도로 커밋되며, 실패해도 리뷰 요청은 성공으로 처리합니다.
어긋난 값은 야간 재동기화 작업(resync_derived_data)이 바로잡습니다.
"""

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foodlist.config import logger
from foodlist.database import AsyncSessionLocal
from foodlist.models.profile import Profile
from foodlist.models.restaurants import Restaurant
from foodlist.models.reviews import Review
from foodlist.services.profiles import refresh_profile_counters


def mean_rating(ratings: list[int]) -> float:
    """평점 목록의 산술 평균을 반환합니다. 비어 있으면 0."""
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


async def compute_restaurant_rating(db: AsyncSession, restaurant_id: str) -> float:
    """식당의 모든 리뷰 평점을 읽어 평균을 계산합니다."""
    result = await db.execute(
        select(Review.rating).where(Review.restaurant_id == restaurant_id)
    )
    return mean_rating(list(result.scalars().all()))


async def recompute_restaurant_rating(db: AsyncSession, restaurant_id: str) -> None:
    """식당의 평균 평점을 다시 계산하여 저장합니다.

    오류는 로그로 남기고 세션을 롤백한 뒤 무시합니다.

    Args:
        db (AsyncSession): 비동기 DB 세션
        restaurant_id (str): 식당 ID
    """
    try:
        rating = await compute_restaurant_rating(db, restaurant_id)
        await db.execute(
            update(Restaurant)
            .where(Restaurant.id == restaurant_id)
            .values(rating=rating)
        )
        await db.commit()
        logger.debug("Restaurant %s rating recomputed: %s", restaurant_id, rating)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("평점 재계산 실패 (restaurant_id=%s)", restaurant_id)


async def resync_derived_data():
    """모든 식당 평점과 모든 프로필 카운터를 다시 계산합니다 (스케줄러 작업)."""
    logger.info("🔄 파생 데이터 재동기화 시작")
    async with AsyncSessionLocal() as db:
        restaurant_ids = (await db.execute(select(Restaurant.id))).scalars().all()
        for restaurant_id in restaurant_ids:
            await recompute_restaurant_rating(db, restaurant_id)

        user_ids = (await db.execute(select(Profile.user_id))).scalars().all()
        for user_id in user_ids:
            await refresh_profile_counters(db, user_id)

    logger.info(
        "파생 데이터 재동기화 완료: 식당 %s개, 프로필 %s개",
        len(restaurant_ids),
        len(user_ids),
    )
