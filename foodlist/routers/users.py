"""사용자 공개 프로필 API 모듈

대상 사용자는 사람이 읽는 프로필 코드(예: FL000042) 또는 내부 사용자 ID로 지정할 수 있습니다.
비공개 프로필은 소유자만 조회할 수 있으며, 그 외 호출자에게는 404로 응답합니다.

API 목록:
    - `GET /users/search`: 공개 프로필을 검색합니다.
    - `GET /users/me`: 내 프로필, 통계, 최근 리뷰/리스트를 조회합니다.
    - `PUT /users/me`: 내 프로필을 수정합니다 (`PUT /profile`과 동일).
    - `GET /users/{user_id}`: 프로필, 통계, 최근 리뷰/리스트를 조회합니다.
    - `GET /users/{user_id}/access`: 접근 검증 결과를 그대로 반환합니다.
    - `GET /users/{user_id}/restaurants`: 사용자가 등록한 식당 페이지.
    - `GET /users/{user_id}/reviews`: 사용자가 작성한 리뷰 페이지.
    - `GET /users/{user_id}/lists`: 사용자가 만든 리스트 페이지.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foodlist.config import Config, logger
from foodlist.models.lists import RestaurantList
from foodlist.models.profile import Profile
from foodlist.models.restaurants import Restaurant
from foodlist.models.reviews import Review
from foodlist.routers.profile import get_own_profile, update_profile
from foodlist.schemas.lists import ListSummary
from foodlist.schemas.pagination import (
    ListingParams,
    PageEnvelope,
    SearchParams,
)
from foodlist.schemas.restaurants import RestaurantResponse
from foodlist.schemas.reviews import ReviewResponse
from foodlist.schemas.users import (
    AccessResponse,
    ProfileResponse,
    ProfileUpdate,
    UserProfileDetail,
    UserSchema,
    UserSearchItem,
)
from foodlist.services.access import (
    AccessValidation,
    shape_profile,
    validate_profile_access,
)
from foodlist.utils.db import get_current_user, get_db, get_optional_user
from foodlist.utils.pagination import (
    LIKE_ESCAPE,
    apply_public_cache,
    contains_pattern,
    paginate_query,
)
from foodlist.utils.profiles import get_accessible_profile
from foodlist.utils.restaurants import build_restaurant_response
from foodlist.utils.reviews import bad_request
from foodlist.utils.times import get_date_by_string

router = APIRouter(prefix="/users", tags=["User"])


def cache_for_anonymous(
    response: Response, current_user: Optional[UserSchema]
) -> None:
    """익명 호출자의 응답에만 공개 캐시 헤더를 설정합니다."""
    if current_user is None:
        apply_public_cache(response)


def parse_date_param(name: str, value: Optional[str]):
    """YYYY-MM-DD 쿼리 파라미터를 datetime으로 변환합니다."""
    if not value:
        return None
    try:
        return get_date_by_string(value)
    except ValueError as e:
        raise bad_request(f"Invalid {name} date, expected YYYY-MM-DD") from e


@router.get("/search", response_model=PageEnvelope[UserSearchItem])
async def search_users(  # noqa: PLR0913
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[SearchParams, Depends()],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
    q: Optional[str] = Query(None, description="이름/소개/코드 검색어"),
    location: Optional[str] = Query(None),
    min_reviews: Optional[int] = Query(None, alias="minReviews", ge=0),
    max_reviews: Optional[int] = Query(None, alias="maxReviews", ge=0),
    min_lists: Optional[int] = Query(None, alias="minLists", ge=0),
    max_lists: Optional[int] = Query(None, alias="maxLists", ge=0),
    joined_after: Optional[str] = Query(None, alias="joinedAfter"),
    joined_before: Optional[str] = Query(None, alias="joinedBefore"),
):
    """공개 프로필을 검색합니다.

    Raises:
        HTTPException(400): 날짜 형식이 올바르지 않은 경우.
    """
    logger.debug("User search by %s: q=%s location=%s", current_user.id, q, location)
    after = parse_date_param("joinedAfter", joined_after)
    before = parse_date_param("joinedBefore", joined_before)

    stmt = select(Profile).where(Profile.public_profile.is_(True))
    if q:
        pattern = contains_pattern(q)
        stmt = stmt.where(
            or_(
                Profile.display_name.ilike(pattern, escape=LIKE_ESCAPE),
                Profile.bio.ilike(pattern, escape=LIKE_ESCAPE),
                Profile.user_id_code.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    if location:
        stmt = stmt.where(
            Profile.location.ilike(contains_pattern(location), escape=LIKE_ESCAPE)
        )
    if min_reviews is not None:
        stmt = stmt.where(Profile.total_reviews >= min_reviews)
    if max_reviews is not None:
        stmt = stmt.where(Profile.total_reviews <= max_reviews)
    if min_lists is not None:
        stmt = stmt.where(Profile.total_lists >= min_lists)
    if max_lists is not None:
        stmt = stmt.where(Profile.total_lists <= max_lists)
    if after is not None:
        stmt = stmt.where(Profile.created_at >= after)
    if before is not None:
        stmt = stmt.where(Profile.created_at <= before)

    return await paginate_query(
        db,
        stmt,
        params,
        created_column=Profile.created_at,
        id_column=Profile.user_id,
        transformer=lambda p: UserSearchItem(
            id=p.user_id,
            name=p.display_name,
            profile_image=p.avatar_url,
            user_id_code=p.user_id_code,
            location=p.location,
            bio=p.bio,
            public_profile=p.public_profile,
            total_restaurants_visited=p.total_restaurants_visited,
            total_reviews=p.total_reviews,
            total_lists=p.total_lists,
            created_at=p.created_at,
        ),
    )


async def build_profile_detail(
    db: AsyncSession, access: AccessValidation
) -> UserProfileDetail:
    """접근이 허용된 프로필을 통계, 최근 리뷰, 최근 리스트와 함께 응답으로 만듭니다."""
    target_id = access.target_user_id
    recent_reviews = (
        await db.execute(
            select(Review)
            .where(Review.user_id == target_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .limit(Config.RECENT_ITEMS_SIZE)
        )
    ).scalars().all()
    recent_lists = (
        await db.execute(
            select(RestaurantList)
            .where(RestaurantList.creator_id == target_id)
            .order_by(RestaurantList.created_at.desc(), RestaurantList.id.desc())
            .limit(Config.RECENT_ITEMS_SIZE)
        )
    ).scalars().all()
    restaurants_added = (
        await db.execute(
            select(func.count(Restaurant.id)).where(Restaurant.creator_id == target_id)
        )
    ).scalar_one()

    shaped = shape_profile(access.profile, access.access_level)
    shaped.stats.total_restaurants_added = restaurants_added

    return UserProfileDetail(
        **shaped.model_dump(),
        recent_reviews=[ReviewResponse.from_model(r) for r in recent_reviews],
        recent_lists=[ListSummary.model_validate(lst) for lst in recent_lists],
        access_level=access.access_level,
        is_own_profile=access.access_level == "OWNER",
    )


# ✅ /{user_id} 보다 먼저 등록해야 "me"가 프로필 식별자로 해석되지 않음
@router.get("/me", response_model=UserProfileDetail)
async def get_my_profile(
    profile: Annotated[Profile, Depends(get_own_profile)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """내 프로필을 통계, 최근 리뷰와 리스트와 함께 조회합니다 (항상 OWNER)."""
    access = AccessValidation(
        can_access=True,
        access_level="OWNER",
        target_user_id=profile.user_id,
        profile=profile,
    )
    return await build_profile_detail(db, access)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    request: ProfileUpdate,
    profile: Annotated[Profile, Depends(get_own_profile)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """내 프로필을 수정합니다. PUT /profile과 동일하게 동작합니다."""
    return await update_profile(request, profile, db)


@router.get("/{user_id}", response_model=UserProfileDetail)
async def get_user_profile(
    user_id: str,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Optional[UserSchema], Depends(get_optional_user)],
):
    """프로필, 통계, 최근 리뷰와 리스트를 조회합니다.

    접근할 수 없는 프로필은 존재 여부를 드러내지 않도록 모두 404로 응답합니다.
    """
    access = await validate_profile_access(
        db, user_id, current_user.id if current_user else None
    )
    if not access.can_access or access.profile is None:
        raise HTTPException(
            status_code=Config.HttpStatus.NOT_FOUND, detail="User not found"
        )

    detail = await build_profile_detail(db, access)
    cache_for_anonymous(response, current_user)
    return detail

@router.get("/{user_id}/access", response_model=AccessResponse)
async def get_profile_access(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[Optional[UserSchema], Depends(get_optional_user)],
):
    """프로필 접근 검증 결과를 반환합니다."""
    access = await validate_profile_access(
        db, user_id, current_user.id if current_user else None
    )
    return AccessResponse(
        can_access=access.can_access,
        access_level=access.access_level,
        reason=access.reason,
        target_user_id=access.target_user_id if access.can_access else None,
    )


@router.get("/{user_id}/restaurants", response_model=PageEnvelope[RestaurantResponse])
async def get_user_restaurants(
    response: Response,
    access: Annotated[AccessValidation, Depends(get_accessible_profile)],
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[ListingParams, Depends()],
    current_user: Annotated[Optional[UserSchema], Depends(get_optional_user)],
):
    """사용자가 등록한 식당을 페이지 단위로 조회합니다."""
    page = await paginate_query(
        db,
        select(Restaurant).where(Restaurant.creator_id == access.target_user_id),
        params,
        created_column=Restaurant.created_at,
        id_column=Restaurant.id,
        transformer=build_restaurant_response,
    )
    cache_for_anonymous(response, current_user)
    return page


@router.get("/{user_id}/reviews", response_model=PageEnvelope[ReviewResponse])
async def get_user_reviews(
    response: Response,
    access: Annotated[AccessValidation, Depends(get_accessible_profile)],
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[ListingParams, Depends()],
    current_user: Annotated[Optional[UserSchema], Depends(get_optional_user)],
):
    """사용자가 작성한 리뷰를 페이지 단위로 조회합니다."""
    page = await paginate_query(
        db,
        select(Review).where(Review.user_id == access.target_user_id),
        params,
        created_column=Review.created_at,
        id_column=Review.id,
        transformer=ReviewResponse.from_model,
    )
    cache_for_anonymous(response, current_user)
    return page


@router.get("/{user_id}/lists", response_model=PageEnvelope[ListSummary])
async def get_user_lists(
    response: Response,
    access: Annotated[AccessValidation, Depends(get_accessible_profile)],
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[ListingParams, Depends()],
    current_user: Annotated[Optional[UserSchema], Depends(get_optional_user)],
):
    """사용자가 만든 리스트를 페이지 단위로 조회합니다."""
    page = await paginate_query(
        db,
        select(RestaurantList).where(
            RestaurantList.creator_id == access.target_user_id
        ),
        params,
        created_column=RestaurantList.created_at,
        id_column=RestaurantList.id,
        transformer=ListSummary.model_validate,
    )
    cache_for_anonymous(response, current_user)
    return page
