"""식당 관리 API 모듈

이 모듈은 FastAPI를 기반으로 식당 관련 CRUD API와 방문 기록 API를 제공합니다.

API 목록:
    - `GET /restaurants`: 식당 목록을 페이지 단위로 조회합니다 (검색, 요리 종류 필터).
    - `POST /restaurants`: 새 식당을 등록합니다.
    - `POST /restaurants/visits`: 여러 식당의 방문 상태를 한 번에 조회합니다.
    - `GET /restaurants/{restaurant_id}`: 특정 식당 정보를 조회합니다.
    - `PUT /restaurants/{restaurant_id}`: 등록자가 식당 정보를 수정합니다.
    - `DELETE /restaurants/{restaurant_id}`: 등록자가 식당을 삭제합니다.
    - `POST /restaurants/{restaurant_id}/rating`: 평균 평점을 다시 계산합니다.
    - `GET|POST|PATCH /restaurants/{restaurant_id}/visits`: 방문 기록을 조회/추가/변경합니다.

등록자가 아닌 사용자의 수정/삭제 요청은 존재 여부를 드러내지 않도록 404로 응답합니다.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import delete, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foodlist.config import Config, logger
from foodlist.models.associations import (
    list_restaurants as list_restaurants_table,
    restaurant_cuisine_types,
)
from foodlist.models.restaurants import CuisineType, Restaurant, RestaurantVisit
from foodlist.models.reviews import Review
from foodlist.schemas.base import MessageResponse
from foodlist.schemas.pagination import ListingParams, PageEnvelope
from foodlist.schemas.restaurants import (
    BatchVisitRequest,
    BatchVisitResponse,
    RatingResponse,
    RatingSummary,
    RestaurantCreate,
    RestaurantEnvelope,
    RestaurantResponse,
    RestaurantUpdate,
    VisitAction,
    VisitStatus,
)
from foodlist.schemas.users import UserSchema
from foodlist.services.profiles import get_profile, refresh_profile_counters
from foodlist.services.ratings import recompute_restaurant_rating
from foodlist.utils.db import get_current_user, get_db
from foodlist.utils.pagination import (
    LIKE_ESCAPE,
    apply_public_cache,
    contains_pattern,
    escape_like,
    paginate_query,
)
from foodlist.utils.restaurants import (
    apply_restaurant_fields,
    build_restaurant_response,
    get_restaurant_or_404,
    get_restaurant_with_permission,
    load_restaurant,
    validate_restaurant_fields,
)
from foodlist.utils.reviews import bad_request

router = APIRouter(prefix="/restaurants", tags=["Restaurant"])


def internal_error(message: str, e: Exception) -> HTTPException:
    """DB 오류를 로그로 남기고 500 예외 객체를 생성합니다."""
    logger.error("%s: %s", message, e)
    return HTTPException(
        status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR, detail=message
    )


@router.get("", response_model=PageEnvelope[RestaurantResponse])
async def list_restaurants(
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[ListingParams, Depends()],
    search: Optional[str] = Query(None, description="이름/설명/주소 검색어"),
    cuisine: Optional[str] = Query(None, description="요리 종류 이름 또는 ID"),
):
    """식당 목록을 페이지 단위로 조회합니다.

    Args:
        response (Response): 캐시 헤더를 설정할 응답 객체.
        db (AsyncSession): 비동기 DB 세션.
        params (ListingParams): 페이지/커서 파라미터.
        search (Optional[str]): 검색어.
        cuisine (Optional[str]): 요리 종류 필터.

    Returns:
        PageEnvelope[RestaurantResponse]: 식당 페이지.
    """
    stmt = select(Restaurant)
    if search:
        pattern = contains_pattern(search)
        stmt = stmt.where(
            or_(
                Restaurant.name.ilike(pattern, escape=LIKE_ESCAPE),
                Restaurant.description.ilike(pattern, escape=LIKE_ESCAPE),
                Restaurant.location.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    if cuisine:
        cuisine_filter = (
            CuisineType.id == int(cuisine)
            if cuisine.isdecimal() and cuisine.isascii()
            else CuisineType.name.ilike(escape_like(cuisine), escape=LIKE_ESCAPE)
        )
        stmt = stmt.where(
            Restaurant.id.in_(
                select(restaurant_cuisine_types.c.restaurant_id)
                .join(
                    CuisineType,
                    CuisineType.id == restaurant_cuisine_types.c.cuisine_type_id,
                )
                .where(cuisine_filter)
            )
        )

    page = await paginate_query(
        db,
        stmt,
        params,
        created_column=Restaurant.created_at,
        id_column=Restaurant.id,
        transformer=build_restaurant_response,
    )
    apply_public_cache(response)
    return page


@router.post(
    "", response_model=RestaurantEnvelope, status_code=Config.HttpStatus.CREATED
)
async def create_restaurant(
    request: RestaurantCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """새 식당을 등록합니다.

    Raises:
        HTTPException(400): 이름 누락, 가격/좌표 오류, 존재하지 않는 분류 ID.
        HTTPException(500): DB 저장 실패.
    """
    validate_restaurant_fields(request, creating=True)

    profile = await get_profile(db, current_user.id)
    restaurant = Restaurant(
        creator_id=current_user.id,
        creator_name=profile.display_name if profile else current_user.name,
    )
    await apply_restaurant_fields(db, restaurant, request)
    restaurant.name = restaurant.name.strip()

    try:
        db.add(restaurant)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise internal_error("Failed to create restaurant", e) from e

    created = await load_restaurant(db, restaurant.id)
    await refresh_profile_counters(db, current_user.id)
    logger.info("Restaurant %s created by %s", created.id, current_user.id)
    return RestaurantEnvelope(restaurant=build_restaurant_response(created))


@router.post("/visits", response_model=BatchVisitResponse)
async def get_batch_visits(
    request: BatchVisitRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """여러 식당의 방문 상태를 한 번에 조회합니다. 기록이 없는 식당은 미방문으로 채웁니다."""
    visits = {rid: VisitStatus() for rid in request.restaurant_ids}
    if not visits:
        return BatchVisitResponse(visits={})

    result = await db.execute(
        select(RestaurantVisit).where(
            RestaurantVisit.user_id == current_user.id,
            RestaurantVisit.restaurant_id.in_(list(visits)),
        )
    )
    for visit in result.scalars().all():
        visits[visit.restaurant_id] = VisitStatus(
            visited=visit.visited, visit_count=visit.visit_count
        )
    return BatchVisitResponse(visits=visits)


@router.get("/{restaurant_id}", response_model=RestaurantEnvelope)
async def get_restaurant(
    restaurant: Annotated[Restaurant, Depends(get_restaurant_or_404)],
):
    """특정 식당 정보를 조회합니다."""
    return RestaurantEnvelope(restaurant=build_restaurant_response(restaurant))


@router.put("/{restaurant_id}", response_model=RestaurantEnvelope)
async def update_restaurant(
    request: RestaurantUpdate,
    restaurant: Annotated[Restaurant, Depends(get_restaurant_with_permission)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """등록자가 식당 정보를 수정합니다. 요청에 포함된 필드만 변경됩니다.

    Raises:
        HTTPException(400): 수정할 필드가 없거나 값이 올바르지 않은 경우.
        HTTPException(404): 식당이 없거나 등록자가 아닌 경우.
        HTTPException(500): DB 저장 실패.
    """
    if not request.model_fields_set:
        raise bad_request("No fields to update")
    validate_restaurant_fields(request, creating=False)

    await apply_restaurant_fields(db, restaurant, request)
    if "name" in request.model_fields_set:
        restaurant.name = restaurant.name.strip()

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise internal_error("Failed to update restaurant", e) from e

    updated = await load_restaurant(db, restaurant.id)
    return RestaurantEnvelope(restaurant=build_restaurant_response(updated))


@router.delete("/{restaurant_id}", response_model=MessageResponse)
async def delete_restaurant(
    restaurant: Annotated[Restaurant, Depends(get_restaurant_with_permission)],
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """등록자가 식당을 삭제합니다.

    리스트 포함 기록, 방문 기록, 리뷰를 먼저 삭제한 뒤 식당을 삭제합니다. 분류 연결은 ORM이 함께 정리합니다.
    """
    try:
        await db.execute(delete(Review).where(Review.restaurant_id == restaurant.id))
        await db.execute(
            delete(list_restaurants_table).where(
                list_restaurants_table.c.restaurant_id == restaurant.id
            )
        )
        await db.execute(
            delete(RestaurantVisit).where(
                RestaurantVisit.restaurant_id == restaurant.id
            )
        )
        await db.delete(restaurant)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise internal_error("Failed to delete restaurant", e) from e

    await refresh_profile_counters(db, current_user.id)
    logger.info("Restaurant %s deleted by %s", restaurant.id, current_user.id)
    return MessageResponse(message="Restaurant deleted successfully")


@router.post("/{restaurant_id}/rating", response_model=RatingResponse)
async def recalculate_rating(
    restaurant: Annotated[Restaurant, Depends(get_restaurant_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """식당의 평균 평점을 리뷰로부터 다시 계산합니다."""
    logger.info(
        "Rating recompute requested for %s by %s", restaurant.id, current_user.id
    )
    await recompute_restaurant_rating(db, restaurant.id)
    refreshed = await load_restaurant(db, restaurant.id)
    return RatingResponse(
        message="Restaurant rating updated successfully",
        restaurant=RatingSummary(
            id=refreshed.id,
            name=refreshed.name,
            rating=refreshed.rating,
            review_count=refreshed.review_count,
        ),
    )


async def get_visit(
    db: AsyncSession, user_id: str, restaurant_id: str
) -> Optional[RestaurantVisit]:
    """사용자의 특정 식당 방문 기록을 조회합니다."""
    return await db.get(RestaurantVisit, (user_id, restaurant_id))


@router.get("/{restaurant_id}/visits", response_model=VisitStatus)
async def get_visit_status(
    restaurant_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """현재 사용자의 방문 상태를 조회합니다. 기록이 없으면 미방문으로 응답합니다."""
    visit = await get_visit(db, current_user.id, restaurant_id)
    if visit is None:
        return VisitStatus()
    return VisitStatus(visited=visit.visited, visit_count=visit.visit_count)


@router.post("/{restaurant_id}/visits", response_model=VisitStatus)
async def add_visit(
    restaurant: Annotated[Restaurant, Depends(get_restaurant_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """방문을 1회 추가합니다."""
    visit = await get_visit(db, current_user.id, restaurant.id)
    if visit is None:
        visit = RestaurantVisit(
            user_id=current_user.id,
            restaurant_id=restaurant.id,
            visited=True,
            visit_count=1,
        )
        db.add(visit)
    else:
        visit.visited = True
        visit.visit_count += 1

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise internal_error("Failed to update visit", e) from e

    status = VisitStatus(visited=visit.visited, visit_count=visit.visit_count)
    await refresh_profile_counters(db, current_user.id)
    return status


@router.patch("/{restaurant_id}/visits", response_model=VisitStatus)
async def change_visit(
    request: VisitAction,
    restaurant: Annotated[Restaurant, Depends(get_restaurant_or_404)],
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """방문 상태를 변경합니다.

    - toggle_visited: 방문 여부를 뒤집습니다. 처음 방문 처리 시 방문 횟수를 1로 맞춥니다.
    - remove_visit: 방문 횟수를 1 줄이고, 0이 되면 미방문으로 바꿉니다.

    Raises:
        HTTPException(400): 알 수 없는 action.
    """
    if request.action not in ("toggle_visited", "remove_visit"):
        raise bad_request("Invalid action")

    visit = await get_visit(db, current_user.id, restaurant.id)
    if request.action == "toggle_visited":
        if visit is None:
            visit = RestaurantVisit(
                user_id=current_user.id,
                restaurant_id=restaurant.id,
                visited=True,
                visit_count=1,
            )
            db.add(visit)
        else:
            visit.visited = not visit.visited
            if visit.visited and visit.visit_count == 0:
                visit.visit_count = 1
    else:
        if visit is None:
            return VisitStatus()
        visit.visit_count = max(visit.visit_count - 1, 0)
        if visit.visit_count == 0:
            visit.visited = False

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise internal_error("Failed to update visit status", e) from e

    status = VisitStatus(visited=visit.visited, visit_count=visit.visit_count)
    await refresh_profile_counters(db, current_user.id)
    return status
