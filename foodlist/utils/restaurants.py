"""식당 조회/검증 관련 유틸리티 함수 모듈입니다."""

from typing import Annotated, List, Optional, Type

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foodlist.config import Config, logger
from foodlist.models.restaurants import (
    CuisineType,
    DietaryOption,
    Feature,
    Restaurant,
)
from foodlist.schemas.restaurants import RestaurantResponse, RestaurantSchema
from foodlist.schemas.users import UserSchema
from foodlist.utils.db import get_current_user, get_db

MAX_LATITUDE = 90
MAX_LONGITUDE = 180


async def load_restaurant(db: AsyncSession, restaurant_id: str) -> Optional[Restaurant]:
    """식당을 최신 상태(리뷰 수, 분류 포함)로 다시 읽어옵니다."""
    result = await db.execute(
        select(Restaurant)
        .where(Restaurant.id == restaurant_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_restaurant_or_404(
    restaurant_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Restaurant:
    """Restaurant를 조회하고, 없으면 404 예외를 발생시킨다.

    Args:
        restaurant_id (str): 식당 ID.
        db (AsyncSession): 데이터베이스 세션.

    Returns:
        Restaurant: 조회된 식당 객체.

    Raises:
        HTTPException: 식당 객체가 존재하지 않을 때 발생.
    """
    restaurant = await load_restaurant(db, restaurant_id)
    if not restaurant:
        raise HTTPException(
            status_code=Config.HttpStatus.NOT_FOUND,
            detail="Restaurant not found",
        )
    return restaurant


async def get_restaurant_with_permission(
    restaurant_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
) -> Restaurant:
    """식당을 조회하면서, 동시에 등록자 본인인지 확인하는 함수.

    존재하지 않는 식당과 권한이 없는 식당은 구분하지 않고 모두 404로 응답합니다.

    Args:
        restaurant_id (str): 조회할 식당 ID.
        db (AsyncSession): 비동기 데이터베이스 세션.
        current_user (UserSchema): 현재 사용자.

    Returns:
        Restaurant: 조회된 식당 객체.

    Raises:
        HTTPException(404): 식당이 없거나 등록자가 아닌 경우.
    """
    restaurant = await load_restaurant(db, restaurant_id)
    if restaurant is None or restaurant.creator_id != current_user.id:
        logger.warning(
            "User %s has no permission for restaurant %s", current_user.id, restaurant_id
        )
        raise HTTPException(
            status_code=Config.HttpStatus.NOT_FOUND,
            detail="Restaurant not found or access denied",
        )
    return restaurant


def validate_restaurant_fields(request: RestaurantSchema, *, creating: bool) -> None:
    """식당 요청 바디를 검증합니다.

    Raises:
        HTTPException(400): 이름 누락, 음수 가격, 좌표 오류.
    """
    fields = request.model_fields_set
    if creating or "name" in fields:
        if not request.name or not request.name.strip():
            raise HTTPException(
                status_code=Config.HttpStatus.BAD_REQUEST, detail="Name is required"
            )

    if request.price_per_person is not None and request.price_per_person < 0:
        raise HTTPException(
            status_code=Config.HttpStatus.BAD_REQUEST,
            detail="Price per person must be a non-negative number",
        )

    if (request.latitude is None) != (request.longitude is None):
        raise HTTPException(
            status_code=Config.HttpStatus.BAD_REQUEST,
            detail="Latitude and longitude must be provided together",
        )
    if request.latitude is not None and not (
        -MAX_LATITUDE <= request.latitude <= MAX_LATITUDE
        and -MAX_LONGITUDE <= request.longitude <= MAX_LONGITUDE
    ):
        raise HTTPException(
            status_code=Config.HttpStatus.BAD_REQUEST,
            detail="Invalid coordinates",
        )


async def resolve_taxonomies(
    db: AsyncSession, model: Type, ids: List[int], label: str
) -> list:
    """분류 ID 목록을 ORM 객체 목록으로 변환합니다.

    Raises:
        HTTPException(400): 존재하지 않는 ID가 포함된 경우.
    """
    unique_ids = set(ids)
    if not unique_ids:
        return []
    result = await db.execute(select(model).where(model.id.in_(unique_ids)))
    items = list(result.scalars().all())
    if len(items) != len(unique_ids):
        missing = sorted(unique_ids - {item.id for item in items})
        raise HTTPException(
            status_code=Config.HttpStatus.BAD_REQUEST,
            detail=f"Unknown {label}: {', '.join(str(i) for i in missing)}",
        )
    return items


async def apply_restaurant_fields(
    db: AsyncSession, restaurant: Restaurant, request: RestaurantSchema
) -> None:
    """요청에 포함된 필드만 식당 객체에 반영합니다 (분류 ID 포함)."""
    data = request.model_dump(
        exclude_unset=True,
        exclude={"cuisine_type_ids", "dietary_option_ids", "feature_ids"},
    )
    for key, value in data.items():
        if key in ("images", "phone_numbers") and value is None:
            value = []
        setattr(restaurant, key, value)

    if request.cuisine_type_ids is not None:
        restaurant.cuisine_types = await resolve_taxonomies(
            db, CuisineType, request.cuisine_type_ids, "cuisine types"
        )
    if request.dietary_option_ids is not None:
        restaurant.dietary_options = await resolve_taxonomies(
            db, DietaryOption, request.dietary_option_ids, "dietary options"
        )
    if request.feature_ids is not None:
        restaurant.features = await resolve_taxonomies(
            db, Feature, request.feature_ids, "features"
        )


def build_restaurant_response(restaurant: Restaurant) -> RestaurantResponse:
    """Restaurant ORM 객체를 응답 스키마로 변환합니다."""
    return RestaurantResponse.model_validate(restaurant)
