"""식당 리스트 API 모듈

API 목록:
    - `GET /lists`: 리스트 목록을 페이지 단위로 조회합니다 (이름 검색).
    - `POST /lists`: 새 리스트를 만듭니다.
    - `GET /lists/{list_id}`: 리스트와 포함된 식당을 조회합니다.
    - `PUT /lists/{list_id}`: 만든 사람이 리스트를 수정합니다.
    - `DELETE /lists/{list_id}`: 만든 사람이 리스트를 삭제합니다.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from foodlist.config import Config, logger
from foodlist.models.lists import RestaurantList
from foodlist.models.restaurants import Restaurant
from foodlist.schemas.base import MessageResponse
from foodlist.schemas.lists import (
    ListCreate,
    ListDetail,
    ListEnvelope,
    ListSummary,
    ListUpdate,
)
from foodlist.schemas.pagination import ListingParams, PageEnvelope
from foodlist.schemas.users import UserSchema
from foodlist.services.profiles import get_profile, refresh_profile_counters
from foodlist.utils.db import get_current_user, get_db
from foodlist.utils.pagination import (
    LIKE_ESCAPE,
    apply_public_cache,
    contains_pattern,
    paginate_query,
)
from foodlist.utils.reviews import bad_request

router = APIRouter(prefix="/lists", tags=["List"])


async def load_list(db: AsyncSession, list_id: str) -> Optional[RestaurantList]:
    """리스트를 포함된 식당과 함께 최신 상태로 읽어옵니다."""
    result = await db.execute(
        select(RestaurantList)
        .where(RestaurantList.id == list_id)
        .options(selectinload(RestaurantList.restaurants))
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def resolve_restaurants(db: AsyncSession, ids: List[str]) -> List[Restaurant]:
    """식당 ID 목록을 식당 객체 목록으로 변환합니다 (요청 순서 유지).

    Raises:
        HTTPException(400): 존재하지 않는 식당 ID가 포함된 경우.
    """
    unique_ids = list(dict.fromkeys(ids))
    if not unique_ids:
        return []
    result = await db.execute(select(Restaurant).where(Restaurant.id.in_(unique_ids)))
    found = {r.id: r for r in result.scalars().all()}
    missing = [rid for rid in unique_ids if rid not in found]
    if missing:
        raise bad_request(f"Unknown restaurants: {', '.join(missing)}")
    return [found[rid] for rid in unique_ids]


async def get_list_with_permission(
    list_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
) -> RestaurantList:
    """리스트를 조회하면서 만든 사람인지 확인합니다. 아니면 404로 응답합니다."""
    restaurant_list = await load_list(db, list_id)
    if restaurant_list is None or restaurant_list.creator_id != current_user.id:
        raise HTTPException(
            status_code=Config.HttpStatus.NOT_FOUND,
            detail="List not found or access denied",
        )
    return restaurant_list


@router.get("", response_model=PageEnvelope[ListSummary])
async def list_lists(
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[ListingParams, Depends()],
    search: Optional[str] = Query(None),
):
    """리스트 목록을 페이지 단위로 조회합니다."""
    stmt = select(RestaurantList)
    if search:
        pattern = contains_pattern(search)
        stmt = stmt.where(
            or_(
                RestaurantList.name.ilike(pattern, escape=LIKE_ESCAPE),
                RestaurantList.description.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    page = await paginate_query(
        db,
        stmt,
        params,
        created_column=RestaurantList.created_at,
        id_column=RestaurantList.id,
        transformer=ListSummary.model_validate,
    )
    apply_public_cache(response)
    return page


@router.post("", response_model=ListEnvelope, status_code=Config.HttpStatus.CREATED)
async def create_list(
    request: ListCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """새 리스트를 만듭니다.

    Raises:
        HTTPException(400): 이름이 없거나 존재하지 않는 식당이 포함된 경우.
        HTTPException(500): DB 저장 실패.
    """
    if not request.name or not request.name.strip():
        raise bad_request("Name is required")

    profile = await get_profile(db, current_user.id)
    restaurant_list = RestaurantList(
        name=request.name.strip(),
        description=request.description,
        creator_id=current_user.id,
        creator_name=profile.display_name if profile else current_user.name,
    )
    restaurant_list.restaurants = await resolve_restaurants(db, request.restaurant_ids)

    try:
        db.add(restaurant_list)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("리스트 생성 중 예외 발생: %s", e)
        raise HTTPException(
            status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
            detail="Failed to create list",
        ) from e

    created = await load_list(db, restaurant_list.id)
    await refresh_profile_counters(db, current_user.id)
    return ListEnvelope(list=ListDetail.model_validate(created))


@router.get("/{list_id}", response_model=ListEnvelope)
async def get_list(
    list_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """리스트와 포함된 식당을 조회합니다."""
    restaurant_list = await load_list(db, list_id)
    if restaurant_list is None:
        raise HTTPException(
            status_code=Config.HttpStatus.NOT_FOUND, detail="List not found"
        )
    return ListEnvelope(list=ListDetail.model_validate(restaurant_list))


@router.put("/{list_id}", response_model=ListEnvelope)
async def update_list(
    request: ListUpdate,
    restaurant_list: Annotated[RestaurantList, Depends(get_list_with_permission)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """리스트 이름, 설명, 구성 식당을 수정합니다.

    Raises:
        HTTPException(400): 수정할 필드가 없거나 이름이 비어 있는 경우.
        HTTPException(404): 리스트가 없거나 만든 사람이 아닌 경우.
    """
    fields = request.model_fields_set
    if not fields:
        raise bad_request("No fields to update")
    if "name" in fields:
        if not request.name or not request.name.strip():
            raise bad_request("Name is required")
        restaurant_list.name = request.name.strip()
    if "description" in fields:
        restaurant_list.description = request.description
    if request.restaurant_ids is not None:
        restaurant_list.restaurants = await resolve_restaurants(
            db, request.restaurant_ids
        )

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("리스트 수정 중 예외 발생: %s", e)
        raise HTTPException(
            status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
            detail="Failed to update list",
        ) from e

    updated = await load_list(db, restaurant_list.id)
    return ListEnvelope(list=ListDetail.model_validate(updated))


@router.delete("/{list_id}", response_model=MessageResponse)
async def delete_list(
    restaurant_list: Annotated[RestaurantList, Depends(get_list_with_permission)],
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """리스트를 삭제합니다. 연결 테이블 행은 ORM이 함께 삭제합니다."""
    try:
        await db.delete(restaurant_list)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("리스트 삭제 중 예외 발생: %s", e)
        raise HTTPException(
            status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
            detail="Failed to delete list",
        ) from e

    await refresh_profile_counters(db, current_user.id)
    return MessageResponse(message="List deleted successfully")
