"""분류(요리 종류, 식이 옵션, 편의 시설) API 모듈

세 분류는 구조가 같으므로 build_taxonomy_router로 동일한 라우터를 생성합니다.

API 목록:
    - `GET /cuisine-types`, `GET /dietary-options`, `GET /features`: 이름순 목록 조회
    - `POST /cuisine-types`, `POST /dietary-options`, `POST /features`: 새 항목 추가
"""

from typing import Annotated, Type

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foodlist.config import Config, logger
from foodlist.models.restaurants import CuisineType, DietaryOption, Feature
from foodlist.schemas.taxonomies import (
    TaxonomyCollection,
    TaxonomyCreate,
    TaxonomyResponse,
)
from foodlist.schemas.users import UserSchema
from foodlist.utils.db import get_current_user, get_db
from foodlist.utils.reviews import bad_request


def build_taxonomy_router(prefix: str, model: Type, label: str) -> APIRouter:
    """분류 모델 하나에 대한 조회/생성 라우터를 만듭니다.

    Args:
        prefix (str): 경로 접두사 (예: /cuisine-types)
        model (Type): 분류 ORM 모델
        label (str): 에러 메시지에 쓰일 이름

    Returns:
        APIRouter: 생성된 라우터
    """
    router = APIRouter(prefix=prefix, tags=["Taxonomy"])

    @router.get("", response_model=TaxonomyCollection)
    async def list_items(db: Annotated[AsyncSession, Depends(get_db)]):
        result = await db.execute(select(model).order_by(model.name))
        items = [TaxonomyResponse.model_validate(i) for i in result.scalars().all()]
        return TaxonomyCollection(data=items, total=len(items))

    @router.post(
        "", response_model=TaxonomyResponse, status_code=Config.HttpStatus.CREATED
    )
    async def create_item(
        request: TaxonomyCreate,
        db: Annotated[AsyncSession, Depends(get_db)],
        current_user: Annotated[UserSchema, Depends(get_current_user)],
    ):
        if not request.name or not request.name.strip():
            raise bad_request("Name is required")

        item = model(
            name=request.name.strip(),
            description=request.description,
            icon=request.icon,
        )
        try:
            db.add(item)
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise HTTPException(
                status_code=Config.HttpStatus.CONFLICT,
                detail=f"{label} already exists",
            ) from e
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("%s 생성 중 예외 발생: %s", label, e)
            raise HTTPException(
                status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
                detail=f"Failed to create {label.lower()}",
            ) from e

        logger.info("%s '%s' created by %s", label, item.name, current_user.id)
        return TaxonomyResponse.model_validate(item)

    return router


cuisine_types_router = build_taxonomy_router("/cuisine-types", CuisineType, "Cuisine type")
dietary_options_router = build_taxonomy_router(
    "/dietary-options", DietaryOption, "Dietary option"
)
features_router = build_taxonomy_router("/features", Feature, "Feature")
