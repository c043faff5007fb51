"""리뷰 관리 API 모듈

API 목록:
    - `GET /reviews?restaurant_id=`: 식당의 리뷰를 최신순으로 조회합니다.
    - `POST /reviews`: 리뷰를 작성합니다. 사용자당 식당 하나에 리뷰 하나만 허용됩니다.
    - `GET /reviews/{review_id}`: 특정 리뷰를 조회합니다.
    - `PUT /reviews/{review_id}`: 본인 리뷰를 수정합니다.
    - `DELETE /reviews/{review_id}`: 본인 리뷰를 삭제합니다.

리뷰가 바뀔 때마다 커밋 이후에 식당 평균 평점과 작성자 프로필 카운터를 다시 계산합니다.
이 후처리는 실패해도 요청 결과에 영향을 주지 않습니다.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foodlist.config import Config, logger
from foodlist.models.restaurants import Restaurant
from foodlist.models.reviews import Review
from foodlist.schemas.base import MessageResponse
from foodlist.schemas.reviews import (
    ReviewCollection,
    ReviewCreate,
    ReviewEnvelope,
    ReviewResponse,
    ReviewUpdate,
)
from foodlist.schemas.users import UserSchema
from foodlist.services.profiles import get_profile, refresh_profile_counters
from foodlist.services.ratings import recompute_restaurant_rating
from foodlist.utils.db import get_current_user, get_db
from foodlist.utils.reviews import bad_request, validate_review_payload

router = APIRouter(prefix="/reviews", tags=["Review"])

ALREADY_REVIEWED = "You have already reviewed this restaurant"


async def after_review_change(db: AsyncSession, restaurant_id: str, user_id: str):
    """리뷰 변경 후처리: 평점 재계산과 작성자 카운터 갱신 (best effort)"""
    await recompute_restaurant_rating(db, restaurant_id)
    await refresh_profile_counters(db, user_id)


async def get_own_review_or_404(
    db: AsyncSession, review_id: str, user_id: str
) -> Review:
    """본인 리뷰를 조회하고, 없거나 타인의 리뷰이면 404 예외를 발생시킨다."""
    result = await db.execute(
        select(Review).where(Review.id == review_id, Review.user_id == user_id)
    )
    review = result.scalars().first()
    if review is None:
        raise HTTPException(
            status_code=Config.HttpStatus.NOT_FOUND,
            detail="Review not found or access denied",
        )
    return review


@router.get("", response_model=ReviewCollection)
async def list_reviews(
    db: Annotated[AsyncSession, Depends(get_db)],
    restaurant_id: Optional[str] = Query(None),
):
    """식당의 리뷰를 최신순으로 조회합니다.

    Raises:
        HTTPException(400): restaurant_id 파라미터가 없는 경우.
    """
    if not restaurant_id:
        raise bad_request("restaurant_id parameter is required")

    result = await db.execute(
        select(Review)
        .where(Review.restaurant_id == restaurant_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
    )
    reviews = result.scalars().all()
    return ReviewCollection(reviews=[ReviewResponse.from_model(r) for r in reviews])


@router.post(
    "",
    response_model=ReviewEnvelope,
    status_code=Config.HttpStatus.CREATED,
)
async def create_review(
    request: ReviewCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """새 리뷰를 작성합니다.

    Args:
        request (ReviewCreate): 리뷰 내용.
        db (AsyncSession): 비동기 DB 세션.
        current_user (UserSchema): 작성자.

    Returns:
        ReviewEnvelope: 생성된 리뷰.

    Raises:
        HTTPException(400): 필수 값 누락 또는 범위 오류.
        HTTPException(404): 식당이 존재하지 않는 경우.
        HTTPException(409): 이미 이 식당에 리뷰를 작성한 경우.
        HTTPException(500): DB 저장 실패.
    """
    if not request.restaurant_id:
        raise bad_request("restaurant_id and rating are required")
    validate_review_payload(request.rating, request.comment, request.amount_spent)

    restaurant = await db.get(Restaurant, request.restaurant_id)
    if restaurant is None:
        raise HTTPException(
            status_code=Config.HttpStatus.NOT_FOUND, detail="Restaurant not found"
        )

    existing = await db.execute(
        select(Review.id).where(
            Review.restaurant_id == request.restaurant_id,
            Review.user_id == current_user.id,
        )
    )
    if existing.first() is not None:
        raise HTTPException(
            status_code=Config.HttpStatus.CONFLICT, detail=ALREADY_REVIEWED
        )

    profile = await get_profile(db, current_user.id)
    review = Review(
        restaurant_id=request.restaurant_id,
        user_id=current_user.id,
        user_name=profile.display_name if profile else current_user.name,
        rating=request.rating,
        comment=request.comment or None,
        amount_spent=request.amount_spent,
    )

    try:
        db.add(review)
        await db.commit()
    except IntegrityError as e:
        # 사전 확인과 삽입 사이에 같은 사용자의 리뷰가 먼저 저장됨
        await db.rollback()
        logger.warning(
            "Duplicate review rejected by constraint: user=%s restaurant=%s",
            current_user.id,
            request.restaurant_id,
        )
        raise HTTPException(
            status_code=Config.HttpStatus.CONFLICT, detail=ALREADY_REVIEWED
        ) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("리뷰 생성 중 예외 발생: %s", e)
        raise HTTPException(
            status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
            detail="Failed to create review",
        ) from e

    response = ReviewEnvelope(review=ReviewResponse.from_model(review))
    await after_review_change(db, review.restaurant_id, current_user.id)
    logger.info("Review %s created by %s", review.id, current_user.id)
    return response


@router.get("/{review_id}", response_model=ReviewEnvelope)
async def get_review(
    review_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """특정 리뷰를 조회합니다."""
    review = await db.get(Review, review_id)
    if review is None:
        raise HTTPException(
            status_code=Config.HttpStatus.NOT_FOUND, detail="Review not found"
        )
    return ReviewEnvelope(review=ReviewResponse.from_model(review))


@router.put("/{review_id}", response_model=ReviewEnvelope)
async def update_review(
    review_id: str,
    request: ReviewUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """본인 리뷰를 수정합니다.

    요청 값 검증은 DB 조회보다 먼저 수행되므로, 잘못된 값이면 아무것도 쓰지 않습니다.

    Raises:
        HTTPException(400): 평점 누락/범위 오류, 지출 금액/코멘트 오류.
        HTTPException(404): 리뷰가 없거나 본인 리뷰가 아닌 경우.
        HTTPException(500): DB 저장 실패.
    """
    validate_review_payload(request.rating, request.comment, request.amount_spent)

    review = await get_own_review_or_404(db, review_id, current_user.id)
    review.rating = request.rating
    if "comment" in request.model_fields_set:
        review.comment = request.comment or None
    if "amount_spent" in request.model_fields_set:
        review.amount_spent = request.amount_spent

    try:
        await db.commit()
        await db.refresh(review)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("리뷰 수정 중 예외 발생: %s", e)
        raise HTTPException(
            status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
            detail="Failed to update review",
        ) from e

    response = ReviewEnvelope(review=ReviewResponse.from_model(review))
    await after_review_change(db, review.restaurant_id, current_user.id)
    return response


@router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(
    review_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[UserSchema, Depends(get_current_user)],
):
    """본인 리뷰를 삭제합니다.

    Raises:
        HTTPException(404): 리뷰가 없거나 본인 리뷰가 아닌 경우.
        HTTPException(500): DB 삭제 실패.
    """
    review = await get_own_review_or_404(db, review_id, current_user.id)
    restaurant_id = review.restaurant_id

    try:
        await db.delete(review)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("리뷰 삭제 중 예외 발생: %s", e)
        raise HTTPException(
            status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
            detail="Failed to delete review",
        ) from e

    await after_review_change(db, restaurant_id, current_user.id)
    return MessageResponse(message="Review deleted successfully")
