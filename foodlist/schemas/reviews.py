"""이 모듈은 리뷰 관련 데이터 스키마를 정의합니다."""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel

from foodlist.schemas.base import CamelModel, Timestamp


class ReviewCreate(BaseModel):
    """POST /reviews 요청 바디를 나타내는 클래스입니다.

    값 범위 검사는 라우터에서 직접 수행하여 에러 메시지를 통일합니다.
    """

    restaurant_id: Optional[str] = None
    rating: Optional[int] = None
    comment: Optional[str] = None
    amount_spent: Optional[float] = None


class ReviewUpdate(BaseModel):
    """PUT /reviews/{id} 요청 바디를 나타내는 클래스입니다."""

    rating: Optional[int] = None
    comment: Optional[str] = None
    amount_spent: Optional[float] = None


class ReviewAuthor(CamelModel):
    """리뷰 작성자 정보"""

    id: str
    name: str


class ReviewResponse(CamelModel):
    """리뷰 응답을 나타내는 클래스입니다.

    Attributes:
        id (str): 리뷰 ID
        restaurant_id (str): 식당 ID
        user_id (str): 작성자 ID
        rating (int): 평점
        comment (Optional[str]): 코멘트
        amount_spent (Optional[float]): 지출 금액
        user (ReviewAuthor): 작성자 정보
    """

    id: str
    restaurant_id: str
    user_id: str
    rating: int
    comment: Optional[str] = None
    amount_spent: Optional[float] = None
    created_at: Annotated[datetime, Timestamp]
    updated_at: Annotated[datetime, Timestamp]
    user: ReviewAuthor

    @classmethod
    def from_model(cls, review) -> "ReviewResponse":
        """Review ORM 객체를 응답 스키마로 변환합니다."""
        return cls(
            id=review.id,
            restaurant_id=review.restaurant_id,
            user_id=review.user_id,
            rating=review.rating,
            comment=review.comment,
            amount_spent=review.amount_spent,
            created_at=review.created_at,
            updated_at=review.updated_at,
            user=ReviewAuthor(id=review.user_id, name=review.user_name or "User"),
        )


class ReviewEnvelope(BaseModel):
    """단일 리뷰 응답 바디"""

    review: ReviewResponse


class ReviewCollection(BaseModel):
    """GET /reviews 응답 바디"""

    reviews: List[ReviewResponse]
