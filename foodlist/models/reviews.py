"""이 모듈은 식당 리뷰를 저장하는 Review 클래스를 정의합니다."""

from __future__ import annotations
from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
    select,
)
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from foodlist.database import Base
from foodlist.models.restaurants import Restaurant


class Review(Base):
    """식당 리뷰 정보를 저장하는 클래스

    한 사용자는 한 식당에 하나의 리뷰만 작성할 수 있으며, 이는 (restaurant_id, user_id)
    유니크 제약 조건으로 데이터베이스에서 보장됩니다.

    Attributes:
        id (str): 리뷰의 고유 식별자 (UUID)
        restaurant_id (str): 리뷰 대상 식당 ID
        user_id (str): 작성자 사용자 ID
        user_name (Optional[str]): 작성 시점의 작성자 표시 이름
        rating (int): 평점 (1~5)
        comment (Optional[str]): 코멘트
        amount_spent (Optional[float]): 지출 금액
        restaurant (Restaurant): 리뷰 대상 식당 객체
    """

    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    restaurant_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    user_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    amount_spent: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    restaurant: Mapped["Restaurant"] = relationship(
        "Restaurant", back_populates="reviews"
    )

    __table_args__ = (
        UniqueConstraint("restaurant_id", "user_id", name="reviews_restaurant_user_key"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="check_rating_range"),
        Index("reviews_restaurant_id_index", "restaurant_id"),
        Index("reviews_user_id_created_at_index", "user_id", "created_at", "id"),
    )


# 식당별 리뷰 수 (조회 시 서브쿼리로 계산)
Restaurant.review_count = column_property(
    select(func.count(Review.id))
    .where(Review.restaurant_id == Restaurant.id)
    .correlate_except(Review)
    .scalar_subquery()
)
