"""이 모듈은 식당(Restaurant) 및 관련 분류 데이터베이스 모델을 정의합니다.

식당 정보, 요리 종류, 식이 옵션, 편의 시설, 방문 기록 클래스를 포함합니다.
"""

from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from foodlist.database import Base
from foodlist.models.associations import (
    restaurant_cuisine_types,
    restaurant_dietary_options,
    restaurant_features,
)

if TYPE_CHECKING:
    from foodlist.models.reviews import Review


class CuisineType(Base):
    """요리 종류를 저장하는 클래스 (예: Italiana, Japonesa)"""

    __tablename__ = "cuisine_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


class DietaryOption(Base):
    """식이 옵션을 저장하는 클래스 (예: Vegano, Sem glúten)"""

    __tablename__ = "dietary_options"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


class Feature(Base):
    """편의 시설을 저장하는 클래스 (예: Wi-Fi, Estacionamento)"""

    __tablename__ = "features"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


class Restaurant(Base):
    """식당 정보를 저장하는 클래스

    Attributes:
        id (str): 식당의 고유 식별자 (UUID)
        name (str): 식당 이름
        description (Optional[str]): 설명
        image_url (Optional[str]): 대표 이미지 주소
        images (List[str]): 이미지 주소 목록
        price_per_person (Optional[float]): 1인당 가격
        rating (float): 리뷰 평균 평점 (리뷰 변경 시 재계산되는 파생 값, 리뷰가 없으면 0)
        location (Optional[str]): 주소
        latitude (Optional[float]): 위도
        longitude (Optional[float]): 경도
        source_url (Optional[str]): 출처 링크
        menu_url (Optional[str]): 메뉴 링크
        phone_numbers (List[str]): 전화번호 목록
        creator_id (Optional[str]): 등록한 사용자 ID
        creator_name (Optional[str]): 등록한 사용자 표시 이름
        cuisine_types (List[CuisineType]): 요리 종류 목록
        dietary_options (List[DietaryOption]): 식이 옵션 목록
        features (List[Feature]): 편의 시설 목록
        reviews (List[Review]): 리뷰 목록
        review_count (int): 리뷰 수 (reviews 모듈에서 서브쿼리 속성으로 정의)
    """

    __tablename__ = "restaurants"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    price_per_person: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    latitude: Mapped[Optional[float]] = mapped_column(Float(53), nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float(53), nullable=True)
    source_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    menu_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone_numbers: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    creator_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    creator_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
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

    # ✅ 분류 관계 (다대다 관계 설정, 응답에 항상 포함되므로 즉시 로딩)
    cuisine_types: Mapped[List[CuisineType]] = relationship(
        "CuisineType", secondary=restaurant_cuisine_types, lazy="selectin"
    )
    dietary_options: Mapped[List[DietaryOption]] = relationship(
        "DietaryOption", secondary=restaurant_dietary_options, lazy="selectin"
    )
    features: Mapped[List[Feature]] = relationship(
        "Feature", secondary=restaurant_features, lazy="selectin"
    )

    # ✅ 1:N 관계
    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="restaurant",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("restaurants_name_index", "name"),
        Index("restaurants_creator_id_index", "creator_id"),
        Index("restaurants_created_at_index", "created_at", "id"),
    )


class RestaurantVisit(Base):
    """사용자별 식당 방문 기록을 저장하는 클래스

    Attributes:
        user_id (str): 사용자 ID
        restaurant_id (str): 식당 ID
        visited (bool): 방문 여부
        visit_count (int): 방문 횟수
    """

    __tablename__ = "user_restaurant_visits"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    restaurant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        primary_key=True,
    )
    visited: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    visit_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
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

    __table_args__ = (
        CheckConstraint("visit_count >= 0", name="check_visit_count_not_negative"),
    )
