"""이 모듈은 SQLAlchemy를 사용하여 데이터베이스 테이블 간의 관계를 정의합니다.

Restaurant와 분류(요리 종류, 식이 옵션, 편의 시설) 사이, 그리고 List와 Restaurant 사이의
Many-to-Many 관계를 정의하는 테이블을 포함합니다.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table

from foodlist.database import Base

# Restaurant와 CuisineType 사이의 Many-to-Many 관계를 정의하는 테이블
restaurant_cuisine_types = Table(
    "restaurant_cuisine_types",
    Base.metadata,
    Column(
        "restaurant_id",
        String(36),
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "cuisine_type_id",
        Integer,
        ForeignKey("cuisine_types.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

# Restaurant와 DietaryOption 사이의 Many-to-Many 관계를 정의하는 테이블
restaurant_dietary_options = Table(
    "restaurant_dietary_options",
    Base.metadata,
    Column(
        "restaurant_id",
        String(36),
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "dietary_option_id",
        Integer,
        ForeignKey("dietary_options.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

# Restaurant와 Feature 사이의 Many-to-Many 관계를 정의하는 테이블
restaurant_features = Table(
    "restaurant_features",
    Base.metadata,
    Column(
        "restaurant_id",
        String(36),
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "feature_id",
        Integer,
        ForeignKey("features.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

# List와 Restaurant 사이의 Many-to-Many 관계를 정의하는 테이블
list_restaurants = Table(
    "list_restaurants",
    Base.metadata,
    Column(
        "list_id",
        String(36),
        ForeignKey("lists.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "restaurant_id",
        String(36),
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "added_at",
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    ),
)
