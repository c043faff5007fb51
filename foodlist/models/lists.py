"""이 모듈은 사용자가 만든 식당 리스트를 저장하는 RestaurantList 클래스를 정의합니다."""

from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, Index, String, Text, func, select
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from foodlist.database import Base
from foodlist.models.associations import list_restaurants

if TYPE_CHECKING:
    from foodlist.models.restaurants import Restaurant


class RestaurantList(Base):
    """식당 리스트 정보를 저장하는 클래스

    식당 개수는 저장하지 않고 list_restaurants 연결 테이블의 크기로 계산합니다.

    Attributes:
        id (str): 리스트의 고유 식별자 (UUID)
        name (str): 리스트 이름
        description (Optional[str]): 설명
        creator_id (str): 만든 사용자 ID
        creator_name (Optional[str]): 만든 사용자 표시 이름
        restaurants (List[Restaurant]): 리스트에 포함된 식당 목록
    """

    __tablename__ = "lists"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    creator_id: Mapped[str] = mapped_column(String(64), nullable=False)
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

    restaurants: Mapped[List["Restaurant"]] = relationship(
        "Restaurant", secondary=list_restaurants, order_by=list_restaurants.c.added_at
    )

    # 식당 수는 연결 테이블 크기로 계산
    restaurant_count = column_property(
        select(func.count())
        .select_from(list_restaurants)
        .where(list_restaurants.c.list_id == id)
        .correlate_except(list_restaurants)
        .scalar_subquery()
    )

    __table_args__ = (
        Index("lists_name_index", "name"),
        Index("lists_creator_id_created_at_index", "creator_id", "created_at", "id"),
    )
