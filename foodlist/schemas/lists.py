"""이 모듈은 식당 리스트 관련 데이터 스키마를 정의합니다."""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field

from foodlist.schemas.base import CamelModel, Timestamp
from foodlist.schemas.restaurants import RestaurantResponse


class ListCreate(BaseModel):
    """POST /lists 요청 바디를 나타내는 클래스입니다."""

    name: Optional[str] = None
    description: Optional[str] = None
    restaurant_ids: List[str] = Field(default_factory=list)


class ListUpdate(BaseModel):
    """PUT /lists/{id} 요청 바디를 나타내는 클래스입니다. restaurant_ids가 주어지면 구성 전체를 교체합니다."""

    name: Optional[str] = None
    description: Optional[str] = None
    restaurant_ids: Optional[List[str]] = None


class ListSummary(CamelModel):
    """리스트 요약 응답 (식당 수 포함)"""

    id: str
    name: str
    description: Optional[str] = None
    creator_id: str
    creator_name: Optional[str] = None
    restaurant_count: int = 0
    created_at: Annotated[datetime, Timestamp]
    updated_at: Annotated[datetime, Timestamp]


class ListDetail(ListSummary):
    """리스트 상세 응답 (포함된 식당 목록 포함)"""

    restaurants: List[RestaurantResponse] = Field(default_factory=list)


class ListEnvelope(BaseModel):
    """단일 리스트 응답 바디"""

    list: ListDetail
