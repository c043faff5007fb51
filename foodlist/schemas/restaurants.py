"""이 모듈은 식당 관련 데이터 스키마를 정의합니다.

Pydantic BaseModel을 사용하여 데이터 유효성 검사를 수행합니다.
"""

from datetime import datetime
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, Field

from foodlist.schemas.base import CamelModel, Timestamp
from foodlist.schemas.taxonomies import TaxonomyResponse


class RestaurantSchema(BaseModel):
    """식당의 기본 정보를 나타내는 클래스입니다.

    Attributes:
        name (Optional[str]): 식당 이름
        description (Optional[str]): 설명
        image_url (Optional[str]): 대표 이미지 주소
        images (Optional[List[str]]): 이미지 주소 목록
        price_per_person (Optional[float]): 1인당 가격
        location (Optional[str]): 주소
        latitude (Optional[float]): 위도
        longitude (Optional[float]): 경도
        source_url (Optional[str]): 출처 링크
        menu_url (Optional[str]): 메뉴 링크
        phone_numbers (Optional[List[str]]): 전화번호 목록
        cuisine_type_ids (Optional[List[int]]): 요리 종류 ID 목록
        dietary_option_ids (Optional[List[int]]): 식이 옵션 ID 목록
        feature_ids (Optional[List[int]]): 편의 시설 ID 목록
    """

    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    images: Optional[List[str]] = None
    price_per_person: Optional[float] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    source_url: Optional[str] = None
    menu_url: Optional[str] = None
    phone_numbers: Optional[List[str]] = None
    cuisine_type_ids: Optional[List[int]] = None
    dietary_option_ids: Optional[List[int]] = None
    feature_ids: Optional[List[int]] = None


class RestaurantCreate(RestaurantSchema):
    """POST /restaurants 요청 바디를 나타내는 클래스입니다."""


class RestaurantUpdate(RestaurantSchema):
    """PUT /restaurants/{id} 요청 바디를 나타내는 클래스입니다. 전달된 필드만 수정합니다."""


class RestaurantResponse(CamelModel):
    """식당 응답을 나타내는 클래스입니다."""

    id: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    price_per_person: Optional[float] = None
    rating: float = 0
    review_count: int = 0
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    source_url: Optional[str] = None
    menu_url: Optional[str] = None
    phone_numbers: List[str] = Field(default_factory=list)
    creator_id: Optional[str] = None
    creator_name: Optional[str] = None
    cuisine_types: List[TaxonomyResponse] = Field(default_factory=list)
    dietary_options: List[TaxonomyResponse] = Field(default_factory=list)
    features: List[TaxonomyResponse] = Field(default_factory=list)
    created_at: Annotated[datetime, Timestamp]
    updated_at: Annotated[datetime, Timestamp]


class RestaurantEnvelope(BaseModel):
    """단일 식당 응답 바디"""

    restaurant: RestaurantResponse


class RatingSummary(CamelModel):
    """평점 재계산 결과"""

    id: str
    name: str
    rating: float
    review_count: int


class RatingResponse(BaseModel):
    """POST /restaurants/{id}/rating 응답 바디"""

    message: str
    restaurant: RatingSummary


class VisitStatus(CamelModel):
    """방문 상태를 나타내는 클래스입니다.

    Attributes:
        visited (bool): 방문 여부
        visit_count (int): 방문 횟수
    """

    visited: bool = False
    visit_count: int = 0


class VisitAction(BaseModel):
    """PATCH /restaurants/{id}/visits 요청 바디"""

    action: Optional[str] = None


class BatchVisitRequest(CamelModel):
    """POST /restaurants/visits 요청 바디 (restaurantIds 또는 restaurant_ids)"""

    restaurant_ids: List[str] = Field(default_factory=list)


class BatchVisitResponse(BaseModel):
    """식당 ID별 방문 상태"""

    visits: Dict[str, VisitStatus]
