"""이 모듈은 분류(요리 종류, 식이 옵션, 편의 시설) 스키마를 정의합니다."""

from typing import List, Optional

from pydantic import BaseModel

from foodlist.schemas.base import CamelModel


class TaxonomyCreate(BaseModel):
    """분류 생성 요청 바디"""

    name: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None


class TaxonomyResponse(CamelModel):
    """분류 응답을 나타내는 클래스입니다.

    Attributes:
        id (int): 분류 ID
        name (str): 이름
        description (Optional[str]): 설명
        icon (Optional[str]): 아이콘
    """

    id: int
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None


class TaxonomyCollection(BaseModel):
    """분류 목록 응답 바디"""

    data: List[TaxonomyResponse]
    total: int
