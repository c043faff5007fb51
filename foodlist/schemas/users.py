"""이 모듈은 사용자 및 프로필 관련 데이터 스키마를 정의합니다."""

from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from foodlist.schemas.base import CamelModel, Timestamp
from foodlist.schemas.lists import ListSummary
from foodlist.schemas.reviews import ReviewResponse

AccessLevel = Literal["OWNER", "PUBLIC", "PRIVATE", "NONE"]
AccessReason = Literal["PROFILE_NOT_FOUND", "PRIVATE_PROFILE", "VALIDATION_ERROR"]


class UserSchema(BaseModel):
    """외부 사용자 서비스가 반환하는 사용자 정보를 나타내는 클래스입니다.

    Attributes:
        id (str): 사용자 ID
        email (Optional[str]): 사용자 이메일
        name (Optional[str]): 사용자 이름
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    email: Optional[str] = None
    name: Optional[str] = None


class ProfileStats(CamelModel):
    """프로필 통계 정보를 나타내는 클래스입니다."""

    total_restaurants_visited: int = 0
    total_reviews: int = 0
    total_lists: int = 0
    total_restaurants_added: int = 0
    joined_date: Annotated[datetime, Timestamp]


class ProfileResponse(CamelModel):
    """접근 수준에 맞게 가공된 프로필 응답을 나타내는 클래스입니다.

    phone_number는 소유자에게만 채워집니다.
    """

    id: str
    user_id_code: str
    name: str
    profile_image: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    phone_number: Optional[str] = None
    public_profile: bool
    created_at: Annotated[datetime, Timestamp]
    updated_at: Annotated[datetime, Timestamp]
    stats: ProfileStats


class UserProfileDetail(ProfileResponse):
    """GET /users/{id} 응답 바디를 나타내는 클래스입니다."""

    recent_reviews: List[ReviewResponse] = Field(default_factory=list)
    recent_lists: List[ListSummary] = Field(default_factory=list)
    access_level: AccessLevel
    is_own_profile: bool


class AccessResponse(CamelModel):
    """GET /users/{id}/access 응답 바디를 나타내는 클래스입니다."""

    can_access: bool
    access_level: AccessLevel
    reason: Optional[AccessReason] = None
    target_user_id: Optional[str] = None


class UserSearchItem(CamelModel):
    """사용자 검색 결과 항목을 나타내는 클래스입니다."""

    id: str
    name: str
    profile_image: Optional[str] = None
    user_id_code: str
    location: Optional[str] = None
    bio: Optional[str] = None
    public_profile: bool
    total_restaurants_visited: int
    total_reviews: int
    total_lists: int
    created_at: Annotated[datetime, Timestamp]


class ProfileUpdate(BaseModel):
    """PUT /profile 요청 바디를 나타내는 클래스입니다."""

    display_name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    phone_number: Optional[str] = None
    avatar_url: Optional[str] = None
    public_profile: Optional[bool] = None


class OwnStats(BaseModel):
    """GET /profile/stats 응답 바디를 나타내는 클래스입니다."""

    restaurants: int
    reviews: int
    visited: int

