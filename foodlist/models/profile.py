"""이 모듈은 사용자 공개 프로필을 저장하는 Profile 클래스를 정의합니다."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from foodlist.database import Base


class Profile(Base):
    """사용자 프로필 정보를 저장하는 클래스 (User API 연동)

    Attributes:
        user_id (str): 사용자 서비스에서 발급한 고유 ID
        user_id_code (str): 사람이 읽을 수 있는 고유 코드 (예: FL000042). 한 번 발급되면 변경되지 않음
        display_name (str): 표시 이름
        avatar_url (Optional[str]): 프로필 이미지 주소
        bio (Optional[str]): 자기소개
        location (Optional[str]): 지역
        website (Optional[str]): 웹사이트
        phone_number (Optional[str]): 전화번호
        public_profile (bool): 공개 프로필 여부
        created_at (datetime): 생성 시간
        updated_at (datetime): 수정 시간
        total_restaurants_visited (int): 방문한 식당 수
        total_reviews (int): 작성한 리뷰 수
        total_lists (int): 만든 리스트 수
        total_restaurants_added (int): 등록한 식당 수
    """

    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id_code: Mapped[str] = mapped_column(String(8), nullable=False, unique=True)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    avatar_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    public_profile: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
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

    # 비정규화된 카운터
    total_restaurants_visited: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_lists: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_restaurants_added: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )

    __table_args__ = (
        Index("profiles_public_profile_index", "public_profile"),
        Index("profiles_created_at_index", "created_at"),
    )
