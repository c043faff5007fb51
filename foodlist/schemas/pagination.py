"""이 모듈은 페이지네이션을 위한 스키마를 정의합니다.

Pydantic과 FastAPI Pagination을 사용하여 오프셋/커서 방식 모두에 공통으로 쓰이는
페이지 요청 파라미터와 페이지 응답(Page Envelope) 클래스를 제공합니다.
"""

from typing import Generic, List, Optional, TypeVar

from fastapi import Query
from fastapi_pagination.bases import AbstractPage, AbstractParams, RawParams
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from foodlist.config import Config
from foodlist.utils.times import get_now_timestamp

T = TypeVar("T")


class ListingParams(BaseModel, AbstractParams):
    """목록 조회 요청 파라미터.

    cursor 쿼리 파라미터가 주어지면(빈 값이면 처음부터) 커서 방식으로, 없으면 오프셋 방식으로 동작합니다.
    limit은 Config.MAX_PAGE_SIZE를 넘지 않도록 잘립니다.

    Attributes:
        page (int): 페이지 번호 (1부터 시작).
        limit (int): 페이지당 항목 수.
        cursor (Optional[str]): 이전 페이지 마지막 항목을 가리키는 불투명 커서.
    """

    page: int = Query(1, ge=1, description="페이지 번호")
    limit: int = Query(Config.DEFAULT_PAGE_SIZE, ge=1, description="페이지당 항목 수")
    cursor: Optional[str] = Query(None, description="커서 (빈 값이면 처음부터)")

    @property
    def page_size(self) -> int:
        """최대값으로 제한된 페이지 크기를 반환합니다."""
        return min(self.limit, Config.MAX_PAGE_SIZE)

    @property
    def is_cursor_mode(self) -> bool:
        """커서 방식 요청 여부를 반환합니다."""
        return self.cursor is not None

    def to_raw_params(self) -> RawParams:
        return RawParams(
            limit=self.page_size,
            offset=(self.page - 1) * self.page_size,
        )


class SearchParams(ListingParams):
    """사용자 검색용 요청 파라미터. 기본 페이지 크기만 다릅니다."""

    limit: int = Query(Config.SEARCH_PAGE_SIZE, ge=1, description="페이지당 항목 수")


class PageEnvelope(AbstractPage[T], Generic[T]):
    """목록 응답을 감싸는 페이지 클래스.

    Attributes:
        data (List[T]): 페이지 데이터 리스트.
        total (int): 필터 조건에 맞는 전체 항목 수.
        page (int): 현재 페이지 번호.
        limit (int): 페이지당 항목 수.
        has_more (bool): 현재 구간 이후에 항목이 더 있는지 여부.
        next_page (Optional[int]): 오프셋 방식일 때 다음 페이지 번호. 없으면 None.
        next_cursor (Optional[str]): 커서 방식일 때 다음 페이지 커서. 없으면 None.
        timestamp (str): 응답 생성 시각 (ISO 8601).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data: List[T]
    total: int
    page: int
    limit: int
    has_more: bool
    next_page: Optional[int] = None
    next_cursor: Optional[str] = None
    timestamp: str

    # ✅ __params_type__을 명확하게 지정해야 AttributeError 방지됨
    __params_type__ = ListingParams

    @classmethod
    def create(
        cls,
        items: List[T],
        params: ListingParams,
        *,
        total: int = 0,
        has_more: Optional[bool] = None,
        next_cursor: Optional[str] = None,
        **kwargs,
    ) -> "PageEnvelope[T]":
        """주어진 데이터와 페이지네이션 파라미터를 사용하여 PageEnvelope 객체를 생성합니다.

        Args:
            items (List[T]): 페이지 데이터 리스트.
            params (ListingParams): 페이지네이션 파라미터 객체.
            total (int): 전체 항목 수.
            has_more (Optional[bool]): 다음 항목 존재 여부. None이면 오프셋 기준으로 계산합니다.
            next_cursor (Optional[str]): 다음 페이지 커서.

        Returns:
            PageEnvelope[T]: 생성된 PageEnvelope 객체.
        """
        if has_more is None:
            has_more = total > params.page * params.page_size

        return cls(
            data=items,
            total=total,
            page=params.page,
            limit=params.page_size,
            has_more=has_more,
            next_page=(
                params.page + 1 if has_more and not params.is_cursor_mode else None
            ),
            next_cursor=next_cursor if has_more and params.is_cursor_mode else None,
            timestamp=get_now_timestamp(),
        )
