"""목록 조회 페이지네이션 유틸리티 모듈.

하나의 필터 쿼리를 받아 오프셋 방식 또는 커서 방식으로 잘라내고,
어느 방식이든 동일한 PageEnvelope 형태로 돌려줍니다.

- 오프셋 방식: `[(page-1)*limit, page*limit-1]` 구간을 조회하고, 같은 필터로 전체 개수를 셉니다.
- 커서 방식: (created_at, id) 내림차순으로 커서 위치 "이후"의 항목만 조회하므로
  조회 사이에 새 항목이 추가되어도 이미 반환한 항목을 다시 반환하지 않습니다.
"""

import base64
import binascii
from datetime import datetime
from typing import Any, Callable, Sequence

from fastapi import HTTPException, Response
from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from foodlist.config import Config, logger
from foodlist.schemas.pagination import ListingParams, PageEnvelope

CURSOR_SEPARATOR = "|"
LIKE_ESCAPE = "\\"


def encode_cursor(created_at: datetime, row_id: Any) -> str:
    """행의 정렬 위치(created_at, id)를 불투명 커서 문자열로 인코딩합니다.

    Args:
        created_at (datetime): 행의 생성 시각.
        row_id (Any): 행의 식별자.

    Returns:
        str: URL-safe base64 커서.
    """
    raw = f"{created_at.isoformat()}{CURSOR_SEPARATOR}{row_id}"
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str) -> tuple[datetime, str]:
    """커서 문자열을 (created_at, id) 튜플로 디코딩합니다.

    Args:
        cursor (str): encode_cursor로 만든 커서.

    Returns:
        tuple[datetime, str]: 커서가 가리키는 정렬 위치.

    Raises:
        HTTPException: 커서 형식이 올바르지 않은 경우 (400).
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode("ascii")).decode("utf-8")
        created_at, row_id = raw.split(CURSOR_SEPARATOR, 1)
        return datetime.fromisoformat(created_at), row_id
    except (binascii.Error, UnicodeError, ValueError) as e:
        logger.warning("Invalid cursor received: %s", cursor)
        raise HTTPException(
            status_code=Config.HttpStatus.BAD_REQUEST, detail="Invalid cursor"
        ) from e


async def count_rows(db: AsyncSession, stmt: Select) -> int:
    """필터가 적용된 쿼리의 전체 행 수를 셉니다."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    return (await db.execute(count_stmt)).scalar_one()


async def paginate_query(  # noqa: PLR0913
    db: AsyncSession,
    stmt: Select,
    params: ListingParams,
    *,
    created_column: InstrumentedAttribute,
    id_column: InstrumentedAttribute,
    transformer: Callable[[Any], Any],
    options: Sequence[Any] = (),
) -> PageEnvelope:
    """필터 쿼리를 페이지 단위로 조회하여 PageEnvelope로 반환합니다.

    Args:
        db (AsyncSession): 비동기 DB 세션.
        stmt (Select): 필터 조건만 적용된 ORM 엔티티 조회 쿼리.
        params (ListingParams): 페이지 요청 파라미터.
        created_column (InstrumentedAttribute): 정렬 기준 생성 시각 컬럼.
        id_column (InstrumentedAttribute): 동률일 때 정렬 기준이 되는 식별자 컬럼.
        transformer (Callable[[Any], Any]): ORM 객체를 응답 스키마로 변환하는 함수.
        options (Sequence[Any]): 구간 조회 쿼리에만 적용할 로더 옵션.

    Returns:
        PageEnvelope: 페이지 데이터와 메타데이터.

    Raises:
        HTTPException: 커서 형식이 올바르지 않은 경우 (400).
    """
    limit = params.page_size
    total = await count_rows(db, stmt)
    ordered = stmt.order_by(created_column.desc(), id_column.desc()).options(*options)

    if not params.is_cursor_mode:
        raw_params = params.to_raw_params()
        logger.debug(
            "Offset pagination: offset=%s limit=%s total=%s",
            raw_params.offset,
            raw_params.limit,
            total,
        )
        result = await db.execute(
            ordered.offset(raw_params.offset).limit(raw_params.limit)
        )
        rows = result.scalars().all()
        return PageEnvelope.create(
            [transformer(row) for row in rows], params, total=total
        )

    if params.cursor:
        cursor_created_at, cursor_id = decode_cursor(params.cursor)
        ordered = ordered.where(
            or_(
                created_column < cursor_created_at,
                and_(created_column == cursor_created_at, id_column < cursor_id),
            )
        )

    # 한 개를 더 조회해서 다음 항목 존재 여부를 판단
    result = await db.execute(ordered.limit(limit + 1))
    rows = list(result.scalars().all())
    has_more = len(rows) > limit
    rows = rows[:limit]

    next_cursor = None
    if has_more:
        last = rows[-1]
        next_cursor = encode_cursor(
            getattr(last, created_column.key), getattr(last, id_column.key)
        )
    logger.debug(
        "Cursor pagination: returned=%s has_more=%s total=%s", len(rows), has_more, total
    )

    return PageEnvelope.create(
        [transformer(row) for row in rows],
        params,
        total=total,
        has_more=has_more,
        next_cursor=next_cursor,
    )


def apply_public_cache(response: Response) -> None:
    """공개 목록 응답에 캐시 헤더를 설정합니다."""
    response.headers["Cache-Control"] = Config.PUBLIC_CACHE_CONTROL


def escape_like(term: str) -> str:
    """LIKE 패턴 문자(`%`, `_`)를 문자 그대로 비교되도록 이스케이프합니다."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def contains_pattern(term: str) -> str:
    """검색어를 부분 일치 LIKE 패턴으로 변환합니다. `escape=LIKE_ESCAPE`와 함께 사용합니다."""
    return f"%{escape_like(term.strip())}%"
