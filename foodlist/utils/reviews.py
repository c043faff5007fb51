"""리뷰 요청 검증 유틸리티 모듈입니다.

모든 검증은 DB에 접근하기 전에 수행되며, 실패 시 400 예외를 발생시킵니다.
"""

from typing import Optional

from fastapi import HTTPException

from foodlist.config import Config


def bad_request(message: str) -> HTTPException:
    """400 예외 객체를 생성합니다."""
    return HTTPException(status_code=Config.HttpStatus.BAD_REQUEST, detail=message)


def validate_rating(rating: Optional[int]) -> int:
    """평점이 존재하고 1~5 범위(양 끝 포함)인지 확인합니다."""
    if rating is None:
        raise bad_request("Rating is required")
    if not Config.MIN_RATING <= rating <= Config.MAX_RATING:
        raise bad_request(
            f"Rating must be between {Config.MIN_RATING} and {Config.MAX_RATING}"
        )
    return rating


def validate_review_payload(
    rating: Optional[int],
    comment: Optional[str] = None,
    amount_spent: Optional[float] = None,
) -> None:
    """리뷰 생성/수정 요청의 평점, 코멘트, 지출 금액을 검증합니다.

    Raises:
        HTTPException(400): 값이 누락되었거나 범위를 벗어난 경우.
    """
    validate_rating(rating)
    if amount_spent is not None and amount_spent <= 0:
        raise bad_request("Amount spent must be a positive number")
    if comment is not None and len(comment) > Config.REVIEW_COMMENT_MAX_LENGTH:
        raise bad_request(
            f"Comment must be at most {Config.REVIEW_COMMENT_MAX_LENGTH} characters"
        )
