"""이 모듈은 기본 스키마를 정의합니다.

Pydantic을 사용하여 응답 스키마의 공통 설정(camelCase 별칭)을 정의하고,
서비스 타임존으로 자동 변환되는 datetime 필드를 제공합니다.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, GetCoreSchemaHandler
from pydantic.alias_generators import to_camel
from pydantic_core import core_schema

from foodlist.config import Config, logger


class CamelModel(BaseModel):
    """응답 스키마의 기본 클래스.

    필드는 snake_case로 정의하고, JSON으로 직렬화할 때는 camelCase 별칭을 사용합니다.
    ORM 객체에서 바로 검증할 수 있도록 from_attributes를 허용합니다.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """에러 응답 바디를 나타내는 클래스.

    Attributes:
        error (str): 사람이 읽을 수 있는 에러 메시지.
    """

    error: str


class MessageResponse(BaseModel):
    """단순 메시지 응답 바디를 나타내는 클래스.

    Attributes:
        message (str): 처리 결과 메시지.
    """

    message: str


class Timestamp:
    """서비스 타임존(Config.TZ)으로 자동 변환되는 datetime 필드"""

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler: GetCoreSchemaHandler):
        """Pydantic이 사용할 스키마를 정의합니다.

        Args:
            source_type (type): 원본 타입.
            handler (GetCoreSchemaHandler): 스키마 핸들러.

        Returns:
            core_schema: Pydantic 코어 스키마.
        """
        return core_schema.no_info_after_validator_function(
            cls.convert_to_local, handler.generate_schema(datetime)
        )

    @classmethod
    def convert_to_local(cls, value: datetime) -> datetime:
        """datetime을 받아 서비스 타임존으로 변환합니다.

        타임존 정보가 없는 값은 UTC로 저장된 값으로 간주합니다.

        Args:
            value (datetime): 변환할 값.

        Returns:
            datetime: 서비스 타임존으로 변환된 datetime 객체.
        """
        if value.tzinfo is None:
            # ✅ 타임존이 없는 경우, 기본적으로 UTC로 간주한 후 변환
            value = value.replace(tzinfo=timezone.utc)
        converted = value.astimezone(Config.TZ)
        logger.debug("Converted %s to %s", value.isoformat(), converted.isoformat())
        return converted
