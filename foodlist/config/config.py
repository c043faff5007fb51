"""FastAPI 앱의 설정을 정의하는 모듈입니다.

이 모듈은 환경 변수를 로드하고, 로깅을 설정하며, FastAPI 애플리케이션의 설정 값을 관리하는 Config 클래스를 제공합니다.
또한, taxonomies.json 파일에서 요리 종류, 식이 옵션, 편의 시설 기본값을 불러오는 기능도 포함되어 있습니다.
"""

import os
import logging
import json
from dotenv import load_dotenv
from pytz import timezone

from fastapi_pagination.utils import disable_installed_extensions_check

# 환경 변수 로딩
load_dotenv()

disable_installed_extensions_check()

# 현재 파일이 위치한 디렉터리 (config 폴더의 절대 경로)
CONFIG_DIR = os.path.dirname(__file__)
CONFIG_DIR = os.path.abspath(CONFIG_DIR)

SERVICE_DIR = os.path.abspath(os.path.join(CONFIG_DIR, "../.."))

# 로깅 설정
logger = logging.getLogger("foodlist_service")
logger.setLevel(logging.DEBUG)  # 모든 로그 기록

# 핸들러 1: 파일에 모든 로그 저장 (디버깅용)
file_handler = logging.FileHandler(
    os.getenv("LOG_FILE", os.path.join(SERVICE_DIR, "app.log")), encoding="utf-8"
)
file_handler.setLevel(logging.DEBUG)  # DEBUG 이상 저장
file_formatter = logging.Formatter(
    "%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
)
file_handler.setFormatter(file_formatter)

# 핸들러 2: 콘솔에 INFO 이상만 출력 (간결한 버전)
console_handler = logging.StreamHandler()
console_handler.setLevel(logging.INFO)  # INFO 이상만 출력
console_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
console_handler.setFormatter(console_formatter)

# 로거에 핸들러 추가
logger.addHandler(file_handler)
logger.addHandler(console_handler)


class Config:
    """FastAPI 설정 값을 관리하는 클래스

    이 클래스는 환경 변수에서 설정 값을 로드하고, 기본 값을 제공합니다.
    또한, taxonomies.json 파일에서 분류(태그) 기본값을 불러오는 기능도 포함되어 있습니다.
    """

    debug = os.getenv("DEBUG", "False").lower() == "true"

    SERVICE_DIR = SERVICE_DIR
    CONFIG_DIR = CONFIG_DIR

    USER_SERVICE_URL = os.getenv("USER_SERVICE_URL", "http://user-service:8000")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./foodlist.db")
    SQL_ECHO = os.getenv("SQL_ECHO", "False").lower() == "true"

    TIMEZONE = os.getenv("TIMEZONE", "America/Sao_Paulo")
    TZ = timezone(TIMEZONE)

    # 프로필 코드 (예: FL000042)
    PROFILE_CODE_PREFIX = os.getenv("PROFILE_CODE_PREFIX", "FL")
    PROFILE_CODE_DIGITS = 6
    PROFILE_CODE_PATTERN = r"^[A-Z]{2}\d{6}$"
    PROFILE_CODE_MAX_RETRIES = int(os.getenv("PROFILE_CODE_MAX_RETRIES", "5"))
    DEFAULT_DISPLAY_NAME = "Usuário"
    DEFAULT_BIO = (
        "Bem-vindo ao FoodList! Comece a explorar restaurantes "
        "e compartilhar suas experiências."
    )

    # 페이지네이션
    DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "12"))
    MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "50"))
    SEARCH_PAGE_SIZE = int(os.getenv("SEARCH_PAGE_SIZE", "20"))
    RECENT_ITEMS_SIZE = 10
    PUBLIC_CACHE_CONTROL = "public, max-age=300, stale-while-revalidate=600"

    # 리뷰
    MIN_RATING = 1
    MAX_RATING = 5
    REVIEW_COMMENT_MAX_LENGTH = int(os.getenv("REVIEW_COMMENT_MAX_LENGTH", "1000"))

    # 스케줄러 (평점/카운터 재계산)
    SCHEDULER_ENABLED = os.getenv("SCHEDULER_ENABLED", "True").lower() == "true"
    RESYNC_HOUR = int(os.getenv("RESYNC_HOUR", "4"))
    RESYNC_MINUTE = int(os.getenv("RESYNC_MINUTE", "0"))

    class HttpStatus:
        """HTTP 상태 코드를 정의하는 클래스"""

        OK = 200
        CREATED = 201
        NO_CONTENT = 204
        BAD_REQUEST = 400
        UNAUTHORIZED = 401
        FORBIDDEN = 403
        NOT_FOUND = 404
        CONFLICT = 409
        INTERNAL_SERVER_ERROR = 500

    @staticmethod
    def get_taxonomies_file():
        """taxonomies.json 파일 경로 반환

        Returns:
            str: taxonomies.json 파일의 절대 경로
        """
        return os.path.join(
            CONFIG_DIR, os.getenv("TAXONOMIES_FILE_NAME", "taxonomies.json")
        )

    @staticmethod
    def load_taxonomies():
        """taxonomies.json에서 분류 기본값을 불러옴

        Returns:
            dict: 분류 이름(cuisine_types, dietary_options, features)을 키로 하는 딕셔너리.
                파일이 없거나 손상된 경우 빈 딕셔너리 반환.
        """
        taxonomies_file = Config.get_taxonomies_file()
        try:
            with open(taxonomies_file, "r", encoding="utf-8") as file:
                data = json.load(file)
                return {
                    key: data.get(key, [])
                    for key in ("cuisine_types", "dietary_options", "features")
                }
        except (FileNotFoundError, json.JSONDecodeError):
            logger.warning(
                "⚠️ %s 파일이 없거나 손상됨. 빈 딕셔너리 반환.", taxonomies_file
            )
            return {}
