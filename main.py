"""FoodList의 메인 애플리케이션 파일입니다."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from foodlist.config import logger, Config
from foodlist.database import init_db
from foodlist.jobs.scheduler import start_scheduler, stop_scheduler
from foodlist.routers import (
    cuisine_types_router,
    dietary_options_router,
    features_router,
    lists_router,
    profile_router,
    restaurants_router,
    reviews_router,
    users_router,
)
from foodlist.utils.lifespan import sync_taxonomies


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI의 lifespan 이벤트 핸들러"""
    logger.info("🚀 서비스 시작: 데이터베이스 초기화 및 기본 데이터 동기화")
    logger.debug(
        "Config 정보 로드: %s",
        {
            "debug": Config.debug,
            "timezone": Config.TIMEZONE,
            "database_url": Config.DATABASE_URL,
            "user_service_url": Config.USER_SERVICE_URL,
        },
    )

    # 1. DB 초기화
    await init_db()

    # 2. 분류 기본값 동기화
    await sync_taxonomies()

    # 3. 스케줄러 시작
    if Config.SCHEDULER_ENABLED:
        start_scheduler()

    yield  # FastAPI 실행 유지

    # 4. 종료 작업
    stop_scheduler()
    logger.info("🛑 서비스 종료: 정리 작업 완료")


# lifespan 적용
app = FastAPI(lifespan=lifespan, title="FoodList API")

# 라우터 추가
for router in (
    restaurants_router,
    reviews_router,
    lists_router,
    users_router,
    profile_router,
    cuisine_types_router,
    dietary_options_router,
    features_router,
):
    app.include_router(router, prefix="/api")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """HTTPException을 {"error": ...} 형식으로 변환합니다."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """요청 검증 오류를 400 {"error": ...}로 변환합니다."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    logger.debug("Validation error on %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=Config.HttpStatus.BAD_REQUEST, content={"error": message}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """처리되지 않은 예외를 로그로 남기고 500으로 응답합니다."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


@app.get("/")
async def root():
    """루트 엔드포인트입니다."""
    logger.info("Root endpoint accessed")
    return {"message": "Hello FoodList"}


@app.get("/health")
async def health_check():
    """헬스 체크 엔드포인트입니다."""
    return {"status": "ok"}


if __name__ == "__main__":
    HOST = "0.0.0.0"  # noqa: S104
    PORT = 5600
    logger.info("Starting FoodList server on %s:%s", HOST, PORT)
    uvicorn.run("main:app", host=HOST, port=PORT, reload=True)
