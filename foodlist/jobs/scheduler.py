"""파생 데이터(식당 평점, 프로필 카운터) 야간 재동기화 스케줄러"""
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from foodlist.config import Config, logger
from foodlist.services.ratings import resync_derived_data

scheduler = AsyncIOScheduler()


def start_scheduler():
    scheduler.add_job(
        resync_derived_data,
        trigger="cron",
        hour=Config.RESYNC_HOUR,
        minute=Config.RESYNC_MINUTE,
        timezone=Config.TIMEZONE,
        id="derived_data_resync",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        "스케줄러 시작: 매일 %02d:%02d (%s) 재동기화",
        Config.RESYNC_HOUR,
        Config.RESYNC_MINUTE,
        Config.TIMEZONE,
    )


def stop_scheduler():
    if scheduler.running:
        scheduler.shutdown()
