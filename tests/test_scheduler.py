"""재동기화 스케줄러 테스트"""

import pytest

from foodlist.config import Config
from foodlist.jobs.scheduler import scheduler, start_scheduler, stop_scheduler


@pytest.mark.asyncio
async def test_resync_job_is_registered_daily():
    start_scheduler()
    try:
        job = scheduler.get_job("derived_data_resync")
        assert job is not None
        fields = {f.name: str(f) for f in job.trigger.fields}
        assert fields["hour"] == str(Config.RESYNC_HOUR)
        assert fields["minute"] == str(Config.RESYNC_MINUTE)
        assert str(job.trigger.timezone) == Config.TIMEZONE
    finally:
        stop_scheduler()

    assert not scheduler.running
    # 이미 멈춘 스케줄러를 다시 멈춰도 오류가 나지 않아야 함
    stop_scheduler()
