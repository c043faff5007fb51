"""프로필 자동 생성 테스트"""

import pytest
from sqlalchemy import func, select

from foodlist.models.profile import Profile
from foodlist.services import profiles
from foodlist.services.profiles import (
    default_display_name,
    ensure_profile_exists,
    format_profile_code,
    next_profile_code,
)


async def count_profiles(session) -> int:
    return (await session.execute(select(func.count(Profile.user_id)))).scalar_one()


def test_code_format_and_display_name():
    assert format_profile_code(42) == "FL000042"
    assert default_display_name("maria.silva@example.com") == "maria.silva"
    assert default_display_name(None) == "Usuário"
    assert default_display_name("not-an-email") == "Usuário"


@pytest.mark.asyncio
async def test_ensure_profile_is_idempotent(session):
    first = await ensure_profile_exists(session, "user-1", "ana@example.com")
    second = await ensure_profile_exists(session, "user-1", "ana@example.com")

    assert first is True
    assert second is True
    assert await count_profiles(session) == 1

    profile = await session.get(Profile, "user-1")
    assert profile.user_id_code == "FL000001"
    assert profile.display_name == "ana"
    assert profile.public_profile is True


@pytest.mark.asyncio
async def test_codes_are_allocated_monotonically(session):
    session.add(Profile(user_id="legacy", user_id_code="FL000041", display_name="x"))
    await session.commit()

    assert await next_profile_code(session) == "FL000042"
    assert await ensure_profile_exists(session, "user-2")

    profile = await session.get(Profile, "user-2")
    assert profile.user_id_code == "FL000042"
    assert profile.display_name == "Usuário"


@pytest.mark.asyncio
async def test_code_conflict_is_retried(session, monkeypatch):
    session.add(Profile(user_id="taken", user_id_code="FL000001", display_name="x"))
    await session.commit()

    real_next = profiles.next_profile_code
    calls = []

    async def stale_then_real(db):
        calls.append(1)
        if len(calls) == 1:
            return "FL000001"  # 다른 요청이 이미 가져간 코드
        return await real_next(db)

    monkeypatch.setattr(profiles, "next_profile_code", stale_then_real)

    assert await ensure_profile_exists(session, "user-3") is True
    assert len(calls) == 2
    profile = await session.get(Profile, "user-3")
    assert profile.user_id_code == "FL000002"


@pytest.mark.asyncio
async def test_gives_up_after_max_retries(session, monkeypatch):
    session.add(Profile(user_id="taken", user_id_code="FL000001", display_name="x"))
    await session.commit()

    async def always_taken(db):
        return "FL000001"

    monkeypatch.setattr(profiles, "next_profile_code", always_taken)

    assert await ensure_profile_exists(session, "user-4") is False
    assert await count_profiles(session) == 1
