"""프로필 접근 검증 테스트"""

import pytest

from foodlist.models.profile import Profile
from foodlist.services.access import (
    is_profile_code,
    shape_profile,
    validate_profile_access,
)

OWNER = "owner-1"
OTHER = "other-2"


async def add_profile(session, user_id, code, public=True, phone="+55 11 99999-0000"):
    profile = Profile(
        user_id=user_id,
        user_id_code=code,
        display_name=user_id,
        public_profile=public,
        phone_number=phone,
    )
    session.add(profile)
    await session.commit()
    return profile


def test_profile_code_pattern():
    assert is_profile_code("FL000042")
    assert not is_profile_code("fl000042")
    assert not is_profile_code("FL00042")
    assert not is_profile_code("0b6f3c1e-6a0e-4c57-9d3b-1f1f2a7c0a01")


@pytest.mark.asyncio
async def test_missing_profile(session):
    result = await validate_profile_access(session, "FL999999", OWNER)
    assert not result.can_access
    assert result.access_level == "NONE"
    assert result.reason == "PROFILE_NOT_FOUND"


@pytest.mark.asyncio
async def test_owner_always_allowed_on_private_profile(session):
    await add_profile(session, OWNER, "FL000001", public=False)

    by_code = await validate_profile_access(session, "FL000001", OWNER)
    by_id = await validate_profile_access(session, OWNER, OWNER)

    for result in (by_code, by_id):
        assert result.can_access
        assert result.access_level == "OWNER"
        assert result.target_user_id == OWNER


@pytest.mark.asyncio
async def test_private_profile_denied_to_others(session):
    await add_profile(session, OWNER, "FL000001", public=False)

    anonymous = await validate_profile_access(session, "FL000001")
    other = await validate_profile_access(session, "FL000001", OTHER)

    for result in (anonymous, other):
        assert not result.can_access
        assert result.access_level == "NONE"
        assert result.reason == "PRIVATE_PROFILE"


@pytest.mark.asyncio
async def test_public_profile_levels(session):
    await add_profile(session, OWNER, "FL000001", public=True)

    anonymous = await validate_profile_access(session, "FL000001")
    other = await validate_profile_access(session, OWNER, OTHER)

    assert anonymous.can_access and anonymous.access_level == "PUBLIC"
    assert other.can_access and other.access_level == "PRIVATE"


@pytest.mark.asyncio
async def test_lookup_error_is_reported_not_raised(session, monkeypatch):
    async def broken_execute(*args, **kwargs):
        from sqlalchemy.exc import OperationalError

        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr(session, "execute", broken_execute)
    result = await validate_profile_access(session, "FL000001", OWNER)
    assert not result.can_access
    assert result.reason == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_shape_profile_hides_phone_from_non_owner(session):
    profile = await add_profile(session, OWNER, "FL000001")

    assert shape_profile(profile, "OWNER").phone_number == "+55 11 99999-0000"
    assert shape_profile(profile, "PUBLIC").phone_number is None
    assert shape_profile(profile, "PRIVATE").phone_number is None
