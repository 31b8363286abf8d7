"""Tests for publish / unpublish."""

import pytest
import pytest_asyncio

from files_manager.errors import NotFound
from files_manager.services.visibility import VisibilityService


@pytest.fixture
def visibility(store):
    return VisibilityService(store)


@pytest_asyncio.fixture
async def record(store, user):
    return await store.create(
        user_id=user.id, name="a.txt", type="file", parent_id=0, local_path="/tmp/files_manager/x",
    )


async def test_publish(visibility, record, user):
    published = await visibility.publish(user, record.id)

    assert published.id == record.id
    assert published.is_public is True


async def test_publish_then_unpublish_touches_nothing_else(visibility, store, record, user):
    before = (record.name, record.type, record.parent_id, record.local_path, record.user_id)

    await visibility.publish(user, record.id)
    unpublished = await visibility.unpublish(user, str(record.id))

    assert unpublished.is_public is False
    after = (unpublished.name, unpublished.type, unpublished.parent_id,
             unpublished.local_path, unpublished.user_id)
    assert after == before
    assert (await store.get(record.id)).is_public is False


async def test_publish_other_users_file_is_not_found(visibility, store, record, other_user):
    with pytest.raises(NotFound):
        await visibility.publish(other_user, record.id)

    assert (await store.get(record.id)).is_public is False


async def test_publish_missing_file_is_not_found(visibility, user):
    with pytest.raises(NotFound):
        await visibility.publish(user, 99999)


async def test_publish_bad_id_is_not_found(visibility, user):
    with pytest.raises(NotFound):
        await visibility.unpublish(user, "bogus")
