"""
Unit tests for diary ownership checks and cursor pagination.
"""
import uuid
from datetime import datetime, timedelta

import pytest

from diary_api.core.constants import Pagination
from diary_api.models import Diary
from diary_api.services.diary_service import (
    DiaryForbiddenError,
    DiaryNotFoundError,
    DiaryService,
    parse_limit,
)


class TestParseLimit:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, Pagination.DEFAULT_LIMIT),
            ("", Pagination.DEFAULT_LIMIT),
            ("abc", Pagination.DEFAULT_LIMIT),
            ("0", Pagination.DEFAULT_LIMIT),
            ("-5", Pagination.DEFAULT_LIMIT),
            ("3", 3),
            ("50", 50),
            ("500", Pagination.MAX_LIMIT),
        ],
    )
    def test_parse_limit(self, raw, expected):
        assert parse_limit(raw) == expected


async def _seed(db_session, user, count):
    """Insert diaries with strictly decreasing timestamps; returns newest first."""
    base = datetime(2026, 1, 1, 12, 0, 0)
    diaries = []
    for i in range(count):
        diary = Diary(user_id=user.user_id, content=f"entry {i}", created_at=base - timedelta(minutes=i))
        db_session.add(diary)
        diaries.append(diary)
    await db_session.commit()
    return diaries


class TestGetOwnedDiary:
    @pytest.mark.asyncio
    async def test_owner_gets_diary(self, db_session, make_user, make_diary):
        user = await make_user()
        diary = await make_diary(user)

        found = await DiaryService(db_session).get_owned_diary(str(diary.diary_id), user.user_id)

        assert found.diary_id == diary.diary_id

    @pytest.mark.asyncio
    async def test_foreign_diary_is_forbidden(self, db_session, make_user, make_diary):
        owner = await make_user(email="owner@example.com")
        other = await make_user(email="other@example.com")
        diary = await make_diary(owner)

        with pytest.raises(DiaryForbiddenError):
            await DiaryService(db_session).get_owned_diary(str(diary.diary_id), other.user_id)

    @pytest.mark.asyncio
    async def test_foreign_diary_hidden(self, db_session, make_user, make_diary):
        owner = await make_user(email="owner@example.com")
        other = await make_user(email="other@example.com")
        diary = await make_diary(owner)

        with pytest.raises(DiaryNotFoundError):
            await DiaryService(db_session).get_owned_diary(
                str(diary.diary_id), other.user_id, hide_foreign=True
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("diary_id", ["not-a-uuid", str(uuid.uuid4())])
    async def test_missing_diary(self, db_session, make_user, diary_id):
        user = await make_user()

        with pytest.raises(DiaryNotFoundError):
            await DiaryService(db_session).get_owned_diary(diary_id, user.user_id)


class TestListDiaries:
    @pytest.mark.asyncio
    async def test_pages_follow_cursor(self, db_session, make_user):
        user = await make_user()
        seeded = await _seed(db_session, user, 5)
        service = DiaryService(db_session)

        first, cursor = await service.list_diaries(user.user_id, limit=2)
        second, cursor2 = await service.list_diaries(user.user_id, cursor=cursor, limit=2)
        third, cursor3 = await service.list_diaries(user.user_id, cursor=cursor2, limit=2)

        assert [d.content for d in first] == ["entry 0", "entry 1"]
        assert [d.content for d in second] == ["entry 2", "entry 3"]
        assert [d.content for d in third] == ["entry 4"]
        assert cursor == str(seeded[1].diary_id)
        assert cursor3 is None

    @pytest.mark.asyncio
    async def test_exact_page_has_no_cursor(self, db_session, make_user):
        user = await make_user()
        await _seed(db_session, user, 2)

        items, cursor = await DiaryService(db_session).list_diaries(user.user_id, limit=2)

        assert len(items) == 2
        assert cursor is None

    @pytest.mark.asyncio
    async def test_only_own_diaries(self, db_session, make_user):
        user = await make_user(email="me@example.com")
        other = await make_user(email="other@example.com")
        await _seed(db_session, user, 1)
        await _seed(db_session, other, 3)

        items, _ = await DiaryService(db_session).list_diaries(user.user_id)

        assert len(items) == 1
        assert items[0].user_id == user.user_id

    @pytest.mark.asyncio
    async def test_foreign_cursor_returns_empty_page(self, db_session, make_user):
        user = await make_user(email="me@example.com")
        other = await make_user(email="other@example.com")
        await _seed(db_session, user, 3)
        foreign = await _seed(db_session, other, 1)

        items, cursor = await DiaryService(db_session).list_diaries(
            user.user_id, cursor=str(foreign[0].diary_id)
        )

        assert items == []
        assert cursor is None

    @pytest.mark.asyncio
    async def test_garbage_cursor_returns_empty_page(self, db_session, make_user):
        user = await make_user()
        await _seed(db_session, user, 3)

        items, cursor = await DiaryService(db_session).list_diaries(user.user_id, cursor="garbage")

        assert items == []
        assert cursor is None


class TestMutations:
    @pytest.mark.asyncio
    async def test_create_update_delete(self, db_session, make_user):
        user = await make_user()
        service = DiaryService(db_session)

        diary = await service.create_diary(user.user_id, "first draft")
        updated = await service.update_diary(diary, "second draft")
        assert updated.content == "second draft"

        await service.delete_diary(updated)

        with pytest.raises(DiaryNotFoundError):
            await service.get_owned_diary(str(diary.diary_id), user.user_id)
