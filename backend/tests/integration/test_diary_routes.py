"""
Integration tests for the diary endpoints and their ownership checks.
"""
import uuid
from datetime import timedelta

import pytest


class TestAuthentication:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/api/diary"),
            ("POST", "/api/diary"),
            ("GET", f"/api/diary/{uuid.uuid4()}"),
            ("PUT", f"/api/diary/{uuid.uuid4()}"),
            ("DELETE", f"/api/diary/{uuid.uuid4()}"),
        ],
    )
    async def test_requires_session(self, client, method, path):
        response = await client.request(method, path, json={"content": "x"})

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_expired_token(self, client, token_service, make_user):
        user = await make_user()
        expired = token_service.sign_token(
            {"userId": str(user.user_id), "email": user.email}, expires_in=timedelta(seconds=-1)
        )
        client.cookies.set("auth-token", expired)

        response = await client.get("/api/diary")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_token_without_user_id(self, client, token_service):
        client.cookies.set("auth-token", token_service.sign_token({"email": "x@example.com"}))

        response = await client.get("/api/diary")

        assert response.status_code == 401


class TestListAndCreate:
    @pytest.mark.asyncio
    async def test_create_then_list(self, client, make_user, login_as):
        user = await make_user()
        login_as(user)

        created = await client.post("/api/diary", json={"content": "Hello diary"})
        assert created.status_code == 201
        diary_id = created.json()["diary_id"]

        listed = await client.get("/api/diary")
        assert listed.status_code == 200
        body = listed.json()
        assert body["nextCursor"] is None
        assert [d["diary_id"] for d in body["diaries"]] == [diary_id]
        assert body["diaries"][0]["content"] == "Hello diary"
        assert body["diaries"][0]["user_id"] == str(user.user_id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, "", "   ", 42])
    async def test_create_requires_content(self, client, make_user, login_as, content):
        login_as(await make_user())

        response = await client.post("/api/diary", json={"content": content})

        assert response.status_code == 400
        assert response.json() == {"error": "Content is required and cannot be empty"}

    @pytest.mark.asyncio
    async def test_pagination(self, client, make_user, make_diary, login_as):
        user = await make_user()
        for i in range(3):
            await make_diary(user, content=f"entry {i}")
        login_as(user)

        first = (await client.get("/api/diary", params={"limit": "2"})).json()
        assert len(first["diaries"]) == 2
        assert first["nextCursor"] is not None

        second = (await client.get("/api/diary", params={"limit": "2", "cursor": first["nextCursor"]})).json()
        assert len(second["diaries"]) == 1
        assert second["nextCursor"] is None

        seen = {d["diary_id"] for d in first["diaries"] + second["diaries"]}
        assert len(seen) == 3


class TestOwnership:
    @pytest.mark.asyncio
    async def test_owner_reads_diary(self, client, make_user, make_diary, login_as):
        user = await make_user()
        diary = await make_diary(user, content="mine")
        login_as(user)

        response = await client.get(f"/api/diary/{diary.diary_id}")

        assert response.status_code == 200
        assert response.json()["content"] == "mine"

    @pytest.mark.asyncio
    async def test_foreign_diary_read_is_not_found(self, client, make_user, make_diary, login_as):
        owner = await make_user(email="owner@example.com")
        intruder = await make_user(email="intruder@example.com")
        diary = await make_diary(owner)
        login_as(intruder)

        response = await client.get(f"/api/diary/{diary.diary_id}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_foreign_diary_update_is_forbidden(self, client, make_user, make_diary, login_as):
        owner = await make_user(email="owner@example.com")
        intruder = await make_user(email="intruder@example.com")
        diary = await make_diary(owner, content="original")
        login_as(intruder)

        response = await client.put(f"/api/diary/{diary.diary_id}", json={"content": "defaced"})

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden"}
        assert diary.content == "original"

    @pytest.mark.asyncio
    async def test_forbidden_checked_before_body(self, client, make_user, make_diary, login_as):
        owner = await make_user(email="owner@example.com")
        intruder = await make_user(email="intruder@example.com")
        diary = await make_diary(owner)
        login_as(intruder)

        response = await client.put(f"/api/diary/{diary.diary_id}", json={"content": ""})

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_foreign_diary_delete_is_forbidden(self, client, make_user, make_diary, login_as):
        owner = await make_user(email="owner@example.com")
        intruder = await make_user(email="intruder@example.com")
        diary = await make_diary(owner)
        login_as(intruder)

        response = await client.delete(f"/api/diary/{diary.diary_id}")

        assert response.status_code == 403

    @pytest.mark.asyncio
    @pytest.mark.parametrize("diary_id", [str(uuid.uuid4()), "not-a-uuid"])
    async def test_missing_diary(self, client, make_user, login_as, diary_id):
        login_as(await make_user())

        response = await client.get(f"/api/diary/{diary_id}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client, make_user, make_diary, login_as):
        user = await make_user()
        diary = await make_diary(user, content="draft")
        login_as(user)

        updated = await client.put(f"/api/diary/{diary.diary_id}", json={"content": "final"})
        assert updated.status_code == 200
        assert updated.json()["content"] == "final"

        deleted = await client.delete(f"/api/diary/{diary.diary_id}")
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Diary deleted successfully"}

        missing = await client.get(f"/api/diary/{diary.diary_id}")
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_update_blank_content(self, client, make_user, make_diary, login_as):
        user = await make_user()
        diary = await make_diary(user)
        login_as(user)

        response = await client.put(f"/api/diary/{diary.diary_id}", json={"content": "  "})

        assert response.status_code == 400
