"""
Integration tests for ForumRepository against SQLite
"""

import pytest
from sqlalchemy.exc import IntegrityError

from forum.database.connection import get_async_session
from forum.database.repository import ForumRepository, ThreadOrder, new_id


class TestUsers:
    @pytest.mark.asyncio
    async def test_insert_and_find_user(self, forum_db):
        async with get_async_session() as session:
            user = await ForumRepository(session).insert_user(username="alice", password_hash="h")

        assert len(user.id) == 36
        assert user.created_at is not None

        async with get_async_session() as session:
            repository = ForumRepository(session)
            by_id = await repository.find_user_by_id(user.id)
            by_name = await repository.find_user_by_username("alice")

        assert by_id.username == "alice"
        assert by_name.id == user.id

    @pytest.mark.asyncio
    async def test_username_is_unique(self, forum_db):
        async with get_async_session() as session:
            await ForumRepository(session).insert_user(username="alice", password_hash="h")

        with pytest.raises(IntegrityError):
            async with get_async_session() as session:
                await ForumRepository(session).insert_user(username="alice", password_hash="h2")

    @pytest.mark.asyncio
    async def test_find_users_by_ids_skips_unknown(self, seed):
        await seed.user("u1", "alice")
        await seed.user("u2", "bob")

        async with get_async_session() as session:
            users = await ForumRepository(session).find_users_by_ids(["u1", "missing", "u2"])

        assert set(users) == {"u1", "u2"}


class TestIds:
    def test_ids_increase_with_creation_order(self):
        ids = [new_id() for _ in range(5000)]

        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)
        assert all(len(i) == 36 and i[14] == "7" for i in ids)


class TestThreadsAndReplies:
    @pytest.mark.asyncio
    async def test_ordering_ties_broken_by_id(self, seed):
        await seed.user("u1", "alice")
        await seed.thread("b", "u1")
        await seed.thread("a", "u1")
        await seed.thread("c", "u1", minutes=1)

        async with get_async_session() as session:
            repository = ForumRepository(session)
            newest = await repository.list_threads_page(ThreadOrder.NEWEST_FIRST, 0, 10)
            oldest = await repository.list_threads_page(ThreadOrder.OLDEST_FIRST, 0, 10)

        assert [t.id for t in newest] == ["c", "b", "a"]
        assert [t.id for t in oldest] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_rows_inserted_in_sequence_list_in_sequence(self, seed):
        await seed.user("u1", "alice")

        inserted = []
        for title in ("one", "two", "three", "four", "five"):
            async with get_async_session() as session:
                thread = await ForumRepository(session).insert_thread(
                    title=title, text=None, created_by="u1"
                )
            inserted.append(thread)

        async with get_async_session() as session:
            oldest = await ForumRepository(session).list_threads_page(
                ThreadOrder.OLDEST_FIRST, 0, 10
            )

        stamps = [t.created_at for t in inserted]
        assert stamps == sorted(stamps)
        assert [t.id for t in oldest] == [t.id for t in inserted]

    @pytest.mark.asyncio
    async def test_replies_scoped_to_thread(self, seed):
        await seed.user("u1", "alice")
        await seed.thread("t1", "u1")
        await seed.thread("t2", "u1")
        await seed.reply("r1", "t1", "u1", minutes=1)
        await seed.reply("r2", "t2", "u1", minutes=2)
        await seed.reply("r3", "t1", "u1", minutes=3)

        async with get_async_session() as session:
            repository = ForumRepository(session)
            page = await repository.list_replies_page("t1", 0, 10)
            counts = await repository.count_replies_by_thread(["t1", "t2", "t3"])
            found = await repository.find_replies_by_ids(["r2", "nope"])

        assert [r.id for r in page] == ["r3", "r1"]
        assert counts == {"t1": 2, "t2": 1}
        assert list(found) == ["r2"]

    @pytest.mark.asyncio
    async def test_reply_requires_existing_thread(self, seed):
        await seed.user("u1", "alice")

        with pytest.raises(IntegrityError):
            async with get_async_session() as session:
                await ForumRepository(session).insert_reply(
                    thread_id="missing", text="hi", created_by="u1"
                )


class TestLikes:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "targets",
        [{}, {"thread_id": "t1", "reply_id": "r1"}],
    )
    async def test_like_must_target_exactly_one(self, forum_db, targets):
        async with get_async_session() as session:
            with pytest.raises(ValueError):
                await ForumRepository(session).insert_like(created_by="u1", **targets)

    @pytest.mark.asyncio
    async def test_counts_are_per_target(self, seed):
        await seed.user("u1", "alice")
        await seed.thread("t1", "u1")
        await seed.reply("r1", "t1", "u1")

        async with get_async_session() as session:
            repository = ForumRepository(session)
            await repository.insert_like(created_by="u1", thread_id="t1")
            await repository.insert_like(created_by="u1", thread_id="t1")
            await repository.insert_like(created_by="u1", reply_id="r1")

        async with get_async_session() as session:
            repository = ForumRepository(session)
            thread_counts = await repository.count_likes_by_thread(["t1"])
            reply_counts = await repository.count_likes_by_reply(["r1", "r2"])
            thread_likes = await repository.list_likes_page_for_thread("t1", 0, 10)
            reply_likes = await repository.list_likes_page_for_reply("r1", 1, 10)

        assert thread_counts == {"t1": 2}
        assert reply_counts == {"r1": 1}
        assert len(thread_likes) == 2
        assert reply_likes == []
