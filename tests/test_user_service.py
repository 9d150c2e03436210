"""Tests for UserService - the user store backed by SQLite"""
import pytest

from user_manager_api.app.core.errors import NotFoundError, ValidationError
from user_manager_api.app.services.user_service import USER_NOT_FOUND, UserService
from user_manager_api.app.services.validation import EMAIL_TAKEN, NAME_TOO_LONG


@pytest.mark.asyncio
class TestUserService:
    """Test suite for the user store operations"""

    async def test_create_assigns_id_and_is_listed(self, db_path):
        user = await UserService.create_user("Alice", "a@x.com")

        assert user.id == 1
        users = await UserService.list_users()
        assert [(u.id, u.name, u.email) for u in users] == [(1, "Alice", "a@x.com")]

    async def test_create_stores_trimmed_name(self, db_path):
        user = await UserService.create_user("  Alice ", "a@x.com")

        assert user.name == "Alice"
        assert [u.name for u in await UserService.list_users()] == ["Alice"]

    async def test_create_rejects_long_name(self, db_path):
        with pytest.raises(ValidationError) as exc_info:
            await UserService.create_user("x" * 21, "a@x.com")

        assert exc_info.value.message == NAME_TOO_LONG
        assert await UserService.list_users() == []

    async def test_create_rejects_duplicate_email(self, db_path):
        await UserService.create_user("Alice", "a@x.com")

        with pytest.raises(ValidationError) as exc_info:
            await UserService.create_user("Bob", "a@x.com")

        assert exc_info.value.message == EMAIL_TAKEN
        assert len(await UserService.list_users()) == 1

    async def test_list_is_empty_for_fresh_store(self, db_path):
        assert await UserService.list_users() == []

    async def test_list_keeps_insertion_order(self, db_path):
        await UserService.create_user("Alice", "a@x.com")
        await UserService.create_user("Bob", "b@x.com")

        assert [u.name for u in await UserService.list_users()] == ["Alice", "Bob"]

    async def test_update_keeps_id(self, db_path):
        user = await UserService.create_user("Alice", "a@x.com")

        updated = await UserService.update_user(user.id, "Alicia", "alicia@x.com")

        assert updated.id == user.id
        users = await UserService.list_users()
        assert [(u.id, u.name, u.email) for u in users] == [(user.id, "Alicia", "alicia@x.com")]

    async def test_update_accepts_string_id(self, db_path):
        user = await UserService.create_user("Alice", "a@x.com")

        updated = await UserService.update_user(str(user.id), "Alicia", "a@x.com")

        assert updated.name == "Alicia"

    async def test_update_may_keep_own_email(self, db_path):
        user = await UserService.create_user("Alice", "a@x.com")

        updated = await UserService.update_user(user.id, "Alicia", "a@x.com")

        assert updated.email == "a@x.com"

    async def test_update_rejects_email_of_another_user(self, db_path):
        await UserService.create_user("Alice", "a@x.com")
        bob = await UserService.create_user("Bob", "b@x.com")

        with pytest.raises(ValidationError) as exc_info:
            await UserService.update_user(bob.id, "Bob", "a@x.com")

        assert exc_info.value.message == EMAIL_TAKEN
        assert [u.email for u in await UserService.list_users()] == ["a@x.com", "b@x.com"]

    async def test_update_rejects_invalid_fields(self, db_path):
        user = await UserService.create_user("Alice", "a@x.com")

        with pytest.raises(ValidationError):
            await UserService.update_user(user.id, "", "a@x.com")

    @pytest.mark.parametrize("user_id", [999, "999", "abc", "0", -1, "1_0", " 1 ", "\u0661", "99999999999999999999999", 2**63])
    async def test_update_unknown_id(self, db_path, user_id):
        with pytest.raises(NotFoundError) as exc_info:
            await UserService.update_user(user_id, "Alice", "a@x.com")

        assert exc_info.value.message == USER_NOT_FOUND

    async def test_delete_removes_user(self, db_path):
        user = await UserService.create_user("Alice", "a@x.com")

        await UserService.delete_user(user.id)

        assert await UserService.list_users() == []

    async def test_second_delete_fails(self, db_path):
        user = await UserService.create_user("Alice", "a@x.com")
        await UserService.delete_user(user.id)

        with pytest.raises(NotFoundError):
            await UserService.delete_user(user.id)

    @pytest.mark.parametrize("user_id", [999, "nope", "1_0", "99999999999999999999999"])
    async def test_delete_unknown_id(self, db_path, user_id):
        with pytest.raises(NotFoundError):
            await UserService.delete_user(user_id)

    async def test_ids_are_not_reused_after_delete(self, db_path):
        first = await UserService.create_user("Alice", "a@x.com")
        await UserService.delete_user(first.id)

        second = await UserService.create_user("Alice", "a@x.com")

        assert second.id > first.id

    async def test_delete_ignores_integer_literal_forms(self, db_path):
        for i in range(10):
            await UserService.create_user(f"User {i}", f"u{i}@x.com")

        with pytest.raises(NotFoundError):
            await UserService.delete_user("1_0")

        assert [u.id for u in await UserService.list_users()] == list(range(1, 11))
