"""
Inkwell Backend — User Service Unit Tests
===========================================

What:  Tests for UserService rules with a mock gateway (no database).

What we test:
    ✅ Validation order and messages on create/update
    ✅ Email uniqueness (pre-check and store-level conflict)
    ✅ Not-found handling for get/update/delete and non-numeric ids
    ✅ Pagination window and echoed page/limit
"""

import pytest

from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.services.gateway import ExecuteResult
from app.services.user_service import UserService


class TestUserServiceCreate:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload, message", [
        (None, "Name cannot be empty"),
        ({}, "Name cannot be empty"),
        ({"name": "   ", "email": "a@x.com"}, "Name cannot be empty"),
        ({"name": 7, "email": "a@x.com"}, "Name cannot be empty"),
        ({"name": "A"}, "Email cannot be empty"),
        ({"name": "A", "email": " "}, "Email cannot be empty"),
        ({"name": "A", "email": "nope"}, "EMAIL not valid"),
    ])
    async def test_validation_order(self, mock_gateway, payload, message):
        with pytest.raises(ValidationError) as exc_info:
            await UserService(mock_gateway).create_user(payload)

        assert exc_info.value.message == message
        mock_gateway.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_email_is_conflict(self, mock_gateway):
        mock_gateway.fetch_one.return_value = {"id": 1}

        with pytest.raises(ConflictError, match="Email already exists"):
            await UserService(mock_gateway).create_user({"name": "B", "email": "a@x.com"})

        mock_gateway.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_level_conflict_keeps_message(self, mock_gateway):
        """A duplicate slipping past the pre-check is still reported as 409."""
        mock_gateway.execute.side_effect = ConflictError()

        with pytest.raises(ConflictError) as exc_info:
            await UserService(mock_gateway).create_user({"name": "B", "email": "a@x.com"})

        assert exc_info.value.message == "Email already exists"

    @pytest.mark.asyncio
    async def test_create_returns_refetched_row(self, mock_gateway, user_row):
        mock_gateway.fetch_one.side_effect = [None, user_row]
        mock_gateway.execute.return_value = ExecuteResult(rows_affected=1, last_id=1)

        result = await UserService(mock_gateway).create_user(
            {"name": "Ada", "email": "ada@mail.com"}
        )

        assert result.id == 1
        assert result.name == "Ada"
        assert result.email == "ada@mail.com"
        mock_gateway.execute.assert_awaited_once()


class TestUserServiceRead:

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, mock_gateway):
        with pytest.raises(NotFoundError, match="User not found"):
            await UserService(mock_gateway).get_user("42")

    @pytest.mark.asyncio
    async def test_non_numeric_id_is_not_found(self, mock_gateway):
        with pytest.raises(NotFoundError):
            await UserService(mock_gateway).get_user("abc")

        mock_gateway.fetch_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_defaults(self, mock_gateway, user_row):
        mock_gateway.fetch_all.return_value = [user_row]
        mock_gateway.fetch_one.return_value = {"total": 1}

        result = await UserService(mock_gateway).list_users()

        assert result.page == 1
        assert result.limit == 10
        assert result.total == 1
        assert [u.id for u in result.users] == [1]

    @pytest.mark.asyncio
    async def test_list_non_numeric_params_fall_back(self, mock_gateway):
        mock_gateway.fetch_one.return_value = {"total": 0}

        result = await UserService(mock_gateway).list_users(limit="x", page="y")

        assert (result.limit, result.page) == (10, 1)

    def test_page_window_offset(self):
        assert UserService.page_window("2", "2") == (2, 2, 2)
        assert UserService.page_window("5", "3") == (5, 3, 10)

    def test_page_window_caps_limit(self):
        limit, _, _ = UserService.page_window("100000", "1")
        assert limit == 100

    @pytest.mark.asyncio
    async def test_user_articles_unknown_user(self, mock_gateway):
        with pytest.raises(NotFoundError, match="User not found"):
            await UserService(mock_gateway).list_user_articles("9")

        mock_gateway.fetch_all.assert_not_awaited()


class TestUserServiceWrite:

    @pytest.mark.asyncio
    async def test_update_validates_before_lookup(self, mock_gateway):
        with pytest.raises(ValidationError, match="EMAIL not valid"):
            await UserService(mock_gateway).update_user("1", {"name": "A", "email": "bad"})

        mock_gateway.fetch_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_missing_user(self, mock_gateway):
        with pytest.raises(NotFoundError, match="User not found"):
            await UserService(mock_gateway).update_user("5", {"name": "A", "email": "a@x.com"})

        mock_gateway.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_email_taken_by_other_user(self, mock_gateway, user_row):
        mock_gateway.fetch_one.side_effect = [user_row, {"id": 2}]

        with pytest.raises(ConflictError):
            await UserService(mock_gateway).update_user("1", {"name": "A", "email": "b@x.com"})

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, mock_gateway):
        with pytest.raises(NotFoundError):
            await UserService(mock_gateway).delete_user("3")

        mock_gateway.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_zero_rows_is_not_found(self, mock_gateway, user_row):
        mock_gateway.fetch_one.return_value = user_row
        mock_gateway.execute.return_value = ExecuteResult(rows_affected=0)

        with pytest.raises(NotFoundError):
            await UserService(mock_gateway).delete_user("1")
