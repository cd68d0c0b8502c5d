"""
Inkwell Backend — Persistence Gateway Tests
=============================================

What:  Row mapping, write outcomes and error translation.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError, OperationalError

from app.exceptions import ConflictError, DatabaseError
from app.models.user import User
from app.services.gateway import PersistenceGateway

users = User.__table__


class TestGatewayAgainstSQLite:

    @pytest.mark.asyncio
    async def test_insert_reports_new_id(self, session_factory):
        async with session_factory() as session:
            gateway = PersistenceGateway(session)

            result = await gateway.execute(insert(users).values(name="A", email="a@x.com"))
            row = await gateway.fetch_one(select(users).where(users.c.id == result.last_id))

        assert result.rows_affected == 1
        assert row["email"] == "a@x.com"

    @pytest.mark.asyncio
    async def test_update_without_match_affects_nothing(self, session_factory):
        async with session_factory() as session:
            result = await PersistenceGateway(session).execute(
                update(users).where(users.c.id == 99).values(name="Z")
            )

        assert result.rows_affected == 0
        assert result.last_id is None

    @pytest.mark.asyncio
    async def test_fetch_returns_plain_dicts(self, session_factory):
        async with session_factory() as session:
            gateway = PersistenceGateway(session)
            await gateway.execute(insert(users).values(name="A", email="a@x.com"))
            await gateway.execute(insert(users).values(name="B", email="b@x.com"))

            rows = await gateway.fetch_all(select(users.c.name).order_by(users.c.id))
            missing = await gateway.fetch_one(select(users).where(users.c.id == 404))

        assert rows == [{"name": "A"}, {"name": "B"}]
        assert missing is None

    @pytest.mark.asyncio
    async def test_duplicate_email_is_conflict(self, session_factory):
        async with session_factory() as session:
            gateway = PersistenceGateway(session)
            await gateway.execute(insert(users).values(name="A", email="a@x.com"))

            with pytest.raises(ConflictError):
                await gateway.execute(insert(users).values(name="B", email="a@x.com"))


class TestErrorTranslation:

    @pytest.mark.asyncio
    async def test_integrity_error(self):
        session = AsyncMock()
        session.execute.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE"))

        with pytest.raises(ConflictError) as exc_info:
            await PersistenceGateway(session).execute(insert(users))

        assert isinstance(exc_info.value.__cause__, IntegrityError)

    @pytest.mark.asyncio
    async def test_other_driver_errors(self):
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(DatabaseError) as exc_info:
            await PersistenceGateway(session).fetch_all(select(users))

        assert exc_info.value.status_code == 500
        assert exc_info.value.context["original_error"] == "OperationalError"
