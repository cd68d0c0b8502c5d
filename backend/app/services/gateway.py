"""
Inkwell Backend — Persistence Gateway
=======================================

What:  Thin wrapper executing parameterized SQLAlchemy Core statements
       on the request's AsyncSession.
Why:   Services only need three things from the store: many rows, one row,
       and the outcome of a write (rows affected, new id). Keeping that
       surface small lets tests swap the gateway for an AsyncMock.
How:   Rows come back as plain dicts keyed by column label. Driver errors
       are translated into the application exception hierarchy:
           IntegrityError        → ConflictError (409)
           other SQLAlchemyError → DatabaseError (500)
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from app.database import get_db_session
from app.exceptions import ConflictError, DatabaseError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


@dataclass(frozen=True)
class ExecuteResult:
    """Outcome of an INSERT/UPDATE/DELETE."""
    rows_affected: int
    last_id: Optional[int] = None


class PersistenceGateway:
    """
    Executes statements against the relational store.

    One gateway wraps one session; the session (and its transaction) is
    owned by the request, see app.database.get_db_session.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_all(self, statement: Executable) -> List[Row]:
        result = await self._run(statement)
        return [dict(row) for row in result.mappings().all()]

    async def fetch_one(self, statement: Executable) -> Optional[Row]:
        result = await self._run(statement)
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def execute(self, statement: Executable) -> ExecuteResult:
        """
        Run a write statement.

        Returns:
            ExecuteResult with the driver's row count and, for single-row
            inserts, the generated primary key.
        """
        result = await self._run(statement)
        last_id = None
        if result.is_insert and result.inserted_primary_key:
            last_id = result.inserted_primary_key[0]
        return ExecuteResult(rows_affected=result.rowcount, last_id=last_id)

    async def _run(self, statement: Executable):
        try:
            return await self.session.execute(statement)
        except IntegrityError as e:
            logger.info("Integrity violation: %s", e.orig)
            raise ConflictError(
                context={"original_error": type(e.orig).__name__ if e.orig else "IntegrityError"},
            ) from e
        except SQLAlchemyError as e:
            raise DatabaseError(
                context={"original_error": type(e).__name__, "detail": str(e)},
            ) from e


async def get_gateway(
    session: AsyncSession = Depends(get_db_session),
) -> PersistenceGateway:
    """FastAPI dependency: a gateway over the request's session."""
    return PersistenceGateway(session)
