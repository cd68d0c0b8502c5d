"""
Inkwell Backend — Resource Service Base
=========================================

What:  Behaviour shared by the user and article services.
Why:   Both resources parse ids from the URL, paginate, count rows, guard
       writes with existence checks and delete by id. Only the rules that
       differ (email uniqueness, article ownership) live in the subclasses.
How:   A subclass names its table and resource; the base builds the
       statements and raises NotFoundError with "<Resource> not found".

Design Decision:
    The gateway is injected at construction (one service per request).
    Tests pass an AsyncMock gateway, or a real one over in-memory SQLite.
"""

from typing import Any, Dict, Optional, Tuple

from sqlalchemy import Table, delete, func, select
from sqlalchemy.sql import ColumnElement, Select

from app.config import settings
from app.exceptions import NotFoundError
from app.services.gateway import PersistenceGateway, Row
from app.services.validators import parse_page_param, parse_row_id


class ResourceService:
    """
    Generic CRUD helper parameterized by table and resource name.

    Subclasses set:
        resource_name: used in "<resource_name> not found"
        table:         the Core table backing the resource
    """

    resource_name: str = "Resource"
    table: Table

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    # ── Input Parsing ─────────────────────────────────────────────────────

    def parse_id(self, raw: Any) -> int:
        """
        Turn a path segment into a row id.

        A segment that is not a plain integer, or is outside the id column
        range, cannot match any row, so it is reported exactly like a
        missing row (404).
        """
        row_id = parse_row_id(raw)
        if row_id is None:
            raise NotFoundError(resource=self.resource_name, resource_id=raw)
        return row_id

    @staticmethod
    def page_window(
        limit: Optional[str], page: Optional[str]
    ) -> Tuple[int, int, int]:
        """
        Resolve pagination query parameters.

        Returns:
            (limit, page, offset) with offset = (page - 1) * limit.
            The limit is capped at settings.max_page_size.
        """
        size = min(
            parse_page_param(limit, settings.default_page_size),
            settings.max_page_size,
        )
        number = parse_page_param(page, 1)
        return size, number, (number - 1) * size

    @staticmethod
    def body(payload: Any) -> Dict[str, Any]:
        """Request bodies that are not JSON objects are treated as empty."""
        return payload if isinstance(payload, dict) else {}

    # ── Queries ───────────────────────────────────────────────────────────

    async def count(self, *criteria: ColumnElement, source: Optional[Table] = None) -> int:
        """Row count of `source` (default: this resource's table)."""
        statement = select(func.count().label("total")).select_from(
            self.table if source is None else source
        )
        if criteria:
            statement = statement.where(*criteria)
        row = await self.gateway.fetch_one(statement)
        return int(row["total"]) if row else 0

    async def require(self, statement: Select, resource_id: Any) -> Row:
        """Fetch one row or raise NotFoundError."""
        row = await self.gateway.fetch_one(statement)
        if row is None:
            raise NotFoundError(resource=self.resource_name, resource_id=resource_id)
        return row

    async def delete_by_id(self, row_id: int) -> None:
        """Delete one row; zero rows affected means it was not there."""
        result = await self.gateway.execute(
            delete(self.table).where(self.table.c.id == row_id)
        )
        if result.rows_affected == 0:
            raise NotFoundError(resource=self.resource_name, resource_id=row_id)
