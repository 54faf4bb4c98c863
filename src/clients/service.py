"""Client service: validated CRUD and hour registration over the clients table.

Every operation validates its whole input before touching the database and
issues a single statement for each write. Hour increments are computed in
SQL (``hours = hours + :delta``) so concurrent callers never lose updates.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from decimal import Decimal
from typing import Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.clients.models import EnrichedClient
from src.clients.normalize import (
    ABSENT,
    CLEAR,
    INVALID,
    MAX_HOURS_INCREMENT,
    OPTIONAL_TEXT_FIELDS,
    enrich,
    parse_identifier,
    parse_increment,
    parse_non_negative_amount,
    parse_non_negative_integer,
    parse_optional_text,
    parse_required_text,
    text_or_none,
    validate_plan_id,
)
from src.core.errors import InvalidArgumentError, NotFoundError, StoreFailureError
from src.core.logging import client_id_ctx, get_logger
from src.models.client import Client
from src.plans.catalog import PlanCatalog

logger = get_logger(__name__)

clients_table = Client.__table__
_COLUMNS = tuple(clients_table.columns)


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate driver/ORM failures into StoreFailureError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("client_store_failed", operation=operation, error=str(exc))
        raise StoreFailureError("Database error") from exc


def _to_decimal(amount: float) -> Decimal:
    return Decimal(str(amount))


class ClientService:
    """Client registry operations bound to one database session."""

    def __init__(self, db: AsyncSession, catalog: PlanCatalog):
        self.db = db
        self.catalog = catalog

    def _require_id(self, raw_id: object) -> int:
        client_id = parse_identifier(raw_id)
        if client_id is INVALID:
            raise InvalidArgumentError("Invalid id", details={"id": raw_id})
        client_id_ctx.set(str(client_id))
        return client_id

    def _require_plan(self, raw: object) -> str:
        plan = validate_plan_id(raw, self.catalog)
        if plan is INVALID:
            raise InvalidArgumentError(
                "Invalid plan",
                details={"field": "plan", "allowed": sorted(self.catalog)},
            )
        return plan

    @staticmethod
    def _require_body(body: object) -> Mapping[str, Any]:
        if not isinstance(body, Mapping):
            raise InvalidArgumentError("Invalid JSON body")
        return body

    def _parse_text_fields(self, body: Mapping[str, Any]) -> dict[str, Any]:
        """Parse the optional text columns, keeping ABSENT/CLEAR markers."""
        parsed: dict[str, Any] = {}
        for field in OPTIONAL_TEXT_FIELDS:
            value = parse_optional_text(body.get(field, ABSENT))
            if value is INVALID:
                raise InvalidArgumentError(
                    f"Invalid {field}", details={"field": field}
                )
            parsed[field] = value
        return parsed

    async def list_clients(self, search: str | None = None) -> list[EnrichedClient]:
        """Return every client in ascending id order.

        Args:
            search: Optional case-insensitive substring matched against names.
        """
        stmt = select(*_COLUMNS).order_by(Client.id.asc())
        if search and search.strip():
            term = search.strip().lower()
            # Literal substring match; % and _ in the term are not wildcards.
            stmt = stmt.where(func.lower(Client.name).contains(term, autoescape=True))

        with _store_errors("list"):
            result = await self.db.execute(stmt)
            rows = result.mappings().all()
        return [enrich(row, self.catalog) for row in rows]

    async def get_client(self, raw_id: object) -> EnrichedClient:
        client_id = self._require_id(raw_id)
        with _store_errors("get"):
            result = await self.db.execute(
                select(*_COLUMNS).where(Client.id == client_id)
            )
            row = result.mappings().one_or_none()
        if row is None:
            raise NotFoundError("Client not found")
        return enrich(row, self.catalog)

    async def create_client(self, body: object) -> EnrichedClient:
        """Insert a client.

        ``name`` and ``plan`` are required. ``abono`` and ``hours`` are
        tolerant: malformed or negative values fall back to 0 instead of
        failing, so form input with stray characters still saves.
        """
        body = self._require_body(body)

        name = parse_required_text(body.get("name", ABSENT))
        if not isinstance(name, str):
            raise InvalidArgumentError("Name is required", details={"field": "name"})
        plan = self._require_plan(body.get("plan"))
        texts = self._parse_text_fields(body)

        abono = parse_non_negative_amount(body.get("abono", ABSENT), 0.0)
        if abono is INVALID:
            abono = 0.0
        hours = parse_non_negative_integer(body.get("hours", ABSENT), 0)
        if hours is INVALID:
            hours = 0

        values: dict[str, Any] = {
            "name": name,
            "plan": plan,
            "abono": _to_decimal(abono),
            "hours": hours,
            **{field: text_or_none(value) for field, value in texts.items()},
        }

        with _store_errors("create"):
            result = await self.db.execute(
                insert(clients_table).values(**values).returning(*_COLUMNS)
            )
            row = result.mappings().one()

        client_id_ctx.set(str(row["id"]))
        logger.info("client_created", plan=plan, hours=hours)
        return enrich(row, self.catalog)

    async def update_client(self, raw_id: object, body: object) -> EnrichedClient:
        """Apply a partial update.

        Omitted fields are left untouched; null or blank optional text clears
        the column. Unlike create, an invalid ``abono`` or ``hours`` fails the
        whole update.
        """
        client_id = self._require_id(raw_id)
        body = self._require_body(body)

        fields: dict[str, Any] = {}

        name = parse_optional_text(body.get("name", ABSENT))
        if name is INVALID:
            raise InvalidArgumentError("Invalid name", details={"field": "name"})
        if name is CLEAR:
            raise InvalidArgumentError("Name cannot be empty", details={"field": "name"})
        if name is not ABSENT:
            fields["name"] = name

        for field, value in self._parse_text_fields(body).items():
            if value is CLEAR:
                fields[field] = None
            elif value is not ABSENT:
                fields[field] = value

        if "plan" in body:
            fields["plan"] = self._require_plan(body["plan"])

        if "abono" in body:
            abono = parse_non_negative_amount(body["abono"], 0.0)
            if abono is INVALID:
                raise InvalidArgumentError("Invalid abono", details={"field": "abono"})
            fields["abono"] = _to_decimal(abono)

        if "hours" in body:
            hours = parse_non_negative_integer(body["hours"], 0)
            if hours is INVALID:
                raise InvalidArgumentError("Invalid hours", details={"field": "hours"})
            fields["hours"] = hours

        if not fields:
            raise InvalidArgumentError("No fields to update")

        stmt = (
            update(clients_table)
            .where(clients_table.c.id == client_id)
            .values(**fields)
            .returning(*_COLUMNS)
        )
        with _store_errors("update"):
            result = await self.db.execute(stmt)
            row = result.mappings().one_or_none()
        if row is None:
            raise NotFoundError("Client not found")

        logger.info("client_updated", fields=sorted(fields))
        return enrich(row, self.catalog)

    async def delete_client(self, raw_id: object) -> EnrichedClient:
        """Delete a client and return the record as it was before deletion."""
        client_id = self._require_id(raw_id)
        stmt = (
            delete(clients_table)
            .where(clients_table.c.id == client_id)
            .returning(*_COLUMNS)
        )
        with _store_errors("delete"):
            result = await self.db.execute(stmt)
            row = result.mappings().one_or_none()
        if row is None:
            raise NotFoundError("Client not found")

        logger.info("client_deleted")
        return enrich(row, self.catalog)

    async def increment_hours(self, raw_id: object, body: object = None) -> EnrichedClient:
        """Add ``delta`` (default 1, max 24) to the client's used hours.

        Finished plans are not rejected here; callers that want to block
        further hours check ``is_plan_finished`` first.
        """
        client_id = self._require_id(raw_id)
        payload = body if isinstance(body, Mapping) else {}
        delta = parse_increment(payload.get("delta", ABSENT))
        if delta is INVALID:
            raise InvalidArgumentError(
                f"Invalid delta (integer between 1 and {MAX_HOURS_INCREMENT})",
                details={"field": "delta", "min": 1, "max": MAX_HOURS_INCREMENT},
            )

        stmt = (
            update(clients_table)
            .where(clients_table.c.id == client_id)
            .values(hours=clients_table.c.hours + delta)
            .returning(*_COLUMNS)
        )
        with _store_errors("increment_hours"):
            result = await self.db.execute(stmt)
            row = result.mappings().one_or_none()
        if row is None:
            raise NotFoundError("Client not found")

        logger.info("client_hours_incremented", delta=delta, hours=row["hours"])
        return enrich(row, self.catalog)
