"""
Parcel persistence store.

Maps each parcel operation onto a single SQL statement against the parcel table.
The session factory is injected by the caller; every operation runs in its own
short-lived session, so one store can be shared by concurrent tasks.
"""

from typing import List, NoReturn

from pydantic import ValidationError
from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tracker.app.core.exceptions import NotFoundError, StorageError
from tracker.app.core.observability import logger
from tracker.app.models.parcel import Parcel
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import ParcelCreate, ParcelResponse

# Fixed decode order, matches the table's column order
PARCEL_COLUMNS = (
    Parcel.number,
    Parcel.client,
    Parcel.status,
    Parcel.address,
    Parcel.created_at,
)


class ParcelStore:
    """
    Data access for parcels.

    Address changes and deletion are only applied to REGISTERED parcels; for any
    other status they are silent no-ops.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def add(self, parcel: ParcelCreate) -> int:
        """
        Insert a parcel and return the number assigned by the database.

        Raises:
            StorageError: On constraint violation or connectivity failure
        """
        record = Parcel(
            client=parcel.client,
            status=parcel.status,
            address=parcel.address,
            created_at=parcel.created_at,
        )
        async with self.session_factory() as db:
            try:
                db.add(record)
                await db.flush()
                number = record.number
                await db.commit()
            except SQLAlchemyError as exc:
                await self._fail(db, "add", exc, client=parcel.client)

        logger.info("Parcel added", extra={"number": number, "client": parcel.client})
        return number

    async def get(self, number: int) -> ParcelResponse:
        """
        Fetch one parcel by number.

        Raises:
            NotFoundError: If no parcel has this number
            StorageError: On read or decode failure
        """
        async with self.session_factory() as db:
            try:
                result = await db.execute(
                    select(*PARCEL_COLUMNS).where(Parcel.number == number)
                )
                row = result.one_or_none()
            except SQLAlchemyError as exc:
                await self._fail(db, "get", exc, number=number)

        if row is None:
            raise NotFoundError("Parcel", number)

        return self._decode(row, "get")

    async def get_by_client(self, client: int) -> List[ParcelResponse]:
        """
        Fetch every parcel of a client, ordered by number.

        Returns an empty list when the client has no parcels. A row that fails to
        decode aborts the whole call.
        """
        async with self.session_factory() as db:
            try:
                result = await db.execute(
                    select(*PARCEL_COLUMNS)
                    .where(Parcel.client == client)
                    .order_by(Parcel.number)
                )
                rows = result.all()
            except SQLAlchemyError as exc:
                await self._fail(db, "get_by_client", exc, client=client)

        return [self._decode(row, "get_by_client") for row in rows]

    async def set_status(self, number: int, status: str) -> None:
        """Set the status of a parcel. Status values are not validated here."""
        await self._write(
            "set_status",
            update(Parcel).where(Parcel.number == number).values(status=status),
            number=number,
            status=status,
        )

    async def set_address(self, number: int, address: str) -> None:
        """Change the address of a parcel, only while it is REGISTERED."""
        await self._write(
            "set_address",
            update(Parcel)
            .where(
                Parcel.number == number,
                Parcel.status == ParcelStatus.REGISTERED.value
            )
            .values(address=address),
            number=number,
        )

    async def delete(self, number: int) -> None:
        """Delete a parcel, only while it is REGISTERED."""
        await self._write(
            "delete",
            delete(Parcel).where(
                Parcel.number == number,
                Parcel.status == ParcelStatus.REGISTERED.value
            ),
            number=number,
        )

    async def _write(self, operation: str, statement, **context) -> None:
        """Execute one UPDATE/DELETE and commit."""
        async with self.session_factory() as db:
            try:
                result = await db.execute(statement)
                await db.commit()
            except SQLAlchemyError as exc:
                await self._fail(db, operation, exc, **context)

        if result.rowcount == 0:
            logger.info("Parcel unchanged", extra={"operation": operation, **context})

    def _decode(self, row, operation: str) -> ParcelResponse:
        try:
            return ParcelResponse.model_validate(row)
        except ValidationError as exc:
            logger.error(
                "Parcel row could not be decoded",
                extra={"operation": operation, "row": tuple(row)}
            )
            raise StorageError(operation, "Parcel row could not be decoded") from exc

    async def _fail(self, db: AsyncSession, operation: str, exc: SQLAlchemyError, **context) -> NoReturn:
        """Roll back the session, log, and raise the failure as a StorageError."""
        try:
            await db.rollback()
        except SQLAlchemyError as rollback_exc:
            logger.error(
                "Parcel rollback failed",
                extra={"operation": operation, "error": type(rollback_exc).__name__, **context}
            )
        logger.error(
            "Parcel storage failure",
            extra={"operation": operation, "error": type(exc).__name__, **context}
        )
        raise StorageError(operation, details=context) from exc
