"""
Parcel tracking service.

Business operations over the parcel store: registering parcels, advancing
their status and the address/delete rules that only apply while REGISTERED.
"""

from datetime import datetime, timezone
from typing import List, Optional

from tracker.app.core.observability import logger
from tracker.app.models.parcel_enums import ParcelStatus, NEXT_STATUS
from tracker.app.schemas.parcel import ParcelCreate, ParcelResponse
from tracker.app.stores.parcel_store import ParcelStore

RFC3339_UTC = "%Y-%m-%dT%H:%M:%SZ"


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a moment (default: now) as an RFC3339 UTC string."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime(RFC3339_UTC)


class ParcelService:
    def __init__(self, store: ParcelStore):
        self.store = store

    async def register(self, client: int, address: str) -> ParcelResponse:
        """
        Register a new parcel for a client.
        
        Args:
            client: Owning client identifier
            address: Delivery address
            
        Returns:
            The stored parcel, including its assigned number
        """
        parcel = ParcelCreate(
            client=client,
            status=ParcelStatus.REGISTERED.value,
            address=address,
            created_at=utc_timestamp(),
        )
        number = await self.store.add(parcel)
        logger.info("Parcel registered", extra={"number": number, "client": client})
        return ParcelResponse(number=number, **parcel.model_dump())

    async def client_parcels(self, client: int) -> List[ParcelResponse]:
        return await self.store.get_by_client(client)

    async def next_status(self, number: int) -> Optional[str]:
        """
        Move a parcel one step along REGISTERED → SENT → DELIVERED.
        
        Returns:
            The new status, or None if the parcel has no further status
            
        Raises:
            NotFoundError: If the parcel does not exist
        """
        parcel = await self.store.get(number)
        new_status = NEXT_STATUS.get(parcel.status)
        if new_status is None:
            logger.info(
                "Parcel has no next status",
                extra={"number": number, "status": parcel.status}
            )
            return None
        
        await self.store.set_status(number, new_status)
        logger.info(
            "Parcel status changed",
            extra={"number": number, "from_status": parcel.status, "to_status": new_status}
        )
        return new_status

    async def change_address(self, number: int, address: str) -> None:
        await self.store.set_address(number, address)

    async def delete(self, number: int) -> None:
        await self.store.delete(number)
