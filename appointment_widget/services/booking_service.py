from typing import Any, List, Optional

from appointment_widget.core.exceptions import BookingValidationError
from appointment_widget.core.logger import logger
from appointment_widget.models.booking import Booking, BookingCreate, SlotQuery
from appointment_widget.services.store import BookingStore


class BookingService:
    def __init__(self, store: BookingStore):
        self.store = store

    async def create_booking(self, fields: Any) -> Booking:
        """
        Validates raw booking fields and inserts them.
        Raises BookingValidationError (nothing inserted) or SlotConflictError (slot taken).
        """
        try:
            booking = BookingCreate.from_fields(fields)
        except BookingValidationError as e:
            logger.info(f"⚠️ Booking rejected: {e.errors}")
            raise

        logger.info(f"📥 Booking Request - Day: {booking.date}, Time: {booking.time}, Service: {booking.service}")
        created = await self.store.add(booking)
        logger.info(f"✅ Booking {created.id} created for {created.date} {created.time}")
        return created

    async def list_bookings(self) -> List[Booking]:
        return await self.store.list_all()

    async def check_availability(self, date: Optional[str], time: Optional[str]) -> bool:
        query = SlotQuery.from_params(date=date, time=time)
        if query.time is None:
            raise BookingValidationError({"time": "Time is required"})
        return await self.store.is_available(query.date, query.time)

    async def booked_slots(self, date: Optional[str]) -> List[str]:
        """Times already taken on `date`, one query for the whole day."""
        query = SlotQuery.from_params(date=date)
        return await self.store.booked_times(query.date)

    async def delete_booking(self, booking_id: int) -> None:
        await self.store.delete(booking_id)
