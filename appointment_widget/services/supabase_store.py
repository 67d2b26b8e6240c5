import datetime as dt
from typing import List, Optional

from postgrest.exceptions import APIError
from supabase import AsyncClient, create_async_client

from appointment_widget.core.exceptions import BookingNotFoundError, SlotConflictError
from appointment_widget.core.logger import logger
from appointment_widget.models.booking import Booking, BookingCreate
from appointment_widget.services.store import BookingStore

TABLE = "bookings"
UNIQUE_VIOLATION = "23505"


def row_to_booking(row: dict) -> Booking:
    return Booking(
        id=row["id"],
        fullName=row["full_name"],
        contactNumber=row["contact_number"],
        email=row["email"],
        service=row["service"],
        date=row["date"],
        time=row["time"],
    )


class SupabaseBookingStore(BookingStore):
    """
    Bookings table in Supabase (Postgres). Expects the schema from
    sql/bookings.sql, which carries the unique (date, time) constraint.
    """

    def __init__(self, url: str, key: str, client: Optional[AsyncClient] = None):
        self.url = url
        self.key = key
        self._client = client

    async def open(self):
        if self._client is not None:
            return
        if not self.url or not self.key:
            raise RuntimeError("Supabase credentials missing (SUPABASE_URL / SUPABASE_KEY)")
        self._client = await create_async_client(self.url, self.key)
        logger.info("✅ Supabase Async client initialized")

    async def close(self):
        self._client = None

    @property
    def client(self) -> AsyncClient:
        if self._client is None:
            raise RuntimeError("Booking store is not open")
        return self._client

    async def add(self, booking: BookingCreate) -> Booking:
        row = {
            "full_name": booking.fullName,
            "contact_number": booking.contactNumber,
            "email": booking.email,
            "service": booking.service,
            "date": booking.date.isoformat(),
            "time": booking.time,
        }
        try:
            response = await self.client.table(TABLE).insert(row).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                logger.info(f"⛔ Slot {booking.date} {booking.time} already booked")
                raise SlotConflictError(booking.date.isoformat(), booking.time) from e
            raise
        return row_to_booking(response.data[0])

    async def list_all(self) -> List[Booking]:
        response = await self.client.table(TABLE)\
            .select("*")\
            .order("date")\
            .order("time")\
            .execute()
        return [row_to_booking(row) for row in response.data]

    async def is_available(self, date: dt.date, time: str) -> bool:
        response = await self.client.table(TABLE)\
            .select("id")\
            .eq("date", date.isoformat())\
            .eq("time", time)\
            .limit(1)\
            .execute()
        return not response.data

    async def booked_times(self, date: dt.date) -> List[str]:
        response = await self.client.table(TABLE)\
            .select("time")\
            .eq("date", date.isoformat())\
            .order("time")\
            .execute()
        return [row["time"] for row in response.data]

    async def delete(self, booking_id: int) -> None:
        response = await self.client.table(TABLE).delete().eq("id", booking_id).execute()
        if not response.data:
            raise BookingNotFoundError(booking_id)
        logger.info(f"🗑️ Booking {booking_id} deleted from DB.")
