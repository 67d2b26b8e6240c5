import datetime as dt
from typing import List

from appointment_widget.core.config import Settings
from appointment_widget.models.booking import Booking, BookingCreate


class BookingStore:
    """
    Persistence for bookings. One instance per application, opened on
    startup and closed on shutdown.

    Implementations must guarantee that `add` is atomic per slot: a
    second booking for the same (date, time) raises SlotConflictError
    and leaves the store unchanged.
    """

    async def open(self):
        pass

    async def close(self):
        pass

    async def add(self, booking: BookingCreate) -> Booking:
        raise NotImplementedError

    async def list_all(self) -> List[Booking]:
        """All bookings ordered by (date, time)."""
        raise NotImplementedError

    async def is_available(self, date: dt.date, time: str) -> bool:
        raise NotImplementedError

    async def booked_times(self, date: dt.date) -> List[str]:
        """Sorted times already taken on `date`."""
        raise NotImplementedError

    async def delete(self, booking_id: int) -> None:
        """Raises BookingNotFoundError if nothing was deleted."""
        raise NotImplementedError


def build_store(settings: Settings) -> BookingStore:
    backend = settings.STORE_BACKEND.lower()
    if backend == "sql":
        from appointment_widget.services.sql_store import SqlBookingStore
        return SqlBookingStore(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    if backend == "supabase":
        from appointment_widget.services.supabase_store import SupabaseBookingStore
        return SupabaseBookingStore(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    raise ValueError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND!r} (expected 'sql' or 'supabase')")
