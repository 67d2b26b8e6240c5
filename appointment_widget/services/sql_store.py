import datetime as dt
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from appointment_widget.core.exceptions import BookingNotFoundError, SlotConflictError
from appointment_widget.core.logger import logger
from appointment_widget.models.booking import Booking, BookingCreate
from appointment_widget.models.db_models import Base, BookingRecord
from appointment_widget.services.store import BookingStore


class SqlBookingStore(BookingStore):
    """Bookings table behind a SQLAlchemy async engine (SQLite by default)."""

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._sessions: Optional[async_sessionmaker] = None

    async def open(self):
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.database_url, echo=self.echo)
        self._sessions = async_sessionmaker(self._engine, expire_on_commit=False)
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"✅ Booking store opened ({self._engine.url.render_as_string(hide_password=True)})")

    async def close(self):
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessions = None
        logger.info("🛑 Booking store closed")

    def _session(self):
        if self._sessions is None:
            raise RuntimeError("Booking store is not open")
        return self._sessions()

    async def add(self, booking: BookingCreate) -> Booking:
        record = BookingRecord(
            full_name=booking.fullName,
            contact_number=booking.contactNumber,
            email=booking.email,
            service=booking.service,
            date=booking.date,
            time=booking.time,
        )
        async with self._session() as session:
            session.add(record)
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                logger.info(f"⛔ Slot {booking.date} {booking.time} already booked")
                raise SlotConflictError(booking.date.isoformat(), booking.time)
        return record.to_booking()

    async def list_all(self) -> List[Booking]:
        async with self._session() as session:
            result = await session.scalars(
                select(BookingRecord).order_by(BookingRecord.date, BookingRecord.time)
            )
            return [record.to_booking() for record in result]

    async def is_available(self, date: dt.date, time: str) -> bool:
        async with self._session() as session:
            count = await session.scalar(
                select(func.count())
                .select_from(BookingRecord)
                .where(BookingRecord.date == date, BookingRecord.time == time)
            )
            return count == 0

    async def booked_times(self, date: dt.date) -> List[str]:
        async with self._session() as session:
            result = await session.scalars(
                select(BookingRecord.time)
                .where(BookingRecord.date == date)
                .order_by(BookingRecord.time)
            )
            return list(result)

    async def delete(self, booking_id: int) -> None:
        async with self._session() as session:
            result = await session.execute(delete(BookingRecord).where(BookingRecord.id == booking_id))
            await session.commit()
            if result.rowcount == 0:
                raise BookingNotFoundError(booking_id)
        logger.info(f"🗑️ Booking {booking_id} deleted from DB.")
