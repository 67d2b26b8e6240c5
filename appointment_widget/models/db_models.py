"""SQLAlchemy table for the bookings store."""
from sqlalchemy import Column, Date, Integer, String, UniqueConstraint
from sqlalchemy.orm import declarative_base

from appointment_widget.core.catalog import CONTACT_NUMBER_MAX, EMAIL_MAX, FULL_NAME_MAX, SERVICE_MAX
from appointment_widget.models.booking import Booking

Base = declarative_base()


class BookingRecord(Base):
    __tablename__ = "bookings"
    # One booking per slot; the insert itself is the availability check
    __table_args__ = (UniqueConstraint("date", "time", name="uq_bookings_slot"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(FULL_NAME_MAX), nullable=False)
    contact_number = Column(String(CONTACT_NUMBER_MAX), nullable=False)
    email = Column(String(EMAIL_MAX), nullable=False)
    service = Column(String(SERVICE_MAX), nullable=False)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(10), nullable=False)

    def to_booking(self) -> Booking:
        return Booking(
            id=self.id,
            fullName=self.full_name,
            contactNumber=self.contact_number,
            email=self.email,
            service=self.service,
            date=self.date,
            time=self.time,
        )

    def __repr__(self):
        return f"<BookingRecord(id={self.id}, date={self.date}, time={self.time})>"
