import pytest

from appointment_widget.core.exceptions import BookingValidationError, SlotConflictError
from appointment_widget.services.booking_service import BookingService


@pytest.mark.asyncio
async def test_create_returns_record_matching_input(store, jane):
    service = BookingService(store)
    booking = await service.create_booking(jane)

    assert booking.model_dump(mode="json", exclude={"id"}) == jane
    assert isinstance(booking.id, int)


@pytest.mark.asyncio
@pytest.mark.parametrize("field, value", [
    ("fullName", ""),
    ("contactNumber", "abc"),
    ("email", "jane@"),
    ("service", ""),
    ("date", "not-a-date"),
    ("time", "25:00:00"),
    ("time", "٠٩:٠٠"),
    ("contactNumber", "５５５１２３４５６７"),
])
async def test_invalid_input_inserts_nothing(store, jane, field, value):
    service = BookingService(store)
    jane[field] = value

    with pytest.raises(BookingValidationError) as exc_info:
        await service.create_booking(jane)

    assert field in exc_info.value.errors
    assert await service.list_bookings() == []


@pytest.mark.asyncio
async def test_second_booking_for_slot_conflicts(store, jane):
    service = BookingService(store)
    await service.create_booking(jane)

    with pytest.raises(SlotConflictError):
        await service.create_booking(jane)
    assert len(await service.list_bookings()) == 1


@pytest.mark.asyncio
async def test_availability_and_booked_slots(store, jane):
    service = BookingService(store)
    await service.create_booking(jane)

    assert await service.check_availability("2025-06-01", "09:00") is False
    assert await service.check_availability("2025-06-01", "09:30") is True
    assert await service.booked_slots("2025-06-01") == ["09:00"]


@pytest.mark.asyncio
async def test_availability_rejects_malformed_params(store):
    service = BookingService(store)

    with pytest.raises(BookingValidationError) as exc_info:
        await service.check_availability("June 1st", "9am")
    assert exc_info.value.errors == {"date": "Invalid date format", "time": "Invalid time format"}
