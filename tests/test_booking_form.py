import datetime as dt
from unittest.mock import MagicMock

import pytest

from appointment_widget.client.api_client import BookingApiClient, BookingApiError
from appointment_widget.client.form import SUCCESS_MESSAGE, BookingForm
from appointment_widget.client.notifications import NotificationCenter
from appointment_widget.core.catalog import TIME_SLOTS

TODAY = dt.date(2025, 5, 20)
JUNE_1 = dt.date(2025, 6, 1)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def api():
    mock_api = MagicMock(spec=BookingApiClient)
    mock_api.booked_slots.return_value = []
    return mock_api


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def form(api, clock):
    return BookingForm(api, NotificationCenter(clock=clock), today=lambda: TODAY)


def fill(form, **overrides):
    values = {
        "fullName": "Jane Doe",
        "contactNumber": "555-123-4567",
        "email": "jane@example.com",
        "service": "Pet Grooming",
        "date": JUNE_1,
        "time": "09:00",
    }
    values.update(overrides)
    for field, value in values.items():
        form.set_field(field, value)


def test_empty_form_reports_every_field(form):
    assert form.validate() is False
    assert form.errors == {
        "fullName": "Full name is required",
        "contactNumber": "Contact number is required",
        "email": "Email is required",
        "service": "Please select a service",
        "date": "Please select a date",
        "time": "Please select a time",
    }


def test_malformed_contact_details(form):
    fill(form, contactNumber="12-34", email="jane@example")
    assert form.validate() is False
    assert form.errors == {
        "contactNumber": "Please enter a valid contact number",
        "email": "Please enter a valid email address",
    }


def test_past_date_is_rejected(form):
    fill(form, date=dt.date(2025, 5, 19))
    assert form.validate() is False
    assert form.errors == {"date": "Please select a date from today onwards"}


def test_editing_a_field_clears_its_error(form):
    form.validate()
    form.set_field("fullName", "J")
    assert "fullName" not in form.errors
    assert "email" in form.errors


def test_unknown_field(form):
    with pytest.raises(KeyError):
        form.set_field("notes", "hello")


def test_date_change_uses_one_batched_lookup(form, api):
    api.booked_slots.return_value = ["09:00", "12:30"]

    form.set_field("date", JUNE_1)

    api.booked_slots.assert_called_once_with(JUNE_1)
    api.check_availability.assert_not_called()
    assert form.available_slots == [s for s in TIME_SLOTS if s not in ("09:00", "12:30")]


def test_date_change_clears_taken_time(form, api):
    form.set_field("date", JUNE_1)
    form.set_field("time", "10:00")

    api.booked_slots.return_value = ["10:00"]
    form.set_field("date", dt.date(2025, 6, 2))

    assert form.data.time == ""
    assert "10:00" not in form.available_slots


def test_date_change_keeps_free_time(form, api):
    form.set_field("date", JUNE_1)
    form.set_field("time", "10:00")

    api.booked_slots.return_value = ["11:00"]
    form.set_field("date", dt.date(2025, 6, 2))

    assert form.data.time == "10:00"


def test_fallback_checks_each_slot_and_fails_open(form, api):
    api.booked_slots.side_effect = BookingApiError("Failed to check availability.")

    def check(date, slot):
        if slot == "09:00":
            return False
        if slot == "09:30":
            raise BookingApiError("Failed to check availability.")
        return True
    api.check_availability.side_effect = check

    form.set_field("date", JUNE_1)

    assert api.check_availability.call_count == len(TIME_SLOTS)
    assert "09:00" not in form.available_slots
    assert "09:30" in form.available_slots
    assert len(form.available_slots) == len(TIME_SLOTS) - 1


def test_clearing_date_restores_catalog(form, api):
    api.booked_slots.return_value = TIME_SLOTS
    form.set_field("date", JUNE_1)
    assert form.available_slots == []
    assert form.no_slots_left

    form.set_field("date", None)
    assert form.available_slots == TIME_SLOTS
    assert not form.no_slots_left


def test_submit_blocked_while_invalid(form, api):
    fill(form, email="nope")
    assert form.submit() is False
    api.create_booking.assert_not_called()


def test_submit_blocked_when_day_is_full(form, api):
    fill(form)
    api.booked_slots.return_value = TIME_SLOTS
    form.set_field("date", dt.date(2025, 6, 2))

    assert form.can_submit is False
    assert form.submit() is False
    api.create_booking.assert_not_called()


def test_successful_submit_resets_form(form, api, clock):
    fill(form)

    assert form.submit() is True

    sent = api.create_booking.call_args.args[0]
    assert sent["fullName"] == "Jane Doe"
    assert sent["date"] == JUNE_1
    assert form.data.fullName == ""
    assert form.data.date is None
    assert form.available_slots == TIME_SLOTS

    notification = form.notifications.current
    assert notification.type == "success"
    assert notification.message == SUCCESS_MESSAGE

    clock.now = 4.9
    assert form.notifications.current is not None
    clock.now = 5.0
    assert form.notifications.current is None


def test_failed_submit_keeps_form(form, api, clock):
    fill(form)
    api.create_booking.side_effect = BookingApiError(
        "This time slot has just been booked. Please choose another time.", 409
    )

    assert form.submit() is False

    assert form.data.fullName == "Jane Doe"
    assert form.data.time == "09:00"
    assert form.is_submitting is False

    notification = form.notifications.current
    assert notification.type == "error"
    assert "just been booked" in notification.message

    clock.now = 7.9
    assert form.notifications.current is not None
    clock.now = 8.0
    assert form.notifications.current is None


def test_notification_can_be_dismissed(form, api):
    fill(form)
    form.submit()
    form.notifications.dismiss()
    assert form.notifications.current is None
