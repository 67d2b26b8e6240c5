import datetime as dt
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from appointment_widget.client.api_client import BookingApiClient, BookingApiError
from appointment_widget.client.notifications import NotificationCenter
from appointment_widget.core.catalog import TIME_SLOTS, is_valid_email, is_valid_phone
from appointment_widget.core.logger import logger

SUCCESS_MESSAGE = "Booking created successfully! We will contact you soon."


class BookingFormData(BaseModel):
    fullName: str = ""
    contactNumber: str = ""
    email: str = ""
    service: str = ""
    date: Optional[dt.date] = None
    time: str = ""


class BookingForm:
    """
    State and behaviour of the booking widget, independent of how it is rendered.

    - `set_field` updates a value and clears that field's error; changing
      the date refreshes the available slots.
    - `submit` validates locally, then creates the booking through the API
      and raises a notification either way.
    """

    def __init__(
        self,
        api: BookingApiClient,
        notifications: NotificationCenter = None,
        today: Callable[[], dt.date] = dt.date.today,
    ):
        self.api = api
        self.notifications = notifications or NotificationCenter()
        self.today = today
        self.data = BookingFormData()
        self.errors: Dict[str, str] = {}
        self.available_slots: List[str] = list(TIME_SLOTS)
        self.is_submitting = False

    def set_field(self, field: str, value: Any):
        if field not in BookingFormData.model_fields:
            raise KeyError(f"Unknown form field: {field}")
        if field == "date" and isinstance(value, str):
            value = dt.date.fromisoformat(value) if value else None
        if isinstance(value, dt.datetime):
            value = value.date()

        previous = getattr(self.data, field)
        setattr(self.data, field, value)
        self.errors.pop(field, None)

        if field == "date" and value != previous:
            self.refresh_availability()

    def validate(self) -> bool:
        errors: Dict[str, str] = {}
        data = self.data

        if not data.fullName.strip():
            errors["fullName"] = "Full name is required"

        if not data.contactNumber.strip():
            errors["contactNumber"] = "Contact number is required"
        elif not is_valid_phone(data.contactNumber):
            errors["contactNumber"] = "Please enter a valid contact number"

        if not data.email.strip():
            errors["email"] = "Email is required"
        elif not is_valid_email(data.email):
            errors["email"] = "Please enter a valid email address"

        if not data.service:
            errors["service"] = "Please select a service"

        if not data.date:
            errors["date"] = "Please select a date"
        elif data.date < self.today():
            errors["date"] = "Please select a date from today onwards"

        if not data.time:
            errors["time"] = "Please select a time"

        self.errors = errors
        return not errors

    def refresh_availability(self) -> List[str]:
        date = self.data.date
        if date is None:
            self.available_slots = list(TIME_SLOTS)
            return self.available_slots

        try:
            booked = set(self.api.booked_slots(date))
            available = [slot for slot in TIME_SLOTS if slot not in booked]
        except BookingApiError as e:
            logger.warning(f"⚠️ Batched slot lookup failed ({e.message}), checking slots one by one")
            available = self._check_each_slot(date)

        self.available_slots = available
        if self.data.time and self.data.time not in available:
            self.data.time = ""
        return available

    def _check_each_slot(self, date: dt.date) -> List[str]:
        available = []
        for slot in TIME_SLOTS:
            try:
                if self.api.check_availability(date, slot):
                    available.append(slot)
            except BookingApiError:
                # Unknown counts as free; the store still rejects a taken slot
                available.append(slot)
        return available

    @property
    def no_slots_left(self) -> bool:
        return self.data.date is not None and not self.available_slots

    @property
    def can_submit(self) -> bool:
        return not self.is_submitting and not self.no_slots_left

    def submit(self) -> bool:
        if not self.can_submit or not self.validate():
            return False

        self.is_submitting = True
        try:
            self.api.create_booking(self.data.model_dump())
        except BookingApiError as e:
            self.notifications.error(e.message)
            return False
        finally:
            self.is_submitting = False

        self.reset()
        self.notifications.success(SUCCESS_MESSAGE)
        return True

    def reset(self):
        self.data = BookingFormData()
        self.errors = {}
        self.available_slots = list(TIME_SLOTS)
