import datetime as dt
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from appointment_widget.core.catalog import (
    DATE_FORMAT, EMAIL_MAX, FULL_NAME_MAX, SERVICE_MAX, TIME_RE,
    is_valid_email, is_valid_phone,
)
from appointment_widget.core.exceptions import BookingValidationError

# Message used when a field is absent from the payload altogether
REQUIRED_MESSAGES = {
    "fullName": "Full name is required",
    "contactNumber": "Contact number is required",
    "email": "Email is required",
    "service": "Service is required",
    "date": "Date is required",
    "time": "Time is required",
}


def parse_date(value: Any) -> dt.date:
    """
    Accepts a date or a 'YYYY-MM-DD' string.
    Raises PydanticCustomError so the message survives as-is.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.datetime.strptime(value.strip(), DATE_FORMAT).date()
        except ValueError:
            pass
    raise PydanticCustomError("invalid_date", "Invalid date format")


def parse_time(value: Any) -> str:
    if isinstance(value, str) and TIME_RE.fullmatch(value.strip()):
        return value.strip()
    raise PydanticCustomError("invalid_time", "Invalid time format")


class BookingCreate(BaseModel):
    """Incoming booking fields (camelCase, as the widget sends them)."""
    fullName: str
    contactNumber: str
    email: str
    service: str
    date: dt.date
    time: str

    @field_validator("fullName", mode="before")
    @classmethod
    def check_full_name(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("required", "Full name is required")
        if len(value.strip()) > FULL_NAME_MAX:
            raise PydanticCustomError("too_long", "Full name is too long")
        return value.strip()

    @field_validator("contactNumber", mode="before")
    @classmethod
    def check_contact_number(cls, value):
        if not isinstance(value, str) or not is_valid_phone(value):
            raise PydanticCustomError("invalid_phone", "Invalid contact number")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, value):
        if not isinstance(value, str) or not is_valid_email(value.strip()):
            raise PydanticCustomError("invalid_email", "Invalid email address")
        if len(value.strip()) > EMAIL_MAX:
            raise PydanticCustomError("too_long", "Email address is too long")
        return value.strip()

    @field_validator("service", mode="before")
    @classmethod
    def check_service(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("required", "Service is required")
        if len(value.strip()) > SERVICE_MAX:
            raise PydanticCustomError("too_long", "Service name is too long")
        return value.strip()

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, value):
        return parse_date(value)

    @field_validator("time", mode="before")
    @classmethod
    def check_time(cls, value):
        return parse_time(value)

    @classmethod
    def from_fields(cls, fields: Any) -> "BookingCreate":
        """Validates raw input, raising BookingValidationError with per-field messages."""
        try:
            return cls.model_validate(fields)
        except ValidationError as e:
            raise BookingValidationError(field_errors(e)) from e


class Booking(BookingCreate):
    """A persisted booking."""
    id: int


class SlotQuery(BaseModel):
    date: dt.date
    time: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, value):
        return parse_date(value)

    @field_validator("time", mode="before")
    @classmethod
    def check_time(cls, value):
        if value is None:
            return None
        return parse_time(value)

    @classmethod
    def from_params(cls, **params) -> "SlotQuery":
        try:
            return cls.model_validate(params)
        except ValidationError as e:
            raise BookingValidationError(field_errors(e)) from e


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """Flattens a pydantic ValidationError into {field: message}, first message per field wins."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else "body"
        if err.get("type") == "missing":
            message = REQUIRED_MESSAGES.get(field, "Field required")
        else:
            message = err.get("msg", "Invalid value")
        errors.setdefault(field, message)
    return errors
