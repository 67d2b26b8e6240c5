from typing import Dict, List


class BookingError(Exception):
    """Base class for errors surfaced to API callers."""
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class BookingValidationError(BookingError):
    """Malformed booking input. `errors` maps field name -> message."""
    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: Dict[str, str]):
        super().__init__()
        self.errors = errors

    @property
    def details(self) -> List[Dict[str, str]]:
        return [{"field": field, "message": msg} for field, msg in self.errors.items()]

    def to_dict(self) -> dict:
        return {"error": self.message, "details": self.details}


class SlotConflictError(BookingError):
    status_code = 409
    message = "Time slot already booked"

    def __init__(self, date: str = None, time: str = None):
        super().__init__()
        self.date = date
        self.time = time


class BookingNotFoundError(BookingError):
    status_code = 404
    message = "Booking not found"

    def __init__(self, booking_id: int = None):
        super().__init__()
        self.booking_id = booking_id
