import datetime as dt
from typing import Any, Dict, List, Optional, Union

import requests

from appointment_widget.core.config import settings
from appointment_widget.core.logger import logger

DateLike = Union[dt.date, str]


class BookingApiError(Exception):
    """Any failed call to the booking API, carrying a message fit for the user."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[list] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or []


def format_date(value: DateLike) -> str:
    if isinstance(value, dt.datetime):
        value = value.date()
    if isinstance(value, dt.date):
        return value.isoformat()
    return value


class BookingApiClient:
    """Thin requests wrapper around the /api/bookings endpoints."""

    def __init__(self, base_url: str = None, timeout: float = None, session: requests.Session = None):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.API_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def _request(self, method: str, path: str, failure: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"❌ {method} {url} failed: {e}")
            raise BookingApiError(failure) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.ok:
            if body is None:
                logger.error(f"❌ {method} {url} -> {response.status_code} with a non-JSON body")
                raise BookingApiError(failure, response.status_code)
            return body

        logger.warning(f"⚠️ {method} {url} -> {response.status_code}: {body}")
        details = body.get("details") if isinstance(body, dict) else None
        raise BookingApiError(failure, response.status_code, details)

    @staticmethod
    def _field(result: Any, key: str, failure: str, kind: type = object) -> Any:
        """Reads `key` from a decoded response body, raising BookingApiError if it is not there."""
        if not isinstance(result, dict) or not isinstance(result.get(key), kind):
            logger.error(f"❌ Unexpected response body, missing '{key}': {result}")
            raise BookingApiError(failure)
        return result[key]

    def create_booking(self, data: Dict[str, Any]) -> Dict[str, Any]:
        payload = {
            "fullName": data.get("fullName"),
            "contactNumber": data.get("contactNumber"),
            "email": data.get("email"),
            "service": data.get("service"),
            "date": format_date(data["date"]) if data.get("date") else None,
            "time": data.get("time"),
        }
        try:
            result = self._request("POST", "/bookings", "Failed to create booking. Please try again.", json=payload)
        except BookingApiError as e:
            if e.status_code == 409:
                e.message = "This time slot has just been booked. Please choose another time."
            elif e.status_code == 400:
                e.message = "Some booking details are invalid. Please check the form and try again."
            e.args = (e.message,)
            raise
        return self._field(result, "booking", "Failed to create booking. Please try again.", dict)

    def list_bookings(self) -> List[Dict[str, Any]]:
        result = self._request("GET", "/bookings", "Failed to fetch bookings.")
        if not isinstance(result, list):
            logger.error(f"❌ Unexpected bookings list: {result}")
            raise BookingApiError("Failed to fetch bookings.")
        return result

    def check_availability(self, date: DateLike, time: str) -> bool:
        result = self._request(
            "GET", "/bookings/availability", "Failed to check availability.",
            params={"date": format_date(date), "time": time},
        )
        return self._field(result, "available", "Failed to check availability.", bool)

    def booked_slots(self, date: DateLike) -> List[str]:
        result = self._request(
            "GET", "/bookings/slots", "Failed to check availability.",
            params={"date": format_date(date)},
        )
        return list(self._field(result, "booked", "Failed to check availability.", list))

    def delete_booking(self, booking_id: int) -> None:
        try:
            self._request("DELETE", f"/bookings/{booking_id}", "Failed to delete booking.")
        except BookingApiError as e:
            if e.status_code == 404:
                e.message = "Booking not found."
                e.args = (e.message,)
            raise
