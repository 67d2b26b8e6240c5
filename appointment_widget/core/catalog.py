import re

# Half-hour slots offered by the widget, 09:00 - 17:30
TIME_SLOTS = [
    "09:00", "09:30", "10:00", "10:30", "11:00", "11:30",
    "12:00", "12:30", "13:00", "13:30", "14:00", "14:30",
    "15:00", "15:30", "16:00", "16:30", "17:00", "17:30",
]

SERVICES = [
    "Pet Grooming",
    "Veterinary Checkup",
    "Pet Vaccination",
    "Pet Dental Care",
    "Pet Nail Trimming",
    "Pet Bathing",
    "Pet Training Session",
    "Pet Boarding Consultation",
    "Pet Health Consultation",
    "Emergency Pet Care",
    "Pet Surgery Consultation",
    "Other Pet Services",
]

# Shared by the store-side model and the widget form; digits are ASCII only
PHONE_RE = re.compile(r"^\+?[\d\s\-\(\)]{10,15}$", re.ASCII)
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TIME_RE = re.compile(r"^\d{2}:\d{2}$", re.ASCII)
DATE_FORMAT = "%Y-%m-%d"

# Column widths of the bookings table
FULL_NAME_MAX = 100
CONTACT_NUMBER_MAX = 16
EMAIL_MAX = 50
SERVICE_MAX = 100


def is_valid_phone(value: str) -> bool:
    return bool(PHONE_RE.fullmatch(value or ""))


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.fullmatch(value or ""))
