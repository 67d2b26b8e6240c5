from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Path, Request, status
from fastapi.responses import JSONResponse

from appointment_widget.models.booking import Booking
from appointment_widget.services.booking_service import BookingService

router = APIRouter()

# Largest id a 64-bit INTEGER column can hold
MAX_BOOKING_ID = 2**63 - 1


def get_booking_service(request: Request) -> BookingService:
    return BookingService(request.app.state.store)


@router.post("/bookings", status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: Dict[str, Any] = Body(...),
    service: BookingService = Depends(get_booking_service),
):
    booking = await service.create_booking(payload)
    return {
        "message": "Booking created successfully",
        "booking": booking.model_dump(mode="json"),
    }


@router.get("/bookings", response_model=List[Booking])
async def list_bookings(service: BookingService = Depends(get_booking_service)):
    return await service.list_bookings()


@router.get("/bookings/availability")
async def check_availability(
    date: Optional[str] = None,
    time: Optional[str] = None,
    service: BookingService = Depends(get_booking_service),
):
    if not date or not time:
        return JSONResponse(status_code=400, content={"error": "Date and time are required"})
    available = await service.check_availability(date, time)
    return {"available": available}


@router.get("/bookings/slots")
async def booked_slots(
    date: Optional[str] = None,
    service: BookingService = Depends(get_booking_service),
):
    if not date:
        return JSONResponse(status_code=400, content={"error": "Date is required"})
    booked = await service.booked_slots(date)
    return {"date": date, "booked": booked}


@router.delete("/bookings/{booking_id}")
async def delete_booking(
    booking_id: int = Path(..., ge=1, le=MAX_BOOKING_ID),
    service: BookingService = Depends(get_booking_service),
):
    await service.delete_booking(booking_id)
    return {"message": "Booking deleted successfully"}
