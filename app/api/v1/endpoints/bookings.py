# app/api/v1/endpoints/bookings.py
from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api import deps
from app.core.tenants import TenantConfig
from app.db.sheets import SheetsClient, get_sheets
from app.schemas.reservation import (
    BookingCancel,
    BookingCreate,
    BookingCreated,
    BookingLookup,
    BookingResult,
    BookingUpdate,
    Reservation,
)
from app.services import booking_service

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_in: BookingCreate,
    tenant: TenantConfig = Depends(deps.get_tenant),
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
):
    """
    Book a seat on a published seminar.

    A second booking with an address that already holds a confirmed seat
    is not stored again: the existing reservation is returned with
    already_registered=true and the confirmation email is resent.
    """
    return booking_service.create_booking(
        sheets, tenant=tenant, master_id=master_id, booking_in=booking_in
    )


@router.get("/by-number", response_model=BookingLookup)
def read_booking_by_number(
    reservation_number: str = Query("", alias="number"),
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
):
    if not reservation_number.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A reservation number is required",
        )
    return booking_service.lookup_by_number(
        sheets, master_id=master_id, number=reservation_number
    )


@router.put("", response_model=Reservation)
def update_booking(
    booking_in: BookingUpdate,
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
):
    """Attendee edits their own details. Status and seat count are untouched."""
    return booking_service.update_booking(sheets, master_id=master_id, booking_in=booking_in)


@router.delete("", response_model=BookingResult)
def cancel_booking(
    booking_in: BookingCancel,
    tenant: TenantConfig = Depends(deps.get_tenant),
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
):
    return booking_service.cancel_booking(
        sheets, tenant=tenant, master_id=master_id, booking_in=booking_in
    )
