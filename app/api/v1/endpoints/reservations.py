# app/api/v1/endpoints/reservations.py
from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.crud import crud_reservation
from app.db.sheets import SheetsClient, get_sheets
from app.schemas.reservation import ReservationList
from app.schemas.token import AdminTokenPayload
from app.services import seminar_service

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.get("", response_model=ReservationList)
def list_reservations(
    seminar_id: str = Query(..., min_length=1),
    master_id: str = Depends(deps.get_master_id),
    sheets: SheetsClient = Depends(get_sheets),
    admin: AdminTokenPayload = Depends(deps.require_admin),
):
    """
    Every reservation row of a seminar, cancelled ones included.
    """
    _, seminar = seminar_service.get_seminar_or_404(sheets, master_id=master_id, id=seminar_id)
    spreadsheet_id = seminar_service.require_spreadsheet(seminar)
    reservations = crud_reservation.reservation.get_multi(sheets, spreadsheet_id=spreadsheet_id)
    return ReservationList(seminar_id=seminar.id, reservations=reservations)
