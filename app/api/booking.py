from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.api.schemas import BookingUpdateSchema, WizardStateSchema
from app.application.exceptions import WizardNotFoundError, WizardStateError, WizardValidationError
from app.application.use_cases.booking_wizard import BookingWizardUseCase
from app.application.use_cases.complete_booking import CompleteBookingUseCase
from app.wiring.dependencies import get_booking_wizard_use_case, get_complete_booking_use_case

router = APIRouter(prefix="/api/booking")
logger = logging.getLogger(__name__)


def _drain_outbox(complete_booking: CompleteBookingUseCase) -> None:
    try:
        complete_booking.drain()
    except Exception as e:
        logger.exception("Background outbox drain failed", extra={"reason": str(e)})


@router.post("", response_model=WizardStateSchema)
def start_booking(uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case)):
    return WizardStateSchema.from_result(uc.start())


@router.get("/{session_id}", response_model=WizardStateSchema)
def get_booking(session_id: str, uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case)):
    try:
        result = uc.get(session_id)
    except WizardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return WizardStateSchema.from_result(result)


@router.patch("/{session_id}", response_model=WizardStateSchema)
def update_booking(
    session_id: str,
    req: BookingUpdateSchema,
    uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case),
):
    try:
        result = uc.update(session_id, req.to_changes())
    except WizardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WizardStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return WizardStateSchema.from_result(result)


@router.delete("/{session_id}", status_code=204)
def discard_booking(session_id: str, uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case)):
    try:
        uc.discard(session_id)
    except WizardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{session_id}/advance", response_model=WizardStateSchema)
def advance_booking(session_id: str, uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case)):
    try:
        result = uc.advance(session_id)
    except WizardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WizardValidationError as e:
        return JSONResponse(status_code=422, content={"detail": "Validation failed", "errors": e.errors})
    return WizardStateSchema.from_result(result)


@router.post("/{session_id}/retreat", response_model=WizardStateSchema)
def retreat_booking(session_id: str, uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case)):
    try:
        result = uc.retreat(session_id)
    except WizardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WizardStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return WizardStateSchema.from_result(result)


@router.post("/{session_id}/confirm", response_model=WizardStateSchema)
def confirm_booking(
    session_id: str,
    background_tasks: BackgroundTasks,
    uc: BookingWizardUseCase = Depends(get_booking_wizard_use_case),
    complete_booking: CompleteBookingUseCase = Depends(get_complete_booking_use_case),
):
    try:
        result = uc.confirm_payment(session_id)
    except WizardNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WizardStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if result.session.submitted:
        # Retry anything an earlier booking left owing
        background_tasks.add_task(_drain_outbox, complete_booking)
    return WizardStateSchema.from_result(result)
