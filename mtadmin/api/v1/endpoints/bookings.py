"""
Booking Endpoints
Booking list and detail, booking creation, and amendments to booked dates
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from mtadmin import crud
from mtadmin.api.deps import get_pagination, get_request_context, get_transport
from mtadmin.core.exceptions import FormValidationError
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import BookingStatus
from mtadmin.schemas.amendment import AmendmentForm, AmendmentOutcome, AmendmentRequest, BookingDate, HoldRequest
from mtadmin.schemas.booking import (
    Booking, BookingCreationResult, BookingFilter, BookingForm, BookingSession, BookingSessionUpdate,
)
from mtadmin.schemas.common import Page, RequestContext, SearchPagination
from mtadmin.schemas.rules import parse_iso_date, validate_form
from mtadmin.services.amendment_service import AmendmentService
from mtadmin.services.booking_creation import BookingCreationService
from mtadmin.services.booking_rules import booking_dates, legal_actions, rollup_status, rollup_to_booking_status

router = APIRouter()


@router.get("/", response_model=Page[Booking])
def list_bookings(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    pagination: SearchPagination = Depends(get_pagination),
    booking_status: Optional[BookingStatus] = Query(None, alias="status", description="Filter by status"),
    customer_mobile: Optional[str] = Query(None, alias="customerMobile"),
    car_id: Optional[int] = Query(None, alias="carId", gt=0),
):
    where = BookingFilter(
        school_id=context.require_school(),
        status=booking_status,
        customer_mobile=customer_mobile,
        car_id=car_id,
    )
    return crud.booking.get_paginated(transport, pagination=pagination, where=where).unwrap()


@router.post("/lookup", response_model=List[Booking])
def lookup_bookings(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    form_in: Dict[str, Any] = Body(...),
):
    """
    Find bookings to amend, by customer mobile or by booking reference
    """
    form = validate_form(AmendmentForm, form_in)
    if form.search_method == "mobile":
        if not form.customer_mobile:
            raise FormValidationError({"customerMobile": "Please enter a mobile number"})
        where = BookingFilter(school_id=context.require_school(), customer_mobile=form.customer_mobile)
    else:
        if not form.booking_id:
            raise FormValidationError({"bookingId": "Please enter a booking ID"})
        where = BookingFilter(school_id=context.require_school(), booking_id=form.booking_id)
    return crud.booking.get_all(transport, where=where).unwrap()


@router.get("/{booking_id}", response_model=Booking)
def get_booking(*, transport: GraphQLTransport = Depends(get_transport), booking_id: int):
    """Booking with sessions, customer, car, course and attached services"""
    return crud.booking.get(transport, booking_id).unwrap()


@router.get("/{booking_id}/sessions", response_model=List[BookingSession])
def list_booking_sessions(*, transport: GraphQLTransport = Depends(get_transport), booking_id: int):
    return crud.booking_session.get_by_booking(transport, booking_id).unwrap()


@router.get("/{booking_id}/dates", response_model=List[BookingDate])
def list_booking_dates(*, transport: GraphQLTransport = Depends(get_transport), booking_id: int):
    """Sessions reduced to scheduled / completed / cancelled dates"""
    sessions = crud.booking_session.get_by_booking(transport, booking_id).unwrap()
    return booking_dates(sessions)


@router.get("/{booking_id}/actions")
def get_legal_actions(*, transport: GraphQLTransport = Depends(get_transport), booking_id: int):
    """Amendment actions currently possible for the booking"""
    sessions = crud.booking_session.get_by_booking(transport, booking_id).unwrap()
    return {"bookingId": booking_id, "actions": [action.value for action in legal_actions(booking_dates(sessions))]}


@router.get("/{booking_id}/rollup")
def get_rollup(*, transport: GraphQLTransport = Depends(get_transport), booking_id: int):
    """Roll-up of the booking's dates and the booking status it implies"""
    booking = crud.booking.get(transport, booking_id).unwrap()
    sessions = crud.booking_session.get_by_booking(transport, booking_id).unwrap()
    rollup = rollup_status(booking_dates(sessions))
    return {
        "bookingId": booking.id,
        "rollupStatus": rollup.value,
        "bookingStatus": booking.status,
        "expectedBookingStatus": rollup_to_booking_status(rollup, booking.status).value,
    }


@router.post("/", response_model=BookingCreationResult, status_code=status.HTTP_201_CREATED)
def create_booking(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    form_in: Dict[str, Any] = Body(...),
):
    """
    Create a booking with its services, sessions and optional advance payment.

    `sessionDates` may carry dates already planned for the course; otherwise they are
    planned from the booking date, skipping holidays and taken slots.
    """
    form = validate_form(BookingForm, form_in)
    session_dates = form_in.get("sessionDates")
    if session_dates is not None:
        if not isinstance(session_dates, list):
            raise FormValidationError({"sessionDates": "Session dates must be a list of dates"})
        try:
            session_dates = [
                parse_iso_date(day, "Session dates must be valid dates (YYYY-MM-DD)").isoformat()
                for day in session_dates
            ]
        except ValueError as exc:
            raise FormValidationError({"sessionDates": str(exc)})
    return BookingCreationService(transport, context).create(form, session_dates=session_dates)


@router.post("/{booking_id}/amend", response_model=AmendmentOutcome)
def amend_booking(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    booking_id: int,
    form_in: Dict[str, Any] = Body(...),
):
    """
    Cancel, move, or release booked dates; the booking status follows the new roll-up
    """
    request = validate_form(AmendmentRequest, {**form_in, "bookingId": booking_id})
    return AmendmentService(transport, context).process(request)


@router.post("/{booking_id}/hold", response_model=AmendmentOutcome)
def hold_booking_dates(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    booking_id: int,
    form_in: Dict[str, Any] = Body(...),
):
    request = validate_form(HoldRequest, form_in)
    return AmendmentService(transport, context).place_hold(booking_id, request)


@router.put("/sessions/{session_id}")
def update_booking_session(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    session_id: int,
    session_in: BookingSessionUpdate,
):
    """Update one session (attendance, notes, status); the booking status is recomputed"""
    session, outcome = AmendmentService(transport, context).update_session(session_id, session_in)
    return {
        "session": session.model_dump(by_alias=True, mode="json"),
        "outcome": outcome.model_dump(by_alias=True, mode="json"),
    }
