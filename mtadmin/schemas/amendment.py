"""
Amendment Schemas
Booking dates as seen by the amendment rules, the amendment request and the amendment form
"""

from datetime import date
from typing import List, Optional

from pydantic import Field, validator

from mtadmin.models.enums import AmendmentAction, BookingDateStatus, BookingRollupStatus, BookingStatus
from mtadmin.schemas.common import WireModel
from mtadmin.schemas.rules import LOOSE_PHONE_RE, blank_to_none, check_choice, check_min_length, check_pattern


class BookingDate(WireModel):
    """One dated session of a booking, reduced to what the amendment rules need"""
    id: int
    date: str
    status: BookingDateStatus
    held: bool = False
    cancel_reason: Optional[str] = None
    cancelled_at: Optional[str] = None


class AmendmentRequest(WireModel):
    """
    An amendment on one booking.

    session_ids targets booking dates (sessions) by id; an empty list means every date
    the action applies to. new_dates are replacement dates (YYYY-MM-DD), paired in order
    with the targeted dates.
    """
    booking_id: int = Field(..., gt=0)
    action: AmendmentAction
    session_ids: List[int] = Field(default_factory=list)
    new_dates: List[str] = Field(default_factory=list)
    reason: str

    @validator('new_dates', each_item=True)
    def validate_new_date(cls, v):
        try:
            date.fromisoformat(v)
        except ValueError:
            raise ValueError("Dates must use the YYYY-MM-DD format")
        return v


class HoldRequest(WireModel):
    session_ids: List[int] = Field(..., min_length=1)
    reason: str


class AmendmentOutcome(WireModel):
    """Result of a processed amendment"""
    booking_id: int
    action: Optional[AmendmentAction] = None  # None for holds and single-session updates
    cancelled_session_ids: List[int] = Field(default_factory=list)
    created_session_ids: List[int] = Field(default_factory=list)
    updated_session_ids: List[int] = Field(default_factory=list)
    rollup_status: BookingRollupStatus
    booking_status: BookingStatus


class AmendmentForm(WireModel):
    """Booking lookup plus the chosen amendment, as filled in on the amendment page"""
    search_method: str
    customer_mobile: Optional[str] = None
    booking_id: Optional[str] = None
    selected_booking_id: Optional[str] = None
    amendment_action: Optional[str] = None
    selected_dates: List[str] = Field(default_factory=list)
    new_date: Optional[str] = None
    reason: Optional[str] = None

    @validator('customer_mobile', 'booking_id', 'selected_booking_id',
               'amendment_action', 'new_date', 'reason', pre=True)
    def blank_optional(cls, v):
        return blank_to_none(v)

    @validator('search_method')
    def validate_search_method(cls, v):
        if v not in ("mobile", "bookingId"):
            raise ValueError("Please choose how to search for the booking")
        return v

    @validator('customer_mobile')
    def validate_customer_mobile(cls, v):
        if v is None:
            return v
        check_min_length(v, 10, "Mobile number must be at least 10 digits")
        return check_pattern(v, LOOSE_PHONE_RE, "Please enter a valid mobile number")

    @validator('booking_id')
    def validate_booking_id(cls, v):
        if v is None:
            return v
        return check_min_length(v, 1, "Please enter a booking ID")

    @validator('amendment_action')
    def validate_amendment_action(cls, v):
        if v is None:
            return v
        return check_choice(v, AmendmentAction, "Please select a valid amendment action")
