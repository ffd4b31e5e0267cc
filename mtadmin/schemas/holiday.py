"""
Holiday Schemas
School-wide or single-car holidays, optionally limited to particular slots
"""

from datetime import date
from typing import List, Optional

from pydantic import Field, validator

from mtadmin.models.enums import HolidayDeclarationType
from mtadmin.schemas.common import WireModel, decode_string_list, encode_string_list
from mtadmin.schemas.rules import check_choice, check_min_length, parse_iso_date

ONE_CAR_TYPES = {
    HolidayDeclarationType.ONE_CAR_MULTIPLE_DATES.value,
    HolidayDeclarationType.ONE_CAR_PARTICULAR_SLOTS.value,
}
PARTICULAR_SLOT_TYPES = {
    HolidayDeclarationType.ALL_CARS_PARTICULAR_SLOTS.value,
    HolidayDeclarationType.ONE_CAR_PARTICULAR_SLOTS.value,
}


class HolidayCarRef(WireModel):
    id: int
    car_id: Optional[str] = None
    car_name: Optional[str] = None
    model: Optional[str] = None
    registration_number: Optional[str] = None


class Holiday(WireModel):
    id: int
    school_id: Optional[int] = None
    declaration_type: Optional[HolidayDeclarationType] = None
    car_id: Optional[int] = None
    car: Optional[HolidayCarRef] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    slots: List[str] = Field(default_factory=list)
    reason: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    deleted_at: Optional[str] = None

    @validator('slots', pre=True)
    def decode_slots(cls, v):
        return decode_string_list(v)


class HolidayFilter(WireModel):
    school_id: Optional[int] = None
    car_id: Optional[int] = None
    declaration_type: Optional[HolidayDeclarationType] = None
    status: Optional[str] = None


def encode_slots(v):
    # Empty slot lists are not sent
    slots = decode_string_list(v)
    if not slots:
        return None
    return encode_string_list(slots)


class HolidayCreate(WireModel):
    school_id: int
    declaration_type: HolidayDeclarationType
    car_id: Optional[int] = None
    start_date: str
    end_date: str
    slots: Optional[str] = None
    reason: str

    @validator('slots', pre=True)
    def encode_slot_list(cls, v):
        return encode_slots(v)


class HolidayUpdate(WireModel):
    declaration_type: Optional[HolidayDeclarationType] = None
    car_id: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    slots: Optional[str] = None
    reason: Optional[str] = None
    status: Optional[str] = None

    @validator('slots', pre=True)
    def encode_slot_list(cls, v):
        return encode_slots(v)

    @validator('start_date', 'end_date')
    def validate_dates(cls, v):
        if v is not None:
            parse_iso_date(v, "Date must be a valid date (YYYY-MM-DD)")
        return v

    @validator('end_date')
    def end_not_before_start(cls, v, values):
        start = values.get('start_date')
        if v is not None and start is not None and v[:10] < start[:10]:
            raise ValueError("End date cannot be before start date")
        return v


class HolidayForm(WireModel):
    """
    Holiday declaration form.

    ONE_CAR_* declarations need a car; *_PARTICULAR_SLOTS declarations need at least one slot.
    The first date of the range may not lie in the past.
    """
    declaration_type: str
    car_id: Optional[int] = Field(None, validate_default=True)
    date_range: List[str]
    slots: List[str] = Field(default_factory=list, validate_default=True)
    reason: str

    @validator('car_id', pre=True)
    def blank_car(cls, v):
        if v in ("", 0):
            return None
        return v

    @validator('slots', pre=True)
    def null_slots(cls, v):
        return v or []

    @validator('declaration_type')
    def validate_declaration_type(cls, v):
        return check_choice(v, HolidayDeclarationType, "Please select a declaration type")

    @validator('car_id')
    def car_required_for_one_car(cls, v, values):
        if values.get('declaration_type') in ONE_CAR_TYPES and v is None:
            raise ValueError("Select a car")
        return v

    @validator('date_range')
    def validate_date_range(cls, v):
        if len(v) < 1:
            raise ValueError("Please select at least one date")
        days = [parse_iso_date(day, "Select date range") for day in v]
        start, end = days[0], days[1] if len(days) > 1 else days[0]
        if end < start:
            raise ValueError("End date cannot be before start date")
        if start < date.today():
            raise ValueError("Please select future dates only. Past dates are not allowed.")
        return v

    @validator('slots')
    def slots_required_for_particular_slots(cls, v, values):
        if values.get('declaration_type') in PARTICULAR_SLOT_TYPES and not v:
            raise ValueError("Please select at least one slot")
        return v

    @validator('reason')
    def validate_reason(cls, v):
        return check_min_length(v, 3, "Reason should be at least 3 characters")

    def to_create(self, school_id: int) -> HolidayCreate:
        start_date = self.date_range[0]
        end_date = self.date_range[1] if len(self.date_range) > 1 else self.date_range[0]
        optional = {}
        if self.car_id is not None:
            optional["car_id"] = self.car_id
        if self.slots:
            optional["slots"] = self.slots
        return HolidayCreate(
            school_id=school_id,
            declaration_type=self.declaration_type,
            start_date=start_date,
            end_date=end_date,
            reason=self.reason,
            **optional,
        )
