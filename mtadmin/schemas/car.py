"""
Car Schemas
"""

from typing import Optional
from pydantic import validator

from mtadmin.models.enums import CarStatus, FuelType, Transmission
from mtadmin.schemas.common import WireModel
from mtadmin.schemas.rules import (
    DECIMAL_RE, FOUR_DIGIT_YEAR_RE, INTEGER_RE,
    blank_to_none, check_choice, check_min_length, check_pattern, to_float, to_int,
)


class CarAdmin(WireModel):
    id: int
    name: Optional[str] = None
    manufacturer: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None


class AssignedDriver(WireModel):
    id: int
    driver_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    status: Optional[str] = None


class Car(WireModel):
    id: int
    school_id: Optional[int] = None
    car_id: Optional[str] = None
    car_admin_id: Optional[int] = None
    car_admin: Optional[CarAdmin] = None
    car_name: Optional[str] = None
    model: Optional[str] = None
    registration_number: Optional[str] = None
    year: Optional[int] = None
    color: Optional[str] = None
    fuel_type: Optional[FuelType] = None
    transmission: Optional[Transmission] = None
    seating_capacity: Optional[int] = None
    engine_number: Optional[str] = None
    chassis_number: Optional[str] = None
    purchase_date: Optional[str] = None
    purchase_cost: Optional[float] = None
    current_mileage: Optional[float] = None
    insurance_number: Optional[str] = None
    insurance_expiry: Optional[str] = None
    puc_expiry: Optional[str] = None
    fitness_expiry: Optional[str] = None
    last_service_date: Optional[str] = None
    next_service_date: Optional[str] = None
    assigned_driver_id: Optional[int] = None
    assigned_driver: Optional[AssignedDriver] = None
    total_bookings: Optional[int] = None
    status: Optional[CarStatus] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CarFilter(WireModel):
    school_id: Optional[int] = None
    status: Optional[CarStatus] = None
    fuel_type: Optional[FuelType] = None
    assigned_driver_id: Optional[int] = None
    search: Optional[str] = None


class CarCreate(WireModel):
    school_id: int
    car_id: str
    car_name: str
    model: str
    registration_number: str
    year: int
    color: str
    fuel_type: FuelType
    transmission: Transmission
    seating_capacity: Optional[int] = None
    engine_number: Optional[str] = None
    chassis_number: Optional[str] = None
    purchase_date: Optional[str] = None
    purchase_cost: Optional[float] = None
    current_mileage: Optional[float] = None
    insurance_number: Optional[str] = None
    insurance_expiry: Optional[str] = None
    puc_expiry: Optional[str] = None
    fitness_expiry: Optional[str] = None
    last_service_date: Optional[str] = None
    next_service_date: Optional[str] = None
    assigned_driver_id: Optional[int] = None


class CarUpdate(WireModel):
    car_name: Optional[str] = None
    model: Optional[str] = None
    registration_number: Optional[str] = None
    year: Optional[int] = None
    color: Optional[str] = None
    fuel_type: Optional[FuelType] = None
    transmission: Optional[Transmission] = None
    seating_capacity: Optional[int] = None
    engine_number: Optional[str] = None
    chassis_number: Optional[str] = None
    purchase_date: Optional[str] = None
    purchase_cost: Optional[float] = None
    current_mileage: Optional[float] = None
    insurance_number: Optional[str] = None
    insurance_expiry: Optional[str] = None
    puc_expiry: Optional[str] = None
    fitness_expiry: Optional[str] = None
    last_service_date: Optional[str] = None
    next_service_date: Optional[str] = None
    assigned_driver_id: Optional[int] = None
    status: Optional[CarStatus] = None


_OPTIONAL_CAR_FIELDS = (
    'seating_capacity', 'engine_number', 'chassis_number', 'purchase_date', 'purchase_cost',
    'current_mileage', 'insurance_number', 'insurance_expiry', 'puc_expiry', 'fitness_expiry',
    'last_service_date', 'next_service_date', 'assigned_driver_id',
)


class EditCarForm(WireModel):
    """Car edit form; numeric fields stay strings until converted"""
    car_id: Optional[str] = None
    car_name: str
    model: str
    registration_number: str
    year: str
    color: str
    fuel_type: str
    transmission: str
    seating_capacity: Optional[str] = None
    engine_number: Optional[str] = None
    chassis_number: Optional[str] = None
    purchase_date: Optional[str] = None
    purchase_cost: Optional[str] = None
    current_mileage: Optional[str] = None
    insurance_number: Optional[str] = None
    insurance_expiry: Optional[str] = None
    puc_expiry: Optional[str] = None
    fitness_expiry: Optional[str] = None
    last_service_date: Optional[str] = None
    next_service_date: Optional[str] = None
    assigned_driver_id: Optional[str] = None
    status: Optional[str] = None

    @validator('status', *_OPTIONAL_CAR_FIELDS, pre=True)
    def blank_optional(cls, v):
        v = blank_to_none(v)
        # Number inputs may arrive as numbers
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @validator('car_name')
    def validate_car_name(cls, v):
        return check_min_length(v, 2, "Car name must be at least 2 characters")

    @validator('model')
    def validate_model(cls, v):
        return check_min_length(v, 2, "Model must be at least 2 characters")

    @validator('registration_number')
    def validate_registration_number(cls, v):
        return check_min_length(v, 5, "Registration number must be at least 5 characters")

    @validator('year', pre=True)
    def validate_year(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        return check_pattern(v, FOUR_DIGIT_YEAR_RE, "Year must be a valid 4-digit number")

    @validator('color')
    def validate_color(cls, v):
        return check_min_length(v, 1, "Color is required")

    @validator('fuel_type')
    def validate_fuel_type(cls, v):
        return check_choice(v, FuelType, "Fuel type is required")

    @validator('transmission')
    def validate_transmission(cls, v):
        return check_choice(v, Transmission, "Transmission type is required")

    @validator('seating_capacity')
    def validate_seating_capacity(cls, v):
        if v is None:
            return v
        return check_pattern(v, INTEGER_RE, "Seating capacity must be a number")

    @validator('purchase_cost')
    def validate_purchase_cost(cls, v):
        if v is None:
            return v
        return check_pattern(v, DECIMAL_RE, "Purchase cost must be a valid number")

    @validator('current_mileage')
    def validate_current_mileage(cls, v):
        if v is None:
            return v
        return check_pattern(v, INTEGER_RE, "Current mileage must be a number")

    @validator('assigned_driver_id')
    def validate_assigned_driver_id(cls, v):
        if v is None:
            return v
        return check_pattern(v, INTEGER_RE, "Please select a valid driver")

    @validator('status')
    def validate_status(cls, v):
        if v is None:
            return v
        return check_choice(v, CarStatus, "Please select a valid status")

    def _numeric_values(self) -> dict:
        values = self.model_dump(exclude_none=True, exclude={'car_id'})
        for key in ('seating_capacity', 'assigned_driver_id', 'year'):
            if key in values:
                values[key] = to_int(values[key])
        for key in ('purchase_cost', 'current_mileage'):
            if key in values:
                values[key] = to_float(values[key])
        return values

    def to_update(self) -> CarUpdate:
        return CarUpdate(**self._numeric_values())


class AddCarForm(EditCarForm):
    """Car add form; carId is required and there is no status"""
    car_id: str

    @validator('car_id')
    def validate_car_id(cls, v):
        return check_min_length(v, 3, "Car ID must be at least 3 characters")

    @validator('status')
    def no_status_on_create(cls, v):
        return None

    def to_create(self, school_id: int) -> CarCreate:
        values = self._numeric_values()
        values.pop('status', None)
        return CarCreate(school_id=school_id, car_id=self.car_id, **values)
