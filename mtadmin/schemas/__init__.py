"""
Pydantic schemas for wire payloads, client inputs and forms
"""

# Shared
from mtadmin.schemas.common import (
    WireModel, RequestContext, SearchPagination, Page, DeleteResult, ApiResult,
    decode_string_list, encode_string_list
)
from mtadmin.schemas.rules import validate_form, error_map

# School schemas
from mtadmin.schemas.school import (
    School, SchoolFilter, SchoolCreate, SchoolUpdate, AddSchoolForm, SchoolProfileForm
)

# Car schemas
from mtadmin.schemas.car import Car, CarFilter, CarCreate, CarUpdate, AddCarForm, EditCarForm

# Driver schemas
from mtadmin.schemas.driver import (
    Driver, DriverWithHistory, LeaveHistory, SalaryHistory,
    DriverFilter, DriverCreate, DriverUpdate, AddDriverForm
)

# Course schemas
from mtadmin.schemas.course import (
    Course, CourseFilter, CourseCreate, CourseUpdate, AddCourseForm, EditCourseForm
)
from mtadmin.schemas.syllabus import (
    Syllabus, SyllabusFilter, SyllabusCreate, SyllabusUpdate, SyllabusForm
)

# Service schemas
from mtadmin.schemas.service import (
    Service, ServiceFilter, ServiceCreate, ServiceUpdate, AddServiceForm, EditServiceForm,
    SchoolService, SchoolServiceFilter, SchoolServiceCreate, SchoolServiceUpdate,
    SchoolServiceForm, EditSchoolServiceForm
)

# Booking schemas
from mtadmin.schemas.booking import (
    Booking, BookingFilter, BookingCreate, BookingUpdate, BookingForm, SelectedService,
    BookingSession, BookingSessionFilter, BookingSessionCreate, BookingSessionUpdate,
    BookingServiceItem, BookingServiceFilter, BookingServiceCreate, BookingCreationResult
)
from mtadmin.schemas.amendment import (
    BookingDate, AmendmentRequest, AmendmentOutcome, AmendmentForm, HoldRequest
)

# Payment schemas
from mtadmin.schemas.payment import (
    Payment, PaymentFilter, PaymentCreate,
    ServicePayment, ServicePaymentFilter, ServicePaymentCreate
)

# Holiday / license / user schemas
from mtadmin.schemas.holiday import Holiday, HolidayFilter, HolidayCreate, HolidayUpdate, HolidayForm
from mtadmin.schemas.license_application import (
    LicenseApplication, LicenseApplicationFilter, LicenseApplicationCreate, LicenseApplicationUpdate
)
from mtadmin.schemas.user import User, UserFilter, UserCreate, UserUpdate
