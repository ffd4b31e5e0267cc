"""
Main API Router for the driving school admin core v1
Includes all endpoint routers
"""

from fastapi import APIRouter

from mtadmin.api.v1.endpoints import schools
from mtadmin.api.v1.endpoints import cars
from mtadmin.api.v1.endpoints import drivers
from mtadmin.api.v1.endpoints import courses
from mtadmin.api.v1.endpoints import services
from mtadmin.api.v1.endpoints import bookings
from mtadmin.api.v1.endpoints import booking_services
from mtadmin.api.v1.endpoints import payments
from mtadmin.api.v1.endpoints import holidays
from mtadmin.api.v1.endpoints import users

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(schools.router, prefix="/schools", tags=["Schools"])
api_router.include_router(cars.router, prefix="/cars", tags=["Cars"])
api_router.include_router(drivers.router, prefix="/drivers", tags=["Drivers"])
api_router.include_router(courses.router, prefix="/courses", tags=["Courses"])
api_router.include_router(services.router, prefix="/services", tags=["Services"])
api_router.include_router(services.school_service_router, prefix="/school-services", tags=["School Services"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
api_router.include_router(booking_services.router, prefix="/booking-services", tags=["Booking Services"])
api_router.include_router(booking_services.license_router, prefix="/license-applications", tags=["License Applications"])
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])
api_router.include_router(holidays.router, prefix="/holidays", tags=["Holidays"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
