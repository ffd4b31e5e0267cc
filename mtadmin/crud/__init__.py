"""
Resource clients for the driving school admin core
Imports all CRUD classes for easy access
"""

from mtadmin.crud.base import CRUDBase
from mtadmin.crud.crud_school import CRUDSchool
from mtadmin.crud.crud_car import CRUDCar
from mtadmin.crud.crud_driver import CRUDDriver
from mtadmin.crud.crud_course import CRUDCourse, CRUDSyllabus
from mtadmin.crud.crud_service import CRUDService, CRUDSchoolService
from mtadmin.crud.crud_booking import CRUDBooking, CRUDBookingSession, CRUDBookingService
from mtadmin.crud.crud_payment import CRUDPayment, CRUDServicePayment
from mtadmin.crud.crud_holiday import CRUDHoliday
from mtadmin.crud.crud_license_application import CRUDLicenseApplication
from mtadmin.crud.crud_user import CRUDUser

# Import CRUD instances
from mtadmin.crud.crud_school import school
from mtadmin.crud.crud_car import car
from mtadmin.crud.crud_driver import driver
from mtadmin.crud.crud_course import course, syllabus
from mtadmin.crud.crud_service import service, school_service
from mtadmin.crud.crud_booking import booking, booking_session, booking_service
from mtadmin.crud.crud_payment import payment, service_payment
from mtadmin.crud.crud_holiday import holiday
from mtadmin.crud.crud_license_application import license_application
from mtadmin.crud.crud_user import user
