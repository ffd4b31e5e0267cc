"""
Booking creation
Creates a booking and everything that hangs off it: attached services, license
applications for NEW_LICENSE services, one session per planned date and the optional
advance payment
"""

from datetime import date
from typing import Callable, List, Optional
import logging
import random
import time

from mtadmin import crud
from mtadmin.core.exceptions import FormValidationError, MTAdminError
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import ServiceCategory
from mtadmin.schemas.booking import BookingCreate, BookingCreationResult, BookingForm, BookingServiceCreate, BookingSessionCreate
from mtadmin.schemas.car import Car
from mtadmin.schemas.common import RequestContext
from mtadmin.schemas.holiday import Holiday, HolidayFilter
from mtadmin.schemas.payment import PaymentCreate
from mtadmin.schemas.user import User, UserCreate
from mtadmin.services.audit_service import create_user_context, get_audit_service
from mtadmin.services.booking_rules import booking_total, split_discount
from mtadmin.services.scheduling import is_holiday, plan_session_dates

logger = logging.getLogger(__name__)

ADVANCE_PAYMENT_NOTE = "Advance payment during booking"


def epoch_ms() -> int:
    return int(time.time() * 1000)


def generate_booking_reference() -> str:
    """BK<epoch-ms><0-999>"""
    return f"BK{epoch_ms()}{random.randint(0, 999)}"


def advance_payment_number(booking_id: int) -> str:
    """PAY<bookingId>1<epoch-ms>: first installment of the booking"""
    return f"PAY{booking_id}1{epoch_ms()}"


class BookingCreationService:
    """
    Runs the booking creation flow against the backend.

    The booking itself must be created; every later step is attempted and its failure
    is reported as a warning on the result.
    """

    def __init__(self, transport: GraphQLTransport, context: RequestContext):
        self.transport = transport
        self.context = context
        self.audit = get_audit_service()

    def find_or_create_customer(self, form: BookingForm) -> User:
        """Customer by mobile number; a new USER is created when a name was given"""
        found = crud.user.search_by_contact(self.transport, form.customer_mobile).unwrap()
        if found is not None:
            return found
        if not form.customer_name:
            raise FormValidationError({"customerMobile": "No customer found for this mobile number"})
        logger.info(f"Creating customer for {form.customer_mobile}")
        created = crud.user.create(self.transport, obj_in=UserCreate(
            name=form.customer_name,
            contact1=form.customer_mobile,
            email=form.customer_email,
            school_id=self.context.require_school(),
        )).unwrap()
        self.audit.log_mutation("CREATE", "USER", created.id, create_user_context(self.context))
        return created

    def slot_checker(self, car_id: int, slot: str, holidays: List[Holiday]) -> Callable[[date], bool]:
        def is_available(day: date) -> bool:
            if is_holiday(holidays, day, car_id=car_id, slot=slot):
                return False
            return crud.booking_session.is_slot_available(
                self.transport, car_id=car_id, session_date=day.isoformat(), slot=slot
            ).unwrap()
        return is_available

    def plan_dates(self, form: BookingForm, car: Car, course_days: int) -> List[str]:
        """Session dates for the course: weekly holiday, declared holidays and taken slots skipped"""
        school_id = self.context.require_school()
        school = crud.school.get(self.transport, school_id).unwrap()
        holidays = crud.holiday.get_all(self.transport, where=HolidayFilter(school_id=school_id)).unwrap()
        return plan_session_dates(
            form.booking_date,
            course_days,
            weekly_holiday=school.weekly_holiday,
            is_available=self.slot_checker(car.id, form.slot, holidays),
        )

    def create(self, form: BookingForm, session_dates: Optional[List[str]] = None) -> BookingCreationResult:
        """
        Create a booking from a validated booking form.

        session_dates may carry dates already planned (and shown to the admin);
        otherwise they are planned here.
        """
        school_id = self.context.require_school()
        car_id = int(form.car_id)
        car = crud.car.get(self.transport, car_id).unwrap()
        course = crud.course.get(self.transport, form.course_id).unwrap()
        customer = self.find_or_create_customer(form)

        if session_dates is None:
            session_dates = self.plan_dates(form, car, course.course_days or 0)

        services = form.selected_services
        total = booking_total(
            form.course_price,
            [s.addon_price for s in services],
            form.booking_discount,
            form.service_discount,
        )
        if abs(float(total) - form.total_amount) >= 0.01:
            logger.warning(f"Submitted total {form.total_amount} differs from computed {total}; using computed")

        created = crud.booking.create(self.transport, obj_in=BookingCreate(
            school_id=school_id,
            booking_id=generate_booking_reference(),
            car_id=car_id,
            car_name=form.car_name or car.car_name,
            slot=form.slot,
            booking_date=form.booking_date,
            customer_mobile=form.customer_mobile,
            customer_name=form.customer_name or customer.name,
            customer_email=form.customer_email or customer.email,
            customer_id=customer.id,
            course_id=form.course_id,
            course_name=form.course_name or course.course_name,
            course_price=form.course_price,
            total_amount=float(total),
            discount=form.booking_discount or 0,
            notes=form.notes,
        )).unwrap()
        logger.info(f"Created booking {created.booking_id} (id {created.id})")

        result = BookingCreationResult(booking=created, total_amount=float(total), session_dates=session_dates)
        self._attach_services(form, created.id, customer.id, result)
        self._create_sessions(form, car, created.id, session_dates, result)
        if form.advance_amount:
            self._record_advance(created.id, form.advance_amount, result)

        self.audit.log_mutation(
            "CREATE", "BOOKING", created.id, create_user_context(self.context),
            new_values={"bookingId": created.booking_id, "totalAmount": float(total)},
            warning_messages=result.warnings,
        )
        return result

    def _attach_services(self, form: BookingForm, booking_id: int, customer_id: int, result: BookingCreationResult):
        shares = split_discount(form.service_discount, len(form.selected_services))
        for selected, share in zip(form.selected_services, shares):
            try:
                item = crud.booking_service.create(self.transport, obj_in=BookingServiceCreate(
                    booking_id=booking_id,
                    school_service_id=selected.school_service_id,
                    school_id=self.context.require_school(),
                    user_id=customer_id,
                    service_name=selected.name,
                    price=selected.addon_price,
                    discount=float(share),
                    description=selected.description,
                )).unwrap()
            except MTAdminError as e:
                self._warn(result, f"Service {selected.name} was not attached: {e.message}")
                continue
            result.booking_service_ids.append(item.id)

            if selected.service_type != ServiceCategory.NEW_LICENSE.value:
                continue
            try:
                application = crud.license_application.create_for_booking_service(self.transport, item.id).unwrap()
            except MTAdminError as e:
                self._warn(result, f"License application for {selected.name} was not created: {e.message}")
                continue
            result.license_application_ids.append(application.id)

    def _create_sessions(
        self, form: BookingForm, car: Car, booking_id: int, session_dates: List[str], result: BookingCreationResult
    ):
        driver_id = car.assigned_driver.id if car.assigned_driver else car.assigned_driver_id
        for index, session_date in enumerate(session_dates):
            try:
                session = crud.booking_session.create(self.transport, obj_in=BookingSessionCreate(
                    booking_id=booking_id,
                    day_number=index + 1,
                    session_date=session_date,
                    slot=form.slot,
                    car_id=car.id,
                    driver_id=driver_id,
                )).unwrap()
            except MTAdminError as e:
                self._warn(result, f"Session on {session_date} was not created: {e.message}")
                continue
            result.session_ids.append(session.id)

    def _record_advance(self, booking_id: int, amount: float, result: BookingCreationResult):
        try:
            paid = crud.payment.create(self.transport, obj_in=PaymentCreate(
                booking_id=booking_id,
                user_id=self.context.require_user(),
                amount=amount,
                payment_number=advance_payment_number(booking_id),
                notes=ADVANCE_PAYMENT_NOTE,
            )).unwrap()
        except MTAdminError as e:
            self._warn(result, f"Booking created, but advance payment recording failed: {e.message}")
            return
        result.payment_id = paid.id

    def _warn(self, result: BookingCreationResult, message: str):
        logger.warning(message)
        result.warnings.append(message)
