"""
Resource clients for bookings, booking sessions and booking services
"""

from typing import List, Optional
import logging

from mtadmin.crud.base import CRUDBase, check_id
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import SLOT_RELEASING_SESSION_STATUSES
from mtadmin.schemas.booking import (
    Booking, BookingCreate, BookingUpdate,
    BookingServiceCreate, BookingServiceItem,
    BookingSession, BookingSessionCreate, BookingSessionFilter, BookingSessionUpdate,
)
from mtadmin.schemas.common import ApiResult

logger = logging.getLogger(__name__)

SESSION_FIELDS = """
    id bookingId dayNumber sessionDate slot carId driverId
    driver { id userId name }
    booking { id carId schoolId }
    status attended completedAt instructorNotes customerFeedback internalNotes
    performanceRating skillsAssessed progressNotes createdAt updatedAt deletedAt
"""

BOOKING_SERVICE_FIELDS = """
    id bookingId schoolServiceId schoolId userId serviceName serviceType price
    description confirmationNumber createdAt updatedAt
    schoolService {
      id schoolServiceId licensePrice addonPrice
      service { id serviceName category description }
    }
"""

BOOKING_FIELDS = f"""
    id schoolId bookingId carId carName slot bookingDate customerMobile customerName
    customerEmail customerId courseId courseName coursePrice totalAmount notes status
    confirmationNumber createdAt updatedAt
    sessions {{ {SESSION_FIELDS} }}
    customer {{ id name email contact1 address }}
    car {{ id carId carName model registrationNumber }}
    course {{ id courseName price }}
"""

BOOKING_DETAIL_FIELDS = BOOKING_FIELDS + f"""
    bookingServices {{ {BOOKING_SERVICE_FIELDS} }}
"""


class CRUDBooking(CRUDBase[Booking, BookingCreate, BookingUpdate]):
    """CRUD operations for bookings"""


class CRUDBookingSession(CRUDBase[BookingSession, BookingSessionCreate, BookingSessionUpdate]):
    """CRUD operations for the dated sessions of a booking"""

    def get_by_booking(self, transport: GraphQLTransport, booking_id: int) -> ApiResult[List[BookingSession]]:
        """
        All sessions of one booking, ordered by day number then date.
        """
        check_id(booking_id, "bookingId")
        result = self.get_all(transport, where=BookingSessionFilter(booking_id=booking_id))
        if result.status:
            result.data.sort(key=lambda s: (s.day_number or 0, s.session_date or ""))
        return result

    def is_slot_available(
        self,
        transport: GraphQLTransport,
        *,
        car_id: int,
        session_date: str,
        slot: str,
        exclude_booking_id: Optional[int] = None,
    ) -> ApiResult[bool]:
        """
        Check whether a car/slot is free on a date.

        Sessions in a slot-releasing status (cancelled, no-show, hold, edited) do not occupy it.
        """
        check_id(car_id, "carId")
        result = self.get_all(
            transport, where=BookingSessionFilter(session_date=session_date, slot=slot, car_id=car_id),
        )
        if not result.status:
            return result
        for session in result.data:
            if session.status in SLOT_RELEASING_SESSION_STATUSES:
                continue
            session_car = session.car_id if session.car_id is not None else (
                session.booking.car_id if session.booking else None
            )
            if session_car != car_id:
                continue
            if exclude_booking_id is not None and session.booking_id == exclude_booking_id:
                continue
            logger.debug(f"Car {car_id} busy on {session_date} {slot} (session {session.id})")
            return ApiResult.ok(False)
        return ApiResult.ok(True)


class CRUDBookingService(CRUDBase[BookingServiceItem, BookingServiceCreate, BookingServiceCreate]):
    """Services attached to bookings"""


booking = CRUDBooking(
    Booking,
    entity="Booking",
    where_input="WhereBookingSearchInput",
    fields=BOOKING_FIELDS,
    detail_fields=BOOKING_DETAIL_FIELDS,
)
booking_session = CRUDBookingSession(
    BookingSession,
    entity="BookingSession",
    where_input="WhereBookingSessionSearchInput",
    fields=SESSION_FIELDS,
)
booking_service = CRUDBookingService(
    BookingServiceItem,
    entity="BookingService",
    where_input="WhereBookingServiceSearchInput",
    fields=BOOKING_SERVICE_FIELDS,
)
