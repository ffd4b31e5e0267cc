"""
Amendment processing
Applies a checked amendment to a booking's sessions and keeps the booking status in
step with the roll-up of its dates
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple
import logging

from mtadmin import crud
from mtadmin.core.exceptions import AmendmentNotAllowedError, MTAdminError
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import AmendmentAction, BookingDateStatus, BookingRollupStatus, BookingStatus, SessionStatus
from mtadmin.schemas.amendment import AmendmentOutcome, AmendmentRequest, HoldRequest
from mtadmin.schemas.booking import (
    Booking, BookingSession, BookingSessionCreate, BookingSessionUpdate, BookingUpdate,
)
from mtadmin.schemas.common import RequestContext
from mtadmin.schemas.holiday import HolidayFilter
from mtadmin.services.audit_service import create_user_context, get_audit_service
from mtadmin.services.booking_rules import (
    AmendmentPlan, booking_dates, check_amendment, legal_actions, rollup_status,
    rollup_to_booking_status, to_day,
)
from mtadmin.services.scheduling import is_holiday, to_date

logger = logging.getLogger(__name__)

CANCEL_NOTE_PREFIX = {
    AmendmentAction.CANCEL_BOOKING.value: "",
    AmendmentAction.CHANGE_DATE.value: "Date changed - ",
    AmendmentAction.CAR_BREAKDOWN.value: "Car breakdown - ",
    AmendmentAction.CAR_HOLIDAY.value: "Car holiday - ",
}


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def display_date(value: Optional[str]) -> str:
    """DD Mon YYYY"""
    return to_date(value).strftime("%d %b %Y")


class AmendmentService:
    """Amendments, holds and single-session updates for one request context"""

    def __init__(self, transport: GraphQLTransport, context: RequestContext):
        self.transport = transport
        self.context = context
        self.audit = get_audit_service()

    def load(self, booking_id: int) -> Tuple[Booking, List[BookingSession]]:
        booking = crud.booking.get(self.transport, booking_id).unwrap()
        sessions = crud.booking_session.get_by_booking(self.transport, booking.id).unwrap()
        return booking, sessions

    def legal_actions(self, booking_id: int) -> List[AmendmentAction]:
        _, sessions = self.load(booking_id)
        return legal_actions(booking_dates(sessions))

    def rollup(self, booking_id: int) -> BookingRollupStatus:
        _, sessions = self.load(booking_id)
        return rollup_status(booking_dates(sessions))

    def process(self, request: AmendmentRequest) -> AmendmentOutcome:
        """
        Check and apply an amendment, then persist the recomputed booking status.

        Mutations run in order and stop at the first failure. Whatever was already
        applied is still rolled up into the booking status before the error propagates.
        """
        booking, sessions = self.load(request.booking_id)
        plan = check_amendment(booking_dates(sessions), request)
        by_id = {s.id: s for s in sessions}
        originals = [by_id[d.id] for d in plan.targets]
        if plan.new_dates:
            self._check_replacements(booking, originals, plan.new_dates)

        outcome = AmendmentOutcome(
            booking_id=booking.id,
            action=plan.action,
            rollup_status=BookingRollupStatus.ACTIVE,
            booking_status=booking.status or BookingStatus.PENDING,
        )
        try:
            if plan.action == AmendmentAction.RELEASE_HOLD:
                for session in originals:
                    self._update(session.id, BookingSessionUpdate(
                        status=SessionStatus.PENDING,
                        internal_notes=f"Hold released - {plan.reason}",
                    ))
                    outcome.updated_session_ids.append(session.id)
            else:
                for session in originals:
                    self._cancel(session, plan)
                    outcome.cancelled_session_ids.append(session.id)
                for session, new_date in zip(originals, plan.new_dates):
                    created = self._replace(booking, session, new_date, plan)
                    outcome.created_session_ids.append(created.id)
        except MTAdminError as exc:
            self._sync_after_failure("AMEND", booking, outcome, exc)
            raise

        outcome.rollup_status, outcome.booking_status = self.sync_status(booking)
        self.audit.log_mutation(
            "AMEND", "BOOKING", booking.id, create_user_context(self.context),
            message=plan.reason,
            new_values={
                "action": outcome.action,
                "cancelled": outcome.cancelled_session_ids,
                "created": outcome.created_session_ids,
                "updated": outcome.updated_session_ids,
                "status": outcome.booking_status,
            },
        )
        return outcome

    def place_hold(self, booking_id: int, request: HoldRequest) -> AmendmentOutcome:
        """Put scheduled dates on provisional hold; held dates free their slot"""
        reason = (request.reason or "").strip()
        if not reason:
            raise AmendmentNotAllowedError({"reason": "A reason is required for every amendment"})
        booking, sessions = self.load(booking_id)
        dates = {d.id: d for d in booking_dates(sessions)}
        for session_id in request.session_ids:
            current = dates.get(session_id)
            if current is None:
                raise AmendmentNotAllowedError({"sessionIds": f"Session {session_id} does not belong to this booking"})
            if current.status != BookingDateStatus.SCHEDULED.value or current.held:
                raise AmendmentNotAllowedError({"sessionIds": f"Session {session_id} cannot be put on hold"})

        outcome = AmendmentOutcome(
            booking_id=booking.id,
            rollup_status=BookingRollupStatus.ACTIVE,
            booking_status=booking.status or BookingStatus.PENDING,
        )
        try:
            for session_id in request.session_ids:
                self._update(session_id, BookingSessionUpdate(status=SessionStatus.HOLD, internal_notes=reason))
                outcome.updated_session_ids.append(session_id)
        except MTAdminError as exc:
            self._sync_after_failure("HOLD", booking, outcome, exc)
            raise
        outcome.rollup_status, outcome.booking_status = self.sync_status(booking)
        self.audit.log_mutation(
            "HOLD", "BOOKING", booking.id, create_user_context(self.context),
            message=reason, new_values={"sessions": outcome.updated_session_ids},
        )
        return outcome

    def update_session(self, session_id: int, obj_in: BookingSessionUpdate) -> Tuple[BookingSession, AmendmentOutcome]:
        """Update one session, then recompute and persist its booking's status"""
        session = crud.booking_session.get(self.transport, session_id).unwrap()
        updated = self._update(session_id, obj_in)
        booking = crud.booking.get(self.transport, session.booking_id).unwrap()
        rollup, status = self.sync_status(booking)
        self.audit.log_mutation(
            "UPDATE", "BOOKING_SESSION", session_id, create_user_context(self.context),
            new_values=obj_in.model_dump(by_alias=True, exclude_unset=True, mode="json"),
        )
        return updated, AmendmentOutcome(
            booking_id=booking.id,
            updated_session_ids=[session_id],
            rollup_status=rollup,
            booking_status=status,
        )

    def sync_status(self, booking: Booking) -> Tuple[BookingRollupStatus, BookingStatus]:
        """Recompute the roll-up from fresh sessions and persist the booking status if it moved"""
        sessions = crud.booking_session.get_by_booking(self.transport, booking.id).unwrap()
        rollup = rollup_status(booking_dates(sessions))
        status = rollup_to_booking_status(rollup, booking.status)
        if status.value != booking.status:
            logger.info(f"Booking {booking.id} status {booking.status} -> {status.value} ({rollup.value})")
            crud.booking.update(self.transport, id=booking.id, obj_in=BookingUpdate(status=status)).unwrap()
        return rollup, status

    def _sync_after_failure(self, action_type: str, booking: Booking, outcome: AmendmentOutcome, exc: MTAdminError):
        """Bring the booking status back in step after a partially applied amendment"""
        applied = outcome.cancelled_session_ids + outcome.created_session_ids + outcome.updated_session_ids
        if applied:
            try:
                outcome.rollup_status, outcome.booking_status = self.sync_status(booking)
            except MTAdminError as sync_exc:
                logger.error(f"Booking {booking.id} status could not be recomputed: {sync_exc.message}")
        logger.warning(f"{action_type} on booking {booking.id} stopped after sessions {applied}: {exc.message}")
        self.audit.log_mutation(
            action_type, "BOOKING", booking.id, create_user_context(self.context),
            success=False,
            message=exc.message,
            new_values={
                "cancelled": outcome.cancelled_session_ids,
                "created": outcome.created_session_ids,
                "updated": outcome.updated_session_ids,
                "status": outcome.booking_status,
            },
        )

    # Session mutations
    def _update(self, session_id: int, obj_in: BookingSessionUpdate) -> BookingSession:
        return crud.booking_session.update(self.transport, id=session_id, obj_in=obj_in).unwrap()

    def _cancel(self, session: BookingSession, plan: AmendmentPlan) -> BookingSession:
        prefix = CANCEL_NOTE_PREFIX.get(plan.action.value, "")
        return self._update(session.id, BookingSessionUpdate(
            status=SessionStatus.CANCELLED,
            deleted_at=now_iso(),
            internal_notes=f"{prefix}{plan.reason}",
        ))

    def _replace(self, booking: Booking, session: BookingSession, new_date: str, plan: AmendmentPlan) -> BookingSession:
        note = f"Rescheduled from {display_date(session.session_date)} - {plan.reason}"
        if plan.action == AmendmentAction.CAR_BREAKDOWN:
            note = f"Car breakdown - {note}"
        return crud.booking_session.create(self.transport, obj_in=BookingSessionCreate(
            booking_id=booking.id,
            day_number=session.day_number or 1,
            session_date=new_date,
            slot=session.slot or booking.slot,
            car_id=session.car_id or booking.car_id,
            driver_id=session.driver_id,
            status=SessionStatus.PENDING,
            internal_notes=note,
        )).unwrap()

    def _check_replacements(self, booking: Booking, originals: List[BookingSession], new_dates: List[str]):
        """Replacement dates must be free for the session's car and slot"""
        holidays = []
        if booking.school_id:
            holidays = crud.holiday.get_all(
                self.transport, where=HolidayFilter(school_id=booking.school_id)
            ).unwrap()
        for session, new_date in zip(originals, new_dates):
            car_id = session.car_id or booking.car_id
            slot = session.slot or booking.slot
            if is_holiday(holidays, new_date, car_id=car_id, slot=slot):
                raise AmendmentNotAllowedError({"newDates": f"{to_day(new_date)} is a holiday"})
            free = crud.booking_session.is_slot_available(
                self.transport, car_id=car_id, session_date=new_date, slot=slot
            ).unwrap()
            if not free:
                raise AmendmentNotAllowedError({"newDates": f"{to_day(new_date)} {slot} is already booked"})
