"""
Payment Endpoints
Installments paid against bookings and against booking services
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from mtadmin import crud
from mtadmin.api.deps import get_request_context, get_transport
from mtadmin.core.config import get_settings
from mtadmin.core.transport import GraphQLTransport
from mtadmin.schemas.common import RequestContext
from mtadmin.schemas.payment import Payment, PaymentCreate, ServicePayment, ServicePaymentCreate
from mtadmin.services.audit_service import create_user_context, get_audit_service

router = APIRouter()
audit = get_audit_service()


# Booking payments
@router.get("/", response_model=List[Payment])
def list_payments(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    booking_id: int = Query(..., alias="bookingId", gt=0),
):
    return crud.payment.get_by_booking(transport, booking_id).unwrap()


@router.get("/total-paid")
def get_total_paid(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    booking_id: int = Query(..., alias="bookingId", gt=0),
):
    """Sum of completed payments of a booking"""
    total = crud.payment.get_total_paid_amount(transport, booking_id).unwrap()
    return {"bookingId": booking_id, "totalPaid": float(total), "currency": get_settings().CURRENCY}


@router.post("/", response_model=Payment, status_code=status.HTTP_201_CREATED)
def create_payment(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    payment_in: PaymentCreate,
):
    if payment_in.user_id is None:
        payment_in.user_id = context.require_user()
    created = crud.payment.create(transport, obj_in=payment_in).unwrap()
    audit.log_mutation(
        "CREATE", "PAYMENT", created.id, create_user_context(context),
        new_values={"bookingId": payment_in.booking_id, "amount": payment_in.amount},
    )
    return created


# Booking service payments
@router.get("/service", response_model=List[ServicePayment])
def list_service_payments(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    booking_service_id: int = Query(..., alias="bookingServiceId", gt=0),
):
    return crud.service_payment.get_by_booking_service(transport, booking_service_id).unwrap()


@router.get("/service/total-paid")
def get_service_total_paid(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    booking_service_id: int = Query(..., alias="bookingServiceId", gt=0),
):
    total = crud.service_payment.get_total_paid_amount(transport, booking_service_id).unwrap()
    return {"bookingServiceId": booking_service_id, "totalPaid": float(total), "currency": get_settings().CURRENCY}


@router.post("/service", response_model=ServicePayment, status_code=status.HTTP_201_CREATED)
def create_service_payment(
    *,
    transport: GraphQLTransport = Depends(get_transport),
    context: RequestContext = Depends(get_request_context),
    payment_in: ServicePaymentCreate,
):
    if payment_in.user_id is None:
        payment_in.user_id = context.require_user()
    created = crud.service_payment.create(transport, obj_in=payment_in).unwrap()
    audit.log_mutation(
        "CREATE", "SERVICE_PAYMENT", created.id, create_user_context(context),
        new_values={"bookingServiceId": payment_in.booking_service_id, "amount": payment_in.amount},
    )
    return created
