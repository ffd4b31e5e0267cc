"""
Payment Schemas
Booking payments and booking-service payments share one shape
"""

from typing import Optional
from pydantic import Field

from mtadmin.models.enums import PaymentMethod, PaymentStatus
from mtadmin.schemas.common import WireModel


class _PaymentFields(WireModel):
    id: int
    user_id: Optional[int] = None
    amount: float = 0
    payment_number: Optional[str] = None
    payment_date: Optional[str] = None
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    installment_number: Optional[int] = None
    total_installments: Optional[int] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    deleted_at: Optional[str] = None


class Payment(_PaymentFields):
    booking_id: Optional[int] = None


class ServicePayment(_PaymentFields):
    booking_service_id: Optional[int] = None


class PaymentFilter(WireModel):
    booking_id: Optional[int] = None
    user_id: Optional[int] = None
    status: Optional[PaymentStatus] = None


class ServicePaymentFilter(WireModel):
    booking_service_id: Optional[int] = None
    user_id: Optional[int] = None
    status: Optional[PaymentStatus] = None


class _PaymentInput(WireModel):
    user_id: Optional[int] = None
    amount: float = Field(..., gt=0)
    payment_number: str
    payment_method: PaymentMethod = PaymentMethod.CASH
    transaction_id: str = ""
    installment_number: int = Field(1, ge=1)
    total_installments: int = Field(1, ge=1)
    notes: Optional[str] = None


class PaymentCreate(_PaymentInput):
    booking_id: int


class ServicePaymentCreate(_PaymentInput):
    booking_service_id: int
