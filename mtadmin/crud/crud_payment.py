"""
Resource clients for booking payments and booking-service payments
"""

from decimal import Decimal
from typing import Generic, List, TypeVar

from mtadmin.crud.base import CRUDBase, check_id
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import PaymentStatus
from mtadmin.schemas.common import ApiResult
from mtadmin.schemas.payment import (
    Payment, PaymentCreate, PaymentFilter,
    ServicePayment, ServicePaymentCreate, ServicePaymentFilter,
)
from mtadmin.services.booking_rules import total_paid

PAYMENT_FIELDS = """
    id bookingId userId amount paymentNumber paymentDate paymentMethod transactionId
    installmentNumber totalInstallments notes status createdAt updatedAt
"""

SERVICE_PAYMENT_FIELDS = """
    id bookingServiceId userId amount paymentNumber paymentDate paymentMethod transactionId
    installmentNumber totalInstallments notes status createdAt updatedAt
"""

PaymentT = TypeVar("PaymentT", Payment, ServicePayment)


class _PaidTotalMixin(Generic[PaymentT]):
    def _paid_total(self, result: ApiResult[List[PaymentT]]) -> ApiResult[Decimal]:
        if not result.status:
            return result
        return ApiResult.ok(total_paid(result.data))


class CRUDPayment(_PaidTotalMixin[Payment], CRUDBase[Payment, PaymentCreate, PaymentCreate]):
    """CRUD operations for booking payments"""

    def get_by_booking(self, transport: GraphQLTransport, booking_id: int) -> ApiResult[List[Payment]]:
        check_id(booking_id, "bookingId")
        return self.get_all(transport, where=PaymentFilter(booking_id=booking_id))

    def get_total_paid_amount(self, transport: GraphQLTransport, booking_id: int) -> ApiResult[Decimal]:
        """
        Sum of COMPLETED payments of a booking.

        The status filter is sent, and the sum still only counts COMPLETED rows.
        """
        check_id(booking_id, "bookingId")
        result = self.get_all(
            transport, where=PaymentFilter(booking_id=booking_id, status=PaymentStatus.COMPLETED)
        )
        return self._paid_total(result)


class CRUDServicePayment(
    _PaidTotalMixin[ServicePayment], CRUDBase[ServicePayment, ServicePaymentCreate, ServicePaymentCreate]
):
    """CRUD operations for booking-service payments"""

    def get_by_booking_service(
        self, transport: GraphQLTransport, booking_service_id: int
    ) -> ApiResult[List[ServicePayment]]:
        check_id(booking_service_id, "bookingServiceId")
        return self.get_all(transport, where=ServicePaymentFilter(booking_service_id=booking_service_id))

    def get_total_paid_amount(self, transport: GraphQLTransport, booking_service_id: int) -> ApiResult[Decimal]:
        check_id(booking_service_id, "bookingServiceId")
        result = self.get_all(
            transport,
            where=ServicePaymentFilter(booking_service_id=booking_service_id, status=PaymentStatus.COMPLETED),
        )
        return self._paid_total(result)


payment = CRUDPayment(Payment, entity="Payment", where_input="SearchPaymentInput", fields=PAYMENT_FIELDS)
service_payment = CRUDServicePayment(
    ServicePayment,
    entity="ServicePayment",
    where_input="SearchServicePaymentInput",
    fields=SERVICE_PAYMENT_FIELDS,
)
