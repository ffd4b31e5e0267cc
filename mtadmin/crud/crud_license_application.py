"""
Resource client for license applications
"""

from mtadmin.crud.base import CRUDBase, check_id
from mtadmin.core.transport import GraphQLTransport
from mtadmin.schemas.common import ApiResult
from mtadmin.schemas.license_application import (
    LicenseApplication, LicenseApplicationCreate, LicenseApplicationUpdate,
)

LICENSE_APPLICATION_FIELDS = """
    id bookingServiceId llNumber issuedDate dlApplicationNumber testDate testStatus status
    bookingService { id serviceName confirmationNumber }
    createdAt updatedAt
"""


class CRUDLicenseApplication(CRUDBase[LicenseApplication, LicenseApplicationCreate, LicenseApplicationUpdate]):
    """CRUD operations for license applications"""

    def create_for_booking_service(
        self, transport: GraphQLTransport, booking_service_id: int
    ) -> ApiResult[LicenseApplication]:
        """
        Open an application for a booking service: status PENDING, test status NONE.
        """
        check_id(booking_service_id, "bookingServiceId")
        return self.create(transport, obj_in=LicenseApplicationCreate(booking_service_id=booking_service_id))


license_application = CRUDLicenseApplication(
    LicenseApplication,
    entity="LicenseApplication",
    where_input="WhereLicenseApplicationSearchInput",
    fields=LICENSE_APPLICATION_FIELDS,
)
