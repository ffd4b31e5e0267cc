"""
Resource client for drivers
Adds the detail read that carries leave and salary history
"""

from mtadmin.crud.base import CRUDBase, check_id
from mtadmin.core.exceptions import ErrorKind
from mtadmin.core.transport import GraphQLTransport
from mtadmin.schemas.common import ApiResult
from mtadmin.schemas.driver import Driver, DriverCreate, DriverUpdate, DriverWithHistory

DRIVER_FIELDS = """
    id userId schoolId driverId name email mobile alternatePhone address dateOfBirth
    bloodGroup gender licenseNumber licenseType licenseIssueDate licenseExpiryDate
    experience joiningDate salary emergencyContactName emergencyContactNumber
    emergencyContactRelation totalBookings completedBookings cancelledBookings rating
    status createdAt updatedAt
"""

LEAVE_HISTORY_FIELDS = """
    id leaveId fromDate toDate reason leaveType totalDays status approvedBy approvedAt
    rejectionReason createdAt
"""

SALARY_HISTORY_FIELDS = """
    id salaryId month year monthNumber basicSalary bonus deductions netSalary
    paymentMethod transactionId paidOn status createdAt
"""


class CRUDDriver(CRUDBase[Driver, DriverCreate, DriverUpdate]):
    """CRUD operations for drivers"""

    def get_with_history(self, transport: GraphQLTransport, id: int) -> ApiResult[DriverWithHistory]:
        """
        Get a driver together with its read-only leave and salary history.
        """
        check_id(id)
        query = f"""
  query GetDriverById($id: Int!) {{
    getDriverById(id: $id) {{
      {DRIVER_FIELDS}
      leaveHistory {{ {LEAVE_HISTORY_FIELDS} }}
      salaryHistory {{ {SALARY_HISTORY_FIELDS} }}
    }}
  }}
"""
        result = self._run(transport, query, {"id": id}, "getDriverById")
        if result.status and result.data is None:
            return ApiResult.fail(f"Driver {id} not found", ErrorKind.NOT_FOUND)
        return self._parse(result, DriverWithHistory)


driver = CRUDDriver(Driver, entity="Driver", where_input="WhereDriverSearchInput", fields=DRIVER_FIELDS)
