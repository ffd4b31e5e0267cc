"""
Resource client for holidays
Deletes record the deleting user
"""

from mtadmin.crud.base import CRUDBase, check_id
from mtadmin.core.transport import GraphQLTransport
from mtadmin.schemas.common import ApiResult, DeleteResult
from mtadmin.schemas.holiday import Holiday, HolidayCreate, HolidayUpdate

HOLIDAY_FIELDS = """
    id schoolId declarationType carId
    car { id carId carName model registrationNumber }
    startDate endDate slots reason status createdAt updatedAt deletedAt
"""


class CRUDHoliday(CRUDBase[Holiday, HolidayCreate, HolidayUpdate]):
    """CRUD operations for holidays"""

    def remove(self, transport: GraphQLTransport, *, id: int, user_id: int) -> ApiResult[DeleteResult]:
        """
        Soft delete a holiday on behalf of a user.
        """
        check_id(id)
        check_id(user_id, "userId")
        query = """
  mutation DeleteHoliday($id: Int!, $userid: Int!) {
    deleteHoliday(id: $id, userid: $userid) { id deletedAt }
  }
"""
        result = self._run(transport, query, {"id": id, "userid": user_id}, "deleteHoliday")
        return self._parse(result, DeleteResult)


holiday = CRUDHoliday(Holiday, entity="Holiday", where_input="SearchHolidayInput", fields=HOLIDAY_FIELDS)
