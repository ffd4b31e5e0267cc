"""
Resource client for users (customers and staff)
"""

from typing import Optional

from mtadmin.crud.base import CRUDBase, VariablesIn, to_variables
from mtadmin.core.transport import GraphQLTransport
from mtadmin.models.enums import UserRole
from mtadmin.schemas.common import ApiResult
from mtadmin.schemas.user import User, UserCreate, UserFilter, UserUpdate

USER_FIELDS = """
    id name surname fatherName contact1 contact2 address permanentAddress bloodGroup
    role email dob profile status schoolId createdAt createdById updatedAt updatedById
"""


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    """CRUD operations for users"""

    def search(self, transport: GraphQLTransport, *, where: VariablesIn = None) -> ApiResult[Optional[User]]:
        """
        Single user matching the filter, or None when nobody matches.
        """
        query = f"""
  query SearchUser($whereSearchInput: {self.where_input}!) {{
    searchUser(whereSearchInput: $whereSearchInput) {{ {self.fields} }}
  }}
"""
        result = self._run(transport, query, {"whereSearchInput": to_variables(where, partial=False)}, "searchUser")
        if result.status and result.data is None:
            return ApiResult.ok(None, message=result.message)
        return self._parse(result, self.model)

    def search_by_contact(
        self,
        transport: GraphQLTransport,
        contact: str,
        role: Optional[UserRole] = None,
    ) -> ApiResult[Optional[User]]:
        """
        Look a user up by primary contact. Role defaults to USER so customers are
        found across all schools.
        """
        return self.search(transport, where=UserFilter(contact1=contact, role=role or UserRole.USER))


user = CRUDUser(User, entity="User", where_input="WhereUserSearchInput", fields=USER_FIELDS)
