"""
Resource client for schools
"""

from mtadmin.crud.base import CRUDBase
from mtadmin.schemas.school import School, SchoolCreate, SchoolUpdate

SCHOOL_FIELDS = """
    id name email phone alternatePhone address registrationNumber gstNumber
    establishedYear website logo status createdAt updatedAt
"""

SCHOOL_DETAIL_FIELDS = SCHOOL_FIELDS + """
    dayStartTime dayEndTime lunchStartTime lunchEndTime weeklyHoliday
    ownerName ownerPhone ownerEmail
    bankName accountNumber ifscCode branchName
    rtoLicenseNumber rtoLicenseExpiry insuranceProvider insurancePolicyNumber insuranceExpiry
    facebook instagram twitter
"""


class CRUDSchool(CRUDBase[School, SchoolCreate, SchoolUpdate]):
    """Schools; the detail selection carries the full profile"""


school = CRUDSchool(
    School,
    entity="School",
    where_input="WhereSchoolSearchInput",
    fields=SCHOOL_FIELDS,
    detail_fields=SCHOOL_DETAIL_FIELDS,
)
