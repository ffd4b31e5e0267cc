"""
Resource clients for courses and their syllabus days
"""

from mtadmin.crud.base import CRUDBase
from mtadmin.schemas.course import Course, CourseCreate, CourseUpdate
from mtadmin.schemas.syllabus import Syllabus, SyllabusCreate, SyllabusUpdate

COURSE_FIELDS = """
    id schoolId courseId courseName courseType minsPerDay courseDays price automaticPrice
    enrolledStudents description syllabus requirements sessionsCompleted totalRevenue
    status createdAt updatedAt
"""

SYLLABUS_FIELDS = """
    id courseId syllabusId dayNumber title topics objectives practicalActivities
    assessmentCriteria notes createdAt updatedAt
"""


class CRUDCourse(CRUDBase[Course, CourseCreate, CourseUpdate]):
    pass


class CRUDSyllabus(CRUDBase[Syllabus, SyllabusCreate, SyllabusUpdate]):
    pass


course = CRUDCourse(Course, entity="Course", where_input="SearchCourseInput", fields=COURSE_FIELDS)
syllabus = CRUDSyllabus(Syllabus, entity="Syllabus", where_input="SearchSyllabusInput", fields=SYLLABUS_FIELDS)
