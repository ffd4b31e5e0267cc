"""
Course Schemas
"""

from typing import Optional
from pydantic import validator

from mtadmin.models.enums import CourseStatus, CourseType
from mtadmin.schemas.common import WireModel
from mtadmin.schemas.rules import (
    DECIMAL_RE, INTEGER_RE,
    blank_to_none, check_choice, check_min_length, check_pattern, to_float, to_int,
)


class Course(WireModel):
    id: int
    school_id: Optional[int] = None
    course_id: Optional[str] = None
    course_name: Optional[str] = None
    course_type: Optional[CourseType] = None
    mins_per_day: Optional[int] = None
    course_days: Optional[int] = None
    price: Optional[float] = None
    automatic_price: Optional[float] = None
    enrolled_students: Optional[int] = None
    description: Optional[str] = None
    syllabus: Optional[str] = None
    requirements: Optional[str] = None
    sessions_completed: Optional[int] = None
    total_revenue: Optional[float] = None
    status: Optional[CourseStatus] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CourseFilter(WireModel):
    school_id: Optional[int] = None
    course_type: Optional[CourseType] = None
    status: Optional[CourseStatus] = None
    search: Optional[str] = None


class CourseCreate(WireModel):
    school_id: int
    course_name: str
    course_type: CourseType
    mins_per_day: int
    course_days: int
    price: float
    description: str
    syllabus: Optional[str] = None
    requirements: Optional[str] = None


class CourseUpdate(WireModel):
    course_name: Optional[str] = None
    course_type: Optional[CourseType] = None
    mins_per_day: Optional[int] = None
    course_days: Optional[int] = None
    price: Optional[float] = None
    automatic_price: Optional[float] = None
    enrolled_students: Optional[int] = None
    description: Optional[str] = None
    syllabus: Optional[str] = None
    requirements: Optional[str] = None
    sessions_completed: Optional[int] = None
    total_revenue: Optional[float] = None
    status: Optional[CourseStatus] = None


def _stringify(v):
    v = blank_to_none(v)
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


class _CourseFormBase(WireModel):
    course_name: str
    course_type: str
    course_days: str
    price: str
    description: str
    syllabus: Optional[str] = None
    requirements: Optional[str] = None

    @validator('course_days', 'price', pre=True)
    def numbers_as_strings(cls, v):
        return _stringify(v)

    @validator('syllabus', 'requirements', pre=True)
    def blank_optional(cls, v):
        return blank_to_none(v)

    @validator('course_name')
    def validate_course_name(cls, v):
        return check_min_length(v, 3, "Course name must be at least 3 characters")

    @validator('course_type')
    def validate_course_type(cls, v):
        return check_choice(v, CourseType, "Course type is required")

    @validator('course_days')
    def validate_course_days(cls, v):
        return check_pattern(v, INTEGER_RE, "Course days must be a number")

    @validator('price')
    def validate_price(cls, v):
        return check_pattern(v, DECIMAL_RE, "Price must be a valid number")

    @validator('description')
    def validate_description(cls, v):
        return check_min_length(v, 10, "Description must be at least 10 characters")


class AddCourseForm(_CourseFormBase):
    """Add form; lesson length is picked as 30 or 60 minutes"""
    hours_per_day: str

    @validator('hours_per_day', pre=True)
    def validate_hours_per_day(cls, v):
        v = _stringify(v)
        if v not in ("30", "60"):
            raise ValueError("Hours per day must be 30 or 60")
        return v

    def to_create(self, school_id: int) -> CourseCreate:
        return CourseCreate(
            school_id=school_id,
            course_name=self.course_name,
            course_type=self.course_type,
            mins_per_day=int(self.hours_per_day),
            course_days=int(self.course_days),
            price=float(self.price),
            description=self.description,
            syllabus=self.syllabus,
            requirements=self.requirements,
        )


class EditCourseForm(_CourseFormBase):
    course_id: Optional[str] = None
    mins_per_day: str
    automatic_price: Optional[str] = None
    enrolled_students: Optional[str] = None
    sessions_completed: Optional[str] = None
    total_revenue: Optional[str] = None
    status: Optional[str] = None

    @validator('mins_per_day', 'automatic_price', 'enrolled_students',
               'sessions_completed', 'total_revenue', 'status', pre=True)
    def edit_numbers_as_strings(cls, v):
        return _stringify(v)

    @validator('mins_per_day')
    def validate_mins_per_day(cls, v):
        return check_pattern(v, INTEGER_RE, "Minutes per day must be a valid number")

    @validator('automatic_price')
    def validate_automatic_price(cls, v):
        if v is None:
            return v
        return check_pattern(v, DECIMAL_RE, "Automatic price must be a valid number")

    @validator('enrolled_students')
    def validate_enrolled_students(cls, v):
        if v is None:
            return v
        return check_pattern(v, INTEGER_RE, "Enrolled students must be a number")

    @validator('sessions_completed')
    def validate_sessions_completed(cls, v):
        if v is None:
            return v
        return check_pattern(v, INTEGER_RE, "Sessions completed must be a number")

    @validator('total_revenue')
    def validate_total_revenue(cls, v):
        if v is None:
            return v
        return check_pattern(v, DECIMAL_RE, "Total revenue must be a valid number")

    @validator('status')
    def validate_status(cls, v):
        if v is None:
            return v
        return check_choice(v, CourseStatus, "Please select a valid status")

    def to_update(self) -> CourseUpdate:
        values = self.model_dump(exclude_none=True, exclude={'course_id'})
        for key in ('mins_per_day', 'course_days', 'enrolled_students', 'sessions_completed'):
            if key in values:
                values[key] = to_int(values[key])
        for key in ('price', 'automatic_price', 'total_revenue'):
            if key in values:
                values[key] = to_float(values[key])
        return CourseUpdate(**values)
