"""
Syllabus Schemas
Day-by-day plan of a course
"""

from typing import Optional
from pydantic import validator

from mtadmin.schemas.common import WireModel
from mtadmin.schemas.rules import INTEGER_RE, check_min_length, check_pattern


class Syllabus(WireModel):
    id: int
    course_id: Optional[int] = None
    syllabus_id: Optional[str] = None
    day_number: Optional[int] = None
    title: Optional[str] = None
    topics: Optional[str] = None
    objectives: Optional[str] = None
    practical_activities: Optional[str] = None
    assessment_criteria: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SyllabusFilter(WireModel):
    course_id: Optional[int] = None
    day_number: Optional[int] = None
    search: Optional[str] = None


class SyllabusCreate(WireModel):
    course_id: int
    day_number: int
    title: str
    topics: str
    objectives: str = ""
    practical_activities: str = ""
    assessment_criteria: str = ""
    notes: str = ""


class SyllabusUpdate(WireModel):
    day_number: Optional[int] = None
    title: Optional[str] = None
    topics: Optional[str] = None
    objectives: Optional[str] = None
    practical_activities: Optional[str] = None
    assessment_criteria: Optional[str] = None
    notes: Optional[str] = None


class SyllabusForm(WireModel):
    """Add and edit share the same rules"""
    day_number: str
    title: str
    topics: str
    objectives: str = ""
    practical_activities: str = ""
    assessment_criteria: str = ""
    notes: str = ""

    @validator('day_number', pre=True)
    def validate_day_number(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        if v is None or v == "":
            raise ValueError("Day number is required")
        return check_pattern(v, INTEGER_RE, "Day number must be a valid number")

    @validator('title')
    def validate_title(cls, v):
        if not v:
            raise ValueError("Title is required")
        return check_min_length(v, 3, "Title must be at least 3 characters")

    @validator('topics')
    def validate_topics(cls, v):
        if not v:
            raise ValueError("Topics are required")
        return check_min_length(v, 10, "Topics must be at least 10 characters")

    def to_create(self, course_id: int) -> SyllabusCreate:
        values = self.model_dump()
        values['day_number'] = int(values['day_number'])
        return SyllabusCreate(course_id=course_id, **values)

    def to_update(self) -> SyllabusUpdate:
        values = self.model_dump()
        values['day_number'] = int(values['day_number'])
        return SyllabusUpdate(**values)
