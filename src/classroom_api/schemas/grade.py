from datetime import datetime
from typing import Optional

from classroom_api.schemas.common import CamelModel


class SetGradeRequest(CamelModel):
    student_id: int
    grade: int
    comment: Optional[str] = None


class GradeInfo(CamelModel):
    id: str
    lesson_id: str
    student_id: int
    grade: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StudentGrade(CamelModel):
    """Grade as seen on a student's report."""

    lesson_id: str
    lesson_name: Optional[str] = None
    grade: int
    comment: Optional[str] = None


class LessonGrade(GradeInfo):
    student_name: Optional[str] = None
    student_surname: Optional[str] = None


class ClassroomGrade(LessonGrade):
    lesson_name: Optional[str] = None
