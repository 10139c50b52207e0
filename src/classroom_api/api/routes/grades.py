"""Grade routes."""

from typing import List

from fastapi import APIRouter, status

from classroom_api.core.dependencies import (
    ClassroomManagerDep,
    GradeManagerDep,
    LessonManagerDep,
)
from classroom_api.core.permissions import StudentAccessDep, TeacherDep
from classroom_api.schemas.common import MessageResponse
from classroom_api.schemas.grade import (
    ClassroomGrade,
    GradeInfo,
    LessonGrade,
    SetGradeRequest,
    StudentGrade,
)

router = APIRouter(prefix="/grades", tags=["Grades"])


@router.post(
    "/lesson/{lesson_id}",
    response_model=GradeInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Add or update a grade for a student",
)
def set_grade(
    lesson_id: str,
    req: SetGradeRequest,
    current_user: TeacherDep,
    grade_manager: GradeManagerDep,
) -> GradeInfo:
    """Create the grade, or update it if the student already has one.

    Raises:
        ValidationError: If the grade is outside 1..5.
        LessonNotFoundError: If the lesson does not exist.
    """
    record = grade_manager.set_grade(lesson_id, req.student_id, req.grade, req.comment)
    return GradeInfo.model_validate(record)


@router.get(
    "/lesson/{lesson_id}",
    response_model=List[LessonGrade],
    summary="All grades of a lesson",
)
def list_lesson_grades(
    lesson_id: str,
    current_user: TeacherDep,
    lesson_manager: LessonManagerDep,
    grade_manager: GradeManagerDep,
) -> List[LessonGrade]:
    lesson_manager.get_lesson(lesson_id)
    return [LessonGrade(**row) for row in grade_manager.list_lesson_grades(lesson_id)]


@router.delete(
    "/lesson/{lesson_id}/student/{student_id}",
    response_model=MessageResponse,
    summary="Delete a grade",
)
def delete_grade(
    lesson_id: str,
    student_id: int,
    current_user: TeacherDep,
    grade_manager: GradeManagerDep,
) -> MessageResponse:
    grade_manager.delete_grade(lesson_id, student_id)
    return MessageResponse(message="Grade deleted successfully")


@router.get(
    "/student/{student_id}",
    response_model=List[StudentGrade],
    summary="All grades of a student",
)
def list_student_grades(
    student_id: int,
    current_user: StudentAccessDep,
    grade_manager: GradeManagerDep,
) -> List[StudentGrade]:
    """Readable by the student, any teacher, and the student's parents."""
    return [StudentGrade(**row) for row in grade_manager.list_student_grades(student_id)]


@router.get(
    "/classroom/{classroom_id}",
    response_model=List[ClassroomGrade],
    summary="All grades in a classroom",
)
def list_classroom_grades(
    classroom_id: str,
    current_user: TeacherDep,
    classroom_manager: ClassroomManagerDep,
    grade_manager: GradeManagerDep,
) -> List[ClassroomGrade]:
    classroom_manager.get_classroom(classroom_id)
    return [
        ClassroomGrade(**row) for row in grade_manager.list_classroom_grades(classroom_id)
    ]
