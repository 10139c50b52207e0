"""Lesson routes, including the downloadable lesson summary."""

from typing import List

from fastapi import APIRouter, File, UploadFile, status
from fastapi.responses import FileResponse

from classroom_api.core.dependencies import (
    ClassroomManagerDep,
    LessonManagerDep,
    LessonSummaryManagerDep,
)
from classroom_api.core.permissions import (
    ClassroomMemberDep,
    CurrentUserDep,
    TeacherDep,
    ensure_classroom_admin,
    ensure_classroom_member,
)
from classroom_api.schemas.common import MessageResponse
from classroom_api.schemas.lesson import (
    CreateLessonRequest,
    LessonInfo,
    SummaryUploadResponse,
    UpdateLessonRequest,
)

router = APIRouter(prefix="/lessons", tags=["Lessons"])


@router.post(
    "",
    response_model=LessonInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Create a lesson",
)
def create_lesson(
    req: CreateLessonRequest,
    current_user: TeacherDep,
    classroom_manager: ClassroomManagerDep,
    lesson_manager: LessonManagerDep,
) -> LessonInfo:
    """Create a lesson in a classroom the caller administers.

    Raises:
        ClassroomNotFoundError: If the classroom does not exist.
        AuthorizationError: If the caller is not a classroom admin.
        ValidationError: If a game id is unknown.
    """
    ensure_classroom_admin(classroom_manager, req.classroom_id, current_user)
    lesson = lesson_manager.create_lesson(
        name=req.name,
        classroom_id=req.classroom_id,
        description=req.description,
        game_ids=req.game_ids,
    )
    return LessonInfo.model_validate(lesson)


@router.get(
    "/classroom/{classroom_id}",
    response_model=List[LessonInfo],
    summary="List the lessons of a classroom",
)
def list_classroom_lessons(
    classroom: ClassroomMemberDep, lesson_manager: LessonManagerDep
) -> List[LessonInfo]:
    return [
        LessonInfo.model_validate(lesson)
        for lesson in lesson_manager.list_classroom_lessons(classroom.id)
    ]


@router.get("/{lesson_id}", response_model=LessonInfo, summary="Get a lesson")
def get_lesson(
    lesson_id: str,
    current_user: CurrentUserDep,
    classroom_manager: ClassroomManagerDep,
    lesson_manager: LessonManagerDep,
) -> LessonInfo:
    lesson = lesson_manager.get_lesson(lesson_id)
    ensure_classroom_member(classroom_manager, lesson.classroom_id, current_user)
    return LessonInfo.model_validate(lesson)


@router.put("/{lesson_id}", response_model=LessonInfo, summary="Update a lesson")
def update_lesson(
    lesson_id: str,
    req: UpdateLessonRequest,
    current_user: TeacherDep,
    classroom_manager: ClassroomManagerDep,
    lesson_manager: LessonManagerDep,
) -> LessonInfo:
    lesson = lesson_manager.get_lesson(lesson_id)
    ensure_classroom_admin(classroom_manager, lesson.classroom_id, current_user)
    lesson = lesson_manager.update_lesson(
        lesson_id,
        name=req.name,
        description=req.description,
        game_ids=req.game_ids,
    )
    return LessonInfo.model_validate(lesson)


@router.delete("/{lesson_id}", response_model=MessageResponse, summary="Delete a lesson")
def delete_lesson(
    lesson_id: str,
    current_user: TeacherDep,
    classroom_manager: ClassroomManagerDep,
    lesson_manager: LessonManagerDep,
    summary_manager: LessonSummaryManagerDep,
) -> MessageResponse:
    lesson = lesson_manager.get_lesson(lesson_id)
    ensure_classroom_admin(classroom_manager, lesson.classroom_id, current_user)
    file_keys = lesson_manager.delete_lesson(lesson_id)
    summary_manager.discard_files(file_keys)
    return MessageResponse(message="Lesson deleted successfully")


@router.post(
    "/{lesson_id}/summary",
    response_model=SummaryUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload or replace the lesson summary file",
)
def upload_summary(
    lesson_id: str,
    current_user: TeacherDep,
    classroom_manager: ClassroomManagerDep,
    lesson_manager: LessonManagerDep,
    summary_manager: LessonSummaryManagerDep,
    file: UploadFile = File(..., description="Summary file"),
) -> SummaryUploadResponse:
    lesson = lesson_manager.get_lesson(lesson_id)
    ensure_classroom_admin(classroom_manager, lesson.classroom_id, current_user)
    file_name = file.filename or "summary"
    summary_manager.save_summary(
        lesson_id, file.file, file_name=file_name, content_type=file.content_type
    )
    return SummaryUploadResponse(
        message="Summary file uploaded successfully", file_name=file_name
    )


@router.get("/{lesson_id}/summary", summary="Download the lesson summary file")
def download_summary(
    lesson_id: str,
    current_user: CurrentUserDep,
    classroom_manager: ClassroomManagerDep,
    lesson_manager: LessonManagerDep,
    summary_manager: LessonSummaryManagerDep,
) -> FileResponse:
    lesson = lesson_manager.get_lesson(lesson_id)
    ensure_classroom_member(classroom_manager, lesson.classroom_id, current_user)
    summary, path = summary_manager.get_summary_file(lesson_id)
    return FileResponse(
        path,
        filename=summary.file_name,
        media_type=summary.file_type or "application/octet-stream",
    )


@router.delete(
    "/{lesson_id}/summary",
    response_model=MessageResponse,
    summary="Delete the lesson summary file",
)
def delete_summary(
    lesson_id: str,
    current_user: TeacherDep,
    classroom_manager: ClassroomManagerDep,
    lesson_manager: LessonManagerDep,
    summary_manager: LessonSummaryManagerDep,
) -> MessageResponse:
    lesson = lesson_manager.get_lesson(lesson_id)
    ensure_classroom_admin(classroom_manager, lesson.classroom_id, current_user)
    summary_manager.delete_summary(lesson_id)
    return MessageResponse(message="Summary file deleted successfully")
