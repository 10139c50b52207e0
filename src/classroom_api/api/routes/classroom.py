"""Classroom management routes."""

from typing import List

from fastapi import APIRouter, status

from classroom_api.core.dependencies import (
    ClassroomManagerDep,
    LessonSummaryManagerDep,
)
from classroom_api.core.exceptions import AuthorizationError, ValidationError
from classroom_api.core.permissions import (
    ClassroomAdminDep,
    ClassroomMemberDep,
    CurrentUserDep,
    TeacherDep,
)
from classroom_api.schemas.classroom import (
    ClassroomDetails,
    ClassroomInfo,
    CreateClassroomRequest,
    MembershipResponse,
    MembersRequest,
)
from classroom_api.schemas.common import MessageResponse
from classroom_api.schemas.user import UserPublic

router = APIRouter(prefix="/classroom", tags=["Classroom"])


def _build_classroom_info(model) -> ClassroomInfo:
    return ClassroomInfo(
        id=model.id,
        name=model.name,
        admins_id=model.admins_id,
        students_id=model.students_id,
    )


@router.post(
    "",
    response_model=ClassroomInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Create a classroom",
)
def create_classroom(
    req: CreateClassroomRequest,
    current_user: TeacherDep,
    classroom_manager: ClassroomManagerDep,
) -> ClassroomInfo:
    """Create a classroom administered by the calling teacher."""
    name = req.name.strip()
    if not name:
        raise ValidationError("Classroom name cannot be empty")
    classroom = classroom_manager.create_classroom(name, current_user.id)
    return _build_classroom_info(classroom)


@router.get(
    "/teacher",
    response_model=List[ClassroomInfo],
    summary="List classrooms administered by the caller",
)
def list_teacher_classrooms(
    current_user: TeacherDep, classroom_manager: ClassroomManagerDep
) -> List[ClassroomInfo]:
    models = classroom_manager.list_classrooms_for_admin(current_user.id)
    return [_build_classroom_info(model) for model in models]


@router.get(
    "/{classroom_id}/details",
    response_model=ClassroomDetails,
    summary="Classroom with member details",
)
def get_classroom_details(
    classroom: ClassroomMemberDep, classroom_manager: ClassroomManagerDep
) -> ClassroomDetails:
    admins, students = classroom_manager.list_members(classroom.id)
    info = _build_classroom_info(classroom)
    return ClassroomDetails(
        **info.model_dump(),
        admins=[UserPublic.model_validate(user) for user in admins],
        students=[UserPublic.model_validate(user) for user in students],
    )


@router.post(
    "/{classroom_id}/users",
    response_model=MembershipResponse,
    summary="Add users to a classroom",
)
def add_users(
    req: MembersRequest,
    classroom: ClassroomAdminDep,
    classroom_manager: ClassroomManagerDep,
) -> MembershipResponse:
    """Add teachers as admins and students as students; parents are ignored.

    Only classroom admins can add users.
    """
    admins_id, students_id = classroom_manager.add_members(classroom.id, req.user_ids)
    return MembershipResponse(
        message="Users added to classroom",
        admins_id=admins_id,
        students_id=students_id,
    )


@router.delete(
    "/{classroom_id}/users",
    response_model=MembershipResponse,
    summary="Remove users from a classroom",
)
def remove_users(
    classroom_id: str,
    req: MembersRequest,
    current_user: CurrentUserDep,
    classroom_manager: ClassroomManagerDep,
) -> MembershipResponse:
    """Remove users from both member lists.

    Classroom admins can remove anyone; other users can only remove
    themselves.
    """
    classroom = classroom_manager.get_classroom(classroom_id)
    is_admin = classroom_manager.is_admin(classroom.id, current_user.id)
    if not is_admin and set(req.user_ids) != {current_user.id}:
        raise AuthorizationError("Only classroom admins can remove other users")

    admins_id, students_id = classroom_manager.remove_members(classroom.id, req.user_ids)
    return MembershipResponse(
        message="Users removed from classroom",
        admins_id=admins_id,
        students_id=students_id,
    )


@router.delete(
    "/{classroom_id}",
    response_model=MessageResponse,
    summary="Delete a classroom",
)
def delete_classroom(
    classroom: ClassroomAdminDep,
    classroom_manager: ClassroomManagerDep,
    summary_manager: LessonSummaryManagerDep,
) -> MessageResponse:
    """Delete a classroom; members are detached, lessons and scores removed.

    Only classroom admins can delete it.
    """
    file_keys = classroom_manager.delete_classroom(classroom.id)
    summary_manager.discard_files(file_keys)
    return MessageResponse(message="Classroom deleted")
