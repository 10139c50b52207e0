"""Teacher profile routes and the public teacher search."""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from classroom_api.core.dependencies import TeacherMetaManagerDep
from classroom_api.core.exceptions import ValidationError
from classroom_api.core.permissions import CurrentUserDep, TeacherDep
from classroom_api.schemas.common import MessageResponse
from classroom_api.schemas.teacher_meta import (
    TeacherMetaInfo,
    TeacherMetaRequest,
    TeacherMetaUpdateRequest,
    TeacherSearchResult,
)

router = APIRouter(prefix="/teacher-info", tags=["Teacher info"])


@router.get(
    "/search",
    response_model=List[TeacherSearchResult],
    summary="Search teachers by tag names",
)
def search_teachers(
    meta_manager: TeacherMetaManagerDep,
    tags: Optional[str] = Query(None, description="Comma separated tag names"),
) -> List[TeacherSearchResult]:
    """Public search: teachers whose profile has any of the given tags."""
    if not tags:
        raise ValidationError("No tags provided")
    tag_names = [tag.strip() for tag in tags.split(",") if tag.strip()]
    if not tag_names:
        raise ValidationError("No valid tags provided")
    return [TeacherSearchResult(**row) for row in meta_manager.search_by_tag_names(tag_names)]


@router.get("", response_model=TeacherMetaInfo, summary="Own teacher profile")
def get_teacher_info(
    current_user: CurrentUserDep, meta_manager: TeacherMetaManagerDep
) -> TeacherMetaInfo:
    return TeacherMetaInfo.model_validate(meta_manager.get_meta(current_user.id))


@router.post(
    "",
    response_model=TeacherMetaInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Create own teacher profile",
)
def create_teacher_info(
    req: TeacherMetaRequest,
    current_user: TeacherDep,
    meta_manager: TeacherMetaManagerDep,
) -> TeacherMetaInfo:
    meta = meta_manager.create_meta(
        current_user.id,
        tags_id=req.tags_id,
        about_teacher=req.about_teacher,
        can_help_with=req.can_help_with,
        resume=req.resume,
    )
    return TeacherMetaInfo.model_validate(meta)


@router.put("", response_model=TeacherMetaInfo, summary="Update own teacher profile")
def update_teacher_info(
    req: TeacherMetaUpdateRequest,
    current_user: TeacherDep,
    meta_manager: TeacherMetaManagerDep,
) -> TeacherMetaInfo:
    meta = meta_manager.update_meta(current_user.id, **req.model_dump())
    return TeacherMetaInfo.model_validate(meta)


@router.delete("", response_model=MessageResponse, summary="Delete own teacher profile")
def delete_teacher_info(
    current_user: TeacherDep, meta_manager: TeacherMetaManagerDep
) -> MessageResponse:
    meta_manager.delete_meta(current_user.id)
    return MessageResponse(message="Teacher metadata deleted successfully")
