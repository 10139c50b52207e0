from typing import List

from fastapi import APIRouter, status

from classroom_api.core.dependencies import TagManagerDep
from classroom_api.core.permissions import CurrentUserDep, TeacherDep
from classroom_api.schemas.tag import TagInfo, TagRequest

router = APIRouter(prefix="/tags", tags=["Tags"])


@router.get("", response_model=List[TagInfo], summary="List tags")
def list_tags(current_user: CurrentUserDep, tag_manager: TagManagerDep) -> List[TagInfo]:
    return [TagInfo.model_validate(tag) for tag in tag_manager.list_tags()]


@router.post(
    "",
    response_model=TagInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Create a tag",
)
def create_tag(req: TagRequest, current_user: TeacherDep, tag_manager: TagManagerDep) -> TagInfo:
    return TagInfo.model_validate(tag_manager.create_tag(req.name))
