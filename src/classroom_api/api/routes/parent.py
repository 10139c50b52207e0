"""Guardianship routes for parents."""

from typing import List

from fastapi import APIRouter, status

from classroom_api.core.dependencies import ParentChildManagerDep
from classroom_api.core.permissions import ParentDep
from classroom_api.schemas.common import MessageResponse
from classroom_api.schemas.user import UserPublic

router = APIRouter(prefix="/parent", tags=["Parent"])


@router.get("/children", response_model=List[UserPublic], summary="List own children")
def list_children(
    current_user: ParentDep, parent_child_manager: ParentChildManagerDep
) -> List[UserPublic]:
    return [
        UserPublic.model_validate(child)
        for child in parent_child_manager.list_children(current_user.id)
    ]


@router.post(
    "/children/{child_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Link an existing student as a child",
)
def add_child(
    child_id: int,
    current_user: ParentDep,
    parent_child_manager: ParentChildManagerDep,
) -> MessageResponse:
    """Link a student to the caller; linking twice keeps a single edge.

    Raises:
        UserNotFoundError: If the student does not exist.
        ValidationError: If the user is not a student.
    """
    parent_child_manager.link(current_user.id, child_id)
    return MessageResponse(message="Child added successfully")


@router.delete(
    "/children/{child_id}",
    response_model=MessageResponse,
    summary="Unlink a child",
)
def remove_child(
    child_id: int,
    current_user: ParentDep,
    parent_child_manager: ParentChildManagerDep,
) -> MessageResponse:
    parent_child_manager.unlink(current_user.id, child_id)
    return MessageResponse(message="Child removed successfully")
