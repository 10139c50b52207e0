from typing import List

from fastapi import APIRouter, status

from classroom_api.core.dependencies import GameManagerDep
from classroom_api.core.permissions import CurrentUserDep, TeacherDep
from classroom_api.schemas.common import MessageResponse
from classroom_api.schemas.game import GameInfo, GameRequest

router = APIRouter(prefix="/games", tags=["Games"])


@router.post(
    "",
    response_model=GameInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Create a game",
)
def create_game(
    req: GameRequest, current_user: TeacherDep, game_manager: GameManagerDep
) -> GameInfo:
    return GameInfo.model_validate(game_manager.create_game(req.name))


@router.get("", response_model=List[GameInfo], summary="List games")
def list_games(current_user: CurrentUserDep, game_manager: GameManagerDep) -> List[GameInfo]:
    return [GameInfo.model_validate(game) for game in game_manager.list_games()]


@router.get("/{game_id}", response_model=GameInfo, summary="Get a game")
def get_game(
    game_id: str, current_user: CurrentUserDep, game_manager: GameManagerDep
) -> GameInfo:
    return GameInfo.model_validate(game_manager.get_game(game_id))


@router.put("/{game_id}", response_model=GameInfo, summary="Rename a game")
def update_game(
    game_id: str,
    req: GameRequest,
    current_user: TeacherDep,
    game_manager: GameManagerDep,
) -> GameInfo:
    return GameInfo.model_validate(game_manager.update_game(game_id, req.name))


@router.delete("/{game_id}", response_model=MessageResponse, summary="Delete a game")
def delete_game(
    game_id: str, current_user: TeacherDep, game_manager: GameManagerDep
) -> MessageResponse:
    game_manager.delete_game(game_id)
    return MessageResponse(message="Game deleted successfully")
