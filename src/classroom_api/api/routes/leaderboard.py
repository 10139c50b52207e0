"""Leaderboard routes with page/limit pagination."""

from fastapi import APIRouter, Query, status

from classroom_api import config
from classroom_api.core.dependencies import LeaderboardManagerDep
from classroom_api.core.permissions import CurrentUserDep
from classroom_api.schemas.leaderboard import (
    LeaderboardEntryInfo,
    LeaderboardPage,
    Pagination,
    ScoreEntry,
    SubmitScoreRequest,
)
from classroom_api.utils.leaderboard_manager import get_pagination_params

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


def _build_page(scores, total: int, page: int, limit: int, offset: int) -> LeaderboardPage:
    return LeaderboardPage(
        data=[ScoreEntry(**score) for score in scores],
        pagination=Pagination(total=total, page=page, page_size=limit, offset=offset),
    )


@router.post(
    "",
    response_model=LeaderboardEntryInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a score",
)
def submit_score(
    req: SubmitScoreRequest,
    current_user: CurrentUserDep,
    leaderboard_manager: LeaderboardManagerDep,
) -> LeaderboardEntryInfo:
    """Record a score for the caller in their current classroom."""
    entry = leaderboard_manager.submit_score(current_user, req.game_id, req.value)
    return LeaderboardEntryInfo.model_validate(entry)


@router.get("/game/{game_id}", response_model=LeaderboardPage, summary="Scores of a game")
def game_leaderboard(
    game_id: str,
    current_user: CurrentUserDep,
    leaderboard_manager: LeaderboardManagerDep,
    page: int = Query(1),
    limit: int = Query(config.DEFAULT_PAGE_SIZE),
) -> LeaderboardPage:
    page, limit, offset = get_pagination_params(page, limit)
    scores, total = leaderboard_manager.game_leaderboard(game_id, limit, offset)
    return _build_page(scores, total, page, limit, offset)


@router.get(
    "/classroom/{classroom_id}",
    response_model=LeaderboardPage,
    summary="Scores in a classroom",
)
def classroom_leaderboard(
    classroom_id: str,
    current_user: CurrentUserDep,
    leaderboard_manager: LeaderboardManagerDep,
    page: int = Query(1),
    limit: int = Query(config.DEFAULT_PAGE_SIZE),
) -> LeaderboardPage:
    page, limit, offset = get_pagination_params(page, limit)
    scores, total = leaderboard_manager.classroom_leaderboard(classroom_id, limit, offset)
    return _build_page(scores, total, page, limit, offset)


@router.get("/user/{user_id}", response_model=LeaderboardPage, summary="Scores of a user")
def user_scores(
    user_id: int,
    current_user: CurrentUserDep,
    leaderboard_manager: LeaderboardManagerDep,
    page: int = Query(1),
    limit: int = Query(config.DEFAULT_PAGE_SIZE),
) -> LeaderboardPage:
    page, limit, offset = get_pagination_params(page, limit)
    scores, total = leaderboard_manager.user_scores(user_id, limit, offset)
    return _build_page(scores, total, page, limit, offset)
