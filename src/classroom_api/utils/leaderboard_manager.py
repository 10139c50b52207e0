"""Game scores and paginated leaderboards."""

import logging
import secrets
from typing import List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from classroom_api import config
from classroom_api.core.exceptions import ValidationError
from classroom_api.models.leaderboard import LeaderboardEntryModel
from classroom_api.models.user import UserModel
from classroom_api.utils.game_manager import GameManager

logger = logging.getLogger(__name__)


def get_pagination_params(page: int = 1, limit: int = config.DEFAULT_PAGE_SIZE) -> Tuple[int, int, int]:
    """Clamp paging input.

    Returns:
        Tuple of (page, limit, offset) with page >= 1 and
        1 <= limit <= MAX_PAGE_SIZE.
    """
    page = max(1, page)
    limit = min(config.MAX_PAGE_SIZE, max(1, limit))
    return page, limit, (page - 1) * limit


class LeaderboardManager:
    """Records scores and reads them back ordered by value."""

    def __init__(self, db: Session):
        self.db = db

    def submit_score(self, user: UserModel, game_id: str, value: int) -> LeaderboardEntryModel:
        """Record a score for a user in their current classroom.

        Raises:
            ValidationError: If the user is not in a classroom.
            GameNotFoundError: If the game does not exist.
        """
        if not user.classroom_id:
            raise ValidationError("User must be in a classroom to submit scores")
        GameManager(self.db).get_game(game_id)

        entry = LeaderboardEntryModel(
            id=secrets.token_hex(8),
            game_id=game_id,
            user_id=user.id,
            classroom_id=user.classroom_id,
            value=value,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        logger.info("User %s scored %s on game %s", user.id, value, game_id)
        return entry

    def _page(self, condition, limit: int, offset: int) -> Tuple[List[dict], int]:
        rows = (
            self.db.query(LeaderboardEntryModel, UserModel)
            .join(UserModel, UserModel.id == LeaderboardEntryModel.user_id)
            .filter(condition)
            .order_by(
                LeaderboardEntryModel.value.desc(),
                LeaderboardEntryModel.created_at,
                LeaderboardEntryModel.id,
            )
            .limit(limit)
            .offset(offset)
            .all()
        )
        total = (
            self.db.query(func.count(LeaderboardEntryModel.id))
            .filter(condition)
            .scalar()
        )
        scores = [
            {
                "score": entry.value,
                "user_id": user.id,
                "username": user.username,
                "name": user.name,
                "surname": user.surname,
                "game_id": entry.game_id,
                "classroom_id": entry.classroom_id,
                "created_at": entry.created_at,
            }
            for entry, user in rows
        ]
        return scores, int(total or 0)

    def game_leaderboard(self, game_id: str, limit: int, offset: int) -> Tuple[List[dict], int]:
        return self._page(LeaderboardEntryModel.game_id == game_id, limit, offset)

    def classroom_leaderboard(self, classroom_id: str, limit: int, offset: int) -> Tuple[List[dict], int]:
        return self._page(LeaderboardEntryModel.classroom_id == classroom_id, limit, offset)

    def user_scores(self, user_id: int, limit: int, offset: int) -> Tuple[List[dict], int]:
        return self._page(LeaderboardEntryModel.user_id == user_id, limit, offset)
