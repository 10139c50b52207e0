import logging
import secrets
from typing import List

from sqlalchemy.orm import Session

from classroom_api.core.exceptions import GameNotFoundError
from classroom_api.models.game import GameModel
from classroom_api.models.leaderboard import LeaderboardEntryModel
from classroom_api.models.lesson import LessonModel

logger = logging.getLogger(__name__)


class GameManager:
    """CRUD for games."""

    def __init__(self, db: Session):
        self.db = db

    def create_game(self, name: str) -> GameModel:
        game = GameModel(id=secrets.token_hex(8), name=name)
        self.db.add(game)
        self.db.commit()
        self.db.refresh(game)
        logger.info("Created game %s (%s)", game.id, name)
        return game

    def get_game(self, game_id: str) -> GameModel:
        game = self.db.query(GameModel).filter(GameModel.id == game_id).first()
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    def list_games(self) -> List[GameModel]:
        return self.db.query(GameModel).order_by(GameModel.name).all()

    def missing_game_ids(self, game_ids: List[str]) -> List[str]:
        """Return the ids in game_ids that do not reference a game."""
        if not game_ids:
            return []
        found = {
            row.id
            for row in self.db.query(GameModel.id).filter(GameModel.id.in_(game_ids))
        }
        return [game_id for game_id in game_ids if game_id not in found]

    def update_game(self, game_id: str, name: str) -> GameModel:
        game = self.get_game(game_id)
        game.name = name
        self.db.commit()
        self.db.refresh(game)
        return game

    def delete_game(self, game_id: str) -> None:
        """Delete a game, its scores, and its id from every lesson."""
        game = self.get_game(game_id)
        for lesson in self.db.query(LessonModel).all():
            if game_id in (lesson.game_ids or []):
                lesson.game_ids = [i for i in lesson.game_ids if i != game_id]
        self.db.query(LeaderboardEntryModel).filter(
            LeaderboardEntryModel.game_id == game_id
        ).delete(synchronize_session="fetch")
        self.db.delete(game)
        self.db.commit()
        logger.info("Deleted game: %s", game_id)
