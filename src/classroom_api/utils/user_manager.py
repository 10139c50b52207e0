"""User management utilities.

This module provides user storage, password hashing, and credential checks.
"""

import logging
from typing import List, Optional

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from classroom_api.config import BCRYPT_ROUNDS
from classroom_api.core.exceptions import UserAlreadyExistsError, UserNotFoundError
from classroom_api.models.user import Role, UserModel

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > _BCRYPT_MAX_BYTES:
        logger.warning(
            "Password exceeds %d bytes, truncating", _BCRYPT_MAX_BYTES
        )
        password_bytes = password_bytes[:_BCRYPT_MAX_BYTES]
    return password_bytes


class UserManager:
    """Manages user data persistence and operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                _password_bytes(plain_password), hashed_password.encode("utf-8")
            )
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False

    def create_user(
        self,
        username: str,
        password: str,
        role: Role,
        name: Optional[str] = None,
        surname: Optional[str] = None,
        commit: bool = True,
    ) -> UserModel:
        """Create a new user.

        Args:
            username: Username for the new user.
            password: Plain text password.
            role: Global role of the user.
            name: Optional first name.
            surname: Optional surname.
            commit: Commit immediately; pass False to keep the insert in the
                caller's transaction.

        Returns:
            Created UserModel.

        Raises:
            UserAlreadyExistsError: If username already exists.
        """
        if self.get_user_by_username(username) is not None:
            raise UserAlreadyExistsError(username)

        user = UserModel(
            username=username,
            password_hash=self.hash_password(password),
            role_id=int(role),
            name=name,
            surname=surname,
        )
        # Two concurrent signups can both pass the check above; the unique
        # index on username decides
        try:
            self.db.add(user)
            self.db.flush()
            if commit:
                self.db.commit()
                self.db.refresh(user)
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError(username) from e

        logger.info("Created user: %s (role=%s)", username, Role(user.role_id).name)
        return user

    def authenticate(self, username: str, password: str) -> Optional[UserModel]:
        """Return the user if the credentials match, None otherwise."""
        user = self.get_user_by_username(username)
        if user is None:
            return None
        if not self.verify_password(password, user.password_hash):
            return None
        return user

    def get_user_by_username(self, username: str) -> Optional[UserModel]:
        """Get a user by username.

        Args:
            username: Username to look up.

        Returns:
            UserModel if found, None otherwise.
        """
        return self.db.query(UserModel).filter(UserModel.username == username).first()

    def get_user_by_id(self, user_id: int) -> Optional[UserModel]:
        """Get a user by user ID.

        Args:
            user_id: User ID to look up.

        Returns:
            UserModel if found, None otherwise.
        """
        return self.db.query(UserModel).filter(UserModel.id == user_id).first()

    def get_user(self, user_id: int) -> UserModel:
        """Like get_user_by_id but raises UserNotFoundError."""
        user = self.get_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def get_users_by_ids(self, user_ids: List[int]) -> List[UserModel]:
        if not user_ids:
            return []
        return self.db.query(UserModel).filter(UserModel.id.in_(user_ids)).all()

    def list_users(self) -> List[UserModel]:
        """List all users.

        Returns:
            List of UserModel objects ordered by id.
        """
        return self.db.query(UserModel).order_by(UserModel.id).all()

    def list_classroom_users(self, classroom_id: str) -> List[UserModel]:
        return (
            self.db.query(UserModel)
            .filter(UserModel.classroom_id == classroom_id)
            .order_by(UserModel.id)
            .all()
        )
