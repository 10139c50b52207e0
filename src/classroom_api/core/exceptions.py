"""Custom exception classes for the classroom API.

Every exception raised by managers and permission checks carries the HTTP
status it maps to; the application renders them as ``{"message": ...}``.
"""


class ClassroomAPIError(Exception):
    """Base exception for all classroom API errors."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        """Initialize the exception.

        Args:
            message: Human readable message returned to the client.
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(ClassroomAPIError):
    """Raised when there is a configuration error."""

    pass


class ValidationError(ClassroomAPIError):
    """Raised when input is missing, malformed, or out of range."""

    status_code = 400


class AuthenticationError(ClassroomAPIError):
    """Raised when the bearer token is missing, invalid, or expired."""

    status_code = 401


class AuthorizationError(ClassroomAPIError):
    """Raised when a role, ownership, or guardianship check fails."""

    status_code = 403


class NotFoundError(ClassroomAPIError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class ConflictError(ClassroomAPIError):
    """Raised when a write lost a race against a concurrent change."""

    status_code = 409


class UserAlreadyExistsError(ValidationError):
    """Raised when trying to create a user whose username is taken."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("Username already exists")


class TagAlreadyExistsError(ValidationError):
    """Raised when a tag name is already in use."""

    def __init__(self, name: str):
        self.name = name
        super().__init__("Tag name already exists")


class ProfileAlreadyExistsError(ValidationError):
    """Raised when a teacher already has profile metadata."""

    def __init__(self):
        super().__init__("Teacher metadata already exists")


class UserNotFoundError(NotFoundError):
    """Raised when a requested user cannot be found."""

    def __init__(self, user_id):
        """Initialize the exception.

        Args:
            user_id: The ID of the user that was not found.
        """
        self.user_id = user_id
        super().__init__("User not found")


class ClassroomNotFoundError(NotFoundError):
    """Raised when a requested classroom cannot be found."""

    def __init__(self, classroom_id: str):
        """Initialize the exception.

        Args:
            classroom_id: The ID of the classroom that was not found.
        """
        self.classroom_id = classroom_id
        super().__init__("Classroom not found")


class LessonNotFoundError(NotFoundError):
    """Raised when a requested lesson cannot be found."""

    def __init__(self, lesson_id: str):
        self.lesson_id = lesson_id
        super().__init__("Lesson not found")


class GameNotFoundError(NotFoundError):
    """Raised when a requested game cannot be found."""

    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__("Game not found")


class GradeNotFoundError(NotFoundError):
    """Raised when no grade exists for a lesson and student."""

    def __init__(self, lesson_id: str, student_id: int):
        self.lesson_id = lesson_id
        self.student_id = student_id
        super().__init__("Grade not found")


class SummaryNotFoundError(NotFoundError):
    """Raised when a lesson has no summary file."""

    def __init__(self, lesson_id: str, message: str = "No summary file found"):
        self.lesson_id = lesson_id
        super().__init__(message)


class TeacherMetaNotFoundError(NotFoundError):
    """Raised when a teacher has no profile metadata."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__("Teacher metadata not found")
