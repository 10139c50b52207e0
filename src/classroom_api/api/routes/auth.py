"""Authentication routes.

This module handles HTTP endpoints for signup, login, and child registration.
"""

import logging

from fastapi import APIRouter, status

from classroom_api.core.dependencies import ParentChildManagerDep, UserManagerDep
from classroom_api.core.exceptions import AuthenticationError, ValidationError
from classroom_api.core.permissions import CurrentUserDep, ParentDep
from classroom_api.core.security import create_access_token
from classroom_api.models.user import Role
from classroom_api.schemas.user import (
    LoginRequest,
    RegisterChildRequest,
    RegisterChildResponse,
    SignupRequest,
    TokenResponse,
    UserPublic,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

# Students are created by their parent through /auth/register-child
SIGNUP_ROLES = (Role.PARENT, Role.TEACHER)


@router.post(
    "/signup",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a parent or teacher",
)
def signup(req: SignupRequest, user_manager: UserManagerDep) -> TokenResponse:
    """Create a parent or teacher account and return a session token.

    Args:
        req: Signup request with username, password, role and names.
        user_manager: Injected UserManager instance.

    Returns:
        TokenResponse with a 24h token.

    Raises:
        ValidationError: If the role is not allowed or the username is taken.
    """
    if req.role_id not in SIGNUP_ROLES:
        raise ValidationError("Invalid role. Must be 2 (parent) or 3 (teacher)")

    user = user_manager.create_user(
        username=req.username,
        password=req.password,
        role=Role(req.role_id),
        name=req.name,
        surname=req.surname,
    )
    token = create_access_token(user.id, user.username, user.role_id)
    return TokenResponse(token=token)


@router.post("/login", response_model=TokenResponse, summary="Log in")
def login(req: LoginRequest, user_manager: UserManagerDep) -> TokenResponse:
    """Login with username and password.

    Raises:
        AuthenticationError: If the credentials do not match.
    """
    user = user_manager.authenticate(req.username, req.password)
    if user is None:
        raise AuthenticationError("Invalid credentials")
    token = create_access_token(user.id, user.username, user.role_id)
    return TokenResponse(token=token)


@router.post(
    "/register-child",
    response_model=RegisterChildResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a student account linked to the calling parent",
)
def register_child(
    req: RegisterChildRequest,
    current_user: ParentDep,
    user_manager: UserManagerDep,
    parent_child_manager: ParentChildManagerDep,
) -> RegisterChildResponse:
    """Create a student and link it as a child of the caller.

    The account and the guardianship edge are committed together.
    """
    child = user_manager.create_user(
        username=req.username,
        password=req.password,
        role=Role.STUDENT,
        name=req.name,
        surname=req.surname,
        commit=False,
    )
    parent_child_manager.link(current_user.id, child.id)
    logger.info("Parent %s registered child %s", current_user.id, child.id)
    return RegisterChildResponse(
        message="Child registered successfully",
        child=UserPublic.model_validate(child),
    )


@router.get("/me", response_model=UserPublic, summary="Current user")
def me(current_user: CurrentUserDep) -> UserPublic:
    return UserPublic.model_validate(current_user)
