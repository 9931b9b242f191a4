"""HTTP routes for user management.

Each handler makes the user manager calls for one operation and maps the
outcome onto a status code. Ids in the path are taken verbatim: an id that
matches no user is simply not found.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from identity.application.services import UserManager
from identity.dependencies.user import get_user_manager
from identity.domain.aggregates import User
from identity.domain.value_objects import UserId
from identity.presentation.errors import bad_request, identity_failure
from identity.presentation.users.models import (
    CreateUserRequest,
    EditUserRequest,
    ErrorDetail,
    ErrorResponse,
    UserResponse,
)

router = APIRouter(
    prefix="/users",
    tags=["users"],
)

_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid request"}}
_NOT_FOUND = {404: {"description": "User not found"}}


def _not_found(user_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"User {user_id} not found",
    )


@router.get("")
async def list_users(
    manager: Annotated[UserManager, Depends(get_user_manager)],
) -> list[UserResponse]:
    """List all users.

    No pagination or filtering; users are ordered by user name.
    """
    users = await manager.list_users()
    return [UserResponse.from_domain(user) for user in users]


@router.get("/{user_id}", responses=_NOT_FOUND)
async def get_user(
    user_id: str,
    manager: Annotated[UserManager, Depends(get_user_manager)],
) -> UserResponse:
    """Get a user by ID.

    Raises:
        HTTPException: 404 if the user does not exist
    """
    user = await manager.find_by_id(UserId(value=user_id))
    if user is None:
        raise _not_found(user_id)
    return UserResponse.from_domain(user)


@router.put(
    "/{user_id}",
    response_model=None,
    responses={200: {"description": "User updated"}, **_BAD_REQUEST, **_NOT_FOUND},
)
async def edit_user(
    user_id: str,
    request: EditUserRequest,
    manager: Annotated[UserManager, Depends(get_user_manager)],
) -> Response:
    """Update a user's user name, phone number and email.

    User name and phone number are assigned directly. The email goes through
    the manager so it is validated and marked unconfirmed; all changes are
    then persisted together.

    Raises:
        HTTPException: 400 if the path and body ids differ, or the manager
            rejects the email or the update
        HTTPException: 404 if the user does not exist
    """
    if user_id != request.id:
        raise bad_request([ErrorDetail(field="id", message="User ID mismatch")])

    user = await manager.find_by_id(UserId(value=request.id))
    if user is None:
        raise _not_found(request.id)

    user.user_name = request.user_name
    user.phone_number = request.phone_number

    email_result = await manager.set_email(user, request.email)
    if not email_result.succeeded:
        raise identity_failure(email_result)

    update_result = await manager.update(user)
    if not update_result.succeeded:
        raise identity_failure(update_result)

    return Response(status_code=status.HTTP_200_OK)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses=_BAD_REQUEST,
)
async def create_user(
    request: CreateUserRequest,
    http_request: Request,
    response: Response,
    manager: Annotated[UserManager, Depends(get_user_manager)],
) -> UserResponse:
    """Create a user.

    The password is hashed by the manager and never echoed back. The
    Location header points at the new user's GET endpoint.

    Raises:
        HTTPException: 400 with every violated rule if creation fails
    """
    user = User.create(
        user_name=request.user_name,
        email=request.email,
        phone_number=request.phone_number,
    )

    result = await manager.create(user, request.password)
    if not result.succeeded:
        raise identity_failure(result)

    response.headers["Location"] = str(
        http_request.url_for("get_user", user_id=user.id.value)
    )
    return UserResponse.from_domain(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        204: {"description": "User deleted successfully"},
        **_BAD_REQUEST,
        **_NOT_FOUND,
    },
)
async def delete_user(
    user_id: str,
    manager: Annotated[UserManager, Depends(get_user_manager)],
) -> None:
    """Delete a user.

    Raises:
        HTTPException: 404 if the user does not exist
        HTTPException: 400 if the manager rejects the deletion
    """
    user = await manager.find_by_id(UserId(value=user_id))
    if user is None:
        raise _not_found(user_id)

    result = await manager.delete(user)
    if not result.succeeded:
        raise identity_failure(result)
