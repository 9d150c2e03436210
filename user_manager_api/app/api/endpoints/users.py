"""
User endpoints.

Five routes, each a thin wrapper around one ``UserService`` call.
Successful calls answer with ``{"success": true, ...}``; failures are
raised as store errors and turned into ``{"success": false,
"message": ...}`` by the handlers in ``core.error_handlers``.

Request bodies may be sent as JSON or as
``application/x-www-form-urlencoded`` form data.
"""

import json

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError as PydanticValidationError

from user_manager_api.app.core.errors import ValidationError
from user_manager_api.app.schemas.user import (
    DeleteResponse,
    ErrorResponse,
    UserPayload,
    UserResponse,
    UsersResponse,
)
from user_manager_api.app.services.user_service import UserService

router = APIRouter()

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

FAILURE_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


async def read_user_payload(request: Request) -> UserPayload:
    """Parse the request body into a ``UserPayload``.

    An empty body is treated as an empty object so that the missing
    fields are reported by the validation rules.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        data = {key: value for key, value in form.items() if isinstance(value, str)}
    else:
        body = await request.body()
        if not body.strip():
            data = {}
        else:
            try:
                data = json.loads(body)
            except ValueError as exc:
                raise ValidationError("Request body must be valid JSON") from exc
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return UserPayload.model_validate(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ValidationError(f"Invalid {field}: {first['msg']}") from exc


@router.post(
    "/createUser",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=FAILURE_RESPONSES,
)
async def create_user(payload: UserPayload = Depends(read_user_payload)) -> UserResponse:
    """Create a user from ``name`` and ``email``."""
    user = await UserService.create_user(payload.name, payload.email)
    return UserResponse(user=user)


@router.get("/getUsers", response_model=UsersResponse)
async def get_users() -> UsersResponse:
    """Return every stored user."""
    users = await UserService.list_users()
    return UsersResponse(users=users)


@router.put("/editUser/{user_id}", response_model=UserResponse, responses=FAILURE_RESPONSES)
async def edit_user(user_id: str, payload: UserPayload = Depends(read_user_payload)) -> UserResponse:
    """Replace the name and email of user ``user_id``."""
    user = await UserService.update_user(user_id, payload.name, payload.email)
    return UserResponse(user=user)


@router.delete("/deleteUser/{user_id}", response_model=DeleteResponse, responses=FAILURE_RESPONSES)
async def delete_user(user_id: str) -> DeleteResponse:
    """Delete user ``user_id`` permanently."""
    await UserService.delete_user(user_id)
    return DeleteResponse()
