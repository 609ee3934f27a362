"""
User endpoints.

    POST   /user              -> 201 {"count": n}
    GET    /users             -> 200 [User, ...]
    DELETE /user/{username}   -> 204

Failures are raised as typed errors and rendered by error_handlers.py.
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from user_service.core.dependencies import get_user_program
from user_service.program.user_program import UserProgram
from user_service.schemas.user import CreateUserPayload, SuccessfulResponse, User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.post("/user", status_code=status.HTTP_201_CREATED, response_model=SuccessfulResponse)
async def insert_user(
    payload: CreateUserPayload,
    program: UserProgram = Depends(get_user_program),
) -> SuccessfulResponse:
    count = await program.insert_user(payload.to_user())
    return SuccessfulResponse(count=count)


@router.get(
    "/users",
    response_model=list[User],
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def get_all_users(program: UserProgram = Depends(get_user_program)) -> list[User]:
    users = await program.get_all_users()
    logger.debug("Returning %d users", len(users))
    return users


@router.delete("/user/{username}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_by_username(
    username: str,
    program: UserProgram = Depends(get_user_program),
) -> Response:
    await program.delete_user_by_username(username)
    # 204 carries no payload
    return Response(status_code=status.HTTP_204_NO_CONTENT)
