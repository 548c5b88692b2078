"""
broping router module for /users requests
"""

import logging

from fastapi import APIRouter, Depends

from .. import envelope, helpers
from ..dependency import LocalRequestData
from ..resources import USERS, ResourceService
from ... import schemas


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={k: {"model": schemas.Envelope} for k in (400, 404, 500)}
)


def get_service(local: LocalRequestData) -> ResourceService[schemas.User]:
    return ResourceService(USERS, local.store, logger)


@router.post("", response_model=schemas.Envelope)
@router.post("/", include_in_schema=False)
async def create_new_user(local: LocalRequestData = Depends(LocalRequestData)):
    """
    Create a new active user from the JSON body of the request

    * `400`: if the body is missing or malformed, the username is
        empty or a user with this username has been created before
    """

    user = await helpers.decode_body(local.request, USERS)
    return envelope.reply_key(get_service(local).create(user))


@router.get("/{username}", response_model=schemas.Envelope)
async def get_user(username: str, local: LocalRequestData = Depends(LocalRequestData)):
    """
    Return the user with the given username, even if it has been deleted

    * `404`: if there's no user with that username
    """

    user = get_service(local).read(username)
    return envelope.write_response(user.document(), 200)


@router.put("/{username}", response_model=schemas.Envelope)
async def update_user(username: str, local: LocalRequestData = Depends(LocalRequestData)):
    """
    Replace the user with the given username by the user in the JSON body

    The whole user will be replaced, including its `Active` flag.

    * `400`: if the body is missing or malformed or the username in
        the body doesn't equal the username in the path
    * `404`: if there's no user with that username
    """

    service = get_service(local)
    # unknown users are reported before the body is looked at
    service.fetch(username)
    user = await helpers.decode_body(local.request, USERS)
    return envelope.reply_key(service.update(username, user))


@router.delete("/{username}", response_model=schemas.Envelope)
async def delete_user(username: str, local: LocalRequestData = Depends(LocalRequestData)):
    """
    Disable the user with the given username, which will not be removed

    * `404`: if there's no user with that username
    """

    return envelope.reply_key(get_service(local).soft_delete(username))
