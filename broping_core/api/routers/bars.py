"""
broping router module for /bars requests

Bars can only be created and read. There's no way to update or
delete them via the API (yet), even though the store would allow it.
"""

import logging

from fastapi import APIRouter, Depends

from .. import envelope, helpers
from ..dependency import LocalRequestData
from ..resources import BARS, ResourceService
from ... import schemas


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bars",
    tags=["Bars"],
    responses={k: {"model": schemas.Envelope} for k in (400, 404, 500)}
)


@router.post("", response_model=schemas.Envelope)
@router.post("/", include_in_schema=False)
async def create_new_bar(local: LocalRequestData = Depends(LocalRequestData)):
    """
    Create a new active bar from the JSON body of the request

    * `400`: if the body is missing or malformed, the ID is
        empty or a bar with this ID has been created before
    """

    bar = await helpers.decode_body(local.request, BARS)
    return envelope.reply_key(ResourceService(BARS, local.store, logger).create(bar))


@router.get("/{id}", response_model=schemas.Envelope)
async def get_bar(id: str, local: LocalRequestData = Depends(LocalRequestData)):  # noqa
    """
    Return the bar with the given ID

    * `404`: if there's no bar with that ID
    """

    bar = ResourceService(BARS, local.store, logger).read(id)
    return envelope.write_response(bar.document(), 200)
