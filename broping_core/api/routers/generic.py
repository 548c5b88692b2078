"""
broping router module generic functionalities
"""

from fastapi import APIRouter

from .. import envelope
from ... import schemas


router = APIRouter(tags=["Generic"])


@router.get("/health", response_model=schemas.Envelope)
async def verify_running_backend():
    """
    Return 200 OK with an empty object as content to only verify that the service works
    """

    return envelope.write_response({}, 200)
