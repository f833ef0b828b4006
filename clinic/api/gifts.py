"""Gift passthrough endpoint."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from clinic.api.dependencies import get_gift_client
from clinic.clients.gifts import GiftClient
from clinic.models.gift import Gift
from clinic.models.responses import MessageResponse
from clinic.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/gifts", tags=["Gifts"])

GIFTS_ERROR_MESSAGE = "Error retrieving gifts from external service"


@router.get(
    "",
    response_model=list[Gift],
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse}},
)
async def list_gifts(client: GiftClient = Depends(get_gift_client)):
    """List gifts available for patients, fetched from the external gifts API."""
    try:
        logger.info("Getting gifts for patients")
        return await client.list_gifts()
    except Exception as e:
        logger.error(f"Error getting gifts: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=MessageResponse(message=GIFTS_ERROR_MESSAGE).model_dump(),
        )
