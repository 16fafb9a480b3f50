"""
Client configuration endpoint.

Only presentation settings are exposed; downloader credentials and
secrets never leave the server.
"""

from fastapi import APIRouter

from shared.config import get_settings
from shared.models import CamelModel

router = APIRouter()


class ClientConfigResponse(CamelModel):
    port: int
    default_background: str


@router.get("", response_model=ClientConfigResponse)
async def get_client_config() -> ClientConfigResponse:
    settings = get_settings()
    return ClientConfigResponse(
        port=settings.port,
        default_background=settings.default_background,
    )
