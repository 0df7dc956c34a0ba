from typing import Annotated

from fastapi import APIRouter, Depends, Request
import structlog

from agent_identity.application.api.schema.requests import IdentityRequest
from agent_identity.domain.context.identity_aggregator import IdentityAggregator
from agent_identity.domain.context.memory_source import MemorySource
from agent_identity.domain.models.identity_state import IdentityContext
from agent_identity.infrastructure.config.settings import IdentitySettings

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/identity", tags=["identity"])


def get_aggregator(request: Request) -> IdentityAggregator:
    return request.app.state.aggregator


def get_memory_source(request: Request) -> MemorySource:
    return request.app.state.memory_source


def get_identity_settings(request: Request) -> IdentitySettings:
    return request.app.state.settings


@router.post("/context", response_model=IdentityContext)
async def identity_context_endpoint(
    request: IdentityRequest,
    aggregator: Annotated[IdentityAggregator, Depends(get_aggregator)],
    owner: Annotated[MemorySource, Depends(get_memory_source)],
    settings: Annotated[IdentitySettings, Depends(get_identity_settings)]
):
    """Assemble the owner's identity context and system prompt"""

    config = request.config or settings.to_identity_config()

    logger.info("Identity context requested", owner_id=owner.id, custom_config=request.config is not None)

    return await aggregator.aggregate(owner, config)


@router.delete("/cache", status_code=204)
async def invalidate_cache_endpoint(
    aggregator: Annotated[IdentityAggregator, Depends(get_aggregator)]
):
    """Force the next identity request to reload from the memory service"""

    aggregator.invalidate()
