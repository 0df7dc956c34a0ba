from typing import Optional
import uuid

from fastapi import FastAPI, Request
import structlog

from agent_identity.application.api.route import identity, outbound
from agent_identity.domain.context.identity_aggregator import IdentityAggregator
from agent_identity.domain.context.memory_source import MemorySource
from agent_identity.infrastructure.config.settings import IdentitySettings, get_settings
from agent_identity.infrastructure.observability.logging import metrics, setup_logging

logger = structlog.get_logger(__name__)


def create_app(memory_source: MemorySource, settings: Optional[IdentitySettings] = None) -> FastAPI:
    """Build the identity and outbound-safety API around a memory source"""

    settings = settings or get_settings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)

    app = FastAPI(title="Agent Identity Server")

    app.state.settings = settings
    app.state.memory_source = memory_source
    app.state.aggregator = IdentityAggregator(cache_ttl_ms=settings.cache_ttl_ms)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "ok",
            "identity_cache": app.state.aggregator.cache.get_stats(),
            "metrics": metrics.get_metrics_summary()
        }

    app.include_router(identity.router)
    app.include_router(outbound.router)

    logger.info("Identity server configured", owner_id=memory_source.id)

    return app


if __name__ == "__main__":
    import uvicorn
    from agent_identity.domain.context.memory.in_memory_source import InMemoryMemorySource

    uvicorn.run(create_app(InMemoryMemorySource()), host="0.0.0.0", port=8000)
