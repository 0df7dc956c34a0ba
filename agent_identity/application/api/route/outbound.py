from fastapi import APIRouter

from agent_identity.application.api.schema.requests import OutboundRequest, RedactResponse, ScanResponse
from agent_identity.domain.safety.outbound_scanner import extract_text, scan_outbound
from agent_identity.domain.safety.redactor import redact_outbound
from agent_identity.infrastructure.observability.logging import identity_logger, metrics

router = APIRouter(prefix="/api/v1/outbound", tags=["outbound"])


@router.post("/scan", response_model=ScanResponse)
async def scan_endpoint(request: OutboundRequest):
    """Screen an outbound message. Unsafe results ask the host to cancel sending."""

    text = extract_text(request.content)
    result = scan_outbound(text)

    identity_logger.log_outbound_scan(
        safe=result.safe,
        blocked=[f.pattern for f in result.blocked],
        warnings=[f.pattern for f in result.warnings],
        text_length=len(text)
    )

    if not result.safe:
        metrics.increment_counter("outbound.blocked")

    return ScanResponse(safe=result.safe, findings=result.findings, cancel=not result.safe)


@router.post("/redact", response_model=RedactResponse)
async def redact_endpoint(request: OutboundRequest):
    """Redact blocking matches outside code spans"""

    return RedactResponse(text=redact_outbound(extract_text(request.content)))
