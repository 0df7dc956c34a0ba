"""Three-layer identity context and outbound text safety for conversational agents."""

from agent_identity.domain.context import (
    IdentityAggregator,
    MemoryNotAvailable,
    MemorySource,
    format_system_prompt,
    load_identity_context,
)
from agent_identity.domain.models.identity_state import (
    IdentityConfig,
    IdentityContext,
    ScanFinding,
    ScanPattern,
    ScanResult,
    Segment,
    Severity,
)
from agent_identity.domain.safety.code_segmenter import segment_code
from agent_identity.domain.safety.outbound_scanner import extract_text, scan_outbound
from agent_identity.domain.safety.patterns import DEFAULT_SAFETY_PATTERNS, DEFAULT_SCAN_PATTERNS
from agent_identity.domain.safety.redactor import REDACTION_MARKER, redact_outbound
from agent_identity.domain.safety.safety_filter import strip_internal_context

__all__ = [
    "DEFAULT_SAFETY_PATTERNS",
    "DEFAULT_SCAN_PATTERNS",
    "IdentityAggregator",
    "IdentityConfig",
    "IdentityContext",
    "MemoryNotAvailable",
    "MemorySource",
    "REDACTION_MARKER",
    "ScanFinding",
    "ScanPattern",
    "ScanResult",
    "Segment",
    "Severity",
    "extract_text",
    "format_system_prompt",
    "load_identity_context",
    "redact_outbound",
    "scan_outbound",
    "segment_code",
    "strip_internal_context",
]
