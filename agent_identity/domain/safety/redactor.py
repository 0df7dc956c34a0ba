from typing import Sequence

from agent_identity.domain.models.identity_state import ScanPattern, Severity
from agent_identity.domain.safety.code_segmenter import segment_code
from agent_identity.domain.safety.patterns import DEFAULT_SCAN_PATTERNS

REDACTION_MARKER = "[REDACTED]"


def redact_outbound(text: str, patterns: Sequence[ScanPattern] = DEFAULT_SCAN_PATTERNS) -> str:
    """Replace block-severity matches with REDACTION_MARKER.

    Code segments, fences and backticks included, are returned unchanged.
    Warn-severity patterns never redact.

    Each non-code segment is matched on its own. ``scan_outbound`` matches the
    non-code text joined together, so a secret split by a code span, as in
    ``sk-`x`abc...``, can be flagged by the scan yet left in place here.
    """

    blockers = [p.pattern for p in patterns if p.severity == Severity.BLOCK]
    parts = []

    for segment in segment_code(text):
        if segment.is_code:
            parts.append(segment.text)
            continue

        redacted = segment.text
        for pattern in blockers:
            redacted = pattern.sub(REDACTION_MARKER, redacted)
        parts.append(redacted)

    return "".join(parts)
