"""
Outbound message scanning.

Agent responses are checked against named patterns before they reach a user.
Code spans are exempt: a documented `export API_KEY=your_key` example is not
a leaked secret.
"""

from typing import Any, List, Sequence

from agent_identity.domain.models.identity_state import ScanFinding, ScanPattern, ScanResult, Severity
from agent_identity.domain.safety.code_segmenter import non_code_text
from agent_identity.domain.safety.patterns import DEFAULT_SCAN_PATTERNS

MAX_MATCH_PREVIEW = 20


def scan_outbound(text: str, patterns: Sequence[ScanPattern] = DEFAULT_SCAN_PATTERNS) -> ScanResult:
    """Scan text for unsafe patterns.

    The result is unsafe if any block-severity pattern matches outside code.
    Warn findings are reported but never affect ``safe``.
    """

    scannable = non_code_text(text)
    findings: List[ScanFinding] = []

    for scan_pattern in patterns:
        for match in scan_pattern.pattern.finditer(scannable):
            findings.append(ScanFinding(
                pattern=scan_pattern.name,
                match=_preview(match.group(0)),
                severity=scan_pattern.severity
            ))

    safe = not any(f.severity == Severity.BLOCK for f in findings)
    return ScanResult(safe=safe, findings=findings)


def _preview(matched: str) -> str:
    if len(matched) > MAX_MATCH_PREVIEW:
        return matched[:MAX_MATCH_PREVIEW] + "..."
    return matched


def extract_text(content: Any) -> str:
    """Flatten a message payload into text.

    Strings pass through. A list of content blocks contributes the ``text`` of
    every ``{"type": "text"}`` block, one per line. Anything else is empty.
    """

    if isinstance(content, str):
        return content

    if isinstance(content, list):
        return "\n".join(
            block["text"] for block in content
            if isinstance(block, dict)
            and block.get("type") == "text"
            and isinstance(block.get("text"), str)
        )

    return ""
