"""
Built-in pattern sets.

DEFAULT_SAFETY_PATTERNS strip operational detail (costs, hosts, schedules)
from recent context before it reaches the model. DEFAULT_SCAN_PATTERNS screen
outbound text for secrets, infrastructure and PII. Both are tuples so they
cannot be mutated in place; callers override them by passing their own lists.
"""

import re
from typing import Iterable, List, Union

from agent_identity.domain.models.identity_state import ScanPattern, Severity

PatternLike = Union[str, re.Pattern]


def compile_pattern(pattern: PatternLike) -> re.Pattern:
    """Return a compiled pattern. Compiled input is returned as-is so its flags survive."""

    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


def compile_patterns(patterns: Iterable[PatternLike]) -> List[re.Pattern]:
    return [compile_pattern(p) for p in patterns]


DEFAULT_SAFETY_PATTERNS = (
    re.compile(r"\$\d+\.\d{2,}"),                                # cost figures ($0.0042)
    re.compile(r"budget|spending|cost.*usd|daily.*limit", re.I),
    re.compile(r"\bport\s*\d{2,5}\b", re.I),
    re.compile(r"\b(?:droplet|thinkpad|raspberry|node)\b", re.I),  # host names
    re.compile(r"(?:/Users/|/home/)\w+/"),
    re.compile(r"\b100\.\d{1,3}\.\d{1,3}\.\d{1,3}\b"),           # tailscale CGNAT range
    re.compile(r"\b\w+\.tailnet[\w.-]*"),
    re.compile(r"health.*(?:check|report|status)", re.I),
    re.compile(r"error.*(?:rate|count|spike)", re.I),
    re.compile(r"uptime.*\d+%", re.I),
    re.compile(r"cron|schedule.*(?:every|interval)", re.I),
    re.compile(r"\b\d{12}\b"),                                    # AWS account ids
    re.compile(r"\b\w+\.(?:internal|local)\b"),
    re.compile(r"Bearer\s+[a-zA-Z0-9._~+/=-]+", re.I),
    re.compile(r"\blocalhost:\d{2,5}\b"),
    re.compile(r"webhooks?\.[\w.-]+", re.I),
)


DEFAULT_SCAN_PATTERNS = (
    # secrets and credentials
    ScanPattern(name="api-key", pattern=re.compile(r"\b(?:sk|hc|pk|ak|rk)[-_][a-zA-Z0-9]{20,}\b"), severity=Severity.BLOCK),
    ScanPattern(name="private-key", pattern=re.compile(r"-----BEGIN (?:RSA |EC |OPENSSH )?PRIVATE KEY-----"), severity=Severity.BLOCK),
    ScanPattern(name="env-secret", pattern=re.compile(r"(?:API_KEY|SECRET|TOKEN|PASSWORD)\s*=\s*\S+", re.I), severity=Severity.BLOCK),
    ScanPattern(name="bearer-token", pattern=re.compile(r"Bearer\s+[a-zA-Z0-9._~+/=-]{20,}", re.I), severity=Severity.BLOCK),

    # infrastructure
    ScanPattern(name="system-path", pattern=re.compile(r"(?:/Users/|/home/)\w+/"), severity=Severity.BLOCK),
    ScanPattern(name="tailscale-ip", pattern=re.compile(r"\b100\.\d{1,3}\.\d{1,3}\.\d{1,3}\b"), severity=Severity.BLOCK),
    ScanPattern(name="tailscale-dns", pattern=re.compile(r"\b\w+\.tailnet[\w.-]*"), severity=Severity.BLOCK),
    ScanPattern(name="internal-port", pattern=re.compile(r"\blocalhost:\d{2,5}\b"), severity=Severity.BLOCK),
    ScanPattern(name="internal-dns", pattern=re.compile(r"\b\w+\.(?:internal|local)\b"), severity=Severity.WARN),

    # PII, warn only since sharing may be intentional
    ScanPattern(name="email", pattern=re.compile(r"\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b"), severity=Severity.WARN),
    ScanPattern(name="phone", pattern=re.compile(r"\b(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b"), severity=Severity.WARN),

    ScanPattern(name="ssn", pattern=re.compile(r"\b\d{3}-\d{2}-\d{4}\b"), severity=Severity.BLOCK),
)
