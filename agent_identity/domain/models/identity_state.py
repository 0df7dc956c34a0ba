import re
from typing import List, Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Severity(str, Enum):
    """Outbound finding severity"""
    BLOCK = "block"
    WARN = "warn"


class IdentityConfig(BaseModel):
    """Per-call configuration for three-layer identity loading.

    Accepts both snake_case field names and the camelCase keys used by
    host plugin configuration (``alignmentQueries``, ``timeoutMs``, ...).
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    alignment_queries: List[str] = Field(default_factory=list, description="Dialectic questions for the alignment layer")
    representation_query: Optional[str] = Field(None, description="Semantic search query for the representation layer")
    max_conclusions: int = Field(default=20, ge=0)
    search_top_k: int = Field(default=15, ge=0)
    safety_patterns: Optional[List[re.Pattern]] = Field(
        None,
        description="Line filters for recent context. None skips filtering, [] is a no-op filter",
    )
    principles: List[str] = Field(default_factory=list)
    values: Optional[str] = None
    role_name: str = Field(default="agent")
    timeout_ms: int = Field(default=5000, ge=0, description="Deadline for the whole identity load")


class IdentityContext(BaseModel):
    """Result of an identity aggregation"""
    model_config = ConfigDict(frozen=True)

    peer_card: Optional[List[str]] = Field(None, description="Curated facts, None when unavailable")
    alignment_responses: List[str] = Field(default_factory=list)
    representation: Optional[str] = None
    system_prompt: str


class ScanPattern(BaseModel):
    """Named outbound pattern. The compiled pattern keeps its own flags."""
    model_config = ConfigDict(frozen=True)

    name: str
    pattern: re.Pattern
    severity: Severity


class ScanFinding(BaseModel):
    pattern: str = Field(description="Name of the pattern that matched")
    match: str = Field(description="Matched text, truncated to 20 characters")
    severity: Severity


class ScanResult(BaseModel):
    """Outcome of scanning outbound text"""
    safe: bool
    findings: List[ScanFinding] = Field(default_factory=list)

    @property
    def blocked(self) -> List[ScanFinding]:
        return [f for f in self.findings if f.severity == Severity.BLOCK]

    @property
    def warnings(self) -> List[ScanFinding]:
        return [f for f in self.findings if f.severity == Severity.WARN]


class Segment(BaseModel):
    """A slice of text, flagged when it is a code span"""
    model_config = ConfigDict(frozen=True)

    text: str
    is_code: bool = False
