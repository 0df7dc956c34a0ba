from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from agent_identity.domain.models.identity_state import IdentityConfig, ScanFinding


class IdentityRequest(BaseModel):
    """Identity context request. Without a config, service settings apply."""
    config: Optional[IdentityConfig] = Field(
        None,
        description="Per-call identity config; safety_patterns are regex strings"
    )


class OutboundRequest(BaseModel):
    """Outbound message to screen"""
    content: Union[str, List[Dict[str, Any]]] = Field(
        description="Message text, or a list of content blocks"
    )


class ScanResponse(BaseModel):
    safe: bool
    findings: List[ScanFinding] = Field(default_factory=list)
    cancel: bool = Field(False, description="True when the host should not send the message")


class RedactResponse(BaseModel):
    text: str
