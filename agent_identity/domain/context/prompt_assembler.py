from typing import List, Optional

from agent_identity.domain.models.identity_state import IdentityConfig


def format_system_prompt(
    peer_card: Optional[List[str]],
    alignment_responses: List[str],
    representation: Optional[str],
    config: Optional[IdentityConfig] = None
) -> str:
    """
    Format a system prompt from the three identity layers.

    Sections, in fixed order and only when they have content:
        1. Role declaration (always)
        2. Identity: peer card facts
        3. Understanding: alignment responses
        4. Recent Context: filtered representation
        5. Values
        6. Operating Principles
    """

    config = config or IdentityConfig()
    parts: List[str] = []

    parts.append(f"You are operating as the {config.role_name}.")
    parts.append("")

    if peer_card:
        parts.append("## Identity")
        parts.append("\n".join(f"• {fact}" for fact in peer_card))
        parts.append("")

    if alignment_responses:
        parts.append("## Understanding")
        for response in alignment_responses:
            parts.append(response)
            parts.append("")

    if representation:
        parts.append("## Recent Context")
        parts.append(representation)
        parts.append("")

    if config.values:
        parts.append("## Values")
        parts.append(config.values)
        parts.append("")

    if config.principles:
        parts.append("## Operating Principles")
        for principle in config.principles:
            parts.append(f"- {principle}")

    return "\n".join(parts)
