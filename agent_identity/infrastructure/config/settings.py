"""Identity and safety settings loaded from the environment."""

from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from agent_identity.domain.models.identity_state import IdentityConfig
from agent_identity.domain.safety.patterns import DEFAULT_SAFETY_PATTERNS


class IdentitySettings(BaseSettings):
    """Settings read from AGENT_IDENTITY_* variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="AGENT_IDENTITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Three-layer identity
    # List fields are pipe-delimited in the environment: "q1|q2"
    alignment_queries: Annotated[List[str], NoDecode] = Field(default_factory=list)
    representation_query: Optional[str] = None
    max_conclusions: int = 20
    search_top_k: int = 15
    values: Optional[str] = None
    principles: Annotated[List[str], NoDecode] = Field(default_factory=list)
    role_name: str = "agent"
    timeout_ms: int = 5000
    cache_ttl_ms: int = 30_000

    # Safety
    enable_safety_filter: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("alignment_queries", "principles", mode="before")
    @classmethod
    def split_pipe_delimited(cls, value):
        if isinstance(value, str):
            return [item.strip() for item in value.split("|") if item.strip()]
        return value

    def to_identity_config(self) -> IdentityConfig:
        """Build the per-call identity config these settings describe"""

        return IdentityConfig(
            alignment_queries=self.alignment_queries,
            representation_query=self.representation_query,
            max_conclusions=self.max_conclusions,
            search_top_k=self.search_top_k,
            safety_patterns=list(DEFAULT_SAFETY_PATTERNS) if self.enable_safety_filter else None,
            principles=self.principles,
            values=self.values,
            role_name=self.role_name,
            timeout_ms=self.timeout_ms,
        )


@lru_cache
def get_settings() -> IdentitySettings:
    """Get cached settings instance."""
    return IdentitySettings()
