"""Tests for identity configuration models and environment settings."""

import os
import re

import pytest
from pydantic import ValidationError

from agent_identity.domain.models.identity_state import IdentityConfig
from agent_identity.domain.safety.patterns import DEFAULT_SAFETY_PATTERNS
from agent_identity.infrastructure.config.settings import IdentitySettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from AGENT_IDENTITY_* variables and any local .env file."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("AGENT_IDENTITY_"):
            monkeypatch.delenv(key)


class TestIdentityConfig:
    def test_defaults(self):
        config = IdentityConfig()

        assert config.alignment_queries == []
        assert config.representation_query is None
        assert config.max_conclusions == 20
        assert config.search_top_k == 15
        assert config.safety_patterns is None
        assert config.principles == []
        assert config.values is None
        assert config.role_name == "agent"
        assert config.timeout_ms == 5000

    def test_accepts_camel_case_keys(self):
        config = IdentityConfig.model_validate({
            "alignmentQueries": ["q1"],
            "representationQuery": "style",
            "roleName": "communicator",
            "timeoutMs": 250,
        })

        assert config.alignment_queries == ["q1"]
        assert config.representation_query == "style"
        assert config.role_name == "communicator"
        assert config.timeout_ms == 250

    def test_pattern_strings_are_compiled(self):
        config = IdentityConfig(safety_patterns=[r"(?i)budget", re.compile(r"port", re.I)])

        assert all(isinstance(p, re.Pattern) for p in config.safety_patterns)
        assert config.safety_patterns[1].flags & re.I

    def test_invalid_pattern_is_rejected(self):
        with pytest.raises(ValidationError):
            IdentityConfig(safety_patterns=["("])

    def test_negative_timeout_is_rejected(self):
        with pytest.raises(ValidationError):
            IdentityConfig(timeout_ms=-1)

    def test_is_immutable(self):
        config = IdentityConfig()
        with pytest.raises(ValidationError):
            config.role_name = "other"


class TestIdentitySettings:
    def test_defaults(self):
        settings = IdentitySettings()

        assert settings.alignment_queries == []
        assert settings.enable_safety_filter is False
        assert settings.cache_ttl_ms == 30_000

    def test_reads_pipe_delimited_lists(self, monkeypatch):
        monkeypatch.setenv("AGENT_IDENTITY_ALIGNMENT_QUERIES", "What do they value? | How do they talk?|")
        monkeypatch.setenv("AGENT_IDENTITY_PRINCIPLES", "Be brief")

        settings = IdentitySettings()

        assert settings.alignment_queries == ["What do they value?", "How do they talk?"]
        assert settings.principles == ["Be brief"]

    def test_reads_scalars(self, monkeypatch):
        monkeypatch.setenv("AGENT_IDENTITY_ROLE_NAME", "communicator")
        monkeypatch.setenv("AGENT_IDENTITY_TIMEOUT_MS", "1200")
        monkeypatch.setenv("AGENT_IDENTITY_ENABLE_SAFETY_FILTER", "true")

        settings = IdentitySettings()

        assert settings.role_name == "communicator"
        assert settings.timeout_ms == 1200
        assert settings.enable_safety_filter is True

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("AGENT_IDENTITY_VALUES=Precision over volume.\n")

        assert IdentitySettings().values == "Precision over volume."

    def test_identity_config_without_safety_filter(self):
        config = IdentitySettings(role_name="communicator", principles=["Be brief"]).to_identity_config()

        assert config.role_name == "communicator"
        assert config.principles == ["Be brief"]
        assert config.safety_patterns is None

    def test_identity_config_with_safety_filter(self):
        config = IdentitySettings(enable_safety_filter=True).to_identity_config()

        assert config.safety_patterns == list(DEFAULT_SAFETY_PATTERNS)
