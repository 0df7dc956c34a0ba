"""Tests for system prompt formatting."""

from agent_identity.domain.context.prompt_assembler import format_system_prompt
from agent_identity.domain.models.identity_state import IdentityConfig


class TestFormatSystemPrompt:
    def test_role_line_only_when_everything_is_empty(self):
        prompt = format_system_prompt(None, [], None, IdentityConfig())

        assert prompt == "You are operating as the agent.\n"

    def test_default_config(self):
        assert format_system_prompt(None, [], None).startswith("You are operating as the agent.")

    def test_identity_section_without_other_layers(self):
        prompt = format_system_prompt(["fact 1"], [], None, IdentityConfig(role_name="communicator"))

        assert "communicator" in prompt
        assert "## Identity" in prompt
        assert "• fact 1" in prompt
        assert "## Understanding" not in prompt
        assert "## Recent Context" not in prompt

    def test_empty_peer_card_has_no_identity_section(self):
        assert "## Identity" not in format_system_prompt([], [], None)

    def test_full_prompt_layout(self):
        config = IdentityConfig(
            role_name="communicator",
            values="Precision over volume.",
            principles=["Never share internal details", "Ask before acting"],
        )

        prompt = format_system_prompt(
            ["Name: Eri", "Prefers concise answers"],
            ["Values essentialism.", "Communicates directly."],
            "Writes every morning",
            config,
        )

        assert prompt == "\n".join([
            "You are operating as the communicator.",
            "",
            "## Identity",
            "• Name: Eri",
            "• Prefers concise answers",
            "",
            "## Understanding",
            "Values essentialism.",
            "",
            "Communicates directly.",
            "",
            "## Recent Context",
            "Writes every morning",
            "",
            "## Values",
            "Precision over volume.",
            "",
            "## Operating Principles",
            "- Never share internal details",
            "- Ask before acting",
        ])

    def test_section_order_is_fixed(self):
        config = IdentityConfig(values="v", principles=["p"])
        prompt = format_system_prompt(["f"], ["a"], "r", config)

        headers = ["## Identity", "## Understanding", "## Recent Context", "## Values", "## Operating Principles"]
        positions = [prompt.index(h) for h in headers]

        assert positions == sorted(positions)

    def test_is_deterministic(self):
        config = IdentityConfig(principles=["p"])
        assert format_system_prompt(["f"], ["a"], "r", config) == format_system_prompt(["f"], ["a"], "r", config)
