"""
Pytest fixtures and test doubles for agent_identity tests.
"""

import asyncio
from typing import Dict, List, Optional

import pytest

from agent_identity.domain.context.memory.in_memory_source import InMemoryMemorySource
from agent_identity.domain.context.memory_source import MemoryNotAvailable
from agent_identity.infrastructure.observability.logging import metrics


class FailingMemorySource:
    """Memory source whose operations raise, selected per operation."""

    def __init__(
        self,
        peer_id: str = "owner",
        fail_card: bool = True,
        fail_chat: bool = True,
        fail_representation: bool = True,
    ):
        self.id = peer_id
        self.fail_card = fail_card
        self.fail_chat = fail_chat
        self.fail_representation = fail_representation

    async def get_card(self) -> List[str]:
        if self.fail_card:
            raise MemoryNotAvailable("no card yet")
        return ["fact"]

    async def chat(self, query: str) -> Optional[str]:
        if self.fail_chat:
            raise ConnectionError("memory service unreachable")
        return f"answer to {query}"

    async def representation(self, **kwargs) -> Optional[str]:
        if self.fail_representation:
            raise TimeoutError("representation timed out")
        return "recent context"


class ScriptedChatSource(InMemoryMemorySource):
    """Answers each query after its own delay, raising for Exception values."""

    def __init__(self, script: Dict[str, tuple], **kwargs):
        super().__init__(**kwargs)
        self.script = script

    async def chat(self, query: str) -> Optional[str]:
        delay, outcome = self.script[query]
        await asyncio.sleep(delay)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def owner():
    """A memory source with all three layers populated."""
    return InMemoryMemorySource(
        peer_id="owner",
        card=["Name: Eri", "Prefers concise answers"],
        answers={
            "What does the owner value?": "Essentialism and precision.",
            "How should I communicate?": "Directly, without filler.",
        },
        representation_text="Values autonomy\nBudget is $4.20 per day\nWrites every morning",
    )


@pytest.fixture
def failing_owner():
    return FailingMemorySource()


@pytest.fixture(autouse=True)
def clean_metrics():
    """Start every test with empty counters and latencies."""
    metrics.reset()
    yield
    metrics.reset()
