from typing import Dict, List, Any, Optional
import asyncio

from agent_identity.domain.context.memory_source import MemoryNotAvailable


class InMemoryMemorySource:
    """In-process memory source for local development and tests"""

    def __init__(
        self,
        peer_id: str = "owner",
        card: Optional[List[str]] = None,
        answers: Optional[Dict[str, Optional[str]]] = None,
        representation_text: Optional[str] = None,
        delay: float = 0.0
    ):
        self.id = peer_id
        self.card = card
        self.answers: Dict[str, Optional[str]] = answers or {}
        self.representation_text = representation_text
        self.delay = delay
        self.calls: List[Dict[str, Any]] = []
        self._lock = asyncio.Lock()

    async def get_card(self) -> List[str]:
        """Get the curated peer card"""

        await self._record("get_card")

        if self.card is None:
            raise MemoryNotAvailable(f"No peer card for {self.id}")
        return list(self.card)

    async def chat(self, query: str) -> Optional[str]:
        """Answer a question from the canned answers"""

        await self._record("chat", query=query)
        return self.answers.get(query)

    async def representation(
        self,
        *,
        search_query: Optional[str] = None,
        search_top_k: Optional[int] = None,
        include_most_frequent: bool = True,
        max_conclusions: int = 20
    ) -> Optional[str]:
        """Return the stored representation"""

        await self._record(
            "representation",
            search_query=search_query,
            search_top_k=search_top_k,
            include_most_frequent=include_most_frequent,
            max_conclusions=max_conclusions
        )
        return self.representation_text

    async def set_answer(self, query: str, answer: Optional[str]):
        """Set the answer returned for a query"""

        async with self._lock:
            self.answers[query] = answer

    async def _record(self, operation: str, **kwargs):
        async with self._lock:
            self.calls.append({"operation": operation, **kwargs})

        if self.delay:
            await asyncio.sleep(self.delay)

    def call_count(self, operation: Optional[str] = None) -> int:
        """Number of calls received, optionally for one operation"""

        if operation is None:
            return len(self.calls)
        return sum(1 for call in self.calls if call["operation"] == operation)
