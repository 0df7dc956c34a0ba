from typing import List, Optional, Protocol, runtime_checkable


class MemoryNotAvailable(Exception):
    """Raised by a memory source when the requested data does not exist yet"""


@runtime_checkable
class MemorySource(Protocol):
    """The three memory-service operations identity loading depends on.

    Implementations wrap the memory service's view of the owner peer. Any of
    the calls may raise; the aggregator treats a failure as "unavailable".
    """

    id: str

    async def get_card(self) -> List[str]:
        """Curated facts about the owner. Raises MemoryNotAvailable if none exist."""
        ...

    async def chat(self, query: str) -> Optional[str]:
        """Synthesized answer to a question, None when there is not enough data."""
        ...

    async def representation(
        self,
        *,
        search_query: Optional[str] = None,
        search_top_k: Optional[int] = None,
        include_most_frequent: bool = True,
        max_conclusions: int = 20
    ) -> Optional[str]:
        """Recent, optionally search-scoped, synthesized context."""
        ...
