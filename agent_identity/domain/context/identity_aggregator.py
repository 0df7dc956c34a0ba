from typing import Any, Dict, List, Optional, Set
import asyncio
import time

import structlog

from agent_identity.domain.models.identity_state import IdentityConfig, IdentityContext
from agent_identity.domain.context.memory_source import MemorySource
from agent_identity.domain.context.memory.identity_cache import IdentityCache
from agent_identity.domain.context.prompt_assembler import format_system_prompt
from agent_identity.domain.safety.safety_filter import strip_internal_context
from agent_identity.infrastructure.observability.logging import identity_logger, metrics

logger = structlog.get_logger(__name__)

IDENTITY_CACHE_TTL_MS = 30_000

# Tasks abandoned by a timeout, referenced until they finish
_background_tasks: Set[asyncio.Task] = set()


def _empty_layers() -> Dict[str, Any]:
    return {"peer_card": None, "alignment_responses": [], "representation": None}


async def load_identity_context(owner: MemorySource, config: Optional[IdentityConfig] = None) -> IdentityContext:
    """
    Load three-layer identity context for the owner.

    Layer 1: owner.get_card() -- curated facts, stable anchor
    Layer 2: owner.chat(query) per alignment query -- synthesized understanding
    Layer 3: owner.representation(...) -- recent, optionally search-scoped context

    The layers load concurrently and race a single deadline. If the deadline
    wins, every layer is treated as unavailable. Never raises.
    """

    config = config or IdentityConfig()
    started = time.perf_counter()

    task = asyncio.ensure_future(_load_layers(owner, config))
    done, _ = await asyncio.wait({task}, timeout=config.timeout_ms / 1000)

    if task in done:
        layers = task.result()
        timed_out = False
    else:
        # Abandon, don't cancel: the fetches finish in the background and are ignored
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)
        logger.warning("Identity load timed out", owner_id=owner.id, timeout_ms=config.timeout_ms)
        metrics.increment_counter("identity.timeout")
        layers = _empty_layers()
        timed_out = True

    representation = layers["representation"]
    if representation and config.safety_patterns is not None:
        representation = strip_internal_context(representation, config.safety_patterns)

    system_prompt = format_system_prompt(
        layers["peer_card"],
        layers["alignment_responses"],
        representation,
        config
    )

    duration_ms = (time.perf_counter() - started) * 1000
    metrics.record_latency("identity.load", duration_ms)
    identity_logger.log_identity_load(
        owner_id=owner.id,
        peer_card=layers["peer_card"] is not None,
        alignment_responses=len(layers["alignment_responses"]),
        representation=representation is not None,
        duration_ms=duration_ms,
        timed_out=timed_out
    )

    return IdentityContext(
        peer_card=layers["peer_card"],
        alignment_responses=layers["alignment_responses"],
        representation=representation,
        system_prompt=system_prompt
    )


async def _load_layers(owner: MemorySource, config: IdentityConfig) -> Dict[str, Any]:
    """Load all three layers concurrently. Each failure only empties its own layer."""

    card_result, chat_results, repr_result = await asyncio.gather(
        _fetch(owner.get_card),
        _load_alignment(owner, config.alignment_queries),
        _fetch(owner.representation, **_representation_options(config)),
        return_exceptions=True
    )

    peer_card = None
    if isinstance(card_result, BaseException):
        _log_unavailable(owner, "peer_card", card_result)
    else:
        peer_card = card_result

    alignment_responses: List[str] = []
    if isinstance(chat_results, BaseException):
        _log_unavailable(owner, "alignment", chat_results)
        chat_results = []
    for query, result in zip(config.alignment_queries, chat_results):
        if isinstance(result, BaseException):
            _log_unavailable(owner, "alignment", result, query=query)
        elif result:
            alignment_responses.append(result)

    representation = None
    if isinstance(repr_result, BaseException):
        _log_unavailable(owner, "representation", repr_result)
    else:
        representation = repr_result

    return {
        "peer_card": peer_card,
        "alignment_responses": alignment_responses,
        "representation": representation
    }


async def _fetch(operation, *args, **kwargs) -> Any:
    # Calling inside the coroutine lets gather capture errors raised on call
    return await operation(*args, **kwargs)


async def _load_alignment(owner: MemorySource, queries: List[str]) -> List[Any]:
    if not queries:
        return []
    # Results come back in query order regardless of completion order
    return await asyncio.gather(*(_fetch(owner.chat, q) for q in queries), return_exceptions=True)


def _representation_options(config: IdentityConfig) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "include_most_frequent": True,
        "max_conclusions": config.max_conclusions
    }
    if config.representation_query:
        options["search_query"] = config.representation_query
        options["search_top_k"] = config.search_top_k
    return options


def _log_unavailable(owner: MemorySource, layer: str, error: BaseException, **kwargs):
    if isinstance(error, asyncio.CancelledError):
        logger.warning("Identity layer cancelled", owner_id=owner.id, layer=layer, **kwargs)
        return
    logger.warning(
        "Identity layer unavailable",
        owner_id=owner.id,
        layer=layer,
        error=str(error) or type(error).__name__,
        **kwargs
    )


class IdentityAggregator:
    """Loads identity context, serving bursts of calls from a short-lived cache"""

    def __init__(self, cache_ttl_ms: int = IDENTITY_CACHE_TTL_MS, cache: Optional[IdentityCache] = None):
        self.cache = cache or IdentityCache(ttl_ms=cache_ttl_ms)
        self._lock = asyncio.Lock()

    async def aggregate(self, owner: MemorySource, config: Optional[IdentityConfig] = None) -> IdentityContext:
        """Return the cached context for the owner if fresh, otherwise load it"""

        # Serialized so concurrent callers share one refresh. The cache holds a
        # single owner, so callers for other owners also wait out a slow load.
        async with self._lock:
            started = time.perf_counter()
            cached = self.cache.get(owner.id)
            if cached is not None:
                metrics.increment_counter("identity.cache_hit")
                identity_logger.log_identity_load(
                    owner_id=owner.id,
                    peer_card=cached.peer_card is not None,
                    alignment_responses=len(cached.alignment_responses),
                    representation=cached.representation is not None,
                    duration_ms=(time.perf_counter() - started) * 1000,
                    cached=True
                )
                return cached

            context = await load_identity_context(owner, config)
            self.cache.set(owner.id, context)
            return context

    def invalidate(self):
        """Drop the cached context"""

        logger.info("Invalidating identity cache")
        self.cache.clear()
