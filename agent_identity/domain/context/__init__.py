# This module handles identity context engineering

# +---------------------+  +---------------------+  +---------------------+
# | Layer 1: Foundation |  | Layer 2: Alignment  |  | Layer 3: Recent     |
# |---------------------|  |---------------------|  |---------------------|
# | Peer card           |  | chat(query) per     |  | representation()    |
# | Curated, stable     |  |   alignment query   |  | Search-scoped,      |
# |                     |  | Synthesized         |  |   ephemeral         |
# +---------------------+  +---------------------+  +---------------------+
#            \                       |                        |
#             \                      |                 [safety filter]
#              \                     |                        |
#               v                    v                        v
#         +-----------------------------------------------------+
#         |              Identity context (one deadline)        |
#         |-----------------------------------------------------|
#         | Role | Identity | Understanding | Recent Context |   |
#         | Values | Operating Principles                       |
#         +-----------------------------------------------------+
#                                  |
#                                  v
#                        [system prompt for the LLM]

from .identity_aggregator import IdentityAggregator, load_identity_context
from .memory_source import MemoryNotAvailable, MemorySource
from .prompt_assembler import format_system_prompt

__all__ = [
    "IdentityAggregator",
    "MemoryNotAvailable",
    "MemorySource",
    "format_system_prompt",
    "load_identity_context",
]
