import re
from typing import List

from agent_identity.domain.models.identity_state import Segment

# Non-greedy: a fence closes at the nearest following fence.
_FENCED_RX = re.compile(r"```[\s\S]*?```")
_INLINE_RX = re.compile(r"`[^`]+`")


def segment_code(text: str) -> List[Segment]:
    """Split text into code and non-code segments.

    Fenced blocks are found first, delimiters and language tag included.
    Inline spans are only searched for in the text between fenced blocks.
    Joining the segment texts in order gives back the original text.
    """

    segments: List[Segment] = []
    cursor = 0

    for fence in _FENCED_RX.finditer(text):
        segments.extend(_split_inline(text[cursor:fence.start()]))
        segments.append(Segment(text=fence.group(0), is_code=True))
        cursor = fence.end()

    segments.extend(_split_inline(text[cursor:]))
    return segments


def _split_inline(stretch: str) -> List[Segment]:
    segments: List[Segment] = []
    cursor = 0

    for span in _INLINE_RX.finditer(stretch):
        if span.start() > cursor:
            segments.append(Segment(text=stretch[cursor:span.start()]))
        segments.append(Segment(text=span.group(0), is_code=True))
        cursor = span.end()

    if cursor < len(stretch):
        segments.append(Segment(text=stretch[cursor:]))

    return segments


def non_code_text(text: str) -> str:
    """Join the non-code segments of text, dropping every code span"""

    return "".join(s.text for s in segment_code(text) if not s.is_code)
