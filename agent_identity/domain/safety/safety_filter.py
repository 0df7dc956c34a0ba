from typing import Optional, Sequence

from agent_identity.domain.safety.patterns import PatternLike, compile_patterns


def strip_internal_context(text: str, patterns: Sequence[PatternLike]) -> Optional[str]:
    """
    Remove operational detail from recent context, line by line.

    Any line matched by at least one pattern is dropped. Returns None when
    nothing survives. An empty pattern list returns the text untouched.

    Args:
        text: Representation text from the memory service
        patterns: Compiled patterns (flags kept) or pattern strings

    Returns:
        The filtered text, or None if every line was removed
    """

    if not patterns:
        return text

    compiled = compile_patterns(patterns)
    kept = [
        line for line in text.split("\n")
        if not any(p.search(line) for p in compiled)
    ]

    result = "\n".join(kept).strip()
    return result or None
