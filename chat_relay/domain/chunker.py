"""Split long replies into segments that fit Discord's message limit."""

from typing import List

DISCORD_MESSAGE_LIMIT = 2000


def _cut_index(text: str, max_len: int) -> int:
    # A break at index 0 would emit nothing, so it counts as not found
    idx = text.rfind("\n", 0, max_len + 1)
    if idx <= 0:
        idx = text.rfind(" ", 0, max_len + 1)
    if idx <= 0:
        idx = max_len
    return idx


def split_into_chunks(text: str, max_len: int = DISCORD_MESSAGE_LIMIT) -> List[str]:
    """Split text at newlines, then spaces, then hard at max_len.

    At least one segment is always returned; empty text yields [""]. Segments
    are stripped at cut points, so joining them loses only whitespace there.
    """
    if max_len <= 0:
        raise ValueError("max_len must be positive")
    if not text:
        return [""]
    chunks = []
    remaining = text
    while len(remaining) > max_len:
        idx = _cut_index(remaining, max_len)
        head = remaining[:idx].strip()
        if head:
            chunks.append(head)
        remaining = remaining[idx:].strip()
    if remaining or not chunks:
        chunks.append(remaining)
    return chunks
