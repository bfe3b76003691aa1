"""Strip the relay's own mention tokens from message text."""

import re
from typing import Optional

_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_content(raw_text: Optional[str], self_id: Optional[int]) -> str:
    """Remove ``<@ID>`` / ``<@!ID>`` for self_id, collapse whitespace, strip."""
    if not raw_text:
        return ""
    if not self_id:
        return raw_text.strip()
    mention_re = re.compile(rf"<@!?{re.escape(str(self_id))}>")
    without = mention_re.sub(" ", raw_text)
    return _WHITESPACE_RE.sub(" ", without).strip()
