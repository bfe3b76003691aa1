"""Extract reply text from the backend's response.

Automation pipelines wrap their answer differently, so extraction is an
ordered list of rules; the first rule that yields text wins:

1. ``{"output": "..."}``
2. ``[{"output": "..."}]`` or ``[{"json": {"output": "..."}}]``
3. ``{"data": {"output": "..."}}``
4. the raw response text, stripped
"""

from typing import Any, Callable, Optional, Tuple

from chat_relay import log
from chat_relay.ports.outbound import BackendResult, BackendSuccess


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def extract_output(result: BackendSuccess) -> Optional[str]:
    if isinstance(result.body, dict):
        return _text(result.body.get("output"))
    return None


def extract_first_item(result: BackendSuccess) -> Optional[str]:
    body = result.body
    if not isinstance(body, list) or not body:
        return None
    first = body[0]
    if not isinstance(first, dict):
        return None
    found = _text(first.get("output"))
    if found is None and isinstance(first.get("json"), dict):
        found = _text(first["json"].get("output"))
    return found


def extract_data_output(result: BackendSuccess) -> Optional[str]:
    body = result.body
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        return _text(body["data"].get("output"))
    return None


def extract_raw_text(result: BackendSuccess) -> Optional[str]:
    stripped = (result.text or "").strip()
    return stripped or None


Rule = Tuple[str, Callable[[BackendSuccess], Optional[str]]]

RULES: Tuple[Rule, ...] = (
    ("output", extract_output),
    ("first_item", extract_first_item),
    ("data_output", extract_data_output),
    ("raw_text", extract_raw_text),
)


def normalize(result: BackendResult) -> Optional[str]:
    """Return the reply text, or None when there is nothing to show."""
    if not isinstance(result, BackendSuccess):
        return None
    for name, rule in RULES:
        text = rule(result)
        if text is not None:
            log.debug(f"response matched rule {name}")
            return text
    return None
