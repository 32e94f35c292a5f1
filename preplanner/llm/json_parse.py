import json
import re
from typing import Any

from preplanner.core.logging import get_logger

log = get_logger("llm.json_parse")

# ```json ... ``` anywhere in the reply: first the nearest closing fence,
# then the last one (file contents may carry their own ``` blocks)
_FENCED_JSON = re.compile(r"```json\s*(.*?)\s*```", re.IGNORECASE | re.DOTALL)
_FENCED_JSON_WIDE = re.compile(r"```json\s*(.*)```", re.IGNORECASE | re.DOTALL)


def _safe_snippet(text: str, n: int = 200) -> str:
    return (text or "")[:n].replace("\n", "\\n").replace("\r", "\\r")


def _loads_mapping(candidate: str) -> dict | None:
    try:
        value: Any = json.loads(candidate)
    except (TypeError, ValueError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def try_extract_structured(text: str) -> dict:
    """
    Best-effort conversion of a model reply into a JSON object.

    Tries the whole text first, then the first ```json fenced block,
    widened to the last closing fence when the nearest one cuts the JSON
    short.
    Anything that does not yield an object (empty text, garbage, a bare
    list or scalar) comes back as {}. Never raises.
    """
    if not isinstance(text, str) or not text.strip():
        return {}

    parsed = _loads_mapping(text)
    if parsed is not None:
        return parsed

    for pattern in (_FENCED_JSON, _FENCED_JSON_WIDE):
        m = pattern.search(text)
        if m:
            parsed = _loads_mapping(m.group(1))
            if parsed is not None:
                return parsed

    log.warning(f"No JSON object in model reply. Snippet={_safe_snippet(text)}")
    return {}
