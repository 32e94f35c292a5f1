"""
Reshapes extracted model output into the fixed response contract.
What it does:
- Coerces list fields into lists of strings
- Bounds and defaults plan steps
- Coerces generated file entries
- Falls back to the user's prompt when the model drops it

And, the main purpose:
Whatever the model returns, callers always get every field with the right type.
"""


import json
from typing import Any

from preplanner.llm.schemas import GeneratedFile, Plan, PlanStep
from preplanner.tools.archive import sanitize_path

LIST_FIELDS = ("inScope", "outOfScope", "assumptions", "acceptanceCriteria", "questions")
PLAN_STEP_LIMIT = 10  # hard ceiling, whatever MAX_PLAN_STEPS says


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def coerce_str_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [_as_text(x) for x in value]


def normalize_steps(value: Any, limit: int = PLAN_STEP_LIMIT) -> list[PlanStep]:
    if not isinstance(value, list):
        return []
    limit = min(limit, PLAN_STEP_LIMIT)
    steps = []
    for i, raw in enumerate(value[:limit], start=1):
        entry = raw if isinstance(raw, dict) else {}
        step_id = entry.get("id") or f"s{i}"
        title = entry.get("title") or f"Step {i}"
        steps.append(PlanStep(id=_as_text(step_id), title=_as_text(title)))
    return steps


def coerce_files(value: Any) -> list[GeneratedFile]:
    if not isinstance(value, list):
        return []
    return [
        GeneratedFile(
            path=sanitize_path(_as_text(f.get("path") or "")),
            contents=_as_text(f.get("contents") or ""),
        )
        for f in value
        if isinstance(f, dict)
    ]


def proposed_prompt(value: Any, fallback: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return fallback


def normalize_plan(data: dict, user_raw_prompt: str, max_steps: int = PLAN_STEP_LIMIT) -> Plan:
    data = data if isinstance(data, dict) else {}
    return Plan(
        proposedPrompt=proposed_prompt(data.get("proposedPrompt"), user_raw_prompt),
        steps=normalize_steps(data.get("steps"), limit=max_steps),
        **{field: coerce_str_list(data.get(field)) for field in LIST_FIELDS},
    )
