"""
Runs ONE plan step.
What it does:
- Rejects missing fields and a wrong guard word before any model call
- Asks the LLM code generator for the step's files
- Counts generated lines against the hard MAX_LINES budget
- Either defers the work to a follow-up (N+1) step or packs a ZIP
- Turns any upstream/archive exception into a failed result

And, the main purpose:
Enforce the line budget independently of what the model reports.
"""


from dataclasses import dataclass
from typing import Iterable, Optional

from preplanner.core.config import settings
from preplanner.core.logging import get_logger
from preplanner.llm.json_parse import try_extract_structured
from preplanner.llm.prompts import codegen_prompts
from preplanner.llm.router import CompletionService, LLMError
from preplanner.llm.schemas import (
    GeneratedFile,
    PlanStep,
    StepContinue,
    StepFailed,
    StepPassed,
    StepResult,
)
from preplanner.agent.normalize import coerce_files
from preplanner.tools.archive import pack_files, to_data_url

log = get_logger("agent.executor")

DEFAULT_CONTINUE_NOTE = "This step exceeds the line limit; continuing in N+1."
VALIDATOR_SUMMARY = "CI/lint/tests to be run on PR in GitHub."


@dataclass
class StepRequest:
    project_id: Optional[str]
    step_id: Optional[str]
    guard_word: Optional[str]
    proposed_prompt: Optional[str] = None
    current_step_title: Optional[str] = None


def follow_up_step(step_id: str) -> PlanStep:
    return PlanStep(id=f"{step_id}-nplus1", title=f"Continue {step_id} (N+1)")


def count_lines(files: Iterable[GeneratedFile]) -> int:
    # every file counts at least one line, even when empty
    return sum(len(f.contents.split("\n")) for f in files)


def decide_continuation(
    out: dict, files: list[GeneratedFile], *, step_id: str, max_lines: int
) -> Optional[StepContinue]:
    """
    Returns a continue result when the step must be split, else None.

    The model's own "continue" wins over the measured line count; the line
    cap is still applied when the model claims everything fit.
    """
    status = out.get("status")
    if isinstance(status, str) and status.strip().lower() == "continue":
        note = out.get("note")
        if not (isinstance(note, str) and note.strip()):
            note = DEFAULT_CONTINUE_NOTE
        return StepContinue(note=note, addedStep=follow_up_step(step_id))

    total = count_lines(files)
    if total > max_lines:
        note = (
            f"Generated {total} lines across {len(files)} files; the limit is {max_lines}. "
            "Continuing in N+1."
        )
        return StepContinue(note=note, addedStep=follow_up_step(step_id))
    return None


async def run_step(
    llm: CompletionService,
    req: StepRequest,
    *,
    guard_word: str | None = None,
    max_lines: int | None = None,
) -> StepResult:
    guard_word = settings.GUARD_WORD if guard_word is None else guard_word
    max_lines = settings.MAX_LINES if max_lines is None else max_lines

    if not req.project_id or not req.step_id:
        return StepFailed(error="projectId and stepId required")
    if req.guard_word != guard_word:
        return StepFailed(error="Guard word mismatch")

    system, user = codegen_prompts(
        step_id=req.step_id,
        max_lines=max_lines,
        proposed_prompt=req.proposed_prompt,
        step_title=req.current_step_title,
    )

    try:
        text = await llm.complete(system, user)
        out = try_extract_structured(text)
        files = coerce_files(out.get("files"))

        cont = decide_continuation(out, files, step_id=req.step_id, max_lines=max_lines)
        if cont is not None:
            log.info(f"step {req.step_id} (project={req.project_id}) continues: {cont.note}")
            return cont

        zip_url = to_data_url(pack_files(files))
    except LLMError as e:
        log.warning(f"step {req.step_id} upstream failure: {e}")
        return StepFailed(error=str(e), http_status=502)
    except Exception as e:
        log.exception(f"step {req.step_id} failed")
        return StepFailed(error=str(e), http_status=500)

    log.info(f"step {req.step_id} (project={req.project_id}) passed with {len(files)} files")
    return StepPassed(zipUrl=zip_url, githubPrUrl=None, validatorSummary=VALIDATOR_SUMMARY)
