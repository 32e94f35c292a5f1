from typing import TypeVar

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from preplanner.agent.executor import StepRequest, run_step
from preplanner.agent.planner import make_plan
from preplanner.agent.projects import ProjectValidationError, register_project
from preplanner.api.types import PlanRequest, RunStepRequest, SaveProjectRequest
from preplanner.core.logging import get_logger
from preplanner.db.session import get_session
from preplanner.llm.router import CompletionService, LLMError, RunIncompleteError, get_completion_service
from preplanner.llm.schemas import StepFailed


"""
FastAPI routes for the planner service.
What it provides:
- make_plan: raw prompt -> bounded scope-of-work plan
- run_step: plan step -> ZIP of generated files, or a continuation step
- save_project: validate and register a project id

And, the main purpose:
Expose the handlers over HTTP. Each route is POST only; other verbs get 405.
"""

log = get_logger("api.routes")

router = APIRouter()

M = TypeVar("M", bound=BaseModel)


async def _read_body(request: Request, model: type[M]) -> M | None:
    # unreadable or non-object bodies count as empty so required-field checks answer 400
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    try:
        return model.model_validate(body)
    except ValidationError as e:
        log.info(f"invalid {model.__name__}: {e.error_count()} errors")
        return None


def _upstream_error(e: LLMError) -> dict:
    payload = {"error": str(e)}
    if isinstance(e, RunIncompleteError):
        payload["runStatus"] = e.status
    return payload


@router.post("/make_plan")
async def api_make_plan(request: Request, llm: CompletionService = Depends(get_completion_service)):
    req = await _read_body(request, PlanRequest)
    if req is None or not req.projectId or not req.userRawPrompt:
        return JSONResponse({"error": "projectId and userRawPrompt required"}, status_code=400)

    try:
        plan = await make_plan(llm, project_id=req.projectId, user_raw_prompt=req.userRawPrompt)
    except LLMError as e:
        log.warning(f"make_plan upstream failure: {e}")
        return JSONResponse(_upstream_error(e), status_code=502)
    except Exception as e:
        log.exception("make_plan failed")
        return JSONResponse({"error": str(e)}, status_code=500)

    return plan.model_dump()


@router.post("/run_step")
async def api_run_step(request: Request, llm: CompletionService = Depends(get_completion_service)):
    req = await _read_body(request, RunStepRequest)
    if req is None:
        failed = StepFailed(error="projectId and stepId required")
        return JSONResponse(failed.model_dump(), status_code=failed.http_status)

    result = await run_step(
        llm,
        StepRequest(
            project_id=req.projectId,
            step_id=req.stepId,
            guard_word=req.guardWord,
            proposed_prompt=req.proposedPrompt,
            current_step_title=req.currentStepTitle,
        ),
    )
    if isinstance(result, StepFailed):
        return JSONResponse(result.model_dump(), status_code=result.http_status)
    return result.model_dump()


@router.post("/save_project")
async def api_save_project(request: Request, db: AsyncSession = Depends(get_session)):
    req = await _read_body(request, SaveProjectRequest)
    if req is None:
        return JSONResponse({"ok": False, "error": "Missing fields"}, status_code=400)

    try:
        project_id = await register_project(db, name=req.name, tech=req.tech, project_id=req.projectId)
    except ProjectValidationError as e:
        return JSONResponse({"ok": False, "error": str(e)}, status_code=400)
    except Exception as e:
        log.exception("save_project failed")
        return JSONResponse({"ok": False, "error": str(e)}, status_code=500)

    return {"ok": True, "projectId": project_id}
