"""
Creates the scope-of-work plan.
What it does:
- Sends the user's raw prompt to the LLM planner prompt
- Extracts whatever JSON the model returned
- Normalizes it into a Plan (bounded steps, typed lists)

And, the main purpose:
Convert a raw prompt into a presentable, bounded plan.
"""



from preplanner.core.config import settings
from preplanner.core.logging import get_logger
from preplanner.llm.json_parse import try_extract_structured
from preplanner.llm.prompts import planner_prompts
from preplanner.llm.router import CompletionService
from preplanner.llm.schemas import Plan
from preplanner.agent.normalize import PLAN_STEP_LIMIT, normalize_plan

log = get_logger("agent.planner")

async def make_plan(
    llm: CompletionService, *, project_id: str, user_raw_prompt: str, max_steps: int | None = None
) -> Plan:
    max_steps = min(max_steps or settings.MAX_PLAN_STEPS, PLAN_STEP_LIMIT)
    system, user = planner_prompts(user_raw_prompt, max_steps)
    text = await llm.complete(system, user)
    plan = normalize_plan(try_extract_structured(text), user_raw_prompt, max_steps=max_steps)
    log.info(f"plan for project={project_id}: {len(plan.steps)} steps, {len(plan.questions)} questions")
    return plan
