TECH_STANDARDS = (
    "WDI React standards apply: React 18 + TypeScript, Radix UI, "
    "Redux Toolkit + RTK Query, and Tailwind or styled-components."
)


PLANNER_SYSTEM = """You are the WDI PRE Planner.
Rewrite the user prompt strictly in-scope based on an agreed Scope of Work.
Return JSON ONLY with keys:
proposedPrompt, inScope[], outOfScope[], assumptions[], acceptanceCriteria[], questions[], steps[] (<={max_steps} items with {{id,title}})."""


PLANNER_USER = """user_prompt:
{user_raw_prompt}

{standards} Produce <={max_steps} steps."""


CODEGEN_SYSTEM = """You are the WDI Code Generator for React 18 + TypeScript.
Write ONLY the requested step. Use Radix UI, Redux Toolkit + RTK Query, and Tailwind (or styled-components if specified).
Add inline TypeScript docs, Jest + React Testing Library tests, and an edge-case list.
Hard limit: {max_lines} lines across ALL files.
If more is needed, STOP and return: {{"status":"continue","note":"...","files":[]}}
Return JSON ONLY: {{"status":"ok|continue","files":[{{"path":"src/...","contents":"..."}}],"note":"optional"}}."""


CODEGEN_USER = """proposed_prompt:
{proposed_prompt}

current_step:
{current_step}
"""


def planner_prompts(user_raw_prompt: str, max_steps: int) -> tuple[str, str]:
    system = PLANNER_SYSTEM.format(max_steps=max_steps)
    user = PLANNER_USER.format(
        user_raw_prompt=user_raw_prompt, standards=TECH_STANDARDS, max_steps=max_steps
    )
    return system, user


def codegen_prompts(
    *, step_id: str, max_lines: int, proposed_prompt: str | None, step_title: str | None
) -> tuple[str, str]:
    system = CODEGEN_SYSTEM.format(max_lines=max_lines)
    user = CODEGEN_USER.format(
        proposed_prompt=proposed_prompt or "(provided earlier)",
        current_step=step_title or step_id,
    )
    return system, user
