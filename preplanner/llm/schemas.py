from pydantic import BaseModel, Field
from typing import List, Literal, Optional, Union

class PlanStep(BaseModel):
    id: str = Field(..., description="Declared or positional step id")
    title: str

class Plan(BaseModel):
    proposedPrompt: str
    inScope: List[str] = []
    outOfScope: List[str] = []
    assumptions: List[str] = []
    acceptanceCriteria: List[str] = []
    questions: List[str] = []
    steps: List[PlanStep] = []

class GeneratedFile(BaseModel):
    path: str
    contents: str = ""

class StepPassed(BaseModel):
    status: Literal["passed"] = "passed"
    zipUrl: str
    githubPrUrl: Optional[str] = None
    validatorSummary: str

class StepContinue(BaseModel):
    status: Literal["continue"] = "continue"
    note: str
    addedStep: PlanStep

class StepFailed(BaseModel):
    status: Literal["failed"] = "failed"
    error: str
    http_status: int = Field(400, exclude=True)  # 400 input | 500 internal | 502 upstream

StepResult = Union[StepPassed, StepContinue, StepFailed]
