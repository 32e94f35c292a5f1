"""
API request schemas.
What it defines:
- Input payloads for the three handlers
- Field types (all optional here; presence is checked by the handlers
  so that missing fields answer 400 instead of 422)

And, the main purpose:
Ensure structured communication between client and server.
"""


from typing import Optional

from pydantic import BaseModel

class PlanRequest(BaseModel):
    projectId: Optional[str] = None
    userRawPrompt: Optional[str] = None

class RunStepRequest(BaseModel):
    projectId: Optional[str] = None
    stepId: Optional[str] = None
    guardWord: Optional[str] = None
    proposedPrompt: Optional[str] = None
    currentStepTitle: Optional[str] = None

class SaveProjectRequest(BaseModel):
    name: Optional[str] = None
    tech: Optional[str] = None
    projectId: Optional[str] = None
