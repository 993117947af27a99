from pydantic import BaseModel, Field
from typing import Dict, List

from core.rules import default_priorities
from schemas.data.entities import DataSnapshot
from schemas.rules.config import RuleDraft


class ConvertRuleRequest(BaseModel):
    description: str
    taskIds: List[str] = Field(default_factory=list)
    workerGroups: List[str] = Field(default_factory=list)


class AISearchRequest(DataSnapshot):
    entity: str
    query: str


class CopilotRequest(DataSnapshot):
    message: str
    rules: List[RuleDraft] = Field(default_factory=list)
    priorities: Dict[str, float] = Field(default_factory=default_priorities)
