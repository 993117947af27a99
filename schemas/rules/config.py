from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from core.rules import default_priorities


class RuleDraft(BaseModel):
    """A rule as submitted from the rule editor; checked by build_rule."""

    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    tasks: Optional[Any] = None
    workerGroup: Optional[Any] = None
    maxSlotsPerPhase: Optional[Any] = None
    taskID: Optional[Any] = None
    allowedPhases: Optional[Any] = None


class RulesExportRequest(BaseModel):
    rules: List[RuleDraft] = Field(default_factory=list)
    priorities: Dict[str, float] = Field(default_factory=default_priorities)


class PrioritiesRequest(BaseModel):
    current: Dict[str, float] = Field(default_factory=default_priorities)
    updates: Dict[str, Any] = Field(default_factory=dict)
