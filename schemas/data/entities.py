from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional

from core.entities import Collection, EntityType
from core.state import AppState


def coerce_id(value: Any) -> Any:
    """Spreadsheet IDs often arrive as numbers (1 or 1.0); keep them as strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return value


# Field types are deliberately loose: malformed cells must reach the
# validation engine and come back as findings, not as 422 responses.
class ClientRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    ClientID: Optional[Any] = None
    ClientName: Optional[Any] = None
    PriorityLevel: Optional[Any] = None
    RequestedTaskIDs: Optional[Any] = None
    GroupTag: Optional[Any] = None
    AttributesJSON: Optional[Any] = None

    @field_validator("ClientID", mode="before")
    @classmethod
    def id_as_string(cls, value: Any) -> Any:
        return coerce_id(value)

    @field_validator("RequestedTaskIDs", mode="before")
    @classmethod
    def references_as_strings(cls, value: Any) -> Any:
        # references must line up with the string-coerced TaskIDs
        if isinstance(value, list):
            return [coerce_id(v) for v in value]
        return value


class WorkerRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    WorkerID: Optional[Any] = None
    WorkerName: Optional[Any] = None
    Skills: Optional[Any] = None
    AvailableSlots: Optional[Any] = None
    MaxLoadPerPhase: Optional[Any] = None
    WorkerGroup: Optional[Any] = None
    QualificationLevel: Optional[Any] = None

    @field_validator("WorkerID", mode="before")
    @classmethod
    def id_as_string(cls, value: Any) -> Any:
        return coerce_id(value)


class TaskRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    TaskID: Optional[Any] = None
    TaskName: Optional[Any] = None
    Category: Optional[Any] = None
    Duration: Optional[Any] = None
    RequiredSkills: Optional[Any] = None
    PreferredPhases: Optional[Any] = None
    MaxConcurrent: Optional[Any] = None

    @field_validator("TaskID", mode="before")
    @classmethod
    def id_as_string(cls, value: Any) -> Any:
        return coerce_id(value)


def _dump(records: List[BaseModel]) -> Collection:
    # unset fields stay absent so "missing" and "null" remain distinguishable
    return [record.model_dump(exclude_unset=True) for record in records]


class DataSnapshot(BaseModel):
    """The caller's current clients, workers and tasks."""

    clients: List[ClientRecord] = Field(default_factory=list)
    workers: List[WorkerRecord] = Field(default_factory=list)
    tasks: List[TaskRecord] = Field(default_factory=list)

    def collections(self) -> Dict[EntityType, Collection]:
        return {
            EntityType.CLIENTS: _dump(self.clients),
            EntityType.WORKERS: _dump(self.workers),
            EntityType.TASKS: _dump(self.tasks),
        }

    def to_state(self) -> AppState:
        data = self.collections()
        return AppState(
            clients=data[EntityType.CLIENTS],
            workers=data[EntityType.WORKERS],
            tasks=data[EntityType.TASKS],
        )
