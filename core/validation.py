from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Set

from core.check_manager import CheckManager
from core.entities import (
    Collection,
    entity_id,
    hash_key,
    is_number,
    is_positive_integer,
)
from utils.constants import MAX_PRIORITY_LEVEL, MIN_PRIORITY_LEVEL
from utils.logger import logger

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class ValidationFinding:
    id: str
    message: str
    field: Optional[str] = None
    severity: str = ERROR

    @property
    def is_error(self) -> bool:
        return self.severity == ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "field": self.field,
            "message": self.message,
            "severity": self.severity,
        }


@dataclass
class ValidationData:
    """
    The tri-collection context every check group reads from.

    The lookup sets are built once per pass since the referential and
    skill-coverage checks are cross-entity.
    """

    clients: Collection
    workers: Collection
    tasks: Collection
    task_ids: Set[Any] = field(default_factory=set)
    """Every TaskID present in the task collection."""
    worker_skills: Set[Any] = field(default_factory=set)
    """Union of all workers' skills."""

    def __post_init__(self):
        self.task_ids = {hash_key(t.get("TaskID")) for t in self.tasks}
        self.worker_skills = {
            hash_key(skill)
            for w in self.workers
            if _is_sequence(w.get("Skills"))
            for skill in w["Skills"]
        }


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _all_strings(value: Any) -> bool:
    return _is_sequence(value) and all(isinstance(v, str) for v in value)


def _cid(c) -> str:
    return entity_id(c, "ClientID")


def _wid(w) -> str:
    return entity_id(w, "WorkerID")


def _tid(t) -> str:
    return entity_id(t, "TaskID")


# --- 1. Missing required columns & empty values ---
def check_required_fields(data: ValidationData) -> Iterator[ValidationFinding]:
    for c in data.clients:
        if not c.get("ClientID"):
            yield ValidationFinding(_cid(c), "Missing ClientID", "ClientID")
        if not c.get("ClientName"):
            yield ValidationFinding(_cid(c), "Missing ClientName", "ClientName")
        if not is_number(c.get("PriorityLevel")):
            yield ValidationFinding(
                _cid(c), "Missing or invalid PriorityLevel", "PriorityLevel"
            )

    for w in data.workers:
        if not w.get("WorkerID"):
            yield ValidationFinding(_wid(w), "Missing WorkerID", "WorkerID")
        if not w.get("WorkerName"):
            yield ValidationFinding(_wid(w), "Missing WorkerName", "WorkerName")
        if not is_number(w.get("MaxLoadPerPhase")):
            yield ValidationFinding(
                _wid(w), "Missing or invalid MaxLoadPerPhase", "MaxLoadPerPhase"
            )

    for t in data.tasks:
        if not t.get("TaskID"):
            yield ValidationFinding(_tid(t), "Missing TaskID", "TaskID")
        if not t.get("TaskName"):
            yield ValidationFinding(_tid(t), "Missing TaskName", "TaskName")
        if not is_number(t.get("Duration")):
            yield ValidationFinding(_tid(t), "Missing or invalid Duration", "Duration")
        if not is_number(t.get("MaxConcurrent")):
            yield ValidationFinding(
                _tid(t), "Missing or invalid MaxConcurrent", "MaxConcurrent"
            )


# --- 2. Duplicate IDs ---
def _duplicates(
    records: Collection, id_field: str, label: str
) -> Iterator[ValidationFinding]:
    seen = set()
    for record in records:
        raw = record.get(id_field)
        if raw is None:
            continue
        key = hash_key(raw)
        if key in seen:
            yield ValidationFinding(str(raw), f"Duplicate {label} ID found: {raw}")
        seen.add(key)


def check_duplicate_ids(data: ValidationData) -> Iterator[ValidationFinding]:
    yield from _duplicates(data.clients, "ClientID", "Client")
    yield from _duplicates(data.workers, "WorkerID", "Worker")
    yield from _duplicates(data.tasks, "TaskID", "Task")


# --- 3. Malformed lists & out-of-range values ---
def check_shapes_and_ranges(data: ValidationData) -> Iterator[ValidationFinding]:
    for c in data.clients:
        if not _is_sequence(c.get("RequestedTaskIDs")):
            yield ValidationFinding(
                _cid(c), "RequestedTaskIDs is not an array", "RequestedTaskIDs"
            )
        level = c.get("PriorityLevel")
        if is_number(level) and not MIN_PRIORITY_LEVEL <= level <= MAX_PRIORITY_LEVEL:
            yield ValidationFinding(
                _cid(c),
                f"PriorityLevel must be between {MIN_PRIORITY_LEVEL} and {MAX_PRIORITY_LEVEL}",
                "PriorityLevel",
            )
        attributes = c.get("AttributesJSON")
        if attributes and not isinstance(attributes, dict):
            yield ValidationFinding(_cid(c), "AttributesJSON is malformed", "AttributesJSON")

    for w in data.workers:
        if not _all_strings(w.get("Skills")):
            yield ValidationFinding(_wid(w), "Skills must be an array of strings", "Skills")
        slots = w.get("AvailableSlots")
        if not _is_sequence(slots) or not all(is_number(s) for s in slots):
            yield ValidationFinding(
                _wid(w), "AvailableSlots must be an array of numbers", "AvailableSlots"
            )
        max_load = w.get("MaxLoadPerPhase")
        if is_number(max_load) and max_load < 0:
            yield ValidationFinding(
                _wid(w), "MaxLoadPerPhase cannot be negative", "MaxLoadPerPhase"
            )

    for t in data.tasks:
        duration = t.get("Duration")
        if is_number(duration) and duration < 1:
            yield ValidationFinding(_tid(t), "Duration must be at least 1", "Duration")
        if not _all_strings(t.get("RequiredSkills")):
            yield ValidationFinding(
                _tid(t), "RequiredSkills must be an array of strings", "RequiredSkills"
            )
        phases = t.get("PreferredPhases")
        if not _is_sequence(phases) or not all(is_number(p) and p >= 1 for p in phases):
            yield ValidationFinding(
                _tid(t),
                "PreferredPhases must be an array of positive numbers",
                "PreferredPhases",
            )
        max_concurrent = t.get("MaxConcurrent")
        if is_number(max_concurrent) and max_concurrent < 1:
            yield ValidationFinding(
                _tid(t), "MaxConcurrent must be at least 1", "MaxConcurrent"
            )


# --- 4. Unknown references (Clients -> Tasks) ---
def check_task_references(data: ValidationData) -> Iterator[ValidationFinding]:
    for c in data.clients:
        requested = c.get("RequestedTaskIDs")
        if not _is_sequence(requested):
            continue
        for task_id in requested:
            if hash_key(task_id) not in data.task_ids:
                yield ValidationFinding(
                    _cid(c),
                    f'Requested Task ID "{task_id}" does not exist',
                    "RequestedTaskIDs",
                )


# --- 5. Skill-coverage matrix (Tasks -> Workers) ---
def check_skill_coverage(data: ValidationData) -> Iterator[ValidationFinding]:
    for t in data.tasks:
        required = t.get("RequiredSkills")
        if not _is_sequence(required):
            continue
        for skill in required:
            if hash_key(skill) not in data.worker_skills:
                yield ValidationFinding(
                    _tid(t),
                    f'No worker found with skill "{skill}"',
                    "RequiredSkills",
                    WARNING,
                )


# --- 6. Overloaded workers (MaxLoadPerPhase vs AvailableSlots length) ---
def check_worker_capacity(data: ValidationData) -> Iterator[ValidationFinding]:
    for w in data.workers:
        slots = w.get("AvailableSlots")
        max_load = w.get("MaxLoadPerPhase")
        if _is_sequence(slots) and is_number(max_load) and len(slots) < max_load:
            yield ValidationFinding(
                _wid(w),
                f"Worker has fewer available slots ({len(slots)}) "
                f"than MaxLoadPerPhase ({max_load})",
                "MaxLoadPerPhase",
                WARNING,
            )


# --- 7. PreferredPhases entries must be positive integers ---
def check_phase_numbers(data: ValidationData) -> Iterator[ValidationFinding]:
    for t in data.tasks:
        phases = t.get("PreferredPhases")
        if not _is_sequence(phases):
            continue
        for phase in phases:
            if not is_positive_integer(phase):
                yield ValidationFinding(
                    _tid(t),
                    f"Invalid phase number in PreferredPhases: {phase}",
                    "PreferredPhases",
                )


# --- 8. Worker skills must be non-empty strings ---
def check_skill_strings(data: ValidationData) -> Iterator[ValidationFinding]:
    for w in data.workers:
        skills = w.get("Skills")
        if not _is_sequence(skills):
            continue
        if any(not isinstance(s, str) or not s.strip() for s in skills):
            yield ValidationFinding(
                _wid(w), "Skills array contains empty or non-string values", "Skills"
            )


CHECK_GROUPS = (
    check_required_fields,
    check_duplicate_ids,
    check_shapes_and_ranges,
    check_task_references,
    check_skill_coverage,
    check_worker_capacity,
    check_phase_numbers,
    check_skill_strings,
)


def run_validations(
    clients: Optional[Sequence[dict]],
    workers: Optional[Sequence[dict]],
    tasks: Optional[Sequence[dict]],
) -> List[ValidationFinding]:
    """
    Run every integrity check over the three entity collections.

    Pure and deterministic: the same input always yields the same findings in
    the same order (check group order, then input order). Malformed fields are
    reported as findings, never raised. Inputs are not mutated.

    Args:
        clients (Sequence[dict]): Parsed client records.
        workers (Sequence[dict]): Parsed worker records.
        tasks (Sequence[dict]): Parsed task records.

    Returns:
        List[ValidationFinding]: Errors and warnings for the whole data set.
    """
    data = ValidationData(list(clients or []), list(workers or []), list(tasks or []))
    manager = CheckManager(data)
    for check in CHECK_GROUPS:
        manager.add_check(check)

    findings = manager.apply_all()
    logger.debug(
        "Validation pass: %d clients, %d workers, %d tasks -> %d findings",
        len(data.clients),
        len(data.workers),
        len(data.tasks),
        len(findings),
    )
    return findings
