from typing import (
    Annotated,
    Any,
    Dict,
    Iterable,
    List,
    Literal,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from core.entities import is_number, is_positive_integer
from exceptions.custom_errors import (
    InvalidPrioritySettingError,
    InvalidRuleError,
    RuleIndexError,
)
from utils.constants import DEFAULT_PRIORITIES, PRIORITY_KEYS, RULE_TYPES
from utils.logger import logger


# Rule variants. The `type` tag is the discriminator; instances are frozen.
class CoRunRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["coRun"] = "coRun"
    tasks: List[str]


class LoadLimitRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["loadLimit"] = "loadLimit"
    workerGroup: str
    maxSlotsPerPhase: int


class PhaseWindowRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["phaseWindow"] = "phaseWindow"
    taskID: str
    allowedPhases: List[int]


BusinessRule = Annotated[
    Union[CoRunRule, LoadLimitRule, PhaseWindowRule], Field(discriminator="type")
]
RuleList = Tuple[BusinessRule, ...]

business_rule_adapter = TypeAdapter(BusinessRule)


def _split(value: Any) -> List[Any]:
    """Accept either a sequence or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",")]
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _as_number(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return value
    return value


def co_run(tasks: Union[Sequence[str], str]) -> CoRunRule:
    """Build a co-run rule; the task order given is kept."""
    task_ids = [str(t).strip() for t in _split(tasks) if t is not None and str(t).strip()]
    if len(set(task_ids)) < 2:
        raise InvalidRuleError("Co-run rule requires at least two tasks.")
    return CoRunRule(tasks=task_ids)


def load_limit(worker_group: Any, max_slots_per_phase: Any) -> LoadLimitRule:
    group = str(worker_group).strip() if worker_group is not None else ""
    if not group:
        raise InvalidRuleError("Load Limit requires a Worker Group.")

    max_slots = _as_number(max_slots_per_phase)
    if not is_number(max_slots) or max_slots <= 0:
        raise InvalidRuleError("Max Slots Per Phase must be a positive number.")
    if not float(max_slots).is_integer():
        raise InvalidRuleError("Max Slots Per Phase must be a whole number.")
    return LoadLimitRule(workerGroup=group, maxSlotsPerPhase=int(max_slots))


def phase_window(task_id: Any, allowed_phases: Union[Sequence[Any], str]) -> PhaseWindowRule:
    """Build a phase-window rule; entries that are not positive integers are dropped."""
    tid = str(task_id).strip() if task_id is not None else ""
    if not tid:
        raise InvalidRuleError("Phase Window requires a Task ID.")

    phases = [
        int(p)
        for p in (_as_number(v) for v in _split(allowed_phases))
        if is_positive_integer(p)
    ]
    if not phases:
        raise InvalidRuleError(
            "Allowed Phases must be a comma-separated list of positive whole numbers."
        )
    return PhaseWindowRule(taskID=tid, allowedPhases=phases)


def build_rule(payload: Mapping[str, Any]) -> BusinessRule:
    """
    Build a rule from a loose mapping such as a form submission or an AI response.

    Raises:
        InvalidRuleError: If the type is unknown or the rule fails its precondition.
    """
    if not isinstance(payload, Mapping):
        raise InvalidRuleError("Rule must be an object with a 'type' field.")

    match payload.get("type"):
        case "coRun":
            return co_run(payload.get("tasks"))
        case "loadLimit":
            return load_limit(payload.get("workerGroup"), payload.get("maxSlotsPerPhase"))
        case "phaseWindow":
            return phase_window(payload.get("taskID"), payload.get("allowedPhases"))
        case other:
            raise InvalidRuleError(
                f"Unknown rule type {other!r}. Expected one of: {', '.join(RULE_TYPES)}."
            )


def rule_from_ai(payload: Any) -> Optional[BusinessRule]:
    """
    Interpret an AI conversion response.

    An empty response or an unrecognized `type` means no rule was produced and
    returns None. A recognized type with bad fields still raises InvalidRuleError.
    """
    if not isinstance(payload, Mapping) or payload.get("type") not in RULE_TYPES:
        return None
    return build_rule(payload)


def describe_rule(rule: BusinessRule) -> str:
    match rule:
        case CoRunRule(tasks=tasks):
            return f"Co-run: {', '.join(tasks)}"
        case LoadLimitRule(workerGroup=group, maxSlotsPerPhase=max_slots):
            return f"Load limit: {group} max {max_slots} slot(s) per phase"
        case PhaseWindowRule(taskID=task_id, allowedPhases=phases):
            return f"Phase window: {task_id} in phase(s) {', '.join(map(str, phases))}"
        case _:
            raise TypeError(f"Unsupported rule: {rule!r}")


def rule_to_dict(rule: BusinessRule) -> Dict[str, Any]:
    match rule:
        case CoRunRule() | LoadLimitRule() | PhaseWindowRule():
            return rule.model_dump()
        case _:
            raise TypeError(f"Unsupported rule: {rule!r}")


# --- Rule list bookkeeping (insertion order, removal by position) ---
def add_rule(rules: Iterable[BusinessRule], rule: BusinessRule) -> RuleList:
    updated = (*rules, rule)
    logger.info("Rule added (#%d): %s", len(updated) - 1, describe_rule(rule))
    return updated


def remove_rule(rules: Iterable[BusinessRule], index: int) -> RuleList:
    current = tuple(rules)
    if not 0 <= index < len(current):
        raise RuleIndexError(
            f"No rule at position {index}; there are {len(current)} rule(s)."
        )
    logger.info("Rule removed (#%d): %s", index, describe_rule(current[index]))
    return current[:index] + current[index + 1:]


# --- Priority weights ---
def default_priorities() -> Dict[str, float]:
    return {key: float(value) for key, value in DEFAULT_PRIORITIES.items()}


def update_priorities(
    current: Mapping[str, float], updates: Mapping[str, Any]
) -> Dict[str, float]:
    """
    Merge slider updates into the current weights.

    Weights are independent values in [0, 1]; they are not normalised.

    Raises:
        InvalidPrioritySettingError: On an unknown key or an out-of-range value.
    """
    merged = dict(current)
    for key, value in updates.items():
        if key not in PRIORITY_KEYS:
            raise InvalidPrioritySettingError(
                f"Unknown priority {key!r}. Expected one of: {', '.join(PRIORITY_KEYS)}."
            )
        value = _as_number(value)
        if not is_number(value) or not 0 <= value <= 1:
            raise InvalidPrioritySettingError(
                f"Priority {key!r} must be a number between 0 and 1, got {value!r}."
            )
        merged[key] = float(value)
    return merged


def rules_config(
    rules: Iterable[BusinessRule], priorities: Mapping[str, float]
) -> Dict[str, Any]:
    """The rules configuration export document: {rules: [...], priorities: {...}}."""
    return {
        "rules": [rule_to_dict(rule) for rule in rules],
        "priorities": dict(priorities),
    }
