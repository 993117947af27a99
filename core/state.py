from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Tuple

from core.entities import Collection, EntityType
from core.modification import ModificationResult, apply_modification
from core import rules as rulebook
from core.rules import BusinessRule, RuleList
from core.validation import ValidationFinding, run_validations
from utils.logger import logger


@dataclass(frozen=True)
class AppState:
    """
    A snapshot of everything the curation workflow works on.

    Owned by the caller. Every transition below returns a new AppState and
    leaves the previous one untouched, so callers commit by swapping the
    reference and must apply concurrent edits in the order they arrive.
    """

    clients: Collection = field(default_factory=list)
    """Parsed client records."""
    workers: Collection = field(default_factory=list)
    """Parsed worker records."""
    tasks: Collection = field(default_factory=list)
    """Parsed task records."""
    rules: RuleList = ()
    """Business rules in insertion order."""
    priorities: Dict[str, float] = field(default_factory=rulebook.default_priorities)
    """Inert prioritisation weights, each in [0, 1]."""
    findings: Tuple[ValidationFinding, ...] = ()
    """Findings from the last validation pass."""

    def collection(self, entity: EntityType) -> Collection:
        return getattr(self, entity.value)

    @property
    def collections(self) -> Dict[EntityType, Collection]:
        return {entity: self.collection(entity) for entity in EntityType}


def validated(state: AppState) -> AppState:
    """Re-run the full validation pass against the state's collections."""
    findings = run_validations(state.clients, state.workers, state.tasks)
    return replace(state, findings=tuple(findings))


def with_collection(state: AppState, entity: EntityType, records: Collection) -> AppState:
    logger.info("Loaded %d %s", len(records), entity.value)
    return validated(replace(state, **{entity.value: list(records)}))


def with_modification(state: AppState, action: Any) -> Tuple[AppState, ModificationResult]:
    """Apply an action object; the state only changes when it was applied."""
    result = apply_modification(state.collections, action)
    if not result.applied:
        return state, result
    updated = replace(state, **{e.value: records for e, records in result.collections.items()})
    return validated(updated), result


def add_rule(state: AppState, rule: BusinessRule) -> AppState:
    return replace(state, rules=rulebook.add_rule(state.rules, rule))


def remove_rule(state: AppState, index: int) -> AppState:
    return replace(state, rules=rulebook.remove_rule(state.rules, index))


def update_priorities(state: AppState, updates: Mapping[str, Any]) -> AppState:
    return replace(state, priorities=rulebook.update_priorities(state.priorities, updates))


def cleared() -> AppState:
    return AppState()
