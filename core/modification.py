from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from core.entities import Collection, EntityType, resolve_entity, strict_equals
from exceptions.custom_errors import InvalidActionError, UnknownEntityError
from utils.logger import logger

Collections = Dict[EntityType, Collection]

REQUIRED_ACTION_FIELDS = ("entity", "action", "filter", "changes")


@dataclass(frozen=True)
class UpdateMany:
    """Merge `changes` into every record matching `filter`."""

    entity: EntityType
    filter: Dict[str, Any]
    changes: Dict[str, Any]


@dataclass(frozen=True)
class UpdateOne:
    """Merge `changes` into the first record matching `filter`. Not executed yet."""

    entity: EntityType
    filter: Dict[str, Any]
    changes: Dict[str, Any]


@dataclass(frozen=True)
class DeleteOne:
    """Remove the first record matching `filter`. Not executed yet."""

    entity: EntityType
    filter: Dict[str, Any]
    changes: Dict[str, Any] = field(default_factory=dict)


ModificationCommand = Union[UpdateMany, UpdateOne, DeleteOne]

ACTION_KINDS = {
    "update_many": UpdateMany,
    "update_one": UpdateOne,
    "delete_one": DeleteOne,
}


class ModificationStatus(str, Enum):
    APPLIED = "applied"
    REJECTED = "rejected"
    NOT_SUPPORTED = "not_supported"


@dataclass(frozen=True)
class ModificationResult:
    status: ModificationStatus
    collections: Collections
    message: str
    entity: Optional[EntityType] = None
    matched: int = 0

    @property
    def applied(self) -> bool:
        return self.status is ModificationStatus.APPLIED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "entity": self.entity.value if self.entity else None,
            "matched": self.matched,
            "collections": {e.value: records for e, records in self.collections.items()},
        }


def parse_action(raw: Any) -> ModificationCommand:
    """
    Turn an action object ({action, entity, filter, changes}) into a command.

    Raises:
        InvalidActionError: If a field is missing, filter/changes are not
            objects, or the action kind is unknown.
        UnknownEntityError: If the entity is not clients, workers or tasks.
    """
    if not isinstance(raw, Mapping):
        raise InvalidActionError("Action must be an object.")

    missing = [name for name in REQUIRED_ACTION_FIELDS if raw.get(name) is None or raw.get(name) == ""]
    if missing:
        raise InvalidActionError(f"Invalid action object: missing {', '.join(missing)}.")

    filter_, changes = raw["filter"], raw["changes"]
    if not isinstance(filter_, Mapping) or not isinstance(changes, Mapping):
        raise InvalidActionError("Invalid action object: 'filter' and 'changes' must be objects.")

    entity = resolve_entity(raw["entity"])
    kind = ACTION_KINDS.get(raw["action"])
    if kind is None:
        raise InvalidActionError(
            f"Unknown action {raw['action']!r}. Expected one of: {', '.join(ACTION_KINDS)}."
        )
    return kind(entity=entity, filter=dict(filter_), changes=dict(changes))


def matches(record: Mapping[str, Any], filter_: Mapping[str, Any]) -> bool:
    """True when every filter pair equals the record's field (no type coercion)."""
    return all(
        key in record and strict_equals(record[key], value)
        for key, value in filter_.items()
    )


def update_many(records: Collection, filter_: Mapping[str, Any], changes: Mapping[str, Any]):
    """
    New collection where matching records are merged with `changes`.

    Non-matching records are passed through as the same objects; length and
    order are preserved and the input list is left untouched.
    """
    updated = []
    matched = 0
    for record in records:
        if matches(record, filter_):
            updated.append({**record, **changes})
            matched += 1
        else:
            updated.append(record)
    return updated, matched


def _reject(collections: Collections, message: str, entity=None) -> ModificationResult:
    logger.warning("Modification rejected: %s", message)
    return ModificationResult(ModificationStatus.REJECTED, collections, message, entity)


def apply_modification(collections: Collections, raw_action: Any) -> ModificationResult:
    """
    Apply an externally produced action object to one entity collection.

    Never raises for bad actions: a malformed or unresolvable action comes back
    as a REJECTED result holding the very same `collections` object, and
    update_one / delete_one come back as NOT_SUPPORTED, also unchanged.

    Args:
        collections (Dict[EntityType, list]): Current clients, workers and tasks.
        raw_action (Any): The action object, usually produced by the AI copilot.

    Returns:
        ModificationResult: Outcome, resulting collections and matched count.
    """
    try:
        command = parse_action(raw_action)
    except (InvalidActionError, UnknownEntityError) as e:
        return _reject(collections, str(e))

    if command.entity not in collections:
        return _reject(
            collections, f"Entity {command.entity.value!r} not found in data.", command.entity
        )

    match command:
        case UpdateMany(entity=entity, filter=filter_, changes=changes):
            records, matched = update_many(collections[entity], filter_, changes)
            result = ModificationResult(
                ModificationStatus.APPLIED,
                {**collections, entity: records},
                f"Updated {matched} of {len(records)} {entity.value}.",
                entity,
                matched,
            )
            logger.info("Modification applied: %s", result.message)
            return result
        case UpdateOne() | DeleteOne():
            kind = "update_one" if isinstance(command, UpdateOne) else "delete_one"
            message = f"Action type {kind!r} is not yet implemented."
            logger.warning("Modification skipped: %s", message)
            return ModificationResult(
                ModificationStatus.NOT_SUPPORTED, collections, message, command.entity
            )
        case _:
            raise TypeError(f"Unsupported command: {command!r}")
