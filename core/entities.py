import math
from enum import Enum
from typing import Any, Dict, List, Mapping

from utils.constants import ID_FIELDS
from exceptions.custom_errors import UnknownEntityError

Record = Dict[str, Any]
Collection = List[Record]


class EntityType(str, Enum):
    CLIENTS = "clients"
    WORKERS = "workers"
    TASKS = "tasks"

    @property
    def id_field(self) -> str:
        return ID_FIELDS[self.value]

    @property
    def label(self) -> str:
        """Singular display name, e.g. 'Client'."""
        return self.value[:-1].capitalize()


def resolve_entity(name: Any) -> EntityType:
    """Resolve an entity name ('clients', 'workers', 'tasks') to an EntityType."""
    try:
        return EntityType(str(name).strip().lower())
    except ValueError:
        raise UnknownEntityError(
            f"Entity {name!r} not found. Expected one of: "
            f"{', '.join(e.value for e in EntityType)}."
        )


def is_number(value: Any) -> bool:
    """True for int/float values that are not bool and not NaN."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def is_positive_integer(value: Any) -> bool:
    if not is_number(value) or value < 1:
        return False
    return isinstance(value, int) or float(value).is_integer()


def entity_id(record: Mapping[str, Any], id_field: str) -> str:
    """The record's ID as a string, or 'unknown' when it is missing or empty."""
    value = record.get(id_field)
    if value is None or value == "":
        return "unknown"
    return str(value)


def hash_key(value: Any) -> Any:
    """A hashable stand-in for value, so malformed cells can still go into sets."""
    if isinstance(value, bool):
        # True == 1 in Python; keep booleans apart from numeric IDs
        return ("__bool__", value)
    try:
        hash(value)
    except TypeError:
        return ("__unhashable__", repr(value))
    return value


def strict_equals(left: Any, right: Any) -> bool:
    """
    Equality without type coercion between filter values and record values.

    "3" never equals 3 and True never equals 1. Ints and floats compare
    numerically. Lists and mappings only match the very same object.
    """
    if isinstance(left, (list, dict)) or isinstance(right, (list, dict)):
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    return type(left) is type(right) and left == right
