from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping

from core.entities import Collection, strict_equals
from exceptions.custom_errors import InvalidFilterError
from utils.constants import FILTER_OPERATORS


@dataclass(frozen=True)
class RecordFilter:
    field: str
    operator: str
    value: Any


def parse_filters(raw_filters: Any) -> List[RecordFilter]:
    """Validate AI search output: a list of {field, operator, value} objects."""
    if not isinstance(raw_filters, list):
        raise InvalidFilterError("Filters must be a list.")

    filters = []
    for raw in raw_filters:
        if not isinstance(raw, Mapping) or not raw.get("field"):
            raise InvalidFilterError(f"Malformed filter: {raw!r}")
        operator = raw.get("operator")
        if operator not in FILTER_OPERATORS:
            raise InvalidFilterError(
                f"Unknown operator {operator!r}. Expected one of: {', '.join(FILTER_OPERATORS)}."
            )
        filters.append(RecordFilter(str(raw["field"]), operator, raw.get("value")))
    return filters


def _to_float(value: Any):
    if isinstance(value, bool):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _compare(left: Any, right: Any, operator: str) -> bool:
    a, b = _to_float(left), _to_float(right)
    if a is None or b is None:
        return False
    match operator:
        case ">":
            return a > b
        case "<":
            return a < b
        case ">=":
            return a >= b
        case "<=":
            return a <= b
    return False


def _contains(container: Any, value: Any) -> bool:
    if isinstance(container, (list, tuple)):
        return any(strict_equals(item, value) for item in container)
    return str(value) in str(container)


def filter_matches(record: Mapping[str, Any], record_filter: RecordFilter) -> bool:
    value = record.get(record_filter.field)
    if value is None:
        return False

    match record_filter.operator:
        case "=":
            return strict_equals(value, record_filter.value)
        case ">" | "<" | ">=" | "<=":
            return _compare(value, record_filter.value, record_filter.operator)
        case "includes":
            return _contains(value, record_filter.value)
        case "excludes":
            return not _contains(value, record_filter.value)
        case _:
            return True


def apply_filters(records: Collection, filters: Iterable[RecordFilter]) -> Collection:
    """Records matching every filter, in their original order."""
    filters = list(filters)
    return [r for r in records if all(filter_matches(r, f) for f in filters)]
