import json
from io import BytesIO
from typing import Any, Dict, Iterable, List, Mapping, Tuple

import pandas as pd

from core.entities import Collection, EntityType
from core.rules import BusinessRule, rules_config
from exceptions.custom_errors import UnsupportedFormatError
from utils.constants import EXPORT_FORMATS

CONTENT_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def flatten_value(value: Any) -> Any:
    """Lists become ', '-joined strings and mappings become JSON strings."""
    if isinstance(value, (list, tuple)):
        return ", ".join(map(str, value))
    if isinstance(value, dict):
        return json.dumps(value)
    return value


def flatten_records(records: Collection) -> List[Dict[str, Any]]:
    return [
        {key: flatten_value(value) for key, value in record.items()}
        if isinstance(record, Mapping)
        else {}
        for record in records
    ]


def export_records(records: Collection, entity: EntityType, fmt: str) -> Tuple[bytes, str, str]:
    """
    Serialize one entity collection for download.

    Returns:
        Tuple of (file bytes, content type, file name).

    Raises:
        UnsupportedFormatError: If fmt is not csv or xlsx.
    """
    fmt = str(fmt).strip().lower()
    if fmt not in EXPORT_FORMATS:
        raise UnsupportedFormatError(
            f"Unsupported format {fmt!r}. Expected one of: {', '.join(EXPORT_FORMATS)}."
        )

    df = pd.DataFrame(flatten_records(records))
    buffer = BytesIO()
    if fmt == "csv":
        buffer.write(df.to_csv(index=False).encode("utf-8"))
    else:
        with pd.ExcelWriter(buffer, engine="xlsxwriter") as writer:
            df.to_excel(writer, index=False, sheet_name=entity.value)
    buffer.seek(0)
    return buffer.getvalue(), CONTENT_TYPES[fmt], f"{entity.value}.{fmt}"


def rules_config_json(rules: Iterable[BusinessRule], priorities: Mapping[str, float]) -> str:
    """Pretty-printed rules.json content."""
    return json.dumps(rules_config(rules, priorities), indent=2)
