import io
import json
import math
import re
from pathlib import Path
from typing import IO, Any, Callable, Dict, List, Optional, Union

import pandas as pd

from core.entities import Collection, EntityType
from exceptions.custom_errors import FileContentError, FileReadingError, UnsupportedFormatError
from utils.constants import UPLOAD_EXTENSIONS
from utils.logger import logger

PathOrBuffer = Union[str, Path, bytes, IO]

COLUMNS = {
    EntityType.CLIENTS: [
        "ClientID", "ClientName", "PriorityLevel", "RequestedTaskIDs", "GroupTag", "AttributesJSON",
    ],
    EntityType.WORKERS: [
        "WorkerID", "WorkerName", "Skills", "AvailableSlots", "MaxLoadPerPhase",
        "WorkerGroup", "QualificationLevel",
    ],
    EntityType.TASKS: [
        "TaskID", "TaskName", "Category", "Duration", "RequiredSkills", "PreferredPhases",
        "MaxConcurrent",
    ],
}

PHASE_RANGE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")


def _extension(path_or_buffer: PathOrBuffer, filename: Optional[str]) -> str:
    name = filename or (str(path_or_buffer) if isinstance(path_or_buffer, (str, Path)) else "")
    return Path(name).suffix.lower()


def read_table(path_or_buffer: PathOrBuffer, filename: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Read a CSV or XLSX sheet into a list of row mappings.

    CSV cells get pandas' numeric auto-detection; for XLSX the first sheet is
    used. Empty cells come back as None.

    Parameters:
        path_or_buffer: Path to the file, raw bytes, or a file-like object.
        filename: Original file name, used to pick the format for buffers.

    Returns:
        List of {column name: value} rows.
    """
    ext = _extension(path_or_buffer, filename)
    if ext not in UPLOAD_EXTENSIONS:
        raise UnsupportedFormatError(
            f"Invalid file type {ext or '(none)'!r}. Please upload a CSV or XLSX file."
        )
    if isinstance(path_or_buffer, bytes):
        path_or_buffer = io.BytesIO(path_or_buffer)

    try:
        if ext == ".csv":
            df = pd.read_csv(path_or_buffer, skip_blank_lines=True)
        else:
            df = pd.read_excel(path_or_buffer, sheet_name=0, engine="openpyxl")
    except pd.errors.EmptyDataError:
        raise FileContentError("File appears to be empty.")
    except Exception as e:
        raise FileReadingError(f"Error reading {filename or path_or_buffer}: {e}")

    if df.empty:
        raise FileContentError("No data rows found in the file.")

    df.columns = [str(col).strip() for col in df.columns]
    df = df.dropna(how="all")
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


# --- cell coercion helpers ---
def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def to_text(value: Any) -> str:
    """String form of a cell; whole floats lose their '.0' (1.0 -> '1')."""
    if _is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def optional_text(value: Any) -> Optional[str]:
    return to_text(value) or None


def _number(value: Any) -> Optional[Union[int, float]]:
    if isinstance(value, bool) or _is_blank(value):
        return None
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return int(number) if number.is_integer() else number


def to_number(value: Any) -> Union[int, float]:
    """Numeric cell with fallback 0 for blanks and non-numbers."""
    number = _number(value)
    return 0 if number is None else number


def split_list(value: Any) -> List[str]:
    """'a, b,,c' -> ['a', 'b', 'c']"""
    if _is_blank(value):
        return []
    return [part.strip() for part in to_text(value).split(",") if part.strip()]


def parse_numeric_list(value: Any) -> List[Union[int, float]]:
    """'[1,3,5]' or '1,3,5' -> [1, 3, 5]; entries that are not numbers are dropped."""
    if _is_blank(value):
        return []
    if _number(value) is not None and not isinstance(value, str):
        return [_number(value)]

    text = str(value).strip()
    try:
        parsed = json.loads(text)
        if isinstance(parsed, list) and all(
            isinstance(item, (int, float)) and not isinstance(item, bool) for item in parsed
        ):
            return parsed
    except json.JSONDecodeError:
        pass  # fall back to comma-separated

    numbers = (_number(part) for part in text.strip("[]").split(","))
    return [n for n in numbers if n is not None]


def parse_preferred_phases(value: Any) -> List[Union[int, float]]:
    """'1-3' -> [1, 2, 3]; anything else goes through parse_numeric_list."""
    if isinstance(value, str):
        match = PHASE_RANGE.match(value)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
            return list(range(start, end + 1)) if start <= end else []
    return parse_numeric_list(value)


def parse_attributes(value: Any) -> Any:
    """JSON-decode an attribute blob; undecodable blobs are treated as absent."""
    if _is_blank(value):
        return None
    if isinstance(value, dict):
        return value
    try:
        return json.loads(str(value))
    except json.JSONDecodeError:
        return None


# --- per-entity row parsers ---
def parse_client(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "ClientID": to_text(row.get("ClientID")),
        "ClientName": to_text(row.get("ClientName")),
        "PriorityLevel": to_number(row.get("PriorityLevel")),
        "RequestedTaskIDs": split_list(row.get("RequestedTaskIDs")),
        "GroupTag": optional_text(row.get("GroupTag")),
        "AttributesJSON": parse_attributes(row.get("AttributesJSON")),
    }


def parse_worker(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "WorkerID": to_text(row.get("WorkerID")),
        "WorkerName": to_text(row.get("WorkerName")),
        "Skills": split_list(row.get("Skills")),
        "AvailableSlots": parse_numeric_list(row.get("AvailableSlots")),
        "MaxLoadPerPhase": to_number(row.get("MaxLoadPerPhase")),
        "WorkerGroup": optional_text(row.get("WorkerGroup")),
        "QualificationLevel": optional_text(row.get("QualificationLevel")),
    }


def parse_task(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "TaskID": to_text(row.get("TaskID")),
        "TaskName": to_text(row.get("TaskName")),
        "Category": optional_text(row.get("Category")),
        "Duration": to_number(row.get("Duration")),
        "RequiredSkills": split_list(row.get("RequiredSkills")),
        "PreferredPhases": parse_preferred_phases(row.get("PreferredPhases")),
        "MaxConcurrent": to_number(row.get("MaxConcurrent")),
    }


ROW_PARSERS: Dict[EntityType, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    EntityType.CLIENTS: parse_client,
    EntityType.WORKERS: parse_worker,
    EntityType.TASKS: parse_task,
}


def standardize_columns(rows: List[Dict[str, Any]], entity: EntityType) -> List[Dict[str, Any]]:
    """
    Rename columns to their canonical spelling, matching case-insensitively.

    Unknown columns are kept as they are. The entity's ID column must exist.
    """
    if not rows:
        return rows
    canonical = {col.lower(): col for col in COLUMNS[entity]}
    col_map = {col: canonical.get(col.lower().replace(" ", ""), col) for col in rows[0]}

    if entity.id_field not in col_map.values():
        raise FileContentError(
            f"Missing expected column {entity.id_field!r} in {entity.value} file. "
            f"Found: {', '.join(map(str, rows[0]))}"
        )
    return [{col_map.get(k, k): v for k, v in row.items()} for row in rows]


def parse_rows(entity: EntityType, rows: List[Dict[str, Any]]) -> Collection:
    parser = ROW_PARSERS[entity]
    try:
        return [parser(row) for row in standardize_columns(rows, entity)]
    except FileContentError:
        raise
    except Exception as e:
        raise FileContentError(
            f"Failed to transform {entity.value} data. Check column names and data types: {e}"
        )


def load_entity(
    entity: EntityType, path_or_buffer: PathOrBuffer, filename: Optional[str] = None
) -> Collection:
    """
    Read and parse one entity's upload.

    A failure here only aborts this entity's import; collections loaded
    earlier are unaffected.

    Raises:
        UnsupportedFormatError: If the file is not CSV or XLSX.
        FileReadingError: If the file cannot be read.
        FileContentError: If the sheet is empty or misses the ID column.
    """
    rows = read_table(path_or_buffer, filename)
    records = parse_rows(entity, rows)
    logger.info("Parsed %d %s rows from %s", len(records), entity.value, filename or path_or_buffer)
    return records
