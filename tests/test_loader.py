from __future__ import annotations

import io

import pandas as pd
import pytest

from core.entities import EntityType
from exceptions.custom_errors import FileContentError, UnsupportedFormatError
from utils.loader import (
    load_entity,
    parse_attributes,
    parse_numeric_list,
    parse_preferred_phases,
    split_list,
    to_text,
)


def build_workers_csv() -> bytes:
    frame = pd.DataFrame(
        [
            {
                "workerid": 1,
                "WorkerName": "Ann",
                "skills": "python, sql",
                "AvailableSlots": "[1,3,5]",
                "MaxLoadPerPhase": 2,
                "WorkerGroup": "GroupA",
            },
            {
                "workerid": 2,
                "WorkerName": "Bo",
                "skills": "java",
                "AvailableSlots": "2,4",
                "MaxLoadPerPhase": None,
                "WorkerGroup": None,
            },
        ]
    )
    return frame.to_csv(index=False).encode("utf-8")


def build_tasks_workbook() -> bytes:
    frame = pd.DataFrame(
        [
            {
                "TaskID": "T1",
                "TaskName": "Build pipeline",
                "Duration": 2,
                "RequiredSkills": "python,sql",
                "PreferredPhases": "1-3",
                "MaxConcurrent": 1,
            }
        ]
    )
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        frame.to_excel(writer, index=False, sheet_name="Tasks")
    return buffer.getvalue()


def test_csv_workers_are_parsed_into_records():
    workers = load_entity(EntityType.WORKERS, build_workers_csv(), "workers.csv")

    assert workers[0] == {
        "WorkerID": "1",
        "WorkerName": "Ann",
        "Skills": ["python", "sql"],
        "AvailableSlots": [1, 3, 5],
        "MaxLoadPerPhase": 2,
        "WorkerGroup": "GroupA",
        "QualificationLevel": None,
    }
    assert workers[1]["AvailableSlots"] == [2, 4]
    assert workers[1]["MaxLoadPerPhase"] == 0
    assert workers[1]["WorkerGroup"] is None


def test_xlsx_tasks_expand_phase_ranges():
    tasks = load_entity(EntityType.TASKS, build_tasks_workbook(), "tasks.xlsx")

    assert len(tasks) == 1
    assert tasks[0]["PreferredPhases"] == [1, 2, 3]
    assert tasks[0]["RequiredSkills"] == ["python", "sql"]
    assert tasks[0]["Category"] is None


def test_unsupported_extension():
    with pytest.raises(UnsupportedFormatError):
        load_entity(EntityType.CLIENTS, b"ClientID\nC1\n", "clients.txt")


def test_missing_id_column():
    with pytest.raises(FileContentError, match="ClientID"):
        load_entity(EntityType.CLIENTS, b"Name,PriorityLevel\nAcme,3\n", "clients.csv")


@pytest.mark.parametrize("content", [b"", b"ClientID,ClientName\n"])
def test_empty_files(content):
    with pytest.raises(FileContentError):
        load_entity(EntityType.CLIENTS, content, "clients.csv")


def test_cell_helpers():
    assert to_text(1.0) == "1"
    assert to_text(None) == ""
    assert split_list("a, b,,c") == ["a", "b", "c"]
    assert parse_numeric_list("[1, 2]") == [1, 2]
    assert parse_numeric_list("1,x,3") == [1, 3]
    assert parse_numeric_list(4) == [4]
    assert parse_preferred_phases("3-1") == []
    assert parse_attributes('{"tier": "gold"}') == {"tier": "gold"}
    assert parse_attributes("{not json") is None
