from __future__ import annotations

import io
import json

import pandas as pd
import pytest

from core.entities import EntityType
from core.rules import co_run, default_priorities
from exceptions.custom_errors import UnsupportedFormatError
from utils.exporter import export_records, flatten_value, rules_config_json


def test_flatten_value():
    assert flatten_value(["python", "sql"]) == "python, sql"
    assert flatten_value([1, 3]) == "1, 3"
    assert json.loads(flatten_value({"budget": 10})) == {"budget": 10}
    assert flatten_value(3) == 3


def test_csv_export(make_worker):
    content, content_type, filename = export_records([make_worker()], EntityType.WORKERS, "csv")

    assert content_type == "text/csv"
    assert filename == "workers.csv"
    frame = pd.read_csv(io.BytesIO(content))
    assert frame.loc[0, "Skills"] == "python, sql"
    assert frame.loc[0, "AvailableSlots"] == "1, 2, 3"


def test_xlsx_export(make_client):
    content, content_type, filename = export_records([make_client()], EntityType.CLIENTS, "XLSX")

    assert filename == "clients.xlsx"
    assert content_type.endswith("spreadsheetml.sheet")
    frame = pd.read_excel(io.BytesIO(content), engine="openpyxl")
    assert frame.loc[0, "RequestedTaskIDs"] == "T1"
    assert json.loads(frame.loc[0, "AttributesJSON"]) == {"budget": 1000}


def test_unknown_format():
    with pytest.raises(UnsupportedFormatError):
        export_records([], EntityType.TASKS, "pdf")


def test_rules_config_json():
    doc = json.loads(rules_config_json([co_run("T1,T2")], default_priorities()))

    assert doc["rules"] == [{"type": "coRun", "tasks": ["T1", "T2"]}]
    assert set(doc["priorities"]) == {"priorityLevelFulfillment", "fairDistribution", "minimizingWorkload"}
