from __future__ import annotations

import pytest

from core.search import RecordFilter, apply_filters, filter_matches, parse_filters
from exceptions.custom_errors import InvalidFilterError


@pytest.fixture
def tasks(make_task):
    return [
        make_task(),
        make_task(TaskID="T2", TaskName="Migrate db", Duration=6, RequiredSkills=["java", "sql"], Category=None),
        make_task(TaskID="T3", TaskName="Build reports", Duration=4, RequiredSkills=["sql"]),
    ]


def ids(records):
    return [r["TaskID"] for r in records]


def test_numeric_comparisons(tasks):
    assert ids(apply_filters(tasks, [RecordFilter("Duration", ">", 3)])) == ["T2", "T3"]
    assert ids(apply_filters(tasks, [RecordFilter("Duration", "<=", 4)])) == ["T1", "T3"]
    assert ids(apply_filters(tasks, [RecordFilter("Duration", ">=", "6")])) == ["T2"]


def test_equality_is_strict(tasks):
    assert ids(apply_filters(tasks, [RecordFilter("Duration", "=", 2)])) == ["T1"]
    assert apply_filters(tasks, [RecordFilter("Duration", "=", "2")]) == []


def test_includes_and_excludes(tasks):
    assert ids(apply_filters(tasks, [RecordFilter("RequiredSkills", "includes", "sql")])) == ["T2", "T3"]
    assert ids(apply_filters(tasks, [RecordFilter("RequiredSkills", "excludes", "sql")])) == ["T1"]
    assert ids(apply_filters(tasks, [RecordFilter("TaskName", "includes", "Build")])) == ["T1", "T3"]


def test_absent_value_never_matches(tasks):
    assert not filter_matches(tasks[1], RecordFilter("Category", "excludes", "ETL"))
    assert not filter_matches(tasks[0], RecordFilter("Owner", "=", None))


def test_filters_are_combined(tasks):
    filters = [RecordFilter("Duration", ">", 1), RecordFilter("RequiredSkills", "includes", "sql")]
    assert ids(apply_filters(tasks, filters)) == ["T2", "T3"]


def test_parse_filters():
    filters = parse_filters([{"field": "Duration", "operator": ">", "value": 5}])
    assert filters == [RecordFilter("Duration", ">", 5)]

    with pytest.raises(InvalidFilterError):
        parse_filters({"field": "Duration"})
    with pytest.raises(InvalidFilterError, match="Unknown operator"):
        parse_filters([{"field": "Duration", "operator": "~", "value": 5}])
    with pytest.raises(InvalidFilterError):
        parse_filters([{"operator": "=", "value": 5}])
