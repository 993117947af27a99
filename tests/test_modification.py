from __future__ import annotations

import copy

import pytest

from core.entities import EntityType
from core.modification import (
    DeleteOne,
    ModificationStatus,
    UpdateMany,
    apply_modification,
    parse_action,
    update_many,
)
from exceptions.custom_errors import InvalidActionError, UnknownEntityError


@pytest.fixture
def collections(clean_data, make_worker):
    clients, workers, tasks = clean_data
    workers = workers + [make_worker(WorkerID="W3", WorkerName="Cy", WorkerGroup="GroupA")]
    return {
        EntityType.CLIENTS: clients,
        EntityType.WORKERS: workers,
        EntityType.TASKS: tasks,
    }


def test_update_many_merges_changes_into_matching_records(collections):
    before = copy.deepcopy(collections)
    result = apply_modification(
        collections,
        {
            "action": "update_many",
            "entity": "workers",
            "filter": {"WorkerGroup": "GroupA"},
            "changes": {"MaxLoadPerPhase": 3, "Shift": "night"},
        },
    )

    assert result.status is ModificationStatus.APPLIED
    assert result.matched == 2
    updated = result.collections[EntityType.WORKERS]
    assert [w["WorkerID"] for w in updated] == ["W1", "W2", "W3"]
    assert [w["MaxLoadPerPhase"] for w in updated] == [3, 2, 3]
    assert updated[0]["Shift"] == "night"
    assert "Shift" not in updated[1]
    # untouched records and collections are passed through
    assert updated[1] is collections[EntityType.WORKERS][1]
    assert result.collections[EntityType.TASKS] is collections[EntityType.TASKS]
    assert collections == before


def test_filter_uses_strict_equality(collections):
    result = apply_modification(
        collections,
        {
            "action": "update_many",
            "entity": "workers",
            "filter": {"MaxLoadPerPhase": "2"},
            "changes": {"MaxLoadPerPhase": 5},
        },
    )

    assert result.applied
    assert result.matched == 0
    assert result.collections[EntityType.WORKERS] == collections[EntityType.WORKERS]


def test_empty_filter_matches_every_record(collections):
    records, matched = update_many(collections[EntityType.TASKS], {}, {"Category": "Ops"})

    assert matched == 2
    assert all(t["Category"] == "Ops" for t in records)


def test_filter_on_absent_field_matches_nothing(collections):
    records, matched = update_many(collections[EntityType.CLIENTS], {"Region": None}, {"GroupTag": "X"})

    assert matched == 0
    assert records == collections[EntityType.CLIENTS]


@pytest.mark.parametrize(
    "action",
    [
        None,
        "update_many",
        {"action": "update_many", "entity": "workers", "filter": {}},
        {"action": "update_many", "entity": "projects", "filter": {}, "changes": {}},
        {"action": "update_many", "entity": "workers", "filter": "GroupA", "changes": {}},
        {"action": "upsert", "entity": "workers", "filter": {}, "changes": {}},
    ],
)
def test_malformed_actions_are_rejected_without_changes(collections, action):
    result = apply_modification(collections, action)

    assert result.status is ModificationStatus.REJECTED
    assert result.collections is collections
    assert result.message


def test_entity_missing_from_collections_is_rejected(collections):
    partial = {EntityType.CLIENTS: collections[EntityType.CLIENTS]}
    result = apply_modification(
        partial,
        {"action": "update_many", "entity": "tasks", "filter": {}, "changes": {"Duration": 1}},
    )

    assert result.status is ModificationStatus.REJECTED
    assert result.entity is EntityType.TASKS
    assert "not found in data" in result.message


@pytest.mark.parametrize("kind", ["update_one", "delete_one"])
def test_single_record_actions_are_not_executed(collections, kind):
    result = apply_modification(
        collections,
        {"action": kind, "entity": "clients", "filter": {"ClientID": "C1"}, "changes": {}},
    )

    assert result.status is ModificationStatus.NOT_SUPPORTED
    assert result.message == f"Action type '{kind}' is not yet implemented."
    assert result.collections is collections
    assert not result.applied


def test_parse_action():
    command = parse_action(
        {"action": "delete_one", "entity": "Tasks", "filter": {"TaskID": "T1"}, "changes": {}}
    )
    assert command == DeleteOne(entity=EntityType.TASKS, filter={"TaskID": "T1"}, changes={})

    command = parse_action(
        {"action": "update_many", "entity": "clients", "filter": {}, "changes": {"GroupTag": "A"}}
    )
    assert isinstance(command, UpdateMany)

    with pytest.raises(UnknownEntityError):
        parse_action({"action": "update_many", "entity": "nurses", "filter": {}, "changes": {}})
    with pytest.raises(InvalidActionError, match="missing changes"):
        parse_action({"action": "update_many", "entity": "clients", "filter": {}})


def test_result_to_dict(collections):
    result = apply_modification(
        collections,
        {"action": "update_many", "entity": "tasks", "filter": {"TaskID": "T2"}, "changes": {"Duration": 4}},
    )

    payload = result.to_dict()
    assert payload["status"] == "applied"
    assert payload["entity"] == "tasks"
    assert payload["matched"] == 1
    assert payload["collections"]["tasks"][1]["Duration"] == 4
