from __future__ import annotations

import pytest

from core.entities import EntityType
from core.rules import co_run
from core.state import (
    AppState,
    add_rule,
    cleared,
    remove_rule,
    update_priorities,
    validated,
    with_collection,
    with_modification,
)
from exceptions.custom_errors import InvalidPrioritySettingError


@pytest.fixture
def state(clean_data):
    clients, workers, tasks = clean_data
    return validated(AppState(clients=clients, workers=workers, tasks=tasks))


def test_loading_a_collection_revalidates(state, make_task):
    updated = with_collection(state, EntityType.TASKS, [make_task()])

    assert [t["TaskID"] for t in updated.tasks] == ["T1"]
    assert [f.message for f in updated.findings] == ['Requested Task ID "T2" does not exist']
    assert state.findings == ()


def test_applied_modification_updates_state_and_findings(state):
    updated, result = with_modification(
        state,
        {"action": "update_many", "entity": "clients", "filter": {"ClientID": "C2"}, "changes": {"PriorityLevel": 9}},
    )

    assert result.applied
    assert updated.clients[1]["PriorityLevel"] == 9
    assert [f.field for f in updated.findings] == ["PriorityLevel"]
    assert state.clients[1]["PriorityLevel"] == 3


def test_unapplied_modification_keeps_the_same_state(state):
    updated, result = with_modification(
        state, {"action": "delete_one", "entity": "clients", "filter": {"ClientID": "C2"}, "changes": {}}
    )

    assert not result.applied
    assert updated is state


def test_rule_and_priority_transitions(state):
    with_rule = add_rule(state, co_run("T1,T2"))
    assert len(with_rule.rules) == 1
    assert state.rules == ()
    assert remove_rule(with_rule, 0).rules == ()

    weighted = update_priorities(state, {"minimizingWorkload": 1})
    assert weighted.priorities["minimizingWorkload"] == 1.0
    with pytest.raises(InvalidPrioritySettingError):
        update_priorities(state, {"minimizingWorkload": 2})


def test_collection_lookup_and_clear(state):
    assert state.collection(EntityType.WORKERS) is state.workers
    assert set(state.collections) == set(EntityType)
    assert cleared() == AppState()
