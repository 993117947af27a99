from __future__ import annotations

import json

import pytest
from langchain_community.llms import FakeListLLM

from utils.ai_client import LLMClient


def build_client(**overrides) -> dict:
    record = {
        "ClientID": "C1",
        "ClientName": "Acme Corp",
        "PriorityLevel": 3,
        "RequestedTaskIDs": ["T1"],
        "GroupTag": "Enterprise",
        "AttributesJSON": {"budget": 1000},
    }
    record.update(overrides)
    return record


def build_worker(**overrides) -> dict:
    record = {
        "WorkerID": "W1",
        "WorkerName": "Ann",
        "Skills": ["python", "sql"],
        "AvailableSlots": [1, 2, 3],
        "MaxLoadPerPhase": 2,
        "WorkerGroup": "GroupA",
        "QualificationLevel": "3",
    }
    record.update(overrides)
    return record


def build_task(**overrides) -> dict:
    record = {
        "TaskID": "T1",
        "TaskName": "Build pipeline",
        "Category": "ETL",
        "Duration": 2,
        "RequiredSkills": ["python"],
        "PreferredPhases": [1, 2],
        "MaxConcurrent": 1,
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_client():
    return build_client


@pytest.fixture
def make_worker():
    return build_worker


@pytest.fixture
def make_task():
    return build_task


@pytest.fixture
def clean_data():
    clients = [build_client(), build_client(ClientID="C2", ClientName="Beta", RequestedTaskIDs=["T1", "T2"])]
    workers = [build_worker(), build_worker(WorkerID="W2", WorkerName="Bo", Skills=["java"], WorkerGroup="GroupB")]
    tasks = [build_task(), build_task(TaskID="T2", TaskName="Port service", RequiredSkills=["java"])]
    return clients, workers, tasks


@pytest.fixture
def fake_ai():
    """LLMClient over a FakeListLLM; dict responses are sent as JSON text."""

    def build(*responses) -> LLMClient:
        scripted = [json.dumps(r) if isinstance(r, dict) else r for r in responses]
        return LLMClient(FakeListLLM(responses=scripted))

    return build
