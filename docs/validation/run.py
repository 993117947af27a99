validation_run_description = """
Run every integrity check over the submitted clients, workers and tasks and
score how ready the data is for export.

### Request Body

- `clients`, `workers`, `tasks` (Array): Parsed records. List fields are arrays,
  `AttributesJSON` is an object. Malformed values are accepted and reported.
    ```json
    {
        "clients": [
            {"ClientID": "C1", "ClientName": "Acme", "PriorityLevel": 3, "RequestedTaskIDs": ["T1"]}
        ],
        "workers": [
            {"WorkerID": "W1", "WorkerName": "Ann", "Skills": ["python"], "AvailableSlots": [1, 2], "MaxLoadPerPhase": 2}
        ],
        "tasks": [
            {"TaskID": "T1", "TaskName": "Build", "Duration": 2, "RequiredSkills": ["python"], "PreferredPhases": [1, 2], "MaxConcurrent": 1}
        ]
    }
    ```

---

### Checks (in order)

1. Required fields
2. Duplicate IDs
3. Shapes and ranges (PriorityLevel 1-5, Duration >= 1, list fields, AttributesJSON)
4. Unknown task references in `RequestedTaskIDs`
5. Skill coverage (warning)
6. Worker capacity (warning)
7. Phase numbers
8. Skill strings

---

### Response Format

```json
{
    "findings": [
        {"id": "C1", "field": "RequestedTaskIDs", "message": "Requested Task ID \\"T99\\" does not exist", "severity": "error"}
    ],
    "readiness": {
        "score": 95,
        "errors": 1,
        "warnings": 0,
        "exportReady": false,
        "topFindings": ["• [ERROR] ID: C1 | Field: RequestedTaskIDs | Requested Task ID \\"T99\\" does not exist"]
    }
}
```
"""
