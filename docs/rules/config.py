rules_build_description = """
Check a single business rule and return it in its canonical form.

### Request Body

One of:
```json
{"type": "coRun", "tasks": ["T1", "T2"]}
{"type": "loadLimit", "workerGroup": "GroupA", "maxSlotsPerPhase": 3}
{"type": "phaseWindow", "taskID": "T1", "allowedPhases": "1, 2, 3"}
```

- `tasks` and `allowedPhases` accept arrays or comma-separated strings.
- A co-run needs at least two distinct tasks.
- `maxSlotsPerPhase` must be a positive whole number.
- Non-numeric phases are dropped; at least one must remain.

Violations return **400** with the reason in `detail`.
"""

rules_export_description = """
Build the rules configuration document (`rules.json`).

### Request Body

- `rules` (Array): Rules in the order they were added.
- `priorities` (Object): Weights in [0, 1] for `priorityLevelFulfillment`,
  `fairDistribution` and `minimizingWorkload`. Defaults to 0.5 each.

### Response Format

A `rules.json` download (`Content-Disposition: attachment`):

```json
{
    "rules": [{"type": "coRun", "tasks": ["T1", "T2"]}],
    "priorities": {"priorityLevelFulfillment": 0.5, "fairDistribution": 0.5, "minimizingWorkload": 0.5}
}
```
"""

rules_priorities_description = """
Merge priority slider updates into the current weights.

Weights are independent values in [0, 1] and are not normalised. An unknown key
or an out-of-range value returns **400**.
"""
