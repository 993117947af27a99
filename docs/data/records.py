data_modify_description = """
Apply a data-modification action to one entity collection.

### Request Body

- `clients`, `workers`, `tasks` (Array): The current records.
- `action` (Object):
    ```json
    {
        "action": "update_many",
        "entity": "workers",
        "filter": {"WorkerGroup": "GroupA"},
        "changes": {"MaxLoadPerPhase": 3}
    }
    ```

Filter values are compared with strict equality (`"3"` does not match `3`).
An empty filter matches every record.

---

### Response Format

- `status`: `applied`, `rejected` (malformed action, unknown entity) or
  `not_supported` (`update_one` and `delete_one` are not executed).
- `collections`: The resulting clients, workers and tasks. Unchanged unless applied.
- `findings`: Validation findings for the resulting data (only when applied).
"""

data_search_description = """
Filter one entity collection with structured filters.

### Request Body

- `entity`: `clients`, `workers` or `tasks`.
- `filters`: Array of `{"field", "operator", "value"}`. Operators: `=`, `>`, `<`,
  `>=`, `<=`, `includes`, `excludes`. All filters must hold.
"""

data_upload_description = """
Parse an uploaded CSV or XLSX file into records of one entity.

- Path `entity`: `clients`, `workers` or `tasks`.
- Form `file`: The spreadsheet. Column names are matched case-insensitively.
- Form `snapshot` (optional): JSON with the other collections, so findings
  reflect the whole data set.

List cells are comma-separated (`"python, sql"`), `AvailableSlots` accepts
`[1,3,5]` or `1,3,5`, `PreferredPhases` also accepts a range such as `"1-3"`.
"""

data_export_description = """
Download one entity collection as `csv` or `xlsx`.

Array fields are joined with `", "`, object fields are written as JSON text.
"""
