ai_convert_rule_description = """
Convert a plain-language rule description into a business rule.

Requires `OPENAI_API_KEY`. When nothing usable comes back, `rule` is `null`
and `message` asks to rephrase.
"""

ai_search_description = """
Turn a natural-language query into filters and apply them to one collection.

### Response Format

```json
{"filters": [{"field": "Duration", "operator": ">", "value": 5}], "results": [], "message": "Derived 1 filter(s)."}
```
"""

ai_copilot_description = """
Chat with the data copilot. The message is classified as one of
`data_modification`, `what_if_simulation`, `request_recommendation`,
`readiness_check` or `general_query` and answered accordingly.

A `data_modification_action` reply carries the action object in `data`; it is
never applied here. Send it to `/api/data/modify` after review.
"""
