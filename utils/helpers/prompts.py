ENTITY_SCHEMAS = {
    "clients": {
        "ClientID": "string",
        "ClientName": "string",
        "PriorityLevel": "number (1-5)",
        "RequestedTaskIDs": "array of strings",
        "GroupTag": "string (optional)",
        "AttributesJSON": "object (optional)",
    },
    "workers": {
        "WorkerID": "string",
        "WorkerName": "string",
        "Skills": "array of strings",
        "AvailableSlots": "array of numbers",
        "MaxLoadPerPhase": "number",
        "WorkerGroup": "string (optional)",
        "QualificationLevel": "string (optional)",
    },
    "tasks": {
        "TaskID": "string",
        "TaskName": "string",
        "Category": "string (optional)",
        "Duration": "number (>=1)",
        "RequiredSkills": "array of strings",
        "PreferredPhases": "array of numbers",
        "MaxConcurrent": "number",
    },
}

RULE_SCHEMAS = """
{"type": "coRun", "tasks": [<TaskID>, ...]}
{"type": "loadLimit", "workerGroup": <string>, "maxSlotsPerPhase": <positive integer>}
{"type": "phaseWindow", "taskID": <TaskID>, "allowedPhases": [<positive integer>, ...]}
"""

JSON_ONLY = "Return ONLY the raw JSON object, without markdown formatting or extra text."

CONVERT_RULE_PROMPT = """You convert business rules written in plain language into JSON.
Use exactly one of these shapes:
{rule_schemas}
If the description cannot be mapped clearly, return an empty object {{}}.
Only reference IDs that exist below.

Available Task IDs: [{task_ids}]
Available Worker Groups: [{worker_groups}]

Rule description: "{description}"

{json_only}"""

SEARCH_PROMPT = """You turn a natural language query into structured filters.
Respond with {{"filters": [{{"field": ..., "operator": ..., "value": ...}}]}}.
Allowed operators: {operators}.

Schema for {entity}:
{schema}

Examples:
Query: "tasks with Duration greater than 5"
Response: {{"filters": [{{"field": "Duration", "operator": ">", "value": 5}}]}}
Query: "clients whose PriorityLevel is 3 and RequestedTaskIDs include 'T001'"
Response: {{"filters": [{{"field": "PriorityLevel", "operator": "=", "value": 3}}, {{"field": "RequestedTaskIDs", "operator": "includes", "value": "T001"}}]}}

Query: "{query}"

{json_only}"""

INTENT_PROMPT = """Classify the user's message for a data curation tool into one intent:
- "data_modification": change or delete records ("Set all GroupA workers' load to 3").
- "what_if_simulation": impact of a hypothetical change ("What if T1 and T2 co-run?").
- "request_recommendation": asking for advice or risks ("Any suggestions for my rules?").
- "readiness_check": asking for a summary or score ("Is my data ready to export?").
- "general_query": anything else.

Message: "{message}"

Respond like {{"intent": "data_modification"}}. {json_only}"""

MODIFICATION_PROMPT = """Convert the user's request into a JSON action object with:
- "action": "update_many", "update_one" or "delete_one"
- "entity": "clients", "workers" or "tasks"
- "filter": fields identifying the records (e.g. {{"WorkerGroup": "GroupA"}})
- "changes": new field values (e.g. {{"MaxLoadPerPhase": 3}}); empty for delete_one

Field names per entity:
{schemas}

Numbers must be JSON numbers, not strings. List fields must be JSON arrays of strings.

Request: "{request}"

{json_only}"""

RECOMMENDATION_PROMPT = """You advise on resource allocation data. Suggest ONE high-impact new rule
or action, phrased as a question to the user. Do not repeat risks already listed.

Data summary:
- Clients: {clients}
- Workers: {workers}
- Tasks: {tasks}
- Rules: {rules}
- Risks found: {risks}"""

READINESS_PROMPT = """Review this resource allocation configuration and answer with two short
bullet lists, "Good Things" and "Areas for Improvement".

- Readiness Score: {score}/100
- Errors: {errors}
- Warnings: {warnings}
- Top findings:
{top_findings}"""

WHAT_IF_PROMPT = """You analyse hypothetical changes to a resource allocation setup.
Start with a clear conclusion, then cover direct and indirect effects and risks
(bottlenecks, conflicts with existing rules, high-priority clients).

Data summary:
- Clients: {clients} (priority level 1: {top_priority_clients})
- Workers: {workers}
- Tasks: {tasks}
- Rules: {rules}
- Worker skills: {skills}

Scenario: "{scenario}"."""
