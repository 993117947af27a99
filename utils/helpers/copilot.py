import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.entities import EntityType
from core.modification import parse_action
from core.readiness import readiness_report
from core.rules import BusinessRule, rule_from_ai
from core.search import RecordFilter, parse_filters
from core.state import AppState
from exceptions.custom_errors import (
    AINotConfiguredError,
    AIResponseError,
    InvalidActionError,
    InvalidFilterError,
    InvalidRuleError,
    UnknownEntityError,
)
from utils.constants import FILTER_OPERATORS
from utils.helpers.prompts import (
    CONVERT_RULE_PROMPT,
    ENTITY_SCHEMAS,
    INTENT_PROMPT,
    JSON_ONLY,
    MODIFICATION_PROMPT,
    READINESS_PROMPT,
    RECOMMENDATION_PROMPT,
    RULE_SCHEMAS,
    SEARCH_PROMPT,
    WHAT_IF_PROMPT,
)
from utils.logger import logger

AI_FAILURES = (AINotConfiguredError, AIResponseError)

INTENTS = (
    "data_modification",
    "what_if_simulation",
    "request_recommendation",
    "readiness_check",
    "general_query",
)

REPHRASE_MODIFICATION = (
    "I'm sorry, I couldn't understand that modification request. Could you please try "
    "rephrasing it? For example: 'Set MaxLoadPerPhase to 3 for workers in GroupA'."
)
REPHRASE_RULE = (
    "AI could not convert your description to a known rule format. Try rephrasing."
)
REPHRASE_SEARCH = "AI could not derive filters from your query. Try rephrasing."
SIMULATION_FAILED = (
    "I'm sorry, I couldn't perform the simulation at this moment. Please try rephrasing "
    "your question or try again later."
)
GENERAL_REPLY = (
    "I can help with data modifications, rule advice, simulations, and readiness checks. "
    "Please be more specific."
)


def _reply_id() -> str:
    return str(int(time.time() * 1000))


@dataclass
class CopilotReply:
    text: str
    type: str
    data: Optional[Any] = None
    id: str = field(default_factory=_reply_id)
    sender: str = "ai"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sender": self.sender,
            "text": self.text,
            "type": self.type,
            "data": self.data,
        }


# natural language -> rule
def convert_rule(
    client, description: str, task_ids: Sequence[str], worker_groups: Sequence[str]
) -> Tuple[Optional[BusinessRule], str]:
    """Returns (rule, message); rule is None when nothing usable was produced."""
    prompt = CONVERT_RULE_PROMPT.format(
        rule_schemas=RULE_SCHEMAS,
        task_ids=", ".join(task_ids),
        worker_groups=", ".join(worker_groups),
        description=description,
        json_only=JSON_ONLY,
    )
    try:
        rule = rule_from_ai(client.generate_json(prompt))
    except AI_FAILURES as e:
        logger.error("Rule conversion failed: %s", e)
        return None, REPHRASE_RULE
    except InvalidRuleError as e:
        return None, f"The converted rule is incomplete: {e}"

    if rule is None:
        return None, REPHRASE_RULE
    return rule, f"Rule converted to type: {rule.type}. Review and Add."


# natural language -> search filters
def search_filters(client, query: str, entity: EntityType) -> Tuple[List[RecordFilter], str]:
    prompt = SEARCH_PROMPT.format(
        operators=", ".join(FILTER_OPERATORS),
        entity=entity.value,
        schema=json.dumps(ENTITY_SCHEMAS[entity.value], indent=2),
        query=query,
        json_only=JSON_ONLY,
    )
    try:
        response = client.generate_json(prompt)
        raw_filters = response.get("filters", []) if isinstance(response, dict) else None
        filters = parse_filters(raw_filters)
    except AI_FAILURES + (InvalidFilterError,) as e:
        logger.error("AI search failed: %s", e)
        return [], REPHRASE_SEARCH

    if not filters:
        return [], REPHRASE_SEARCH
    return filters, f"Derived {len(filters)} filter(s)."


def classify_intent(client, message: str) -> str:
    try:
        response = client.generate_json(INTENT_PROMPT.format(message=message, json_only=JSON_ONLY))
    except AI_FAILURES as e:
        logger.error("Intent classification failed: %s", e)
        return "general_query"
    intent = response.get("intent") if isinstance(response, dict) else None
    return intent if intent in INTENTS else "general_query"


# natural language -> action object (for review, not applied here)
def prepare_modification(client, request: str) -> CopilotReply:
    schemas = "\n".join(
        f"- {entity}: {{ {', '.join(fields)} }}" for entity, fields in ENTITY_SCHEMAS.items()
    )
    prompt = MODIFICATION_PROMPT.format(schemas=schemas, request=request, json_only=JSON_ONLY)
    try:
        action = client.generate_json(prompt)
        parse_action(action)
    except AI_FAILURES + (InvalidActionError, UnknownEntityError) as e:
        logger.error("Data modification handler error: %s", e)
        return CopilotReply(REPHRASE_MODIFICATION, "error_action")

    return CopilotReply(
        "I have prepared the following action based on your request. "
        "Please review before applying.",
        "data_modification_action",
        data=action,
    )


def skill_coverage_risks(state: AppState) -> List[str]:
    """Tasks needing a skill no worker has, compared case- and whitespace-insensitively."""
    available = {
        str(skill).lower().strip()
        for w in state.workers
        if isinstance(w.get("Skills"), list)
        for skill in w["Skills"]
    }
    risks: List[str] = []
    for task in state.tasks:
        required = task.get("RequiredSkills")
        if not isinstance(required, list):
            continue
        for skill in required:
            if str(skill).lower().strip() in available:
                continue
            message = (
                f"Risk Identified: Task '{task.get('TaskID')} ({task.get('TaskName')})' "
                f'requires the skill "{skill}", which no worker has.'
            )
            if message not in risks:
                risks.append(message)
    return risks


def recommend_rules(client, state: AppState) -> CopilotReply:
    recommendations = skill_coverage_risks(state)

    prompt = RECOMMENDATION_PROMPT.format(
        clients=len(state.clients),
        workers=len(state.workers),
        tasks=len(state.tasks),
        rules=len(state.rules),
        risks="; ".join(recommendations) or "None",
    )
    try:
        suggestion = client.generate_text(prompt)
        if suggestion:
            recommendations.append(suggestion)
    except AI_FAILURES as e:
        # heuristic results still go out
        logger.error("AI recommendation generation failed: %s", e)

    if recommendations:
        text = "Here are some recommendations based on your current setup:\n\n- " + "\n\n- ".join(
            recommendations
        )
    else:
        text = (
            "Your data setup looks solid! I couldn't find any immediate risks or obvious "
            "rule recommendations."
        )
    return CopilotReply(text, "recommendation")


def readiness_check(client, state: AppState) -> CopilotReply:
    report = readiness_report(state.findings)
    headline = (
        "Your configuration is ready for export!"
        if report.export_ready
        else "Your configuration still has blocking errors."
    )
    text = f"{headline}\n\n**Readiness Score: {report.score}/100**"

    prompt = READINESS_PROMPT.format(
        score=report.score,
        errors=report.errors,
        warnings=report.warnings,
        top_findings="\n".join(report.top_findings) or "None",
    )
    try:
        text += "\n\n" + client.generate_text(prompt)
    except AI_FAILURES as e:
        logger.error("AI readiness commentary failed: %s", e)

    return CopilotReply(text, "readiness_score", data=report.to_dict())


def what_if(client, scenario: str, state: AppState) -> CopilotReply:
    skills = list(
        dict.fromkeys(
            skill
            for w in state.workers
            if isinstance(w.get("Skills"), list)
            for skill in w["Skills"]
        )
    )
    prompt = WHAT_IF_PROMPT.format(
        clients=len(state.clients),
        top_priority_clients=sum(1 for c in state.clients if c.get("PriorityLevel") == 1),
        workers=len(state.workers),
        tasks=len(state.tasks),
        rules=len(state.rules),
        skills=", ".join(map(str, skills[:10])) or "None",
        scenario=scenario,
    )
    try:
        return CopilotReply(client.generate_text(prompt), "simulation")
    except AI_FAILURES as e:
        logger.error("What-if simulation failed: %s", e)
        return CopilotReply(SIMULATION_FAILED, "error_action")


def copilot(client, message: str, state: AppState) -> CopilotReply:
    """Route a chat message to the matching handler by classified intent."""
    intent = classify_intent(client, message)
    logger.info("Copilot intent: %s", intent)

    match intent:
        case "data_modification":
            return prepare_modification(client, message)
        case "what_if_simulation":
            return what_if(client, message, state)
        case "request_recommendation":
            return recommend_rules(client, state)
        case "readiness_check":
            return readiness_check(client, state)
        case _:
            return CopilotReply(GENERAL_REPLY, "general")
