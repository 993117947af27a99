import traceback
from dataclasses import asdict, replace

from fastapi import APIRouter, Depends, HTTPException

from core.entities import resolve_entity
from core.rules import build_rule, default_priorities, rule_to_dict, update_priorities
from core.search import apply_filters
from core.state import validated
from docs.ai.copilot import (
    ai_convert_rule_description,
    ai_copilot_description,
    ai_search_description,
)
from exceptions.custom_errors import CUSTOM_ERRORS
from schemas.ai.copilot import AISearchRequest, ConvertRuleRequest, CopilotRequest
from utils.ai_client import LLMClient
from utils.helpers.copilot import convert_rule, copilot, search_filters
from utils.logger import logger

router = APIRouter(prefix="/ai", tags=["AI Copilot"])


def get_ai_client() -> LLMClient:
    return LLMClient.from_env()


@router.post(
    "/convert-rule",
    response_model=dict,
    description=ai_convert_rule_description,
    summary="Convert Rule From Text",
)
def convert(data: ConvertRuleRequest, client: LLMClient = Depends(get_ai_client)):
    try:
        rule, message = convert_rule(client, data.description, data.taskIds, data.workerGroups)
        return {"rule": rule_to_dict(rule) if rule else None, "message": message}
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        logger.error("Rule conversion failed: %s", e)
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")


@router.post(
    "/search",
    response_model=dict,
    description=ai_search_description,
    summary="Natural Language Search",
)
def search(data: AISearchRequest, client: LLMClient = Depends(get_ai_client)):
    try:
        entity = resolve_entity(data.entity)
        filters, message = search_filters(client, data.query, entity)
        results = apply_filters(data.to_state().collection(entity), filters) if filters else []
        return {
            "filters": [asdict(f) for f in filters],
            "results": results,
            "message": message,
        }
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        logger.error("AI search failed: %s", e)
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")


@router.post(
    "/copilot",
    response_model=dict,
    description=ai_copilot_description,
    summary="Copilot Chat",
)
def chat(data: CopilotRequest, client: LLMClient = Depends(get_ai_client)):
    try:
        rules = tuple(build_rule(draft.model_dump(exclude_none=True)) for draft in data.rules)
        state = replace(
            data.to_state(),
            rules=rules,
            priorities=update_priorities(default_priorities(), data.priorities),
        )
        state = validated(state)
        return copilot(client, data.message, state).to_dict()
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        logger.error("Copilot failed: %s", e)
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")
