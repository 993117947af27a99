import traceback

from fastapi import APIRouter, HTTPException, Response

from core.rules import (
    build_rule,
    default_priorities,
    describe_rule,
    rule_to_dict,
    update_priorities,
)
from docs.rules.config import (
    rules_build_description,
    rules_export_description,
    rules_priorities_description,
)
from exceptions.custom_errors import CUSTOM_ERRORS
from schemas.rules.config import PrioritiesRequest, RuleDraft, RulesExportRequest
from utils.exporter import rules_config_json
from utils.logger import logger

router = APIRouter(prefix="/rules", tags=["Business Rules"])


@router.post(
    "/build",
    response_model=dict,
    description=rules_build_description,
    summary="Build Rule",
)
def build(draft: RuleDraft):
    try:
        rule = build_rule(draft.model_dump(exclude_none=True))
        return {"rule": rule_to_dict(rule), "description": describe_rule(rule)}
    except tuple(CUSTOM_ERRORS) as e:
        logger.warning("Rule rejected: %s", e)
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")


@router.post(
    "/export",
    description=rules_export_description,
    summary="Export Rules Configuration",
)
def export_rules(data: RulesExportRequest):
    try:
        rules = [build_rule(draft.model_dump(exclude_none=True)) for draft in data.rules]
        priorities = update_priorities(default_priorities(), data.priorities)
        logger.info("Exporting rules configuration with %d rule(s)", len(rules))
        content = rules_config_json(rules, priorities)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")

    return Response(
        content=content,
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="rules.json"'},
    )


@router.post(
    "/priorities",
    response_model=dict,
    description=rules_priorities_description,
    summary="Update Priority Weights",
)
def priorities(data: PrioritiesRequest):
    try:
        return {"priorities": update_priorities(data.current, data.updates)}
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")
