import traceback
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import Response
from pydantic import ValidationError

from core.entities import resolve_entity
from core.search import apply_filters, parse_filters
from core.state import with_collection, with_modification
from docs.data.records import (
    data_export_description,
    data_modify_description,
    data_search_description,
    data_upload_description,
)
from exceptions.custom_errors import CUSTOM_ERRORS
from schemas.data.actions import ModifyRequest, SearchRequest
from schemas.data.entities import DataSnapshot
from utils.exporter import export_records
from utils.loader import load_entity
from utils.logger import logger

router = APIRouter(prefix="/data", tags=["Data"])


@router.post(
    "/modify",
    response_model=dict,
    description=data_modify_description,
    summary="Apply Data Modification",
)
def modify(data: ModifyRequest):
    try:
        state, result = with_modification(data.to_state(), data.action)
        response = result.to_dict()
        if result.applied:
            response["findings"] = [f.to_dict() for f in state.findings]
        return response
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        logger.error("Modification failed: %s", e)
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")


@router.post(
    "/search",
    response_model=dict,
    description=data_search_description,
    summary="Search Records",
)
def search(data: SearchRequest):
    try:
        entity = resolve_entity(data.entity)
        filters = parse_filters(data.filters)
        results = apply_filters(data.to_state().collection(entity), filters)
        return {"entity": entity.value, "count": len(results), "results": results}
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")


@router.post(
    "/upload/{entity}",
    response_model=dict,
    description=data_upload_description,
    summary="Upload Entity File",
)
async def upload(
    entity: str,
    file: UploadFile = File(...),
    snapshot: Optional[str] = Form(None),
):
    try:
        base = DataSnapshot.model_validate_json(snapshot) if snapshot else DataSnapshot()
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid snapshot: {e}")

    try:
        entity_type = resolve_entity(entity)
        contents = await file.read()
        records = load_entity(entity_type, contents, file.filename)
        state = with_collection(base.to_state(), entity_type, records)
        return {
            "entity": entity_type.value,
            "count": len(records),
            "records": records,
            "findings": [f.to_dict() for f in state.findings],
        }
    except tuple(CUSTOM_ERRORS) as e:
        logger.warning("Upload of %s rejected: %s", file.filename, e)
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        logger.error("Upload of %s failed: %s", file.filename, e)
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")


@router.post(
    "/export/{entity}",
    description=data_export_description,
    summary="Export Entity File",
)
def export(entity: str, data: DataSnapshot, fmt: str = Query("csv", alias="format")):
    try:
        entity_type = resolve_entity(entity)
        content, content_type, filename = export_records(
            data.to_state().collection(entity_type), entity_type, fmt
        )
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")

    return Response(
        content=content,
        media_type=content_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
