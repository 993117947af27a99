import traceback

from fastapi import APIRouter, HTTPException

from core.readiness import readiness_report
from core.state import validated
from docs.validation.run import validation_run_description
from exceptions.custom_errors import CUSTOM_ERRORS
from schemas.data.entities import DataSnapshot
from utils.logger import logger

router = APIRouter(prefix="/validation", tags=["Validation"])


@router.post(
    "/run",
    response_model=dict,
    description=validation_run_description,
    summary="Run Validations",
)
def run_validation(data: DataSnapshot):
    try:
        state = validated(data.to_state())
        report = readiness_report(state.findings)
        logger.info(
            "Validation run: %d error(s), %d warning(s), score %d",
            report.errors,
            report.warnings,
            report.score,
        )
        return {
            "findings": [f.to_dict() for f in state.findings],
            "readiness": report.to_dict(),
        }
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        logger.error("Validation run failed: %s", e)
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")
