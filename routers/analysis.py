# routers/analysis.py
from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import APIRouter, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from pipeline import (
    AnswerKeyNotFoundError,
    ResponseSheetError,
    UnparseableSheetError,
    analyze_response_sheet,
)
from schemas.api import AnalysisReport, AnalyzeRequest, AnalyzeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


def _store(report: AnalysisReport, duration_ms: int) -> Optional[int]:
    """Persist the summary and scored responses. Failure never fails the request."""
    try:
        from db import SessionLocal
        from models import Submission

        summary = report.summary
        with SessionLocal() as db:
            row = Submission(
                public_id=report.submission_id,
                exam_date=report.exam_date,
                shift=report.shift,
                strategy=report.strategy,
                total_marks=summary.total_marks,
                total_attempted=summary.total_attempted,
                total_correct=summary.total_correct,
                total_wrong=summary.total_wrong,
                total_unattempted=summary.total_unattempted,
                accuracy_percentage=summary.accuracy_percentage,
                negative_marks=summary.negative_marks,
                math_marks=summary.math_marks,
                physics_marks=summary.physics_marks,
                chemistry_marks=summary.chemistry_marks,
                percentile=report.percentile.percentile,
                responses=[r.model_dump() for r in report.responses],
                duration_ms=duration_ms,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return row.id
    except SQLAlchemyError as e:
        logger.warning("could not store submission %s: %s", report.submission_id, e)
        return None


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(req: AnalyzeRequest):
    t0 = time.perf_counter()
    try:
        report = analyze_response_sheet(req.html, req.exam_date, req.shift)
    except UnparseableSheetError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ResponseSheetError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AnswerKeyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    duration_ms = int(round((time.perf_counter() - t0) * 1000))
    stored_id = _store(report, duration_ms)
    return AnalyzeResponse(**report.model_dump(), stored_id=stored_id, duration_ms=duration_ms)
