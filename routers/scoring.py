# routers/scoring.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from normalize import normalize_test_identifier
from percentile import estimate_percentile
from schemas.analysis import PercentileResult, ScoringResult
from schemas.api import ScoreRequest
from scoring import calculate_scores

router = APIRouter(tags=["scoring"])


@router.post("/score", response_model=ScoringResult)
def score(req: ScoreRequest):
    return calculate_scores(req.responses, req.answer_keys, req.marking_rules, req.submission_id)


@router.get("/percentile", response_model=PercentileResult)
def percentile(
    marks: float = Query(..., ge=-300, le=300),
    exam_date: str = Query(...),
    shift: str = Query(...),
):
    ident = normalize_test_identifier(exam_date, shift)
    if not ident.valid:
        raise HTTPException(status_code=400, detail=ident.error)
    return estimate_percentile(marks, ident.exam_date, ident.shift)
