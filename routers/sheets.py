# routers/sheets.py
from __future__ import annotations

from fastapi import APIRouter

from digialm import digialm_diagnostic
from extractor import extract_questions_from_html
from schemas.analysis import ValidationResult
from schemas.api import ExtractResponse, ParseResponse, SheetRequest
from sheet_parser import parse_with_strategy, validate_response_sheet

router = APIRouter(tags=["sheets"])


@router.post("/validate", response_model=ValidationResult)
def validate(req: SheetRequest):
    return validate_response_sheet(req.html)


@router.post("/parse", response_model=ParseResponse)
def parse(req: SheetRequest):
    outcome = parse_with_strategy(req.html)
    return {
        "ok": bool(outcome.responses),
        "strategy": outcome.strategy,
        "count": len(outcome.responses),
        "responses": outcome.responses,
        # only worth the bytes when something went wrong
        "diagnostic": {} if outcome.responses else digialm_diagnostic(req.html),
    }


@router.post("/extract", response_model=ExtractResponse)
def extract(req: SheetRequest):
    questions = extract_questions_from_html(req.html)
    return {"ok": bool(questions), "count": len(questions), "questions": questions}
