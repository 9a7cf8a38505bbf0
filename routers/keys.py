from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from keys import get_key_set, list_key_sets
from normalize import normalize_exam_date, normalize_test_identifier
from schemas.analysis import AnswerKeyEntry
from schemas.api import KeySetOut

router = APIRouter(prefix="/keys", tags=["keys"])


@router.get("", response_model=List[KeySetOut])
def list_keys(exam_date: Optional[str] = Query(default=None)):
    sets = sorted(list_key_sets(), key=lambda ks: (ks.exam_date, ks.shift))
    if exam_date:
        wanted = normalize_exam_date(exam_date)
        if not wanted:
            raise HTTPException(status_code=400, detail=f'Invalid exam date format: "{exam_date}"')
        sets = [ks for ks in sets if ks.exam_date == wanted]

    return [
        KeySetOut(
            exam_date=ks.exam_date,
            shift=ks.shift,
            label=ks.label,
            total=len(ks.keys),
            subjects=ks.subject_counts(),
        )
        for ks in sets
    ]


@router.get("/{exam_date}/{shift}", response_model=List[AnswerKeyEntry])
def get_keys(exam_date: str, shift: str):
    ident = normalize_test_identifier(exam_date, shift)
    if not ident.valid:
        raise HTTPException(status_code=400, detail=ident.error)
    ks = get_key_set(ident.exam_date, ident.shift)
    if ks is None:
        raise HTTPException(status_code=404, detail="answer key not found")
    return ks.keys
