# schemas/api.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.analysis import (
    AnswerKeyEntry,
    ExtractedQuestion,
    KeyMatchReport,
    MarkingRules,
    ParsedResponse,
    PercentileResult,
    ScoredResponse,
    ScoringSummary,
    SectionBreakdown,
    SkippedResponse,
    SubjectStats,
)

# ---------- Sheet in ----------


class SheetRequest(BaseModel):
    html: str


class ParseResponse(BaseModel):
    ok: bool
    strategy: str
    count: int
    responses: List[ParsedResponse]
    # marker counts, useful when nothing was parsed
    diagnostic: Dict[str, Any] = Field(default_factory=dict)


class ExtractResponse(BaseModel):
    ok: bool
    count: int
    questions: List[ExtractedQuestion]


# ---------- Score ----------


class ScoreRequest(BaseModel):
    responses: List[ParsedResponse]
    answer_keys: List[AnswerKeyEntry]
    marking_rules: MarkingRules
    submission_id: Optional[str] = None


# ---------- Analyze (full pipeline) ----------


class AnalyzeRequest(BaseModel):
    html: str
    exam_date: str
    shift: str


class AnalysisReport(BaseModel):
    submission_id: str
    exam_date: str
    shift: str
    strategy: str
    summary: ScoringSummary
    subject_stats: List[SubjectStats]
    section_stats: Dict[str, SectionBreakdown]
    responses: List[ScoredResponse]
    skipped: List[SkippedResponse] = Field(default_factory=list)
    percentile: PercentileResult
    questions: List[ExtractedQuestion]
    key_match: KeyMatchReport


class AnalyzeResponse(AnalysisReport):
    ok: bool = True
    # id of the stored row; None when persistence was unavailable
    stored_id: Optional[int] = None
    duration_ms: Optional[int] = None


# ---------- Key sets ----------


class KeySetOut(BaseModel):
    exam_date: str
    shift: str
    label: str
    total: int
    subjects: Dict[str, int]


# ---------- Stored submissions ----------


class SubmissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    public_id: str
    created_at: datetime | None
    exam_date: str
    shift: str
    strategy: str
    total_marks: int
    total_attempted: int
    total_correct: int
    total_wrong: int
    total_unattempted: int
    accuracy_percentage: float
    negative_marks: int
    math_marks: int
    physics_marks: int
    chemistry_marks: int
    percentile: float | None = None
    duration_ms: int | None = None
    # per-question results; usually excluded in list views
    responses: list[Any] | dict | None = None
