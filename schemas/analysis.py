# schemas/analysis.py
from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Subject = Literal["Mathematics", "Physics", "Chemistry"]
QuestionType = Literal["mcq_single", "msq", "numerical"]
ResponseStatus = Literal["correct", "wrong", "unattempted", "cancelled"]

SUBJECTS: List[str] = ["Mathematics", "Physics", "Chemistry"]
QUESTION_TYPES = ("mcq_single", "msq", "numerical")
DEFAULT_NUMERIC_TOLERANCE = 0.01


# ---------- Parsed responses ----------


class ParsedResponse(BaseModel):
    """One answer as read from the response sheet, before scoring."""

    question_id: str
    claimed_option_ids: Optional[List[str]] = None
    claimed_numeric_value: Optional[float] = None
    is_attempted: bool = False

    # ids are long numeric strings; never let them become ints or floats
    @field_validator("question_id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return str(v).strip() if v is not None else v

    @field_validator("claimed_option_ids", mode="before")
    @classmethod
    def _option_ids_as_str(cls, v):
        if v is None:
            return None
        return [str(o).strip() for o in v]


# ---------- Answer keys & marking rules ----------


class AnswerKeyEntry(BaseModel):
    question_id: str
    subject: str
    question_type: QuestionType
    correct_option_ids: Optional[List[str]] = None
    correct_numeric_value: Optional[float] = None
    numeric_tolerance: float = DEFAULT_NUMERIC_TOLERANCE
    is_cancelled: bool = False
    is_bonus: bool = False

    @field_validator("question_id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return str(v).strip() if v is not None else v

    @field_validator("correct_option_ids", mode="before")
    @classmethod
    def _option_ids_as_str(cls, v):
        if v is None:
            return None
        return [str(o).strip() for o in v]


class MarkingRule(BaseModel):
    correct: int
    wrong: int
    unattempted: int = 0


class MarkingRules(BaseModel):
    """
    Point deltas per question type, as configured for a test.

    Consumer contract: numerical questions never carry negative marking.
    Whatever `numerical.wrong` says, `effective_rule("numerical").wrong` is 0,
    and that is the value the scoring engine applies.

    A type without a configured rule has no rule: questions of that type are
    skipped by the scoring engine, never scored with another type's deltas.
    """

    mcq_single: MarkingRule
    msq: Optional[MarkingRule] = None
    numerical: Optional[MarkingRule] = None

    def rule_for(self, question_type: str) -> Optional[MarkingRule]:
        if question_type not in QUESTION_TYPES:
            return None
        return getattr(self, question_type)

    def effective_rule(self, question_type: str) -> Optional[MarkingRule]:
        rule = self.rule_for(question_type)
        if rule is not None and question_type == "numerical":
            return rule.model_copy(update={"wrong": 0})
        return rule


# ---------- Scoring output ----------


class ScoredResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: str
    status: ResponseStatus
    marks_awarded: int
    subject: str
    question_type: str = "mcq_single"
    claimed_option_ids: Optional[List[str]] = None
    claimed_numeric_value: Optional[float] = None
    submission_id: Optional[str] = None
    # bonus questions award marks but stay out of the attempt tallies
    is_bonus: bool = False
    negative_marks: int = 0


class SkippedResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: str
    reason: str = "not_in_answer_key"


class SubjectStats(BaseModel):
    subject: str
    marks: int = 0
    attempted: int = 0
    correct: int = 0
    wrong: int = 0
    unattempted: int = 0
    accuracy: float = 0.0


class ScoringSummary(BaseModel):
    total_marks: int = 0
    total_attempted: int = 0
    total_correct: int = 0
    total_wrong: int = 0
    total_unattempted: int = 0
    accuracy_percentage: float = 0.0
    negative_marks: int = 0
    math_marks: int = 0
    physics_marks: int = 0
    chemistry_marks: int = 0
    subject_marks: Dict[str, int] = Field(default_factory=dict)


class ScoringResult(BaseModel):
    responses: List[ScoredResponse]
    skipped: List[SkippedResponse] = Field(default_factory=list)
    summary: ScoringSummary
    subject_stats: List[SubjectStats]


class SectionStats(BaseModel):
    attempted: int = 0
    correct: int = 0
    wrong: int = 0
    negative: int = 0
    marks: int = 0
    marks_lost: int = 0
    total: int = 0


class SectionBreakdown(BaseModel):
    A: SectionStats = Field(default_factory=SectionStats)
    B: SectionStats = Field(default_factory=SectionStats)


# ---------- Review data ----------


class QuestionOption(BaseModel):
    id: str
    label: str
    text: str


class ExtractedQuestion(BaseModel):
    question_id: str
    qno: int
    subject: str
    section: Literal["A", "B"]
    question_text: str
    options: List[QuestionOption] = Field(default_factory=list)
    user_answer: Union[float, str, None] = None
    is_attempted: bool = False
    is_numerical: bool = False


# ---------- Percentile ----------


class PercentileResult(BaseModel):
    percentile: Optional[float] = None
    display_value: str = "N/A"
    mapped_2025_shift: Optional[str] = None
    mapped_2025_shift_display: Optional[str] = None
    is_below: bool = False
    is_above: bool = False


# ---------- Diagnostics ----------


class ValidationResult(BaseModel):
    valid: bool
    message: str


class SubjectMatch(BaseModel):
    matched: int = 0
    total: int = 0


class KeyMatchReport(BaseModel):
    matched: List[str] = Field(default_factory=list)
    unmatched_responses: List[str] = Field(default_factory=list)
    unmatched_keys: List[str] = Field(default_factory=list)
    match_rate: float = 0.0
    by_subject: Dict[str, SubjectMatch] = Field(default_factory=dict)
