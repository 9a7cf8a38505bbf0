# pipeline.py
from __future__ import annotations

import logging
import uuid
from typing import Optional

from extractor import AnswerKeyClassifier, extract_questions_from_html, merge_with_parsed_responses
from keys import KeySet, get_key_set
from normalize import normalize_test_identifier
from percentile import estimate_percentile
from schemas.api import AnalysisReport
from scoring import calculate_scores, compute_section_stats
from sheet_parser import match_responses_with_keys, parse_with_strategy, validate_response_sheet

logger = logging.getLogger(__name__)

_NOTHING_PARSED_MSG = (
    "Could not parse any responses from this file. "
    "Make sure it is the complete response sheet saved as HTML."
)


class ResponseSheetError(ValueError):
    """The uploaded sheet (or its exam date/shift) was rejected before scoring."""


class UnparseableSheetError(ResponseSheetError):
    """Neither parser recovered a single response."""


class AnswerKeyNotFoundError(LookupError):
    pass


def analyze_response_sheet(
    html: str,
    exam_date: str,
    shift: str,
    key_set: Optional[KeySet] = None,
) -> AnalysisReport:
    """Validate, parse, score and estimate percentile for one response sheet."""
    validation = validate_response_sheet(html)
    if not validation.valid:
        raise ResponseSheetError(validation.message)

    ident = normalize_test_identifier(exam_date, shift)
    if not ident.valid:
        raise ResponseSheetError(ident.error)

    key_set = key_set or get_key_set(ident.exam_date, ident.shift)
    if key_set is None:
        raise AnswerKeyNotFoundError(
            f"No answer key available for {ident.exam_date} {ident.shift}."
        )

    outcome = parse_with_strategy(html)
    if not outcome.responses:
        raise UnparseableSheetError(_NOTHING_PARSED_MSG)

    submission_id = str(uuid.uuid4())
    scoring = calculate_scores(
        outcome.responses, key_set.keys, key_set.marking_rules, submission_id
    )
    key_match = match_responses_with_keys(outcome.responses, key_set.keys)
    if key_match.match_rate < 50:
        logger.warning(
            "only %.2f%% of parsed questions found in the %s %s key; wrong shift selected?",
            key_match.match_rate,
            ident.exam_date,
            ident.shift,
        )

    classifier = AnswerKeyClassifier(key_set.keys)
    extracted = extract_questions_from_html(html, classifier)
    questions = merge_with_parsed_responses(extracted, outcome.responses, classifier)

    return AnalysisReport(
        submission_id=submission_id,
        exam_date=ident.exam_date,
        shift=ident.shift,
        strategy=outcome.strategy,
        summary=scoring.summary,
        subject_stats=scoring.subject_stats,
        section_stats=compute_section_stats(scoring.responses),
        responses=scoring.responses,
        skipped=scoring.skipped,
        percentile=estimate_percentile(scoring.summary.total_marks, ident.exam_date, ident.shift),
        questions=questions,
        key_match=key_match,
    )
