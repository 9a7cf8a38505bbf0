# sheet_parser.py
"""
Entry point for turning a response sheet into ParsedResponse records.

Duplicate policy: when the same question id shows up more than once, the LAST
occurrence wins. Output order follows the first time each id was seen.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from typing import Iterable, List, Literal

from pydantic import BaseModel

from digialm import is_digialm_format, parse_digialm_response_sheet
from fallback import parse_generic_response_sheet
from normalize import round_half_up
from schemas.analysis import (
    AnswerKeyEntry,
    KeyMatchReport,
    ParsedResponse,
    SubjectMatch,
    ValidationResult,
)

logger = logging.getLogger(__name__)

MIN_SHEET_LENGTH = 100
_SHEET_KEYWORDS = [re.compile(k, re.I) for k in ("question", "response", "option", "answer", "jee", "nta")]

_TOO_SMALL_MSG = "File appears to be empty or too small"
_NOT_A_SHEET_MSG = (
    "This doesn't appear to be a valid JEE response sheet. "
    "Please upload the correct HTML file."
)


class ParseOutcome(BaseModel):
    responses: List[ParsedResponse]
    strategy: Literal["digialm", "fallback", "none"]


def deduplicate_responses(responses: Iterable[ParsedResponse]) -> List[ParsedResponse]:
    """Keep one response per question id; later occurrences overwrite earlier ones."""
    by_id: dict[str, ParsedResponse] = {}
    for r in responses:
        qid = str(r.question_id)
        options = [str(o) for o in r.claimed_option_ids] if r.claimed_option_ids else None
        by_id[qid] = r.model_copy(update={"question_id": qid, "claimed_option_ids": options})
    return list(by_id.values())


def parse_with_strategy(html: str) -> ParseOutcome:
    if is_digialm_format(html):
        responses = parse_digialm_response_sheet(html)
        if responses:
            return ParseOutcome(responses=deduplicate_responses(responses), strategy="digialm")
        logger.info("digialm markers present but nothing parsed; trying generic parser")

    responses = parse_generic_response_sheet(html)
    if responses:
        return ParseOutcome(responses=deduplicate_responses(responses), strategy="fallback")

    logger.warning("no responses parsed from sheet (%d chars)", len(html or ""))
    return ParseOutcome(responses=[], strategy="none")


def parse_response_sheet_html(html: str) -> List[ParsedResponse]:
    return parse_with_strategy(html).responses


def validate_response_sheet(html: str) -> ValidationResult:
    if not html or len(html) < MIN_SHEET_LENGTH:
        return ValidationResult(valid=False, message=_TOO_SMALL_MSG)

    if is_digialm_format(html):
        return ValidationResult(valid=True, message="Valid response sheet")

    hits = sum(1 for patt in _SHEET_KEYWORDS if patt.search(html))
    if hits < 2:
        return ValidationResult(valid=False, message=_NOT_A_SHEET_MSG)
    return ValidationResult(valid=True, message="Valid response sheet")


def match_responses_with_keys(
    responses: List[ParsedResponse], answer_keys: List[AnswerKeyEntry]
) -> KeyMatchReport:
    """
    Compare parsed question ids against an answer-key set.

    A low match rate usually means the wrong exam date or shift was selected.
    """
    keys_by_id = {str(k.question_id): k for k in answer_keys}
    response_ids = [str(r.question_id) for r in responses]
    response_id_set = set(response_ids)

    matched = [qid for qid in response_ids if qid in keys_by_id]
    unmatched_responses = [qid for qid in response_ids if qid not in keys_by_id]
    unmatched_keys = [qid for qid in keys_by_id if qid not in response_id_set]

    by_subject: dict[str, SubjectMatch] = defaultdict(SubjectMatch)
    for qid, key in keys_by_id.items():
        stats = by_subject[key.subject]
        stats.total += 1
        if qid in response_id_set:
            stats.matched += 1

    match_rate = round_half_up(len(matched) / len(response_ids) * 100) if response_ids else 0.0
    return KeyMatchReport(
        matched=matched,
        unmatched_responses=unmatched_responses,
        unmatched_keys=unmatched_keys,
        match_rate=match_rate,
        by_subject=dict(by_subject),
    )
