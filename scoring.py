# scoring.py
"""
Scoring engine.

Per response:
  cancelled            -> 0 marks, left out of every tally
  bonus                -> full marks unless attempted and wrong (then 0, never negative)
  normal, unattempted  -> rules.unattempted
  normal, attempted    -> rules.correct / rules.wrong (numerical wrong is always 0)

Responses whose question is not in the answer key, or whose question type has no
marking rule, are skipped, not failed.
The summary is always produced by `summarize`, so it can be rebuilt from the
ScoredResponse list at any time.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Union

from normalize import round_half_up
from schemas.analysis import (
    DEFAULT_NUMERIC_TOLERANCE,
    SUBJECTS,
    AnswerKeyEntry,
    MarkingRules,
    ParsedResponse,
    ScoredResponse,
    ScoringResult,
    ScoringSummary,
    SectionBreakdown,
    SkippedResponse,
    SubjectStats,
)

logger = logging.getLogger(__name__)

NUMERICAL_TYPES = {"numerical", "integer", "num"}
SECTION_B_MARKS_PER_QUESTION = 4


def _accuracy(correct: int, attempted: int) -> float:
    return round_half_up(correct / attempted * 100) if attempted > 0 else 0.0


def is_numerical_type(question_type: Optional[str]) -> bool:
    return bool(question_type) and question_type.lower() in NUMERICAL_TYPES


def check_answer(response: ParsedResponse, key: AnswerKeyEntry) -> bool:
    if key.question_type == "numerical":
        if response.claimed_numeric_value is None or key.correct_numeric_value is None:
            return False
        # an unset or zero tolerance means the default, not an exact match
        tolerance = key.numeric_tolerance or DEFAULT_NUMERIC_TOLERANCE
        diff = abs(response.claimed_numeric_value - key.correct_numeric_value)
        # absorb float noise so that a diff of exactly the tolerance passes
        return diff <= tolerance + 1e-9

    if not response.claimed_option_ids or not key.correct_option_ids:
        return False
    claimed = ",".join(sorted(str(o) for o in response.claimed_option_ids))
    correct = ",".join(sorted(str(o) for o in key.correct_option_ids))
    return claimed == correct


def score_response(
    parsed: ParsedResponse,
    key: AnswerKeyEntry,
    rules: MarkingRules,
    submission_id: Optional[str] = None,
) -> ScoredResponse:
    negative = 0
    rule = rules.effective_rule(key.question_type)
    if rule is None and not key.is_cancelled:
        raise LookupError(f"no marking rule configured for {key.question_type!r} questions")

    if key.is_cancelled:
        status, marks = "cancelled", 0
    elif key.is_bonus:
        if parsed.is_attempted and not check_answer(parsed, key):
            status, marks = "wrong", 0
        else:
            status, marks = "correct", rule.correct
    elif not parsed.is_attempted:
        status, marks = "unattempted", rule.unattempted
    elif check_answer(parsed, key):
        status, marks = "correct", rule.correct
    else:
        status, marks = "wrong", rule.wrong
        if key.question_type != "numerical":
            negative = abs(rule.wrong)

    return ScoredResponse(
        question_id=str(parsed.question_id),
        status=status,
        marks_awarded=marks,
        subject=key.subject,
        question_type=key.question_type,
        claimed_option_ids=parsed.claimed_option_ids,
        claimed_numeric_value=parsed.claimed_numeric_value,
        submission_id=submission_id,
        is_bonus=key.is_bonus and not key.is_cancelled,
        negative_marks=negative,
    )


def summarize(scored: List[ScoredResponse]) -> tuple[ScoringSummary, List[SubjectStats]]:
    """Aggregate scored responses. This is the only place totals are computed."""
    stats: Dict[str, SubjectStats] = {s: SubjectStats(subject=s) for s in SUBJECTS}
    summary = ScoringSummary()

    for r in scored:
        bucket = stats.setdefault(r.subject, SubjectStats(subject=r.subject))
        bucket.marks += r.marks_awarded
        summary.total_marks += r.marks_awarded
        summary.negative_marks += r.negative_marks

        if r.status == "cancelled" or r.is_bonus:
            continue
        if r.status == "unattempted":
            bucket.unattempted += 1
            summary.total_unattempted += 1
            continue

        bucket.attempted += 1
        summary.total_attempted += 1
        if r.status == "correct":
            bucket.correct += 1
            summary.total_correct += 1
        else:
            bucket.wrong += 1
            summary.total_wrong += 1

    for bucket in stats.values():
        bucket.accuracy = _accuracy(bucket.correct, bucket.attempted)

    summary.accuracy_percentage = _accuracy(summary.total_correct, summary.total_attempted)
    summary.math_marks = stats["Mathematics"].marks
    summary.physics_marks = stats["Physics"].marks
    summary.chemistry_marks = stats["Chemistry"].marks
    summary.subject_marks = {s: b.marks for s, b in stats.items()}
    return summary, list(stats.values())


def calculate_scores(
    parsed_responses: List[ParsedResponse],
    answer_keys: List[AnswerKeyEntry],
    marking_rules: MarkingRules,
    submission_id: Optional[str] = None,
) -> ScoringResult:
    keys_by_id = {str(k.question_id): k for k in answer_keys}

    outcomes: List[Union[ScoredResponse, SkippedResponse]] = []
    for parsed in parsed_responses:
        key = keys_by_id.get(str(parsed.question_id))
        if key is None:
            outcomes.append(SkippedResponse(question_id=str(parsed.question_id)))
            continue
        if marking_rules.rule_for(key.question_type) is None and not key.is_cancelled:
            outcomes.append(
                SkippedResponse(question_id=str(parsed.question_id), reason="no_marking_rule")
            )
            continue
        outcomes.append(score_response(parsed, key, marking_rules, submission_id))

    scored = [o for o in outcomes if isinstance(o, ScoredResponse)]
    skipped = [o for o in outcomes if isinstance(o, SkippedResponse)]
    if skipped:
        logger.debug(
            "skipped %d responses: %s", len(skipped), sorted({s.reason for s in skipped})
        )

    summary, subject_stats = summarize(scored)
    logger.info(
        "scored %d responses (%d skipped): total=%d attempted=%d correct=%d",
        len(scored),
        len(skipped),
        summary.total_marks,
        summary.total_attempted,
        summary.total_correct,
    )
    return ScoringResult(
        responses=scored, skipped=skipped, summary=summary, subject_stats=subject_stats
    )


# --- Section A / B breakdown --------------------------------------------------------


def compute_section_stats(scored: List[ScoredResponse]) -> Dict[str, SectionBreakdown]:
    """Per-subject Section A (choice) and Section B (numerical) stats."""
    result: Dict[str, SectionBreakdown] = {s: SectionBreakdown() for s in SUBJECTS}

    for r in scored:
        if r.subject not in result:
            continue
        section = result[r.subject].B if is_numerical_type(r.question_type) else result[r.subject].A
        section.total += 1
        if r.status == "correct":
            section.attempted += 1
            section.correct += 1
            section.marks += r.marks_awarded
        elif r.status == "wrong":
            section.attempted += 1
            section.wrong += 1
            section.marks += r.marks_awarded
            if r.marks_awarded < 0:
                section.negative += abs(r.marks_awarded)

    for breakdown in result.values():
        # no negative marking in Section B, so a miss only costs the forgone marks
        breakdown.B.marks_lost = (breakdown.B.attempted - breakdown.B.correct) * SECTION_B_MARKS_PER_QUESTION
    return result
