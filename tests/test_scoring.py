import pytest

from schemas.analysis import AnswerKeyEntry, MarkingRule, MarkingRules, ParsedResponse
from scoring import calculate_scores, check_answer, compute_section_stats, score_response, summarize

RULES = MarkingRules(
    mcq_single=MarkingRule(correct=4, wrong=-1),
    msq=MarkingRule(correct=4, wrong=-2),
    # configured with a penalty on purpose: numerical wrong answers must still score 0
    numerical=MarkingRule(correct=4, wrong=-1),
)


def _mcq(qid, correct, subject="Mathematics", **kw):
    return AnswerKeyEntry(
        question_id=qid, subject=subject, question_type="mcq_single", correct_option_ids=[correct], **kw
    )


def _num(qid, value, subject="Mathematics", **kw):
    return AnswerKeyEntry(
        question_id=qid, subject=subject, question_type="numerical", correct_numeric_value=value, **kw
    )


def _chose(qid, *options):
    return ParsedResponse(question_id=qid, claimed_option_ids=list(options), is_attempted=True)


def _gave(qid, value):
    return ParsedResponse(question_id=qid, claimed_numeric_value=value, is_attempted=True)


def _blank(qid):
    return ParsedResponse(question_id=qid, is_attempted=False)


def test_msq_is_order_insensitive():
    key = AnswerKeyEntry(question_id="1", subject="Physics", question_type="msq", correct_option_ids=["b", "a"])
    assert check_answer(_chose("1", "a", "b"), key) is True
    assert check_answer(_chose("1", "a"), key) is False


def test_numeric_tolerance_boundary():
    key = _num("1", 3.14)
    assert check_answer(_gave("1", 3.15), key) is True
    assert check_answer(_gave("1", 3.13), key) is True
    assert check_answer(_gave("1", 3.16), key) is False


def test_zero_tolerance_means_default():
    key = _num("1", 10, numeric_tolerance=0)
    assert check_answer(_gave("1", 10.005), key) is True


def test_numerical_wrong_is_never_negative():
    scored = score_response(_gave("1", 7), _num("1", 8), RULES)
    assert scored.status == "wrong"
    assert scored.marks_awarded == 0
    assert scored.negative_marks == 0


def test_mcq_wrong_is_negative():
    scored = score_response(_chose("1", "B"), _mcq("1", "A"), RULES)
    assert scored.marks_awarded == -1
    assert scored.negative_marks == 1


def test_msq_uses_its_own_rule():
    key = AnswerKeyEntry(question_id="1", subject="Physics", question_type="msq", correct_option_ids=["A", "B"])
    assert score_response(_chose("1", "A"), key, RULES).marks_awarded == -2


def test_unconfigured_type_is_skipped_not_borrowed():
    rules = MarkingRules(mcq_single=MarkingRule(correct=3, wrong=-1))
    keys = [
        _mcq("1", "A"),
        _num("2", 5),
        AnswerKeyEntry(question_id="3", subject="Physics", question_type="msq", correct_option_ids=["A"]),
    ]
    result = calculate_scores([_chose("1", "A"), _gave("2", 5), _chose("3", "A")], keys, rules)

    assert [r.question_id for r in result.responses] == ["1"]
    assert [(s.question_id, s.reason) for s in result.skipped] == [
        ("2", "no_marking_rule"),
        ("3", "no_marking_rule"),
    ]
    assert result.summary.total_marks == 3
    assert rules.rule_for("numerical") is None
    assert rules.effective_rule("msq") is None


def test_score_response_refuses_unconfigured_type():
    rules = MarkingRules(mcq_single=MarkingRule(correct=3, wrong=-1))
    with pytest.raises(LookupError):
        score_response(_gave("1", 5), _num("1", 5), rules)


def test_cancelled_needs_no_rule():
    rules = MarkingRules(mcq_single=MarkingRule(correct=3, wrong=-1))
    result = calculate_scores([_gave("1", 5)], [_num("1", 5, is_cancelled=True)], rules)
    assert result.responses[0].status == "cancelled"
    assert result.skipped == []


def test_missing_numeric_key_value_is_wrong():
    key = _num("1", None)
    assert check_answer(_gave("1", 5), key) is False
    scored = score_response(_gave("1", 5), key, RULES)
    assert scored.status == "wrong"
    assert scored.marks_awarded == 0


def test_missing_option_key_is_wrong():
    for correct in (None, []):
        key = AnswerKeyEntry(
            question_id="1", subject="Physics", question_type="mcq_single", correct_option_ids=correct
        )
        assert check_answer(_chose("1", "A"), key) is False
        scored = score_response(_chose("1", "A"), key, RULES)
        assert scored.status == "wrong"
        assert scored.marks_awarded == -1


def test_accuracy_rounds_half_up():
    keys = [_mcq(str(i), "A") for i in range(32)]
    parsed = [_chose("0", "A")] + [_chose(str(i), "B") for i in range(1, 32)]
    summary = calculate_scores(parsed, keys, RULES).summary
    assert summary.total_attempted == 32
    # 1/32 = 3.125%
    assert summary.accuracy_percentage == 3.13


def test_bonus_never_penalises():
    key = _mcq("1", "A", is_bonus=True)
    wrong = score_response(_chose("1", "B"), key, RULES)
    assert (wrong.status, wrong.marks_awarded) == ("wrong", 0)
    blank = score_response(_blank("1"), key, RULES)
    assert (blank.status, blank.marks_awarded) == ("correct", 4)
    assert blank.is_bonus is True


def test_cancelled_is_neutral():
    key = _mcq("1", "A", is_cancelled=True, is_bonus=True)
    scored = score_response(_chose("1", "A"), key, RULES)
    assert scored.status == "cancelled"
    assert scored.marks_awarded == 0
    assert scored.is_bonus is False

    summary, _ = summarize([scored])
    assert summary.total_attempted == 0
    assert summary.total_unattempted == 0
    assert summary.total_marks == 0


def test_calculate_scores_totals_and_skips():
    keys = [
        _mcq("1", "A"),
        _mcq("2", "B"),
        _mcq("3", "C", subject="Physics"),
        _num("4", 12, subject="Chemistry"),
        _num("5", 1.5, subject="Chemistry"),
        _mcq("6", "D", subject="Physics", is_bonus=True),
    ]
    parsed = [
        _chose("1", "A"),
        _chose("2", "C"),
        _blank("3"),
        _gave("4", 12),
        _gave("5", 2),
        _blank("6"),
        _chose("99", "A"),
    ]
    result = calculate_scores(parsed, keys, RULES, submission_id="sub-1")

    assert [s.question_id for s in result.skipped] == ["99"]
    assert result.skipped[0].reason == "not_in_answer_key"
    assert all(r.submission_id == "sub-1" for r in result.responses)

    s = result.summary
    assert s.total_marks == 4 - 1 + 0 + 4 + 0 + 4
    assert s.total_attempted == 4
    assert s.total_correct == 2
    assert s.total_wrong == 2
    assert s.total_unattempted == 1
    assert s.accuracy_percentage == 50.0
    assert s.negative_marks == 1
    assert (s.math_marks, s.physics_marks, s.chemistry_marks) == (3, 4, 4)

    by_subject = {st.subject: st for st in result.subject_stats}
    assert by_subject["Chemistry"].accuracy == 50.0
    assert by_subject["Physics"].attempted == 0


def test_summary_can_be_rebuilt_from_responses():
    keys = [_mcq("1", "A"), _num("2", 5), _mcq("3", "B", is_bonus=True)]
    parsed = [_chose("1", "B"), _gave("2", 5), _chose("3", "A")]
    result = calculate_scores(parsed, keys, RULES)
    summary, stats = summarize(result.responses)
    assert summary == result.summary
    assert stats == result.subject_stats


def test_unknown_subject_gets_its_own_bucket():
    result = calculate_scores([_chose("1", "A")], [_mcq("1", "A", subject="Biology")], RULES)
    assert result.summary.subject_marks["Biology"] == 4
    assert result.summary.total_marks == 4


def test_section_stats():
    keys = [_mcq("1", "A"), _mcq("2", "B"), _num("3", 4), _num("4", 9)]
    parsed = [_chose("1", "A"), _chose("2", "A"), _gave("3", 4), _gave("4", 1)]
    stats = compute_section_stats(calculate_scores(parsed, keys, RULES).responses)

    math = stats["Mathematics"]
    assert (math.A.attempted, math.A.correct, math.A.wrong) == (2, 1, 1)
    assert math.A.negative == 1
    assert math.A.marks == 3
    assert (math.B.attempted, math.B.correct, math.B.marks) == (2, 1, 4)
    assert math.B.marks_lost == 4
    assert stats["Physics"].A.total == 0
