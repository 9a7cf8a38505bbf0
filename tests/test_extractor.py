from extractor import (
    AnswerKeyClassifier,
    PositionalClassifier,
    extract_questions_from_html,
    merge_with_parsed_responses,
)
from schemas.analysis import AnswerKeyEntry, ParsedResponse


def test_positional_classifier():
    c = PositionalClassifier()
    assert c.classify(1, "x") == ("Mathematics", "A")
    assert c.classify(21, "x") == ("Mathematics", "B")
    assert c.classify(26, "x") == ("Physics", "A")
    assert c.classify(75, "x") == ("Chemistry", "B")
    assert c.classify(76, "x", "Physics") == ("Physics", "A")
    assert c.classify(76, "x") == ("Unknown", "A")


def test_answer_key_classifier_prefers_key():
    keys = [
        AnswerKeyEntry(question_id="900", subject="Chemistry", question_type="numerical", correct_numeric_value=3)
    ]
    c = AnswerKeyClassifier(keys)
    assert c.classify(1, "900") == ("Chemistry", "B")
    # unknown ids fall back to position
    assert c.classify(30, "901") == ("Physics", "A")


def test_extract_sample(sample_sheet):
    questions = extract_questions_from_html(sample_sheet)
    assert [q.question_id for q in questions] == [
        "444792676",
        "444792677",
        "444792678",
        "444792696",
        "444792697",
    ]

    first = questions[0]
    assert first.qno == 1
    assert first.subject == "Mathematics"
    assert first.section == "A"
    assert first.question_text == "Find the value of the expression number 1"
    assert [o.label for o in first.options] == ["A", "B", "C", "D"]
    assert first.options[3].id == "4447922297"
    assert first.user_answer == "4447922297"
    assert first.is_attempted is True

    assert questions[2].is_attempted is False
    assert questions[2].user_answer is None

    numerical = questions[3]
    assert numerical.is_numerical is True
    assert numerical.section == "B"
    assert numerical.user_answer == 90.0


def test_extract_flat_rows():
    html = (
        "<table>"
        "<tr><td>Section : Physics</td></tr>"
        "<tr><td>Question ID :</td><td>123456</td></tr>"
        "<tr><td>Chosen Option :</td><td>2</td></tr>"
        "<tr><td>Question ID :</td><td>123457</td></tr>"
        "<tr><td>Given Answer :</td><td>12</td></tr>"
        "</table>"
    )
    questions = extract_questions_from_html(html)
    assert [q.question_id for q in questions] == ["123456", "123457"]
    assert questions[0].user_answer == "B"
    assert questions[1].is_numerical is True
    assert questions[1].user_answer == 12.0


def test_extract_nothing():
    assert extract_questions_from_html("<p>no questions here</p>") == []


def test_merge_adds_placeholders(sample_sheet):
    extracted = extract_questions_from_html(sample_sheet)
    parsed = [
        ParsedResponse(question_id="444792676", claimed_option_ids=["4447922297"], is_attempted=True),
        ParsedResponse(question_id="555", claimed_numeric_value=7.5, is_attempted=True),
        ParsedResponse(question_id="556", is_attempted=False),
    ]
    merged = merge_with_parsed_responses(extracted, parsed)
    assert len(merged) == 7

    extra = {q.question_id: q for q in merged[5:]}
    assert extra["555"].subject == "Unknown"
    assert extra["555"].qno == 6
    assert extra["555"].section == "B"
    assert extra["555"].user_answer == 7.5
    assert extra["556"].question_text == "Question 7"
    assert extra["556"].is_attempted is False


def test_merge_classifies_placeholders_from_key():
    keys = [
        AnswerKeyEntry(question_id="555", subject="Chemistry", question_type="numerical", correct_numeric_value=7),
        AnswerKeyEntry(question_id="556", subject="Physics", question_type="mcq_single", correct_option_ids=["A"]),
    ]
    parsed = [
        ParsedResponse(question_id="555", is_attempted=False),
        ParsedResponse(question_id="556", claimed_option_ids=["A"], is_attempted=True),
    ]
    merged = merge_with_parsed_responses([], parsed, AnswerKeyClassifier(keys))

    by_id = {q.question_id: q for q in merged}
    assert (by_id["555"].subject, by_id["555"].section) == ("Chemistry", "B")
    assert by_id["555"].is_numerical is True
    assert (by_id["556"].subject, by_id["556"].section) == ("Physics", "A")
    assert by_id["556"].user_answer == "A"


def test_extract_short_question_ids(make_sheet):
    html = make_sheet([{"id": "1001", "option_ids": ["11", "12", "13", "14"], "chosen": "2"}])
    questions = extract_questions_from_html(html)
    assert [q.question_id for q in questions] == ["1001"]
