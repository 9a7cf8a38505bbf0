# extractor.py
"""
Review-oriented extraction of question text, options and the candidate's answer.

This pass is independent of the scoring parser: it only feeds the review screen.
Subject/section assignment is delegated to a QuestionClassifier so the
positional heuristic can be swapped for answer-key driven classification.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from bs4 import BeautifulSoup, Tag

from schemas.analysis import (
    SUBJECTS,
    AnswerKeyEntry,
    ExtractedQuestion,
    ParsedResponse,
    QuestionOption,
)

logger = logging.getLogger(__name__)

QUESTIONS_PER_SUBJECT = 25
NUMERICAL_FROM_POSITION = 21  # positions 21-25 of each subject block are Section B
MAX_QUESTION_TEXT = 500

_QID_RE = re.compile(r"Question\s*ID\s*:?\s*(\d+)", re.I)
_QTYPE_RE = re.compile(r"Question\s*Type\s*:?\s*(MCQ|SA|Numerical)\b", re.I)
_OPTION_ID_RE = re.compile(r"Option\s*([1-4])\s*ID\s*:?\s*(\d+)", re.I)
_STATUS_RE = re.compile(r"\bStatus\s*:\s*(.+)$", re.I)
_CHOSEN_RE = re.compile(r"Chosen\s*Option\s*:?\s*(\d|--|-)(?!\d)", re.I)
_GIVEN_RE = re.compile(r"Given\s*Answer\s*:?\s*(-?\d+(?:\.\d+)?|--|-)", re.I)
_QUESTION_TEXT_RE = re.compile(r"^Q\.?\s*\d+\s*[.:)]?\s*(.*)$", re.I)
_OPTION_TEXT_RE = re.compile(r"^\(?([1-4A-D])[.)]\s*(.+)$")
_LABEL_RE = re.compile(r"Question\s*(?:ID|Type)|Option\s*\d|Status|Chosen|Given", re.I)
_SECTION_RE = re.compile(r"\bsection\b", re.I)
_BLANK = {"", "--", "-"}


class QuestionClassifier(Protocol):
    def classify(
        self, qno: int, question_id: str, hint_subject: Optional[str] = None
    ) -> Tuple[str, str]:
        """Return (subject, section) for a question."""
        ...


class PositionalClassifier:
    """
    Assumes 25 questions per subject in Mathematics, Physics, Chemistry order,
    with the last five of each block being Section B. Breaks if the paper
    layout changes.
    """

    def __init__(self, per_subject: int = QUESTIONS_PER_SUBJECT, numerical_from: int = NUMERICAL_FROM_POSITION):
        self.per_subject = per_subject
        self.numerical_from = numerical_from

    def classify(self, qno, question_id, hint_subject=None):
        idx = (qno - 1) // self.per_subject
        subject = SUBJECTS[idx] if 0 <= idx < len(SUBJECTS) else (hint_subject or "Unknown")
        position = (qno - 1) % self.per_subject + 1
        return subject, ("B" if position >= self.numerical_from else "A")


class AnswerKeyClassifier:
    """Uses the answer key when it knows the question, otherwise defers."""

    def __init__(self, answer_keys: Iterable[AnswerKeyEntry], fallback: Optional[QuestionClassifier] = None):
        self.keys: Dict[str, AnswerKeyEntry] = {str(k.question_id): k for k in answer_keys}
        self.fallback = fallback or PositionalClassifier()

    def classify(self, qno, question_id, hint_subject=None):
        key = self.keys.get(str(question_id))
        if key is None:
            return self.fallback.classify(qno, question_id, hint_subject)
        return key.subject, ("B" if key.question_type == "numerical" else "A")


@dataclass
class _Block:
    question_id: str = ""
    text: str = ""
    is_numerical_type: bool = False
    option_ids: Dict[int, str] = field(default_factory=dict)
    option_texts: Dict[int, str] = field(default_factory=dict)
    status: Optional[str] = None
    chosen: str = ""
    given: str = ""
    subject_hint: Optional[str] = None


def _leaf_rows(root: Tag) -> List[str]:
    texts = []
    for row in root.find_all("tr"):
        if row.find("tr") is not None:
            continue
        text = row.get_text(" ", strip=True)
        if text:
            texts.append(re.sub(r"\s+", " ", text))
    return texts


def _subject_hint(text: str) -> Optional[str]:
    lower = text.lower()
    if "math" in lower:
        return "Mathematics"
    if "physics" in lower:
        return "Physics"
    if "chem" in lower:
        return "Chemistry"
    return None


def _read_row(block: _Block, text: str) -> None:
    m = _QTYPE_RE.search(text)
    if m:
        block.is_numerical_type = m.group(1).lower() != "mcq"

    m = _QID_RE.search(text)
    if m:
        block.question_id = m.group(1)

    for slot, option_id in _OPTION_ID_RE.findall(text):
        block.option_ids[int(slot)] = option_id

    m = _STATUS_RE.search(text)
    if m:
        block.status = m.group(1).strip()

    m = _CHOSEN_RE.search(text)
    if m:
        block.chosen = m.group(1)

    m = _GIVEN_RE.search(text)
    if m:
        block.given = m.group(1)
        block.is_numerical_type = True

    if _LABEL_RE.search(text):
        return

    m = _QUESTION_TEXT_RE.match(text)
    if m and m.group(1):
        block.text = m.group(1)[:MAX_QUESTION_TEXT]
        return

    m = _OPTION_TEXT_RE.match(text)
    if m:
        slot = m.group(1)
        slot_num = int(slot) if slot.isdigit() else "ABCD".index(slot) + 1
        block.option_texts.setdefault(slot_num, m.group(2).strip())
        return

    if len(text) > 50 and not block.text:
        block.text = text[:MAX_QUESTION_TEXT]


def _blocks_from_panels(panels: List[Tag]) -> List[_Block]:
    blocks = []
    for panel in panels:
        block = _Block()
        for text in _leaf_rows(panel):
            _read_row(block, text)
        if block.question_id:
            blocks.append(block)
    return blocks


def _blocks_from_rows(rows: List[str]) -> List[_Block]:
    """Flat layout: a new block starts at every Question ID row."""
    blocks: List[_Block] = []
    current = _Block()
    hint: Optional[str] = None
    for text in rows:
        if _SECTION_RE.search(text) and not _LABEL_RE.search(text):
            hint = _subject_hint(text) or hint
            continue
        if _QID_RE.search(text) and current.question_id:
            blocks.append(current)
            current = _Block()
        if current.subject_hint is None:
            current.subject_hint = hint
        _read_row(current, text)
    if current.question_id:
        blocks.append(current)
    return blocks


def _user_answer(block: _Block) -> Tuple[Optional[object], bool]:
    # a known non-answered status wins over whatever the answer cells say
    if block.status is not None:
        lower = block.status.lower()
        if "answered" not in lower or "not answered" in lower:
            return None, False

    if block.is_numerical_type:
        if block.given not in _BLANK:
            try:
                value = float(block.given)
            except ValueError:
                return None, False
            if math.isfinite(value):
                return value, True
        return None, False

    if block.chosen not in _BLANK and block.chosen.isdigit():
        slot = int(block.chosen)
        if 1 <= slot <= 4:
            return block.option_ids.get(slot) or "ABCD"[slot - 1], True
    return None, False


def _to_question(block: _Block, qno: int, classifier: QuestionClassifier) -> ExtractedQuestion:
    subject, section = classifier.classify(qno, block.question_id, block.subject_hint)
    options = [
        QuestionOption(
            id=block.option_ids.get(i) or str(i),
            label="ABCD"[i - 1],
            text=block.option_texts.get(i) or f"Option {i}",
        )
        for i in range(1, 5)
        if i in block.option_ids or i in block.option_texts
    ]
    answer, attempted = _user_answer(block)
    return ExtractedQuestion(
        question_id=block.question_id,
        qno=qno,
        subject=subject,
        section="B" if block.is_numerical_type else section,
        question_text=block.text.strip() or f"Question {qno}",
        options=options,
        user_answer=answer,
        is_attempted=attempted,
        is_numerical=block.is_numerical_type,
    )


def extract_questions_from_html(
    html: str, classifier: Optional[QuestionClassifier] = None
) -> List[ExtractedQuestion]:
    classifier = classifier or PositionalClassifier()
    soup = BeautifulSoup(html or "", "html.parser")

    panels = soup.select("div.question-pnl") or soup.select("table.questionPnlTbl")
    blocks = _blocks_from_panels(panels) if panels else []
    if not blocks:
        blocks = _blocks_from_rows(_leaf_rows(soup))
    if not blocks:
        # sheets laid out without tables
        rows = [ln.strip() for ln in soup.get_text("\n").split("\n") if ln.strip()]
        blocks = _blocks_from_rows(rows)

    questions = [_to_question(b, qno, classifier) for qno, b in enumerate(blocks, 1)]
    logger.info("extractor: %d questions", len(questions))
    return questions


def merge_with_parsed_responses(
    extracted: List[ExtractedQuestion],
    parsed: List[ParsedResponse],
    classifier: Optional[QuestionClassifier] = None,
) -> List[ExtractedQuestion]:
    """
    Add placeholders for parsed questions the extractor missed.

    With a classifier the placeholder gets its subject and section from it;
    without one the subject is "Unknown".
    """
    merged: Dict[str, ExtractedQuestion] = {q.question_id: q for q in extracted}
    qno = len(extracted)
    for p in parsed:
        qid = str(p.question_id)
        if qid in merged:
            continue
        qno += 1
        if classifier is not None:
            subject, section = classifier.classify(qno, qid)
        else:
            subject, section = "Unknown", "A"
        is_numerical = p.claimed_numeric_value is not None or section == "B"
        if is_numerical:
            answer = p.claimed_numeric_value
        else:
            answer = p.claimed_option_ids[0] if p.claimed_option_ids else None
        merged[qid] = ExtractedQuestion(
            question_id=qid,
            qno=qno,
            subject=subject,
            section="B" if is_numerical else "A",
            question_text=f"Question {qno}",
            options=[],
            user_answer=answer,
            is_attempted=p.is_attempted,
            is_numerical=is_numerical,
        )
    return list(merged.values())
