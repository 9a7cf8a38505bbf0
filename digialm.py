# digialm.py
"""
Parser for the Digialm response-sheet export used by the JEE Main portal.

The HTML is flattened to text lines and scanned top to bottom. A question is
accumulated in a `DigialmState` until the next "Question ID :" line (or the end
of input), at which point `finalize` turns it into a ParsedResponse and hands
back a fresh state.

Some exports carry no answer rows at all and embed the data in a <script>
instead; when the line scan finds nothing, `parse_script_blocks` reads that.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from schemas.analysis import ParsedResponse

logger = logging.getLogger(__name__)

# --- HTML -> lines ------------------------------------------------------------------

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.I | re.S)
# table cells stay on their row's line so "Question ID :" and its value meet
_LINE_BREAK_RE = re.compile(r"<br\s*/?>|</(?:div|p|tr|table|li|h[1-6])\s*>", re.I)
_TAG_RE = re.compile(r"<[^>]+>")
_ENTITIES = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}
_ENTITY_RE = re.compile("|".join(re.escape(e) for e in _ENTITIES), re.I)
_SPACES_RE = re.compile(r"[ \t\r\f\v]+")

# --- line classifiers, in priority order --------------------------------------------

_SECTION_RE = re.compile(r"\bsection\s?:", re.I)
_QTYPE_RE = re.compile(r"Question\s*Type\s*:\s*(MCQ|SA|Numerical)\b", re.I)
_QID_RE = re.compile(r"Question\s*ID\s*:\s*(\d+)", re.I)
_OPTION_ID_RE = re.compile(r"Option\s*([1-4])\s*ID\s*:\s*(\d+)", re.I)
_STATUS_RE = re.compile(r"\bStatus\s*:\s*(.*)$", re.I)
_CHOSEN_RE = re.compile(r"Chosen\s*Option\s*:\s*(\S+)", re.I)
_GIVEN_RE = re.compile(r"Given\s*Answer\s*:\s*(\S+)", re.I)

# format detection markers; at least two must be present
_FORMAT_MARKERS = (
    re.compile(r"Question\s*ID\s*:", re.I),
    re.compile(r"Option\s*\d\s*ID\s*:", re.I),
    re.compile(r"Chosen\s*Option\s*:", re.I),
    re.compile(r"digialm", re.I),
    re.compile(r"QuestionID|AssessmentQP|NTA\s*JEE", re.I),
)

_BLANK_ANSWERS = {"", "--", "-"}
_SLOT_LETTERS = {1: "A", 2: "B", 3: "C", 4: "D"}

# --- script blocks -------------------------------------------------------------------

_SCRIPT_BODY_RE = re.compile(r"<script\b[^>]*>(.*?)</script\s*>", re.I | re.S)
SCRIPT_MIN_LENGTH = 100
JSON_LIKE_SCRIPT_LENGTH = 5000
_SCRIPT_QID_RES = (
    re.compile(r"\"questionId\"\s*:\s*\"?(\d+)", re.I),
    re.compile(r"'questionId'\s*:\s*'?(\d+)", re.I),
    re.compile(r"\bquestion_id\s*[=:]\s*['\"]?(\d+)", re.I),
    re.compile(r"\bQuestionID\s*[=:]\s*['\"]?(\d+)", re.I),
)
_SCRIPT_ANSWER_FIELDS = ("candidateAnswer", "selectedOption", "givenAnswer")
_JSON_ID_FIELDS = ("questionId", "QuestionID", "question_id")
_JSON_ANSWER_FIELDS = _SCRIPT_ANSWER_FIELDS + ("answer",)
_JSON_ARRAY_START_RE = re.compile(r"\[\s*\{")
_JSON_LIKE_RE = re.compile(r"questionId|question_id|QuestionID", re.I)

_QID_VARIANTS = (
    ("Question ID", re.compile(r"Question\s+ID", re.I)),
    ("QuestionID", re.compile(r"QuestionID", re.I)),
    ("QUESTION ID", re.compile(r"QUESTION\s*ID")),
    ("Q.ID", re.compile(r"\bQ\.?\s*ID\b", re.I)),
    ("Question No", re.compile(r"Question\s*No\b", re.I)),
)


@dataclass(frozen=True)
class DigialmState:
    subject: str = "Mathematics"
    question_id: Optional[str] = None
    question_type: Optional[str] = None
    # a "Question Type" line that arrived while the open question already had one
    pending_type: Optional[str] = None
    option_ids: Dict[int, str] = field(default_factory=dict)
    status: str = ""
    chosen_option: str = ""
    given_answer: str = ""


def html_to_lines(html: str) -> List[str]:
    text = _SCRIPT_STYLE_RE.sub(" ", html or "")
    text = _LINE_BREAK_RE.sub("\n", text)
    text = _TAG_RE.sub(" ", text)
    text = _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(0).lower()], text)
    lines = (_SPACES_RE.sub(" ", ln).strip() for ln in text.split("\n"))
    return [ln for ln in lines if ln]


def _subject_from_line(line: str) -> Optional[str]:
    lower = line.lower()
    if "math" in lower:
        return "Mathematics"
    if "physics" in lower:
        return "Physics"
    if "chem" in lower:
        return "Chemistry"
    return None


def _is_answered(status: str) -> bool:
    lower = status.lower()
    # "not answered" contains "answered", so the exclusion has to be checked too
    return "answered" in lower and "not answered" not in lower


def _parse_float(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _parse_slot(raw: str) -> Optional[int]:
    try:
        slot = int(raw)
    except (TypeError, ValueError):
        return None
    return slot if 1 <= slot <= 4 else None


def _resolved_type(state: DigialmState) -> str:
    if state.question_type:
        return state.question_type
    # no type line seen: a given answer without a chosen option means numerical
    if state.given_answer and not state.chosen_option:
        return "numerical"
    return "mcq_single"


def finalize(state: DigialmState) -> Tuple[Optional[ParsedResponse], DigialmState]:
    """Close the open question. Returns (response or None, fresh state)."""
    fresh = DigialmState(subject=state.subject, pending_type=state.pending_type)
    if not state.question_id:
        return None, fresh

    qid = state.question_id
    answered = _is_answered(state.status)

    if _resolved_type(state) == "numerical":
        given = state.given_answer.strip()
        value = _parse_float(given) if given not in _BLANK_ANSWERS else None
        if value is not None and answered:
            return (
                ParsedResponse(question_id=qid, claimed_numeric_value=value, is_attempted=True),
                fresh,
            )
        return ParsedResponse(question_id=qid, is_attempted=False), fresh

    chosen = state.chosen_option.strip()
    slot = _parse_slot(chosen) if chosen not in _BLANK_ANSWERS else None
    if slot is not None and answered:
        option_id = state.option_ids.get(slot) or _SLOT_LETTERS[slot]
        return (
            ParsedResponse(question_id=qid, claimed_option_ids=[option_id], is_attempted=True),
            fresh,
        )
    return ParsedResponse(question_id=qid, is_attempted=False), fresh


def _set_type(state: DigialmState, qtype: str) -> DigialmState:
    if state.question_id and not state.question_type:
        return replace(state, question_type=qtype)
    return replace(state, pending_type=qtype)


def step(state: DigialmState, line: str) -> Tuple[DigialmState, Optional[ParsedResponse]]:
    """Apply one text line. The first matching classifier wins."""
    if _SECTION_RE.search(line):
        subject = _subject_from_line(line)
        return (replace(state, subject=subject) if subject else state), None

    m = _QTYPE_RE.search(line)
    if m:
        qtype = "numerical" if m.group(1).lower() in ("sa", "numerical") else "mcq_single"
        return _set_type(state, qtype), None

    m = _QID_RE.search(line)
    if m:
        finished, fresh = finalize(state)
        opened = replace(
            fresh, question_id=m.group(1), question_type=fresh.pending_type, pending_type=None
        )
        return opened, finished

    m = _OPTION_ID_RE.search(line)
    if m:
        option_ids = {**state.option_ids, int(m.group(1)): m.group(2)}
        return replace(state, option_ids=option_ids), None

    m = _STATUS_RE.search(line)
    if m:
        return replace(state, status=m.group(1).strip()), None

    m = _CHOSEN_RE.search(line)
    if m:
        return replace(state, chosen_option=m.group(1)), None

    m = _GIVEN_RE.search(line)
    if m:
        return replace(state, given_answer=m.group(1)), None

    return state, None


def script_blocks(html: str) -> List[str]:
    """Bodies of every <script> element, largest first."""
    return sorted(_SCRIPT_BODY_RE.findall(html or ""), key=len, reverse=True)


def _script_response(qid: str, field_name: str, value: object) -> ParsedResponse:
    unattempted = ParsedResponse(question_id=qid, is_attempted=False)
    if value is None or isinstance(value, bool):
        return unattempted

    if isinstance(value, (int, float)):
        number = _parse_float(value)
    else:
        raw = str(value).strip()
        if raw in _BLANK_ANSWERS:
            return unattempted
        if field_name != "givenAnswer":
            if re.fullmatch(r"[1-4]", raw):
                return ParsedResponse(
                    question_id=qid, claimed_option_ids=[_SLOT_LETTERS[int(raw)]], is_attempted=True
                )
            if re.fullmatch(r"[A-D]", raw, re.I):
                return ParsedResponse(question_id=qid, claimed_option_ids=[raw.upper()], is_attempted=True)
            # option ids are long numeric strings, answers never are
            if re.fullmatch(r"\d{5,}", raw):
                return ParsedResponse(question_id=qid, claimed_option_ids=[raw], is_attempted=True)
        number = _parse_float(raw)

    if number is None:
        return unattempted
    return ParsedResponse(question_id=qid, claimed_numeric_value=number, is_attempted=True)


def _first_field(item: dict, names: Tuple[str, ...]) -> Tuple[Optional[str], object]:
    for name in names:
        if item.get(name) not in (None, ""):
            return name, item[name]
    return None, None


def _responses_from_json_array(script: str) -> List[ParsedResponse]:
    decoder = json.JSONDecoder()
    for m in _JSON_ARRAY_START_RE.finditer(script):
        try:
            data, _ = decoder.raw_decode(script, m.start())
        except ValueError:
            continue
        items = [item for item in data if isinstance(item, dict)]
        responses = []
        for item in items:
            _, qid = _first_field(item, _JSON_ID_FIELDS)
            if qid is None:
                continue
            field_name, answer = _first_field(item, _JSON_ANSWER_FIELDS)
            responses.append(_script_response(str(qid), field_name or "", answer))
        if responses:
            return responses
    return []


def _responses_from_script_text(script: str) -> List[ParsedResponse]:
    question_ids: List[str] = []
    for patt in _SCRIPT_QID_RES:
        for qid in patt.findall(script):
            if qid not in question_ids:
                question_ids.append(qid)

    responses = []
    for qid in question_ids:
        response = ParsedResponse(question_id=qid, is_attempted=False)
        for field_name in _SCRIPT_ANSWER_FIELDS:
            m = re.search(
                rf'"{qid}"[^}}]*?"{field_name}"\s*:\s*"?([^",}}]+)', script, re.I
            )
            if m:
                response = _script_response(qid, field_name, m.group(1))
                break
        responses.append(response)
    return responses


def parse_script_blocks(html: str) -> List[ParsedResponse]:
    """
    Read answers embedded as data in the page's scripts.

    Scripts are tried largest first. Within a script a JSON array of question
    objects is preferred over scanning for loose "questionId" fields; the first
    script that yields anything wins.
    """
    for script in script_blocks(html):
        if len(script) <= SCRIPT_MIN_LENGTH:
            continue
        responses = _responses_from_json_array(script) or _responses_from_script_text(script)
        if responses:
            return responses
    return []


def parse_digialm_response_sheet(html: str) -> List[ParsedResponse]:
    responses: List[ParsedResponse] = []
    state = DigialmState()
    for line in html_to_lines(html):
        state, finished = step(state, line)
        if finished is not None:
            responses.append(finished)

    last, _ = finalize(state)
    if last is not None:
        responses.append(last)

    source = "lines"
    if not responses:
        responses = parse_script_blocks(html)
        source = "scripts"

    logger.info(
        "digialm parser (%s): %d responses (%d attempted)",
        source,
        len(responses),
        sum(1 for r in responses if r.is_attempted),
    )
    return responses


def is_digialm_format(html: str) -> bool:
    if not html:
        return False
    return sum(1 for patt in _FORMAT_MARKERS if patt.search(html)) >= 2


def digialm_diagnostic(html: str) -> Dict[str, object]:
    """Marker counts, for working out why a sheet produced nothing."""
    html = html or ""
    question_ids = re.findall(r"Question\s*ID\s*:", html, re.I)
    scripts = script_blocks(html)
    return {
        "html_length": len(html),
        "is_digialm": is_digialm_format(html),
        "has_question_ids": bool(question_ids),
        "has_option_ids": bool(re.search(r"Option\s*\d\s*ID\s*:", html, re.I)),
        "has_chosen_options": bool(re.search(r"Chosen\s*Option\s*:", html, re.I)),
        "has_given_answers": bool(re.search(r"Given\s*Answer\s*:", html, re.I)),
        "question_count": len(question_ids),
        "question_id_variants": [name for name, patt in _QID_VARIANTS if patt.search(html)],
        "script_blocks": {
            "count": len(scripts),
            "top_lengths": [len(s) for s in scripts[:3]],
            "has_json_like_data": any(
                len(s) > JSON_LIKE_SCRIPT_LENGTH and _JSON_LIKE_RE.search(s) for s in scripts
            ),
        },
        "clean_text_preview": " ".join(html_to_lines(html))[:3000],
        "largest_script_preview": scripts[0][:2000] if scripts else "",
    }
