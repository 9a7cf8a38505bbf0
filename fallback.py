# fallback.py
"""
Best-effort parsing for response sheets that are not in the Digialm layout.

Two strategies, first non-empty result wins:
  1. table scan: a cell holding a question id, answer in the next cell
  2. regex pairing: "Question ID : x" and "Chosen Option : y" matched by position
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup

from schemas.analysis import ParsedResponse

logger = logging.getLogger(__name__)

_QUESTION_CELL_RE = re.compile(r"^(?:\d{10,}|Q\d+)$", re.I)
_SINGLE_OPTION_RE = re.compile(r"^[A-D]$", re.I)
_MULTI_OPTION_RE = re.compile(r"^[A-D](?:[,\s]+[A-D])+$", re.I)
_NUMBER_RE = re.compile(r"^[-+]?(?:\d+(?:\.\d*)?|\.\d+)$")
_UNATTEMPTED = {"", "--", "-", "not answered"}

_PAIR_QUESTION_RE = re.compile(r"Question\s*(?:ID|No\.?)?\s*:\s*(\d+)", re.I)
_PAIR_ANSWER_RE = re.compile(
    r"(?:Chosen|Selected)\s*(?:Option|Answer)\s*:\s*"
    r"([A-D](?:[,\s]+[A-D](?![A-Za-z]))*(?![A-Za-z])|[-+]?\d+(?:\.\d+)?|--?)",
    re.I,
)


def classify_answer(question_id: str, raw: str) -> Optional[ParsedResponse]:
    """Map an answer cell to a response, or None when it does not look like one."""
    text = (raw or "").strip()

    if _SINGLE_OPTION_RE.match(text):
        return ParsedResponse(
            question_id=question_id, claimed_option_ids=[text.upper()], is_attempted=True
        )
    if _MULTI_OPTION_RE.match(text):
        options = [o.upper() for o in re.split(r"[,\s]+", text) if o]
        return ParsedResponse(
            question_id=question_id, claimed_option_ids=options, is_attempted=True
        )
    if _NUMBER_RE.match(text):
        return ParsedResponse(
            question_id=question_id, claimed_numeric_value=float(text), is_attempted=True
        )
    if text.lower() in _UNATTEMPTED:
        return ParsedResponse(question_id=question_id, is_attempted=False)
    return None


def parse_tables(soup: BeautifulSoup) -> List[ParsedResponse]:
    responses: List[ParsedResponse] = []
    for row in soup.find_all("tr"):
        cells = row.find_all("td", recursive=False)
        for idx, cell in enumerate(cells[:-1]):
            text = cell.get_text(" ", strip=True)
            if not _QUESTION_CELL_RE.match(text):
                continue
            parsed = classify_answer(text, cells[idx + 1].get_text(" ", strip=True))
            if parsed is not None:
                responses.append(parsed)
    return responses


def parse_by_pairing(text: str) -> List[ParsedResponse]:
    questions = _PAIR_QUESTION_RE.findall(text)
    answers = _PAIR_ANSWER_RE.findall(text)
    if not questions or len(questions) != len(answers):
        if questions:
            logger.debug(
                "pairing skipped: %d question markers vs %d answer markers",
                len(questions),
                len(answers),
            )
        return []

    responses: List[ParsedResponse] = []
    for qid, answer in zip(questions, answers):
        parsed = classify_answer(qid, answer)
        responses.append(parsed or ParsedResponse(question_id=qid, is_attempted=False))
    return responses


def parse_generic_response_sheet(html: str) -> List[ParsedResponse]:
    soup = BeautifulSoup(html or "", "html.parser")

    responses = parse_tables(soup)
    if responses:
        logger.info("fallback parser: table scan found %d responses", len(responses))
        return responses

    responses = parse_by_pairing(soup.get_text(" "))
    if responses:
        logger.info("fallback parser: regex pairing found %d responses", len(responses))
    return responses
