# keys.py
"""
File-backed answer-key bank.

Each JSON file under ANSWER_KEYS_DIR holds one key set (or a list of them):
exam date, shift, marking rules and the per-question answer key. Sets are
indexed by the normalized (exam_date, shift) pair.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ValidationError

from normalize import normalize_test_identifier
from schemas.analysis import AnswerKeyEntry, MarkingRules

logger = logging.getLogger(__name__)

_BASE = Path(__file__).resolve().parent
KEYS_DIR = Path(os.getenv("ANSWER_KEYS_DIR", str(_BASE / "data" / "keys")))


class KeySet(BaseModel):
    exam_date: str
    shift: str
    label: str = ""
    marking_rules: MarkingRules
    keys: List[AnswerKeyEntry]

    def subject_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for k in self.keys:
            counts[k.subject] = counts.get(k.subject, 0) + 1
        return counts


def _iter_json(p: Path) -> Iterable[Dict[str, Any]]:
    with p.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("skipping unreadable key file %s: %s", p.name, e)
            return
    if isinstance(data, dict):
        yield data
    elif isinstance(data, list):
        for obj in data:
            if isinstance(obj, dict):
                yield obj


def _load_key_set(raw: Dict[str, Any], source: str) -> Optional[KeySet]:
    ident = normalize_test_identifier(raw.get("exam_date"), raw.get("shift"))
    if not ident.valid:
        logger.warning("skipping key set in %s: %s", source, ident.error)
        return None

    entries: List[AnswerKeyEntry] = []
    for row in raw.get("keys") or []:
        try:
            entries.append(AnswerKeyEntry(**row))
        except (TypeError, ValidationError) as e:
            # one bad row should not take the whole set down
            logger.warning("skipping key row in %s: %s", source, e)

    try:
        return KeySet(
            exam_date=ident.exam_date,
            shift=ident.shift,
            label=raw.get("label") or f"{ident.exam_date} {ident.shift}",
            marking_rules=raw.get("marking_rules"),
            keys=entries,
        )
    except ValidationError as e:
        logger.warning("skipping key set in %s: %s", source, e)
        return None


class KeyBank:
    _sets: Dict[str, KeySet] = {}
    _loaded: bool = False

    @classmethod
    def load(cls) -> Dict[str, KeySet]:
        if not cls._loaded:
            cls.reload()
        return cls._sets

    @classmethod
    def reload(cls, directory: Optional[Path] = None) -> int:
        directory = directory or KEYS_DIR
        sets: Dict[str, KeySet] = {}

        if directory.exists():
            for p in sorted(directory.rglob("*.json")):
                for raw in _iter_json(p):
                    ks = _load_key_set(raw, p.name)
                    if ks is not None:
                        sets[f"{ks.exam_date}|{ks.shift}"] = ks
        else:
            logger.warning("answer key directory %s does not exist", directory)

        cls._sets = sets
        cls._loaded = True
        logger.info("loaded %d answer key sets from %s", len(sets), directory)
        return len(sets)


# Public API
def list_key_sets() -> List[KeySet]:
    return list(KeyBank.load().values())


def get_key_set(exam_date, shift) -> Optional[KeySet]:
    ident = normalize_test_identifier(exam_date, shift)
    if not ident.valid:
        return None
    return KeyBank.load().get(f"{ident.exam_date}|{ident.shift}")


def reload_keys() -> int:
    return KeyBank.reload()
