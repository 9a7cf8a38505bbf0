import os
import tempfile

import pytest

# point the app at a throwaway SQLite file before db.py is imported
_TMP_DIR = tempfile.mkdtemp(prefix="jee-analyzer-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"

import models  # noqa: E402,F401
from db import Base, engine  # noqa: E402

Base.metadata.create_all(bind=engine)


def build_digialm_sheet(questions, section="Mathematics"):
    """
    Render a minimal Digialm-style response sheet.

    Each question is a dict with: id, type ("MCQ" or "SA"), status, and either
    option_ids (list of four ids) + chosen, or given.
    """
    parts = [
        "<html><head><title>JEE Main Response Sheet</title>",
        "<script>var digialm = {};</script></head><body>",
        f'<div class="section-lbl"><span>Section :</span> <span>{section} Section A</span></div>',
    ]
    for n, q in enumerate(questions, 1):
        rows = [f'<tr><td>Question Type :</td><td>{q.get("type", "MCQ")}</td></tr>']
        rows.append(f'<tr><td>Question ID :</td><td>{q["id"]}</td></tr>')
        for slot, option_id in enumerate(q.get("option_ids") or [], 1):
            rows.append(f"<tr><td>Option {slot} ID :</td><td>{option_id}</td></tr>")
        rows.append(f'<tr><td>Status :</td><td>{q.get("status", "Answered")}</td></tr>')
        if "given" in q:
            answer_row = f'<tr><td>Given Answer :</td><td>{q["given"]}</td></tr>'
        else:
            answer_row = f'<tr><td>Chosen Option :</td><td>{q.get("chosen", "--")}</td></tr>'
        parts.append(
            '<div class="question-pnl">'
            '<table class="questionRowTbl">'
            f"<tr><td>Q.{n}</td><td>Find the value of the expression number {n}</td></tr>"
            "</table>"
            f'<table class="menu-tbl">{"".join(rows)}{answer_row}</table>'
            "</div>"
        )
    parts.append("</body></html>")
    return "".join(parts)


# Five Mathematics questions from the 2026-01-28 Shift 1 key set:
#   676 correct (+4), 677 wrong (-1), 678 not answered (0),
#   696 numerical correct (+4), 697 numerical wrong (0)
SAMPLE_QUESTIONS = [
    {
        "id": "444792676",
        "option_ids": ["4447922294", "4447922295", "4447922296", "4447922297"],
        "chosen": "4",
    },
    {
        "id": "444792677",
        "option_ids": ["4447922299", "4447922300", "4447922301", "4447922302"],
        "chosen": "1",
    },
    {
        "id": "444792678",
        "option_ids": ["4447922303", "4447922304", "4447922305", "4447922306"],
        "status": "Not Answered",
        "chosen": "--",
    },
    {"id": "444792696", "type": "SA", "given": "90"},
    {"id": "444792697", "type": "SA", "given": "5"},
]


@pytest.fixture
def sample_sheet():
    return build_digialm_sheet(SAMPLE_QUESTIONS)


@pytest.fixture
def make_sheet():
    return build_digialm_sheet
