# routers/submissions.py

from fastapi import APIRouter, Depends, HTTPException

from db import SessionLocal
from deps.auth import require_admin
from models import Submission
from schemas.api import SubmissionOut

router = APIRouter(prefix="/submissions", tags=["submissions"])


@router.get("/recent-list", dependencies=[Depends(require_admin)])
def submissions_recent(limit: int = 20):
    limit = max(1, min(limit, 100))

    with SessionLocal() as db:
        rows = db.query(Submission).order_by(Submission.created_at.desc()).limit(limit).all()

    # per-question responses are large; list view only carries the summary
    items = [SubmissionOut.model_validate(s).model_dump(exclude={"responses"}) for s in rows]
    return {"ok": True, "items": items, "count": len(items)}


@router.get("/{public_id}", response_model=SubmissionOut)
def get_submission(public_id: str):
    # Public endpoint: the uuid is the capability
    with SessionLocal() as db:
        s = db.query(Submission).filter(Submission.public_id == public_id).one_or_none()
        if not s:
            raise HTTPException(status_code=404, detail="Submission not found")
        return SubmissionOut.model_validate(s)
