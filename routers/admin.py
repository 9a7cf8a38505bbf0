from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from deps.auth import require_admin
from keys import list_key_sets, reload_keys

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/reload")
def reload_answer_keys():
    n = reload_keys()
    logger.info("answer keys reloaded by admin: %d sets", n)
    return {
        "ok": True,
        "count": n,
        "sets": [f"{ks.exam_date} {ks.shift}" for ks in list_key_sets()],
    }
