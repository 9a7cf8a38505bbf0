from __future__ import annotations

from datetime import UTC, datetime

import sqlalchemy as sa
from sqlalchemy import JSON, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


class Submission(Base):
    __tablename__ = "submissions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # the submission_id stamped on every scored response
    public_id: Mapped[str] = mapped_column(String(36), unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), index=True
    )
    exam_date: Mapped[str] = mapped_column(String(10))
    shift: Mapped[str] = mapped_column(String(16))
    strategy: Mapped[str] = mapped_column(String(16))
    total_marks: Mapped[int] = mapped_column(Integer)
    total_attempted: Mapped[int] = mapped_column(Integer)
    total_correct: Mapped[int] = mapped_column(Integer)
    total_wrong: Mapped[int] = mapped_column(Integer)
    total_unattempted: Mapped[int] = mapped_column(Integer)
    accuracy_percentage: Mapped[float] = mapped_column(Float)
    negative_marks: Mapped[int] = mapped_column(Integer)
    math_marks: Mapped[int] = mapped_column(Integer)
    physics_marks: Mapped[int] = mapped_column(Integer)
    chemistry_marks: Mapped[int] = mapped_column(Integer)
    percentile: Mapped[float] = mapped_column(Float, nullable=True)
    responses: Mapped[list] = mapped_column(JSON)  # ScoredResponse records as dicts
    duration_ms: Mapped[int] = mapped_column(sa.Integer, nullable=True)
