from __future__ import annotations
from typing import Any
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime, JSON, func
from .database import Base

# ----------------------------
# Submitted receipts
# ----------------------------
class StoredReceipt(Base):
    __tablename__ = "receipts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    document: Mapped[Any] = mapped_column(JSON, nullable=False)  # Receipt as wire JSON
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
