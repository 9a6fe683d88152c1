# promo_bot/database/models/claim_attempt.py
from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import BigInteger, DateTime, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from promo_bot.database.base import Base


class ClaimOutcome(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class ClaimAttempt(Base):
    """
    One row per claim button press that reached the wallet provider.
    Kept for support requests ("I clicked but got nothing") and campaign reporting.
    """
    __tablename__ = "claim_attempts"
    __table_args__ = (
        Index("ix_claim_attempts_campaign_time", "campaign_id", "created_at"),
        Index("ix_claim_attempts_voucher", "voucher_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    telegram_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    chat_id: Mapped[int] = mapped_column(BigInteger)

    campaign_id: Mapped[str] = mapped_column(String(128))
    voucher_id: Mapped[str] = mapped_column(String(128))

    # keep stored as a string (no migrations needed)
    outcome: Mapped[str] = mapped_column(String(16), index=True)
    error_code: Mapped[str | None] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), server_default=func.now())
