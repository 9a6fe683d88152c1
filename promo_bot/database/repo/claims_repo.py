# promo_bot/database/repo/claims_repo.py
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from promo_bot.database.models import ClaimAttempt, ClaimOutcome


@dataclass(frozen=True, slots=True)
class CampaignClaimStats:
    campaign_id: str
    attempts: int
    successes: int
    errors_by_code: dict[str, int]


async def record_claim_attempt(
    session: AsyncSession,
    *,
    telegram_id: int | None,
    chat_id: int,
    campaign_id: str,
    voucher_id: str,
    error_code: str | None,
) -> ClaimAttempt:
    """
    Appends an immutable ClaimAttempt row. A missing error_code means the provider accepted the claim.
    Flushed only: the caller (normally DbSessionMiddleware) owns the commit.
    """
    row = ClaimAttempt(
        telegram_id=telegram_id,
        chat_id=chat_id,
        campaign_id=campaign_id,
        voucher_id=voucher_id,
        outcome=(ClaimOutcome.ERROR if error_code else ClaimOutcome.SUCCESS).value,
        error_code=error_code or None,
    )
    session.add(row)
    await session.flush()
    return row


async def list_voucher_attempts(session: AsyncSession, voucher_id: str) -> list[ClaimAttempt]:
    res = await session.execute(
        select(ClaimAttempt)
        .where(ClaimAttempt.voucher_id == voucher_id)
        .order_by(ClaimAttempt.id.asc())
    )
    return list(res.scalars().all())


async def get_campaign_stats(session: AsyncSession, campaign_id: str) -> CampaignClaimStats:
    res = await session.execute(
        select(ClaimAttempt.outcome, ClaimAttempt.error_code, func.count(ClaimAttempt.id))
        .where(ClaimAttempt.campaign_id == campaign_id)
        .group_by(ClaimAttempt.outcome, ClaimAttempt.error_code)
    )

    attempts = 0
    successes = 0
    errors_by_code: dict[str, int] = {}
    for outcome, error_code, n in res.all():
        attempts += int(n)
        if outcome == ClaimOutcome.SUCCESS.value:
            successes += int(n)
        else:
            key = error_code or "UNKNOWN"
            errors_by_code[key] = errors_by_code.get(key, 0) + int(n)

    return CampaignClaimStats(
        campaign_id=campaign_id,
        attempts=attempts,
        successes=successes,
        errors_by_code=errors_by_code,
    )
