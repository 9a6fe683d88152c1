# promo_bot/services/promo_state.py
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class PromoPhase(str, Enum):
    LOADING = "LOADING_CAMPAIGN"
    PRE = "PRE"
    ONGOING = "ONGOING"
    POST = "POST"
    SUCCESS = "SUCCESS"


def derive_phase(now: float, start: float, end: float) -> PromoPhase:
    """
    Time-based phase only (never LOADING / SUCCESS).

    Both boundaries belong to ONGOING: POST starts strictly after `end`.
    """
    if now < start:
        return PromoPhase.PRE
    if now > end:
        return PromoPhase.POST
    return PromoPhase.ONGOING


class InvalidCampaignInfo(ValueError):
    pass


def parse_timestamp_ms(value: Any) -> int:
    """
    Provider dates come as ISO-8601 strings ("2021-06-04T18:00:00.000Z")
    or as epoch milliseconds. Naive ISO strings are treated as UTC.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidCampaignInfo(f"Invalid campaign date: {value!r}")

    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidCampaignInfo(f"Invalid campaign date: {value!r}")
        return int(value)

    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise InvalidCampaignInfo("Empty campaign date")
        digits = raw[1:] if raw.startswith("-") else raw
        if digits.isascii() and digits.isdigit():
            return int(raw)
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError as e:
            raise InvalidCampaignInfo(f"Invalid campaign date: {value!r}") from e
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return int(dt.timestamp() * 1000)

    raise InvalidCampaignInfo(f"Invalid campaign date: {value!r}")


@dataclass(frozen=True, slots=True)
class CampaignWindow:
    start_ms: int
    end_ms: int

    def phase_at(self, now_ms: float) -> PromoPhase:
        return derive_phase(now_ms, self.start_ms, self.end_ms)

    @classmethod
    def from_campaign_info(cls, result: dict[str, Any]) -> "CampaignWindow":
        """
        result = {"campaignDateStart": ..., "campaignDateEnd": ...}
        """
        return cls(
            start_ms=parse_timestamp_ms(result.get("campaignDateStart")),
            end_ms=parse_timestamp_ms(result.get("campaignDateEnd")),
        )
