# promo_bot/utils/deeplink.py
from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qs, urlencode

from aiogram.utils.deep_linking import decode_payload, encode_payload

# Telegram rejects /start payloads longer than this
MAX_START_PAYLOAD = 64

# full query names first, short aliases keep printed links under the payload limit
CAMPAIGN_KEYS = ("campaignId", "c")
VOUCHER_KEYS = ("voucherId", "v")


@dataclass(frozen=True, slots=True)
class PromoQuery:
    campaign_id: str | None = None
    voucher_id: str | None = None


def _first(params: dict[str, list[str]], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        values = params.get(key)
        if values:
            v = values[0].strip()
            if v:
                return v
    return None


def parse_query_string(query: str) -> PromoQuery:
    """
    "campaignId=abc&voucherId=42" -> PromoQuery("abc", "42").
    Repeated keys: the first value wins.
    """
    params = parse_qs((query or "").lstrip("?"), keep_blank_values=False)
    return PromoQuery(
        campaign_id=_first(params, CAMPAIGN_KEYS),
        voucher_id=_first(params, VOUCHER_KEYS),
    )


def parse_start_payload(payload: str | None) -> PromoQuery:
    """
    /start payload is the base64url-encoded query string.
    Anything undecodable is treated as a link without parameters.
    """
    raw = (payload or "").strip()
    if not raw:
        return PromoQuery()
    try:
        query = decode_payload(raw)
    except ValueError:
        return PromoQuery()
    return parse_query_string(query)


def build_start_payload(campaign_id: str, voucher_id: str) -> str:
    payload = encode_payload(urlencode({"c": campaign_id, "v": voucher_id}))
    if len(payload) > MAX_START_PAYLOAD:
        raise ValueError(
            f"Deep-link payload is {len(payload)} chars (max {MAX_START_PAYLOAD}); "
            "use shorter campaign/voucher ids"
        )
    return payload


def build_claim_link(bot_username: str, campaign_id: str, voucher_id: str) -> str:
    return f"https://t.me/{bot_username.lstrip('@')}?start={build_start_payload(campaign_id, voucher_id)}"
