"""Shared pytest fixtures."""

from unittest.mock import AsyncMock

import pytest

from promo_bot.clients.wallet import ProviderResponse
from promo_bot.config.settings import Settings

T0 = 1_622_800_000_000  # 2021-06-04 09:46:40 UTC, epoch ms


class FakeClock:
    """Callable epoch-ms clock the test moves by hand."""

    def __init__(self, now: int = T0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings(
        bot_token="123:abc",
        bot_username="promo_test_bot",
        wallet_api_url="https://wallet.test/api",
        wallet_dapp_id="dapp-1",
        promo_event_date="06.04.21",
        promo_follow_links=("https://twitter.com/3LAU", "https://twitter.com/portis_io"),
    )


def campaign_info(start_ms: int, end_ms: int) -> ProviderResponse:
    return ProviderResponse(result={"campaignDateStart": start_ms, "campaignDateEnd": end_ms})


@pytest.fixture
def provider():
    """Wallet provider double: campaign T0..T0+1000, claims accepted."""
    p = AsyncMock()
    p.get_campaign_info = AsyncMock(return_value=campaign_info(T0, T0 + 1000))
    p.claim_voucher = AsyncMock(return_value=ProviderResponse())
    return p
