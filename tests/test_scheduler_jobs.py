"""Tests for the page expiry job."""

from dataclasses import replace
from unittest.mock import AsyncMock

import pytest

from promo_bot.scheduler.jobs import build_scheduler, expire_promo_pages
from promo_bot.services.page_registry import PromoPageRegistry
from promo_bot.services.promo_page import PromoPage
from promo_bot.utils.deeplink import PromoQuery


@pytest.mark.asyncio
async def test_expire_promo_pages_strips_buttons(provider, settings):
    bot = AsyncMock()
    registry = PromoPageRegistry()

    page = PromoPage(
        chat_id=100,
        query=PromoQuery(campaign_id="camp-1", voucher_id="v-42"),
        provider=provider,
        clock=lambda: 0,  # created at the epoch: older than any TTL
        tick_seconds=60,
    )
    page.message_id = 77
    await registry.mount(page)

    await expire_promo_pages(bot, registry, replace(settings, promo_page_ttl_minutes=1))

    assert not page.mounted
    assert registry.get(100) is None
    bot.edit_message_reply_markup.assert_awaited_once_with(chat_id=100, message_id=77, reply_markup=None)


def test_build_scheduler_registers_expiry_job(settings):
    scheduler = build_scheduler(AsyncMock(), PromoPageRegistry(), settings)
    assert scheduler.get_job("expire_promo_pages") is not None
