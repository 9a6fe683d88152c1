"""Tests for the in-memory page registry."""

import pytest

from conftest import T0
from promo_bot.services.page_registry import PromoPageRegistry
from promo_bot.services.promo_page import PromoPage
from promo_bot.utils.deeplink import PromoQuery


def make_page(provider, clock, chat_id=1):
    return PromoPage(
        chat_id=chat_id,
        query=PromoQuery(campaign_id="camp-1", voucher_id="v-1"),
        provider=provider,
        clock=clock,
        tick_seconds=60,
    )


class TestPromoPageRegistry:
    @pytest.mark.asyncio
    async def test_new_page_replaces_previous_in_same_chat(self, provider, clock):
        registry = PromoPageRegistry()
        first = make_page(provider, clock)
        second = make_page(provider, clock)

        await registry.mount(first)
        await registry.mount(second)
        try:
            assert not first.mounted
            assert not first.ticking
            assert second.mounted
            assert registry.get(1) is second
            assert len(registry) == 1
        finally:
            await registry.close_all()

    @pytest.mark.asyncio
    async def test_find_checks_page_id(self, provider, clock):
        registry = PromoPageRegistry()
        page = make_page(provider, clock)
        await registry.mount(page)
        try:
            assert registry.find(1, page.id) is page
            assert registry.find(1, "stale") is None
            assert registry.find(2, page.id) is None
        finally:
            await registry.close_all()

    @pytest.mark.asyncio
    async def test_unmount(self, provider, clock):
        registry = PromoPageRegistry()
        page = make_page(provider, clock)
        await registry.mount(page)

        assert await registry.unmount(1) is page
        assert not page.mounted
        assert registry.get(1) is None
        assert await registry.unmount(1) is None

    @pytest.mark.asyncio
    async def test_expire_idle(self, provider, clock):
        registry = PromoPageRegistry()
        old = make_page(provider, clock, chat_id=1)
        clock.now = T0 + 3_600_000
        fresh = make_page(provider, clock, chat_id=2)
        await registry.mount(old)
        await registry.mount(fresh)
        try:
            expired = await registry.expire_idle(1800, now=T0 + 3_600_000)
            assert expired == [old]
            assert not old.mounted
            assert registry.get(1) is None
            assert registry.get(2) is fresh
        finally:
            await registry.close_all()

    @pytest.mark.asyncio
    async def test_close_all(self, provider, clock):
        registry = PromoPageRegistry()
        pages = [make_page(provider, clock, chat_id=i) for i in range(3)]
        for p in pages:
            await registry.mount(p)

        await registry.close_all()
        assert len(registry) == 0
        assert all(not p.mounted and not p.ticking for p in pages)

    @pytest.mark.asyncio
    async def test_remove_hook_sees_every_page_that_leaves(self, provider, clock):
        removed = []
        registry = PromoPageRegistry(on_remove=removed.append)

        replaced = make_page(provider, clock, chat_id=1)
        current = make_page(provider, clock, chat_id=1)
        dropped = make_page(provider, clock, chat_id=2)
        clock.now = T0 + 3_600_000
        fresh = make_page(provider, clock, chat_id=3)

        await registry.mount(replaced)
        await registry.mount(current)
        assert removed == [replaced]

        await registry.mount(dropped)
        await registry.unmount(2)
        assert removed == [replaced, dropped]

        await registry.mount(fresh)
        await registry.expire_idle(1800, now=T0 + 3_600_000)
        assert removed == [replaced, dropped, current]

        await registry.close_all()
        assert removed == [replaced, dropped, current, fresh]

    @pytest.mark.asyncio
    async def test_failing_remove_hook_does_not_block_replacement(self, provider, clock):
        def boom(page):
            raise RuntimeError("boom")

        registry = PromoPageRegistry(on_remove=boom)
        first = make_page(provider, clock)
        second = make_page(provider, clock)
        await registry.mount(first)
        await registry.mount(second)
        try:
            assert registry.get(1) is second
            assert second.mounted
        finally:
            await registry.close_all()
