# promo_bot/services/page_registry.py
from __future__ import annotations

import logging
from typing import Callable

from promo_bot.services.promo_page import PromoPage
from promo_bot.utils.dt import now_ms

log = logging.getLogger(__name__)

PageRemoved = Callable[[PromoPage], None]


class PromoPageRegistry:
    """
    Live pages kept in process memory, one per chat.
    A new page in the same chat unmounts the previous one.

    `on_remove` is called once for every page that leaves the registry
    (replaced, unmounted, expired or closed on shutdown).
    """

    def __init__(self, on_remove: PageRemoved | None = None) -> None:
        self._pages: dict[int, PromoPage] = {}
        self.on_remove = on_remove

    def __len__(self) -> int:
        return len(self._pages)

    def get(self, chat_id: int) -> PromoPage | None:
        return self._pages.get(chat_id)

    def find(self, chat_id: int, page_id: str) -> PromoPage | None:
        page = self._pages.get(chat_id)
        if page is None or page.id != page_id:
            return None
        return page

    async def mount(self, page: PromoPage) -> None:
        previous = self._pages.get(page.chat_id)
        self._pages[page.chat_id] = page
        if previous is not None and previous is not page:
            await previous.unmount()
            self._removed(previous)
        await page.mount()

    async def unmount(self, chat_id: int) -> PromoPage | None:
        page = self._pages.pop(chat_id, None)
        if page is not None:
            await page.unmount()
            self._removed(page)
        return page

    async def expire_idle(self, max_age_seconds: float, *, now: int | None = None) -> list[PromoPage]:
        now = now_ms() if now is None else now
        cutoff = now - int(max_age_seconds * 1000)

        expired = [p for p in self._pages.values() if p.created_at_ms <= cutoff]
        for page in expired:
            if self._pages.get(page.chat_id) is not page:
                # replaced by a newer page while an earlier unmount awaited
                continue
            del self._pages[page.chat_id]
            await page.unmount()
            self._removed(page)

        if expired:
            log.info("Expired %s idle promo page(s), %s still live", len(expired), len(self._pages))
        return expired

    async def close_all(self) -> None:
        pages = list(self._pages.values())
        self._pages.clear()
        for page in pages:
            try:
                await page.unmount()
            except Exception:
                log.exception("Failed to unmount page %s", page.id)
            self._removed(page)

    def _removed(self, page: PromoPage) -> None:
        if self.on_remove is None:
            return
        try:
            self.on_remove(page)
        except Exception:
            log.exception("Page %s remove hook failed", page.id)
