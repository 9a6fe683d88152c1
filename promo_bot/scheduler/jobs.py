# promo_bot/scheduler/jobs.py
from __future__ import annotations

import logging

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from promo_bot.config.settings import Settings
from promo_bot.services.page_registry import PromoPageRegistry

log = logging.getLogger(__name__)


# -------------------------------------------------
# Page expiry
# -------------------------------------------------

async def expire_promo_pages(
    bot: Bot,
    registry: PromoPageRegistry,
    settings: Settings,
) -> None:
    """
    Unmounts pages older than PROMO_PAGE_TTL_MINUTES and strips their buttons,
    so old chats stop ticking and stale claims go nowhere.
    """
    expired = await registry.expire_idle(settings.promo_page_ttl_minutes * 60)
    for page in expired:
        if page.message_id is None:
            continue
        try:
            await bot.edit_message_reply_markup(
                chat_id=page.chat_id,
                message_id=page.message_id,
                reply_markup=None,
            )
        except TelegramAPIError as e:
            log.info("Could not strip buttons page=%s chat=%s: %s", page.id, page.chat_id, e)


def build_scheduler(
    bot: Bot,
    registry: PromoPageRegistry,
    settings: Settings,
) -> AsyncIOScheduler:
    """
    Creates and returns an AsyncIOScheduler with our jobs registered.
    """
    scheduler = AsyncIOScheduler(timezone="UTC")

    scheduler.add_job(
        expire_promo_pages,
        trigger=IntervalTrigger(minutes=5, timezone="UTC"),
        kwargs={"bot": bot, "registry": registry, "settings": settings},
        id="expire_promo_pages",
        replace_existing=True,
        coalesce=True,
        misfire_grace_time=60,
    )

    return scheduler
