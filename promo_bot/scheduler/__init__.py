# promo_bot/scheduler/__init__.py
from __future__ import annotations

from aiogram import Bot
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from promo_bot.config.settings import Settings
from promo_bot.scheduler.jobs import build_scheduler
from promo_bot.services.page_registry import PromoPageRegistry


def setup_scheduler(
    bot: Bot,
    registry: PromoPageRegistry,
    settings: Settings,
) -> AsyncIOScheduler:
    scheduler = build_scheduler(bot=bot, registry=registry, settings=settings)
    scheduler.start()
    return scheduler
