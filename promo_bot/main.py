# promo_bot/main.py
import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from promo_bot.clients.wallet import WalletProviderClient
from promo_bot.config import Settings
from promo_bot.database import Database
from promo_bot.handlers import router as handlers_router
from promo_bot.scheduler import setup_scheduler
from promo_bot.services.page_registry import PromoPageRegistry
from promo_bot.services.promo_render import PagePublisher
from promo_bot.utils.middleware import DbSessionMiddleware


def setup_logging(is_dev: bool) -> None:
    """
    - app logs: INFO (or DEBUG in dev)
    - library logs: WARNING+ (no query/pool/request spam)
    """
    app_level = logging.DEBUG if is_dev else logging.INFO

    logging.basicConfig(
        level=app_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    for name in (
        "sqlalchemy",
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "sqlalchemy.orm",
        "aiosqlite",
        "httpx",
        "httpcore",
        "apscheduler",
        "aiogram.event",
    ):
        logging.getLogger(name).setLevel(logging.WARNING)


async def main() -> None:
    settings = Settings.load()
    setup_logging(settings.is_dev)
    log = logging.getLogger("promo_bot")

    db = Database(settings.database_url)
    await db.init_models()
    log.info("DB initialized")

    provider = WalletProviderClient(
        settings.wallet_api_url,
        settings.wallet_dapp_id,
        network=settings.wallet_network,
        timeout=settings.wallet_timeout_seconds,
    )
    await provider.connect()
    log.info("Wallet provider client ready (%s, %s)", settings.wallet_api_url, settings.wallet_network)

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )

    publisher = PagePublisher(bot, settings)
    registry = PromoPageRegistry(on_remove=publisher.forget)

    dp = Dispatcher()

    # Inject workflow data
    dp.workflow_data["settings"] = settings
    dp.workflow_data["db"] = db
    dp.workflow_data["provider"] = provider
    dp.workflow_data["registry"] = registry
    dp.workflow_data["publisher"] = publisher

    # DB session per update
    dp.update.middleware(DbSessionMiddleware(db))

    dp.include_router(handlers_router)

    scheduler = setup_scheduler(bot=bot, registry=registry, settings=settings)
    log.info("Scheduler started")

    try:
        await dp.start_polling(bot)
    except (asyncio.CancelledError, KeyboardInterrupt):
        pass
    except Exception:
        log.exception("Bot crashed")
        raise
    finally:
        # Stop page tickers
        try:
            await registry.close_all()
        except Exception:
            log.exception("Failed to unmount promo pages")

        try:
            scheduler.shutdown(wait=False)
        except Exception:
            log.exception("Failed to shutdown scheduler")

        try:
            await provider.close()
        except Exception:
            log.exception("Failed to close wallet provider client")

        try:
            await db.close()
        except Exception:
            log.exception("Failed to close DB")

        try:
            await bot.session.close()
        except Exception:
            log.exception("Failed to close bot session")


if __name__ == "__main__":
    asyncio.run(main())
