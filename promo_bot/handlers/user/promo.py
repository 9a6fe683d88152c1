# promo_bot/handlers/user/promo.py
from __future__ import annotations

import logging

from aiogram import F, Router
from aiogram.filters import CommandObject, CommandStart
from aiogram.types import CallbackQuery, Message
from sqlalchemy.ext.asyncio import AsyncSession

from promo_bot.clients.wallet import WalletProvider
from promo_bot.config.settings import Settings
from promo_bot.database.repo.claims_repo import record_claim_attempt
from promo_bot.keyboards.promo import CLAIM_PREFIX, parse_claim_callback
from promo_bot.services.page_registry import PromoPageRegistry
from promo_bot.services.promo_page import PromoPage
from promo_bot.services.promo_render import PagePublisher, render_page
from promo_bot.utils.deeplink import parse_start_payload

log = logging.getLogger(__name__)
router = Router(name="promo")


@router.message(CommandStart())
async def open_promo_page(
    message: Message,
    command: CommandObject,
    settings: Settings,
    registry: PromoPageRegistry,
    provider: WalletProvider,
    publisher: PagePublisher,
) -> None:
    # payload format: /start <base64url("campaignId=...&voucherId=...")>
    query = parse_start_payload(command.args)

    page = PromoPage(
        chat_id=message.chat.id,
        query=query,
        provider=provider,
        on_change=publisher,
        tick_seconds=settings.promo_tick_seconds,
    )

    view = render_page(page, settings)
    sent = await message.answer(view.text, reply_markup=view.reply_markup)
    page.message_id = sent.message_id
    publisher.remember(page, view)

    await registry.mount(page)


@router.callback_query(F.data.startswith(CLAIM_PREFIX))
async def claim_click(
    cb: CallbackQuery,
    session: AsyncSession,
    registry: PromoPageRegistry,
) -> None:
    page_id = parse_claim_callback(cb.data)
    chat_id = cb.message.chat.id if cb.message else None

    page = registry.find(chat_id, page_id) if chat_id is not None and page_id else None
    if page is None:
        await cb.answer("This page has expired. Scan the QR code again.", show_alert=True)
        return

    if page.claim_pending:
        await cb.answer("Your claim is being processed…")
        return

    # answer quickly to remove the Telegram spinner; the page message shows progress
    await cb.answer()

    result = await page.claim()
    if not result.attempted:
        return

    await record_claim_attempt(
        session,
        telegram_id=cb.from_user.id if cb.from_user else None,
        chat_id=page.chat_id,
        campaign_id=page.campaign_id or "",
        voucher_id=page.voucher_id or "",
        error_code=result.error_code,
    )
