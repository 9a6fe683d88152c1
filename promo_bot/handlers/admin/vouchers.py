# promo_bot/handlers/admin/vouchers.py
from __future__ import annotations

import html
import logging

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import BufferedInputFile, Message
from sqlalchemy.ext.asyncio import AsyncSession

from promo_bot.config.settings import Settings
from promo_bot.database.repo.claims_repo import get_campaign_stats, list_voucher_attempts
from promo_bot.utils.cards.voucher_card import render_voucher_card
from promo_bot.utils.deeplink import build_claim_link

log = logging.getLogger(__name__)
router = Router(name="admin_vouchers")

HISTORY_LIMIT = 20


async def require_admin(message: Message, settings: Settings) -> bool:
    tg = message.from_user
    if not tg or not settings.is_admin(tg.id):
        await message.answer("⛔ You are not allowed.")
        return False
    return True


@router.message(Command("voucher_qr"))
async def cmd_voucher_qr(message: Message, command: CommandObject, settings: Settings) -> None:
    if not await require_admin(message, settings):
        return

    parts = (command.args or "").split()
    if len(parts) != 2:
        await message.answer("Usage: <code>/voucher_qr &lt;campaignId&gt; &lt;voucherId&gt;</code>")
        return
    campaign_id, voucher_id = parts

    try:
        link = build_claim_link(settings.bot_username, campaign_id, voucher_id)
    except ValueError as e:
        await message.answer(f"❌ {html.escape(str(e))}")
        return

    png = render_voucher_card(
        link=link,
        voucher_id=voucher_id,
        campaign_id=campaign_id,
        subtitle=settings.promo_event_date,
    )
    await message.answer_photo(
        BufferedInputFile(png, filename=f"voucher_{voucher_id}.png"),
        caption=f"🎟 Voucher <code>{html.escape(voucher_id)}</code>\n{html.escape(link)}",
    )
    log.info("Voucher card issued campaign=%s voucher=%s by=%s", campaign_id, voucher_id, message.from_user.id)


@router.message(Command("claim_stats"))
async def cmd_claim_stats(
    message: Message,
    command: CommandObject,
    settings: Settings,
    session: AsyncSession,
) -> None:
    if not await require_admin(message, settings):
        return

    campaign_id = (command.args or "").strip()
    if not campaign_id:
        await message.answer("Usage: <code>/claim_stats &lt;campaignId&gt;</code>")
        return

    stats = await get_campaign_stats(session, campaign_id)
    lines = [
        f"📊 <b>Claims for {html.escape(campaign_id)}</b>",
        f"• Attempts: <b>{stats.attempts}</b>",
        f"• Successful: <b>{stats.successes}</b>",
    ]
    for code, n in sorted(stats.errors_by_code.items(), key=lambda kv: (-kv[1], kv[0])):
        lines.append(f"• {html.escape(code)}: {n}")
    await message.answer("\n".join(lines))


@router.message(Command("voucher_history"))
async def cmd_voucher_history(
    message: Message,
    command: CommandObject,
    settings: Settings,
    session: AsyncSession,
) -> None:
    if not await require_admin(message, settings):
        return

    voucher_id = (command.args or "").strip()
    if not voucher_id:
        await message.answer("Usage: <code>/voucher_history &lt;voucherId&gt;</code>")
        return

    attempts = await list_voucher_attempts(session, voucher_id)
    if not attempts:
        await message.answer(f"No claim attempts for <code>{html.escape(voucher_id)}</code>.")
        return

    lines = [f"🧾 <b>Voucher {html.escape(voucher_id)}</b>"]
    for a in attempts[-HISTORY_LIMIT:]:
        when = a.created_at.strftime("%Y-%m-%d %H:%M:%S") if a.created_at else "?"
        result = "✅ success" if not a.error_code else f"❌ {html.escape(a.error_code)}"
        lines.append(f"• {when} | user <code>{a.telegram_id}</code> | {result}")
    if len(attempts) > HISTORY_LIMIT:
        lines.append(f"… {len(attempts) - HISTORY_LIMIT} older attempt(s) not shown")
    await message.answer("\n".join(lines))
