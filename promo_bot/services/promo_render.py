# promo_bot/services/promo_render.py
from __future__ import annotations

import html
import logging
from dataclasses import dataclass

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError, TelegramBadRequest
from aiogram.types import InlineKeyboardMarkup

from promo_bot.config.settings import Settings
from promo_bot.keyboards.promo import claim_kb, create_wallet_kb, follow_links_kb
from promo_bot.services.notices import SUCCESS_NOTICE, Notice, is_known_error, notice_for
from promo_bot.services.promo_page import PromoPage
from promo_bot.services.promo_state import PromoPhase

log = logging.getLogger(__name__)

LOADING_TEXT = "⏳ Loading campaign…"
CLAIM_PENDING_TEXT = "⏳ Claiming your NFT…"


@dataclass(frozen=True, slots=True)
class RenderedView:
    text: str
    reply_markup: InlineKeyboardMarkup | None = None


def _notice_text(notice: Notice) -> str:
    icon = "🎉" if notice.is_success else "⚠️"
    text = f"{icon} <b>{html.escape(notice.main)}</b>"
    if notice.secondary:
        text += f"\n\n{html.escape(notice.secondary)}"
    return text


def render_page(page: PromoPage, settings: Settings) -> RenderedView:
    """
    Exactly one view per state. Error beats everything, then SUCCESS, then the time phase.
    """
    wallet = html.escape(settings.wallet_name)

    if page.claim_error:
        # unknown codes fall back to the generic "try again" notice; give it a button
        retry = (
            None
            if is_known_error(page.claim_error) or page.phase is not PromoPhase.ONGOING
            else claim_kb(page.id, retry=True)
        )
        return RenderedView(_notice_text(notice_for(page.claim_error)), retry)

    if page.phase is PromoPhase.SUCCESS:
        return RenderedView(_notice_text(SUCCESS_NOTICE))

    if page.phase is PromoPhase.ONGOING:
        text = (
            f"NFTs will be awarded to the first {settings.promo_winner_limit} users "
            f"to create or log into a {wallet} wallet."
        )
        if page.claim_pending:
            return RenderedView(f"{text}\n\n{CLAIM_PENDING_TEXT}")
        return RenderedView(text, claim_kb(page.id))

    if page.phase is PromoPhase.POST:
        return RenderedView(
            "<b>This event has ended.</b>\n\n"
            f"You can still create a {wallet} wallet to buy, sell, and hold NFTs.",
            create_wallet_kb(settings.wallet_register_url),
        )

    if page.phase is PromoPhase.PRE:
        lines = []
        if settings.promo_event_date:
            lines.append(f"📅 <b>{html.escape(settings.promo_event_date)}</b>")
        if settings.promo_follow_links:
            lines.append("For updates, follow:")
        else:
            lines.append("The event has not started yet. Check back soon!")
        return RenderedView("\n\n".join(lines), follow_links_kb(settings.promo_follow_links))

    return RenderedView(LOADING_TEXT)


class PagePublisher:
    """
    Page listener that edits the page's Telegram message in place.
    Identical consecutive views are not re-sent.
    """

    def __init__(self, bot: Bot, settings: Settings) -> None:
        self.bot = bot
        self.settings = settings
        self._last: dict[str, RenderedView] = {}

    def __len__(self) -> int:
        return len(self._last)

    def remember(self, page: PromoPage, view: RenderedView) -> None:
        self._last[page.id] = view

    def forget(self, page: PromoPage) -> None:
        self._last.pop(page.id, None)

    async def __call__(self, page: PromoPage) -> None:
        if page.message_id is None:
            return

        view = render_page(page, self.settings)
        if self._last.get(page.id) == view:
            return

        try:
            await self.bot.edit_message_text(
                text=view.text,
                chat_id=page.chat_id,
                message_id=page.message_id,
                reply_markup=view.reply_markup,
            )
        except TelegramBadRequest as e:
            if "message is not modified" not in str(e).lower():
                log.warning("Edit failed page=%s chat=%s: %s", page.id, page.chat_id, e)
                return
        except TelegramAPIError:
            log.exception("Edit failed page=%s chat=%s", page.id, page.chat_id)
            return

        self._last[page.id] = view
