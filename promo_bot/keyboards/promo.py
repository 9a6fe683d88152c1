# promo_bot/keyboards/promo.py
from __future__ import annotations

from urllib.parse import urlparse

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

BTN_CLAIM = "🎁 Claim Now"
BTN_RETRY = "🔁 Try again"
BTN_CREATE_WALLET = "👛 Create Wallet"

CLAIM_PREFIX = "promo:claim:"


def claim_callback_data(page_id: str) -> str:
    return f"{CLAIM_PREFIX}{page_id}"


def parse_claim_callback(data: str | None) -> str | None:
    """promo:claim:<page_id> -> page_id"""
    if not data or not data.startswith(CLAIM_PREFIX):
        return None
    page_id = data[len(CLAIM_PREFIX):].strip()
    return page_id or None


def link_label(url: str) -> str:
    """https://twitter.com/3LAU -> twitter.com/3LAU"""
    p = urlparse(url)
    if not p.netloc:
        return url
    return f"{p.netloc}{p.path}".rstrip("/")


def claim_kb(page_id: str, *, retry: bool = False) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(
                    text=BTN_RETRY if retry else BTN_CLAIM,
                    callback_data=claim_callback_data(page_id),
                )
            ]
        ]
    )


def create_wallet_kb(register_url: str) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[[InlineKeyboardButton(text=BTN_CREATE_WALLET, url=register_url)]]
    )


def follow_links_kb(links: tuple[str, ...] | list[str]) -> InlineKeyboardMarkup | None:
    if not links:
        return None
    kb = InlineKeyboardBuilder()
    for url in links:
        kb.add(InlineKeyboardButton(text=link_label(url), url=url))
    kb.adjust(1)
    return kb.as_markup()
