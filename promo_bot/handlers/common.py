# promo_bot/handlers/common.py
from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

router = Router(name="common")


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    await message.answer(
        "📌 How it works:\n"
        "1. Scan one of the QR codes at the event.\n"
        "2. Tap <b>Claim Now</b> while the event is live.\n\n"
        "Scanning another code replaces the current voucher page."
    )


@router.message()
async def fallback(message: Message) -> None:
    await message.answer("Scan a QR code to claim! Use /help for details.")
