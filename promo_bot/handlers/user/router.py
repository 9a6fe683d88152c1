# promo_bot/handlers/user/router.py
from aiogram import Router

from promo_bot.handlers.user.promo import router as promo_router

router = Router(name="user")

router.include_router(promo_router)
