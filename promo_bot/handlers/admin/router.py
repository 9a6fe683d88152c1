from aiogram import Router

from promo_bot.handlers.admin.vouchers import router as vouchers_router

router = Router(name="admin")

router.include_router(vouchers_router)
