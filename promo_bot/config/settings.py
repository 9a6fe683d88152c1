# promo_bot/config/settings.py
from __future__ import annotations

import os
import re
from dataclasses import dataclass

from dotenv import load_dotenv


def _require(env: dict[str, str], key: str) -> str:
    v = env.get(key)
    if v is None or not v.strip():
        raise RuntimeError(f"Missing required environment variable: {key}")
    return v.strip()


def _to_int(value: str, key_name: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise RuntimeError(f"Invalid integer for {key_name}: {value!r}") from e


def _to_float(value: str, key_name: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise RuntimeError(f"Invalid number for {key_name}: {value!r}") from e


def _split_list(raw: str | None) -> list[str]:
    """
    Splits comma/space/newline separated values.
    Brackets and stray quotes around the whole list or items are ignored.
    """
    if not raw:
        return []

    cleaned = raw.strip().strip("[](){}").strip()
    if not cleaned:
        return []

    out: list[str] = []
    for p in re.split(r"[,\s]+", cleaned):
        p2 = p.strip().strip("'\"")
        if p2:
            out.append(p2)
    return out


def _parse_int_list(raw: str | None, key_name: str) -> list[int]:
    return [_to_int(p, key_name) for p in _split_list(raw)]


@dataclass(frozen=True, slots=True)
class Settings:
    # --- required ---
    bot_token: str
    bot_username: str  # required for deep links
    wallet_api_url: str
    wallet_dapp_id: str

    # --- wallet provider ---
    wallet_network: str = "mainnet"
    wallet_name: str = "Portis"
    wallet_register_url: str = "https://wallet.portis.io/register"
    wallet_timeout_seconds: float = 15.0

    # --- storage ---
    database_url: str = "sqlite+aiosqlite:///./promo.db"

    # --- security / admin ---
    root_admin_ids: tuple[int, ...] = ()

    # --- promo page ---
    promo_tick_seconds: float = 1.0
    promo_page_ttl_minutes: int = 720
    promo_event_date: str = ""
    promo_winner_limit: int = 99
    promo_follow_links: tuple[str, ...] = ()

    # --- environment ---
    environment: str = "production"  # production | development

    @property
    def is_dev(self) -> bool:
        return self.environment.lower() in {"dev", "development", "local"}

    def is_admin(self, telegram_id: int | None) -> bool:
        return telegram_id is not None and int(telegram_id) in self.root_admin_ids

    @classmethod
    def load(cls) -> "Settings":
        """
        Loads from process env (and .env if present).
        Fails fast for required fields.
        """
        load_dotenv()
        env = os.environ

        bot_token = _require(env, "BOT_TOKEN")
        bot_username = _require(env, "BOT_USERNAME").lstrip("@")
        wallet_api_url = _require(env, "WALLET_API_URL").rstrip("/")
        wallet_dapp_id = _require(env, "WALLET_DAPP_ID")

        wallet_network = (env.get("WALLET_NETWORK") or "mainnet").strip() or "mainnet"
        wallet_name = (env.get("WALLET_NAME") or "Portis").strip() or "Portis"
        wallet_register_url = (
            env.get("WALLET_REGISTER_URL") or "https://wallet.portis.io/register"
        ).strip()

        timeout_raw = (env.get("WALLET_TIMEOUT_SECONDS") or "").strip()
        wallet_timeout_seconds = _to_float(timeout_raw, "WALLET_TIMEOUT_SECONDS") if timeout_raw else 15.0

        database_url = (env.get("DATABASE_URL") or "sqlite+aiosqlite:///./promo.db").strip()

        root_admin_ids = tuple(_parse_int_list(env.get("ROOT_ADMIN_IDS"), "ROOT_ADMIN_IDS"))

        tick_raw = (env.get("PROMO_TICK_SECONDS") or "").strip()
        promo_tick_seconds = _to_float(tick_raw, "PROMO_TICK_SECONDS") if tick_raw else 1.0
        if promo_tick_seconds <= 0:
            raise RuntimeError(f"PROMO_TICK_SECONDS must be positive, got {promo_tick_seconds!r}")

        ttl_raw = (env.get("PROMO_PAGE_TTL_MINUTES") or "").strip()
        promo_page_ttl_minutes = _to_int(ttl_raw, "PROMO_PAGE_TTL_MINUTES") if ttl_raw else 720

        limit_raw = (env.get("PROMO_WINNER_LIMIT") or "").strip()
        promo_winner_limit = _to_int(limit_raw, "PROMO_WINNER_LIMIT") if limit_raw else 99

        promo_event_date = (env.get("PROMO_EVENT_DATE") or "").strip()
        promo_follow_links = tuple(_split_list(env.get("PROMO_FOLLOW_LINKS")))

        environment = (env.get("ENVIRONMENT") or "production").strip() or "production"

        return cls(
            bot_token=bot_token,
            bot_username=bot_username,
            wallet_api_url=wallet_api_url,
            wallet_dapp_id=wallet_dapp_id,
            wallet_network=wallet_network,
            wallet_name=wallet_name,
            wallet_register_url=wallet_register_url,
            wallet_timeout_seconds=wallet_timeout_seconds,
            database_url=database_url,
            root_admin_ids=root_admin_ids,
            promo_tick_seconds=promo_tick_seconds,
            promo_page_ttl_minutes=promo_page_ttl_minutes,
            promo_event_date=promo_event_date,
            promo_winner_limit=promo_winner_limit,
            promo_follow_links=promo_follow_links,
            environment=environment,
        )
