# promo_bot/services/promo_page.py
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Awaitable, Callable

from promo_bot.clients.wallet import ProviderResponse, WalletProvider, WalletProviderError
from promo_bot.services.notices import (
    INVALID_CAMPAIGN_INFO,
    INVALID_VOUCHER_CAMPAIGN_ID,
    NETWORK_ERROR,
    VOUCHER_ID_REQUIRED,
)
from promo_bot.services.promo_state import CampaignWindow, InvalidCampaignInfo, PromoPhase
from promo_bot.utils.deeplink import PromoQuery
from promo_bot.utils.dt import now_ms
from promo_bot.utils.ticker import Ticker

log = logging.getLogger(__name__)

PageListener = Callable[["PromoPage"], Awaitable[None]]


def validate_query(query: PromoQuery) -> str | None:
    """
    Voucher first: a link without a voucher is "go scan a code", whatever else it carries.
    """
    if not query.voucher_id:
        return VOUCHER_ID_REQUIRED
    if not query.campaign_id:
        return INVALID_VOUCHER_CAMPAIGN_ID
    return None


@dataclass(frozen=True, slots=True)
class ClaimResult:
    attempted: bool
    error_code: str | None = None

    @property
    def ok(self) -> bool:
        return self.attempted and not self.error_code


class PromoPage:
    """
    State of one promo view shown in one chat.

    phase        LOADING until the campaign window is known, then PRE/ONGOING/POST by wall clock;
                 SUCCESS after an accepted claim and never left again
    claim_error  any non-empty code hides the phase view behind a notice

    Every visible change is pushed to `on_change` while the page is mounted.
    """

    def __init__(
        self,
        *,
        chat_id: int,
        query: PromoQuery,
        provider: WalletProvider,
        on_change: PageListener | None = None,
        clock: Callable[[], int] = now_ms,
        tick_seconds: float = 1.0,
    ) -> None:
        self.id = uuid.uuid4().hex[:12]
        self.chat_id = chat_id
        self.query = query
        self.provider = provider
        self.on_change = on_change
        self.clock = clock

        self.phase: PromoPhase = PromoPhase.LOADING
        self.window: CampaignWindow | None = None
        self.claim_error: str | None = validate_query(query)
        self.claim_pending = False

        self.message_id: int | None = None
        self.mounted = False
        self.created_at_ms = clock()

        self._ticker = Ticker(self.tick, tick_seconds, name=f"promo-page-{self.id}")

    @property
    def campaign_id(self) -> str | None:
        return self.query.campaign_id

    @property
    def voucher_id(self) -> str | None:
        return self.query.voucher_id

    @property
    def tick_seconds(self) -> float:
        return self._ticker.interval_seconds

    @property
    def ticking(self) -> bool:
        return self._ticker.running

    # -------------------------------------------------
    # Lifecycle
    # -------------------------------------------------

    async def mount(self) -> None:
        if self.mounted:
            return
        self.mounted = True
        self._ticker.start()
        log.info(
            "Page %s mounted chat=%s campaign=%s voucher=%s error=%s",
            self.id, self.chat_id, self.campaign_id, self.voucher_id, self.claim_error,
        )

        if self.claim_error is None and self.campaign_id:
            await self.load_campaign()

    async def unmount(self) -> None:
        if not self.mounted:
            return
        self.mounted = False
        await self._ticker.stop()
        log.info("Page %s unmounted chat=%s phase=%s", self.id, self.chat_id, self.phase.value)

    async def set_tick_interval(self, seconds: float) -> None:
        await self._ticker.set_interval(seconds)

    # -------------------------------------------------
    # Campaign window
    # -------------------------------------------------

    async def load_campaign(self) -> None:
        campaign_id = self.campaign_id
        if not campaign_id:
            return

        try:
            res = await self.provider.get_campaign_info(campaign_id)
        except WalletProviderError as e:
            log.warning("Campaign info failed campaign=%s: %s", campaign_id, e)
            res = ProviderResponse(error=NETWORK_ERROR)

        if not self.mounted:
            # unmounted while the request was in flight
            return

        if res.error:
            log.info("Campaign info error campaign=%s code=%s", campaign_id, res.error)
            await self._set_error(res.error)
            return

        try:
            window = CampaignWindow.from_campaign_info(res.result)
        except InvalidCampaignInfo as e:
            log.warning("Campaign info unusable campaign=%s: %s", campaign_id, e)
            await self._set_error(INVALID_CAMPAIGN_INFO)
            return

        self.window = window
        # evaluate now instead of leaving the spinner up until the next tick
        await self.tick()

    # -------------------------------------------------
    # Polling
    # -------------------------------------------------

    async def tick(self) -> None:
        if self.window is None:
            return
        if self.phase is PromoPhase.SUCCESS:
            return

        nxt = self.window.phase_at(self.clock())
        if nxt is self.phase:
            return

        log.info("Page %s phase %s -> %s", self.id, self.phase.value, nxt.value)
        self.phase = nxt
        await self._changed()

    # -------------------------------------------------
    # Claim
    # -------------------------------------------------

    async def claim(self) -> ClaimResult:
        """
        One provider call per click; no retries here. A failed claim stays on the error
        notice until the visitor clicks again.
        """
        if self.claim_pending or self.phase is not PromoPhase.ONGOING or not self.voucher_id:
            return ClaimResult(attempted=False)

        self.claim_pending = True
        self.claim_error = None
        await self._changed()

        try:
            res = await self.provider.claim_voucher(self.voucher_id)
            code = res.error
        except WalletProviderError as e:
            log.warning("Claim failed voucher=%s: %s", self.voucher_id, e)
            code = NETWORK_ERROR
        finally:
            self.claim_pending = False

        if code:
            self.claim_error = code
            log.info("Page %s claim rejected voucher=%s code=%s", self.id, self.voucher_id, code)
        else:
            self.phase = PromoPhase.SUCCESS
            log.info("Page %s claim accepted voucher=%s", self.id, self.voucher_id)

        await self._changed()
        return ClaimResult(attempted=True, error_code=code)

    # -------------------------------------------------
    # Internals
    # -------------------------------------------------

    async def _set_error(self, code: str) -> None:
        self.claim_error = code
        await self._changed()

    async def _changed(self) -> None:
        if not self.mounted or self.on_change is None:
            return
        try:
            await self.on_change(self)
        except Exception:
            log.exception("Page %s listener failed", self.id)
