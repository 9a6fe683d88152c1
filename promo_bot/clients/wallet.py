"""
Wallet provider client.

Thin async wrapper over the provider's hosted voucher API. Campaign validation,
claim execution and NFT issuance all happen on the provider side; this client
only moves JSON back and forth.

Usage:
    async with WalletProviderClient(base_url, dapp_id) as client:
        info = await client.get_campaign_info("camp-1")
        res = await client.claim_voucher("voucher-42")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol
from urllib.parse import quote

import httpx

log = logging.getLogger(__name__)


class WalletProviderError(RuntimeError):
    """Transport failure or a response the provider contract does not allow."""


@dataclass(frozen=True, slots=True)
class ProviderResponse:
    """Parsed provider envelope: either `result` or `error` (a code string)."""
    result: dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.error


class WalletProvider(Protocol):
    async def get_campaign_info(self, campaign_id: str) -> ProviderResponse: ...

    async def claim_voucher(self, voucher_id: str) -> ProviderResponse: ...


def error_code_of(error: Any) -> Optional[str]:
    """
    The provider reports errors either as a bare string or as an object with a `code`.
    """
    if error is None or error == "" or error == {}:
        return None
    if isinstance(error, str):
        return error
    if isinstance(error, dict):
        code = error.get("code")
        return str(code) if code else "DEFAULT"
    return str(error)


def _segment(value: str) -> str:
    # ids come from user-supplied deep links: one opaque path segment, no "/", "?" or "#"
    return quote(value, safe="")


class WalletProviderClient:
    def __init__(
        self,
        base_url: str,
        dapp_id: str,
        *,
        network: str = "mainnet",
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.dapp_id = dapp_id
        self.network = network
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "WalletProviderClient":
        await self.connect()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def connect(self) -> None:
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"X-Dapp-Id": self.dapp_id, "Accept": "application/json"},
            params={"network": self.network},
            transport=self._transport,
        )

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get_campaign_info(self, campaign_id: str) -> ProviderResponse:
        return await self._request("GET", f"/campaigns/{_segment(campaign_id)}")

    async def claim_voucher(self, voucher_id: str) -> ProviderResponse:
        return await self._request("POST", f"/vouchers/{_segment(voucher_id)}/claim", json={})

    async def _request(self, method: str, path: str, **kwargs) -> ProviderResponse:
        if self._client is None:
            await self.connect()
        assert self._client is not None

        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log.warning("Wallet provider %s %s failed: %s", method, path, e)
            raise WalletProviderError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 500:
            raise WalletProviderError(f"{method} {path} returned HTTP {response.status_code}")

        try:
            body = response.json() if response.content else {}
        except ValueError as e:
            raise WalletProviderError(f"{method} {path} returned non-JSON body") from e

        if not isinstance(body, dict):
            raise WalletProviderError(f"{method} {path} returned {type(body).__name__}, expected object")

        code = error_code_of(body.get("error"))
        if code is None and response.status_code >= 400:
            # 4xx without an error envelope
            code = "DEFAULT"

        result = body.get("result")
        log.debug("Wallet provider %s %s -> %s error=%s", method, path, response.status_code, code)
        return ProviderResponse(
            result=result if isinstance(result, dict) else {},
            error=code,
        )
