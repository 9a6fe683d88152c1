# promo_bot/services/notices.py
from __future__ import annotations

from dataclasses import dataclass

# locally synthesized codes (the provider has its own set)
VOUCHER_ID_REQUIRED = "VOUCHER_ID_REQUIRED"
INVALID_VOUCHER_CAMPAIGN_ID = "INVALID_VOUCHER_CAMPAIGN_ID"
NETWORK_ERROR = "NETWORK_ERROR"
INVALID_CAMPAIGN_INFO = "INVALID_CAMPAIGN_INFO"

DEFAULT = "DEFAULT"


@dataclass(frozen=True, slots=True)
class Notice:
    main: str
    secondary: str | None = None
    is_success: bool = False


ERROR_MESSAGES: dict[str, Notice] = {
    VOUCHER_ID_REQUIRED: Notice(
        main="Scan a QR code to claim!",
        secondary="Be one of the first 99 people to scan one of the QR codes around you to claim your NFT!",
    ),
    INVALID_VOUCHER_CAMPAIGN_ID: Notice(
        main="This QR code is not linked to a campaign.",
        secondary="Scan one of the QR codes around you to claim your NFT!",
    ),
    "VOUCHER_ID_DOES_NOT_EXIST": Notice(
        main="This ID does not exist in our system.",
        secondary="Scan one of the QR codes around you to claim your NFT!",
    ),
    "VOUCHER_ALREADY_CLAIMED": Notice(
        main="You have already claimed this NFT.",
        secondary="We will be distributing the NFT to your Portis Wallet in a couple of days.",
    ),
    "CAMPAIGN_MAX_EXCEEDED": Notice(
        main="Unfortunately, all available NFTs have already been claimed.",
        secondary="Stay tuned for other opportunities to claim rare NFTs in the future!",
    ),
    "SINGLE_USE_VOUCHER_ALREADY_CLAIMED": Notice(
        main="Unfortunately, this NFT has already been claimed.",
        secondary=(
            "Try scanning another QR code or stay tuned for other opportunities "
            "to claim rare NFTs in the future!"
        ),
    ),
    DEFAULT: Notice(main="Something went wrong, please try again."),
}

SUCCESS_NOTICE = Notice(
    main="Congratulations, you have successfully claimed an NFT from this event!",
    secondary="We will be distributing the NFT to your Portis Wallet in a couple of days.",
    is_success=True,
)


def is_known_error(code: str | None) -> bool:
    return bool(code) and code in ERROR_MESSAGES and code != DEFAULT


def notice_for(code: str | None) -> Notice:
    """Unknown (or empty) codes fall back to DEFAULT."""
    if not code:
        return ERROR_MESSAGES[DEFAULT]
    return ERROR_MESSAGES.get(code, ERROR_MESSAGES[DEFAULT])
