"""Tests for the error notice table."""

import pytest

from promo_bot.services.notices import (
    DEFAULT,
    ERROR_MESSAGES,
    INVALID_VOUCHER_CAMPAIGN_ID,
    NETWORK_ERROR,
    VOUCHER_ID_REQUIRED,
    is_known_error,
    notice_for,
)


def test_table_has_six_codes_plus_default():
    assert DEFAULT in ERROR_MESSAGES
    assert len(ERROR_MESSAGES) == 7
    assert ERROR_MESSAGES[DEFAULT].secondary is None


def test_known_codes_render_their_copy():
    assert notice_for(VOUCHER_ID_REQUIRED).main == "Scan a QR code to claim!"
    assert notice_for("CAMPAIGN_MAX_EXCEEDED").main == (
        "Unfortunately, all available NFTs have already been claimed."
    )
    assert notice_for(INVALID_VOUCHER_CAMPAIGN_ID) is ERROR_MESSAGES[INVALID_VOUCHER_CAMPAIGN_ID]


@pytest.mark.parametrize("code", ["SOMETHING_NEW", NETWORK_ERROR, "", None])
def test_unknown_codes_fall_back_to_default(code):
    assert notice_for(code) is ERROR_MESSAGES[DEFAULT]
    assert notice_for(code).main == "Something went wrong, please try again."


def test_is_known_error():
    assert is_known_error("VOUCHER_ALREADY_CLAIMED")
    assert not is_known_error(DEFAULT)
    assert not is_known_error("SOMETHING_NEW")
    assert not is_known_error(None)
