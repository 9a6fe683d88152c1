"""Tests for phase derivation and campaign window parsing."""

import pytest

from promo_bot.services.promo_state import (
    CampaignWindow,
    InvalidCampaignInfo,
    PromoPhase,
    derive_phase,
    parse_timestamp_ms,
)


class TestDerivePhase:
    @pytest.mark.parametrize("now", [-1e12, 0, 999, 999.999])
    def test_before_start_is_pre(self, now):
        assert derive_phase(now, 1000, 2000) is PromoPhase.PRE

    @pytest.mark.parametrize("now", [2000.001, 2001, 1e15])
    def test_after_end_is_post(self, now):
        assert derive_phase(now, 1000, 2000) is PromoPhase.POST

    @pytest.mark.parametrize("now", [1000, 1500, 2000])
    def test_window_is_ongoing_with_both_boundaries_inclusive(self, now):
        assert derive_phase(now, 1000, 2000) is PromoPhase.ONGOING

    def test_inverted_window_prefers_pre(self):
        # start after end: "before start" wins over "after end"
        assert derive_phase(1500, 2000, 1000) is PromoPhase.PRE
        assert derive_phase(2500, 2000, 1000) is PromoPhase.POST


class TestParseTimestamp:
    def test_iso_with_z(self):
        assert parse_timestamp_ms("2021-06-04T18:00:00.000Z") == 1_622_829_600_000

    def test_iso_with_offset(self):
        assert parse_timestamp_ms("2021-06-04T20:00:00+02:00") == 1_622_829_600_000

    def test_naive_iso_is_utc(self):
        assert parse_timestamp_ms("2021-06-04T18:00:00") == 1_622_829_600_000

    def test_epoch_ms_number_and_string(self):
        assert parse_timestamp_ms(1_622_829_600_000) == 1_622_829_600_000
        assert parse_timestamp_ms("1622829600000") == 1_622_829_600_000
        assert parse_timestamp_ms(1_622_829_600_000.7) == 1_622_829_600_000
        assert parse_timestamp_ms("-1000") == -1000

    @pytest.mark.parametrize(
        "bad",
        [None, "", "not a date", True, [], {}, float("nan"), float("inf"), float("-inf"), "\u00b2", "-\u0663"],
    )
    def test_rejects_garbage(self, bad):
        with pytest.raises(InvalidCampaignInfo):
            parse_timestamp_ms(bad)


class TestCampaignWindow:
    def test_from_campaign_info(self):
        w = CampaignWindow.from_campaign_info(
            {"campaignDateStart": "2021-06-04T18:00:00Z", "campaignDateEnd": 1_622_833_200_000}
        )
        assert w == CampaignWindow(start_ms=1_622_829_600_000, end_ms=1_622_833_200_000)
        assert w.phase_at(1_622_829_600_000) is PromoPhase.ONGOING
        assert w.phase_at(1_622_833_200_001) is PromoPhase.POST

    def test_missing_dates(self):
        with pytest.raises(InvalidCampaignInfo):
            CampaignWindow.from_campaign_info({"campaignDateStart": "2021-06-04T18:00:00Z"})
