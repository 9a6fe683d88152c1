"""Tests for voucher card rendering and the card CLI."""

from io import BytesIO

from PIL import Image

from promo_bot.scripts.make_voucher_cards import main
from promo_bot.utils.cards.voucher_card import render_voucher_card
from promo_bot.utils.deeplink import build_claim_link


def test_render_voucher_card_is_png():
    png = render_voucher_card(
        link=build_claim_link("promo_test_bot", "camp-1", "v-42"),
        voucher_id="v-42",
        campaign_id="camp-1",
        subtitle="06.04.21",
    )
    assert png.startswith(b"\x89PNG")
    img = Image.open(BytesIO(png))
    assert img.size == (900, 1200)


def test_cli_writes_one_card_per_voucher(tmp_path):
    ids_file = tmp_path / "ids.txt"
    ids_file.write_text("# batch 1\nv-2\nv-3\nv-1\n", encoding="utf-8")
    out = tmp_path / "cards"

    rc = main([
        "v-1",
        "--campaign", "camp-1",
        "--ids-file", str(ids_file),
        "--out", str(out),
        "--bot-username", "promo_test_bot",
        "--subtitle", "",
    ])

    assert rc == 0
    assert sorted(p.name for p in out.iterdir()) == ["voucher_v-1.png", "voucher_v-2.png", "voucher_v-3.png"]


def test_cli_reports_vouchers_it_cannot_encode(tmp_path):
    rc = main([
        "v-1", "voucher-" + "x" * 60,
        "--campaign", "camp-1",
        "--out", str(tmp_path),
        "--bot-username", "promo_test_bot",
        "--subtitle", "",
    ])
    assert rc == 1
    assert [p.name for p in tmp_path.iterdir()] == ["voucher_v-1.png"]
