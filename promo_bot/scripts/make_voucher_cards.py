# promo_bot/scripts/make_voucher_cards.py
"""
Writes one printable QR card per voucher id.

    python -m promo_bot.scripts.make_voucher_cards --campaign camp1 --out cards/ v001 v002
    python -m promo_bot.scripts.make_voucher_cards --campaign camp1 --ids-file vouchers.txt
"""
from __future__ import annotations

import argparse
import logging
import os
import re
from pathlib import Path

from dotenv import load_dotenv

from promo_bot.utils.cards.voucher_card import render_voucher_card
from promo_bot.utils.deeplink import build_claim_link

log = logging.getLogger("promo_bot.scripts.make_voucher_cards")


def _read_ids(args: argparse.Namespace) -> list[str]:
    ids = list(args.voucher_ids)
    if args.ids_file:
        for line in Path(args.ids_file).read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                ids.append(line)
    # keep order, drop duplicates
    return list(dict.fromkeys(ids))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Render voucher QR cards (PNG)")
    ap.add_argument("voucher_ids", nargs="*", help="voucher ids")
    ap.add_argument("--campaign", required=True, help="campaign id")
    ap.add_argument("--ids-file", help="text file with one voucher id per line")
    ap.add_argument("--out", default="voucher_cards", help="output directory")
    ap.add_argument("--bot-username", default=None, help="defaults to BOT_USERNAME env")
    ap.add_argument("--title", default="Scan to claim your NFT")
    ap.add_argument("--subtitle", default=None, help="defaults to PROMO_EVENT_DATE env")
    return ap


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    args = build_parser().parse_args(argv)
    bot_username = (args.bot_username or os.environ.get("BOT_USERNAME") or "").strip()
    if not bot_username:
        raise SystemExit("BOT_USERNAME is not set (use --bot-username)")

    ids = _read_ids(args)
    if not ids:
        raise SystemExit("No voucher ids given")

    subtitle = args.subtitle if args.subtitle is not None else (os.environ.get("PROMO_EVENT_DATE") or "")
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = 0
    for voucher_id in ids:
        try:
            link = build_claim_link(bot_username, args.campaign, voucher_id)
        except ValueError as e:
            log.error("Skipping voucher %s: %s", voucher_id, e)
            continue
        png = render_voucher_card(
            link=link,
            voucher_id=voucher_id,
            campaign_id=args.campaign,
            title=args.title,
            subtitle=subtitle,
        )
        (out_dir / f"voucher_{re.sub(r'[^A-Za-z0-9_.-]', '_', voucher_id)}.png").write_bytes(png)
        written += 1

    log.info("Wrote %s card(s) to %s", written, out_dir)
    return 0 if written == len(ids) else 1


if __name__ == "__main__":
    raise SystemExit(main())
