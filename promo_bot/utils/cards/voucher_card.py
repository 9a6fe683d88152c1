# promo_bot/utils/cards/voucher_card.py
from __future__ import annotations

import io

import qrcode
from PIL import Image, ImageDraw, ImageFont


def _try_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """
    Tries common fonts. Falls back to PIL default if truetype not available.
    """
    candidates = [
        # Windows common
        "C:\\Windows\\Fonts\\segoeui.ttf",
        "C:\\Windows\\Fonts\\arial.ttf",
        # Linux common
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    ]
    for path in candidates:
        try:
            return ImageFont.truetype(path, size=size)
        except OSError:
            pass
    return ImageFont.load_default()


def _text(draw: ImageDraw.ImageDraw, xy: tuple[int, int], s: str, font, fill=(20, 20, 20)) -> None:
    draw.text(xy, s, font=font, fill=fill)


def _qr_image(link: str, size: int) -> Image.Image:
    qr = qrcode.QRCode(box_size=10, border=2)
    qr.add_data(link)
    qr.make(fit=True)
    return qr.make_image(fill_color="black", back_color="white").convert("RGB").resize((size, size), Image.NEAREST)


def render_voucher_card(
    *,
    link: str,
    voucher_id: str,
    campaign_id: str,
    title: str = "Scan to claim your NFT",
    subtitle: str = "",
) -> bytes:
    """
    Returns PNG bytes: printable portrait card with the claim QR in the middle.
    """

    W, H = 900, 1200
    pad = 48
    qr_size = 620

    img = Image.new("RGB", (W, H), (248, 249, 251))
    draw = ImageDraw.Draw(img)

    font_title = _try_font(52)
    font_sub = _try_font(28)
    font_small = _try_font(22)

    draw.rounded_rectangle(
        (pad, pad, W - pad, H - pad),
        radius=28,
        fill=(255, 255, 255),
        outline=(235, 236, 240),
        width=2,
    )

    _text(draw, (pad + 40, pad + 40), title, font_title, fill=(15, 23, 42))
    if subtitle:
        _text(draw, (pad + 40, pad + 112), subtitle, font_sub, fill=(55, 65, 81))

    qr_x = (W - qr_size) // 2
    qr_y = pad + 180
    img.paste(_qr_image(link, qr_size), (qr_x, qr_y))

    info_y = qr_y + qr_size + 40
    _text(draw, (pad + 40, info_y), f"Voucher: {voucher_id}", font_sub, fill=(15, 23, 42))
    _text(draw, (pad + 40, info_y + 44), f"Campaign: {campaign_id}", font_small, fill=(107, 114, 128))

    _text(
        draw,
        (pad + 40, H - pad - 50),
        "One claim per voucher",
        font_small,
        fill=(156, 163, 175),
    )

    buf = io.BytesIO()
    img.save(buf, format="PNG", optimize=True)
    return buf.getvalue()
