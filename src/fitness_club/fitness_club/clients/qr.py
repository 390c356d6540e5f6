from __future__ import annotations

import io

import qrcode

from .model import Client


def render_member_qr(client: Client, *, box_size: int = 10, border: int = 2) -> io.BytesIO:
    """PNG QR code carrying the member's telegram id, as read by the scanner."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=border,
    )
    qr.add_data(client.telegram_id)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf
