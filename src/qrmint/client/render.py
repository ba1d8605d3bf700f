"""QR image rendering for payment addresses."""

from __future__ import annotations

import base64
import io
from dataclasses import dataclass

import qrcode  # type: ignore[import-untyped]
from qrcode.constants import ERROR_CORRECT_H  # type: ignore[import-untyped]

NETWORK_CAPTION = "Scan to pay with USDC on Base"


@dataclass(frozen=True)
class QRDisplay:
    """What the user sees next to the QR image."""

    display_name: str
    address: str
    caption: str = NETWORK_CAPTION

    @property
    def title(self) -> str:
        return f"{self.display_name} USDC Payment Address"

    @property
    def filename(self) -> str:
        return download_filename(self.display_name)


def render_qr_png(data: str, *, box_size: int = 8, border: int = 4) -> bytes:
    """Render *data* as a PNG QR code with high error correction."""
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_H, box_size=box_size, border=border)
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def render_qr_data_uri(data: str) -> str:
    """``data:image/png;base64,...`` for embedding in HTML."""
    b64 = base64.b64encode(render_qr_png(data)).decode()
    return f"data:image/png;base64,{b64}"


def download_filename(display_name: str) -> str:
    return f"{display_name.lower()}-qr.png"
