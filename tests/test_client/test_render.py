"""Tests for QR image rendering."""

from __future__ import annotations

import base64

from qrmint.client.render import (
    NETWORK_CAPTION,
    QRDisplay,
    download_filename,
    render_qr_data_uri,
    render_qr_png,
)

ADDRESS = "0x1111111111111111111111111111111111111111"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


class TestRender:
    def test_png(self) -> None:
        png = render_qr_png(ADDRESS)
        assert png.startswith(PNG_MAGIC)

    def test_box_size_changes_output(self) -> None:
        assert len(render_qr_png(ADDRESS, box_size=4)) != len(render_qr_png(ADDRESS, box_size=16))

    def test_data_uri(self) -> None:
        uri = render_qr_data_uri(ADDRESS)
        prefix = "data:image/png;base64,"
        assert uri.startswith(prefix)
        assert base64.b64decode(uri[len(prefix) :]).startswith(PNG_MAGIC)


class TestDisplay:
    def test_download_filename(self) -> None:
        assert download_filename("Shop") == "shop-qr.png"

    def test_display(self) -> None:
        display = QRDisplay(display_name="Coffee", address=ADDRESS)
        assert display.title == "Coffee USDC Payment Address"
        assert display.caption == NETWORK_CAPTION
        assert display.filename == "coffee-qr.png"
