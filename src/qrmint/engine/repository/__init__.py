"""Data access layer."""

from qrmint.engine.repository.qr_codes import QRCodeRepository

__all__ = ["QRCodeRepository"]
