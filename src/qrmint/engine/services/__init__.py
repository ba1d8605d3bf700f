"""Engine services."""

from qrmint.engine.services.qr_code_service import QRCodeService

__all__ = ["QRCodeService"]
