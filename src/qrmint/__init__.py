"""QRmint — USDC payment QR codes for wallet holders."""

__version__ = "0.1.0"
