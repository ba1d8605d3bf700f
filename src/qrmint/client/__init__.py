"""Client request orchestrator for the QR record gateway."""

from qrmint.client.errors import FormError, GatewayError, PaymentError
from qrmint.client.forms import QRForm, derive_display_name, validate_form
from qrmint.client.gateway import GatewayClient
from qrmint.client.orchestrator import (
    FlowResult,
    PaymentStatus,
    QRCodeOrchestrator,
    WalletAccount,
)
from qrmint.client.payment import FeePayment, PaymentReceipt, TokenTransfer, Web3TokenTransfer
from qrmint.client.render import QRDisplay, render_qr_data_uri, render_qr_png

__all__ = [
    "FeePayment",
    "FlowResult",
    "FormError",
    "GatewayClient",
    "GatewayError",
    "PaymentError",
    "PaymentReceipt",
    "PaymentStatus",
    "QRCodeOrchestrator",
    "QRDisplay",
    "QRForm",
    "TokenTransfer",
    "WalletAccount",
    "Web3TokenTransfer",
    "derive_display_name",
    "render_qr_data_uri",
    "render_qr_png",
    "validate_form",
]
