"""QRCode model — a wallet address bound to one website URL."""

from __future__ import annotations

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from qrmint.engine.models.base import Base, CreatedAtMixin


class QRCode(Base, CreatedAtMixin):
    """A generated payment QR code.

    ``qr_data`` is the payload rendered into the QR image. It equals
    ``wallet_address`` at creation time; nothing enforces it afterwards.
    """

    __tablename__ = "qr_codes"
    __table_args__ = (UniqueConstraint("website_url", name="uq_qr_codes_website_url"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    wallet_address: Mapped[str] = mapped_column(
        String(128), nullable=False, index=True, comment="Payer-facing destination address"
    )
    website_url: Mapped[str] = mapped_column(
        Text, nullable=False, comment="Destination identifier the QR code is bound to"
    )
    website_name: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="Display name derived by the caller"
    )
    memo: Mapped[str] = mapped_column(Text, nullable=False, default="")
    amount: Mapped[str] = mapped_column(
        String(64), nullable=False, default="0", comment="Decimal amount as a string"
    )
    qr_data: Mapped[str] = mapped_column(String(128), nullable=False)

    def __repr__(self) -> str:
        return f"<QRCode id={self.id} wallet={self.wallet_address} url={self.website_url}>"
