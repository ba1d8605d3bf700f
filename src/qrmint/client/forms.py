"""Form input, local validation and display-name derivation."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from urllib.parse import urlsplit

from qrmint.client.errors import FormError

UNKNOWN_NAME = "Unknown"


@dataclass
class QRForm:
    """Values the user typed into the generate form."""

    website_url: str = ""
    memo: str = ""
    amount: str = ""


def is_valid_url(value: str) -> bool:
    try:
        parts = urlsplit(value)
        host = parts.hostname
    except ValueError:
        # malformed netloc, e.g. an unclosed IPv6 bracket
        return False
    return parts.scheme in ("http", "https") and bool(host)


def validate_amount(amount: str) -> None:
    """Accept an empty amount or a finite, non-negative number."""
    if not amount:
        return
    try:
        value = Decimal(amount)
    except InvalidOperation:
        raise FormError("Please enter a valid amount") from None
    if not value.is_finite() or value < 0:
        raise FormError("Please enter a valid amount")


def validate_form(form: QRForm) -> None:
    """Check the generate form in the order the user sees the fields.

    Raises:
        FormError: The first problem found.
    """
    if not form.website_url:
        raise FormError("Website URL is required")
    if not is_valid_url(form.website_url):
        raise FormError("Please enter a valid website URL")
    if not form.memo.strip():
        raise FormError("Memo is required")
    validate_amount(form.amount)


def derive_display_name(website_url: str) -> str:
    """``https://www.shop.example`` -> ``Shop``.

    The first host label after dropping ``www.``, capitalised. Returns
    ``Unknown`` when the URL has no host.
    """
    try:
        host = urlsplit(website_url).hostname
    except ValueError:
        return UNKNOWN_NAME
    if not host:
        return UNKNOWN_NAME
    label = host.replace("www.", "", 1).split(".")[0]
    return label[:1].upper() + label[1:]
