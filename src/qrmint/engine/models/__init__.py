"""Engine data models (SQLAlchemy ORM).

Import :data:`ALL_MODELS` for migration and table creation.
"""

from qrmint.engine.models.base import Base, CreatedAtMixin
from qrmint.engine.models.qr_code import QRCode

ALL_MODELS: list[type[Base]] = [QRCode]

__all__ = ["ALL_MODELS", "Base", "CreatedAtMixin", "QRCode"]
