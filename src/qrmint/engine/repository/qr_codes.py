"""QR code repository — equality-filtered, single-row-expecting access."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

from qrmint.engine.models.qr_code import QRCode
from qrmint.errors.qrmint_errors import StoreError
from qrmint.errors.store_errors import RecordNotFound, UniqueViolation

if TYPE_CHECKING:
    from qrmint.datastore.client import Datastore


def _is_unique_violation(exc: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed", postgres: "... violates unique constraint"
    return "unique" in str(exc.orig).lower()


class QRCodeRepository:
    """Data access layer for QR payment records.

    Queries expect exactly one row. Zero rows raise :class:`RecordNotFound`;
    anything else that goes wrong is a :class:`StoreError`.
    """

    def __init__(self, datastore: Datastore) -> None:
        self._ds = datastore

    async def find_single(self, **filters: Any) -> QRCode:
        """Return the one record whose columns equal ``filters``.

        Raises:
            RecordNotFound: No row matched.
            StoreError: More than one row matched or the query failed.
        """
        stmt = select(QRCode).filter_by(**filters)
        try:
            async with self._ds.session() as session:
                result = await session.execute(stmt)
                return result.scalar_one()
        except NoResultFound as exc:
            raise RecordNotFound(f"no qr_codes row for {sorted(filters)}") from exc
        except SQLAlchemyError as exc:
            raise StoreError(f"qr_codes lookup failed: {exc}") from exc

    async def insert(self, record: QRCode) -> QRCode | None:
        """Persist a new record and return it as stored.

        Returns ``None`` if the database did not hand back the row.

        Raises:
            UniqueViolation: The insert hit a uniqueness constraint.
            StoreError: Any other database failure.
        """
        try:
            async with self._ds.session() as session:
                session.add(record)
                await session.commit()
                await session.refresh(record)
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                raise UniqueViolation(str(exc.orig)) from exc
            raise StoreError(f"qr_codes insert failed: {exc}") from exc
        except SQLAlchemyError as exc:
            raise StoreError(f"qr_codes insert failed: {exc}") from exc
        if record.id is None:
            return None
        return record
