"""Async SQLAlchemy datastore."""

from qrmint.datastore.client import Datastore

__all__ = ["Datastore"]
