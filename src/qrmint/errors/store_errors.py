"""Datastore-level signals raised by the record repository.

These never reach HTTP clients; the service layer translates them into
the gateway taxonomy.
"""

from __future__ import annotations


class RecordNotFound(Exception):
    """A single-row query matched no rows."""


class UniqueViolation(Exception):
    """An insert collided with a uniqueness constraint."""
