#!/usr/bin/env python3
"""Environment check: report which gateway settings are configured.

    python -m qrmint.tools.check_env

Prints one line per variable, ``set`` or ``MISSING``. The database key is
never echoed. Exits with status 1 when any variable is missing.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

REQUIRED_VARS = (
    "QRMINT_DB__DSN",
    "QRMINT_DB__KEY",
    "QRMINT_ENVIRONMENT",
    "QRMINT_SERVER__PORT",
    "QRMINT_CORS__FRONTEND_URL",
)

SECRET_VARS = frozenset({"QRMINT_DB__KEY"})


def check(environ: Mapping[str, str]) -> list[tuple[str, str | None]]:
    """Return ``(name, shown_value)`` for each required variable.

    ``shown_value`` is ``None`` when the variable is unset or empty, and
    ``"***"`` for secrets that are set.
    """
    results: list[tuple[str, str | None]] = []
    for name in REQUIRED_VARS:
        value = environ.get(name, "")
        if not value:
            results.append((name, None))
        elif name in SECRET_VARS:
            results.append((name, "***"))
        else:
            results.append((name, value))
    return results


def main() -> None:
    """CLI entry point."""
    results = check(os.environ)
    width = max(len(name) for name in REQUIRED_VARS)

    print("QRmint environment")
    print("-" * 60)
    for name, shown in results:
        status = f"set ({shown})" if shown is not None else "MISSING"
        print(f"  {name:<{width}}  {status}")
    print("-" * 60)

    missing = [name for name, shown in results if shown is None]
    if missing:
        print(f"{len(missing)} variable(s) missing")
        sys.exit(1)
    print("All variables set")


if __name__ == "__main__":
    main()
