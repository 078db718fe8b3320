"""Database production preflight checks.

Usage:
    python scripts/db_preflight.py

Checks deployment safety settings for the parts ledger before rollout.
Exits non-zero when any required control fails.
"""

from __future__ import annotations

import os
import sys


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _positive_number(name: str, default: str) -> tuple[bool, str]:
    raw = os.getenv(name, default)
    try:
        return float(raw) > 0, f"{name}={raw}"
    except ValueError:
        return False, f"{name}={raw!r} is not a number"


def run() -> int:
    environment = os.getenv("ENVIRONMENT", "development").strip().lower()
    database_url = os.getenv("DATABASE_URL", "sqlite:///./parts.db")
    auto_create_tables = _bool_env("AUTO_CREATE_TABLES", True)
    auto_reorder = _bool_env("AUTO_REORDER_ENABLED", False)

    checks: list[tuple[str, bool, str]] = []

    checks.append((
        "ENVIRONMENT is explicitly set",
        bool(environment),
        f"ENVIRONMENT={environment or '<empty>'}",
    ))

    retries_ok, retries_detail = _positive_number("ORDER_NUMBER_MAX_RETRIES", "5")
    checks.append(("ORDER_NUMBER_MAX_RETRIES is positive", retries_ok, retries_detail))

    if auto_reorder:
        interval_ok, interval_detail = _positive_number("AUTO_REORDER_INTERVAL_HOURS", "6")
        checks.append(("AUTO_REORDER_INTERVAL_HOURS is positive", interval_ok, interval_detail))

    if environment in {"production", "prod"}:
        checks.extend(
            [
                (
                    "DATABASE_URL is not SQLite",
                    "sqlite" not in database_url.lower(),
                    f"DATABASE_URL={database_url}",
                ),
                (
                    "AUTO_CREATE_TABLES is disabled",
                    not auto_create_tables,
                    f"AUTO_CREATE_TABLES={auto_create_tables}",
                ),
            ]
        )

    has_failures = False
    print("Parts Ledger DB Preflight")
    print(f"- environment: {environment}")
    print(f"- auto reorder: {'enabled' if auto_reorder else 'disabled'}")
    for title, ok, detail in checks:
        marker = "PASS" if ok else "FAIL"
        print(f"[{marker}] {title} ({detail})")
        if not ok:
            has_failures = True

    if has_failures:
        print("\nPreflight failed. Resolve failed checks before deployment.")
        return 1

    print("\nPreflight passed.")
    return 0


if __name__ == "__main__":
    sys.exit(run())
