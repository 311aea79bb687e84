#!/usr/bin/env python3
"""
Issue a long-lived bearer token for an existing user (development helper).

Usage:
    python create_token.py --email jane@example.com --days 365

The token is signed with ``SECRET_KEY`` from the environment, so it is
only accepted by an API started with the same key.
"""

import argparse
import sys

from travel_planner_api.app.core.config import settings
from travel_planner_api.app.core.db import Database
from travel_planner_api.app.core.security import HmacCredentialProvider, Principal


def main() -> None:
    ap = argparse.ArgumentParser(description="Issue a bearer token for a Travel Planner user.")
    ap.add_argument("--email", required=True, help="E-mail of an existing user")
    ap.add_argument("--days", type=int, default=365, help="Token lifetime in days (default 365)")
    ap.add_argument("--db", default=settings.database_url, help="SQLite database (default DATABASE_URL)")
    args = ap.parse_args()

    db = Database(args.db)
    with db.read() as conn:
        row = conn.execute("SELECT id, email FROM users WHERE email = ?", (args.email,)).fetchone()
    if not row:
        print(f"[!] No user found with email: {args.email}", file=sys.stderr)
        sys.exit(2)

    provider = HmacCredentialProvider(settings)
    token = provider.issue_token(
        Principal(id=row["id"], email=row["email"]),
        expires_delta=args.days * 24 * 60 * 60,
    )
    print(token)


if __name__ == "__main__":
    main()
