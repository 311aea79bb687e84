#!/usr/bin/env python3
"""
Reset a user's password in the Travel Planner SQLite database.

This script DOES NOT read or reveal any existing passwords.  It sets a
new password hash for the given e-mail using the same credential
provider as the API, so the user can log in with the new password
straight away.

Usage:
    python reset_password.py --email jane@example.com --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sys

from travel_planner_api.app.core.config import settings
from travel_planner_api.app.core.db import Database
from travel_planner_api.app.core.security import HmacCredentialProvider
from travel_planner_api.app.services.lifecycle import now_iso


def main() -> None:
    ap = argparse.ArgumentParser(description="Reset Travel Planner user password (SQLite).")
    ap.add_argument("--db", default=settings.database_url, help="SQLite database (default DATABASE_URL)")
    ap.add_argument("--email", required=True, help="User email to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    db = Database(args.db)
    if not os.path.exists(db.path):
        print(f"[!] DB not found: {db.path}", file=sys.stderr)
        sys.exit(1)

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    hashed = HmacCredentialProvider(settings).hash_password(new_password)

    with db.transaction() as conn:
        row = conn.execute("SELECT id FROM users WHERE email = ?", (args.email,)).fetchone()
        if not row:
            print(f"[!] No user found with email: {args.email}", file=sys.stderr)
            sys.exit(2)
        conn.execute(
            "UPDATE users SET password_hash = ?, updated_at = ? WHERE id = ?",
            (hashed, now_iso(), row["id"]),
        )
    print(f"[+] Password updated for user: {args.email}")


if __name__ == "__main__":
    main()
