#!/usr/bin/env python3
"""
Reset a user's password directly in the SQLite database.

This script does not read or reveal existing passwords.  It sets a new
PBKDF2 hash for the given account and clears any pending reset token.

Usage:
    python reset_password.py --db ./community_events.db --email admin@example.com --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sqlite3
import sys

from community_events_api.app.core.security import hash_password


def main() -> None:
    ap = argparse.ArgumentParser(description="Reset a Community Events user password (SQLite).")
    ap.add_argument("--db", required=True, help="Path to SQLite DB file (e.g., ./community_events.db)")
    ap.add_argument("--email", required=True, help="User email to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        sys.exit(1)

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if len(new_password) < 6:
        print("[!] Password must be at least 6 characters long.", file=sys.stderr)
        sys.exit(1)

    email = args.email.strip().lower()
    conn = sqlite3.connect(args.db)
    try:
        cur = conn.cursor()
        cur.execute(
            "UPDATE users SET password = ?, reset_password_token = NULL, "
            "reset_password_expires = NULL WHERE email = ?",
            (hash_password(new_password), email),
        )
        if cur.rowcount == 0:
            print(f"[!] No user found with email: {email}", file=sys.stderr)
            sys.exit(2)
        conn.commit()
        print(f"[+] Password updated for user: {email}")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
