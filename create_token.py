"""Print a long-lived access token for an existing account.

Usage:
    python create_token.py admin@example.com [days]
"""
import sys

from community_events_api.app.core.security import create_access_token


def main() -> None:
    if len(sys.argv) < 2:
        print("usage: python create_token.py <email> [days]", file=sys.stderr)
        sys.exit(1)
    email = sys.argv[1].strip().lower()
    days = int(sys.argv[2]) if len(sys.argv) > 2 else 365
    print(create_access_token({"sub": email}, expires_delta=days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
