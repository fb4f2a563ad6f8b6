"""
Business logic for users: accounts, credentials and password resets.

This is the identity provider of the application.  A successful
``authenticate`` yields the integer ``users.id`` that the registration
ledger uses as the participant key.

Password reset lifecycle:

1. ``create_password_reset`` generates a random token, stores only its
   SHA‑256 digest and an expiry timestamp, and returns the raw token
   to be sent to the user.
2. ``reset_password`` hashes the presented token, looks for a user with
   that digest and an unexpired expiry, sets the new password and
   clears the token so it cannot be used twice.
"""

import logging
import sqlite3
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..core.config import settings
from ..core.db import get_connection, to_db_datetime, transaction, utcnow_text
from ..core.errors import EmailAlreadyRegistered, InvalidResetToken, Unauthenticated, UserNotFound
from ..core.security import generate_reset_token, hash_password, hash_reset_token, verify_password
from ..schemas.user import UserCreate, UserRead

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, email, first_name, last_name, university, student_status, role, is_active"

# Columns ``update_user`` may change.
_UPDATABLE = ("first_name", "last_name", "university", "student_status", "role", "is_active")


def _row_to_user(row: sqlite3.Row) -> UserRead:
    return UserRead(
        id=row["id"],
        email=row["email"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        university=row["university"],
        student_status=row["student_status"],
        role=row["role"],
        is_active=bool(row["is_active"]),
    )


class UserService:
    """Operations on user accounts stored in SQLite."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> UserRead:
        """Create a new member account.

        The very first account becomes ``admin`` so that a fresh
        installation can be administered; every later sign‑up is a
        ``member``.  Raises ``EmailAlreadyRegistered`` for duplicates.
        """
        logger.info("Registering user %s", data.email)
        try:
            with transaction() as conn:
                count = conn.execute("SELECT COUNT(*) AS count FROM users").fetchone()["count"]
                role = "admin" if count == 0 else "member"
                cursor = conn.execute(
                    "INSERT INTO users (email, first_name, last_name, password, university, "
                    "student_status, role, created_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        data.email,
                        data.first_name,
                        data.last_name,
                        hash_password(data.password),
                        data.university,
                        data.student_status,
                        role,
                        utcnow_text(),
                    ),
                )
                user_id = cursor.lastrowid
        except sqlite3.IntegrityError as e:
            raise EmailAlreadyRegistered(data.email) from e
        return UserRead(
            id=user_id,
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
            university=data.university,
            student_status=data.student_status,
            role=role,
            is_active=True,
        )

    @classmethod
    async def authenticate(cls, email: str, password: str) -> Optional[UserRead]:
        """Check credentials and record the login time.

        Returns ``None`` for an unknown email or a wrong password and
        raises ``Unauthenticated`` for a deactivated account.
        """
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {_USER_COLUMNS}, password FROM users WHERE email = ?",
                (email,),
            ).fetchone()
            if not row or not verify_password(password, row["password"]):
                return None
            if not row["is_active"]:
                raise Unauthenticated("Account is deactivated. Please contact support.")
            conn.execute("UPDATE users SET last_login = ? WHERE id = ?", (utcnow_text(), row["id"]))
            conn.commit()
            return _row_to_user(row)
        finally:
            conn.close()

    @classmethod
    async def get_user_by_id(cls, user_id: int) -> Optional[UserRead]:
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
            return _row_to_user(row) if row else None
        finally:
            conn.close()

    @classmethod
    async def get_user_by_email(cls, email: str) -> Optional[UserRead]:
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email = ?", (email,)).fetchone()
            return _row_to_user(row) if row else None
        finally:
            conn.close()

    @classmethod
    async def list_users(cls) -> List[UserRead]:
        """Return all users ordered by id."""
        conn = get_connection()
        try:
            rows = conn.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY id").fetchall()
            return [_row_to_user(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def update_user(cls, user_id: int, updates: dict) -> UserRead:
        """Update profile, role or active flag.  Raises ``UserNotFound``."""
        values = {key: updates[key] for key in _UPDATABLE if key in updates}
        if "is_active" in values:
            values["is_active"] = int(bool(values["is_active"]))
        with transaction() as conn:
            if not conn.execute("SELECT id FROM users WHERE id = ?", (user_id,)).fetchone():
                raise UserNotFound(user_id)
            if values:
                assignments = ", ".join(f"{key} = ?" for key in values)
                conn.execute(
                    f"UPDATE users SET {assignments} WHERE id = ?",
                    (*values.values(), user_id),
                )
            row = conn.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
        logger.info("User %s updated: %s", user_id, sorted(values))
        return _row_to_user(row)

    @classmethod
    async def create_password_reset(cls, email: str) -> Optional[str]:
        """Start a password reset and return the raw token.

        Returns ``None`` when there is no active account for ``email``;
        callers must respond the same way in both cases so the endpoint
        does not reveal which addresses are registered.
        """
        token, digest = generate_reset_token()
        expires = datetime.now(timezone.utc) + timedelta(minutes=settings.reset_token_expire_minutes)
        with transaction() as conn:
            row = conn.execute(
                "SELECT id FROM users WHERE email = ? AND is_active = 1", (email,)
            ).fetchone()
            if not row:
                logger.info("Password reset requested for unknown or inactive account")
                return None
            conn.execute(
                "UPDATE users SET reset_password_token = ?, reset_password_expires = ? WHERE id = ?",
                (digest, to_db_datetime(expires), row["id"]),
            )
        # Only the digest is kept; the raw token goes back to the caller, never to the log.
        logger.info("Password reset issued for user %s", row["id"])
        return token

    @classmethod
    async def reset_password(cls, token: str, new_password: str) -> UserRead:
        """Consume a reset token and set a new password.

        Raises ``InvalidResetToken`` if the token is unknown, expired or
        already used.
        """
        digest = hash_reset_token(token)
        with transaction() as conn:
            row = conn.execute(
                f"SELECT {_USER_COLUMNS} FROM users "
                "WHERE reset_password_token = ? AND reset_password_expires > ?",
                (digest, utcnow_text()),
            ).fetchone()
            if not row:
                raise InvalidResetToken()
            conn.execute(
                "UPDATE users SET password = ?, reset_password_token = NULL, "
                "reset_password_expires = NULL WHERE id = ?",
                (hash_password(new_password), row["id"]),
            )
        logger.info("Password reset completed for user %s", row["id"])
        return _row_to_user(row)
