"""
Business logic for users and authentication.

Users are the root of ownership: deleting a user cascades through the
foreign keys to every trip, itinerary, activity, expense and reminder
they own.  Because that is irreversible, deletion re-checks the
account password on top of the ownership check.
"""

import logging
import sqlite3
from typing import Any, Dict

from ..core.db import Database
from ..core.errors import ConflictError, NotFoundError, UnauthenticatedError, ValidationFailedError
from ..core.security import CredentialProvider, Principal
from ..schemas.user import LoginRequest, RegisterRequest, UserRead, UserUpdate
from .lifecycle import fetch_row, insert_row, update_row
from .ownership import EntityKind, OwnershipResolver

logger = logging.getLogger(__name__)


def _is_email_conflict(error: sqlite3.IntegrityError) -> bool:
    return "users.email" in str(error)


class UserService:
    """Registration, login and profile management.

    Parameters
    ----------
    db : Database
        Persistence gateway.
    credentials : CredentialProvider
        Password hashing and token issuance.
    """

    def __init__(self, db: Database, credentials: CredentialProvider) -> None:
        self.db = db
        self.credentials = credentials

    async def register(self, data: RegisterRequest) -> UserRead:
        """Create a user account.

        Raises ``ValidationFailedError`` when the two passwords differ and
        ``ConflictError`` when the e-mail is already registered.
        """
        if data.password != data.confirm_password:
            message = "Passwords do not match"
            raise ValidationFailedError(message, errors=[{"field": "confirmPassword", "message": message}])
        values: Dict[str, Any] = {
            "name": data.name,
            "email": data.email,
            "password_hash": self.credentials.hash_password(data.password),
            "phone_number": data.phone_number,
            "profile_picture_url": data.profile_picture_url,
        }
        try:
            with self.db.transaction() as conn:
                user_id = insert_row(conn, "users", values)
                row = fetch_row(conn, "users", user_id)
        except sqlite3.IntegrityError as e:
            if _is_email_conflict(e):
                raise ConflictError("Email already exists") from e
            raise
        logger.info("Registered user %s (%s)", user_id, data.email)
        return UserRead.model_validate(row)

    async def login(self, data: LoginRequest) -> str:
        """Verify e-mail and password and return a bearer token."""
        with self.db.read() as conn:
            row = conn.execute(
                "SELECT id, email, password_hash FROM users WHERE email = ?",
                (data.email,),
            ).fetchone()
        if not row:
            raise NotFoundError("User not found")
        if not self.credentials.verify_password(data.password, row["password_hash"]):
            logger.warning("Failed login for %s", data.email)
            raise UnauthenticatedError("Invalid password")
        return self.credentials.issue_token(Principal(id=row["id"], email=row["email"]))

    async def get_user(self, user_id: str, principal: Principal) -> UserRead:
        with self.db.read() as conn:
            resolved = OwnershipResolver(conn).resolve(EntityKind.USER, user_id, principal.id)
        return UserRead.model_validate(resolved.record)

    async def update_user(self, user_id: str, updates: UserUpdate, principal: Principal) -> UserRead:
        """Apply a partial profile update.

        Only fields present in the request body are written.  Changing
        the e-mail to one that another account uses is a conflict.
        """
        changes = updates.changes()
        try:
            with self.db.transaction() as conn:
                OwnershipResolver(conn).resolve(EntityKind.USER, user_id, principal.id, "update")
                update_row(conn, "users", user_id, changes)
                row = fetch_row(conn, "users", user_id)
        except sqlite3.IntegrityError as e:
            if _is_email_conflict(e):
                raise ConflictError("Email already exists") from e
            raise
        logger.info("Updated user %s fields %s", user_id, sorted(changes))
        return UserRead.model_validate(row)

    async def delete_user(self, user_id: str, password: str, principal: Principal) -> None:
        """Delete a user and, through cascading foreign keys, all they own.

        The password is verified against the stored hash inside the
        same transaction; on mismatch nothing is deleted.
        """
        with self.db.transaction() as conn:
            resolved = OwnershipResolver(conn).resolve(EntityKind.USER, user_id, principal.id, "delete")
            if not self.credentials.verify_password(password, resolved.record["password_hash"]):
                logger.warning("Refused deletion of user %s: invalid password", user_id)
                raise UnauthenticatedError("Invalid password")
            conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        logger.info("Deleted user %s", user_id)
