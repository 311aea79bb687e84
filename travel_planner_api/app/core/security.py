"""
Security helpers for password hashing and JWT authentication.

Credential handling sits behind the ``CredentialProvider`` interface:
services and endpoints only ever call ``hash_password``,
``verify_password``, ``issue_token`` and ``verify_token``.  The default
``HmacCredentialProvider`` implements a lightweight JSON Web Token
mechanism using HMAC-SHA256 signatures and base64url encoding, and
hashes passwords with PBKDF2-HMAC-SHA256 and a random salt.

Tokens carry the principal's ``id`` and ``email`` plus an expiration
timestamp (``exp``).  Clients send them as
``Authorization: Bearer <token>``.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .config import Settings
from .db import Database, get_db
from .errors import UnauthenticatedError


class Principal(BaseModel):
    """The authenticated identity attached to a request."""

    id: str
    email: str


class CredentialProvider(ABC):
    @abstractmethod
    def hash_password(self, password: str) -> str: ...

    @abstractmethod
    def verify_password(self, password: str, password_hash: str) -> bool: ...

    @abstractmethod
    def issue_token(self, principal: Principal, expires_delta: Optional[int] = None) -> str: ...

    @abstractmethod
    def verify_token(self, token: str) -> Principal: ...


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC-SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


class HmacCredentialProvider(CredentialProvider):
    """PBKDF2 password hashing and HS256 tokens signed with ``secret_key``."""

    def __init__(self, settings: Settings) -> None:
        self.secret_key = settings.secret_key
        self.token_lifetime = settings.access_token_expire_minutes * 60
        self.iterations = settings.password_hash_iterations

    def hash_password(self, password: str) -> str:
        """Hash a password using PBKDF2-HMAC with SHA-256.

        A 16-byte random salt is generated for each password.  The
        resulting string contains the salt and hash separated by a
        ``$`` (salt in hex, then hash in hex).
        """
        salt = os.urandom(16)
        dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, self.iterations)
        return f"{salt.hex()}${dk.hex()}"

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plain password against a stored salt+hash string.

        Returns ``False`` for malformed hashes instead of raising.
        """
        try:
            salt_hex, hash_hex = password_hash.split("$", 1)
            salt = bytes.fromhex(salt_hex)
            stored_hash = bytes.fromhex(hash_hex)
        except (AttributeError, ValueError):
            return False
        dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, self.iterations)
        return hmac.compare_digest(dk, stored_hash)

    def issue_token(self, principal: Principal, expires_delta: Optional[int] = None) -> str:
        """Create a signed JWT for ``principal``.

        Parameters
        ----------
        principal : Principal
            Identity to embed as the ``id`` and ``email`` claims.
        expires_delta : Optional[int]
            Lifetime of the token in seconds.  Defaults to
            ``settings.access_token_expire_minutes * 60``.

        Returns
        -------
        str
            A token of the form ``header.payload.signature``.
        """
        claims: Dict[str, object] = {"id": principal.id, "email": principal.email}
        claims["exp"] = int(time.time()) + (expires_delta or self.token_lifetime)
        header = {"alg": "HS256", "typ": "JWT"}
        header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
        payload_b64 = _b64_url_encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
        signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
        signature_b64 = _b64_url_encode(_sign(signing_input, self.secret_key))
        return f"{header_b64}.{payload_b64}.{signature_b64}"

    def verify_token(self, token: str) -> Principal:
        """Verify a token and return the principal it carries.

        Raises ``UnauthenticatedError`` with "Token has expired." when the
        signature is valid but ``exp`` has passed, and "Token is
        invalid." for anything else (wrong shape, bad signature,
        undecodable payload, missing claims).
        """
        parts = token.split(".")
        if len(parts) != 3:
            raise UnauthenticatedError("Token is invalid.")
        header_b64, payload_b64, signature_b64 = parts
        signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
        try:
            actual_sig = _b64_url_decode(signature_b64)
            claims = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        except (ValueError, UnicodeDecodeError) as e:
            raise UnauthenticatedError("Token is invalid.") from e
        # Constant-time comparison to prevent timing attacks
        if not hmac.compare_digest(_sign(signing_input, self.secret_key), actual_sig):
            raise UnauthenticatedError("Token is invalid.")
        if not isinstance(claims, dict) or not claims.get("id") or not claims.get("email"):
            raise UnauthenticatedError("Token is invalid.")
        exp = claims.get("exp")
        if not isinstance(exp, int) or exp < int(time.time()):
            raise UnauthenticatedError("Token has expired.")
        return Principal(id=str(claims["id"]), email=str(claims["email"]))


security = HTTPBearer(auto_error=False)


def get_credentials(request: Request) -> CredentialProvider:
    """FastAPI dependency returning the application's credential provider."""
    return request.app.state.credentials


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    provider: CredentialProvider = Depends(get_credentials),
    db: Database = Depends(get_db),
) -> Principal:
    """Dependency that retrieves the current authenticated principal.

    If the request does not carry a bearer token, or the token is
    invalid or expired, a 401 error is raised.  The principal's user
    must still exist; tokens of deleted users are rejected as well.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("There is no authorization present.")
    principal = provider.verify_token(credentials.credentials)
    with db.read() as conn:
        row = conn.execute("SELECT id FROM users WHERE id = ?", (principal.id,)).fetchone()
    if not row:
        raise UnauthenticatedError("User no longer exists")
    return principal
