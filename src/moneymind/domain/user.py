"""User domain service: signup, credential check, and profile."""

import logging
import os
import re
from typing import Any, Optional

import bcrypt

from moneymind.database.base import Database
from moneymind.domain.entities import Identity, User as UserEntity
from moneymind.domain.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_user_email,
    invalid_field,
    missing_field,
    user_not_found,
)

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12
MAX_PASSWORD_BYTES = 72
INVALID_CREDENTIALS = "Invalid email or password"

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(value: Any) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(missing_field("email"), field="email")
    email = str(value).strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError(invalid_field("email", "is not a valid email address"), field="email")
    return email


def validate_name(value: Any) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(missing_field("name"), field="name")
    return str(value).strip()


def validate_password(value: Any) -> bytes:
    if value is None or value == "":
        raise ValidationError(missing_field("password"), field="password")
    encoded = str(value).encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            invalid_field("password", f"must be at most {MAX_PASSWORD_BYTES} bytes"), field="password"
        )
    return encoded


def bcrypt_rounds() -> int:
    """Cost factor from MONEYMIND_BCRYPT_ROUNDS, defaulting to 12."""
    raw = os.environ.get("MONEYMIND_BCRYPT_ROUNDS")
    if raw is None:
        return DEFAULT_BCRYPT_ROUNDS
    try:
        # bcrypt accepts 4..31
        return min(max(int(raw), 4), 31)
    except ValueError:
        return DEFAULT_BCRYPT_ROUNDS


class UserService:
    """Service for user accounts.

    Token issuance is not handled here: callers turn a successful
    ``authenticate`` into whatever credential their transport uses and pass
    the resulting ``Identity`` to every other service call.
    """

    def __init__(self, db: Database, rounds: Optional[int] = None):
        """Initialize user service.

        Args:
            db: Database instance
            rounds: bcrypt cost factor (defaults to MONEYMIND_BCRYPT_ROUNDS or 12)
        """
        self.db = db
        self.rounds = rounds if rounds is not None else bcrypt_rounds()

    def register(self, name: Any, email: Any, password: Any) -> UserEntity:
        """Create a user account.

        Returns:
            The new user

        Raises:
            ValidationError: If a field is missing or malformed
            ConflictError: If the email is already registered
        """
        user_name = validate_name(name)
        user_email = validate_email(email)
        secret = validate_password(password)

        if self.db.get_user_by_email(user_email) is not None:
            raise ConflictError(duplicate_user_email(user_email))

        password_hash = bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")
        user_id = self.db.create_user(name=user_name, email=user_email, password_hash=password_hash)
        logger.info("Registered user %s", user_id)
        return self.db.get_user(user_id)

    def authenticate(self, email: Any, password: Any) -> Identity:
        """Check credentials and return the caller's identity.

        Unknown email and wrong password produce the same error.

        Raises:
            AuthenticationError: If the credentials do not match
        """
        if not email or not password:
            raise AuthenticationError(INVALID_CREDENTIALS)
        user_email = str(email).strip().lower()
        stored = self.db.get_password_hash(user_email)
        if stored is None:
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not bcrypt.checkpw(str(password).encode("utf-8"), stored.encode("utf-8")):
            logger.debug("Password mismatch for %s", user_email)
            raise AuthenticationError(INVALID_CREDENTIALS)

        user = self.db.get_user_by_email(user_email)
        return Identity(user_id=user.id, email=user.email)

    def get_profile(self, identity: Identity) -> UserEntity:
        """Get the caller's profile.

        Raises:
            NotFoundError: If the identity no longer maps to a user
        """
        user = self.db.get_user(identity.user_id)
        if user is None:
            raise NotFoundError(user_not_found(identity.user_id))
        return user

    def update_profile(
        self,
        identity: Identity,
        name: Any = None,
        email: Any = None,
        phone: Optional[str] = None,
        bio: Optional[str] = None,
        profile_photo: Optional[str] = None,
    ) -> UserEntity:
        """Update the caller's profile fields that are given.

        Raises:
            ValidationError: If name or email is malformed
            ConflictError: If the new email belongs to another user
            NotFoundError: If the identity no longer maps to a user
        """
        new_name = validate_name(name) if name is not None else None
        new_email = validate_email(email) if email is not None else None
        if new_email is not None:
            existing = self.db.get_user_by_email(new_email)
            if existing is not None and existing.id != identity.user_id:
                raise ConflictError(duplicate_user_email(new_email))

        user = self.db.update_user(
            identity.user_id,
            name=new_name,
            email=new_email,
            phone=phone,
            bio=bio,
            profile_photo=profile_photo,
        )
        if user is None:
            raise NotFoundError(user_not_found(identity.user_id))
        logger.info("User %s updated profile", identity.user_id)
        return user
