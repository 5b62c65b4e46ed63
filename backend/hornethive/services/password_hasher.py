"""
Password Hashing Service
Handles bcrypt hashing and verification, including accounts whose password
was stored before hashing was introduced.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from passlib.context import CryptContext
from passlib.hash import plaintext

from hornethive.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HashedCredential:
    """A bcrypt hash ($2a$/$2b$/$2y$...)."""
    value: str


@dataclass(frozen=True)
class LegacyCredential:
    """A raw password from before hashing was introduced."""
    value: str


Credential = Union[HashedCredential, LegacyCredential]


@dataclass(frozen=True)
class Verification:
    valid: bool
    is_legacy: bool


class PasswordHasher:
    """
    bcrypt hashing with a fixed work factor.

    Any stored value starting with "$2" is treated as a bcrypt hash and only
    ever checked by bcrypt; everything else is a legacy plaintext row. The
    context lists passlib's "plaintext" scheme as deprecated for those rows.
    """

    BCRYPT_MARKER = "$2"

    def __init__(self, rounds: int = settings.bcrypt_rounds):
        self._context = CryptContext(
            schemes=["bcrypt", "plaintext"],
            default="bcrypt",
            deprecated=["plaintext"],
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """Generate bcrypt hash of password."""
        return self._context.hash(password)

    def classify(self, stored: Optional[str]) -> Credential:
        """Tag a stored credential as hashed or legacy."""
        stored = stored or ""
        if stored.startswith(self.BCRYPT_MARKER):
            return HashedCredential(stored)
        return LegacyCredential(stored)

    def verify(self, password: str, stored: Union[Credential, str, None]) -> Verification:
        """Check a plain password against a stored credential."""
        credential = stored if isinstance(stored, (HashedCredential, LegacyCredential)) else self.classify(stored)

        if isinstance(credential, LegacyCredential):
            valid = plaintext.verify(password, credential.value)
            return Verification(valid=valid, is_legacy=True)

        try:
            valid = self._context.handler("bcrypt").verify(password, credential.value)
        except ValueError:
            # Carries the bcrypt marker but is not a well-formed hash
            logger.warning("Stored credential has a bcrypt prefix but is malformed")
            valid = False
        return Verification(valid=valid, is_legacy=False)

    def is_hashed(self, stored: Optional[str]) -> bool:
        return isinstance(self.classify(stored), HashedCredential)


# Shared instance configured from settings
password_hasher = PasswordHasher()
