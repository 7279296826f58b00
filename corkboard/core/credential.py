"""
Corkboard Credentials

A per-item secret that gates deletion. Holds either the raw secret or its
encoded hash; the hash is derived once, on demand.
"""

import hmac
import logging
from typing import Optional, Union

from .crypto import SecretHasher, default_hasher, encode_secret
from .errors import AuthenticationRequiredError, InvalidOperationError, ValidationError

logger = logging.getLogger(__name__)


class Credential:
    """
    Secret proof attached to a board, thread or message.

    A value that looks like an encoded hash is kept as the hash; anything
    else is treated as the plaintext secret. Copying another Credential
    takes over its state without re-hashing.
    """

    def __init__(
        self,
        secret_or_hash: Union["Credential", str, None] = None,
        hasher: Optional[SecretHasher] = None
    ):
        self._plaintext: Optional[str] = None
        self._hash: Optional[str] = None

        if isinstance(secret_or_hash, Credential):
            self._hasher = hasher or secret_or_hash._hasher
            self._plaintext = secret_or_hash._plaintext
            self._hash = secret_or_hash._hash
            return

        self._hasher = hasher or default_hasher()

        if secret_or_hash is None or secret_or_hash == "":
            return

        value = str(secret_or_hash)
        if SecretHasher.looks_like_hash(value):
            self._hash = value
        else:
            self._plaintext = value

    def __repr__(self) -> str:
        state = "hashed" if self._hash else "pending"
        return f"<Credential {state}>"

    @property
    def hasher(self) -> SecretHasher:
        return self._hasher

    @property
    def has_hash(self) -> bool:
        """Whether the hash exists, without deriving it."""
        return self._hash is not None

    @property
    def has_plaintext(self) -> bool:
        return self._plaintext is not None

    @property
    def hash(self) -> str:
        """The encoded hash, derived from the plaintext on first access."""
        if self._hash is None:
            if self._plaintext is None:
                raise InvalidOperationError("credential holds no secret to hash")
            self._hash = self._hasher.hash(self._plaintext)
            logger.debug("Derived credential hash")
        return self._hash

    @property
    def salt(self) -> Optional[str]:
        """Salt encoded in the hash, or None before the hash exists."""
        if self._hash is None:
            return None
        return self._hash.split("$")[-2]

    @property
    def rounds(self) -> Optional[int]:
        """Cost factor encoded in the hash, or None before the hash exists."""
        if self._hash is None:
            return None
        return SecretHasher.parameters(self._hash).time_cost

    def test(self, value) -> bool:
        """
        Check a candidate secret.

        Compares against the cached plaintext when present, otherwise
        verifies against the hash. Never raises and never changes state.
        """
        if value is None:
            return False
        candidate = str(value)

        if self._plaintext is not None:
            return hmac.compare_digest(
                encode_secret(self._plaintext),
                encode_secret(candidate)
            )

        if self._hash is None:
            return False

        return self._hasher.verify(candidate, self._hash)

    def authorize(self, value):
        """
        Require a matching secret.

        Raises:
            ValidationError: if no secret was supplied
            AuthenticationRequiredError: if the secret does not match
        """
        if value is None:
            raise ValidationError("a secret is required")

        secret = str(value)
        if not secret:
            raise ValidationError("a secret is required")

        if not self.test(secret):
            logger.warning("Rejected credential: incorrect password")
            raise AuthenticationRequiredError("incorrect password")

    def obfuscate(self):
        """
        Drop the cached plaintext, keeping only the hash.

        Raises:
            InvalidOperationError: if the hash has not been derived yet
        """
        if self._hash is None:
            raise InvalidOperationError(
                "cannot discard the secret before its hash has been generated"
            )
        self._plaintext = None
