"""
Corkboard Cryptography Module

Salted adaptive hashing (Argon2id) for per-item secrets.
"""

import re
import logging
from typing import Optional

from argon2 import PasswordHasher, Type, Parameters, extract_parameters
from argon2.exceptions import InvalidHashError, VerificationError

from ..config import SecurityConfig

logger = logging.getLogger(__name__)


# $argon2id$v=19$m=32768,t=11,p=1$<salt>$<payload>
HASH_PATTERN = re.compile(
    r"^\$argon2(?:id|i|d)\$v=\d+\$m=\d+,t=\d+,p=\d+\$[A-Za-z0-9+/]+\$[A-Za-z0-9+/]+$"
)


def encode_secret(secret: str) -> bytes:
    """
    UTF-8 bytes of a secret.

    Lone surrogates (as decoded from JSON) are kept rather than rejected.
    """
    return secret.encode("utf-8", "surrogatepass")


class SecretHasher:
    """
    Hashes and verifies item secrets with Argon2id.

    ``time_cost`` is the adaptive cost factor; raising it slows down both
    hashing and brute force.
    """

    SALT_LENGTH = 16
    HASH_LENGTH = 32

    def __init__(
        self,
        time_cost: int = 11,
        memory_cost_kb: int = 32768,
        parallelism: int = 1
    ):
        """
        Initialize the hasher.

        Args:
            time_cost: Number of iterations (the cost factor)
            memory_cost_kb: Memory usage in KB
            parallelism: Number of parallel lanes
        """
        if time_cost < 1:
            raise ValueError("time_cost must be at least 1")

        self.time_cost = time_cost
        self.memory_cost_kb = memory_cost_kb
        self.parallelism = parallelism

        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost_kb,
            parallelism=parallelism,
            hash_len=self.HASH_LENGTH,
            salt_len=self.SALT_LENGTH,
            type=Type.ID
        )

        logger.debug(
            f"SecretHasher initialized: time={time_cost}, "
            f"memory={memory_cost_kb}KB, parallelism={parallelism}"
        )

    @classmethod
    def from_config(cls, config: SecurityConfig) -> "SecretHasher":
        """Build a hasher from the security section of the configuration."""
        return cls(
            time_cost=config.hash_time_cost,
            memory_cost_kb=config.hash_memory_kb,
            parallelism=config.hash_parallelism
        )

    @staticmethod
    def looks_like_hash(value) -> bool:
        """Whether a value has the structure of an encoded hash."""
        return isinstance(value, str) and HASH_PATTERN.match(value) is not None

    def hash(self, secret: str) -> str:
        """
        Hash a secret.

        Returns the encoded hash string including parameters and salt.
        """
        return self._hasher.hash(encode_secret(secret))

    def verify(self, secret: str, encoded: str) -> bool:
        """
        Verify a secret against an encoded hash.

        Mismatches and unreadable hashes both yield False.
        """
        try:
            return self._hasher.verify(encoded, encode_secret(secret))
        except (VerificationError, InvalidHashError, UnicodeEncodeError):
            return False

    @staticmethod
    def parameters(encoded: str) -> Parameters:
        """Decode the parameters stored in an encoded hash."""
        return extract_parameters(encoded)


_default_hasher: Optional[SecretHasher] = None


def default_hasher() -> SecretHasher:
    """
    Process-wide hasher used when a credential is built without one.

    Built lazily from the default security settings, including the
    CORKBOARD_SECURITY_STRENGTH override.
    """
    global _default_hasher
    if _default_hasher is None:
        security = SecurityConfig()
        security.apply_env_overrides()
        _default_hasher = SecretHasher.from_config(security)
    return _default_hasher


def set_default_hasher(hasher: Optional[SecretHasher]):
    """Replace (or with None, reset) the process-wide hasher."""
    global _default_hasher
    _default_hasher = hasher
