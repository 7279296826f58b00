"""Corkboard Core Module - Entities, credentials, registry and errors."""

from .crypto import SecretHasher
from .credential import Credential
from .entities import ContentEntity, Message, Tombstone
from .thread import Thread
from .board import Board
from .registry import BoardRegistry, RegistryHooks
from .status import Status, DeletionStatus, FlagStatus
from .errors import (
    CorkboardError,
    NotFoundError,
    BoardNotFoundError,
    ThreadNotFoundError,
    MessageNotFoundError,
    AlreadyInUseError,
    AuthenticationRequiredError,
    ValidationError,
    NullArgumentError,
    InvalidOperationError,
)

__all__ = [
    "SecretHasher",
    "Credential",
    "ContentEntity",
    "Message",
    "Tombstone",
    "Thread",
    "Board",
    "BoardRegistry",
    "RegistryHooks",
    "Status",
    "DeletionStatus",
    "FlagStatus",
    "CorkboardError",
    "NotFoundError",
    "BoardNotFoundError",
    "ThreadNotFoundError",
    "MessageNotFoundError",
    "AlreadyInUseError",
    "AuthenticationRequiredError",
    "ValidationError",
    "NullArgumentError",
    "InvalidOperationError",
]
