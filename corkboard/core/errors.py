"""
Corkboard Errors

The fixed error taxonomy raised by the core. Transport layers map these to
protocol-level failures through ``code``; anything else is unexpected and
propagates untouched.
"""

from typing import Optional, Union

EntityId = Union[int, str]


class CorkboardError(Exception):
    """Base class for every error the core raises on purpose."""

    code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFoundError(CorkboardError):
    """An exact lookup found nothing."""

    code = 404
    kind = "item"

    def __init__(self, id: Optional[EntityId] = None, kind: Optional[str] = None):
        if kind:
            self.kind = kind
        self.id = id
        super().__init__(f"{self.kind} not found: {id!r}")


class BoardNotFoundError(NotFoundError):
    kind = "board"


class ThreadNotFoundError(NotFoundError):
    kind = "thread"


class MessageNotFoundError(NotFoundError):
    kind = "message"


class AlreadyInUseError(CorkboardError):
    """An explicit id collided with an existing item at creation time."""

    code = 409

    def __init__(self, kind: str, id: Optional[EntityId] = None):
        self.kind = kind
        self.id = id
        super().__init__(f"{kind} id already in use: {id!r}")


class AuthenticationRequiredError(CorkboardError):
    """The supplied secret did not match the item's credential."""

    code = 401

    def __init__(self, reason: str = "incorrect password"):
        self.reason = reason
        super().__init__(f"authentication required: {reason}")


class ValidationError(CorkboardError, ValueError):
    """Malformed id, timestamp, size or secret."""

    code = 400


class NullArgumentError(ValidationError):
    """Required construction input was missing or of an unusable type."""

    def __init__(self, argument: str = "properties"):
        self.argument = argument
        super().__init__(f"missing or unusable argument: {argument}")


class InvalidOperationError(CorkboardError):
    """The operation is not allowed in the object's current state."""

    code = 409
