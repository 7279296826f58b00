"""
Corkboard Content Entities

Identity, timestamps, flagging and credentials shared by boards, threads and
messages, plus the message types themselves.
"""

import math
import re
from collections.abc import Mapping
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Union

from .credential import Credential
from .errors import NullArgumentError, ValidationError


EntityId = Union[int, str]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)
INTEGER_ID = re.compile(r"[+-]?[0-9]+")


def timestamp_ms(moment: datetime) -> int:
    """Milliseconds since epoch for an aware datetime."""
    return (moment - EPOCH) // ONE_MILLISECOND


def to_timestamp(value) -> datetime:
    """
    Coerce a timestamp input to an aware UTC datetime.

    Accepts a non-negative number of milliseconds since epoch, an ISO
    datetime or date string, or a datetime/date object.

    Raises:
        ValidationError: for anything else
    """
    if isinstance(value, bool):
        raise ValidationError(f"invalid timestamp: {value!r}")

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value < 0:
            raise ValidationError(f"invalid timestamp: {value!r}")
        try:
            return EPOCH + timedelta(milliseconds=value)
        except OverflowError:
            raise ValidationError(f"timestamp out of range: {value!r}") from None

    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"invalid timestamp: {value!r}") from None
        return to_timestamp(parsed)

    raise ValidationError(f"invalid timestamp: {value!r}")


def validate_id(value) -> EntityId:
    """Ids are integers or non-empty strings."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValidationError(f"invalid id: {value!r}")
    if isinstance(value, str) and not value.strip():
        raise ValidationError("id cannot be empty")
    return value


def ids_match(left, right) -> bool:
    """
    Compare two ids, coercing an integer string against an integer.

    ``"5"`` matches ``5``; ``"5.0"`` and ``"1e3"`` match nothing numeric, and
    two strings only match exactly.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return False
    if left == right:
        return True

    if isinstance(left, str) and isinstance(right, int):
        left, right = right, left
    if isinstance(left, int) and isinstance(right, str):
        text = right.strip()
        if INTEGER_ID.fullmatch(text) is None:
            return False
        try:
            return int(text) == left
        except ValueError:
            # beyond the interpreter's digit limit
            return False

    return False


class ContentEntity:
    """
    Base for every item in the board hierarchy.

    Two entities are the same item when they are the same instance or share
    an id.
    """

    kind = "item"
    FIELDS: tuple = ("id", "created_on", "flagged", "credential")
    ALIASES = {"_id": "id", "_key": "credential"}

    def __init__(
        self,
        id: Optional[EntityId] = None,
        *,
        created_on=None,
        flagged: bool = False,
        credential=None
    ):
        self._created_on: Optional[datetime] = None
        self._credential: Optional[Credential] = None
        self._flagged = bool(flagged)

        if created_on is not None:
            self.created_on = created_on

        # The default id is the creation time, so it materializes here
        self.id = validate_id(id) if id is not None else timestamp_ms(self.created_on)
        self.credential = credential

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id!r}>"

    @classmethod
    def from_properties(cls, properties):
        """
        Build an entity from a property mapping or a bare id.

        Mappings may only use known field names (``_id`` and ``_key`` are
        accepted as aliases). An instance of this class is returned as is.

        Raises:
            NullArgumentError: for None or unusable input types
            ValidationError: for unknown keys or invalid values
        """
        if isinstance(properties, cls):
            return properties

        if isinstance(properties, ContentEntity):
            raise ValidationError(
                f"expected {cls.__name__}, got {type(properties).__name__}"
            )

        if isinstance(properties, Mapping):
            fields = {}
            for key, value in properties.items():
                name = cls.ALIASES.get(key, key)
                if name not in cls.FIELDS:
                    raise ValidationError(f"unknown {cls.kind} property: {key!r}")
                fields[name] = value
            return cls(**fields)

        if isinstance(properties, (int, str)) and not isinstance(properties, bool):
            return cls(id=properties)

        raise NullArgumentError(cls.kind)

    @property
    def created_on(self) -> datetime:
        """Creation time; fixed to "now" the first time it is read if unset."""
        return self.materialize_created_on()

    @created_on.setter
    def created_on(self, value):
        self._created_on = None if value is None else to_timestamp(value)

    @property
    def has_created_on(self) -> bool:
        return self._created_on is not None

    def materialize_created_on(self) -> datetime:
        if self._created_on is None:
            self._created_on = datetime.now(timezone.utc)
        return self._created_on

    @property
    def flagged(self) -> bool:
        return self._flagged

    def mark_flagged(self) -> bool:
        """Mark the item as flagged. There is no way back."""
        self._flagged = True
        return self._flagged

    @property
    def credential(self) -> Optional[Credential]:
        return self._credential

    @credential.setter
    def credential(self, value):
        if value is None or value == "":
            self._credential = None
        elif isinstance(value, Credential):
            self._credential = value
        else:
            self._credential = Credential(value)

    def authorize(self, secret):
        """Check a secret against the credential, if the item has one."""
        if self._credential is not None:
            self._credential.authorize(secret)

    def matches(self, selector) -> bool:
        """Whether the selector (an entity or an id) names this item."""
        if selector is self:
            return True
        if isinstance(selector, ContentEntity):
            return ids_match(self.id, selector.id)
        return ids_match(self.id, selector)

    same_as = matches

    def to_properties(self) -> dict[str, Any]:
        """
        Plain snapshot for persistence hooks.

        The credential is exported as its hash; the plaintext never leaves.
        """
        data = {
            "id": self.id,
            "created_on": self.created_on.isoformat(),
            "flagged": self.flagged,
        }
        if self._credential is not None and (
            self._credential.has_hash or self._credential.has_plaintext
        ):
            data["credential"] = self._credential.hash
        return data


class Message(ContentEntity):
    """A live message."""

    kind = "message"
    FIELDS = ContentEntity.FIELDS + ("text",)
    deleted = False

    def __init__(self, id: Optional[EntityId] = None, *, text: Optional[str] = None, **kwargs):
        super().__init__(id, **kwargs)
        self.text = text

    @property
    def display_text(self) -> str:
        return self.text or ""

    def to_properties(self) -> dict[str, Any]:
        data = super().to_properties()
        data["text"] = self.text
        return data


class Tombstone(ContentEntity):
    """
    What remains of a deleted message.

    Keeps the id, timestamp, flag and credential of the original; the text
    is gone for good.
    """

    kind = "message"
    deleted = True
    PLACEHOLDER = "[deleted]"

    @classmethod
    def from_message(cls, message: Message) -> "Tombstone":
        return cls(
            message.id,
            created_on=message.created_on,
            flagged=message.flagged,
            credential=message.credential
        )

    @property
    def display_text(self) -> str:
        return self.PLACEHOLDER

    def to_properties(self) -> dict[str, Any]:
        data = super().to_properties()
        data["deleted"] = True
        return data


Post = Union[Message, Tombstone]


def post_from_properties(properties) -> Post:
    """Rebuild a message or tombstone from a snapshot or instance."""
    if isinstance(properties, (Message, Tombstone)):
        return properties

    if isinstance(properties, Mapping) and properties.get("deleted"):
        fields = {key: value for key, value in properties.items() if key not in ("deleted", "text")}
        return Tombstone.from_properties(fields)

    if isinstance(properties, Mapping) and "deleted" in properties:
        fields = {key: value for key, value in properties.items() if key != "deleted"}
        return Message.from_properties(fields)

    return Message.from_properties(properties)


def explicit_id(properties) -> Optional[EntityId]:
    """The id a create call asks for, or None when it will be generated."""
    if properties is None:
        return None
    if isinstance(properties, ContentEntity):
        return properties.id
    if isinstance(properties, Mapping):
        return properties.get("id", properties.get("_id"))
    return properties


def selector_id(selector):
    """The id to report in a not-found error."""
    if isinstance(selector, ContentEntity):
        return selector.id
    return selector


def merge_fields(properties, fields: dict):
    """Accept either a properties argument or keyword fields, not both."""
    if properties is not None and fields:
        raise ValidationError("pass either properties or keyword fields, not both")
    return fields if properties is None else properties
