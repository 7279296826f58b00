"""
Corkboard Threads

An ordered conversation of messages. Deleted messages stay in place as
tombstones.
"""

import logging
from typing import Iterator, Optional

from .entities import (
    ContentEntity,
    EntityId,
    Message,
    Post,
    Tombstone,
    explicit_id,
    merge_fields,
    post_from_properties,
    selector_id,
)
from .errors import AlreadyInUseError, MessageNotFoundError
from .status import DeletionStatus, FlagStatus

logger = logging.getLogger(__name__)


class Thread(ContentEntity):
    """Messages in chronological (insertion) order."""

    kind = "thread"
    FIELDS = ContentEntity.FIELDS + ("text", "messages")

    def __init__(
        self,
        id: Optional[EntityId] = None,
        *,
        text: Optional[str] = None,
        messages=(),
        **kwargs
    ):
        super().__init__(id, **kwargs)
        self.text = text
        self._messages: list[Post] = [post_from_properties(item) for item in messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._messages)

    @property
    def messages(self) -> tuple[Post, ...]:
        return tuple(self._messages)

    @property
    def bumped_on(self):
        """Time of the latest message, or the thread's own creation time."""
        if self._messages:
            return self._messages[-1].created_on
        return self.created_on

    def create(self, properties=None, **fields) -> Message:
        """
        Append a new message.

        Raises:
            AlreadyInUseError: if an explicit id is already taken
        """
        source = merge_fields(properties, fields)
        requested = explicit_id(source)

        if requested is not None and self._index_of(requested) is not None:
            raise AlreadyInUseError("message", requested)

        message = Message.from_properties(source)
        self._messages.append(message)
        logger.debug(f"Added message {message.id!r} to thread {self.id!r}")
        return message

    def find(self, selector) -> Post:
        """
        Look up a message by instance or id.

        Raises:
            MessageNotFoundError: if nothing matches
        """
        index = self._index_of(selector)
        if index is None:
            raise MessageNotFoundError(selector_id(selector))
        return self._messages[index]

    def delete(self, selector, secret=None) -> DeletionStatus:
        """
        Replace a message with its tombstone.

        Deleting a tombstone again succeeds without changing anything.

        Raises:
            MessageNotFoundError: if nothing matches
            AuthenticationRequiredError: if the secret does not match
        """
        index = self._index_of(selector)
        if index is None:
            raise MessageNotFoundError(selector_id(selector))

        post = self._messages[index]
        post.authorize(secret)

        if isinstance(post, Tombstone):
            return DeletionStatus(True, selector=selector)

        self._messages[index] = Tombstone.from_message(post)
        logger.info(f"Deleted message {post.id!r} in thread {self.id!r}")
        return DeletionStatus(isinstance(self._messages[index], Tombstone), selector=selector)

    def flag(self, selector) -> FlagStatus:
        """
        Flag a message.

        Raises:
            MessageNotFoundError: if nothing matches
        """
        post = self.find(selector)
        post.mark_flagged()
        logger.info(f"Flagged message {post.id!r} in thread {self.id!r}")
        return FlagStatus(post.flagged, selector=selector)

    def _index_of(self, selector) -> Optional[int]:
        if selector is None:
            return None
        for index, post in enumerate(self._messages):
            if post.matches(selector):
                return index
        return None

    def to_properties(self) -> dict:
        data = super().to_properties()
        data["text"] = self.text
        data["messages"] = [post.to_properties() for post in self._messages]
        return data
