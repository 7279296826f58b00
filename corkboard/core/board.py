"""
Corkboard Boards

A board holds threads. Threads are fetched either by id or through the
recency ranking (most recently bumped first).
"""

import logging
from typing import Iterator, Optional

from .entities import (
    ContentEntity,
    EntityId,
    explicit_id,
    merge_fields,
    selector_id,
)
from .errors import AlreadyInUseError, ThreadNotFoundError, ValidationError
from .status import DeletionStatus, FlagStatus
from .thread import Thread

logger = logging.getLogger(__name__)


# Board configuration
DEFAULT_PAGE_SIZE = 10


class Board(ContentEntity):
    """A set of threads."""

    kind = "board"
    FIELDS = ContentEntity.FIELDS + ("text", "threads")

    def __init__(
        self,
        id: Optional[EntityId] = None,
        *,
        text: Optional[str] = None,
        threads=(),
        **kwargs
    ):
        super().__init__(id, **kwargs)
        self.text = text
        self._threads: list[Thread] = [Thread.from_properties(item) for item in threads]

    def __len__(self) -> int:
        return len(self._threads)

    def __iter__(self) -> Iterator[Thread]:
        return iter(self._threads)

    def __contains__(self, selector) -> bool:
        return self._lookup(selector) is not None

    @property
    def threads(self) -> tuple[Thread, ...]:
        return tuple(self._threads)

    def create(self, properties=None, **fields) -> Thread:
        """
        Start a new thread.

        Threads are never replaced: an explicit id that is already taken
        is an error.

        Raises:
            AlreadyInUseError: if an explicit id is already taken
        """
        source = merge_fields(properties, fields)
        requested = explicit_id(source)

        if requested is not None and self._lookup(requested) is not None:
            raise AlreadyInUseError("thread", requested)

        thread = Thread.from_properties(source)
        self._threads.append(thread)
        logger.info(f"Created thread {thread.id!r} on board {self.id!r}")
        return thread

    def find(self, selector=None, size: int = DEFAULT_PAGE_SIZE):
        """
        Look up one thread, or rank them.

        With a selector, returns the matching thread. Without one, returns
        the ``size`` most recently bumped threads (see ``recent``).

        Raises:
            ThreadNotFoundError: if a selector matches nothing
            ValidationError: if size is not an integer
        """
        if selector is None:
            return self.recent(size)

        thread = self._lookup(selector)
        if thread is None:
            raise ThreadNotFoundError(selector_id(selector))
        return thread

    def recent(self, size: int = DEFAULT_PAGE_SIZE) -> list[Thread]:
        """
        Threads ranked by last activity.

        A positive size gives the newest first, a negative size the oldest
        first; ``abs(size)`` threads at most.
        """
        if isinstance(size, bool) or not isinstance(size, int):
            raise ValidationError(f"size must be an integer, got {size!r}")

        ranked = sorted(self._threads, key=lambda thread: thread.bumped_on, reverse=size >= 0)
        return ranked[:abs(size)]

    def delete(self, selector, secret=None) -> DeletionStatus:
        """
        Remove a thread.

        Raises:
            ThreadNotFoundError: if nothing matches
            AuthenticationRequiredError: if the secret does not match
        """
        thread = self.find(selector)
        thread.authorize(secret)

        self._threads = [item for item in self._threads if item is not thread]
        logger.info(f"Deleted thread {thread.id!r} from board {self.id!r}")
        return DeletionStatus(
            all(item is not thread for item in self._threads),
            selector=selector
        )

    def flag(self, selector) -> FlagStatus:
        """
        Flag a thread.

        Raises:
            ThreadNotFoundError: if nothing matches
        """
        thread = self.find(selector)
        thread.mark_flagged()
        logger.info(f"Flagged thread {thread.id!r} on board {self.id!r}")
        return FlagStatus(thread.flagged, selector=selector)

    def _lookup(self, selector) -> Optional[Thread]:
        if selector is None:
            return None
        for thread in self._threads:
            if thread.matches(selector):
                return thread
        return None

    def to_properties(self) -> dict:
        data = super().to_properties()
        data["text"] = self.text
        data["threads"] = [thread.to_properties() for thread in self._threads]
        return data
