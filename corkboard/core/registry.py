"""
Corkboard Board Registry

The top-level set of boards. Persistence is delegated to optional async
hooks; without them the registry is purely in memory.
"""

import asyncio
import logging
from collections.abc import Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterator, Optional

from .board import Board
from .entities import explicit_id, selector_id, validate_id
from .errors import AlreadyInUseError, BoardNotFoundError, ValidationError
from .status import DeletionStatus

logger = logging.getLogger(__name__)

Hook = Callable[..., Awaitable[Any]]


@dataclass
class RegistryHooks:
    """
    Optional persistence callbacks.

    loading(ids=None): returns boards (instances or property mappings)
    added(board): may return a replacement for the created board
    before_delete(registry, board), after_delete(board, status)
    unloading(registry): persists state before the registry is cleared

    Hooks run while the registry holds its lock. Calls they make back into
    the same registry from the same task go straight through; calls from a
    task they spawn and then await would wait for the lock forever.
    """
    loading: Optional[Hook] = None
    added: Optional[Hook] = None
    before_delete: Optional[Hook] = None
    after_delete: Optional[Hook] = None
    unloading: Optional[Hook] = None


def normalize_ids(ids) -> set:
    """Turn a single id or a collection of ids into a set."""
    if isinstance(ids, (set, frozenset, list, tuple)):
        return {validate_id(item) for item in ids}
    return {validate_id(ids)}


def iter_loaded(boards) -> list:
    """Boards returned by a loading hook; anything but a collection is ignored."""
    if isinstance(boards, (set, frozenset, list, tuple)):
        return list(boards)
    return []


class BoardRegistry:
    """
    Owns every board.

    Check-then-insert sequences run under a lock so concurrent creates with
    the same id cannot both succeed. The lock is reentrant for the task
    holding it, so hooks may use the registry they are handed.
    """

    def __init__(self, hooks: Optional[RegistryHooks] = None):
        self.hooks = hooks or RegistryHooks()
        self._boards: list[Board] = []
        self._lock = asyncio.Lock()
        self._owner: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        return len(self._boards)

    def __iter__(self) -> Iterator[Board]:
        return iter(self._boards)

    def __contains__(self, selector) -> bool:
        return self._lookup(selector) is not None

    @property
    def boards(self) -> tuple[Board, ...]:
        return tuple(self._boards)

    async def create(self, properties=None, override: bool = False) -> Board:
        """
        Add a board.

        Args:
            properties: Board instance, property mapping or bare id
            override: Replace a board that already uses the id

        Raises:
            AlreadyInUseError: if the id is taken and override is False
        """
        async with self._exclusive():
            return await self._create(properties, override)

    async def find(self, selector, create_if_missing: bool = False) -> Board:
        """
        Look up a board by instance or id.

        Raises:
            BoardNotFoundError: if nothing matches and create_if_missing is False
        """
        board = self._lookup(selector)
        if board is not None:
            return board

        if create_if_missing:
            return await self.create(selector)

        raise BoardNotFoundError(selector_id(selector))

    async def delete(self, selector) -> DeletionStatus:
        """
        Remove a board, running the delete hooks around it.

        Raises:
            BoardNotFoundError: if nothing matches
        """
        async with self._exclusive():
            board = self._lookup(selector)
            if board is None:
                raise BoardNotFoundError(selector_id(selector))
            return await self._delete(board)

    async def load(self, ids=None):
        """
        Fill the registry from the loading hook.

        With ids, the hook is asked for those boards and each one replaces
        any loaded board with the same id. Without ids, loading happens only
        once: an already populated registry is left alone.

        Returns:
            Whatever the loading hook returned, or None without a hook
        """
        async with self._exclusive():
            if ids is None:
                if self._boards:
                    return None
                if self.hooks.loading is None:
                    return None

                boards = await self.hooks.loading()
                for item in iter_loaded(boards):
                    self._boards.append(Board.from_properties(item))
                logger.info(f"Loaded {len(self._boards)} boards")
                return boards

            wanted = normalize_ids(ids)
            if self.hooks.loading is None:
                return None

            boards = await self.hooks.loading(wanted)
            loaded = iter_loaded(boards)
            for item in loaded:
                await self._create(item, override=True)
            logger.info(f"Reloaded {len(loaded)} of {len(wanted)} requested boards")
            return boards

    async def unload(self):
        """
        Hand the registry to the unloading hook, then drop every board.

        Without an unloading hook nothing happens.

        Returns:
            Whatever the unloading hook returned
        """
        if self.hooks.unloading is None:
            return None

        result = await self.hooks.unloading(self)
        count = len(self._boards)
        self._boards.clear()
        logger.info(f"Unloaded {count} boards")
        return result

    def snapshot(self) -> list[dict]:
        """Property snapshots of every board, for unloading hooks."""
        return [board.to_properties() for board in self._boards]

    async def _create(self, properties, override: bool) -> Board:
        if properties is not None and not isinstance(properties, (Board, Mapping, int, str)):
            raise ValidationError(f"cannot create a board from {type(properties).__name__}")

        requested = explicit_id(properties)
        if requested is not None:
            existing = self._lookup(requested)
            if existing is not None:
                if not override:
                    raise AlreadyInUseError("board", requested)
                await self._delete(existing)

        board = Board.from_properties({} if properties is None else properties)
        self._boards.append(board)
        logger.info(f"Created board {board.id!r}")

        if self.hooks.added is not None and not override:
            replacement = await self.hooks.added(board)
            if replacement is not None:
                return replacement
        return board

    async def _delete(self, board: Board) -> DeletionStatus:
        if self.hooks.before_delete is not None:
            await self.hooks.before_delete(self, board)

        self._boards = [item for item in self._boards if item is not board]
        status = DeletionStatus(
            all(item is not board for item in self._boards),
            selector=board.id
        )
        logger.info(f"Deleted board {board.id!r}")

        if self.hooks.after_delete is not None:
            await self.hooks.after_delete(board, status)
        return status

    @asynccontextmanager
    async def _exclusive(self):
        task = asyncio.current_task()
        if task is not None and self._owner is task:
            yield
            return

        async with self._lock:
            self._owner = task
            try:
                yield
            finally:
                self._owner = None

    def _lookup(self, selector) -> Optional[Board]:
        if selector is None:
            return None
        for board in self._boards:
            if board.matches(selector):
                return board
        return None
