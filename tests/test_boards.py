"""
Tests for Corkboard Boards
"""

import pytest

from corkboard.core.board import Board
from corkboard.core.errors import (
    AlreadyInUseError,
    AuthenticationRequiredError,
    ThreadNotFoundError,
    ValidationError,
)
from corkboard.core.status import DeletionStatus, FlagStatus
from corkboard.core.thread import Thread


class TestThreadCreation:
    """Tests for starting threads."""

    def setup_method(self):
        """Set up test fixtures."""
        self.board = Board("general", text="General chat")

    def test_create_thread(self):
        thread = self.board.create(id=1, text="Hello")

        assert isinstance(thread, Thread)
        assert thread in list(self.board)
        assert len(self.board) == 1

    def test_create_from_mapping(self):
        thread = self.board.create({"id": "t1", "text": "Hello"})

        assert self.board.find("t1") is thread

    def test_create_duplicate_never_overrides(self):
        """Boards refuse a second thread with the same id."""
        original = self.board.create(id=1)

        with pytest.raises(AlreadyInUseError):
            self.board.create(id=1)

        assert self.board.find(1) is original
        assert len(self.board) == 1

    def test_create_generated_id(self):
        thread = self.board.create(created_on=123)

        assert thread.id == 123


class TestThreadLookup:
    """Tests for exact thread lookup."""

    def setup_method(self):
        """Set up test fixtures."""
        self.board = Board("general")
        self.thread = self.board.create(id=7)

    def test_find_by_id(self):
        assert self.board.find(7) is self.thread
        assert self.board.find("7") is self.thread

    def test_find_by_instance(self):
        assert self.board.find(self.thread) is self.thread

    def test_find_missing(self):
        with pytest.raises(ThreadNotFoundError) as exc_info:
            self.board.find("missing")

        assert exc_info.value.id == "missing"

    def test_contains(self):
        assert 7 in self.board
        assert 8 not in self.board


class TestRanking:
    """Tests for the recency query."""

    def setup_method(self):
        """Set up test fixtures."""
        self.board = Board("general")
        self.board.create(id="a", created_on=10)
        self.board.create(id="b", created_on=30)
        self.board.create(id="c", created_on=20)

    def ids(self, threads):
        return [thread.id for thread in threads]

    def test_newest_first(self):
        assert self.ids(self.board.find(None, 2)) == ["b", "c"]

    def test_oldest_first(self):
        assert self.ids(self.board.find(None, -2)) == ["a", "c"]

    def test_default_size(self):
        assert self.ids(self.board.find()) == ["b", "c", "a"]

    def test_zero_size(self):
        assert self.board.find(size=0) == []

    def test_size_larger_than_board(self):
        assert len(self.board.recent(50)) == 3

    @pytest.mark.parametrize("size", ["2", 1.5, True, None])
    def test_invalid_size(self, size):
        with pytest.raises(ValidationError):
            self.board.recent(size)

    def test_posting_bumps_thread(self):
        """A new message moves its thread to the top."""
        self.board.find("a").create(id=1, created_on=40)

        assert self.ids(self.board.find(None, 1)) == ["a"]

    def test_empty_board(self):
        assert Board("empty").find() == []


class TestThreadDeletion:
    """Tests for removing threads."""

    def setup_method(self):
        """Set up test fixtures."""
        self.board = Board("general")
        self.thread = self.board.create(id=1, credential="secret")
        self.open_thread = self.board.create(id=2)

    def test_delete_with_secret(self):
        status = self.board.delete(1, "secret")

        assert isinstance(status, DeletionStatus)
        assert status
        with pytest.raises(ThreadNotFoundError):
            self.board.find(1)

    def test_delete_wrong_secret(self):
        """Failed authorization leaves the thread in place."""
        with pytest.raises(AuthenticationRequiredError):
            self.board.delete(1, "wrong")

        assert self.board.find(1) is self.thread

    def test_delete_without_credential(self):
        assert self.board.delete(2)
        assert 2 not in self.board

    def test_delete_missing(self):
        with pytest.raises(ThreadNotFoundError):
            self.board.delete(3, "secret")


class TestThreadFlagging:
    """Tests for flagging threads."""

    def test_flag(self):
        board = Board("general")
        thread = board.create(id=1)

        status = board.flag(1)

        assert isinstance(status, FlagStatus)
        assert status
        assert thread.flagged

    def test_flag_missing(self):
        with pytest.raises(ThreadNotFoundError):
            Board("general").flag(1)


class TestBoardSnapshot:
    """Tests for board snapshots."""

    def test_round_trip(self):
        board = Board("general", text="General chat", credential="board secret")
        thread = board.create(id=1, text="Hello", created_on=10)
        thread.create(id=1, text="Hi there", credential="msg secret")

        rebuilt = Board.from_properties(board.to_properties())

        assert rebuilt.id == "general"
        assert rebuilt.credential.test("board secret")
        message = rebuilt.find(1).find(1)
        assert message.text == "Hi there"
        assert message.credential.test("msg secret")
        assert not message.credential.has_plaintext
