"""
Corkboard Status Values

Boolean outcomes of mutations, typed by the operation that produced them so
view layers can tell a deletion result from a flagging result.
"""

from typing import Any


class Status:
    """
    Outcome of an operation.

    The result is True only when at least one state was given and every
    state is truthy. Keyword arguments record the inputs that produced the
    outcome (``inputs``) and never affect the result.
    """

    labels = ("no", "success")

    def __init__(self, *states: Any, **inputs: Any):
        self.args = states
        self.inputs = inputs
        self.result = bool(states) and all(bool(state) for state in states)

    def __bool__(self) -> bool:
        return self.result

    def __eq__(self, other) -> bool:
        if isinstance(other, bool):
            return self.result is other
        if isinstance(other, Status):
            return type(self) is type(other) and self.result == other.result
        return NotImplemented

    def __hash__(self) -> int:
        # equal to the bare bool, so it must hash like one
        return hash(self.result)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.result})"

    @property
    def label(self) -> str:
        """Human-readable form for responses."""
        return self.labels[int(self.result)]


class DeletionStatus(Status):
    """Result of a delete."""


class FlagStatus(Status):
    """Result of a flag (report)."""

    labels = ("not reported", "reported")
