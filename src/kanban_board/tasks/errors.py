"""
Board error hierarchy.

ValidationError is recoverable user input (e.g. an empty task). ContractViolation
signals a caller bug (unknown ids, out-of-range indices) and is never swallowed
by the core. PersistenceError stays inside the storage layer.
"""

from __future__ import annotations


class BoardError(Exception):
    """Base for all board-specific errors."""


class ValidationError(BoardError):
    """Rejected user input; the board is left unchanged."""


class ContractViolation(BoardError):
    """Invalid ids or indices passed by the caller."""


class ColumnNotFoundError(ContractViolation):
    def __init__(self, column_id: str) -> None:
        super().__init__(f"Column '{column_id}' not found.")
        self.column_id = column_id


class TaskNotFoundError(ContractViolation):
    def __init__(self, task_id: str, column_id: str | None = None) -> None:
        where = f" in column '{column_id}'" if column_id else ""
        super().__init__(f"Task '{task_id}' not found{where}.")
        self.task_id = task_id
        self.column_id = column_id


class IndexOutOfRangeError(ContractViolation):
    def __init__(self, column_id: str, index: int, upper: int) -> None:
        super().__init__(
            f"Index {index} is out of range for column '{column_id}' (allowed 0..{upper})."
        )
        self.column_id = column_id
        self.index = index
        self.upper = upper


class InvariantViolation(ContractViolation):
    """A board whose tasks and columns disagree."""


class PersistenceError(BoardError):
    """Snapshot could not be written or read."""


class SchemaError(PersistenceError):
    """Persisted blob does not match a known schema version."""
