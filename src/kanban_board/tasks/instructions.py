"""
Instructions emitted by the presentation layer.

One instruction per completed user gesture: a drop, an inline-entry commit
or an explicit delete.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class MoveInstruction:
    source_column_id: str
    source_index: int
    dest_column_id: str
    dest_index: int

    @classmethod
    def from_drop(
        cls,
        source_column_id: str,
        source_index: int,
        dest_column_id: Optional[str],
        dest_index: Optional[int],
    ) -> Optional[MoveInstruction]:
        """Translate a finished drag; a drop outside any column yields nothing."""
        if dest_column_id is None or dest_index is None:
            return None
        return cls(source_column_id, source_index, dest_column_id, dest_index)


@dataclass(frozen=True)
class CreateInstruction:
    column_id: str
    content: str

    @classmethod
    def from_commit(cls, column_id: str, text: Optional[str]) -> Optional[CreateInstruction]:
        """Inline entry committed (blur or Enter); blank text cancels the entry."""
        if text is None or not text.strip():
            return None
        return cls(column_id, text)


@dataclass(frozen=True)
class DeleteInstruction:
    task_id: str
    column_id: str


Instruction = Union[MoveInstruction, CreateInstruction, DeleteInstruction]
