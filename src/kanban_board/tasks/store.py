"""
BoardStore: единственный владелец текущего значения доски.

Использование:
    from kanban_board.tasks import BoardStore, CreateInstruction

    store = BoardStore.open(repository)

    outcome = store.dispatch(CreateInstruction("todo", "Write docs"))
    print(outcome.message)   # Created item WEB-3

    store.move("todo", 0, "done", 0)

Каждая операция вычисляет новую доску чистой функцией из engine.py,
заменяет текущее значение целиком и делает снимок в репозиторий. Ошибка
сохранения не откатывает доску: она возвращается как предупреждение.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional

from .engine import create_task, delete_task, move_task, update_task
from .errors import ValidationError
from .instructions import CreateInstruction, DeleteInstruction, Instruction, MoveInstruction
from .models import Board, Task, TaskPriority, default_board, validate_board

if TYPE_CHECKING:
    from ..storage.repository import BoardRepository

logger = logging.getLogger(__name__)

SAVE_FAILED_WARNING = "Board changes could not be saved and will be lost when this session ends."

BoardListener = Callable[[Board], None]


@dataclass(frozen=True)
class Outcome:
    """Result of one store operation, ready for the presentation layer."""
    board: Board
    ok: bool = True
    changed: bool = True
    message: str = ""
    task: Optional[Task] = None
    warning: Optional[str] = None


class BoardStore:
    """
    Хранилище текущей доски.

    Поддерживает:
    - Перемещение задач (drag & drop)
    - Создание и удаление задач
    - Подписку на изменения (перерисовка)
    - Снимки состояния в репозиторий
    """

    def __init__(self, board: Optional[Board] = None, repository: Optional[BoardRepository] = None):
        self._board = validate_board(board if board is not None else default_board())
        self.repository = repository
        self._listeners: List[BoardListener] = []

    @classmethod
    def open(cls, repository: BoardRepository, default: Optional[Board] = None) -> BoardStore:
        """Загрузить доску из репозитория или взять доску по умолчанию."""
        board = repository.load()
        if board is None:
            board = default if default is not None else default_board()
            logger.info(f"[STORE] open | source=default tasks={board.task_count}")
        else:
            logger.info(f"[STORE] open | source=repository tasks={board.task_count}")
        return cls(board=board, repository=repository)

    @property
    def board(self) -> Board:
        return self._board

    def subscribe(self, listener: BoardListener) -> Callable[[], None]:
        """Register a re-render callback; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def move(self, source_column_id: str, source_index: int, dest_column_id: str, dest_index: int) -> Outcome:
        """Переместить задачу (в колонке или между колонками)."""
        new_board = move_task(self._board, source_column_id, source_index, dest_column_id, dest_index)
        if new_board == self._board:
            return Outcome(board=self._board, changed=False)

        task_id = self._board.columns[source_column_id].task_ids[source_index]
        logger.info(
            f"[STORE] move | task={task_id} from={source_column_id}:{source_index} "
            f"to={dest_column_id}:{dest_index}"
        )
        return self._commit(new_board)

    def create(self, column_id: str, content: str, priority: TaskPriority = TaskPriority.MEDIUM) -> Outcome:
        """
        Создать задачу в конце колонки.

        Пустой текст не ошибка программы: доска не меняется, outcome.ok=False.
        """
        try:
            new_board, task = create_task(self._board, column_id, content, priority)
        except ValidationError as e:
            logger.info(f"[STORE] create rejected | column={column_id} reason={e}")
            return Outcome(board=self._board, ok=False, changed=False, message=str(e))

        logger.info(f"[STORE] create | task={task.id} key={task.key} column={column_id}")
        return self._commit(new_board, message=f"Created item {task.key}", task=task)

    def delete(self, task_id: str, column_id: str) -> Outcome:
        """Удалить задачу."""
        new_board = delete_task(self._board, task_id, column_id)
        task = self._board.tasks[task_id]

        logger.info(f"[STORE] delete | task={task_id} key={task.key} column={column_id}")
        return self._commit(new_board, message=f"Deleted {task.key}", task=task)

    def update(
        self,
        task_id: str,
        *,
        content: Optional[str] = None,
        priority: Optional[TaskPriority] = None,
    ) -> Outcome:
        """Изменить текст или приоритет задачи."""
        try:
            new_board = update_task(self._board, task_id, content=content, priority=priority)
        except ValidationError as e:
            logger.info(f"[STORE] update rejected | task={task_id} reason={e}")
            return Outcome(board=self._board, ok=False, changed=False, message=str(e))

        task = new_board.tasks[task_id]
        if new_board == self._board:
            return Outcome(board=self._board, changed=False, task=task)
        logger.info(f"[STORE] update | task={task_id} key={task.key}")
        return self._commit(new_board, message=f"Updated {task.key}", task=task)

    def dispatch(self, instruction: Instruction) -> Outcome:
        """Apply one instruction produced by a user gesture."""
        if isinstance(instruction, MoveInstruction):
            return self.move(
                instruction.source_column_id,
                instruction.source_index,
                instruction.dest_column_id,
                instruction.dest_index,
            )
        if isinstance(instruction, CreateInstruction):
            return self.create(instruction.column_id, instruction.content)
        if isinstance(instruction, DeleteInstruction):
            return self.delete(instruction.task_id, instruction.column_id)
        raise TypeError(f"Unsupported instruction: {instruction!r}")

    def reset(self, board: Optional[Board] = None) -> Outcome:
        """Заменить доску целиком (по умолчанию: доской по умолчанию)."""
        new_board = validate_board(board if board is not None else default_board(self._board.prefix))
        logger.info(f"[STORE] reset | tasks={new_board.task_count}")
        return self._commit(new_board, message="Board reset")

    def _commit(self, board: Board, message: str = "", task: Optional[Task] = None) -> Outcome:
        self._board = board
        warning = self._snapshot(board)
        for listener in list(self._listeners):
            listener(board)
        return Outcome(board=board, message=message, task=task, warning=warning)

    def _snapshot(self, board: Board) -> Optional[str]:
        if self.repository is None:
            return None
        if self.repository.save(board):
            return None
        logger.warning(f"[STORE] snapshot failed | tasks={board.task_count}")
        return SAVE_FAILED_WARNING
