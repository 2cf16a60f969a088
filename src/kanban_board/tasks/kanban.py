"""
Вывод Kanban доски в терминал.

Использование:
    from kanban_board.tasks import BoardStore, print_board

    store = BoardStore.open(repository)
    store.subscribe(print_board)   # перерисовка после каждого изменения
    print_board(store.board)
"""

from __future__ import annotations

from typing import Optional

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .models import Board, Task, TaskPriority
from .store import Outcome

console = Console()

PRIORITY_COLORS = {
    TaskPriority.HIGH: "red",
    TaskPriority.MEDIUM: "yellow",
    TaskPriority.LOW: "green",
}

PRIORITY_ICONS = {
    TaskPriority.HIGH: "↑",
    TaskPriority.MEDIUM: "−",
    TaskPriority.LOW: "↓",
}

COLUMN_BORDERS = ["blue", "yellow", "green", "magenta", "cyan"]


def _task_line(task: Task, index: int) -> str:
    color = PRIORITY_COLORS.get(task.priority, "white")
    icon = PRIORITY_ICONS.get(task.priority, "")
    content = task.content if len(task.content) <= 40 else task.content[:37] + "..."
    return f"[dim]{index}.[/dim] {content}\n   [{color}]{icon}[/{color}] [bold]{task.key}[/bold]"


def print_board(board: Board, target: Optional[Console] = None) -> None:
    """
    Вывести доску: колонки слева направо, задачи в порядке колонки.

    Args:
        board: Board
        target: Console (по умолчанию: общий console модуля)
    """
    out = target if target is not None else console
    panels = []

    for position, column in enumerate(board.iter_columns()):
        tasks = board.column_tasks(column.id)
        lines = [_task_line(task, index) for index, task in enumerate(tasks)]
        content = "\n\n".join(lines) if lines else "[dim]No issues[/dim]"

        panels.append(Panel(
            content,
            title=f"{column.title} {len(tasks)}",
            subtitle=f"[dim]{column.id}[/dim]",
            border_style=COLUMN_BORDERS[position % len(COLUMN_BORDERS)],
            width=36,
        ))

    out.print(Text(board.title, style="bold"))
    out.print(Columns(panels))
    out.print(f"[dim]Total: {board.task_count} issues | Next key: {board.prefix}-{board.next_sequence}[/dim]")


def print_task_detail(board: Board, task_id: str, target: Optional[Console] = None) -> None:
    """Вывести детали задачи."""
    out = target if target is not None else console
    task = board.task(task_id)
    column_id = board.find_column(task_id)
    column_title = board.columns[column_id].title if column_id else "-"
    color = PRIORITY_COLORS.get(task.priority, "white")

    content = (
        f"[bold]Key:[/bold] {task.key}\n"
        f"[bold]ID:[/bold] {task.id}\n"
        f"[bold]Column:[/bold] {column_title}\n"
        f"[bold]Priority:[/bold] [{color}]{task.priority.value}[/{color}]\n"
        f"[bold]Assignee:[/bold] {task.assignee}\n\n"
        f"{task.content}"
    )
    out.print(Panel(content, title=f"Issue {task.key}", border_style="cyan"))


def print_outcome(outcome: Outcome, target: Optional[Console] = None) -> None:
    """Краткое уведомление о результате операции."""
    out = target if target is not None else console
    if not outcome.ok:
        out.print(f"[yellow]{outcome.message}[/yellow]")
    elif outcome.message:
        out.print(f"[green]{outcome.message}[/green]")
    if outcome.warning:
        out.print(f"[yellow]Warning: {outcome.warning}[/yellow]")
