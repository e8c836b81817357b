# src/tidy_tasks/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.state import TaskListApp, TaskListView

CommandEmitter = Callable[[str], None]
CommandResult = str | Awaitable[str]
CommandHandler2 = Callable[[TaskListApp, "CommandArgs"], CommandResult]
CommandHandler3 = Callable[[TaskListApp, "CommandArgs", CommandEmitter | None], CommandResult]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandArgs(list[str]):
    """
    Whitespace-split arguments plus `raw`: the text after the command name,
    minus the single separator. Task text is taken from `raw` so it is stored as typed.
    """

    def __init__(self, raw: str) -> None:
        super().__init__(raw.split())
        self.raw = raw


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        app: TaskListApp,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Handlers may be plain functions or coroutines.
        """
        if not line.startswith("/"):
            return None

        body = line[1:].lstrip()
        if not body:
            return "Empty command. Use /help to list available commands."

        word = body.split(maxsplit=1)[0]
        name = word.lower()
        rest = body[len(word) :]
        args = CommandArgs(rest[1:] if rest[:1].isspace() else rest)

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            result = cast(CommandHandler3, handler)(app, args, emit)
        else:
            result = cast(CommandHandler2, handler)(app, args)

        if inspect.isawaitable(result):
            return await result
        return result

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Plain text adds a task. /exit quits.")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task_ref(app: TaskListApp, ref: str) -> str | None:
    """Accept a 1-based list position or a task id."""
    ref = ref.strip()
    if not ref:
        return None
    if ref.isdigit():
        snap = app.store.snapshot()
        pos = int(ref)
        if 1 <= pos <= len(snap):
            return snap[pos - 1].id
    return ref if ref in app.store else None


def format_view(view: TaskListView) -> str:
    if not view.tasks:
        lines = ["(no tasks)"]
    else:
        lines = []
        for i, task in enumerate(view.tasks, start=1):
            mark = "[x]" if task.completed else "[ ]"
            suffix = "  (deleting...)" if task.id in view.deleting else ""
            lines.append(f"{i:>3}. {mark} {task.text}{suffix}")

    if view.edit.active:
        pos = view.edit.target_id and view.position_of(view.edit.target_id)
        lines.append(f"Editing #{pos or '?'}: {view.edit.draft_text!r}  (/draft <text>, /save, /cancel)")
    return "\n".join(lines)


def cmd_help(app: TaskListApp, args: CommandArgs) -> str:
    return registry.build_help()


def cmd_list(app: TaskListApp, args: CommandArgs) -> str:
    return format_view(app.view())


def cmd_add(app: TaskListApp, args: CommandArgs) -> str:
    task = app.add_new_task(args.raw)
    if task is None:
        return "Nothing to add (task text is empty)."
    return f"Added #{app.store.count()}: {task.text}"


def cmd_done(app: TaskListApp, args: CommandArgs) -> str:
    if not args:
        return "Usage: /done <n>"
    task_id = resolve_task_ref(app, args[0])
    task = app.toggle_completion_status(task_id) if task_id else None
    if task is None:
        return f"No task {args[0]}."
    return f"{'Completed' if task.completed else 'Incomplete'}: {task.text}"


def cmd_edit(app: TaskListApp, args: CommandArgs) -> str:
    if not args:
        return "Usage: /edit <n>"
    task_id = resolve_task_ref(app, args[0])
    if not task_id or not app.start_edit_task(task_id):
        return f"No task {args[0]}."
    return f"Editing: {app.edit_session.draft_text!r}. Use /draft <text> then /save."


def cmd_draft(app: TaskListApp, args: CommandArgs) -> str:
    if not app.update_draft_text(args.raw):
        return "Not editing. Use /edit <n> first."
    return f"Draft: {app.edit_session.draft_text!r}"


def cmd_save(app: TaskListApp, args: CommandArgs) -> str:
    if not app.edit_session.is_editing:
        return "Not editing."
    task = app.save_edited_task()
    if task is None:
        return "Task no longer exists; draft dropped."
    return f"Saved: {task.text}"


def cmd_cancel(app: TaskListApp, args: CommandArgs) -> str:
    return "Edit cancelled." if app.cancel_edit() else "Not editing."


async def cmd_rm(app: TaskListApp, args: CommandArgs, emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /rm <n>"
    task_id = resolve_task_ref(app, args[0])
    task = app.store.get(task_id) if task_id else None
    if task is None:
        return f"No task {args[0]}."

    if emit:
        emit(f"Deleting: {task.text}")
    removed = await app.remove_task(task.id)
    return f"Deleted: {task.text}" if removed else f"Already gone: {task.text}"


def cmd_status(app: TaskListApp, args: CommandArgs) -> str:
    snap = app.store.snapshot()
    done = sum(1 for t in snap if t.completed)
    return (
        "Status:\n"
        f"  Tasks: {len(snap)} ({done} completed)\n"
        f"  Storage key: {app.gateway.key}\n"
        f"  Pending writes: {app.gateway.pending_writes}\n"
        f"  Editing: {'yes' if app.edit_session.is_editing else 'no'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["toggle"])
registry.register("edit", cmd_edit, help_text="Start editing a task: /edit <n>.")
registry.register("draft", cmd_draft, help_text="Replace the draft text: /draft <text>.")
registry.register("save", cmd_save, help_text="Save the edited task.")
registry.register("cancel", cmd_cancel, help_text="Drop the current draft.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n>.", aliases=["del", "delete"])
registry.register("status", cmd_status, help_text="Show counts and storage info.")
