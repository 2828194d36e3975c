# src/cleannest/cli/commands.py

from __future__ import annotations

import contextlib
import logging
from collections.abc import Awaitable, Callable

from ..core.errors import RecordNotFoundError, ValidationError
from ..core.models import CleaningTask, GroceryItem, ItemPatch, TaskPatch
from ..core.state import AppState
from ..lists.stats import ALL, filter_tasks, item_progress, task_progress

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]

logger = logging.getLogger(__name__)

SIGN_IN_FIRST = "Please sign in first (/signin EMAIL PASSWORD)."


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /tasks, ...)."""

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
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Domain errors (validation, unknown id in strict mode) become replies;
        anything else propagates to the connector.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return await handler(state, args, emit)
        except ValidationError as e:
            return f"Invalid input: {e}"
        except RecordNotFoundError as e:
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _say(emit: CommandEmitter | None, text: str) -> None:
    if emit:
        with contextlib.suppress(Exception):
            emit(text)


def _signed_in(state: AppState) -> bool:
    return state.auth.user is not None


def format_task(task: CleaningTask) -> str:
    mark = "x" if task.completed else " "
    due = f" (due {task.due_date.strftime('%b %d')})" if task.due_date else ""
    line = f"[{mark}] {task.id}  {task.title}  <{task.category.value}>{due}"
    if task.description:
        line += f"\n        {task.description}"
    return line


def format_item(item: GroceryItem) -> str:
    mark = "x" if item.purchased else " "
    brand = f" ({item.brand})" if item.brand else ""
    return f"[{mark}] {item.id}  {item.quantity} x {item.name}{brand}"


# ---- session ----


async def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


async def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    user = state.auth.user
    who = user.email if user else "(signed out)"
    return (
        "Status:\n"
        f"  User: {who}\n"
        f"  Tasks: {len(state.tasks)}{' (loading)' if state.tasks.loading else ''}\n"
        f"  Shopping list: {len(state.items)}{' (loading)' if state.items.loading else ''}\n"
        f"  Strict ids: {'ON' if state.settings.strict_ids else 'OFF'}"
    )


async def cmd_signup(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) < 2:
        return "Usage: /signup EMAIL PASSWORD"
    _say(emit, "Creating account...")
    user = await state.auth.sign_up(args[0], args[1])
    await state.tasks.wait_idle()
    await state.items.wait_idle()
    return f"Welcome, {user.email}!"


async def cmd_signin(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) < 2:
        return "Usage: /signin EMAIL PASSWORD"
    _say(emit, "Signing in...")
    user = await state.auth.sign_in(args[0], args[1])
    await state.tasks.wait_idle()
    await state.items.wait_idle()
    return f"Welcome, {user.email}! {len(state.tasks)} tasks, {len(state.items)} items."


async def cmd_signout(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not _signed_in(state):
        return "You are not signed in."
    await state.auth.sign_out()
    return "Signed out."


# ---- tasks ----


async def cmd_tasks(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /tasks            -> all tasks
    /tasks weekly     -> only one category
    """
    if not _signed_in(state):
        return SIGN_IN_FIRST
    category = args[0] if args else ALL
    tasks = filter_tasks(state.tasks.tasks, category)
    if not tasks:
        return "No tasks yet. Add one with /addtask CATEGORY TITLE."
    header = f"Cleaning tasks ({category.lower()}), {task_progress(state.tasks.tasks)} done:"
    return "\n".join([header, *(format_task(t) for t in tasks)])


_NONE_WORDS = {"none", "-"}


def _parse_task_args(args: list[str]) -> tuple[str, str | None, str | None]:
    """TITLE... [due:YYYY-MM-DD] [-- DESCRIPTION...] -> (title, due_date, description)."""
    due: str | None = None
    title_parts: list[str] = []
    description: str | None = None
    for idx, word in enumerate(args):
        if word == "--":
            description = " ".join(args[idx + 1 :])
            break
        if word.lower().startswith("due:"):
            due = word[4:]
        else:
            title_parts.append(word)
    return " ".join(title_parts), due, description


async def cmd_addtask(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /addtask weekly Dust shelves
    /addtask monthly Wash curtains due:2024-07-01 -- use the gentle cycle
    """
    if not _signed_in(state):
        return SIGN_IN_FIRST
    title, due, description = _parse_task_args(args[1:])
    if not args or not title:
        return "Usage: /addtask daily|weekly|monthly TITLE... [due:YYYY-MM-DD] [-- DESCRIPTION...]"
    task = await state.tasks.add(title=title, category=args[0], description=description, due_date=due)
    if task is None:
        return SIGN_IN_FIRST
    return f"Added task {task.id}: {format_task(task)}"


async def _set_completed(state: AppState, args: list[str], value: bool) -> str:
    if not _signed_in(state):
        return SIGN_IN_FIRST
    if not args:
        return f"Usage: /{'done' if value else 'undone'} ID"
    if await state.tasks.toggle_complete(args[0], value):
        return f"Task {args[0]} marked {'done' if value else 'not done'}."
    return f"No task with id {args[0]}."


async def cmd_done(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return await _set_completed(state, args, True)


async def cmd_undone(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return await _set_completed(state, args, False)


async def cmd_retitle(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not _signed_in(state):
        return SIGN_IN_FIRST
    if len(args) < 2:
        return "Usage: /retitle ID TITLE..."
    if await state.tasks.update(args[0], TaskPatch(title=" ".join(args[1:]))):
        return f"Task {args[0]} renamed."
    return f"No task with id {args[0]}."


async def cmd_describe(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/describe ID TEXT... sets the description; /describe ID clears it."""
    if not _signed_in(state):
        return SIGN_IN_FIRST
    if not args:
        return "Usage: /describe ID [TEXT...]"
    text = " ".join(args[1:]) or None
    if await state.tasks.update(args[0], TaskPatch(description=text)):
        return f"Task {args[0]} description {'updated' if text else 'cleared'}."
    return f"No task with id {args[0]}."


async def cmd_due(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not _signed_in(state):
        return SIGN_IN_FIRST
    if len(args) != 2:
        return "Usage: /due ID YYYY-MM-DD|none"
    due = None if args[1].lower() in _NONE_WORDS else args[1]
    if await state.tasks.update(args[0], TaskPatch(due_date=due)):
        task = state.tasks.get(args[0])
        if task is None or task.due_date is None:
            return f"Task {args[0]} due date cleared."
        return f"Task {args[0]} due {task.due_date.isoformat()}."
    return f"No task with id {args[0]}."


async def cmd_rmtask(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not _signed_in(state):
        return SIGN_IN_FIRST
    if not args:
        return "Usage: /rmtask ID"
    if await state.tasks.delete(args[0]):
        return f"Task {args[0]} deleted."
    return f"No task with id {args[0]}."


# ---- shopping list ----


async def cmd_items(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not _signed_in(state):
        return SIGN_IN_FIRST
    items = state.items.items
    if not items:
        return "Shopping list is empty. Add something with /additem NAME."
    header = f"Shopping list, {item_progress(items)} purchased:"
    return "\n".join([header, *(format_item(i) for i in items)])


def _parse_item_args(args: list[str]) -> tuple[str, str | None, int | None]:
    """[QTY] NAME... [@BRAND...] -> (name, brand, quantity)."""
    quantity: int | None = None
    if args and args[0].isdecimal():
        quantity = int(args[0])
        args = args[1:]

    brand: str | None = None
    name_parts: list[str] = []
    brand_parts: list[str] = []
    for word in args:
        if word.startswith("@") or brand_parts:
            brand_parts.append(word.lstrip("@") if not brand_parts else word)
        else:
            name_parts.append(word)
    if brand_parts:
        brand = " ".join(brand_parts)
    return " ".join(name_parts), brand, quantity


async def cmd_additem(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /additem Sponge            -> 1 x Sponge
    /additem 3 Sponge @Scotch  -> 3 x Sponge (Scotch)
    """
    if not _signed_in(state):
        return SIGN_IN_FIRST
    name, brand, quantity = _parse_item_args(args)
    if not name:
        return "Usage: /additem [QTY] NAME... [@BRAND]"
    item = await state.items.add(name=name, brand=brand, quantity=quantity)
    if item is None:
        return SIGN_IN_FIRST
    return f"Added item {item.id}: {format_item(item)}"


async def _set_purchased(state: AppState, args: list[str], value: bool) -> str:
    if not _signed_in(state):
        return SIGN_IN_FIRST
    if not args:
        return f"Usage: /{'bought' if value else 'unbought'} ID"
    if await state.items.toggle_purchased(args[0], value):
        return f"Item {args[0]} marked {'purchased' if value else 'not purchased'}."
    return f"No item with id {args[0]}."


async def cmd_bought(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return await _set_purchased(state, args, True)


async def cmd_unbought(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return await _set_purchased(state, args, False)


async def cmd_qty(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not _signed_in(state):
        return SIGN_IN_FIRST
    if len(args) < 2 or not args[1].lstrip("-").isdecimal():
        return "Usage: /qty ID N"
    if await state.items.update(args[0], ItemPatch(quantity=int(args[1]))):
        return f"Item {args[0]} quantity set to {int(args[1])}."
    return f"No item with id {args[0]}."


async def cmd_rename(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not _signed_in(state):
        return SIGN_IN_FIRST
    if len(args) < 2:
        return "Usage: /rename ID NAME..."
    if await state.items.update(args[0], ItemPatch(name=" ".join(args[1:]))):
        return f"Item {args[0]} renamed."
    return f"No item with id {args[0]}."


async def cmd_brand(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/brand ID BRAND... sets the brand; /brand ID none (or no brand) clears it."""
    if not _signed_in(state):
        return SIGN_IN_FIRST
    if not args:
        return "Usage: /brand ID [BRAND...|none]"
    brand = " ".join(args[1:])
    if brand.lower() in _NONE_WORDS:
        brand = ""
    if await state.items.update(args[0], ItemPatch(brand=brand or None)):
        return f"Item {args[0]} brand {'set to ' + brand if brand else 'cleared'}."
    return f"No item with id {args[0]}."


async def cmd_rmitem(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not _signed_in(state):
        return SIGN_IN_FIRST
    if not args:
        return "Usage: /rmitem ID"
    if await state.items.delete(args[0]):
        return f"Item {args[0]} deleted."
    return f"No item with id {args[0]}."


# ---- dashboard ----


async def cmd_refresh(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not _signed_in(state):
        return SIGN_IN_FIRST
    _say(emit, "Reloading lists (local changes are discarded)...")
    await state.tasks.refetch()
    await state.items.refetch()
    return f"Reloaded: {len(state.tasks)} tasks, {len(state.items)} items."


async def cmd_stats(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not _signed_in(state):
        return SIGN_IN_FIRST
    return (
        "Dashboard:\n"
        f"  Cleaning tasks: {task_progress(state.tasks.tasks)} completed\n"
        f"  Shopping list: {item_progress(state.items.items)} purchased"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show who is signed in and list sizes.")
registry.register("signup", cmd_signup, help_text="Create an account: /signup EMAIL PASSWORD.")
registry.register("signin", cmd_signin, help_text="Sign in: /signin EMAIL PASSWORD.", aliases=["login"])
registry.register("signout", cmd_signout, help_text="Sign out.", aliases=["logout"])
registry.register(
    "tasks", cmd_tasks, help_text="List tasks: /tasks [all|daily|weekly|monthly].", aliases=["t"]
)
registry.register(
    "addtask",
    cmd_addtask,
    help_text="Add a task: /addtask CATEGORY TITLE... [due:YYYY-MM-DD] [-- DESCRIPTION...]",
)
registry.register("done", cmd_done, help_text="Mark a task completed: /done ID.")
registry.register("undone", cmd_undone, help_text="Mark a task not completed: /undone ID.")
registry.register("retitle", cmd_retitle, help_text="Rename a task: /retitle ID TITLE...")
registry.register("describe", cmd_describe, help_text="Set or clear a task description: /describe ID [TEXT...]")
registry.register("due", cmd_due, help_text="Set or clear a task due date: /due ID YYYY-MM-DD|none.")
registry.register("rmtask", cmd_rmtask, help_text="Delete a task: /rmtask ID.")
registry.register("items", cmd_items, help_text="Show the shopping list.", aliases=["i"])
registry.register("additem", cmd_additem, help_text="Add an item: /additem [QTY] NAME... [@BRAND].")
registry.register("bought", cmd_bought, help_text="Mark an item purchased: /bought ID.")
registry.register("unbought", cmd_unbought, help_text="Mark an item not purchased: /unbought ID.")
registry.register("qty", cmd_qty, help_text="Change an item quantity: /qty ID N.")
registry.register("rename", cmd_rename, help_text="Rename an item: /rename ID NAME...")
registry.register("brand", cmd_brand, help_text="Set or clear an item brand: /brand ID [BRAND...|none].")
registry.register("rmitem", cmd_rmitem, help_text="Delete an item: /rmitem ID.")
registry.register("refresh", cmd_refresh, help_text="Reload both lists from seed data.")
registry.register("stats", cmd_stats, help_text="Show completion / purchase progress.")
