"""
Interactive status picker driven by one-letter commands.
"""

from dataclasses import dataclass
from typing import Optional
import click
import typer
from rich.markup import escape
from loguru import logger

from ..core import ActionInProgressError, StatusSession
from ..git_ops.errors import GitRepositoryError
from .console import GitWorkflowConsole


HELP_TEXT = (
    "[cyan]<n>[/cyan]    Move cursor to row n\n"
    "[cyan]t <n>[/cyan]  Toggle selection of row n (current row if omitted)\n"
    "[green]s[/green]      Stage selected file(s)\n"
    "[green]u[/green]      Unstage selected file(s)\n"
    "[green]a[/green]      Stage all files\n"
    "[green]x[/green]      Unstage all files\n"
    "[blue]d[/blue]      Show diff of current file\n"
    "[blue]e[/blue]      Open current file in $EDITOR\n"
    "[blue]c[/blue]      Commit staged changes\n"
    "[blue]r[/blue]      Refresh\n"
    "[red]q[/red]      Quit"
)

ACTIONS = {
    "s": "stage",
    "u": "unstage",
    "a": "stage_all",
    "x": "unstage_all",
    "d": "diff",
    "e": "edit",
    "c": "commit",
    "r": "refresh",
    "q": "quit",
    "?": "help",
    "h": "help",
}


@dataclass(frozen=True)
class PickerCommand:
    action: str
    index: Optional[int] = None  # zero-based row


def parse_picker_command(text: Optional[str]) -> Optional[PickerCommand]:
    """Turn one line of user input into a PickerCommand, or None if it is not one."""
    if text is None:
        return None
    parts = text.strip().split()
    if not parts:
        return None

    head = parts[0].lower()
    if head.isdigit():
        if len(parts) != 1 or int(head) < 1:
            return None
        return PickerCommand("move", int(head) - 1)

    if head in ("t", "tab"):
        if len(parts) == 1:
            return PickerCommand("toggle")
        if len(parts) == 2 and parts[1].isdigit() and int(parts[1]) >= 1:
            return PickerCommand("toggle", int(parts[1]) - 1)
        return None

    if len(parts) == 1 and head in ACTIONS:
        return PickerCommand(ACTIONS[head])
    return None


class StatusPicker:
    """Shows the status table and dispatches user commands to the session."""

    def __init__(self, session: StatusSession, console: GitWorkflowConsole):
        self.session = session
        self.console = console
        self.settings = session.settings

    def open(self) -> bool:
        """Load the listing; returns False when there is nothing to pick from."""
        collection = self.session.open()
        if collection.is_clean:
            self.console.print_warning("No changes found. Working tree is clean.")
            return False
        if collection.all_skipped:
            self.console.print_warning("No valid changes found. All files may be ignored or invalid.")
            return False
        return True

    def render(self) -> None:
        self.console.print_status(
            self.session.collection,
            cursor=self.session.cursor,
            selected=self.session.multi_selection,
        )
        info = self.session.selection_info()
        if info:
            self.console.print(f"[muted]{escape(info)}[/muted]", highlight=False)

    def run(self) -> None:
        if not self.open():
            return

        self.render()
        while True:
            try:
                text = self.console.ask("[bold]git status[/bold] ([cyan]?[/cyan] for help)")
            except (KeyboardInterrupt, EOFError):
                break

            command = parse_picker_command(text)
            if command is None:
                self.console.print_warning(f"Unknown command: {text}")
                continue
            if command.action == "quit":
                break

            try:
                keep_going = self.dispatch(command)
            except ActionInProgressError as e:
                self.console.print_warning(str(e))
                continue
            except GitRepositoryError as e:
                self.console.print_error(str(e))
                continue
            except click.ClickException as e:
                self.console.print_error(e.format_message())
                continue

            if not keep_going:
                break
            self.render()

    def dispatch(self, command: PickerCommand) -> bool:
        """Run one command. Returns False when the picker should close."""
        session = self.session
        action = command.action

        if action == "help":
            self.console.show_help(HELP_TEXT)
        elif action == "move":
            session.move_cursor(command.index)
        elif action == "toggle":
            index = session.cursor if command.index is None else command.index
            if 0 <= index < len(session.collection):
                session.toggle_selection(session.collection[index].path)
                session.move_cursor(index)
            else:
                self.console.print_warning(f"No row {index + 1}")
        elif action in ("stage", "unstage", "stage_all", "unstage_all"):
            report = getattr(session, {
                "stage": "stage_selected",
                "unstage": "unstage_selected",
                "stage_all": "stage_all",
                "unstage_all": "unstage_all",
            }[action])()
            self.console.show_action_report(report)
            if session.collection.is_clean:
                self.console.print_info("Working tree is clean.")
                return False
        elif action == "diff":
            record = session.current
            if record is None:
                self.console.print_warning("No file selected")
            else:
                max_lines = self.settings.status.max_preview_lines
                diff_text = session.repository.diff(record.path, max_lines=max_lines)
                self.console.show_diff_preview(diff_text, title=record.path, max_lines=max_lines)
        elif action == "edit":
            record = session.current
            if record is None:
                self.console.print_warning("No file selected")
            else:
                typer.edit(filename=str(session.repository.working_dir / record.path))
        elif action == "commit":
            return self._commit()
        elif action == "refresh":
            session.refresh()
        else:
            logger.debug(f"Unhandled picker action: {action}")
        return True

    def _commit(self) -> bool:
        if not self.session.collection.staged:
            self.console.print_warning("Nothing staged to commit")
            return True
        message = self.console.ask("Commit message")
        if not message.strip():
            self.console.print_info("Commit cancelled")
            return True
        hexsha = self.session.commit(message)
        self.console.print_success(f"Created commit {hexsha[:8]}")
        return not self.session.collection.is_clean
