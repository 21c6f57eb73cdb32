"""
Console interface with Rich components.
"""

from typing import Iterable, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Prompt
from rich.syntax import Syntax
from rich.markup import escape
from rich.theme import Theme
from rich import box

from ..config.settings import Settings
from ..git_ops.actions import ActionReport
from ..git_ops.status import StatusCollection, StatusRecord


NOTIFICATION_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}


class GitWorkflowConsole:
    """Console interface for the git status picker."""

    def __init__(self, settings: Settings, console: Optional[Console] = None):
        """Initialize console with settings."""
        self.settings = settings
        self._setup_styles()
        self.console = console or Console(
            color_system="auto" if settings.ui.use_colors else None,
            theme=self.theme
        )
        if console is not None:
            self.console.push_theme(self.theme)

    def _setup_styles(self) -> None:
        """Setup custom styles for consistent theming."""
        self.styles = {
            "title": "bold blue",
            "success": "bold green",
            "warning": "bold yellow",
            "error": "bold red",
            "info": "blue",
            "muted": "dim",
            "staged": "green",
            "unstaged": "yellow",
            "partial": "cyan",
            "untracked": "red",
            "cursor": "reverse bold",
        }

        self.theme = Theme(self.styles)

    def print(self, *args, **kwargs) -> None:
        self.console.print(*args, **kwargs)

    def _record_style(self, record: StatusRecord) -> str:
        if record.is_untracked:
            return "untracked"
        if record.is_staged and record.is_unstaged:
            return "partial"
        if record.is_staged:
            return "staged"
        if record.is_unstaged:
            return "unstaged"
        return "muted"

    def build_status_table(
        self,
        collection: StatusCollection,
        cursor: int = -1,
        selected: Iterable[str] = (),
    ) -> Table:
        """Build the status table; the cursor row is highlighted."""
        selected = set(selected)
        table = Table(title=self.settings.status.prompt_title, box=box.SIMPLE_HEAD, expand=True)
        table.add_column("#", style="bold cyan", width=4)
        table.add_column("", width=2)
        if self.settings.status.show_icons:
            table.add_column("", width=3)
        table.add_column("Status", width=30)
        table.add_column("File", style="bold", ratio=1)

        for i, record in enumerate(collection):
            style = self._record_style(record)
            row = [
                str(i + 1),
                "✓" if record.path in selected else "",
            ]
            if self.settings.status.show_icons:
                row.append(f"[{style}]{record.icon}[/{style}]")
            row.append(f"[{style}]{record.label}[/{style}]")
            row.append(escape(record.path))
            table.add_row(*row, style="cursor" if i == cursor else None)

        return table

    def print_status(
        self,
        collection: StatusCollection,
        cursor: int = -1,
        selected: Iterable[str] = (),
    ) -> None:
        self.console.print(self.build_status_table(collection, cursor, selected))
        summary = (
            f"[staged]{len(collection.staged)} staged[/staged], "
            f"[unstaged]{len(collection.unstaged)} unstaged[/unstaged], "
            f"[untracked]{len(collection.untracked)} untracked[/untracked]"
        )
        self.console.print(f"[blue]Changes:[/blue] {summary}")
        self.console.print()

    def print_status_lines(self, collection: StatusCollection) -> None:
        """Plain one-line-per-record output."""
        for record in collection:
            self.console.print(escape(record.display), highlight=False)

    def show_action_report(self, report: ActionReport) -> None:
        """Notify about the outcome of a stage/unstage request."""
        if report.attempted == 0:
            self.print_warning("No files selected")
            return

        if not report.bulk:
            for result in report.results:
                if result.success:
                    self.print_success(f"{report.direction.past_tense}: {result.path}")
                elif result.error_kind == "ValidationRejected":
                    self.print_error(f"Invalid file path: {result.path} ({result.message})")
                else:
                    self.print_error(f"Failed to {report.direction.value}: {result.path}")
                    if result.message:
                        self.console.print(f"  [muted]{escape(result.message)}[/muted]")

        if report.ok:
            if report.bulk or report.attempted > 1:
                self.print_success(report.summary)
        elif report.bulk:
            self.print_error(report.summary)
            for result in report.failed:
                if result.message:
                    self.console.print(f"  [muted]{escape(result.message)}[/muted]")
        else:
            self.print_warning(f"{report.direction.value.capitalize()}: {report.summary}")

    def show_diff_preview(self, diff_content: str, title: str = "Changes", max_lines: int = 200) -> None:
        """Show diff content with syntax highlighting."""
        if not diff_content:
            return

        lines = diff_content.split('\n')
        if len(lines) > max_lines:
            lines = lines[:max_lines] + [f"... ({len(lines) - max_lines} more lines)"]

        syntax = Syntax(
            '\n'.join(lines),
            "diff",
            theme="monokai",
            line_numbers=False,
            word_wrap=True
        )

        self.console.print(Panel(syntax, title=escape(title), style="blue"))
        self.console.print()

    def show_help(self, help_text: str) -> None:
        self.console.print(Panel(help_text, title="Commands", style="yellow"))

    def ask(self, prompt: str, default: str = "") -> str:
        return Prompt.ask(prompt, default=default, console=self.console, show_default=False)

    def _should_notify(self, level: str) -> bool:
        notifications = self.settings.notifications
        if not notifications.enabled:
            return False
        if level == "ERROR":
            return True
        return NOTIFICATION_LEVELS[level] >= NOTIFICATION_LEVELS[notifications.level]

    def print_success(self, message: str) -> None:
        """Print success message."""
        if self._should_notify("INFO"):
            self.console.print(f"[success]✓ {escape(message)}[/success]")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        if self._should_notify("WARNING"):
            self.console.print(f"[warning]⚠ {escape(message)}[/warning]")

    def print_error(self, message: str) -> None:
        """Print error message."""
        if self._should_notify("ERROR"):
            self.console.print(f"[error]✗ {escape(message)}[/error]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        if self._should_notify("INFO"):
            self.console.print(f"[info]ℹ {escape(message)}[/info]")
