import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from cmsclient.domain.interfaces.user_interface import UserInterface

logger = logging.getLogger(__name__)


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        """Initializes the rich Console (injectable so tests can record output)."""
        self._console = console or Console()

    @property
    def console(self) -> Console:
        """Get the Rich console instance for direct operations."""
        return self._console

    def display_table(self, title: str, columns: Sequence[str], rows: List[Sequence[Any]], **kwargs: Any) -> None:
        """Displays a collection as a rich table.

        Args:
            title: Caption of the table.
            columns: Column headers; the first one is highlighted.
            rows: One sequence of cell values per row. None renders as "-".
            **kwargs: Additional arguments including:
                - footer: Text printed under the table (e.g. pagination).
        """
        logger.debug(f"display_table called: title={title}, rows={len(rows)}")
        if not rows:
            self.display_info(f"{title}: no results")
            return

        table = Table(title=title, box=ROUNDED, border_style="cyan", header_style="bold cyan")
        for index, column in enumerate(columns):
            table.add_column(column, style="bold" if index == 0 else None)
        for row in rows:
            table.add_row(*("-" if cell is None else str(cell) for cell in row))

        self.console.print(table)
        footer = kwargs.get("footer")
        if footer:
            self.console.print(f"[dim]{footer}[/dim]")

    def display_resource(self, title: str, data: Dict[str, Any], **kwargs: Any) -> None:
        """Displays a single resource as highlighted JSON inside a panel."""
        rendered = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        panel = Panel(
            Syntax(rendered, "json", word_wrap=True),
            title=f"[bold cyan]{title}[/bold cyan]",
            title_align="left",
            border_style="cyan",
            box=ROUNDED,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style.

        Args:
            error_message: The error message to display.
        """
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        panel = Panel(
            Text(info_message, style="white"),
            title="[bold blue]Info[/bold blue]",
            border_style="blue",
            box=SIMPLE,
            padding=(0, 1)
        )
        self.console.print(panel)
