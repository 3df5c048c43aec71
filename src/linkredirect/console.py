"""Rich-based picker and notifier for terminal use."""

from __future__ import annotations

from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from linkredirect.models import Document


class ConsoleNotifier:
    def __init__(self, console: Console) -> None:
        self.console = console

    def info(self, message: str) -> None:
        self.console.print(f"[yellow]{escape(message)}[/yellow]")

    def success(self, message: str) -> None:
        self.console.print(f"[green]{escape(message)}[/green]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/red]")


class ConsolePicker:
    """Lets the user choose a note by filtering and then entering its number.

    An empty answer at the filter prompt lists everything; an empty answer at
    the number prompt cancels.
    """

    def __init__(self, console: Console, *, limit: int = 30) -> None:
        self.console = console
        self.limit = limit

    def filter(self, documents: Sequence[Document], query: str) -> List[Document]:
        needle = query.strip().lower()
        if not needle:
            return list(documents)
        return [doc for doc in documents if needle in doc.path.lower()]

    def choose(self, documents: Sequence[Document]) -> Optional[Document]:
        query = Prompt.ask("Filter notes", default="", console=self.console)
        matches = self.filter(documents, query)[: self.limit]
        if not matches:
            self.console.print("[yellow]No matching notes.[/yellow]")
            return None

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("#")
        table.add_column("Note")
        table.add_column("Path")
        for number, document in enumerate(matches, start=1):
            table.add_row(str(number), escape(document.basename), escape(document.path))
        self.console.print(table)

        answer = Prompt.ask("Note number", default="", console=self.console)
        if not answer.strip():
            return None
        try:
            position = int(answer)
        except ValueError:
            self.console.print(f"[red]Not a number: {escape(answer)}[/red]")
            return None
        if not 1 <= position <= len(matches):
            self.console.print(f"[red]Out of range: {position}[/red]")
            return None
        return matches[position - 1]
