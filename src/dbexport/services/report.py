"""Console reporting of the export outcome."""

import os
from datetime import datetime
from typing import List

from rich.markup import escape
from rich.table import Table

from dbexport.errors import DbExportError
from dbexport.models import DirectoryEntry, ExportResult


class ResultReporter:
    """Presents the backup directory contents or the failure diagnostic."""

    def __init__(self, logger, console):
        self.logger = logger
        self.console = console

    def list_entries(self, path: str) -> List[DirectoryEntry]:
        entries = []
        with os.scandir(path) as iterator:
            for item in iterator:
                stat = item.stat()
                entries.append(
                    DirectoryEntry(
                        name=item.name,
                        size=stat.st_size,
                        modified=datetime.fromtimestamp(stat.st_mtime),
                        is_dir=item.is_dir(),
                    )
                )
        return sorted(entries, key=lambda entry: entry.name)

    def report(self, result: ExportResult) -> List[DirectoryEntry]:
        path = result.destination.path
        self.console.print("[green]MongoDB export completed successfully![/green]")
        self.console.print(f"[blue]Backup saved to: {escape(path)}[/blue]")

        try:
            entries = self.list_entries(path)
        except OSError as exc:
            self.logger.warning("Could not list backup directory %s: %s", path, exc)
            return []

        table = Table(title="Exported databases")
        table.add_column("Name")
        table.add_column("Size", justify="right")
        table.add_column("Modified")
        for entry in entries:
            name = f"{entry.name}/" if entry.is_dir else entry.name
            table.add_row(
                escape(name),
                str(entry.size),
                entry.modified.strftime("%Y-%m-%d %H:%M:%S"),
            )
        self.console.print(table)

        if not entries:
            self.logger.warning("Backup directory %s is empty.", path)
        self.logger.info("Export process completed! %s item(s) in %s", len(entries), path)
        return entries

    def report_failure(self, error: DbExportError):
        self.console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
        for hint in error.hints:
            self.console.print(hint, style="blue", markup=False, highlight=False)
        self.logger.error(str(error))
